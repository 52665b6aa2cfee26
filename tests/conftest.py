import pytest

from zkrounds.util.utility_parameters import default_parameters


def pytest_addoption(parser):
    parser.addoption(
        "--round-budget",
        action="store",
        type=int,
        default=None,
        help="Build the round programs with the specified round budget instead of the default one",
    )


@pytest.fixture
def round_parameters(request):
    budget = request.config.getoption("--round-budget")
    if budget is None:
        return default_parameters
    return default_parameters.with_overrides(round_budget=budget)
