from dataclasses import dataclass

import pytest

from zkrounds.bilinear_pairings.bn254.fields import Fq6 as Fq6Bn254
from zkrounds.bilinear_pairings.bn254.fields import Fq12 as Fq12Bn254
from zkrounds.bilinear_pairings.bn254.final_exponentiation import easy_exponentiation
from zkrounds.bilinear_pairings.bn254.parameters import X, q
from zkrounds.fields.fq2 import (
    Fq2,
    ZeroInversionError,
    conjugate,
    fq2,
    fq2_from_list,
    fq2_to_list,
    frobenius_coefficients,
    frobenius_map,
    inverse,
)

# Exponents of elements of F_q^2 are reduced modulo the order of its multiplicative group
FQ2_ORDER = q**2 - 1


@dataclass
class Fq2Bn254:
    # Elements of the fixture shared with the tower tests
    x = fq2(
        20925091368075991963132407952916453596237117852799702412141988931506241672722,
        18684276579894497974780190092329868933855710870485375969907530111657029892231,
    )
    y = fq2(
        5932690455294482368858352783906317764044134926538780366070347507990829997699,
        18684276579894497974780190092329868933855710870485375969907530111657029892231,
    )
    z = fq2(
        18684276579894497974780190092329868933855710870485375969907530111657029892231,
        19526707366532583397322534596786476145393586591811230548888354920504818678603,
    )

    test_data = {
        "test_conjugate": [
            {"x": fq2(5, 10), "expected": [5, q - 10]},
            {"x": fq2(0, 0), "expected": [0, 0]},
        ],
        "test_frobenius_map": [
            {"x": x, "power": 1},
            {"x": y, "power": 2},
            {"x": z, "power": 3},
        ],
        "test_inverse": [
            {"x": x},
            {"x": fq2(1, 0)},
            {"x": fq2(0, 1)},
        ],
    }


@dataclass
class Fq6ThreeOverTwo:
    f6 = Fq6Bn254(Fq2Bn254.x, Fq2Bn254.y, Fq2Bn254.z)
    g6 = Fq6Bn254(Fq2Bn254.z, fq2(0, 0), Fq2Bn254.x)

    test_data = {
        "test_mul_by_01": [
            {"x": f6, "b0": Fq2Bn254.x, "b1": Fq2Bn254.z},
            {"x": g6, "b0": fq2(1, 0), "b1": fq2(0, 0)},
        ],
        "test_square": [{"x": f6}, {"x": g6}],
        "test_inverse": [{"x": f6}, {"x": g6}],
        "test_from_list": [
            {"coordinates": list(range(6)), "is_valid": True},
            {"coordinates": list(range(5)), "is_valid": False},
            {"coordinates": list(range(12)), "is_valid": False},
        ],
    }


@dataclass
class Fq12TwoOverThreeOverTwo:
    f12 = Fq12Bn254(Fq6ThreeOverTwo.f6, Fq6ThreeOverTwo.f6)
    g12 = Fq12Bn254(Fq6ThreeOverTwo.g6, Fq6ThreeOverTwo.f6)
    # Element of the cyclotomic subgroup
    cyclotomic = easy_exponentiation(f12)

    test_data = {
        "test_mul_by_034": [
            {"x": f12, "c0": Fq2Bn254.x, "d0": Fq2Bn254.y, "d1": Fq2Bn254.z},
            {"x": g12, "c0": fq2(1, 0), "d0": fq2(0, 0), "d1": Fq2Bn254.x},
        ],
        "test_square": [{"x": f12}, {"x": g12}],
        "test_inverse": [{"x": f12}, {"x": g12}],
        "test_frobenius_map": [
            {"x": f12, "power": 1},
            {"x": g12, "power": 1},
        ],
        "test_cyclotomic_square": [{"x": cyclotomic}, {"x": cyclotomic * cyclotomic}],
        "test_cyclotomic_exp": [
            {"x": cyclotomic, "exponent": X},
            {"x": cyclotomic, "exponent": 7},
            {"x": cyclotomic, "exponent": 0},
        ],
        "test_from_list": [
            {"coordinates": list(range(12)), "is_valid": True},
            {"coordinates": list(range(6)), "is_valid": False},
        ],
    }


def generate_test_cases(test_name):
    # Parse and return config and the test_data for each config
    configurations = [
        Fq2Bn254,
        Fq6ThreeOverTwo,
        Fq12TwoOverThreeOverTwo,
    ]

    return [
        (config, *test_data.values())
        for config in configurations
        if test_name in config.test_data
        for test_data in config.test_data[test_name]
    ]


def field_of(config):
    if config is Fq6ThreeOverTwo:
        return Fq6Bn254
    return Fq12Bn254


@pytest.mark.parametrize(("config", "x", "expected"), generate_test_cases("test_conjugate"))
def test_conjugate(config, x, expected):
    assert fq2_to_list(conjugate(x)) == expected


@pytest.mark.parametrize(("config", "x", "power"), generate_test_cases("test_frobenius_map"))
def test_frobenius_map(config, x, power):
    if config is Fq2Bn254:
        assert fq2_to_list(frobenius_map(x, power)) == fq2_to_list(x ** (q**power % FQ2_ORDER))
    else:
        assert x.frobenius_map(power) == x ** (q**power)


@pytest.mark.parametrize("config", [Fq12TwoOverThreeOverTwo])
def test_frobenius_map_composition(config):
    x = config.f12
    assert x.frobenius_map(1).frobenius_map(1) == x.frobenius_map(2)
    assert x.frobenius_map(2).frobenius_map(3) == x.frobenius_map(5)
    assert x.frobenius_map(6) == x.conjugate()
    assert x.frobenius_map(12) == x


@pytest.mark.parametrize(("config", "x"), generate_test_cases("test_inverse"))
def test_inverse(config, x):
    if config is Fq2Bn254:
        assert fq2_to_list(x * inverse(x)) == [1, 0]
    else:
        assert x * x.inverse() == type(x).one()


@pytest.mark.parametrize("zero", [Fq2.zero(), Fq6Bn254.zero(), Fq12Bn254.zero()])
def test_zero_inversion(zero):
    with pytest.raises(ZeroInversionError):
        inverse(zero) if isinstance(zero, Fq2) else zero.inverse()


@pytest.mark.parametrize(("config", "x"), generate_test_cases("test_square"))
def test_square(config, x):
    assert x.square() == x * x


@pytest.mark.parametrize(("config", "x", "b0", "b1"), generate_test_cases("test_mul_by_01"))
def test_mul_by_01(config, x, b0, b1):
    assert x.mul_by_01(b0, b1) == x * Fq6Bn254(b0, b1, Fq2.zero())


@pytest.mark.parametrize(("config", "x", "c0", "d0", "d1"), generate_test_cases("test_mul_by_034"))
def test_mul_by_034(config, x, c0, d0, d1):
    sparse = Fq12Bn254(Fq6Bn254(c0, Fq2.zero(), Fq2.zero()), Fq6Bn254(d0, d1, Fq2.zero()))
    assert x.mul_by_034(c0, d0, d1) == x * sparse


@pytest.mark.parametrize(("config", "x"), generate_test_cases("test_cyclotomic_square"))
def test_cyclotomic_square(config, x):
    assert x.cyclotomic_square() == x.square()


@pytest.mark.parametrize(("config", "x", "exponent"), generate_test_cases("test_cyclotomic_exp"))
def test_cyclotomic_exp(config, x, exponent):
    assert x.cyclotomic_exp(exponent) == x**exponent


@pytest.mark.parametrize("config", [Fq12TwoOverThreeOverTwo])
def test_conjugate_is_cyclotomic_inverse(config):
    assert config.cyclotomic * config.cyclotomic.conjugate() == Fq12Bn254.one()
    assert not (config.f12 * config.f12.conjugate()).is_one()


@pytest.mark.parametrize(("config", "coordinates", "is_valid"), generate_test_cases("test_from_list"))
def test_from_list(config, coordinates, is_valid):
    field = field_of(config)
    if is_valid:
        assert field.from_list(coordinates).to_list() == coordinates
    else:
        with pytest.raises(ValueError):
            field.from_list(coordinates)


@pytest.mark.parametrize("coordinates", [[1], [1, 2, 3]])
def test_fq2_from_list_invalid(coordinates):
    with pytest.raises(ValueError):
        fq2_from_list(coordinates)


@pytest.mark.parametrize(("divisor", "n_coefficients"), [(3, 6), (6, 12)])
def test_frobenius_coefficients(divisor, n_coefficients):
    non_residue = Fq6Bn254.NON_RESIDUE
    coefficients = frobenius_coefficients(non_residue, divisor, n_coefficients)
    assert len(coefficients) == n_coefficients
    for k, coefficient in enumerate(coefficients):
        assert fq2_to_list(coefficient) == fq2_to_list(non_residue ** (((q**k - 1) // divisor) % FQ2_ORDER))


@pytest.mark.parametrize("divisor", [4, 5])
def test_frobenius_coefficients_invalid_divisor(divisor):
    with pytest.raises(ValueError):
        frobenius_coefficients(Fq6Bn254.NON_RESIDUE, divisor, 6)
