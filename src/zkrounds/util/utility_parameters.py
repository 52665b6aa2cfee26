"""Parameters of the round engine."""

from dataclasses import dataclass, fields, replace

from zkrounds.bilinear_pairings.bn254.parameters import r


@dataclass(frozen=True)
class RoundParameters:
    """Parameters used to build the round programs.

    Attributes:
        round_budget (int): The maximum cost of a round, measured in multiplications in the base field.
        scalar_bits (int): The number of bits of the public inputs processed by the input preparation.
    """

    round_budget: int = 300
    scalar_bits: int = r.bit_length()

    def __post_init__(self):
        if self.round_budget <= 0:
            msg = f"The round budget must be a positive integer: round_budget: {self.round_budget}"
            raise ValueError(msg)
        if self.scalar_bits < r.bit_length():
            msg = f"The public inputs need {r.bit_length()} bits: scalar_bits: {self.scalar_bits}"
            raise ValueError(msg)

    def with_overrides(self, **overrides):
        """Return a copy of `self` with the attributes in `overrides` replaced.

        Raises:
            AttributeError: If one of the keys of `overrides` is not an attribute of `RoundParameters`.
        """
        names = {field.name for field in fields(self)}
        for key in overrides:
            if key not in names:
                msg = f"RoundParameters has no attribute '{key}'"
                raise AttributeError(msg)
        return replace(self, **overrides)


default_parameters = RoundParameters()
