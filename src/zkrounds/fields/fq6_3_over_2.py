"""Arithmetic in F_q^6 = F_q^2[v] / (v^3 - non_residue), a cubic extension of F_q^2."""

from zkrounds.fields.fq2 import Fq2, ZeroInversionError, frobenius_coefficients, fq2_to_list, inverse, is_zero
from zkrounds.fields.fq2 import frobenius_map as fq2_frobenius_map


class Fq6:
    """Elements of F_q^6 = F_q^2[v] / (v^3 - NON_RESIDUE).

    Elements in F_q^6 are of the form `c0 + c1 * v + c2 * v^2`, where `c0`, `c1`, `c2` are elements of F_q^2. The
    class is not meant to be used directly: use `fq6_3_over_2` to instantiate it for a given non-residue.

    Attributes:
        NON_RESIDUE (Fq2): The cubic non-residue `v^3`.
        FROBENIUS_COEFFS_C1 (tuple[Fq2, ...]): `NON_RESIDUE^((q^k - 1) / 3)` for `k = 0, ..., 5`.
        FROBENIUS_COEFFS_C2 (tuple[Fq2, ...]): `NON_RESIDUE^(2 * (q^k - 1) / 3)` for `k = 0, ..., 5`.
    """

    NON_RESIDUE: Fq2
    FROBENIUS_COEFFS_C1: tuple[Fq2, ...]
    FROBENIUS_COEFFS_C2: tuple[Fq2, ...]

    __slots__ = ("c0", "c1", "c2")

    def __init__(self, c0: Fq2, c1: Fq2, c2: Fq2):
        self.c0 = c0
        self.c1 = c1
        self.c2 = c2

    @classmethod
    def zero(cls):
        return cls(Fq2.zero(), Fq2.zero(), Fq2.zero())

    @classmethod
    def one(cls):
        return cls(Fq2.one(), Fq2.zero(), Fq2.zero())

    @classmethod
    def mul_fp2_by_non_residue(cls, x: Fq2) -> Fq2:
        """Multiply an element of F_q^2 by the cubic non-residue."""
        return x * cls.NON_RESIDUE

    @classmethod
    def from_list(cls, coordinates: list[int]):
        """Construct an element of F_q^6 from its six coordinates over F_q."""
        if len(coordinates) != 6:
            msg = f"An element of F_q^6 has six coordinates: {coordinates}"
            raise ValueError(msg)
        return cls(
            Fq2(list(coordinates[0:2])),
            Fq2(list(coordinates[2:4])),
            Fq2(list(coordinates[4:6])),
        )

    def to_list(self) -> list[int]:
        return [*fq2_to_list(self.c0), *fq2_to_list(self.c1), *fq2_to_list(self.c2)]

    def is_zero(self) -> bool:
        return is_zero(self.c0) and is_zero(self.c1) and is_zero(self.c2)

    def __eq__(self, other):
        if not isinstance(other, Fq6):
            return NotImplemented
        return self.to_list() == other.to_list()

    def __repr__(self):
        return f"{type(self).__name__}({self.to_list()})"

    def __add__(self, other):
        return type(self)(self.c0 + other.c0, self.c1 + other.c1, self.c2 + other.c2)

    def __sub__(self, other):
        return type(self)(self.c0 - other.c0, self.c1 - other.c1, self.c2 - other.c2)

    def __neg__(self):
        return type(self)(-self.c0, -self.c1, -self.c2)

    def double(self):
        return self + self

    def __mul__(self, other):
        """Karatsuba multiplication in F_q^6."""
        nr = self.mul_fp2_by_non_residue
        a0, a1, a2 = self.c0, self.c1, self.c2
        b0, b1, b2 = other.c0, other.c1, other.c2

        v0 = a0 * b0
        v1 = a1 * b1
        v2 = a2 * b2

        c0 = nr((a1 + a2) * (b1 + b2) - v1 - v2) + v0
        c1 = (a0 + a1) * (b0 + b1) - v0 - v1 + nr(v2)
        c2 = (a0 + a2) * (b0 + b2) - v0 + v1 - v2
        return type(self)(c0, c1, c2)

    def square(self):
        """Squaring in F_q^6 (Chung-Hasan SQR2)."""
        nr = self.mul_fp2_by_non_residue
        s0 = self.c0 * self.c0
        ab = self.c0 * self.c1
        s1 = ab + ab
        s2 = self.c0 - self.c1 + self.c2
        s2 = s2 * s2
        bc = self.c1 * self.c2
        s3 = bc + bc
        s4 = self.c2 * self.c2

        return type(self)(s0 + nr(s3), s1 + nr(s4), s1 + s2 + s3 - s0 - s4)

    def mul_by_fp2(self, x: Fq2):
        return type(self)(self.c0 * x, self.c1 * x, self.c2 * x)

    def mul_by_01(self, b0: Fq2, b1: Fq2):
        """Multiply `self` by the sparse element `b0 + b1 * v`."""
        nr = self.mul_fp2_by_non_residue
        v0 = self.c0 * b0
        v1 = self.c1 * b1

        c0 = nr((self.c1 + self.c2) * b1 - v1) + v0
        c1 = (b0 + b1) * (self.c0 + self.c1) - v0 - v1
        c2 = (self.c0 + self.c2) * b0 - v0 + v1
        return type(self)(c0, c1, c2)

    def mul_by_non_residue(self):
        """Multiply `self` by `v`, the quadratic non-residue used to build F_q^12 over F_q^6."""
        return type(self)(self.mul_fp2_by_non_residue(self.c2), self.c0, self.c1)

    def inverse(self):
        """Inverse in F_q^6.

        Raises:
            ZeroInversionError: If `self` is zero.
        """
        if self.is_zero():
            msg = "Cannot invert the zero element of F_q^6"
            raise ZeroInversionError(msg)
        nr = self.mul_fp2_by_non_residue
        c0, c1, c2 = self.c0, self.c1, self.c2

        t0 = c0 * c0
        t1 = c1 * c1
        t2 = c2 * c2
        t3 = c0 * c1
        t4 = c0 * c2
        t5 = c1 * c2

        s0 = t0 - nr(t5)
        s1 = nr(t2) - t3
        s2 = t1 - t4

        a3 = nr(c2 * s1 + c1 * s2)
        t6 = inverse(c0 * s0 + a3)
        return type(self)(t6 * s0, t6 * s1, t6 * s2)

    def frobenius_map(self, power: int):
        """Compute `self^(q^power)`."""
        return type(self)(
            fq2_frobenius_map(self.c0, power),
            fq2_frobenius_map(self.c1, power) * self.FROBENIUS_COEFFS_C1[power % 6],
            fq2_frobenius_map(self.c2, power) * self.FROBENIUS_COEFFS_C2[power % 6],
        )


def fq6_3_over_2(non_residue: Fq2, name: str = "Fq6") -> type[Fq6]:
    """Instantiate F_q^6 = F_q^2[v] / (v^3 - non_residue).

    Args:
        non_residue (Fq2): A cubic non-residue in F_q^2.
        name (str): The name of the returned class.

    Returns:
        The subclass of `Fq6` implementing the extension.

    Example:
        >>> from zkrounds.fields.fq2 import fq2
        >>> Fq6Bn254 = fq6_3_over_2(fq2(9, 1))
        >>> Fq6Bn254.one() * Fq6Bn254.one() == Fq6Bn254.one()
        True
    """
    gammas = frobenius_coefficients(non_residue, 3, 6)
    return type(
        name,
        (Fq6,),
        {
            "__slots__": (),
            "NON_RESIDUE": non_residue,
            "FROBENIUS_COEFFS_C1": gammas,
            "FROBENIUS_COEFFS_C2": tuple(gamma * gamma for gamma in gammas),
        },
    )
