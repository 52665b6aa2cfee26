"""Arithmetic in F_q^12 = F_q^6[w] / (w^2 - v), a quadratic extension of F_q^6.

On top of the generic field operations, the module implements the operations that are specific to the pairing
target group: sparse multiplication by line evaluations, cyclotomic squaring and cyclotomic exponentiation.
"""

from zkrounds.fields.fq2 import Fq2, ZeroInversionError, frobenius_coefficients
from zkrounds.fields.fq6_3_over_2 import Fq6
from zkrounds.util.utility_functions import find_naf


class Fq12:
    """Elements of F_q^12 = F_q^6[w] / (w^2 - v).

    Elements in F_q^12 are of the form `c0 + c1 * w`, where `c0` and `c1` are elements of F_q^6. Use
    `fq12_2_over_3_over_2` to instantiate the class over a given F_q^6.

    Attributes:
        BASE_FIELD (type[Fq6]): The cubic extension F_q^6 over which F_q^12 is built.
        FROBENIUS_COEFFS_C1 (tuple[Fq2, ...]): `NON_RESIDUE^((q^k - 1) / 6)` for `k = 0, ..., 11`.
    """

    BASE_FIELD: type[Fq6]
    FROBENIUS_COEFFS_C1: tuple[Fq2, ...]

    __slots__ = ("c0", "c1")

    def __init__(self, c0: Fq6, c1: Fq6):
        self.c0 = c0
        self.c1 = c1

    @classmethod
    def zero(cls):
        return cls(cls.BASE_FIELD.zero(), cls.BASE_FIELD.zero())

    @classmethod
    def one(cls):
        return cls(cls.BASE_FIELD.one(), cls.BASE_FIELD.zero())

    @classmethod
    def from_list(cls, coordinates: list[int]):
        """Construct an element of F_q^12 from its twelve coordinates over F_q."""
        if len(coordinates) != 12:
            msg = f"An element of F_q^12 has twelve coordinates: {coordinates}"
            raise ValueError(msg)
        return cls(cls.BASE_FIELD.from_list(coordinates[:6]), cls.BASE_FIELD.from_list(coordinates[6:]))

    def to_list(self) -> list[int]:
        return [*self.c0.to_list(), *self.c1.to_list()]

    def is_zero(self) -> bool:
        return self.c0.is_zero() and self.c1.is_zero()

    def is_one(self) -> bool:
        return self == self.one()

    def __eq__(self, other):
        if not isinstance(other, Fq12):
            return NotImplemented
        return self.to_list() == other.to_list()

    def __repr__(self):
        return f"{type(self).__name__}({self.to_list()})"

    def __add__(self, other):
        return type(self)(self.c0 + other.c0, self.c1 + other.c1)

    def __sub__(self, other):
        return type(self)(self.c0 - other.c0, self.c1 - other.c1)

    def __neg__(self):
        return type(self)(-self.c0, -self.c1)

    def __mul__(self, other):
        """Karatsuba multiplication in F_q^12."""
        aa = self.c0 * other.c0
        bb = self.c1 * other.c1
        c1 = (self.c0 + self.c1) * (other.c0 + other.c1) - aa - bb
        return type(self)(aa + bb.mul_by_non_residue(), c1)

    def square(self):
        """Complex squaring in F_q^12."""
        v0 = self.c0 - self.c1
        v3 = self.c0 - self.c1.mul_by_non_residue()
        v2 = self.c0 * self.c1
        v0 = v0 * v3 + v2
        return type(self)(v0 + v2.mul_by_non_residue(), v2.double())

    def __pow__(self, exponent: int):
        """Square-and-multiply exponentiation. Negative exponents are not supported."""
        if exponent < 0:
            msg = f"Negative exponent {exponent}"
            raise ValueError(msg)
        out = self.one()
        for bit in bin(exponent)[2:]:
            out = out.square()
            if bit == "1":
                out = out * self
        return out

    def conjugate(self):
        """Compute `self^(q^6)`, which is the inverse of `self` in the cyclotomic subgroup."""
        return type(self)(self.c0, -self.c1)

    def norm(self) -> Fq6:
        """Return `c0^2 - v * c1^2`, the norm of `self` over F_q^6."""
        return self.c0.square() - self.c1.square().mul_by_non_residue()

    def inverse(self):
        """Inverse in F_q^12, computed through the norm over F_q^6.

        Raises:
            ZeroInversionError: If `self` is zero.
        """
        if self.is_zero():
            msg = "Cannot invert the zero element of F_q^12"
            raise ZeroInversionError(msg)
        t = self.norm().inverse()
        return type(self)(self.c0 * t, -(self.c1 * t))

    def frobenius_map(self, power: int):
        """Compute `self^(q^power)`."""
        return type(self)(
            self.c0.frobenius_map(power),
            self.c1.frobenius_map(power).mul_by_fp2(self.FROBENIUS_COEFFS_C1[power % 12]),
        )

    def mul_by_034(self, c0: Fq2, d0: Fq2, d1: Fq2):
        """Multiply `self` by the sparse element `c0 + (d0 + d1 * v) * w`.

        This is the shape of the evaluation of a line function on the D-type twist.
        """
        a = self.c0.mul_by_fp2(c0)
        b = self.c1.mul_by_01(d0, d1)
        e = (self.c0 + self.c1).mul_by_01(c0 + d0, d1)
        return type(self)(b.mul_by_non_residue() + a, e - (a + b))

    def cyclotomic_square(self):
        """Granger-Scott squaring, valid for elements of the cyclotomic subgroup of order `q^4 - q^2 + 1`.

        The coordinates are paired as `(c0.c0, c1.c1)`, `(c1.c0, c0.c2)`, `(c0.c1, c1.c2)` and each pair is squared
        in F_q^4 = F_q^2[s] / (s^2 - NON_RESIDUE).
        """
        nr = self.BASE_FIELD.mul_fp2_by_non_residue
        r0, r4, r3 = self.c0.c0, self.c0.c1, self.c0.c2
        r2, r1, r5 = self.c1.c0, self.c1.c1, self.c1.c2

        t0, t1 = _fq4_square(r0, r1, nr)
        t2, t3 = _fq4_square(r2, r3, nr)
        t4, t5 = _fq4_square(r4, r5, nr)

        z0 = t0 - r0
        z0 = z0 + z0 + t0
        z1 = t1 + r1
        z1 = z1 + z1 + t1

        t5_nr = nr(t5)
        z2 = r2 + t5_nr
        z2 = z2 + z2 + t5_nr
        z3 = t4 - r3
        z3 = z3 + z3 + t4

        z4 = t2 - r4
        z4 = z4 + z4 + t2
        z5 = r5 + t3
        z5 = z5 + z5 + t3

        fq6 = type(self.c0)
        return type(self)(fq6(z0, z4, z3), fq6(z2, z1, z5))

    def cyclotomic_exp(self, exponent: int):
        """Exponentiation in the cyclotomic subgroup using the non-adjacent form of `exponent`."""
        out = self.one()
        self_inverse = self.conjugate()
        found_nonzero = False
        for digit in reversed(find_naf(exponent)):
            if found_nonzero:
                out = out.cyclotomic_square()
            if digit != 0:
                found_nonzero = True
                out = out * (self if digit > 0 else self_inverse)
        return out


def _fq4_square(a: Fq2, b: Fq2, mul_by_non_residue) -> tuple[Fq2, Fq2]:
    """Square `a + b * s` in F_q^4 = F_q^2[s] / (s^2 - NON_RESIDUE)."""
    tmp = a * b
    t0 = (a + b) * (mul_by_non_residue(b) + a) - tmp - mul_by_non_residue(tmp)
    return t0, tmp + tmp


def fq12_2_over_3_over_2(base_field: type[Fq6], name: str = "Fq12") -> type[Fq12]:
    """Instantiate F_q^12 = F_q^6[w] / (w^2 - v).

    Args:
        base_field (type[Fq6]): The cubic extension F_q^6 = F_q^2[v] / (v^3 - NON_RESIDUE).
        name (str): The name of the returned class.

    Returns:
        The subclass of `Fq12` implementing the extension.
    """
    return type(
        name,
        (Fq12,),
        {
            "__slots__": (),
            "BASE_FIELD": base_field,
            "FROBENIUS_COEFFS_C1": frobenius_coefficients(base_field.NON_RESIDUE, 6, 12),
        },
    )
