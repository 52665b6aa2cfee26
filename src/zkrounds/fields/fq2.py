"""Helpers for F_q^2 = F_q[u] / (u^2 + 1), the quadratic extension provided by py_ecc.

The base field `Fq` and its quadratic extension `Fq2` are the BN254 fields of `py_ecc`. This module adds the
operations the tower construction needs on top of them: conjugation, Frobenius endomorphism, multiplication by an
element of the base field, and the coefficients of the Frobenius endomorphism of the extensions built over F_q^2.
"""

from py_ecc.fields import bn128_FQ as Fq
from py_ecc.fields import bn128_FQ2 as Fq2

MODULUS = Fq.field_modulus


class ZeroInversionError(ArithmeticError):
    """Raised when inverting the additive identity of a field."""


def fq2(c0: int, c1: int) -> Fq2:
    """Return `c0 + c1 * u`."""
    return Fq2([c0, c1])


def fq2_to_list(x: Fq2) -> list[int]:
    """Return the coordinates of `x` as a list of canonical integers."""
    return [int(c.n) for c in x.coeffs]


def fq2_from_list(coordinates: list[int]) -> Fq2:
    """Construct an element of F_q^2 from its coordinates.

    Raises:
        ValueError: If `coordinates` does not have length 2.
    """
    if len(coordinates) != 2:
        msg = f"An element of F_q^2 has two coordinates: {coordinates}"
        raise ValueError(msg)
    return Fq2(list(coordinates))


def is_zero(x: Fq2) -> bool:
    return all(c.n == 0 for c in x.coeffs)


def double(x: Fq2) -> Fq2:
    return x + x


def triple(x: Fq2) -> Fq2:
    return x + x + x


def conjugate(x: Fq2) -> Fq2:
    """Return `x0 - x1 * u` for `x = x0 + x1 * u`."""
    return Fq2([x.coeffs[0], -x.coeffs[1]])


def frobenius_map(x: Fq2, power: int) -> Fq2:
    """Compute `x^(q^power)`: the Frobenius endomorphism of F_q^2 is the conjugation."""
    return conjugate(x) if power % 2 == 1 else x


def mul_by_fp(x: Fq2, scalar: Fq) -> Fq2:
    """Multiply `x` by an element of the base field."""
    return Fq2([c * scalar for c in x.coeffs])


def inverse(x: Fq2) -> Fq2:
    """Inverse of `x` in F_q^2.

    Raises:
        ZeroInversionError: If `x` is zero.
    """
    if is_zero(x):
        msg = "Cannot invert the zero element of F_q^2"
        raise ZeroInversionError(msg)
    return x.inv()


def frobenius_coefficients(non_residue: Fq2, divisor: int, n_coefficients: int) -> tuple[Fq2, ...]:
    """Compute `non_residue^((q^k - 1) / divisor)` for `k = 0, ..., n_coefficients - 1`.

    The coefficients are computed with a single exponentiation using
        `non_residue^((q^k - 1) / divisor) = (non_residue^((q^(k-1) - 1) / divisor))^q * non_residue^((q-1) / divisor)`

    Args:
        non_residue (Fq2): The non-residue defining the extension.
        divisor (int): The degree of the extension over F_q^2 times the degree of the intermediate towers.
        n_coefficients (int): The number of coefficients to compute.

    Returns:
        The tuple of the Frobenius coefficients.

    Raises:
        ValueError: If `divisor` does not divide `q - 1`.
    """
    if (MODULUS - 1) % divisor != 0:
        msg = f"The divisor {divisor} does not divide q - 1"
        raise ValueError(msg)
    gamma = non_residue ** ((MODULUS - 1) // divisor)
    coefficients = [Fq2.one()]
    for _ in range(1, n_coefficients):
        coefficients.append(conjugate(coefficients[-1]) * gamma)
    return tuple(coefficients)
