"""final_exponentiation module.

This module implements the final exponentiation in the optimal Ate pairing for BN254: the easy part raises the
Miller loop output to the power `(q^6 - 1)(q^2 + 1)`, the hard part to the power `(q^4 - q^2 + 1) / r` following
Fuentes-Castaneda, Knapp and Rodriguez-Henriquez.
"""

from zkrounds.bilinear_pairings.bn254.fields import Fq12
from zkrounds.bilinear_pairings.bn254.parameters import X, X_IS_NEGATIVE


def exp_by_neg_x(f: Fq12) -> Fq12:
    """Compute `f^(-X)` for `f` in the cyclotomic subgroup."""
    f = f.cyclotomic_exp(X)
    if not X_IS_NEGATIVE:
        f = f.conjugate()
    return f


def easy_exponentiation(f: Fq12) -> Fq12:
    """Compute `f^((q^6 - 1)(q^2 + 1))`.

    Raises:
        ZeroInversionError: If `f` is zero.
    """
    r = f.conjugate() * f.inverse()
    return r.frobenius_map(2) * r


def hard_exponentiation(r: Fq12) -> Fq12:
    """Raise the output of the easy part to the power `(q^4 - q^2 + 1) / r`, up to a fixed power coprime to `r`."""
    y0 = exp_by_neg_x(r)
    y1 = y0.cyclotomic_square()
    y2 = y1.cyclotomic_square()
    y3 = y2 * y1
    y4 = exp_by_neg_x(y3)
    y5 = y4.cyclotomic_square()
    y6 = exp_by_neg_x(y5)
    y3 = y3.conjugate()
    y6 = y6.conjugate()
    y7 = y6 * y4
    y8 = y7 * y3
    y9 = y8 * y1
    y10 = y8 * y4
    y11 = y10 * r
    y12 = y9.frobenius_map(1)
    y13 = y12 * y11
    y8 = y8.frobenius_map(2)
    y14 = y8 * y13
    r = r.conjugate()
    y15 = (r * y9).frobenius_map(3)
    return y15 * y14


def final_exponentiation(f: Fq12) -> Fq12:
    """Final exponentiation of the Miller loop output `f`.

    Raises:
        ZeroInversionError: If `f` is zero.
    """
    return hard_exponentiation(easy_exponentiation(f))
