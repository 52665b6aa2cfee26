"""Line functions for BN254.

The Miller loop keeps the multiple of the G2 point in homogeneous projective coordinates on the twisted curve. Each
doubling or addition step updates the point and returns the coefficients `(c0, c1, c2)` of the line through the
points involved, in the sparse form expected by `Fq12.mul_by_034` (twist of type D).
"""

from typing import NamedTuple, TypeAlias

from zkrounds.bilinear_pairings.bn254.fields import COEFF_B, FQ_TWO_INV, TWIST_MUL_BY_Q_X, TWIST_MUL_BY_Q_Y, Fq12
from zkrounds.fields.fq2 import Fq, Fq2, double, frobenius_map, mul_by_fp, triple

LineCoefficients: TypeAlias = tuple[Fq2, Fq2, Fq2]
G1Affine: TypeAlias = tuple[Fq, Fq]
G2Affine: TypeAlias = tuple[Fq2, Fq2]


class G2HomProjective(NamedTuple):
    """A point on the twisted curve in homogeneous projective coordinates."""

    x: Fq2
    y: Fq2
    z: Fq2

    @classmethod
    def from_affine(cls, point: G2Affine) -> "G2HomProjective":
        return cls(point[0], point[1], Fq2.one())


def doubling_step(r: G2HomProjective) -> tuple[G2HomProjective, LineCoefficients]:
    """Double `r` and return the coefficients of the tangent line at `r`.

    Args:
        r (G2HomProjective): The point to double.

    Returns:
        The tuple `(2 * r, (c0, c1, c2))`.
    """
    a = mul_by_fp(r.x * r.y, FQ_TWO_INV)
    b = r.y * r.y
    c = r.z * r.z
    e = COEFF_B * triple(c)
    f = triple(e)
    g = mul_by_fp(b + f, FQ_TWO_INV)
    h = (r.y + r.z) * (r.y + r.z) - (b + c)
    i = e - b
    j = r.x * r.x
    e_square = e * e

    new_r = G2HomProjective(a * (b - f), g * g - triple(e_square), b * h)
    return new_r, (-h, triple(j), i)


def addition_step(r: G2HomProjective, q: G2Affine) -> tuple[G2HomProjective, LineCoefficients]:
    """Add the affine point `q` to `r` and return the coefficients of the line through `r` and `q`.

    Args:
        r (G2HomProjective): The running point.
        q (G2Affine): The affine point to add.

    Returns:
        The tuple `(r + q, (c0, c1, c2))`.
    """
    qx, qy = q
    theta = r.y - qy * r.z
    lambda_ = r.x - qx * r.z
    c = theta * theta
    d = lambda_ * lambda_
    e = lambda_ * d
    f = r.z * c
    g = r.x * d
    h = e + f - double(g)

    new_r = G2HomProjective(lambda_ * h, theta * (g - h) - e * r.y, r.z * e)
    return new_r, (lambda_, -theta, theta * qx - lambda_ * qy)


def mul_by_char(q: G2Affine) -> G2Affine:
    """Apply the untwist-Frobenius-twist endomorphism to `q`."""
    return (
        frobenius_map(q[0], 1) * TWIST_MUL_BY_Q_X,
        frobenius_map(q[1], 1) * TWIST_MUL_BY_Q_Y,
    )


def scale_coefficients(coefficients: LineCoefficients, p: G1Affine) -> LineCoefficients:
    """Evaluate the line with `coefficients` at `p`: `c0` is scaled by `p.y` and `c1` by `p.x`."""
    c0, c1, c2 = coefficients
    return mul_by_fp(c0, p[1]), mul_by_fp(c1, p[0]), c2


def ell(f: Fq12, coefficients: LineCoefficients, p: G1Affine) -> Fq12:
    """Multiply the Miller loop accumulator `f` by the line with `coefficients` evaluated at `p`."""
    return f.mul_by_034(*scale_coefficients(coefficients, p))
