"""Pairing Model."""

from zkrounds.bilinear_pairings.model.miller_loop import MillerLoop
from zkrounds.bilinear_pairings.model.pairing import Pairing


class PairingModel(MillerLoop, Pairing):
    """Pairing Model."""

    def __init__(
        self,
        q,
        r,
        exp_miller_loop,
        x_is_negative,
        fq12,
        projective_from_affine,
        doubling_step,
        addition_step,
        mul_by_char,
        ell,
        easy_exponentiation,
        hard_exponentiation,
    ):
        """Initialise the pairing model.

        Args:
            q: Characteristic of the field over which the pairing is defined.
            r: Order of the groups G1, G2 and GT.
            exp_miller_loop: Signed binary expansion, least significant digit first, of the value over which the
                Miller loop is carried out.
            x_is_negative: Whether the curve parameter is negative.
            fq12: The class implementing F_q^12.
            projective_from_affine: Function converting an affine point on the twisted curve to projective
                coordinates.
            doubling_step: Function doubling a projective point and returning the tangent line coefficients.
            addition_step: Function adding an affine point to a projective point and returning the line coefficients.
            mul_by_char: The untwist-Frobenius-twist endomorphism.
            ell: Function multiplying the Miller output by a line evaluation.
            easy_exponentiation: Easy part of the final exponentiation.
            hard_exponentiation: Hard part of the final exponentiation.
        """
        self.MODULUS = q
        self.ORDER = r
        self.exp_miller_loop = exp_miller_loop
        self.X_IS_NEGATIVE = x_is_negative
        self.FQ12 = fq12
        self.projective_from_affine = projective_from_affine
        self.doubling_step = doubling_step
        self.addition_step = addition_step
        self.mul_by_char = mul_by_char
        self.ell = ell
        self.easy_exponentiation = easy_exponentiation
        self.hard_exponentiation = hard_exponentiation

    def final_exponentiation(self, f):
        """Final exponentiation of the Miller output `f`.

        Raises:
            ZeroInversionError: If `f` is zero.
        """
        return self.hard_exponentiation(self.easy_exponentiation(f))
