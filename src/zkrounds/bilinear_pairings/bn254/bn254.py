# Build pairing model for BN254

from zkrounds.bilinear_pairings.bn254.fields import Fq12
from zkrounds.bilinear_pairings.bn254.final_exponentiation import (
    easy_exponentiation,
    hard_exponentiation,
)
from zkrounds.bilinear_pairings.bn254.line_functions import (
    G2HomProjective,
    addition_step,
    doubling_step,
    ell,
    mul_by_char,
)
from zkrounds.bilinear_pairings.bn254.parameters import ATE_LOOP_COUNT, X_IS_NEGATIVE, q, r
from zkrounds.bilinear_pairings.model.model_definition import PairingModel

bn254 = PairingModel(
    q=q,
    r=r,
    exp_miller_loop=ATE_LOOP_COUNT,
    x_is_negative=X_IS_NEGATIVE,
    fq12=Fq12,
    projective_from_affine=G2HomProjective.from_affine,
    doubling_step=doubling_step,
    addition_step=addition_step,
    mul_by_char=mul_by_char,
    ell=ell,
    easy_exponentiation=easy_exponentiation,
    hard_exponentiation=hard_exponentiation,
)
