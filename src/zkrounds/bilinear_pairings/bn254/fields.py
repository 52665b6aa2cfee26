"""Finite field arithmetic for BN254."""

from zkrounds.bilinear_pairings.bn254.parameters import NON_RESIDUE_FQ2, TWO_INV, b, q
from zkrounds.fields.fq2 import Fq, Fq2, fq2, inverse
from zkrounds.fields.fq6_3_over_2 import fq6_3_over_2
from zkrounds.fields.fq12_2_over_3_over_2 import fq12_2_over_3_over_2

# 9 + u
NON_RESIDUE = fq2(*NON_RESIDUE_FQ2)

# Fq6 implementation, NON_RESIDUE = 9 + u
Fq6 = fq6_3_over_2(NON_RESIDUE, name="Fq6Bn254")
# Fq12 implementation, NON_RESIDUE_OVER_FQ6 = v
Fq12 = fq12_2_over_3_over_2(Fq6, name="Fq12Bn254")

FQ_TWO_INV = Fq(TWO_INV)
# Coefficient of the twisted curve: 3 / (9 + u)
COEFF_B = inverse(NON_RESIDUE) * Fq2([b, 0])
# Constants of the untwist-Frobenius-twist endomorphism
TWIST_MUL_BY_Q_X = NON_RESIDUE ** ((q - 1) // 3)
TWIST_MUL_BY_Q_Y = NON_RESIDUE ** ((q - 1) // 2)
