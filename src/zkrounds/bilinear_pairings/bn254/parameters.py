"""BN254 curve parameters.

The curve is `y^2 = x^3 + 3` over F_q, with sextic twist of type D `y^2 = x^3 + 3 / (9 + u)` over
F_q^2 = F_q[u] / (u^2 + 1). The towers are F_q^6 = F_q^2[v] / (v^3 - (9 + u)) and F_q^12 = F_q^6[w] / (w^2 - v).
"""

# Characteristic of the base field
q = 21888242871839275222246405745257275088696311157297823662689037894645226208583
# Order of the groups G1, G2, GT
r = 21888242871839275222246405745257275088548364400416034343698204186575808495617
# Curve parameter
X = 4965661367192848881
X_IS_NEGATIVE = False
# Coefficient of the curve
b = 3
# (c0, c1) such that 9 + u is the cubic and sextic non-residue over F_q^2
NON_RESIDUE_FQ2 = (9, 1)
# Inverse of 2 in F_q
TWO_INV = (q + 1) // 2

# Signed binary expansion of 6 * X + 2, least significant digit first
ATE_LOOP_COUNT = (
    0, 0, 0, 1, 0, 1, 0, -1, 0, 0, 1, -1, 0, 0, 1, 0,
    0, 1, 1, 0, -1, 0, 0, 1, 0, -1, 0, 0, 0, 0, 1, 1,
    1, 0, 0, -1, 0, 0, 1, 0, 0, 0, 0, 0, -1, 0, 0, 1,
    1, 0, 0, -1, 0, 0, 0, 1, 1, 0, -1, 0, 0, 1, 0, 1,
    1,
)  # fmt: skip

# Non-adjacent form of X, most significant digit first, with 2 standing for -1
X_NAF = (
    1, 0, 0, 0, 1, 0, 1, 0, 0, 2, 0, 1, 0, 1, 0, 2,
    0, 0, 1, 0, 1, 0, 2, 0, 2, 0, 2, 0, 1, 0, 0, 0,
    1, 0, 0, 1, 0, 1, 0, 1, 0, 2, 0, 1, 0, 0, 1, 0,
    0, 0, 0, 1, 0, 1, 0, 0, 0, 0, 2, 0, 0, 0, 1,
)  # fmt: skip

# Number of line coefficients of a prepared G2 point: one doubling per iteration, one addition per non-zero digit,
# two final additions
N_ELL_COEFFICIENTS = len(ATE_LOOP_COUNT) - 1 + sum(1 for digit in ATE_LOOP_COUNT[:-1] if digit != 0) + 2
