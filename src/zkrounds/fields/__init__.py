"""fields package.

This package provides the tower of extension fields used by the pairing, built on top of the prime field and the
quadratic extension of `py_ecc`.

Modules:
    - fq2: Helpers for F_q^2 = F_q[u] / (u^2 + 1).
    - fq6_3_over_2: Cubic extension of F_q^2.
    - fq12_2_over_3_over_2: Quadratic extension of F_q^6.
"""
