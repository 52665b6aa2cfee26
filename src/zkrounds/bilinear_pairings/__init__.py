"""bilinear_pairings package.

This package provides subpackages for computing bilinear pairings in a single call. The round engine in
`zkrounds.rounds` reproduces these computations one bounded round at a time.

Subpackages:
    - bn254: Contains modules implementing the optimal Ate pairing over BN254.
    - model: Contains modules implementing the Miller loop and the pairing.

Usage example:
    >>> from py_ecc.bn128 import G1, G2
    >>> from zkrounds.bilinear_pairings.bn254.bn254 import bn254
    >>>
    >>> e = bn254.pairing(G1, G2)
    >>> (e ** bn254.ORDER).is_one()
    True
"""
