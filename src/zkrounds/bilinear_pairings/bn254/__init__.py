"""bn254 package.

This package provides modules implementing the arithmetic specific to BN254.

Modules:
    - bn254: Build pairing model for BN254.
    - fields: Finite field arithmetic for BN254.
    - final_exponentiation: Final exponentiation for BN254.
    - line_functions: Doubling and addition steps, line evaluation for BN254.
    - parameters: BN254 curve parameters.
"""
