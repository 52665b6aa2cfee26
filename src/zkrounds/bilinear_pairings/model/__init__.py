"""model package.

This package provides the generic implementation of the optimal Ate pairing on curves with a sextic twist of type D.

Modules:
    - miller_loop.
    - model_definition.
    - pairing.
"""
