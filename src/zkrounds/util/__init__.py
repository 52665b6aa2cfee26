"""util package.

This package provides utility functions and the parameters of the round engine.

Modules:
    - utility_functions: Non-adjacent forms and bit expansions.
    - utility_parameters: The `RoundParameters` dataclass and the default parameters.
"""
