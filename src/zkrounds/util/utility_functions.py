"""Utility functions."""


def find_naf(n: int) -> list[int]:
    """Compute the non-adjacent form of a non-negative integer.

    The digits are returned least significant first, each digit in {-1, 0, 1}, and no two consecutive digits are
    both non-zero.

    Args:
        n (int): The integer to expand.

    Returns:
        The list of digits of the non-adjacent form of `n`.

    Raises:
        ValueError: If `n` is negative.

    Example:
        >>> find_naf(7)
        [-1, 0, 0, 1]
        >>> find_naf(0)
        []
    """
    if n < 0:
        msg = f"The non-adjacent form is only defined for non-negative integers: {n}"
        raise ValueError(msg)
    out = []
    while n > 0:
        if n % 2 == 1:
            z = 2 - n % 4
            n -= z
        else:
            z = 0
        out.append(z)
        n //= 2
    return out


def naf_to_ternary(naf: list[int]) -> list[int]:
    """Convert a non-adjacent form, least significant digit first, to the ternary convention.

    The ternary convention lists the digits most significant first and writes the digit `-1` as `2`.

    Example:
        >>> naf_to_ternary([-1, 0, 0, 1])
        [1, 0, 0, 2]
    """
    return [2 if digit == -1 else digit for digit in reversed(naf)]


def ternary_to_int(digits: list[int]) -> int:
    """Compute the integer whose ternary-convention expansion is `digits`.

    Example:
        >>> ternary_to_int([1, 0, 0, 2])
        7
    """
    out = 0
    for digit in digits:
        out = 2 * out + (-1 if digit == 2 else digit)
    return out

