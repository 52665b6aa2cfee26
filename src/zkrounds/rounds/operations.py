"""Micro-operations of the round programs.

Every step of a round program names an operation of `OPERATIONS` by its tag. An operation declares the kinds of the
scratch values it reads and writes, and its cost measured in multiplications in F_q. Loader operations take the
`RoundContext` as first argument and read proof, public inputs and verifying key data instead of scratch values.

The costs are estimates of the dominant work of each operation: a multiplication in F_q^2 counts three
multiplications in F_q, a squaring two, and an inversion in F_q counts `FQ_INVERSE`.
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol, TypeAlias

from py_ecc.fields import optimized_bn128_FQ as OptimizedFq
from py_ecc.optimized_bn128 import add, double, is_inf, normalize

from zkrounds.bilinear_pairings.bn254.fields import Fq12
from zkrounds.bilinear_pairings.bn254.line_functions import (
    G2HomProjective,
    addition_step,
    doubling_step,
    mul_by_char,
)
from zkrounds.fields.fq2 import Fq, ZeroInversionError, mul_by_fp
from zkrounds.rounds.scratch_memory import MemoryKind

FQ2_MUL = 3
FQ2_SQUARE = 2
FQ2_MUL_BY_FQ = 2
FQ6_MUL = 6 * FQ2_MUL
FQ6_SQUARE = 3 * FQ2_MUL + 2 * FQ2_SQUARE
FQ6_MUL_BY_01 = 5 * FQ2_MUL
FQ12_MUL = 3 * FQ6_MUL
FQ12_SQUARE = 2 * FQ6_MUL
FQ12_CYCLOTOMIC_SQUARE = 6 * FQ2_MUL
FQ12_FROBENIUS_MAP = 5 * FQ2_MUL
FQ_INVERSE = 100
FQ6_INVERSE = FQ_INVERSE + 12 * FQ2_MUL
# Projective formulas of py_ecc: 7M + 4S for a doubling, 12M + 2S for an addition
G1_DOUBLE = 11
G1_ADD = 14
G2_DOUBLING_STEP = 6 * FQ2_MUL + 6 * FQ2_SQUARE
G2_ADDITION_STEP = 11 * FQ2_MUL + 2 * FQ2_SQUARE
G2_MUL_BY_CHAR = 2 * FQ2_MUL
LOAD = 1

OptimizedG1: TypeAlias = tuple[OptimizedFq, OptimizedFq, OptimizedFq]


class RoundContext(Protocol):
    """The data available to the loader operations."""

    def g1(self, name: str) -> tuple[Fq, Fq]: ...

    def g2(self, name: str) -> tuple: ...

    def gamma_coefficients(self, k: int) -> tuple: ...

    def delta_coefficients(self, k: int) -> tuple: ...

    def public_input(self, i: int) -> int: ...

    def gamma_abc(self, i: int) -> tuple[Fq, Fq]: ...


@dataclass(frozen=True)
class Operation:
    """A micro-operation.

    Attributes:
        function (Callable): The function computing the outputs from the immediates and the inputs.
        cost (int): The cost of the operation, in multiplications in F_q.
        inputs (tuple[MemoryKind, ...]): The kinds of the inputs.
        outputs (tuple[MemoryKind, ...]): The kinds of the outputs.
        uses_context (bool): Whether `function` takes the `RoundContext` as first argument.
    """

    function: Callable
    cost: int
    inputs: tuple[MemoryKind, ...]
    outputs: tuple[MemoryKind, ...]
    uses_context: bool = False

    def __call__(self, context: RoundContext, immediates: tuple, values: list) -> tuple:
        """Apply the operation and return the tuple of its outputs."""
        if self.uses_context:
            out = self.function(context, *immediates, *values)
        else:
            out = self.function(*immediates, *values)
        return (out,) if len(self.outputs) == 1 else tuple(out)


def to_optimized_g1(point: tuple[Fq, Fq]) -> OptimizedG1:
    """Convert an affine point of `py_ecc.bn128` to projective coordinates of `py_ecc.optimized_bn128`."""
    return (OptimizedFq(point[0].n), OptimizedFq(point[1].n), OptimizedFq.one())


def g1_zero() -> OptimizedG1:
    return (OptimizedFq.one(), OptimizedFq.one(), OptimizedFq.zero())


def g1_add_public_input_bit(context: RoundContext, i: int, bit: int, acc: OptimizedG1) -> OptimizedG1:
    """Add `gamma_abc[i + 1]` to `acc` if the bit `bit` of the `i`-th public input is set."""
    if (context.public_input(i) >> bit) & 1:
        return add(acc, to_optimized_g1(context.gamma_abc(i + 1)))
    return acc


def g1_add_gamma_abc(context: RoundContext, i: int, acc: OptimizedG1) -> OptimizedG1:
    return add(acc, to_optimized_g1(context.gamma_abc(i)))


def g1_normalize(acc: OptimizedG1) -> tuple[Fq, Fq]:
    """Convert `acc` to affine coordinates.

    Raises:
        ZeroInversionError: If `acc` is the point at infinity.
    """
    if is_inf(acc):
        msg = "Cannot normalize the point at infinity"
        raise ZeroInversionError(msg)
    x, y = normalize(acc)
    return Fq(x.n), Fq(y.n)


def g2_doubling_step(x, y, z) -> tuple:
    r, coefficients = doubling_step(G2HomProjective(x, y, z))
    return (*r, *coefficients)


def g2_addition_step(x, y, z, q_x, q_y) -> tuple:
    r, coefficients = addition_step(G2HomProjective(x, y, z), (q_x, q_y))
    return (*r, *coefficients)


def ell_scale_coefficients(c0, c1, p_x, p_y) -> tuple:
    """Scale the line coefficients `c0` by `p.y` and `c1` by `p.x`."""
    return mul_by_fp(c0, p_y), mul_by_fp(c1, p_x)


def fq12_from_norm_inverse(f, norm_inverse):
    """Return `f^-1 = (c0 * n, -c1 * n)`, where `n` is the inverse of the norm of `f`."""
    return type(f)(f.c0 * norm_inverse, -(f.c1 * norm_inverse))


def fq12_mul_by_034_combine(a, b, e):
    """Combine the products of `Fq12.mul_by_034`: `(b * v + a, e - (a + b))`."""
    return Fq12(b.mul_by_non_residue() + a, e - (a + b))


G1 = MemoryKind.G1
FQ = MemoryKind.FQ
FQ2 = MemoryKind.FQ2
FQ6 = MemoryKind.FQ6
FQ12 = MemoryKind.FQ12

OPERATIONS: dict[str, Operation] = {
    # Arithmetic in F_q^12
    "fq12_one": Operation(Fq12.one, LOAD, (), (FQ12,)),
    "fq12_mul": Operation(lambda a, b: a * b, FQ12_MUL, (FQ12, FQ12), (FQ12,)),
    "fq12_square": Operation(lambda a: a.square(), FQ12_SQUARE, (FQ12,), (FQ12,)),
    "fq12_cyclotomic_square": Operation(
        lambda a: a.cyclotomic_square(), FQ12_CYCLOTOMIC_SQUARE, (FQ12,), (FQ12,)
    ),
    "fq12_conjugate": Operation(lambda a: a.conjugate(), LOAD, (FQ12,), (FQ12,)),
    "fq12_frobenius_map": Operation(
        lambda power, a: a.frobenius_map(power), FQ12_FROBENIUS_MAP, (FQ12,), (FQ12,)
    ),
    # Inversion in F_q^12 through the norm over F_q^6
    "fq12_norm_c1_square": Operation(lambda f: f.c1.square(), FQ6_SQUARE, (FQ12,), (FQ6,)),
    "fq12_norm_c0_square": Operation(lambda f: f.c0.square(), FQ6_SQUARE, (FQ12,), (FQ6,)),
    "fq6_sub_mul_by_non_residue": Operation(
        lambda v2, v1: v2 - v1.mul_by_non_residue(), FQ2_MUL, (FQ6, FQ6), (FQ6,)
    ),
    "fq6_inverse": Operation(lambda v: v.inverse(), FQ6_INVERSE, (FQ6,), (FQ6,)),
    "fq12_from_norm_inverse": Operation(fq12_from_norm_inverse, 2 * FQ6_MUL, (FQ12, FQ6), (FQ12,)),
    # Twisted curve
    "fq2_neg": Operation(lambda x: -x, LOAD, (FQ2,), (FQ2,)),
    "g2_projective_from_affine": Operation(
        lambda x, y: G2HomProjective.from_affine((x, y)), LOAD, (FQ2, FQ2), (FQ2, FQ2, FQ2)
    ),
    "g2_mul_by_char": Operation(lambda x, y: mul_by_char((x, y)), G2_MUL_BY_CHAR, (FQ2, FQ2), (FQ2, FQ2)),
    "g2_doubling_step": Operation(g2_doubling_step, G2_DOUBLING_STEP, (FQ2,) * 3, (FQ2,) * 6),
    "g2_addition_step": Operation(g2_addition_step, G2_ADDITION_STEP, (FQ2,) * 5, (FQ2,) * 6),
    # Line evaluation
    "ell_scale_coefficients": Operation(ell_scale_coefficients, 2 * FQ2_MUL_BY_FQ, (FQ2, FQ2, FQ, FQ), (FQ2, FQ2)),
    "fq12_mul_by_034_a": Operation(lambda f, c0: f.c0.mul_by_fp2(c0), 3 * FQ2_MUL, (FQ12, FQ2), (FQ6,)),
    "fq12_mul_by_034_b": Operation(lambda f, d0, d1: f.c1.mul_by_01(d0, d1), FQ6_MUL_BY_01, (FQ12, FQ2, FQ2), (FQ6,)),
    "fq12_mul_by_034_e": Operation(
        lambda f, c0, d0, d1: (f.c0 + f.c1).mul_by_01(c0 + d0, d1), FQ6_MUL_BY_01, (FQ12, FQ2, FQ2, FQ2), (FQ6,)
    ),
    "fq12_mul_by_034_combine": Operation(fq12_mul_by_034_combine, FQ2_MUL, (FQ6, FQ6, FQ6), (FQ12,)),
    # Loaders
    "load_g1": Operation(lambda context, name: context.g1(name), LOAD, (), (FQ, FQ), uses_context=True),
    "load_g2": Operation(lambda context, name: context.g2(name), LOAD, (), (FQ2, FQ2), uses_context=True),
    "load_gamma_coefficients": Operation(
        lambda context, k: context.gamma_coefficients(k), LOAD, (), (FQ2,) * 3, uses_context=True
    ),
    "load_delta_coefficients": Operation(
        lambda context, k: context.delta_coefficients(k), LOAD, (), (FQ2,) * 3, uses_context=True
    ),
    # Input preparation
    "g1_zero": Operation(g1_zero, LOAD, (), (G1,)),
    "g1_double": Operation(double, G1_DOUBLE, (G1,), (G1,)),
    "g1_add_public_input_bit": Operation(g1_add_public_input_bit, G1_ADD, (G1,), (G1,), uses_context=True),
    "g1_add_gamma_abc": Operation(g1_add_gamma_abc, G1_ADD, (G1,), (G1,), uses_context=True),
    "g1_normalize": Operation(g1_normalize, FQ_INVERSE + 2, (G1,), (FQ, FQ)),
}
