"""Round programs of the Groth16 verification over BN254.

The programs are built once per `RoundParameters` (and number of public inputs) and cached. The verification runs
three phase programs in sequence: the input preparation, the Miller loop and the final exponentiation. The final
exponentiation calls the nested computations of the inversion in F_q^12 and of the exponentiation by `-X`.
"""

from functools import lru_cache

from zkrounds.bilinear_pairings.bn254.parameters import ATE_LOOP_COUNT, X_IS_NEGATIVE, X_NAF
from zkrounds.rounds.program import Computation, ComputationBuilder
from zkrounds.rounds.scratch_memory import MemoryKind
from zkrounds.util.utility_parameters import RoundParameters, default_parameters


@lru_cache
def inverse_fq12_computation(parameters: RoundParameters = default_parameters) -> Computation:
    """Inversion in F_q^12 through the norm over F_q^6: `f^-1 = (c0 * n^-1, -c1 * n^-1)`, `n = c0^2 - v * c1^2`."""
    builder = ComputationBuilder("inverse_fq12", parameters.round_budget)
    builder.parameter("f", MemoryKind.FQ12)
    builder.step("fq12_norm_c1_square", ["f"], ["v1"])
    builder.step("fq12_norm_c0_square", ["f"], ["v0"])
    builder.step("fq6_sub_mul_by_non_residue", ["v0", "v1"], ["v0"])
    builder.step("fq6_inverse", ["v0"], ["v0"])
    builder.step("fq12_from_norm_inverse", ["f", "v0"], ["f"])
    builder.returns("f")
    return builder.build()


@lru_cache
def exp_by_neg_x_computation(parameters: RoundParameters = default_parameters) -> Computation:
    """Exponentiation by `-X` in the cyclotomic subgroup, driven by the non-adjacent form of `X`."""
    builder = ComputationBuilder("exp_by_neg_x", parameters.round_budget)
    builder.parameter("f", MemoryKind.FQ12)
    builder.step("fq12_conjugate", ["f"], ["f_inverse"])
    builder.step("fq12_one", [], ["res"])
    found_nonzero = False
    for digit in X_NAF:
        if found_nonzero:
            builder.step("fq12_cyclotomic_square", ["res"], ["res"])
        if digit != 0:
            found_nonzero = True
            builder.step("fq12_mul", ["res", "f" if digit == 1 else "f_inverse"], ["res"])
    if not X_IS_NEGATIVE:
        builder.step("fq12_conjugate", ["res"], ["res"])
    builder.returns("res")
    return builder.build()


@lru_cache
def final_exponentiation_computation(parameters: RoundParameters = default_parameters) -> Computation:
    """Final exponentiation: easy part, then the hard part with three exponentiations by `-X`."""
    inverse_fq12 = inverse_fq12_computation(parameters)
    exp_by_neg_x = exp_by_neg_x_computation(parameters)

    builder = ComputationBuilder("final_exponentiation", parameters.round_budget)
    builder.parameter("f", MemoryKind.FQ12)

    # Easy part: r = f^((q^6 - 1)(q^2 + 1))
    builder.step("fq12_conjugate", ["f"], ["f1"])
    builder.call(inverse_fq12, ["f"], ["f2"])
    builder.step("fq12_mul", ["f1", "f2"], ["r"])
    builder.step("fq12_frobenius_map", ["r"], ["f2"], immediates=(2,))
    builder.step("fq12_mul", ["f2", "r"], ["r"])

    # Hard part
    builder.call(exp_by_neg_x, ["r"], ["y0"])
    builder.step("fq12_cyclotomic_square", ["y0"], ["y1"])
    builder.step("fq12_cyclotomic_square", ["y1"], ["y2"])
    builder.step("fq12_mul", ["y2", "y1"], ["y3"])
    builder.call(exp_by_neg_x, ["y3"], ["y4"])
    builder.step("fq12_cyclotomic_square", ["y4"], ["y5"])
    builder.call(exp_by_neg_x, ["y5"], ["y6"])
    builder.step("fq12_conjugate", ["y3"], ["y3"])
    builder.step("fq12_conjugate", ["y6"], ["y6"])
    builder.step("fq12_mul", ["y6", "y4"], ["y7"])
    builder.step("fq12_mul", ["y7", "y3"], ["y8"])
    builder.step("fq12_mul", ["y8", "y1"], ["y9"])
    builder.step("fq12_mul", ["y8", "y4"], ["y10"])
    builder.step("fq12_mul", ["y10", "r"], ["y11"])
    builder.step("fq12_frobenius_map", ["y9"], ["y12"], immediates=(1,))
    builder.step("fq12_mul", ["y12", "y11"], ["y13"])
    builder.step("fq12_frobenius_map", ["y8"], ["y8"], immediates=(2,))
    builder.step("fq12_mul", ["y8", "y13"], ["y14"])
    builder.step("fq12_conjugate", ["r"], ["r"])
    builder.step("fq12_mul", ["r", "y9"], ["y15"])
    builder.step("fq12_frobenius_map", ["y15"], ["y15"], immediates=(3,))
    builder.step("fq12_mul", ["y15", "y14"], ["y16"])
    builder.returns("y16")
    return builder.build()


class _MillerLoopBuilder:
    """Emit the steps of the Miller loop over the pairs `(A, B)`, `(prepared_inputs, -gamma)`, `(C, -delta)`.

    The line coefficients of `B` are computed by the doubling and addition steps, those of `-gamma` and `-delta` are
    loaded from the verifying key.
    """

    def __init__(self, builder: ComputationBuilder):
        self.builder = builder
        self.k = 0

    def ell(self, coefficients: tuple[str, str, str], point: tuple[str, str]):
        c0, c1, c2 = coefficients
        p_x, p_y = point
        step = self.builder.step
        step("ell_scale_coefficients", [c0, c1, p_x, p_y], ["l0", "l1"])
        step("fq12_mul_by_034_a", ["f", "l0"], ["t_a"])
        step("fq12_mul_by_034_b", ["f", "l1", c2], ["t_b"])
        step("fq12_mul_by_034_e", ["f", "l0", "l1", c2], ["t_e"])
        step("fq12_mul_by_034_combine", ["t_a", "t_b", "t_e"], ["f"])

    def ells(self, step_op: str, step_reads: list[str], immediates: tuple = ()):
        """Update the twisted point, then multiply `f` by the three line evaluations of the current index."""
        coefficients = ("d0", "d1", "d2")
        self.builder.step(step_op, step_reads, ["r_x", "r_y", "r_z", *coefficients], immediates)
        self.ell(coefficients, ("a_x", "a_y"))
        static = ("s0", "s1", "s2")
        self.builder.step("load_gamma_coefficients", [], list(static), immediates=(self.k,))
        self.ell(static, ("p_x", "p_y"))
        self.builder.step("load_delta_coefficients", [], list(static), immediates=(self.k,))
        self.ell(static, ("c_x", "c_y"))
        self.k += 1


@lru_cache
def miller_loop_computation(parameters: RoundParameters = default_parameters) -> Computation:
    """Miller loop of the Groth16 verification equation `e(A, B) * e(prepared_inputs, -gamma) * e(C, -delta)`."""
    builder = ComputationBuilder("miller_loop", parameters.round_budget)
    step = builder.step
    step("load_g1", [], ["a_x", "a_y"], immediates=("a",))
    step("load_g1", [], ["p_x", "p_y"], immediates=("prepared_inputs",))
    step("load_g1", [], ["c_x", "c_y"], immediates=("c",))
    step("load_g2", [], ["q_x", "q_y"], immediates=("b",))
    step("fq2_neg", ["q_y"], ["q_neg_y"])
    step("g2_projective_from_affine", ["q_x", "q_y"], ["r_x", "r_y", "r_z"])
    step("fq12_one", [], ["f"])

    loop = _MillerLoopBuilder(builder)
    n_digits = len(ATE_LOOP_COUNT)
    for i in range(n_digits - 1, 0, -1):
        if i != n_digits - 1:
            step("fq12_square", ["f"], ["f"])
        loop.ells("g2_doubling_step", ["r_x", "r_y", "r_z"])
        digit = ATE_LOOP_COUNT[i - 1]
        if digit != 0:
            loop.ells("g2_addition_step", ["r_x", "r_y", "r_z", "q_x", "q_y" if digit == 1 else "q_neg_y"])

    if X_IS_NEGATIVE:
        step("fq12_conjugate", ["f"], ["f"])

    step("g2_mul_by_char", ["q_x", "q_y"], ["q1_x", "q1_y"])
    step("g2_mul_by_char", ["q1_x", "q1_y"], ["q2_x", "q2_y"])
    if X_IS_NEGATIVE:
        step("fq2_neg", ["r_y"], ["r_y"])
    step("fq2_neg", ["q2_y"], ["q2_y"])
    loop.ells("g2_addition_step", ["r_x", "r_y", "r_z", "q1_x", "q1_y"])
    loop.ells("g2_addition_step", ["r_x", "r_y", "r_z", "q2_x", "q2_y"])
    builder.returns("f")
    return builder.build()


@lru_cache
def prepare_inputs_computation(n_public_inputs: int, parameters: RoundParameters = default_parameters) -> Computation:
    """Input preparation `gamma_abc[0] + sum_i public_input[i] * gamma_abc[i + 1]`.

    The multi-scalar multiplication shares the doublings between the public inputs and adds `gamma_abc[i + 1]` when
    the current bit of the `i`-th public input is set. Every bit costs the same, so the number of rounds only depends
    on the number of public inputs.
    """
    if n_public_inputs < 0:
        msg = f"The number of public inputs must be non-negative: {n_public_inputs}"
        raise ValueError(msg)
    builder = ComputationBuilder("prepare_inputs", parameters.round_budget)
    builder.step("g1_zero", [], ["acc"])
    if n_public_inputs > 0:
        for bit in reversed(range(parameters.scalar_bits)):
            if bit != parameters.scalar_bits - 1:
                builder.step("g1_double", ["acc"], ["acc"])
            for i in range(n_public_inputs):
                builder.step("g1_add_public_input_bit", ["acc"], ["acc"], immediates=(i, bit))
    builder.step("g1_add_gamma_abc", ["acc"], ["acc"], immediates=(0,))
    builder.step("g1_normalize", ["acc"], ["prepared_x", "prepared_y"])
    builder.returns("prepared_x", "prepared_y")
    return builder.build()


def prepare_inputs_rounds(n_public_inputs: int, parameters: RoundParameters = default_parameters) -> int:
    return prepare_inputs_computation(n_public_inputs, parameters).round_count


def rounds_total(n_public_inputs: int, parameters: RoundParameters = default_parameters) -> int:
    """Number of rounds of a full verification with `n_public_inputs` public inputs."""
    return (
        prepare_inputs_rounds(n_public_inputs, parameters)
        + miller_loop_computation(parameters).round_count
        + final_exponentiation_computation(parameters).round_count
    )


MILLER_LOOP_ROUNDS = miller_loop_computation().round_count
FINAL_EXPONENTIATION_ROUNDS = final_exponentiation_computation().round_count
