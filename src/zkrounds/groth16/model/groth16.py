"""Groth16 proofs and verifying keys over BN254."""

from dataclasses import dataclass

from py_ecc.bn128 import add, multiply, neg

from zkrounds.bilinear_pairings.bn254.bn254 import bn254
from zkrounds.bilinear_pairings.bn254.fields import Fq12
from zkrounds.bilinear_pairings.bn254.line_functions import G1Affine, G2Affine, LineCoefficients
from zkrounds.bilinear_pairings.bn254.parameters import N_ELL_COEFFICIENTS, r
from zkrounds.fields.fq2 import ZeroInversionError
from zkrounds.rounds.computations import prepare_inputs_rounds, rounds_total
from zkrounds.util.utility_parameters import RoundParameters, default_parameters


@dataclass(frozen=True)
class Proof:
    """A Groth16 proof.

    Attributes:
        a (G1Affine): The element `A` of the proof, in G1.
        b (G2Affine): The element `B` of the proof, in G2.
        c (G1Affine): The element `C` of the proof, in G1.
    """

    a: G1Affine
    b: G2Affine
    c: G1Affine

    def __post_init__(self):
        for name in ("a", "b", "c"):
            if getattr(self, name) is None:
                msg = f"The element {name} of the proof is the point at infinity"
                raise ValueError(msg)


@dataclass(frozen=True)
class VerifyingKey:
    r"""The verifying key of a Groth16 circuit.

    Attributes:
        alpha_g1 (G1Affine): The element `alpha` of the CRS, in G1.
        beta_g2 (G2Affine): The element `beta` of the CRS, in G2.
        gamma_g2 (G2Affine): The element `gamma` of the CRS, in G2.
        delta_g2 (G2Affine): The element `delta` of the CRS, in G2.
        gamma_abc_g1 (tuple[G1Affine, ...]): The points for which the verifier computes
                gamma_abc[0] + \sum_{i >= 1} pub[i-1] * gamma_abc[i]
            where pub[i] is the i-th public input.
    """

    alpha_g1: G1Affine
    beta_g2: G2Affine
    gamma_g2: G2Affine
    delta_g2: G2Affine
    gamma_abc_g1: tuple[G1Affine, ...]

    def prepare(self) -> "PreparedVerifyingKey":
        return PreparedVerifyingKey.from_groth16_parameters(
            self.alpha_g1, self.beta_g2, self.gamma_g2, self.delta_g2, self.gamma_abc_g1
        )


@dataclass(frozen=True)
class PreparedVerifyingKey:
    """The data of a verifying key consumed by the verification rounds.

    Attributes:
        gamma_abc_g1 (tuple[G1Affine, ...]): The points combined with the public inputs.
        gamma_g2_neg_pc (tuple[LineCoefficients, ...]): The line coefficients of `-gamma` for the Miller loop.
        delta_g2_neg_pc (tuple[LineCoefficients, ...]): The line coefficients of `-delta` for the Miller loop.
        alpha_g1_beta_g2 (Fq12): The target value `e(alpha, beta)`.
    """

    gamma_abc_g1: tuple[G1Affine, ...]
    gamma_g2_neg_pc: tuple[LineCoefficients, ...]
    delta_g2_neg_pc: tuple[LineCoefficients, ...]
    alpha_g1_beta_g2: Fq12

    def __post_init__(self):
        if len(self.gamma_abc_g1) == 0:
            msg = "gamma_abc_g1 must contain at least one point"
            raise ValueError(msg)
        for name in ("gamma_g2_neg_pc", "delta_g2_neg_pc"):
            if len(getattr(self, name)) != N_ELL_COEFFICIENTS:
                msg = f"{name} must contain {N_ELL_COEFFICIENTS} line coefficients: {len(getattr(self, name))}"
                raise ValueError(msg)

    @classmethod
    def from_groth16_parameters(
        cls,
        alpha_g1: G1Affine,
        beta_g2: G2Affine,
        gamma_g2: G2Affine,
        delta_g2: G2Affine,
        gamma_abc_g1: list[G1Affine],
    ) -> "PreparedVerifyingKey":
        """Precompute the line coefficients of `-gamma` and `-delta` and the target `e(alpha, beta)`."""
        return cls(
            gamma_abc_g1=tuple(gamma_abc_g1),
            gamma_g2_neg_pc=bn254.prepare_g2(neg(gamma_g2)),
            delta_g2_neg_pc=bn254.prepare_g2(neg(delta_g2)),
            alpha_g1_beta_g2=bn254.pairing(alpha_g1, beta_g2),
        )

    @property
    def n_public_inputs(self) -> int:
        return len(self.gamma_abc_g1) - 1

    def prepare_inputs_rounds(self, parameters: RoundParameters = default_parameters) -> int:
        return prepare_inputs_rounds(self.n_public_inputs, parameters)

    def rounds_total(self, parameters: RoundParameters = default_parameters) -> int:
        return rounds_total(self.n_public_inputs, parameters)


def check_public_inputs(public_inputs: list[int], n_public_inputs: int):
    """Check that `public_inputs` holds `n_public_inputs` elements of the scalar field.

    Raises:
        ValueError: If the number of public inputs is wrong or one of them is not in `[0, r)`.
    """
    if len(public_inputs) != n_public_inputs:
        msg = f"Expected {n_public_inputs} public inputs, got {len(public_inputs)}"
        raise ValueError(msg)
    for i, public_input in enumerate(public_inputs):
        if not 0 <= public_input < r:
            msg = f"The public input {i} is not an element of the scalar field: {public_input}"
            raise ValueError(msg)


def prepare_inputs(verifying_key: PreparedVerifyingKey, public_inputs: list[int]) -> G1Affine | None:
    r"""Compute `gamma_abc[0] + \sum_{i >= 1} pub[i-1] * gamma_abc[i]`, `None` for the point at infinity."""
    prepared = verifying_key.gamma_abc_g1[0]
    for public_input, point in zip(public_inputs, verifying_key.gamma_abc_g1[1:]):
        prepared = add(prepared, multiply(point, public_input))
    return prepared


def verify_groth16(verifying_key: PreparedVerifyingKey, proof: Proof, public_inputs: list[int]) -> bool:
    """Verify a Groth16 proof in a single call.

    The verifier checks `e(A, B) * e(prepared_inputs, -gamma) * e(C, -delta) == e(alpha, beta)`. Prepared inputs at
    infinity are rejected, as are Miller loop outputs that cannot be inverted.

    Raises:
        ValueError: If the public inputs do not match the verifying key.
    """
    check_public_inputs(public_inputs, verifying_key.n_public_inputs)
    prepared = prepare_inputs(verifying_key, public_inputs)
    if prepared is None:
        return False
    f = bn254.miller_loop(
        [
            (proof.a, bn254.prepare_g2(proof.b)),
            (prepared, verifying_key.gamma_g2_neg_pc),
            (proof.c, verifying_key.delta_g2_neg_pc),
        ]
    )
    try:
        return bn254.final_exponentiation(f) == verifying_key.alpha_g1_beta_g2
    except ZeroInversionError:
        return False
