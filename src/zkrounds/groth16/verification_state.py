"""The persisted state of a resumable Groth16 verification."""

from dataclasses import dataclass, fields, replace
from enum import Enum

from zkrounds.bilinear_pairings.bn254.fields import Fq12
from zkrounds.bilinear_pairings.bn254.line_functions import G1Affine
from zkrounds.groth16.model.groth16 import PreparedVerifyingKey, Proof, check_public_inputs
from zkrounds.rounds.computations import (
    final_exponentiation_computation,
    miller_loop_computation,
    prepare_inputs_computation,
)
from zkrounds.rounds.program import Computation
from zkrounds.rounds.scratch_memory import ScratchMemories
from zkrounds.util.utility_parameters import RoundParameters, default_parameters


class Phase(Enum):
    PREPARING_INPUTS = 0
    MILLER_LOOP = 1
    FINAL_EXPONENTIATION = 2
    DONE = 3


def phase_computation(phase: Phase, n_public_inputs: int, parameters: RoundParameters) -> Computation:
    """Return the round program of `phase`.

    Raises:
        ValueError: If `phase` is `Phase.DONE`.
    """
    match phase:
        case Phase.PREPARING_INPUTS:
            return prepare_inputs_computation(n_public_inputs, parameters)
        case Phase.MILLER_LOOP:
            return miller_loop_computation(parameters)
        case Phase.FINAL_EXPONENTIATION:
            return final_exponentiation_computation(parameters)
        case _:
            msg = f"The phase {phase.name} has no round program"
            raise ValueError(msg)


@dataclass
class VerificationState:
    """The unit of work persisted between two rounds of a verification.

    Attributes:
        public_inputs (list[int]): The public inputs of the proof.
        proof (Proof): The proof being verified.
        phase (Phase): The current phase.
        round (int): The index of the next round, counted from the beginning of the verification.
        phase_round (int): The index of the next round, counted from the beginning of the current phase.
        memories (ScratchMemories): The scratch memories of the current phase.
        prepared_inputs (G1Affine | None): The output of the input preparation.
        accumulator (Fq12 | None): The output of the Miller loop, then of the final exponentiation.
        verdict (bool | None): The result of the verification, once the phase is `Phase.DONE`.
        parameters (RoundParameters): The parameters the round programs of the verification are built with.
    """

    public_inputs: list[int]
    proof: Proof
    phase: Phase = Phase.PREPARING_INPUTS
    round: int = 0
    phase_round: int = 0
    memories: ScratchMemories | None = None
    prepared_inputs: G1Affine | None = None
    accumulator: Fq12 | None = None
    verdict: bool | None = None
    parameters: RoundParameters = default_parameters

    @classmethod
    def new(
        cls,
        proof: Proof,
        public_inputs: list[int],
        verifying_key: PreparedVerifyingKey,
        parameters: RoundParameters = default_parameters,
    ) -> "VerificationState":
        """Create the state of a new verification.

        Raises:
            ValueError: If the public inputs do not match the verifying key.
        """
        check_public_inputs(public_inputs, verifying_key.n_public_inputs)
        program = phase_computation(Phase.PREPARING_INPUTS, verifying_key.n_public_inputs, parameters)
        return cls(
            public_inputs=list(public_inputs),
            proof=proof,
            memories=ScratchMemories(program.memory_requirements),
            parameters=parameters,
        )

    def copy(self) -> "VerificationState":
        """Return a copy of `self` whose scratch memories can be modified independently."""
        memories = self.memories.snapshot() if self.memories is not None else None
        return replace(self, public_inputs=list(self.public_inputs), memories=memories)

    def commit(self, other: "VerificationState"):
        """Overwrite `self` with the content of `other`."""
        for field in fields(self):
            setattr(self, field.name, getattr(other, field.name))

    def is_done(self) -> bool:
        return self.phase is Phase.DONE
