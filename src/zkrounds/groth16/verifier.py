"""Resumable Groth16 verifier.

`advance` executes one round of a verification and updates its state. A verification goes through the phases
`PREPARING_INPUTS`, `MILLER_LOOP`, `FINAL_EXPONENTIATION` and `DONE`, each phase running the rounds of its round
program. The state is only updated if the round succeeds: sequencing errors and internal errors leave it untouched.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import TypeAlias

from zkrounds.bilinear_pairings.bn254.line_functions import G1Affine
from zkrounds.fields.fq2 import ZeroInversionError
from zkrounds.groth16.model.groth16 import PreparedVerifyingKey, Proof
from zkrounds.groth16.verification_state import Phase, VerificationState, phase_computation
from zkrounds.rounds.interpreter import execute_round, load_parameters, read_returns
from zkrounds.rounds.scratch_memory import ScratchMemories
from zkrounds.util.utility_parameters import RoundParameters, default_parameters

logger = logging.getLogger(__name__)


class ComputationError(Enum):
    ROUND_MISMATCH = "round_mismatch"
    COMPUTATION_FINISHED = "computation_finished"
    PARAMETERS_MISMATCH = "parameters_mismatch"


class ComputationNotFinishedError(Exception):
    """Raised when reading the verdict of a verification that is not finished."""


@dataclass(frozen=True)
class Continue:
    """The round succeeded and the verification needs more rounds."""


@dataclass(frozen=True)
class Done:
    """The verification is finished."""

    verdict: bool


@dataclass(frozen=True)
class Error:
    """The round was rejected and the state left unchanged."""

    error: ComputationError


RoundResult: TypeAlias = Continue | Done | Error


class VerificationContext:
    """The proof, public inputs and verifying key data read by the loader operations."""

    def __init__(self, state: VerificationState, verifying_key: PreparedVerifyingKey):
        self.state = state
        self.verifying_key = verifying_key

    def g1(self, name: str) -> G1Affine:
        match name:
            case "a":
                return self.state.proof.a
            case "c":
                return self.state.proof.c
            case "prepared_inputs":
                return self.state.prepared_inputs
        msg = f"Unknown G1 element {name}"
        raise KeyError(msg)

    def g2(self, name: str):
        if name != "b":
            msg = f"Unknown G2 element {name}"
            raise KeyError(msg)
        return self.state.proof.b

    def gamma_coefficients(self, k: int):
        return self.verifying_key.gamma_g2_neg_pc[k]

    def delta_coefficients(self, k: int):
        return self.verifying_key.delta_g2_neg_pc[k]

    def public_input(self, i: int) -> int:
        return self.state.public_inputs[i]

    def gamma_abc(self, i: int) -> G1Affine:
        return self.verifying_key.gamma_abc_g1[i]


def _finish(state: VerificationState, verdict: bool) -> Done:
    state.phase = Phase.DONE
    state.memories = ScratchMemories()
    state.verdict = verdict
    return Done(verdict)


def _next_phase(state: VerificationState, phase: Phase, n_public_inputs: int, parameters: RoundParameters):
    logger.debug("Verification enters phase %s at round %d", phase.name, state.round)
    state.phase = phase
    state.phase_round = 0
    state.memories = ScratchMemories(phase_computation(phase, n_public_inputs, parameters).memory_requirements)


def _run_round(
    state: VerificationState, verifying_key: PreparedVerifyingKey, parameters: RoundParameters
) -> Continue | Done:
    n_public_inputs = verifying_key.n_public_inputs
    program = phase_computation(state.phase, n_public_inputs, parameters)
    if state.phase_round == 0 and state.phase is Phase.FINAL_EXPONENTIATION:
        load_parameters(program, state.memories, [state.accumulator])

    execute_round(program, state.phase_round, state.memories, VerificationContext(state, verifying_key))
    state.round += 1
    state.phase_round += 1
    if state.phase_round < program.round_count:
        return Continue()

    results = read_returns(program, state.memories)
    match state.phase:
        case Phase.PREPARING_INPUTS:
            state.prepared_inputs = (results[0], results[1])
            _next_phase(state, Phase.MILLER_LOOP, n_public_inputs, parameters)
        case Phase.MILLER_LOOP:
            state.accumulator = results[0]
            _next_phase(state, Phase.FINAL_EXPONENTIATION, n_public_inputs, parameters)
        case Phase.FINAL_EXPONENTIATION:
            state.accumulator = results[0]
            verdict = state.accumulator == verifying_key.alpha_g1_beta_g2
            logger.info("Verification finished after %d rounds: verdict %s", state.round, verdict)
            return _finish(state, verdict)
    return Continue()


def advance(
    state: VerificationState,
    round_index: int,
    verifying_key: PreparedVerifyingKey,
    parameters: RoundParameters = default_parameters,
) -> RoundResult:
    """Execute the round `round_index` of the verification `state`.

    Args:
        state (VerificationState): The state of the verification, updated in place if the round succeeds.
        round_index (int): The index of the round to execute, which must be `state.round`.
        verifying_key (PreparedVerifyingKey): The verifying key of the circuit.
        parameters (RoundParameters): The parameters the round programs are built with. They must be the
            parameters the verification was created with.

    Returns:
        `Continue()` if more rounds are needed, `Done(verdict)` after the last round, `Error(error)` if the round
        cannot be executed. A computation inverting zero ends the verification with verdict `False`.

    Raises:
        ScratchMemoryError: If the round program reads an unset slot or leaves the memory bounds. The state is left
            unchanged.
    """
    if state.phase is Phase.DONE:
        return Error(ComputationError.COMPUTATION_FINISHED)
    if round_index != state.round:
        logger.debug("Rejected round %d, expected round %d", round_index, state.round)
        return Error(ComputationError.ROUND_MISMATCH)
    if parameters != state.parameters:
        logger.debug("Rejected round %d: the verification was created with %s", round_index, state.parameters)
        return Error(ComputationError.PARAMETERS_MISMATCH)

    working = state.copy()
    try:
        result = _run_round(working, verifying_key, parameters)
    except ZeroInversionError:
        logger.info("Verification failed at round %d: inversion of zero", round_index)
        working = state.copy()
        working.round += 1
        result = _finish(working, False)
    state.commit(working)
    return result


def verdict_of(state: VerificationState) -> bool:
    """Return the verdict of a finished verification.

    Raises:
        ComputationNotFinishedError: If the verification is not finished.
    """
    if state.phase is not Phase.DONE:
        msg = f"The verification is in phase {state.phase.name} at round {state.round}"
        raise ComputationNotFinishedError(msg)
    return state.verdict


def full_verification(
    proof: Proof,
    public_inputs: list[int],
    verifying_key: PreparedVerifyingKey,
    parameters: RoundParameters = default_parameters,
) -> bool:
    """Run every round of the verification of `proof` and return the verdict."""
    state = VerificationState.new(proof, public_inputs, verifying_key, parameters)
    while not state.is_done():
        advance(state, state.round, verifying_key, parameters)
    return verdict_of(state)
