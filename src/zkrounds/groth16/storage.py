"""Persistent storage of verification states.

The storage enforces the single-writer rule of the verifications: a state is only loaded and saved under a lease,
and a state can only be leased by one caller at a time. `run_verification` emulates the independent invocations of
a host, each of which loads the state, executes one round and saves the state.
"""

import logging
from contextlib import contextmanager
from typing import Protocol

from zkrounds.groth16.model.groth16 import PreparedVerifyingKey
from zkrounds.groth16.serialization import state_from_json, state_to_json
from zkrounds.groth16.verification_state import VerificationState
from zkrounds.groth16.verifier import Done, Error, advance, verdict_of
from zkrounds.util.utility_parameters import RoundParameters, default_parameters

logger = logging.getLogger(__name__)


class StorageError(Exception):
    """Base class of the storage errors."""


class StateLockedError(StorageError):
    """Raised when leasing a state that is already leased."""


class LeaseRequiredError(StorageError):
    """Raised when saving a state without holding its lease."""


class ProofStorage(Protocol):
    def load(self, proof_id: str) -> VerificationState: ...

    def save(self, proof_id: str, state: VerificationState): ...


class InMemoryProofStorage:
    """Storage of verification states as JSON strings, kept in memory."""

    def __init__(self):
        self._states: dict[str, str] = {}
        self._leases: set[str] = set()

    def __contains__(self, proof_id: str) -> bool:
        return proof_id in self._states

    def _check_exists(self, proof_id: str):
        if proof_id not in self._states:
            msg = f"Unknown proof {proof_id}"
            raise KeyError(msg)

    def submit(self, proof_id: str, state: VerificationState):
        """Store the state of a new verification.

        Raises:
            ValueError: If `proof_id` is already stored.
        """
        if proof_id in self._states:
            msg = f"The proof {proof_id} is already submitted"
            raise ValueError(msg)
        self._states[proof_id] = state_to_json(state)

    @contextmanager
    def lease(self, proof_id: str):
        """Hold the exclusive right to load and save `proof_id` for the duration of the `with` block.

        Raises:
            KeyError: If `proof_id` is unknown.
            StateLockedError: If `proof_id` is already leased.
        """
        self._check_exists(proof_id)
        if proof_id in self._leases:
            logger.warning("Rejected concurrent lease of proof %s", proof_id)
            msg = f"The proof {proof_id} is already leased"
            raise StateLockedError(msg)
        self._leases.add(proof_id)
        try:
            yield self
        finally:
            self._leases.discard(proof_id)

    def load(self, proof_id: str) -> VerificationState:
        self._check_exists(proof_id)
        return state_from_json(self._states[proof_id])

    def save(self, proof_id: str, state: VerificationState):
        """Overwrite the state of `proof_id`.

        Raises:
            LeaseRequiredError: If `proof_id` is not leased.
        """
        if proof_id not in self._leases:
            msg = f"Saving the proof {proof_id} requires its lease"
            raise LeaseRequiredError(msg)
        self._states[proof_id] = state_to_json(state)

    def raw(self, proof_id: str) -> str:
        """Return the stored encoding of `proof_id`."""
        self._check_exists(proof_id)
        return self._states[proof_id]

    def reclaim(self, proof_id: str) -> bool:
        """Delete a finished verification and return its verdict.

        Raises:
            StateLockedError: If `proof_id` is leased.
            ComputationNotFinishedError: If the verification is not finished.
        """
        if proof_id in self._leases:
            msg = f"The proof {proof_id} is leased"
            raise StateLockedError(msg)
        verdict = verdict_of(self.load(proof_id))
        del self._states[proof_id]
        return verdict


def run_verification(
    storage: InMemoryProofStorage,
    proof_id: str,
    verifying_key: PreparedVerifyingKey,
    parameters: RoundParameters = default_parameters,
) -> bool:
    """Drive the verification of `proof_id` to its end, one round per lease, and return the verdict.

    Raises:
        ValueError: If a round is rejected, for instance because `parameters` differ from the parameters the
            verification was created with.
    """
    while True:
        with storage.lease(proof_id):
            state = storage.load(proof_id)
            if state.is_done():
                return verdict_of(state)
            result = advance(state, state.round, verifying_key, parameters)
            storage.save(proof_id, state)
        if isinstance(result, Error):
            msg = f"Round {state.round} of {proof_id} was rejected: {result.error.value}"
            raise ValueError(msg)
        if isinstance(result, Done):
            return result.verdict
