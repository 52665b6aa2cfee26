"""groth16 package.

This package provides a Groth16 verifier over BN254 whose work is split into rounds of bounded cost, executed one
per invocation and persisted in between.

Modules:
    - serialization: JSON encoding of verification states.
    - storage: Persistent storage of verification states with single-writer leases.
    - verification_state: The persisted state of a verification and its phases.
    - verifier: The `advance` state machine.

Subpackages:
    - model: Contains the proof and verifying key types and a verifier running in a single call.

Usage example:
    >>> from zkrounds.groth16.verification_state import VerificationState
    >>> from zkrounds.groth16.verifier import Continue, advance, verdict_of
    >>>
    >>> state = VerificationState.new(proof, public_inputs, prepared_verifying_key)
    >>> while isinstance(advance(state, state.round, prepared_verifying_key), Continue):
    ...     pass
    >>> verdict_of(state)
    True
"""
