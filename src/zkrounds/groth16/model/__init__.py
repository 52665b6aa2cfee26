"""model package.

This package provides the Groth16 proof and verifying key types, and a verifier running in a single call.

Modules:
    - groth16.
"""
