"""zkrounds: A Python package for verifying Groth16 proofs over BN254 in rounds of bounded cost.

The `zkrounds` package splits the verification of a Groth16 proof into rounds whose cost does not exceed a fixed
budget. Each round is executed by a separate invocation, and the state of the verification is persisted between
invocations. The rounds reproduce the arithmetic of the BN254 optimal Ate pairing exactly: same towers
F_q^2 = F_q[u] / (u^2 + 1), F_q^6 = F_q^2[v] / (v^3 - (9 + u)), F_q^12 = F_q^6[w] / (w^2 - v), same loop digits.

Usage example:
    Verify a Groth16 proof one round at a time:

    >>> from zkrounds.groth16.model.groth16 import Proof, VerifyingKey
    >>> from zkrounds.groth16.verifier import full_verification
    >>>
    >>> prepared_verifying_key = VerifyingKey(
    ...     alpha_g1=alpha_g1,
    ...     beta_g2=beta_g2,
    ...     gamma_g2=gamma_g2,
    ...     delta_g2=delta_g2,
    ...     gamma_abc_g1=gamma_abc_g1,
    ... ).prepare()
    >>> full_verification(Proof(a, b, c), public_inputs, prepared_verifying_key)
    True
"""
