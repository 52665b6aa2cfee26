import json
import logging
from dataclasses import dataclass

import pytest
from py_ecc.bn128 import G1, G2, curve_order, multiply

from zkrounds.fields.fq2 import fq2, fq2_to_list
from zkrounds.groth16.model.groth16 import PreparedVerifyingKey, Proof, VerifyingKey, verify_groth16
from zkrounds.groth16.serialization import state_from_json, state_to_json
from zkrounds.groth16.storage import (
    InMemoryProofStorage,
    LeaseRequiredError,
    StateLockedError,
    run_verification,
)
from zkrounds.groth16.verification_state import Phase, VerificationState
from zkrounds.groth16.verifier import (
    ComputationError,
    ComputationNotFinishedError,
    Continue,
    Done,
    Error,
    advance,
    full_verification,
    verdict_of,
)


@dataclass
class Bn254:
    r = curve_order

    # Dummy ZKP
    # Generated with secrets.randbelow(r - 1) + 1
    A_ = 9414387372404498102853567155476306458004327620101616290123471138004520437810
    B_ = 16203412698163624580329577393592347306214302347616087286355270815224227716263

    # Dummy CRS
    # Generated with secrets.randbelow(r - 1) + 1
    alpha_ = 12790544464366708614940994215014625841059650806301063465359886873486625690547
    beta_ = 5703396574432322187740701285564343485982931931825512168376677487234446722993
    gamma_ = 19343400274038067941958661494186555637424382984868274330750039783384953010645
    delta_ = 2254455857535174888113934810625770138551286599034257880685085874098503964843

    alpha = multiply(G1, alpha_)
    beta = multiply(G2, beta_)
    gamma = multiply(G2, gamma_)
    delta = multiply(G2, delta_)

    # Generated with secrets.randbelow(r - 1) + 1
    dlog_gamma_abc = [
        7765330906204304295426790574908159941776455820436175505039457880771513289924,
        16701720065583381165641451645092405804313763750254333987822772249896328625776,
        20058876863170189709897912667477024643085019141260655486881773835332888450386,
    ]
    gamma_abc = [multiply(G1, dlog) for dlog in dlog_gamma_abc]

    vk = VerifyingKey(alpha, beta, gamma, delta, gamma_abc)
    prepared_vk = vk.prepare()

    pub_statements = [
        # Generated with secrets.randbelow(r)
        [
            3060811274857224904833047709398271967974074288386860351197236696152656573180,
            7390874479047017110851549424990220824522965971102888510629230366504674671506,
        ],
        # Edge cases
        [0, r - 1],
    ]

    # Public inputs for which the prepared inputs are the point at infinity
    pub_statement_at_infinity = [
        1,
        (-(dlog_gamma_abc[0] + dlog_gamma_abc[1]) * pow(dlog_gamma_abc[2], -1, r)) % r,
    ]

    test_data = {
        "test_valid_proof": [{"public_inputs": pub} for pub in pub_statements],
        "test_invalid_proof": [
            {"tampered": "a"},
            {"tampered": "a_bit_flip"},
            {"tampered": "b"},
            {"tampered": "b_bit_flip"},
            {"tampered": "c"},
            {"tampered": "c_bit_flip"},
            {"tampered": "public_input"},
        ],
    }


def generate_test_cases(test_name):
    # Parse and return config and the test_data for each config
    configurations = [Bn254]

    return [
        (config, *test_data.values())
        for config in configurations
        if test_name in config.test_data
        for test_data in config.test_data[test_name]
    ]


def generate_proof(config, public_inputs):
    """Compute C such that e(A, B) * e(prepared_inputs, -gamma) * e(C, -delta) = e(alpha, beta)."""
    r = config.r
    prepared_inputs = config.dlog_gamma_abc[0]
    for public_input, dlog in zip(public_inputs, config.dlog_gamma_abc[1:]):
        prepared_inputs += public_input * dlog
    c = config.A_ * config.B_ - config.alpha_ * config.beta_ - prepared_inputs * config.gamma_
    c = c * pow(config.delta_, -1, r)
    return Proof(multiply(G1, config.A_), multiply(G2, config.B_), multiply(G1, c % r))


def tamper(config, tampered):
    public_inputs = list(config.pub_statements[0])
    proof = generate_proof(config, public_inputs)
    match tampered:
        case "a":
            proof = Proof(multiply(G1, config.A_ + 1), proof.b, proof.c)
        case "a_bit_flip":
            x, y = proof.a
            proof = Proof((type(x)(x.n ^ 1), y), proof.b, proof.c)
        case "b":
            proof = Proof(proof.a, multiply(G2, config.B_ + 1), proof.c)
        case "b_bit_flip":
            x, y = proof.b
            x_c0, x_c1 = fq2_to_list(x)
            proof = Proof(proof.a, (fq2(x_c0 ^ 1, x_c1), y), proof.c)
        case "c":
            proof = Proof(proof.a, proof.b, multiply(G1, 3))
        case "c_bit_flip":
            x, y = proof.c
            proof = Proof(proof.a, proof.b, (x, type(y)(y.n ^ 4)))
        case "public_input":
            public_inputs[1] = (public_inputs[1] + 1) % config.r
    return proof, public_inputs


@pytest.mark.parametrize(("config", "public_inputs"), generate_test_cases("test_valid_proof"))
def test_valid_proof(config, public_inputs, round_parameters, caplog):
    proof = generate_proof(config, public_inputs)

    assert verify_groth16(config.prepared_vk, proof, public_inputs)
    with caplog.at_level(logging.INFO, logger="zkrounds.groth16.verifier"):
        assert full_verification(proof, public_inputs, config.prepared_vk, round_parameters)
    assert "verdict True" in caplog.text


@pytest.mark.parametrize(("config", "tampered"), generate_test_cases("test_invalid_proof"))
def test_invalid_proof(config, tampered, round_parameters):
    proof, public_inputs = tamper(config, tampered)

    assert not verify_groth16(config.prepared_vk, proof, public_inputs)
    assert not full_verification(proof, public_inputs, config.prepared_vk, round_parameters)


@pytest.mark.parametrize("config", [Bn254])
def test_prepared_inputs_at_infinity(config, round_parameters):
    public_inputs = config.pub_statement_at_infinity
    proof = generate_proof(config, public_inputs)
    vk = config.prepared_vk

    assert not verify_groth16(vk, proof, public_inputs)

    state = VerificationState.new(proof, public_inputs, vk, round_parameters)
    n_rounds = vk.prepare_inputs_rounds(round_parameters)
    results = [advance(state, round_index, vk, round_parameters) for round_index in range(n_rounds)]
    assert all(isinstance(result, Continue) for result in results[:-1])
    assert results[-1] == Done(False)
    assert state.phase is Phase.DONE
    assert state.round == vk.prepare_inputs_rounds(round_parameters)
    assert verdict_of(state) is False


@pytest.mark.parametrize("config", [Bn254])
def test_round_sequencing(config, round_parameters):
    public_inputs = config.pub_statements[0]
    proof = generate_proof(config, public_inputs)
    vk = config.prepared_vk
    state = VerificationState.new(proof, public_inputs, vk, round_parameters)
    encoded = state_to_json(state)

    with pytest.raises(ComputationNotFinishedError):
        verdict_of(state)
    for round_index in (1, -1, 5):
        assert advance(state, round_index, vk, round_parameters) == Error(ComputationError.ROUND_MISMATCH)
        assert state_to_json(state) == encoded

    results = []
    while not state.is_done():
        results.append(advance(state, state.round, vk, round_parameters))
    assert len(results) == vk.rounds_total(round_parameters)
    assert all(isinstance(result, Continue) for result in results[:-1])
    assert results[-1] == Done(True)
    assert state.round == vk.rounds_total(round_parameters)

    encoded = state_to_json(state)
    assert advance(state, state.round, vk, round_parameters) == Error(ComputationError.COMPUTATION_FINISHED)
    assert advance(state, 0, vk, round_parameters) == Error(ComputationError.COMPUTATION_FINISHED)
    assert state_to_json(state) == encoded
    assert verdict_of(state) is True


@pytest.mark.parametrize("config", [Bn254])
def test_phase_boundaries(config, round_parameters):
    public_inputs = config.pub_statements[1]
    proof = generate_proof(config, public_inputs)
    vk = config.prepared_vk
    state = VerificationState.new(proof, public_inputs, vk, round_parameters)

    for round_index in range(vk.prepare_inputs_rounds(round_parameters)):
        assert state.phase is Phase.PREPARING_INPUTS
        advance(state, round_index, vk, round_parameters)
    assert state.phase is Phase.MILLER_LOOP
    assert state.phase_round == 0
    assert state.prepared_inputs is not None

    # The state survives the encoding in the middle of a phase
    advance(state, state.round, vk, round_parameters)
    encoded = state_to_json(state)
    decoded = state_from_json(encoded)
    assert state_to_json(decoded) == encoded
    assert decoded.phase is Phase.MILLER_LOOP
    assert decoded.phase_round == 1


@pytest.mark.parametrize("config", [Bn254])
def test_public_inputs_validation(config, round_parameters):
    proof = generate_proof(config, config.pub_statements[0])
    vk = config.prepared_vk
    for public_inputs in ([1], [1, 2, 3], [1, config.r]):
        with pytest.raises(ValueError):
            VerificationState.new(proof, public_inputs, vk, round_parameters)
        with pytest.raises(ValueError):
            verify_groth16(vk, proof, public_inputs)


@pytest.mark.parametrize("config", [Bn254])
def test_proof_at_infinity(config):
    with pytest.raises(ValueError):
        Proof(None, config.beta, config.alpha)


@pytest.mark.parametrize("config", [Bn254])
def test_prepared_verifying_key_validation(config):
    vk = config.prepared_vk
    assert vk.n_public_inputs == 2
    with pytest.raises(ValueError):
        PreparedVerifyingKey((), vk.gamma_g2_neg_pc, vk.delta_g2_neg_pc, vk.alpha_g1_beta_g2)
    with pytest.raises(ValueError):
        PreparedVerifyingKey(vk.gamma_abc_g1, vk.gamma_g2_neg_pc[1:], vk.delta_g2_neg_pc, vk.alpha_g1_beta_g2)


@pytest.mark.parametrize("encoded", ["{}", json.dumps({"proof": {"a": [1]}})])
def test_malformed_state(encoded):
    with pytest.raises(ValueError):
        state_from_json(encoded)


@pytest.mark.parametrize("config", [Bn254])
@pytest.mark.parametrize(
    ("key", "value"),
    [
        ("memories", []),
        ("proof", []),
        ("parameters", {"round_budget": 0, "scalar_bits": 254}),
    ],
)
def test_malformed_state_field(config, key, value):
    public_inputs = config.pub_statements[0]
    state = VerificationState.new(generate_proof(config, public_inputs), public_inputs, config.prepared_vk)
    data = json.loads(state_to_json(state))
    data[key] = value
    with pytest.raises(ValueError):
        state_from_json(json.dumps(data))


@pytest.mark.parametrize("config", [Bn254])
def test_parameters_mismatch(config, round_parameters):
    public_inputs = config.pub_statements[0]
    vk = config.prepared_vk
    state = VerificationState.new(generate_proof(config, public_inputs), public_inputs, vk, round_parameters)
    other_parameters = round_parameters.with_overrides(round_budget=round_parameters.round_budget + 1)

    advance(state, 0, vk, round_parameters)
    encoded = state_to_json(state)
    assert state_from_json(encoded).parameters == round_parameters
    assert advance(state, 1, vk, other_parameters) == Error(ComputationError.PARAMETERS_MISMATCH)
    assert state_to_json(state) == encoded

    storage = InMemoryProofStorage()
    storage.submit("proof", state)
    with pytest.raises(ValueError):
        run_verification(storage, "proof", vk, other_parameters)
    assert storage.raw("proof") == encoded
    assert run_verification(storage, "proof", vk, round_parameters)


@pytest.mark.parametrize("config", [Bn254])
def test_storage(config, round_parameters):
    public_inputs = config.pub_statements[0]
    proof = generate_proof(config, public_inputs)
    vk = config.prepared_vk
    storage = InMemoryProofStorage()
    storage.submit("proof", VerificationState.new(proof, public_inputs, vk, round_parameters))

    with pytest.raises(ValueError):
        storage.submit("proof", VerificationState.new(proof, public_inputs, vk, round_parameters))
    with pytest.raises(KeyError), storage.lease("unknown"):
        pass
    with pytest.raises(LeaseRequiredError):
        storage.save("proof", storage.load("proof"))
    with storage.lease("proof"):
        with pytest.raises(StateLockedError), storage.lease("proof"):
            pass
        with pytest.raises(StateLockedError):
            storage.reclaim("proof")
    with pytest.raises(ComputationNotFinishedError):
        storage.reclaim("proof")

    assert run_verification(storage, "proof", vk, round_parameters)
    assert storage.load("proof").round == vk.rounds_total(round_parameters)
    assert run_verification(storage, "proof", vk, round_parameters)
    assert storage.reclaim("proof")
    assert "proof" not in storage


@pytest.mark.parametrize("config", [Bn254])
def test_storage_sequencing_error_leaves_state(config, round_parameters):
    public_inputs = config.pub_statements[0]
    vk = config.prepared_vk
    storage = InMemoryProofStorage()
    storage.submit(
        "proof", VerificationState.new(generate_proof(config, public_inputs), public_inputs, vk, round_parameters)
    )
    encoded = storage.raw("proof")

    with storage.lease("proof"):
        state = storage.load("proof")
        assert advance(state, 3, vk, round_parameters) == Error(ComputationError.ROUND_MISMATCH)
        storage.save("proof", state)
    assert storage.raw("proof") == encoded
