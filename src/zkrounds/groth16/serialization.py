"""JSON serialization of verification states.

Field elements are written as lists of canonical integers, scratch memories as the list of their slots, `None` for
unset slots. The JSON encoding sorts the keys, so that equal states have identical encodings.
"""

import json

from py_ecc.fields import optimized_bn128_FQ as OptimizedFq

from zkrounds.bilinear_pairings.bn254.fields import Fq6, Fq12
from zkrounds.fields.fq2 import Fq, fq2_from_list, fq2_to_list
from zkrounds.groth16.model.groth16 import Proof
from zkrounds.groth16.verification_state import Phase, VerificationState
from zkrounds.rounds.scratch_memory import MemoryKind, ScratchMemories, ScratchMemory, ScratchMemoryError
from zkrounds.util.utility_parameters import RoundParameters

ENCODERS = {
    MemoryKind.G1: lambda point: [int(coordinate.n) for coordinate in point],
    MemoryKind.FQ: lambda x: int(x.n),
    MemoryKind.FQ2: fq2_to_list,
    MemoryKind.FQ6: lambda x: x.to_list(),
    MemoryKind.FQ12: lambda x: x.to_list(),
}

DECODERS = {
    MemoryKind.G1: lambda coordinates: tuple(OptimizedFq(coordinate) for coordinate in coordinates),
    MemoryKind.FQ: Fq,
    MemoryKind.FQ2: fq2_from_list,
    MemoryKind.FQ6: Fq6.from_list,
    MemoryKind.FQ12: Fq12.from_list,
}


def g1_to_list(point) -> list[int]:
    return [int(point[0].n), int(point[1].n)]


def g1_from_list(coordinates: list[int]):
    if len(coordinates) != 2:
        msg = f"A point of G1 has two coordinates: {coordinates}"
        raise ValueError(msg)
    return Fq(coordinates[0]), Fq(coordinates[1])


def g2_to_list(point) -> list[list[int]]:
    return [fq2_to_list(point[0]), fq2_to_list(point[1])]


def g2_from_list(coordinates: list[list[int]]):
    if len(coordinates) != 2:
        msg = f"A point of G2 has two coordinates: {coordinates}"
        raise ValueError(msg)
    return fq2_from_list(coordinates[0]), fq2_from_list(coordinates[1])


def memory_to_dict(memory: ScratchMemory) -> dict:
    encode = ENCODERS[memory.kind]
    return {
        "capacity": memory.capacity,
        "frame": memory.frame,
        "slots": [None if slot is None else encode(slot) for slot in memory.slots],
    }


def memory_from_dict(kind: MemoryKind, data: dict) -> ScratchMemory:
    decode = DECODERS[kind]
    slots = [None if slot is None else decode(slot) for slot in data["slots"]]
    return ScratchMemory(kind, data["capacity"], slots, data["frame"])


def state_to_dict(state: VerificationState) -> dict:
    """Convert `state` to a dictionary of JSON-compatible values."""
    return {
        "public_inputs": list(state.public_inputs),
        "proof": {
            "a": g1_to_list(state.proof.a),
            "b": g2_to_list(state.proof.b),
            "c": g1_to_list(state.proof.c),
        },
        "phase": state.phase.name,
        "round": state.round,
        "phase_round": state.phase_round,
        "memories": {memory.kind.value: memory_to_dict(memory) for memory in state.memories or []},
        "prepared_inputs": None if state.prepared_inputs is None else g1_to_list(state.prepared_inputs),
        "accumulator": None if state.accumulator is None else state.accumulator.to_list(),
        "verdict": state.verdict,
        "parameters": {
            "round_budget": state.parameters.round_budget,
            "scalar_bits": state.parameters.scalar_bits,
        },
    }


def state_from_dict(data: dict) -> VerificationState:
    """Construct a verification state from the output of `state_to_dict`.

    Raises:
        ValueError: If `data` is malformed.
    """
    try:
        proof = Proof(
            a=g1_from_list(data["proof"]["a"]),
            b=g2_from_list(data["proof"]["b"]),
            c=g1_from_list(data["proof"]["c"]),
        )
        memories = ScratchMemories.from_memories(
            [memory_from_dict(MemoryKind(kind), memory) for kind, memory in data["memories"].items()]
        )
        return VerificationState(
            public_inputs=[int(public_input) for public_input in data["public_inputs"]],
            proof=proof,
            phase=Phase[data["phase"]],
            round=int(data["round"]),
            phase_round=int(data["phase_round"]),
            memories=memories,
            prepared_inputs=None if data["prepared_inputs"] is None else g1_from_list(data["prepared_inputs"]),
            accumulator=None if data["accumulator"] is None else Fq12.from_list(data["accumulator"]),
            verdict=data["verdict"],
            parameters=RoundParameters(
                round_budget=int(data["parameters"]["round_budget"]),
                scalar_bits=int(data["parameters"]["scalar_bits"]),
            ),
        )
    except (AttributeError, KeyError, TypeError, ScratchMemoryError) as e:
        msg = f"Malformed verification state: {e}"
        raise ValueError(msg) from e


def state_to_json(state: VerificationState) -> str:
    return json.dumps(state_to_dict(state), sort_keys=True)


def state_from_json(data: str) -> VerificationState:
    """Construct a verification state from the output of `state_to_json`.

    Raises:
        ValueError: If `data` is not a valid encoding of a verification state.
    """
    return state_from_dict(json.loads(data))
