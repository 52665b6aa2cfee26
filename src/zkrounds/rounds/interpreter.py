"""Execution of round programs over scratch memories."""

from zkrounds.rounds.operations import OPERATIONS, RoundContext
from zkrounds.rounds.program import Computation, Round, Step
from zkrounds.rounds.scratch_memory import ScratchMemories


def read_variable(computation: Computation, name: str, memories: ScratchMemories):
    kind, slot = computation.variables[name]
    return memories[kind].read(slot)


def write_variable(computation: Computation, name: str, value, memories: ScratchMemories):
    kind, slot = computation.variables[name]
    memories[kind].write(value, slot)


def load_parameters(computation: Computation, memories: ScratchMemories, values: list):
    """Write `values` to the parameters of `computation` in the current frame."""
    if len(values) != len(computation.parameters):
        msg = f"{computation.name} takes {len(computation.parameters)} parameters, got {len(values)}"
        raise ValueError(msg)
    for name, value in zip(computation.parameters, values):
        write_variable(computation, name, value, memories)


def read_returns(computation: Computation, memories: ScratchMemories) -> list:
    """Read the returns of `computation` from the current frame."""
    return [read_variable(computation, name, memories) for name in computation.returns]


def execute_step(computation: Computation, step: Step, memories: ScratchMemories, context: RoundContext):
    values = [read_variable(computation, name, memories) for name in step.reads]
    outputs = OPERATIONS[step.op](context, step.immediates, values)
    for name, value in zip(step.writes, outputs):
        write_variable(computation, name, value, memories)


def execute_round(computation: Computation, round_index: int, memories: ScratchMemories, context: RoundContext):
    """Execute the round `round_index` of `computation`.

    The variables of `computation` live in the current frame of `memories`. A nested computation runs in the frame
    that follows: its parameters are written when its first round is executed, its returns are copied back to the
    caller and its slots freed when its last round is executed.

    Args:
        computation (Computation): The round program.
        round_index (int): The index of the round to execute.
        memories (ScratchMemories): The scratch memories holding the variables of the previous rounds.
        context (RoundContext): The data available to the loader operations.

    Raises:
        IndexError: If `round_index` is out of range.
        ScratchMemoryError: If the program reads an unset slot or leaves the memory bounds.
        ZeroInversionError: If the computation inverts zero.
    """
    segment, cursor = computation.locate(round_index)
    if isinstance(segment, Round):
        for step in segment.steps:
            execute_step(computation, step, memories, context)
        return

    callee = segment.computation
    is_first = cursor == 0
    is_last = cursor == callee.round_count - 1
    if is_first:
        arguments = [read_variable(computation, name, memories) for name in segment.arguments]

    with memories.frame_scope(computation.frame_sizes):
        if is_first:
            load_parameters(callee, memories, arguments)
        execute_round(callee, cursor, memories, context)
        if is_last:
            results = read_returns(callee, memories)
            memories.free_frame(callee.frame_sizes)

    if is_last:
        for name, value in zip(segment.results, results):
            write_variable(computation, name, value, memories)


def execute(computation: Computation, arguments: list, context: RoundContext | None = None) -> list:
    """Run every round of `computation` on fresh scratch memories and return its returns."""
    memories = ScratchMemories(computation.memory_requirements)
    load_parameters(computation, memories, arguments)
    for round_index in range(computation.round_count):
        execute_round(computation, round_index, memories, context)
    return read_returns(computation, memories)
