"""Round programs.

A round program (`Computation`) is an immutable sequence of segments. A segment is either a `Round`, a list of steps
whose total cost does not exceed the round budget, or a `Call` of a nested computation, which spans exactly as many
rounds as the nested computation. Programs are built once by `ComputationBuilder`, which assigns a scratch slot to
every variable, checks that every variable is written before it is read, and splits the steps between calls into
rounds with `partition_steps`.
"""

from bisect import bisect_right
from collections.abc import Iterator
from dataclasses import dataclass, field

from zkrounds.rounds.operations import OPERATIONS
from zkrounds.rounds.scratch_memory import MemoryKind


class ProgramError(Exception):
    """Raised when a round program is malformed."""


class RoundBudgetError(ProgramError):
    """Raised when a single step costs more than the round budget."""


@dataclass(frozen=True)
class Step:
    """A micro-operation applied to scratch variables.

    Attributes:
        op (str): The tag of the operation in `OPERATIONS`.
        reads (tuple[str, ...]): The variables passed as inputs.
        writes (tuple[str, ...]): The variables receiving the outputs.
        immediates (tuple): Constant arguments passed before the inputs.
        cost (int): The cost of the operation.
    """

    op: str
    reads: tuple[str, ...]
    writes: tuple[str, ...]
    immediates: tuple = ()
    cost: int = 0


@dataclass(frozen=True)
class Round:
    steps: tuple[Step, ...]

    @property
    def cost(self) -> int:
        return sum(step.cost for step in self.steps)


@dataclass(frozen=True)
class Call:
    """A nested computation.

    Attributes:
        computation (Computation): The nested computation.
        arguments (tuple[str, ...]): The caller variables copied to the parameters of `computation`.
        results (tuple[str, ...]): The caller variables receiving the returns of `computation`.
    """

    computation: "Computation"
    arguments: tuple[str, ...]
    results: tuple[str, ...]


@dataclass(frozen=True, eq=False)
class Computation:
    """An immutable round program.

    Attributes:
        name (str): The name of the computation.
        variables (dict[str, tuple[MemoryKind, int]]): The kind and the slot (relative to the frame of the
            computation) of every variable.
        parameters (tuple[str, ...]): The variables written by the caller before the first round.
        returns (tuple[str, ...]): The variables read by the caller after the last round.
        segments (tuple[Round | Call, ...]): The rounds and nested computations, in execution order.
        offsets (tuple[int, ...]): The index of the first round of each segment.
        round_count (int): The number of rounds of the computation, nested computations included.
        frame_sizes (dict[MemoryKind, int]): The number of slots of each kind used by the computation itself.
        memory_requirements (dict[MemoryKind, int]): The number of slots of each kind needed to run the
            computation, nested computations included.
    """

    name: str
    variables: dict[str, tuple[MemoryKind, int]]
    parameters: tuple[str, ...]
    returns: tuple[str, ...]
    segments: tuple
    offsets: tuple[int, ...]
    round_count: int
    frame_sizes: dict[MemoryKind, int] = field(default_factory=dict)
    memory_requirements: dict[MemoryKind, int] = field(default_factory=dict)

    def kind(self, name: str) -> MemoryKind:
        return self.variables[name][0]

    def slot(self, name: str) -> int:
        return self.variables[name][1]

    def locate(self, round_index: int) -> tuple[Round | Call, int]:
        """Return the segment executing round `round_index` and the index of the round inside the segment.

        Raises:
            IndexError: If `round_index` is not in `[0, round_count)`.
        """
        if not 0 <= round_index < self.round_count:
            msg = f"Round {round_index} out of range for {self.name}: round_count: {self.round_count}"
            raise IndexError(msg)
        position = bisect_right(self.offsets, round_index) - 1
        return self.segments[position], round_index - self.offsets[position]

    def rounds(self) -> Iterator[Round]:
        """Iterate over every round of the computation, descending into nested computations."""
        for segment in self.segments:
            if isinstance(segment, Round):
                yield segment
            else:
                yield from segment.computation.rounds()

    def calls(self) -> Iterator[Call]:
        for segment in self.segments:
            if isinstance(segment, Call):
                yield segment


def partition_steps(steps: list[Step], budget: int) -> tuple[Round, ...]:
    """Split `steps` into rounds of cost at most `budget`, preserving their order.

    Steps are accumulated into the current round while the total cost stays within `budget`. A round is closed as
    soon as the next step would exceed it.

    Args:
        steps (list[Step]): The steps, in execution order.
        budget (int): The maximum cost of a round.

    Returns:
        The tuple of rounds.

    Raises:
        RoundBudgetError: If a step costs more than `budget`.

    Example:
        >>> steps = [Step("fq12_mul", ("a", "b"), ("a",), cost=c) for c in (2, 2, 3, 1)]
        >>> [len(round_.steps) for round_ in partition_steps(steps, 4)]
        [2, 2]
    """
    rounds = []
    current = []
    running_cost = 0
    for step in steps:
        if step.cost > budget:
            msg = f"The step {step.op} costs {step.cost}, more than the round budget {budget}"
            raise RoundBudgetError(msg)
        if current and running_cost + step.cost > budget:
            rounds.append(Round(tuple(current)))
            current = []
            running_cost = 0
        current.append(step)
        running_cost += step.cost
    if current:
        rounds.append(Round(tuple(current)))
    return tuple(rounds)


class ComputationBuilder:
    """Build a `Computation` step by step.

    Usage example:
        >>> builder = ComputationBuilder("square_twice", budget=100)
        >>> builder.parameter("f", MemoryKind.FQ12)
        >>> builder.step("fq12_square", ["f"], ["f"])
        >>> builder.step("fq12_square", ["f"], ["f"])
        >>> builder.returns("f")
        >>> builder.build().round_count
        1
    """

    def __init__(self, name: str, budget: int):
        self.name = name
        self.budget = budget
        self.variables: dict[str, tuple[MemoryKind, int]] = {}
        self.frame_sizes = {kind: 0 for kind in MemoryKind}
        self.parameters: list[str] = []
        self.return_names: list[str] = []
        self.segments: list[Round | Call] = []
        self.pending: list[Step] = []

    def _declare(self, name: str, kind: MemoryKind):
        if name in self.variables:
            if self.variables[name][0] != kind:
                msg = f"{self.name}: variable {name} is a {self.variables[name][0].name}, not a {kind.name}"
                raise ProgramError(msg)
            return
        self.variables[name] = (kind, self.frame_sizes[kind])
        self.frame_sizes[kind] += 1

    def _check_read(self, name: str, kind: MemoryKind):
        if name not in self.variables:
            msg = f"{self.name}: variable {name} is read before being written"
            raise ProgramError(msg)
        if self.variables[name][0] != kind:
            msg = f"{self.name}: variable {name} is a {self.variables[name][0].name}, not a {kind.name}"
            raise ProgramError(msg)

    def parameter(self, name: str, kind: MemoryKind):
        """Declare a parameter, written by the caller before the first round."""
        if self.segments or self.pending:
            msg = f"{self.name}: parameters must be declared before the first step"
            raise ProgramError(msg)
        if name in self.variables:
            msg = f"{self.name}: duplicate parameter {name}"
            raise ProgramError(msg)
        self._declare(name, kind)
        self.parameters.append(name)

    def step(self, op: str, reads: list[str], writes: list[str], immediates: tuple = ()):
        """Append a step applying the operation `op`.

        Raises:
            ProgramError: If `op` is unknown, if the number or the kinds of the variables do not match the
                operation, or if a variable is read before being written.
        """
        if op not in OPERATIONS:
            msg = f"{self.name}: unknown operation {op}"
            raise ProgramError(msg)
        operation = OPERATIONS[op]
        if len(reads) != len(operation.inputs) or len(writes) != len(operation.outputs):
            msg = (
                f"{self.name}: {op} takes {len(operation.inputs)} inputs and {len(operation.outputs)} outputs, "
                f"got {len(reads)} and {len(writes)}"
            )
            raise ProgramError(msg)
        for name, kind in zip(reads, operation.inputs):
            self._check_read(name, kind)
        for name, kind in zip(writes, operation.outputs):
            self._declare(name, kind)
        self.pending.append(Step(op, tuple(reads), tuple(writes), tuple(immediates), operation.cost))

    def _flush(self):
        self.segments.extend(partition_steps(self.pending, self.budget))
        self.pending = []

    def call(self, computation: Computation, arguments: list[str], results: list[str]):
        """Append a call of the nested `computation`, closing the pending round.

        Raises:
            ProgramError: If the arguments or the results do not match the parameters or the returns of
                `computation`.
        """
        if len(arguments) != len(computation.parameters) or len(results) != len(computation.returns):
            msg = f"{self.name}: wrong number of arguments or results in the call of {computation.name}"
            raise ProgramError(msg)
        for name, parameter in zip(arguments, computation.parameters):
            self._check_read(name, computation.kind(parameter))
        for name, returned in zip(results, computation.returns):
            self._declare(name, computation.kind(returned))
        self._flush()
        self.segments.append(Call(computation, tuple(arguments), tuple(results)))

    def returns(self, *names: str):
        for name in names:
            if name not in self.variables:
                msg = f"{self.name}: returned variable {name} is never written"
                raise ProgramError(msg)
        self.return_names = list(names)

    def build(self) -> Computation:
        """Close the pending round and return the computation.

        Raises:
            ProgramError: If the computation has no rounds.
        """
        self._flush()
        offsets = []
        round_count = 0
        memory_requirements = dict(self.frame_sizes)
        for segment in self.segments:
            offsets.append(round_count)
            if isinstance(segment, Round):
                round_count += 1
            else:
                round_count += segment.computation.round_count
                for kind, size in segment.computation.memory_requirements.items():
                    memory_requirements[kind] = max(memory_requirements[kind], self.frame_sizes[kind] + size)
        if round_count == 0:
            msg = f"{self.name}: a computation needs at least one round"
            raise ProgramError(msg)

        return Computation(
            name=self.name,
            variables=dict(self.variables),
            parameters=tuple(self.parameters),
            returns=tuple(self.return_names),
            segments=tuple(self.segments),
            offsets=tuple(offsets),
            round_count=round_count,
            frame_sizes=dict(self.frame_sizes),
            memory_requirements=memory_requirements,
        )
