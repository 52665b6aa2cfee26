"""Scratch memory.

A scratch memory is a fixed-capacity array of optional slots, addressed relative to a frame offset. Nested
computations shift the frame by the size of the caller's frame, so that they reuse the same backing array as an
independent scope. Frame shifts are paired through `frame_scope`.
"""

from contextlib import ExitStack, contextmanager
from dataclasses import dataclass, field
from enum import Enum


class MemoryKind(Enum):
    """The type of the values stored in a scratch memory."""

    G1 = "g1"
    FQ = "fq"
    FQ2 = "fq2"
    FQ6 = "fq6"
    FQ12 = "fq12"


class ScratchMemoryError(Exception):
    """Base class of the internal errors of the scratch memories."""


class UninitializedSlotError(ScratchMemoryError):
    """Raised when reading a slot that was never written."""


class FrameError(ScratchMemoryError):
    """Raised when the frame offset would leave `[0, capacity]`."""


class MemoryBoundsError(ScratchMemoryError):
    """Raised when addressing a slot outside the capacity of the memory."""


@dataclass
class ScratchMemory:
    """A frame-addressed slot store for values of a single kind.

    Attributes:
        kind (MemoryKind): The kind of the stored values.
        capacity (int): The number of slots.
        slots (list): The slots, `None` for unset slots.
        frame (int): The frame offset added to every index.
    """

    kind: MemoryKind
    capacity: int
    slots: list = field(default=None)
    frame: int = 0

    def __post_init__(self):
        if self.capacity < 0:
            msg = f"The capacity must be a non-negative integer: capacity: {self.capacity}"
            raise ValueError(msg)
        if self.slots is None:
            self.slots = [None] * self.capacity
        if len(self.slots) != self.capacity:
            msg = f"The number of slots must equal the capacity: slots: {len(self.slots)}, capacity: {self.capacity}"
            raise ValueError(msg)
        if not 0 <= self.frame <= self.capacity:
            msg = f"The frame must be in [0, {self.capacity}]: frame: {self.frame}"
            raise FrameError(msg)

    def _address(self, index: int) -> int:
        address = self.frame + index
        if index < 0 or address >= self.capacity:
            msg = f"Index {index} out of bounds: kind: {self.kind.name}, frame: {self.frame}, capacity: {self.capacity}"
            raise MemoryBoundsError(msg)
        return address

    def write(self, value, index: int):
        self.slots[self._address(index)] = value

    def read(self, index: int):
        """Read the slot `frame + index`.

        Raises:
            UninitializedSlotError: If the slot is unset.
            MemoryBoundsError: If the slot is outside the capacity.
        """
        value = self.slots[self._address(index)]
        if value is None:
            msg = f"Slot {index} is not initialised: kind: {self.kind.name}, frame: {self.frame}"
            raise UninitializedSlotError(msg)
        return value

    def free(self, index: int):
        self.slots[self._address(index)] = None

    def inc_frame(self, k: int):
        if k < 0 or self.frame + k > self.capacity:
            msg = f"Cannot increase the frame by {k}: kind: {self.kind.name}, frame: {self.frame}"
            raise FrameError(msg)
        self.frame += k

    def dec_frame(self, k: int):
        if k < 0 or self.frame - k < 0:
            msg = f"Cannot decrease the frame by {k}: kind: {self.kind.name}, frame: {self.frame}"
            raise FrameError(msg)
        self.frame -= k

    @contextmanager
    def frame_scope(self, k: int):
        """Shift the frame by `k` for the duration of the `with` block."""
        self.inc_frame(k)
        try:
            yield self
        finally:
            self.dec_frame(k)

    def is_empty(self) -> bool:
        return all(slot is None for slot in self.slots)

    def copy(self) -> "ScratchMemory":
        return ScratchMemory(self.kind, self.capacity, list(self.slots), self.frame)


class ScratchMemories:
    """One scratch memory per memory kind."""

    def __init__(self, capacities: dict[MemoryKind, int] | None = None):
        """Initialise empty scratch memories.

        Args:
            capacities (dict[MemoryKind, int] | None): The capacity of each memory. Kinds that are missing get
                capacity zero.
        """
        capacities = capacities or {}
        self.memories = {kind: ScratchMemory(kind, capacities.get(kind, 0)) for kind in MemoryKind}

    @classmethod
    def from_memories(cls, memories: list[ScratchMemory]) -> "ScratchMemories":
        out = cls()
        for memory in memories:
            out.memories[memory.kind] = memory
        return out

    def __getitem__(self, kind: MemoryKind) -> ScratchMemory:
        return self.memories[kind]

    def __iter__(self):
        return iter(self.memories.values())

    def capacities(self) -> dict[MemoryKind, int]:
        return {kind: memory.capacity for kind, memory in self.memories.items()}

    @contextmanager
    def frame_scope(self, sizes: dict[MemoryKind, int]):
        """Shift the frame of every memory by `sizes[kind]` for the duration of the `with` block."""
        with ExitStack() as stack:
            for kind, size in sizes.items():
                stack.enter_context(self.memories[kind].frame_scope(size))
            yield self

    def free_frame(self, sizes: dict[MemoryKind, int]):
        """Unset the first `sizes[kind]` slots of the current frame of every memory."""
        for kind, size in sizes.items():
            for index in range(size):
                self.memories[kind].free(index)

    def snapshot(self) -> "ScratchMemories":
        """Return a copy of the memories. The stored values are immutable and shared."""
        return ScratchMemories.from_memories([memory.copy() for memory in self])

    def is_balanced(self) -> bool:
        """Whether every frame is back at the base of its memory."""
        return all(memory.frame == 0 for memory in self)
