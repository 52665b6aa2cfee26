"""rounds package.

This package provides the resumable computation engine: computations are compiled once into round programs whose
rounds cost at most a fixed budget, and executed one round at a time over scratch memories that persist between
rounds.

Modules:
    - computations: Round programs of the Groth16 verification over BN254 and their round counts.
    - interpreter: Execution of a round of a round program.
    - operations: Micro-operations available to the round programs and their costs.
    - program: Round program model, builder and round partitioner.
    - scratch_memory: Frame-addressed scratch memories.

Usage example:
    Invert an element of F_q^12 one round at a time:

    >>> from zkrounds.bilinear_pairings.bn254.fields import Fq12
    >>> from zkrounds.rounds.computations import inverse_fq12_computation
    >>> from zkrounds.rounds.interpreter import execute_round, load_parameters, read_returns
    >>> from zkrounds.rounds.scratch_memory import ScratchMemories
    >>>
    >>> f = Fq12.from_list(list(range(1, 13)))
    >>> program = inverse_fq12_computation()
    >>> memories = ScratchMemories(program.memory_requirements)
    >>> load_parameters(program, memories, [f])
    >>> for round_index in range(program.round_count):
    ...     execute_round(program, round_index, memories, context=None)
    >>> read_returns(program, memories)[0] * f == Fq12.one()
    True
"""
