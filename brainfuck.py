#!/usr/bin/env python3
"""
Brainfuck Virtual Machine

Brainfuck is an esoteric programming language with only 8 commands:
    >   Move the pointer to the right
    <   Move the pointer to the left
    +   Increment the memory cell at the pointer
    -   Decrement the memory cell at the pointer
    .   Output the character signified by the cell at the pointer
    ,   Input a character and store it in the cell at the pointer
    [   Jump past the matching ] if the cell at the pointer is 0
    ]   Jump back to the matching [ if the cell at the pointer is nonzero

All other characters are treated as comments and ignored, but they still
occupy a slot in the instruction stream.

The interpreter executes one instruction per call to step(). Loops are
tracked with a stack of open '[' positions; a '[' entered with a zero cell
skip-scans forward to its matching ']'.
"""

import io
import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple

import numpy as np

logger = logging.getLogger(__name__)

DEFAULT_TAPE_SIZE = 30000
DEFAULT_WINDOW = 30
EOF_POLICIES = ("zero", "unchanged", "error")


class Command(Enum):
    MOVE_RIGHT = '>'
    MOVE_LEFT = '<'
    INCREMENT = '+'
    DECREMENT = '-'
    PRINT = '.'
    READ = ','
    LOOP_FORWARD = '['
    LOOP_BACKWARD = ']'
    NOOP = ''

    @classmethod
    def from_char(cls, c: str) -> 'Command':
        """Decode one program character; anything unknown is a NOOP."""
        if not c:
            return cls.NOOP
        try:
            return cls(c)
        except ValueError:
            return cls.NOOP


class BrainfuckError(RuntimeError):
    """Base class for faults detected while executing a program."""

    def __init__(self, message: str, instruction_pointer: int, step: int):
        super().__init__(f"{message} (ip={instruction_pointer}, step={step})")
        self.instruction_pointer = instruction_pointer
        self.step = step


class TapeOverrun(BrainfuckError):
    """The data pointer would move past the last cell of the tape."""

    def __init__(self, data_pointer: int, instruction_pointer: int, step: int):
        super().__init__(f"Tape overrun moving right from cell {data_pointer}",
                         instruction_pointer, step)
        self.data_pointer = data_pointer


class UnmatchedBracket(BrainfuckError):
    pass


class InputExhausted(BrainfuckError):
    pass


class ProgramTerminated(RuntimeError):
    """step() was called after the program already finished."""


@dataclass(frozen=True)
class EngineState:
    """Read-only view of the interpreter between two steps."""
    instruction_pointer: int
    command: Optional[Command]
    step: int
    data_pointer: int
    cell: int
    tape_start: int
    tape: Tuple[int, ...]
    program: str
    output: str
    loop_depth: int
    terminated: bool


class BrainfuckInterpreter:
    def __init__(self, program, tape_size=DEFAULT_TAPE_SIZE, input_stream=None,
                 output_stream=None, eof_policy="zero"):
        if not isinstance(tape_size, int) or tape_size <= 0:
            raise ValueError(f"tape_size must be a positive integer, got {tape_size!r}")
        if eof_policy not in EOF_POLICIES:
            raise ValueError(f"Unknown eof_policy '{eof_policy}'. Expected one of {EOF_POLICIES}")

        self.program = str(program)
        self.memory = np.zeros(tape_size, dtype=np.uint8)
        self.pointer = 0
        self.instruction_pointer = 0
        self.loop_stack: List[int] = []
        self.step_count = 0
        self.output_buffer: List[str] = []
        self.input_stream = self._wrap_input(input_stream)
        self._pending = b""
        self.output_stream = output_stream
        self.eof_policy = eof_policy
        self.input_reads = 0
        self.hit_step_limit = False
        self.fault: Optional[BrainfuckError] = None

        # One handler per Command member
        self._dispatch = {
            Command.MOVE_RIGHT: self._move_right,
            Command.MOVE_LEFT: self._move_left,
            Command.INCREMENT: self._increment,
            Command.DECREMENT: self._decrement,
            Command.PRINT: self._print,
            Command.READ: self._read,
            Command.LOOP_FORWARD: self._loop_forward,
            Command.LOOP_BACKWARD: self._loop_backward,
            Command.NOOP: self._noop,
        }

    @staticmethod
    def _wrap_input(source):
        if source is None:
            return io.BytesIO(b"")
        if isinstance(source, (bytes, bytearray)):
            return io.BytesIO(bytes(source))
        if isinstance(source, str):
            return io.BytesIO(source.encode("utf-8"))
        if not hasattr(source, "read"):
            raise ValueError(f"input_stream must be bytes, str or a readable stream, got {type(source).__name__}")
        return source

    @property
    def tape_size(self) -> int:
        return len(self.memory)

    @property
    def output(self) -> str:
        return ''.join(self.output_buffer)

    def current_command(self) -> Optional[Command]:
        if self.instruction_pointer >= len(self.program):
            return None
        return Command.from_char(self.program[self.instruction_pointer])

    def is_terminated(self) -> bool:
        return self.fault is not None or self.instruction_pointer >= len(self.program)

    def step(self) -> None:
        """Execute a single instruction.

        Raises the recorded fault again if the engine already faulted, and
        ProgramTerminated if the program has run to completion.
        """
        if self.fault is not None:
            raise self.fault
        if self.instruction_pointer >= len(self.program):
            raise ProgramTerminated(f"Program finished after {self.step_count} steps")

        self.step_count += 1
        command = Command.from_char(self.program[self.instruction_pointer])
        try:
            self._dispatch[command]()
        except BrainfuckError as e:
            self.fault = e
            logger.debug("Fault at ip=%d step=%d: %s", e.instruction_pointer, e.step, e)
            raise
        # Jumps land on a bracket, so the advance always applies
        self.instruction_pointer += 1

    def run(self, max_steps: Optional[int] = None) -> str:
        """Step until the program ends or max_steps instructions have run."""
        if max_steps is not None and max_steps <= 0:
            max_steps = None
        self.hit_step_limit = False
        executed = 0
        while not self.is_terminated():
            if max_steps is not None and executed >= max_steps:
                self.hit_step_limit = True
                logger.debug("Step limit %d reached at ip=%d", max_steps, self.instruction_pointer)
                break
            self.step()
            executed += 1
        return self.output

    def snapshot(self, window: int = DEFAULT_WINDOW) -> EngineState:
        """Capture the current state with a tape window around the data pointer."""
        window = max(1, min(window, self.tape_size))
        start = max(0, self.pointer - window // 2)
        end = min(self.tape_size, start + window)
        # Shift the window left when it runs into the end of the tape
        if end - start < window:
            start = max(0, end - window)

        return EngineState(
            instruction_pointer=self.instruction_pointer,
            command=self.current_command(),
            step=self.step_count,
            data_pointer=self.pointer,
            cell=int(self.memory[self.pointer]),
            tape_start=start,
            tape=tuple(int(v) for v in self.memory[start:end]),
            program=self.program,
            output=self.output,
            loop_depth=len(self.loop_stack),
            terminated=self.is_terminated(),
        )

    # Command handlers

    def _move_right(self):
        if self.pointer + 1 >= self.tape_size:
            raise TapeOverrun(self.pointer, self.instruction_pointer, self.step_count)
        self.pointer += 1

    def _move_left(self):
        # The left edge is inert rather than a fault
        if self.pointer > 0:
            self.pointer -= 1

    def _increment(self):
        self.memory[self.pointer] = (int(self.memory[self.pointer]) + 1) % 256

    def _decrement(self):
        self.memory[self.pointer] = (int(self.memory[self.pointer]) - 1) % 256

    def _print(self):
        char = chr(int(self.memory[self.pointer]))
        self.output_buffer.append(char)
        if self.output_stream is not None:
            self.output_stream.write(char)

    def _read(self):
        if not self._pending:
            data = self.input_stream.read(1)
            # Text streams yield characters; feed them as their UTF-8 bytes
            self._pending = data.encode("utf-8") if isinstance(data, str) else bytes(data or b"")
        if self._pending:
            self.memory[self.pointer] = self._pending[0]
            self._pending = self._pending[1:]
            self.input_reads += 1
            return

        if self.eof_policy == "zero":
            self.memory[self.pointer] = 0
        elif self.eof_policy == "error":
            raise InputExhausted("Read past end of input", self.instruction_pointer, self.step_count)

    def _loop_forward(self):
        if self.memory[self.pointer] != 0:
            self.loop_stack.append(self.instruction_pointer)
            return

        # Skip-scan to the matching ']', counting nested pairs
        depth = 0
        for i in range(self.instruction_pointer, len(self.program)):
            c = self.program[i]
            if c == '[':
                depth += 1
            elif c == ']':
                depth -= 1
                if depth == 0:
                    logger.debug("Skipping loop body %d..%d", self.instruction_pointer, i)
                    self.instruction_pointer = i
                    return

        raise UnmatchedBracket(f"No matching ']' for '[' at position {self.instruction_pointer}",
                               self.instruction_pointer, self.step_count)

    def _loop_backward(self):
        if not self.loop_stack:
            raise UnmatchedBracket(f"Unmatched ']' at position {self.instruction_pointer}",
                                   self.instruction_pointer, self.step_count)
        if self.memory[self.pointer] != 0:
            self.instruction_pointer = self.loop_stack[-1]
        else:
            self.loop_stack.pop()

    def _noop(self):
        pass
