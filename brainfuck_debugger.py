#!/usr/bin/env python3
"""
Brainfuck Step-by-Step Debugger

Renders the state of a running interpreter after every step: the current
command, the memory tape around the pointer, the program with a caret under
the instruction pointer, and the output so far. In step mode it waits for the
user between instructions.
"""

import sys

from brainfuck import BrainfuckInterpreter, EngineState


def format_state(state: EngineState) -> str:
    """Render an engine snapshot as multi-line text."""
    lines = []
    if state.terminated:
        lines.append(f"Finished  Step: {state.step}")
    else:
        lines.append(f"Command: {state.command.name} '{state.program[state.instruction_pointer]}' Step: {state.step}")
    lines.append(f"Current byte: {state.cell}")

    cells = []
    for offset, value in enumerate(state.tape):
        if state.tape_start + offset == state.data_pointer:
            cells.append(f"{value}*")
        else:
            cells.append(str(value))
    lines.append(f"Data ({state.data_pointer}) from cell {state.tape_start}:")
    lines.append(" ".join(cells))

    # Control characters in comments would shift the caret
    lines.append("".join(c if c.isprintable() else " " for c in state.program))
    lines.append(" " * state.instruction_pointer + "^")
    lines.append(f"Output: {state.output!r}")
    return "\n".join(lines)


def _wait_for_enter():
    sys.stdin.readline()


class BrainfuckDebugger:
    """Drives an interpreter one step at a time, printing state after each step."""

    def __init__(self, interpreter: BrainfuckInterpreter, out=None, pause=None,
                 step_mode=False, show_state=True, window=30):
        self.interpreter = interpreter
        self.out = out if out is not None else sys.stdout
        self.pause = pause if pause is not None else _wait_for_enter
        self.step_mode = step_mode
        self.show_state = show_state
        self.window = window

    def show(self):
        print(format_state(self.interpreter.snapshot(self.window)), file=self.out)

    def run(self, max_steps=None) -> str:
        itp = self.interpreter
        if max_steps is not None and max_steps <= 0:
            max_steps = None
        itp.hit_step_limit = False
        executed = 0
        while not itp.is_terminated():
            if max_steps is not None and executed >= max_steps:
                itp.hit_step_limit = True
                break
            itp.step()
            executed += 1
            if self.show_state:
                self.show()
            if self.step_mode and not itp.is_terminated():
                self.pause()
        return itp.output
