#!/usr/bin/env python3
"""
Run a Brainfuck program from the built-in table, a file, or the command line.

Examples:
    python run_brainfuck.py hello_world
    python run_brainfuck.py --code ",+." --input A
    python run_brainfuck.py add_two_and_five --debug --step
"""

import argparse
import logging
import sys

from brainfuck import BrainfuckError, BrainfuckInterpreter, EOF_POLICIES
from brainfuck_debugger import BrainfuckDebugger
from bfcore.config import load_config
from programs import get_program, list_programs

logger = logging.getLogger(__name__)

EXIT_FAULT = 1
EXIT_STEP_LIMIT = 2


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Run a Brainfuck program one step at a time")
    ap.add_argument("program", nargs="?", default="hello_world", help="Name of a built-in program")
    ap.add_argument("--file", help="Read program text from this file")
    ap.add_argument("--code", help="Program text given directly")
    ap.add_argument("--input", default="", help="Input bytes for the ',' command")
    ap.add_argument("-d", "--debug", action="store_true", help="Print VM state after every step")
    ap.add_argument("-s", "--step", action="store_true", help="Wait for Enter between steps")
    ap.add_argument("--max-steps", type=int, default=None, help="Stop after this many steps; 0 means unlimited (BF_STEP_LIMIT)")
    ap.add_argument("--tape-size", type=int, default=None, help="Number of tape cells (BF_TAPE_SIZE)")
    ap.add_argument("--eof", choices=EOF_POLICIES, default=None, help="What ',' does at end of input (BF_EOF_POLICY)")
    ap.add_argument("--list", action="store_true", help="List built-in programs and exit")
    ap.add_argument("-v", "--verbose", action="count", default=0, help="Increase log verbosity (-v, -vv)")
    return ap


def setup_logging(verbose: int, default_level: str):
    if verbose >= 2:
        level = logging.DEBUG
    elif verbose == 1:
        level = logging.INFO
    else:
        level = getattr(logging, default_level, logging.WARNING)
    logging.basicConfig(level=level, format="%(asctime)s [%(levelname)s] %(name)s: %(message)s")


def load_source(args) -> str:
    if args.code is not None:
        return args.code
    if args.file:
        with open(args.file, 'r') as f:
            return f.read()
    return get_program(args.program)


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    try:
        cfg = load_config()
    except ValueError as e:
        print(f"❌ {e}", file=sys.stderr)
        return EXIT_FAULT
    setup_logging(args.verbose, cfg.log_level)

    if args.list:
        for name in list_programs():
            print(name)
        return 0

    try:
        source = load_source(args)
    except (KeyError, OSError) as e:
        print(f"❌ {e}", file=sys.stderr)
        return EXIT_FAULT

    tape_size = args.tape_size if args.tape_size is not None else cfg.tape_size
    max_steps = args.max_steps if args.max_steps is not None else cfg.step_limit
    if max_steps is not None and max_steps <= 0:
        max_steps = None
    eof_policy = args.eof or cfg.eof_policy

    try:
        itp = BrainfuckInterpreter(source, tape_size=tape_size, input_stream=args.input.encode("utf-8"),
                                   output_stream=sys.stdout, eof_policy=eof_policy)
    except ValueError as e:
        print(f"❌ {e}", file=sys.stderr)
        return EXIT_FAULT
    logger.info("Running %d-character program on %d cells", len(source), tape_size)

    try:
        if args.debug or args.step:
            BrainfuckDebugger(itp, step_mode=args.step, show_state=args.debug).run(max_steps)
        else:
            itp.run(max_steps)
    except BrainfuckError as e:
        sys.stdout.flush()
        print(f"\n❌ {type(e).__name__}: {e}", file=sys.stderr)
        return EXIT_FAULT

    sys.stdout.flush()
    if itp.hit_step_limit:
        print(f"\n⚠️ Execution stopped after {max_steps} steps (possible infinite loop)", file=sys.stderr)
        return EXIT_STEP_LIMIT
    logger.info("Finished after %d steps", itp.step_count)
    return 0


if __name__ == "__main__":
    sys.exit(main())
