from dataclasses import dataclass
from typing import Optional
import logging

from brainfuck import BrainfuckInterpreter, BrainfuckError, EngineState
from bfcore.config import RunConfig, load_config

logger = logging.getLogger(__name__)


@dataclass
class RunResult:
    output: str
    steps: int
    fault: Optional[BrainfuckError]
    hit_step_limit: bool
    state: EngineState

    @property
    def ok(self) -> bool:
        return self.fault is None and not self.hit_step_limit


def make_interpreter(code: str, input_data="", config: Optional[RunConfig] = None,
                     output_stream=None) -> BrainfuckInterpreter:
    cfg = config or load_config()
    return BrainfuckInterpreter(code, tape_size=cfg.tape_size, input_stream=input_data,
                                output_stream=output_stream, eof_policy=cfg.eof_policy)


def run_program(code: str, input_data="", config: Optional[RunConfig] = None,
                output_stream=None) -> RunResult:
    """Run a program to completion, a fault, or the configured step limit.
    Faults are captured in the result instead of being raised.
    """
    cfg = config or load_config()
    itp = make_interpreter(code, input_data, cfg, output_stream)
    try:
        itp.run(max_steps=cfg.step_limit)
    except BrainfuckError as e:
        logger.warning("Program faulted: %s", e)
    if itp.hit_step_limit:
        logger.warning("Program stopped at step limit %s", cfg.step_limit)
    return RunResult(
        output=itp.output,
        steps=itp.step_count,
        fault=itp.fault,
        hit_step_limit=itp.hit_step_limit,
        state=itp.snapshot(),
    )


def run_once(code: str, x: int, config: Optional[RunConfig] = None) -> Optional[int]:
    """Execute code with a single input byte, return the first output byte.
    Returns None when the program prints nothing or faults.
    """
    result = run_program(code, bytes([x % 256]), config)
    if result.fault is not None or not result.output:
        return None
    return ord(result.output[0])
