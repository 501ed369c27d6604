from dataclasses import dataclass
from typing import Optional
import os

from dotenv import load_dotenv

from brainfuck import DEFAULT_TAPE_SIZE, EOF_POLICIES

# Settings come from the environment; a local .env file fills in anything unset
load_dotenv()


@dataclass
class RunConfig:
    tape_size: int = DEFAULT_TAPE_SIZE
    step_limit: Optional[int] = None
    eof_policy: str = "zero"
    log_level: str = "WARNING"


def _env_int(name: str, default: Optional[int]) -> Optional[int]:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got '{raw}'") from None


def load_config() -> RunConfig:
    """Build a RunConfig from BF_* environment variables."""
    eof_policy = os.environ.get("BF_EOF_POLICY", "zero").strip().lower() or "zero"
    if eof_policy not in EOF_POLICIES:
        raise ValueError(f"BF_EOF_POLICY must be one of {EOF_POLICIES}, got '{eof_policy}'")
    step_limit = _env_int("BF_STEP_LIMIT", None)
    if step_limit is not None and step_limit <= 0:
        step_limit = None
    return RunConfig(
        tape_size=_env_int("BF_TAPE_SIZE", DEFAULT_TAPE_SIZE),
        step_limit=step_limit,
        eof_policy=eof_policy,
        log_level=os.environ.get("BF_LOG_LEVEL", "WARNING").strip().upper() or "WARNING",
    )
