import os
import sys

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import pytest


@pytest.fixture(autouse=True)
def clean_bf_env(monkeypatch):
    """Keep BF_* settings from the developer's shell out of the tests."""
    for name in ("BF_TAPE_SIZE", "BF_STEP_LIMIT", "BF_EOF_POLICY", "BF_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
