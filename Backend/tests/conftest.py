import os
from pathlib import Path

import pytest

# Settings are read at import time, so pin them before any tempsweep module loads.
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")
os.environ.setdefault("PURGE_ENABLED", "true")

NOW = 1_700_000_000
DAY = 24 * 60 * 60


def touch(path: Path, modified: float) -> Path:
    """Create `path` (and parents) with the given mtime."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("x")
    os.utime(path, (modified, modified))
    return path


class RecordingSink:
    def __init__(self):
        self.calls = []

    def succeeded(self, message):
        self.calls.append(("succeeded", message))

    def failed(self, message):
        self.calls.append(("failed", message))


@pytest.fixture
def sink():
    return RecordingSink()
