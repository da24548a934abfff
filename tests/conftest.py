import os
from typing import Any

import pytest

from sprig.sprig_lexer import Token

# Monkeypatch coverage to bypass teardown crash when the CLI is exercised in subprocesses
if os.getenv("COVERAGE_PROCESS_START"):
    import coverage

    coverage.process_startup()

    import coverage.collector

    def safe_stop(self: Any) -> None:
        if self in getattr(self, "_collectors", []):
            self._collectors.remove(self)

    coverage.collector.Collector.stop = safe_stop


@pytest.fixture  # type: ignore[misc]
def eof_token() -> Token:
    return Token("EOF", "EOF", 1, 1, 0)
