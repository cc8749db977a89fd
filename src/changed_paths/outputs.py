"""Step output emission.

GitHub Actions collects step outputs from ``name=value`` lines appended to
the file named by ``GITHUB_OUTPUT``. Outside a runner the lines go to stdout.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Protocol, TextIO

logger = logging.getLogger(__name__)


class OutputSink(Protocol):
    def set_output(self, name: str, value: bool) -> None: ...


def format_output(name: str, value: bool) -> str:
    """``has-changes=true`` style line, booleans in JSON spelling."""
    return f"{name}={'true' if value else 'false'}"


class OutputWriter:
    """Writes outputs to the ``GITHUB_OUTPUT`` file, or to a stream."""

    def __init__(self, output_path: str | Path | None = None, stream: TextIO | None = None):
        self._path = Path(output_path) if output_path else None
        self._stream = stream

    def set_output(self, name: str, value: bool) -> None:
        line = format_output(name, value)
        if self._path is not None:
            with open(self._path, "a", encoding="utf-8") as f:
                f.write(line + "\n")
        else:
            print(line, file=self._stream or sys.stdout)
        logger.debug("Output %s", line)

