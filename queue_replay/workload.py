"""
Sequence: SEQ0110
Track: Replay
Change: Load the replay dataset before the queue socket is touched, split the way the
        engine's line scanner splits, keeping undecodable bytes as surrogate escapes.
Tests: test_split_lines, test_read_lines_keeps_latin1_bytes, test_cli_missing_file_exits_nonzero
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import List, Union

from queue_replay.errors import SourceError

logger = logging.getLogger(__name__)

DEFAULT_SOURCE = "test_logs_base.txt"


def split_lines(text: str) -> List[str]:
    """Split on ``\\n`` dropping one trailing ``\\r`` per line and no empty tail."""
    if not text:
        return []
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def read_lines(path: Union[str, os.PathLike]) -> List[str]:
    source = Path(path)
    try:
        raw = source.read_bytes()
    except OSError as exc:
        raise SourceError(f"Failed to read {source}: {exc}") from exc
    lines = split_lines(raw.decode("utf-8", "surrogateescape"))
    logger.info("loaded %d lines from %s", len(lines), source)
    return lines
