"""
Sequence: SEQ0111
Track: Replay
Change: Failure taxonomy for a replay run; components raise, only the command line maps
        these to exit codes.
Tests: test_first_failure_stops_dispatch, test_open_transport_missing_socket,
       test_cli_missing_file_exits_nonzero
"""

from __future__ import annotations

from typing import Optional


class ReplayError(Exception):
    """Base class for failures that stop a replay run."""


class SourceError(ReplayError):
    """The line source could not be read."""


class TransportOpenError(ReplayError):
    """The destination socket could not be opened or connected."""


class TransportWriteError(ReplayError):
    def __init__(self, message: str, sent: int = 0, identifier: Optional[int] = None) -> None:
        super().__init__(message)
        self.sent = sent
        self.identifier = identifier
