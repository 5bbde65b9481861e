"""
Sequence: SEQ0101
Track: Replay
Change: Package surface for replaying log datasets into the analysis engine queue socket.
Tests: test_envelope_dispatch, test_transport_replay, test_cli_smoke
"""

from queue_replay.dispatch import DispatchReport, Replay, SingleMessage, dispatch
from queue_replay.envelope import build
from queue_replay.errors import ReplayError, SourceError, TransportOpenError, TransportWriteError
from queue_replay.transport import open_transport
from queue_replay.workload import read_lines

__version__ = "0.1.0"
