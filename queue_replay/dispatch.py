"""
Sequence: SEQ0103
Track: Replay
Change: Deliver a workload to the queue socket one envelope per datagram, either a single
        literal message or repeated passes over a file with per-pass identifier seeds.
Tests: test_single_message_uses_identifier_zero, test_replay_identifiers_per_pass,
       test_first_failure_stops_dispatch, test_empty_and_zero_pass_workloads
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Iterator, Optional, Protocol, Sequence, Union

from queue_replay import envelope
from queue_replay.errors import TransportWriteError

logger = logging.getLogger(__name__)

PASS_SEED = 1000
SINGLE_MESSAGE_ID = 0


class Writable(Protocol):
    def write(self, payload: bytes) -> None: ...


@dataclass(frozen=True)
class SingleMessage:
    message: str


@dataclass(frozen=True)
class Replay:
    lines: Sequence[str]
    repeat: int = 1


Workload = Union[SingleMessage, Replay]


@dataclass(frozen=True)
class DispatchReport:
    sent: int
    last_identifier: Optional[int] = None


def identifiers(line_count: int, repeat: int) -> Iterator[int]:
    """Yield the identifiers a replay of ``line_count`` lines over ``repeat`` passes uses."""
    for pass_number in range(1, repeat + 1):
        seed = PASS_SEED * pass_number
        yield from range(seed, seed + line_count)


class _Sender:
    """Writes envelopes in order and keeps the count needed for failure reports."""

    def __init__(self, transport: Writable, interval: float) -> None:
        self._transport = transport
        self._interval = max(0.0, interval)
        self.sent = 0
        self.last_identifier: Optional[int] = None

    def send(self, identifier: int, message: str) -> None:
        if self.sent and self._interval:
            time.sleep(self._interval)
        payload = envelope.build(identifier, message)
        try:
            self._transport.write(payload)
        except (TransportWriteError, OSError) as exc:
            raise TransportWriteError(
                f"Write of envelope {identifier} failed after {self.sent} successful writes: {exc}",
                sent=self.sent,
                identifier=identifier,
            ) from exc
        self.sent += 1
        self.last_identifier = identifier
        logger.debug("sent id=%d bytes=%d", identifier, len(payload))

    def report(self) -> DispatchReport:
        return DispatchReport(sent=self.sent, last_identifier=self.last_identifier)


def _replay_pass(sender: _Sender, lines: Sequence[str], counter: int) -> int:
    for line in lines:
        sender.send(counter, line)
        counter += 1
    return counter


def dispatch(transport: Writable, workload: Workload, interval: float = 0.0) -> DispatchReport:
    """Send ``workload`` through ``transport`` and report how many envelopes went out.

    The first failed write raises :class:`TransportWriteError` and nothing else is sent.
    The transport is left open; closing it belongs to whoever opened it.
    """
    sender = _Sender(transport, interval)

    if isinstance(workload, SingleMessage):
        sender.send(SINGLE_MESSAGE_ID, workload.message)
        return sender.report()

    for pass_number in range(1, workload.repeat + 1):
        next_id = _replay_pass(sender, workload.lines, PASS_SEED * pass_number)
        logger.debug("pass %d/%d done, next id %d", pass_number, workload.repeat, next_id)
    return sender.report()
