"""
Sequence: SEQ0104
Track: Replay
Change: Open the datagram destination the replay writes to: the engine's Unix queue socket
        by default, or a UDP endpoint for hosts without one.
Tests: test_unix_transport_preserves_boundaries, test_udp_transport_delivers,
       test_open_transport_missing_socket, test_parse_target
"""

from __future__ import annotations

import logging
import socket
from typing import Optional, Protocol, Tuple

from queue_replay.errors import TransportOpenError, TransportWriteError

logger = logging.getLogger(__name__)

DEFAULT_SOCKET = "/var/ossec/queue/sockets/queue"


class Transport(Protocol):
    def write(self, payload: bytes) -> None: ...

    def close(self) -> None: ...


class _DatagramTransport:
    """Connected datagram socket; one ``write`` is one datagram."""

    def __init__(self, family: int, address, label: str) -> None:
        self.label = label
        self._sock: Optional[socket.socket] = None
        try:
            self._sock = socket.socket(family, socket.SOCK_DGRAM)
            self._sock.connect(address)
        except OSError as exc:
            if self._sock is not None:
                self._sock.close()
                self._sock = None
            raise TransportOpenError(f"Failed to dial {label}: {exc}") from exc
        logger.info("connected to %s", label)

    @property
    def closed(self) -> bool:
        return self._sock is None

    def write(self, payload: bytes) -> None:
        if self._sock is None:
            raise TransportWriteError(f"Write on closed transport {self.label}")
        try:
            written = self._sock.send(payload)
        except OSError as exc:
            raise TransportWriteError(f"Write to {self.label} failed: {exc}") from exc
        if written != len(payload):
            raise TransportWriteError(
                f"Short write to {self.label}: {written} of {len(payload)} bytes"
            )

    def close(self) -> None:
        if self._sock is None:
            return
        self._sock.close()
        self._sock = None
        logger.debug("closed %s", self.label)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


class UnixDatagramTransport(_DatagramTransport):
    def __init__(self, path: str) -> None:
        super().__init__(socket.AF_UNIX, path, f"unix://{path}")


class UdpTransport(_DatagramTransport):
    def __init__(self, host: str, port: int) -> None:
        super().__init__(socket.AF_INET, (host, port), f"udp://{host}:{port}")


def parse_target(target: str) -> Tuple[str, Tuple]:
    """Split a target string into ``("unix", (path,))`` or ``("udp", (host, port))``."""
    if target.startswith("udp://"):
        host, sep, port = target[len("udp://"):].rpartition(":")
        if not sep or not host or not port.isdecimal() or not 0 < int(port) < 65536:
            raise TransportOpenError(f"Invalid UDP target: {target!r}")
        return "udp", (host, int(port))
    if target.startswith("unix://"):
        target = target[len("unix://"):]
    if not target:
        raise TransportOpenError("Empty socket path")
    return "unix", (target,)


def open_transport(target: str = DEFAULT_SOCKET) -> _DatagramTransport:
    kind, args = parse_target(target)
    if kind == "udp":
        return UdpTransport(*args)
    return UnixDatagramTransport(*args)
