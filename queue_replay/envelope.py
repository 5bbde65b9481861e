"""
Sequence: SEQ0102
Track: Replay
Change: Frame raw log lines into the queue envelope understood by the analysis engine.
        Line bytes that are not valid UTF-8 travel as surrogate escapes and go out unchanged.
Tests: test_envelope_format, test_envelope_passthrough, test_envelope_keeps_undecodable_bytes
"""

from __future__ import annotations

import re

PREFIX = "2:"
HOST_LABEL = "hostname"
ROUTE = "any->/var/cosas:"

_ENVELOPE_RE = re.compile(
    r"\A" + re.escape(PREFIX) + r"\[(?P<id>0|[1-9][0-9]*)\] \("
    + re.escape(HOST_LABEL) + r"(?P<host>0|[1-9][0-9]*)\) "
    + re.escape(ROUTE) + r"(?P<message>.*)\Z",
    re.DOTALL,
)


def _encode(text: str) -> bytes:
    try:
        return text.encode("utf-8", "surrogateescape")
    except UnicodeEncodeError:
        # lone surrogates outside the escape range, e.g. "\ud800"
        return text.encode("utf-8", "surrogatepass")


def build(identifier: int, message: str) -> bytes:
    agent = str(identifier)
    return _encode(f"{PREFIX}[{agent}] ({HOST_LABEL}{agent}) {ROUTE}{message}")


def parse(payload: bytes) -> tuple[int, str]:
    """Decode an envelope back into ``(identifier, message)``.

    Only used on the receiving side of tests; the sender never parses.
    """
    match = _ENVELOPE_RE.match(payload.decode("utf-8", "surrogateescape"))
    if match is None:
        raise ValueError(f"Not a queue envelope: {payload[:64]!r}")
    if match.group("id") != match.group("host"):
        raise ValueError(f"Identifier mismatch in envelope: {payload[:64]!r}")
    return int(match.group("id")), match.group("message")
