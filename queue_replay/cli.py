"""
Sequence: SEQ0105
Track: Replay
Change: Command-line front end replacing the standalone message writer: resolve flags,
        load the workload before touching the socket, and map failures to exit codes.
Tests: test_cli_replays_file, test_cli_single_message, test_cli_missing_file_exits_nonzero,
       test_cli_missing_socket_exits_nonzero
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Iterable

from queue_replay.dispatch import Replay, SingleMessage, Workload, dispatch
from queue_replay.errors import ReplayError
from queue_replay.transport import DEFAULT_SOCKET, open_transport
from queue_replay.workload import DEFAULT_SOURCE, read_lines

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s - %(message)s"


def _non_negative_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid count: {value!r}") from None
    if number < 0:
        raise argparse.ArgumentTypeError(f"count must be >= 0: {value!r}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="queue-replay",
        description="Replay log lines into the analysis engine queue socket",
    )
    parser.add_argument("-s", "--socket", default=DEFAULT_SOCKET,
                        help="Unix datagram socket path, or udp://host:port")
    parser.add_argument("-f", "--file", default=DEFAULT_SOURCE, help="Path to dataset of logs")
    parser.add_argument("-m", "--message", default="", help="Send only this log")
    parser.add_argument("-l", "--loops", type=_non_negative_int, default=1,
                        help="Number of times all the logs of the file are sent")
    parser.add_argument("-i", "--interval", type=float, default=0.0,
                        help="Delay between messages in seconds")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log every envelope sent")
    return parser


def _load_workload(args: argparse.Namespace) -> Workload:
    if args.message:
        return SingleMessage(args.message)
    return Replay(read_lines(args.file), args.loops)


def main(argv: Iterable[str] | None = None) -> int:
    args = build_parser().parse_args(list(argv) if argv is not None else None)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format=LOG_FORMAT,
        stream=sys.stderr,
    )

    try:
        workload = _load_workload(args)
        with open_transport(args.socket) as transport:
            report = dispatch(transport, workload, interval=args.interval)
    except ReplayError as exc:
        logger.error("%s", exc)
        return 1

    logger.info("sent %d messages to %s", report.sent, args.socket)
    return 0


if __name__ == "__main__":
    sys.exit(main())
