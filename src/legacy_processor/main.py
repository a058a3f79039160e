#!/usr/bin/env python3

# ruff: noqa: T201

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from legacy_processor.app import MessageDispatcher, build_client, build_engine
from legacy_processor.config import configure_logging, get_service_config
from legacy_processor.domain import SchemaValidationError

if TYPE_CHECKING:
    from collections.abc import Iterator, Sequence
    from types import FrameType

log = logging.getLogger(__name__)


class MessageFileError(ValueError):
    """Raised when a message source cannot be read as JSON objects."""


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Reconcile challenge messages against the legacy system"
    )
    parser.add_argument(
        "messages",
        nargs="+",
        help="JSON files holding one message or a list of messages ('-' reads stdin)",
    )
    parser.add_argument(
        "--topic",
        type=str,
        help="Treat every message as published on this topic (defaults to the envelope topic)",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log at DEBUG level",
    )
    return parser.parse_args(list(argv))


def _load_messages(source: str) -> Iterator[dict[str, object]]:
    raw = sys.stdin.read() if source == "-" else Path(source).read_text(encoding="utf-8")
    try:
        document = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise MessageFileError(f"{source} is not valid JSON: {exc}") from exc
    documents = document if isinstance(document, list) else [document]
    for item in documents:
        if not isinstance(item, dict):
            raise MessageFileError(f"{source} must contain JSON objects")
        yield item


def main(argv: Sequence[str] | None = None) -> None:
    """Process the given messages in order, stopping at the first failure."""

    args = _parse_args(sys.argv[1:] if argv is None else argv)
    configure_logging(level=logging.DEBUG if args.verbose else logging.INFO)

    try:
        config = get_service_config()
        with build_client(config) as client:
            engine = build_engine(service_config=config, client=client)
            dispatcher = MessageDispatcher.from_config(engine, config)
            for source in args.messages:
                for message in _load_messages(source):
                    dispatcher.handle(message, topic=args.topic)
    except (SchemaValidationError, MessageFileError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(2)
    except Exception as e:  # noqa: BLE001
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    print("\nClosed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
