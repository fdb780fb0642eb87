from __future__ import annotations

import json
import logging
import sys
from collections.abc import Iterator
from pathlib import Path

import typer

from ..config import Config
from ..engine import TimedFrame
from ..models import HandFrame

app = typer.Typer()

DEFAULT_USER_CONFIG_PATH = Config.get_user_path()

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(verbose: bool) -> None:
    """Send the library logs to stderr, debug ones included if `verbose`."""
    logger = logging.getLogger("handsfree_gestures")
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)

    # Configure handler if logger doesn't have one
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
        logger.propagate = False  # Don't propagate to root logger


def frame_from_record(record: dict) -> TimedFrame:
    """Convert one recorded line into a `(frame, now_ms)` pair.

    A record is `{"timestamp_ms": float, "hand_score": float, "keypoints": [...]}`, or
    `{"timestamp_ms": float, "hand": null}` when no hand was detected.
    """
    if "timestamp_ms" not in record:
        raise ValueError("Missing 'timestamp_ms'")
    now_ms = float(record["timestamp_ms"])

    hand = record.get("hand", record)
    if hand is None:
        return None, now_ms
    if not isinstance(hand, dict):
        raise ValueError(f"Invalid hand data: {hand!r}")
    return HandFrame.from_dict(hand), now_ms


def read_recording(path: Path) -> Iterator[TimedFrame]:
    """Read a JSON-lines recording of frames. Invalid lines are reported and skipped."""
    # Undecodable bytes are replaced, so such a line fails to parse and is skipped
    with path.open(errors="replace") as file:
        for line_number, line in enumerate(file, start=1):
            line = line.strip()
            if not line:
                continue
            try:
                record = json.loads(line)
                if not isinstance(record, dict):
                    raise ValueError("Not a JSON object")
                timed_frame = frame_from_record(record)
            except (TypeError, ValueError) as exc:
                print(f"Skipping line {line_number}: {exc}", file=sys.stderr)
                continue
            yield timed_frame


def load_config(config_path: Path | None) -> Config:
    try:
        return Config.load(config_path)
    except ValueError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise typer.Exit(1) from exc
