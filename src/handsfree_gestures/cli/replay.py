from __future__ import annotations

from collections import Counter
from pathlib import Path

import typer

from ..engine import GestureEngine
from ..gestures import Gestures
from . import options
from .common import app, load_config, read_recording, setup_logging


@app.command(name="replay")
def replay_cmd(
    recording: Path = typer.Argument(..., help="JSON-lines file of recorded frames", exists=True, dir_okay=False),
    config_path: Path | None = options.config,
    events_only: bool | None = typer.Option(
        None, "--events-only/--all", "-e/-a", help="Only print confirmed gestures, or every frame result"
    ),
    verbose: bool = options.verbose,
) -> None:
    """Replay a recording of hand frames through the gesture engine."""
    setup_logging(verbose)
    config = load_config(config_path)
    if events_only is None:
        events_only = config.cli.events_only

    engine = GestureEngine(config.engine)
    counts: Counter[Gestures] = Counter()
    nb_frames = 0

    for now_ms, event in engine.process(read_recording(recording)):
        nb_frames += 1
        counts[event.label] += 1
        if event or not events_only:
            print(f"{now_ms:>10.0f}ms  {event.label.value:<14} ({event.confidence:.2f})")

    print(f"\n{nb_frames} frames replayed")
    for gesture, count in sorted(counts.items(), key=lambda item: item[1], reverse=True):
        if gesture is not Gestures.NONE:
            print(f"  {gesture.value}: {count}")
    if not any(gesture is not Gestures.NONE for gesture in counts):
        print("  No gestures detected")
