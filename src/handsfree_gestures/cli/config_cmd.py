from __future__ import annotations

import sys
from pathlib import Path

import typer

from . import options
from .common import app, load_config


@app.command(name="config")
def config_cmd(
    config_path: Path | None = options.config,
    init: bool = typer.Option(False, "--init", help="Write the configuration to the config file"),
) -> None:
    """Show the effective configuration, and optionally write it."""
    config = load_config(config_path)
    print(config.model_dump_json(indent=2))

    if init:
        try:
            path = config.save(config_path)
        except (OSError, ValueError) as exc:
            print(f"Error saving config: {exc}", file=sys.stderr)
            raise typer.Exit(1) from exc
        print(f"Config saved to {path}")
