#!/usr/bin/env python3

"""The CLI is for development and debugging purpose."""


from .common import app
from .config_cmd import config_cmd  # noqa: F401
from .replay import replay_cmd  # noqa: F401


def main() -> None:
    """Entry point for the application."""
    app()


if __name__ == "__main__":
    main()
