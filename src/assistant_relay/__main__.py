"""CLI entry point for assistant-relay.

This module provides the command-line interface for starting a conversation.
It can be invoked as `assistant-relay` (via the script entry point) or
`python -m assistant_relay`.
"""

import argparse
import asyncio
import logging
import sys

from assistant_relay import __version__, run_app
from assistant_relay.config import RelaySettings


def configure_logging(level: str) -> None:
    """Send log records to stderr so they stay apart from the conversation."""
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def main() -> int:
    """Main entry point for the assistant-relay CLI.

    Parses command-line arguments, builds the settings, and runs the
    interactive loop until the user exits.

    Returns:
        int: Process exit code.
    """
    parser = argparse.ArgumentParser(
        prog="assistant-relay",
        description="Talk to several OpenAI Assistants on one shared thread",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"assistant-relay {__version__}",
    )

    parser.add_argument(
        "--allowlist",
        type=str,
        default=None,
        help="Allow-list JSON file (default: allowed_assistants.json, can be set via RELAY_ALLOWLIST_PATH)",
    )

    parser.add_argument(
        "--poll-interval",
        type=float,
        default=None,
        help="Seconds between run status checks (default: 1.0, can be set via RELAY_POLL_INTERVAL)",
    )

    parser.add_argument(
        "--poll-max-attempts",
        type=int,
        default=None,
        help="Give up on a run after this many checks (default: never, can be set via RELAY_POLL_MAX_ATTEMPTS)",
    )

    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level (default: WARNING, can be set via RELAY_LOG_LEVEL)",
    )

    args = parser.parse_args()

    # Build settings, CLI args override environment variables
    settings_kwargs = {}
    if args.allowlist is not None:
        settings_kwargs["allowlist_path"] = args.allowlist
    if args.poll_interval is not None:
        settings_kwargs["poll_interval"] = args.poll_interval
    if args.poll_max_attempts is not None:
        settings_kwargs["poll_max_attempts"] = args.poll_max_attempts
    if args.log_level is not None:
        settings_kwargs["log_level"] = args.log_level

    settings = RelaySettings(**settings_kwargs)
    configure_logging(settings.log_level.upper())

    try:
        return asyncio.run(run_app(settings))
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return 130


if __name__ == "__main__":
    sys.exit(main())
