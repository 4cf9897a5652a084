#!/usr/bin/env python3
"""
pet-CLI - Main Entry Point
Loads the pet file, takes over the terminal and runs the event loop.

Usage:
    pet-cli [--db PATH] [--tick-ms N] [--no-log]
    python -m pet_manager [--db PATH] [--tick-ms N] [--no-log]
"""
import argparse
import os
import sys
from pathlib import Path

from blessed import Terminal
from rich.console import Console

from . import log
from .app import LiveRenderer, PetApp
from .conf import DEFAULT_DB_PATH
from .config import DEFAULT_TICK_MS
from .events import EventSource, InputDeviceError, TerminalKeyPoller
from .fs_store import PetRecordList, StoreError
from .log import pet_log

# =============================================================================
# EXIT CODES
# =============================================================================

EXIT_OK = 0
EXIT_STARTUP_FAILURE = 1
EXIT_DEVICE_FAILURE = 2


def _positive_int(value: str) -> int:
    number = int(value)
    if number <= 0:
        raise argparse.ArgumentTypeError(f"must be a positive integer, got {value}")
    return number


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="pet-cli", description="pet-CLI - terminal pet manager")
    parser.add_argument("--db", type=Path, default=DEFAULT_DB_PATH,
                        help=f"Path to the pet file (default: {DEFAULT_DB_PATH})")
    # A string default goes through _positive_int too, so a bad PETS_TICK_MS is a usage error
    parser.add_argument("--tick-ms", type=_positive_int,
                        default=os.environ.get("PETS_TICK_MS", str(DEFAULT_TICK_MS)),
                        help="Refresh interval in milliseconds (default: %(default)s, env PETS_TICK_MS)")
    parser.add_argument("--no-log", action="store_true",
                        help="Do not write the pets.log file")
    return parser.parse_args(argv)


# =============================================================================
# MAIN LOGIC
# =============================================================================

def run_loop(app: PetApp, source, renderer) -> None:
    """Draw, then apply events one at a time until the user quits.

    Raises InputDeviceError if the event source reports a device failure.
    """
    renderer.draw(app.view())
    while app.handle(source.next_event()):
        renderer.draw(app.view())


def main(argv=None) -> int:
    args = parse_args(argv)
    if args.no_log:
        log.LOG = False

    store = PetRecordList(list_path=args.db)
    try:
        store.load()
    except StoreError as exc:
        pet_log(f"ERROR: startup aborted: {exc}")
        print(f"pet-cli: {exc}", file=sys.stderr)
        return EXIT_STARTUP_FAILURE

    term = Terminal()
    if not term.is_a_tty:
        pet_log("ERROR: startup aborted: not attached to a terminal")
        print("pet-cli: an interactive terminal is required", file=sys.stderr)
        return EXIT_STARTUP_FAILURE

    app = PetApp(store)
    source = EventSource(TerminalKeyPoller(term), tick_interval=args.tick_ms / 1000)
    pet_log(f"Starting with {len(store)} pets from {store.list_path}, tick {args.tick_ms}ms")
    try:
        with term.cbreak(), term.hidden_cursor(), LiveRenderer(Console()) as renderer:
            source.start()
            try:
                run_loop(app, source, renderer)
            finally:
                source.stop()
    except InputDeviceError as exc:
        pet_log(f"ERROR: {exc}")
        print(f"pet-cli: {exc}", file=sys.stderr)
        return EXIT_DEVICE_FAILURE
    except KeyboardInterrupt:
        pet_log("Interrupted")

    pet_log("Clean exit")
    return EXIT_OK


def cli() -> None:
    sys.exit(main())


if __name__ == "__main__":
    cli()
