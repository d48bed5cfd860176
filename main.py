# main.py
from __future__ import annotations

import argparse
import contextlib
import logging
import sys
from collections.abc import Iterable, Sequence
from pathlib import Path
from typing import TextIO

from config_reader import is_setup_line, read_config, setup_machine
from debug import Debug, setup_logging
from errors import ConfigurationError
from machine import Machine
from utilities import SUITES, group_blocks, preprocess_message

log = logging.getLogger("enigma")

BLOCK = 5   # display group size


# ────────────────────────────────────────────────────────────────────────
#  1. Message processing
# ────────────────────────────────────────────────────────────────────────


def process(machine: Machine, lines: Iterable[str], out: TextIO) -> None:
    """Run every message in *lines* through *machine*, writing to *out*.

    A line starting with ``*`` sets the machine up for the lines after it;
    blank lines are copied through. Output written before an error stays.
    """
    configured = False
    for raw in lines:
        line = raw.rstrip("\r\n")
        if is_setup_line(line):
            setup_machine(machine, line)
            configured = True
            continue

        msg = preprocess_message(line)
        if not msg:
            out.write("\n")
            continue
        if not configured:
            raise ConfigurationError("Message found before any setup line")
        out.write(group_blocks(machine.convert_message(msg), BLOCK) + "\n")


# ────────────────────────────────────────────────────────────────────────
#  2. CLI helpers
# ────────────────────────────────────────────────────────────────────────


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Encrypt or decrypt with a rotor machine")
    p.add_argument("input", nargs="?", metavar="INPUT", help="Message file. Default: standard input")
    p.add_argument("output", nargs="?", metavar="OUTPUT", help="Result file. Default: standard output")
    p.add_argument("-c", "--config", metavar="FILE", help="Machine description file. Overrides --suite.")
    p.add_argument("-s", "--suite", choices=sorted(SUITES), default="M4", help="Built-in machine to use when no --config is given. Default: M4")
    p.add_argument("-v", "--verbose", action="store_true", help="Trace every rotor step and signal hop.")
    p.add_argument("--log-file", metavar="FILE", help="Also write log messages to FILE.")
    return p.parse_args(argv)


def _open_input(name: str | None):
    if name is None:
        return contextlib.nullcontext(sys.stdin)
    return open(name, "r", encoding="utf-8")


def _open_output(name: str | None):
    if name is None:
        return contextlib.nullcontext(sys.stdout)
    return open(name, "w", encoding="utf-8")


# ────────────────────────────────────────────────────────────────────────
#  3. Main entry point
# ────────────────────────────────────────────────────────────────────────


def main(argv: Sequence[str] | None = None) -> None:
    args = parse_args(argv)
    setup_logging(args.verbose, log_to=args.log_file)

    debug = Debug()
    if args.verbose:
        debug.enable_all()

    try:
        if args.config:
            text = Path(args.config).read_text(encoding="utf-8")
        else:
            text = SUITES[args.suite]
        machine = read_config(text, debug)

        with _open_input(args.input) as src, _open_output(args.output) as dst:
            process(machine, src, dst)
    except (ConfigurationError, OSError) as e:
        log.error("Error: %s", e)
        sys.exit(1)


if __name__ == "__main__":
    main()
