# config_reader.py
from __future__ import annotations

import logging
from collections.abc import Iterator, Sequence

from alphabet import Alphabet
from debug import Debug
from errors import ConfigurationError
from machine import Machine
from permutation import Permutation
from rotor_and_reflector import Rotor, RotorKind

log = logging.getLogger("enigma.config")

_FORBIDDEN = set("()*")


# ────────────────────────────────────────────────────────────────────────
#  1. Machine description
# ────────────────────────────────────────────────────────────────────────


def read_alphabet(token: str) -> Alphabet:
    bad = _FORBIDDEN & set(token)
    if bad:
        raise ConfigurationError(f"Alphabet cannot contain {min(bad)!r}")
    return Alphabet(token)


def parse_rotor(name: str, type_notches: str, cycles: str, alphabet: Alphabet) -> Rotor:
    """Build one rotor from its name, type token (``MQ``, ``N``, ``R``) and wiring."""
    try:
        kind = RotorKind(type_notches[:1])
    except ValueError:
        raise ConfigurationError(
            f"Bad type {type_notches!r} for rotor {name}: expected M, N or R"
        ) from None
    notches = type_notches[1:]
    perm = Permutation(cycles, alphabet)

    match kind:
        case RotorKind.MOVING:
            return Rotor.moving(name, perm, notches)
        case RotorKind.FIXED:
            return Rotor(name, perm, kind, notches)
        case RotorKind.REFLECTOR:
            if not perm.derangement():
                log.warning("Reflector %s wiring is not a derangement", name)
            return Rotor(name, perm, kind, notches)


def _take_cycles(tokens: list[str], start: int) -> tuple[str, int]:
    """Join the cycle tokens beginning at *start*; return (text, next index)."""
    parts: list[str] = []
    depth = 0
    i = start
    while i < len(tokens) and (depth > 0 or tokens[i].startswith("(")):
        tok = tokens[i]
        depth += tok.count("(") - tok.count(")")
        parts.append(tok)
        i += 1
    return " ".join(parts), i


def read_config(text: str, debug: Debug | None = None) -> Machine:
    """Return a Machine built from a machine description.

    The description is whitespace separated: the alphabet, the number of
    rotor slots, the number of pawls, then for each rotor its name, its type
    token and its wiring in cycle notation.
    """
    debug = debug if debug is not None else Debug()
    tokens = text.split()
    if len(tokens) < 3:
        raise ConfigurationError("configuration file truncated")

    alphabet = read_alphabet(tokens[0])
    try:
        num_rotors, pawls = int(tokens[1]), int(tokens[2])
    except ValueError:
        raise ConfigurationError(
            f"Rotor and pawl counts must be integers, got {tokens[1]!r} {tokens[2]!r}"
        ) from None

    rotors: list[Rotor] = []
    i = 3
    while i < len(tokens):
        name = tokens[i]
        if name.startswith("("):
            raise ConfigurationError(f"Wiring {name!r} without a rotor name")
        if i + 1 >= len(tokens):
            raise ConfigurationError(f"bad rotor description for {name}")
        cycles, nxt = _take_cycles(tokens, i + 2)
        rotor = parse_rotor(name, tokens[i + 1], cycles, alphabet)
        debug.log("config", f"{rotor!r} {cycles}")
        rotors.append(rotor)
        i = nxt

    return Machine(alphabet, num_rotors, pawls, rotors, debug)


# ────────────────────────────────────────────────────────────────────────
#  2. Per-message setup line
# ────────────────────────────────────────────────────────────────────────


def is_setup_line(line: str) -> bool:
    return line.lstrip().startswith("*")


def _words(tokens: list[str]) -> Iterator[str]:
    for tok in tokens:
        if tok.startswith("("):
            return
        yield tok


def setup_machine(machine: Machine, line: str) -> None:
    """Configure *machine* from ``* REFL R1 ... SETTING [RINGS] [PLUGS]``."""
    stripped = line.strip()
    if not stripped.startswith("*"):
        raise ConfigurationError(f"Setup line must start with '*': {line!r}")

    tokens = stripped[1:].split()
    n = machine.num_rotors()
    words = list(_words(tokens))
    if len(words) < n:
        raise ConfigurationError(f"Setup needs {n} rotor names, got {len(words)}")
    if len(words) == n:
        raise ConfigurationError("Setup line has no rotor setting")
    if len(words) > n + 2:
        raise ConfigurationError(f"Unexpected setup token {words[n + 2]!r}")

    names, setting = words[:n], words[n]
    if len(words) == n + 2:
        rings = words[n + 1]
    else:
        rings = machine.alphabet().to_symbol(0) * (n - 1)
    plugboard = Permutation(" ".join(tokens[len(words):]), machine.alphabet())

    # validate everything before the machine changes
    machine.check_rotors(names)
    check_pawls(machine, names)
    machine.check_window_text(setting, "settings")
    machine.check_window_text(rings, "ring settings")

    machine.insert_rotors(names)
    machine.set_rotors(setting)
    machine.set_rings(rings)
    machine.set_plugboard(plugboard)


def check_pawls(machine: Machine, names: Sequence[str]) -> None:
    """Moving rotors must fill exactly the rightmost ``num_pawls()`` slots."""
    n, pawls = machine.num_rotors(), machine.num_pawls()
    for k in range(1, n):
        rotor = machine.rotor_named(names[k])
        if rotor.rotates and k < n - pawls:
            raise ConfigurationError(f"Moving rotor {rotor.name} in a fixed slot")
        if not rotor.rotates and k >= n - pawls:
            raise ConfigurationError(f"Rotor {rotor.name} cannot move but sits under a pawl")
