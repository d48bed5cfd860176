# machine.py  ─────────────────────────────────────────────────────
from __future__ import annotations

from collections.abc import Iterable, Sequence

from alphabet import Alphabet
from debug import Debug
from errors import ConfigurationError
from permutation import Permutation
from rotor_and_reflector import Rotor


class Machine:
    """A rotor machine: slot 0 holds the reflector, the last slot is fast.

    Rotors are kept in an arena and slots hold arena ids, so a name can be
    placed in at most one slot. The rotor objects are shared with the
    catalog they came from.
    """

    def __init__(
        self,
        alphabet: Alphabet,
        num_rotors: int,
        pawls: int,
        all_rotors: Iterable[Rotor],
        debug: Debug | None = None,
    ) -> None:
        if num_rotors <= 1:
            raise ConfigurationError("Machine needs more than one rotor slot")
        if not 0 <= pawls < num_rotors:
            raise ConfigurationError(
                f"Pawl count {pawls} must be in 0–{num_rotors - 1}"
            )

        self._alphabet = alphabet
        self._num_rotors = num_rotors
        self._pawls = pawls
        self._debug = debug if debug is not None else Debug()

        self._rotors: list[Rotor] = []
        self._ids: dict[str, int] = {}
        for rotor in all_rotors:
            if rotor.name in self._ids:
                raise ConfigurationError(f"Duplicate rotor name {rotor.name}")
            if rotor.alphabet != alphabet:
                raise ConfigurationError(
                    f"Rotor {rotor.name} uses a different alphabet"
                )
            self._ids[rotor.name] = len(self._rotors)
            self._rotors.append(rotor)

        self._slots: list[int] = []
        self._plugboard = Permutation("", alphabet)

    # ── accessors ───────────────────────────────────────────────

    def num_rotors(self) -> int:
        return self._num_rotors

    def num_pawls(self) -> int:
        return self._pawls

    def alphabet(self) -> Alphabet:
        return self._alphabet

    def plugboard(self) -> Permutation:
        return self._plugboard

    def available_rotors(self) -> list[Rotor]:
        return list(self._rotors)

    def rotor_named(self, name: str) -> Rotor:
        if name not in self._ids:
            raise ConfigurationError(f"Bad rotor name {name!r}")
        return self._rotors[self._ids[name]]

    def rotor(self, k: int) -> Rotor:
        """Rotor in slot *k*; slot 0 is the reflector."""
        if not self._slots:
            raise ConfigurationError("No rotors inserted")
        return self._rotors[self._slots[k]]

    def settings(self) -> str:
        """Window symbols of every slot right of the reflector."""
        return "".join(
            self._alphabet.to_symbol(self.rotor(k).setting)
            for k in range(1, self._num_rotors)
        )

    # ── configuration ───────────────────────────────────────────

    def check_rotors(self, names: Sequence[str]) -> list[int]:
        """Return arena ids for *names*, raising if they cannot fill the slots."""
        if len(names) != self._num_rotors:
            raise ConfigurationError(
                f"Need {self._num_rotors} rotors, got {len(names)}"
            )

        slots: list[int] = []
        for name in names:
            if name not in self._ids:
                raise ConfigurationError(f"Bad rotor name {name!r}")
            rid = self._ids[name]
            if rid in slots:
                raise ConfigurationError(f"Duplicate rotor name {name!r}")
            slots.append(rid)

        if not self._rotors[slots[0]].reflects:
            raise ConfigurationError(f"Reflector in wrong place: {names[0]}")
        for k, rid in enumerate(slots[1:], start=1):
            if self._rotors[rid].reflects:
                raise ConfigurationError(
                    f"Reflector {names[k]} in slot {k}: only slot 0 may reflect"
                )
        return slots

    def insert_rotors(self, names: Sequence[str]) -> None:
        """Fill the slots, left to right, with the rotors called *names*."""
        self._slots = self.check_rotors(names)

    def check_window_text(self, text: str, what: str = "settings") -> None:
        """Raise unless *text* has one alphabet symbol per non-reflector slot."""
        if len(text) != self._num_rotors - 1:
            raise ConfigurationError(
                f"Incorrect number of {what}: need {self._num_rotors - 1}, "
                f"got {len(text)}"
            )
        for ch in text:
            if ch not in self._alphabet:
                raise ConfigurationError(f"Symbol {ch!r} in {what} not in alphabet")

    def set_rotors(self, setting: str) -> None:
        """Turn slots 1.. to the window symbols in *setting*."""
        if not self._slots:
            raise ConfigurationError("No rotors inserted")
        self.check_window_text(setting, "settings")
        for k, ch in enumerate(setting, start=1):
            self.rotor(k).set(ch)

    def set_rings(self, rings: str) -> None:
        """Apply ring offsets to slots 1.., one symbol per slot."""
        if not self._slots:
            raise ConfigurationError("No rotors inserted")
        self.check_window_text(rings, "ring settings")
        for k, ch in enumerate(rings, start=1):
            self.rotor(k).set_ring(ch)

    def set_plugboard(self, plugboard: Permutation) -> None:
        if plugboard.alphabet != self._alphabet:
            raise ConfigurationError("Plugboard uses a different alphabet")
        self._plugboard = plugboard

    # ── stepping logic  ─────────────────────────────────────────

    def _advance_rotors(self) -> None:
        """Advance rotors one key-press, double-stepping where due."""
        n = self._num_rotors
        rotors = [self.rotor(k) for k in range(n)]

        # decide which rotors step from the pre-step snapshot
        notched = [r.at_notch() for r in rotors]
        move = [False] * n
        move[n - 1] = True
        for i in range(max(1, n - self._pawls), n):
            if notched[i] and rotors[i - 1].rotates:
                move[i] = move[i - 1] = True

        for rotor, step in zip(rotors, move):
            if step:
                rotor.advance()

    # ── convert one index  ──────────────────────────────────────

    def convert(self, c: int) -> int:
        """Advance the machine, then return the encoding of index *c*."""
        if not self._slots:
            raise ConfigurationError("No rotors inserted")
        debug = self._debug
        to_symbol = self._alphabet.to_symbol

        self._advance_rotors()
        if debug.active("stepping"):
            debug.log("stepping", f"[{self.settings()}] {to_symbol(c)}")

        c = self._plugboard.permute(c)
        if debug.active("plugboard"):
            debug.log("plugboard", f"in -> {to_symbol(c)}")

        c = self._apply_rotors(c)

        c = self._plugboard.permute(c)
        if debug.active("convert"):
            debug.log("convert", f"out -> {to_symbol(c)}")
        return c

    def _apply_rotors(self, c: int) -> int:
        debug = self._debug
        to_symbol = self._alphabet.to_symbol
        n = self._num_rotors

        for k in range(n - 1, 0, -1):
            rotor = self.rotor(k)
            c = rotor.convert_forward(c)
            if debug.active("rotor"):
                debug.log("rotor", f"{rotor.name} -> {to_symbol(c)}")

        reflector = self.rotor(0)
        c = reflector.convert_forward(c)
        if debug.active("reflector"):
            debug.log("reflector", f"{reflector.name} -> {to_symbol(c)}")

        for k in range(1, n):
            rotor = self.rotor(k)
            c = rotor.convert_backward(c)
            if debug.active("rotor"):
                debug.log("rotor", f"{rotor.name} <- {to_symbol(c)}")
        return c

    def convert_message(self, msg: str) -> str:
        """Encode or decode *msg*, moving the rotors as each symbol goes by."""
        to_index = self._alphabet.to_index
        to_symbol = self._alphabet.to_symbol
        return "".join(to_symbol(self.convert(to_index(ch))) for ch in msg)

    def __repr__(self) -> str:
        names = [self.rotor(k).name for k in range(self._num_rotors)] if self._slots else []
        return f"<Machine slots={names} pawls={self._pawls}>"
