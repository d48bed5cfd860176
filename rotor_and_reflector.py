# rotor_and_reflector.py
from __future__ import annotations

from enum import Enum

from alphabet import Alphabet
from errors import ConfigurationError
from permutation import Permutation


class RotorKind(Enum):
    """Rotor variant; the value is its type letter in a machine description."""

    FIXED = "N"
    MOVING = "M"
    REFLECTOR = "R"


class Rotor:
    """A wiring plus a rotational setting.

    Which of advancing, notching and reflecting a rotor does depends only on
    its ``kind``. Build one through :meth:`fixed`, :meth:`moving` or
    :meth:`reflector`.
    """

    def __init__(
        self,
        name: str,
        permutation: Permutation,
        kind: RotorKind,
        notches: str = "",
    ) -> None:
        match kind:
            case RotorKind.MOVING:
                if not notches:
                    raise ConfigurationError(f"Moving rotor {name} needs a notch")
            case RotorKind.FIXED | RotorKind.REFLECTOR:
                if notches:
                    raise ConfigurationError(
                        f"Rotor {name} cannot have notches: it does not move"
                    )
        bad = set(notches) - set(permutation.alphabet)
        if bad:
            raise ConfigurationError(
                f"Notch {min(bad)!r} of rotor {name} not in alphabet"
            )

        self.name = name
        self.kind = kind
        self.notches = frozenset(notches)
        self._permutation = permutation
        self._setting = 0
        self._ring = 0

    @classmethod
    def fixed(cls, name: str, permutation: Permutation) -> "Rotor":
        return cls(name, permutation, RotorKind.FIXED)

    @classmethod
    def moving(cls, name: str, permutation: Permutation, notches: str) -> "Rotor":
        return cls(name, permutation, RotorKind.MOVING, notches)

    @classmethod
    def reflector(cls, name: str, permutation: Permutation) -> "Rotor":
        return cls(name, permutation, RotorKind.REFLECTOR)

    # ── capabilities ──────────────────────────────────────────────
    @property
    def rotates(self) -> bool:
        return self.kind is RotorKind.MOVING

    @property
    def reflects(self) -> bool:
        return self.kind is RotorKind.REFLECTOR

    @property
    def permutation(self) -> Permutation:
        return self._permutation

    @property
    def alphabet(self) -> Alphabet:
        return self._permutation.alphabet

    def size(self) -> int:
        return self._permutation.size()

    # ── setting & ring helpers ────────────────────────────────────
    @property
    def setting(self) -> int:
        return self._setting

    @property
    def ring(self) -> int:
        return self._ring

    def _position(self, posn: int | str) -> int:
        if isinstance(posn, str):
            return self.alphabet.to_index(posn)
        return posn % self.size()

    def set(self, posn: int | str) -> None:
        """Turn the rotor to *posn*, an index or a window symbol."""
        self._setting = self._position(posn)

    def set_ring(self, posn: int | str) -> None:
        self._ring = self._position(posn)

    # ── stepping --------------------------------------------------
    def at_notch(self) -> bool:
        match self.kind:
            case RotorKind.MOVING:
                return self.alphabet.to_symbol(self._setting) in self.notches
            case RotorKind.FIXED | RotorKind.REFLECTOR:
                return False

    def advance(self) -> None:
        match self.kind:
            case RotorKind.MOVING:
                self._setting = (self._setting + 1) % self.size()
            case RotorKind.FIXED | RotorKind.REFLECTOR:
                pass

    # ── signal paths ---------------------------------------------
    def convert_forward(self, p: int) -> int:
        offset = self._setting - self._ring
        perm = self._permutation
        return perm.wrap(perm.permute(perm.wrap(p + offset)) - offset)

    def convert_backward(self, e: int) -> int:
        offset = self._setting - self._ring
        perm = self._permutation
        return perm.wrap(perm.invert(perm.wrap(e + offset)) - offset)

    # ── niceties --------------------------------------------------
    def __repr__(self) -> str:
        return (
            f"<Rotor {self.name} {self.kind.name} "
            f"pos={self._setting} ring={self._ring}>"
        )
