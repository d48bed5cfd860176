# permutation.py
from __future__ import annotations

from alphabet import Alphabet
from errors import ConfigurationError


def parse_cycles(text: str, alphabet: Alphabet) -> tuple[tuple[int, ...], ...]:
    """Split cycle notation such as ``"(AELT) (BK)"`` into index tuples.

    Whitespace is ignored everywhere. Every symbol must sit inside exactly
    one group and may appear only once in the whole text.
    """
    cycles: list[tuple[int, ...]] = []
    used: set[str] = set()
    current: list[int] | None = None

    for ch in text:
        if ch.isspace():
            continue
        if ch == "(":
            if current is not None:
                raise ConfigurationError(f"Nested '(' in cycles {text!r}")
            current = []
        elif ch == ")":
            if current is None:
                raise ConfigurationError(f"Unbalanced ')' in cycles {text!r}")
            if not current:
                raise ConfigurationError(f"Empty cycle in {text!r}")
            cycles.append(tuple(current))
            current = None
        else:
            if current is None:
                raise ConfigurationError(
                    f"Symbol {ch!r} outside any cycle in {text!r}"
                )
            if ch not in alphabet:
                raise ConfigurationError(f"Symbol {ch!r} not in alphabet")
            if ch in used:
                raise ConfigurationError(
                    f"Symbol {ch!r} appears in more than one cycle"
                )
            used.add(ch)
            current.append(alphabet.to_index(ch))

    if current is not None:
        raise ConfigurationError(f"Unbalanced '(' in cycles {text!r}")
    return tuple(cycles)


class Permutation:
    """A bijection over alphabet indices given in cycle notation.

    Symbols left out of every cycle map to themselves, so ``""`` is the
    identity over the whole alphabet.
    """

    def __init__(self, cycles: str, alphabet: Alphabet) -> None:
        self._alphabet = alphabet
        self._cycles = parse_cycles(cycles, alphabet)

        # integer lookup tables
        size = alphabet.size()
        self._fwd = list(range(size))
        self._rev = list(range(size))
        for cycle in self._cycles:
            for pos, src in enumerate(cycle):
                dst = cycle[(pos + 1) % len(cycle)]
                self._fwd[src] = dst
                self._rev[dst] = src

    @property
    def alphabet(self) -> Alphabet:
        return self._alphabet

    @property
    def cycles(self) -> tuple[tuple[int, ...], ...]:
        return self._cycles

    def size(self) -> int:
        return self._alphabet.size()

    def wrap(self, p: int) -> int:
        """Return *p* modulo the alphabet size (never negative)."""
        return p % self.size()

    # ── index forms ───────────────────────────────────────────────
    def permute(self, p: int) -> int:
        return self._fwd[self.wrap(p)]

    def invert(self, c: int) -> int:
        return self._rev[self.wrap(c)]

    # ── symbol forms ──────────────────────────────────────────────
    def permute_symbol(self, p: str) -> str:
        return self._alphabet.to_symbol(self.permute(self._alphabet.to_index(p)))

    def invert_symbol(self, c: str) -> str:
        return self._alphabet.to_symbol(self.invert(self._alphabet.to_index(c)))

    def derangement(self) -> bool:
        """True iff no symbol maps to itself and every symbol is cycled."""
        covered = sum(len(cycle) for cycle in self._cycles)
        return covered == self.size() and all(
            len(cycle) >= 2 for cycle in self._cycles
        )

    def cycle_text(self) -> str:
        """Render the cycles back into notation, e.g. ``"(AB) (CDE)"``."""
        to_symbol = self._alphabet.to_symbol
        return " ".join(
            "(" + "".join(to_symbol(i) for i in cycle) + ")"
            for cycle in self._cycles
        )

    def __repr__(self) -> str:
        return f"<Permutation {self.cycle_text() or 'identity'}>"
