# alphabet.py
from __future__ import annotations

from collections.abc import Iterator

from errors import ConfigurationError


class Alphabet:
    def __init__(self, symbols: str) -> None:
        seen: set[str] = set()
        for ch in symbols:
            if ch in seen:
                raise ConfigurationError(f"Symbol {ch!r} repeated in alphabet")
            seen.add(ch)

        self._symbols: str = symbols
        self._to_index: dict[str, int] = {
            ch: i for i, ch in enumerate(symbols)
        }

    @property
    def symbols(self) -> str:
        return self._symbols

    def size(self) -> int:
        return len(self._symbols)

    # symbol → integer signal
    def to_index(self, symbol: str) -> int:
        try:
            return self._to_index[symbol]
        except KeyError:
            raise ConfigurationError(
                f"Invalid character {symbol!r} for current alphabet."
            ) from None

    # integer signal → symbol
    def to_symbol(self, index: int) -> str:
        if not (0 <= index < len(self._symbols)):
            hi = len(self._symbols) - 1
            raise ConfigurationError(f"Signal {index} out of range 0–{hi}")
        return self._symbols[index]

    def __contains__(self, symbol: object) -> bool:
        return symbol in self._to_index

    def __len__(self) -> int:
        return len(self._symbols)

    def __iter__(self) -> Iterator[str]:
        return iter(self._symbols)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Alphabet):
            return NotImplemented
        return self._symbols == other._symbols

    def __hash__(self) -> int:
        return hash(self._symbols)

    def __repr__(self) -> str:
        return f"<Alphabet {self._symbols!r}>"
