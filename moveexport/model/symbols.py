"""Symbol interning for the compiled model view."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True, order=True)
class Symbol:
    """An interned name. Only meaningful together with the pool that made it."""

    index: int


@dataclass
class SymbolPool:
    """Symbol table for one compilation run.

    Every name in a `GlobalEnv` is interned here. The pool is handed to each
    resolution call explicitly; there is no process-wide pool.
    """

    _strings: list[str] = field(default_factory=list)
    _lookup: dict[str, Symbol] = field(default_factory=dict)

    def make(self, text: str) -> Symbol:
        """Intern a string, returning the existing symbol if already known."""
        sym = self._lookup.get(text)
        if sym is None:
            sym = Symbol(len(self._strings))
            self._strings.append(text)
            self._lookup[text] = sym
        return sym

    def string(self, sym: Symbol) -> str:
        if not 0 <= sym.index < len(self._strings):
            raise KeyError(f"Symbol {sym.index} not in pool")
        return self._strings[sym.index]

    def __len__(self) -> int:
        return len(self._strings)

    def __contains__(self, text: object) -> bool:
        return text in self._lookup
