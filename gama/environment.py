from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional

from gama.errors import SymbolTableFull, UndeclaredVariable, UninitializedVariable

DEFAULT_MAX_SYMBOLS = 256


@dataclass
class Symbol:
    name: str
    value: int = 0
    defined: bool = False


class SymbolTable:
    """Flat name -> integer store shared by the whole program run.

    There is no scoping: every declaration, in any block, lands in the same
    namespace, and entries are never removed. Names are unique; the index
    of an entry is its insertion position.
    """
    def __init__(self, capacity: Optional[int] = None):
        self.capacity = capacity
        self.symbols: List[Symbol] = []
        self.index: Dict[str, int] = {}

    def __len__(self) -> int:
        return len(self.symbols)

    def __contains__(self, name: str) -> bool:
        return name in self.index

    def __iter__(self) -> Iterator[Symbol]:
        return iter(self.symbols)

    def lookup(self, name: str) -> Optional[int]:
        return self.index.get(name)

    def declare(self, name: str) -> int:
        idx = self.index.get(name)
        if idx is not None:
            return idx
        if self.capacity is not None and len(self.symbols) >= self.capacity:
            raise SymbolTableFull(f"too many variables (limit {self.capacity})")
        self.symbols.append(Symbol(name))
        self.index[name] = len(self.symbols) - 1
        return self.index[name]

    def undefine(self, name: str) -> int:
        """Declare `name` and mark it as not yet assigned."""
        idx = self.declare(name)
        self.symbols[idx].defined = False
        return idx

    def set(self, name: str, value: int) -> None:
        symbol = self.symbols[self.declare(name)]
        symbol.value = value
        symbol.defined = True

    def get(self, name: str, line: Optional[int] = None) -> int:
        idx = self.index.get(name)
        if idx is None:
            raise UndeclaredVariable(name, line)
        symbol = self.symbols[idx]
        if not symbol.defined:
            raise UninitializedVariable(name, line)
        return symbol.value

    def snapshot(self) -> Dict[str, int]:
        """Values of every defined symbol, in declaration order."""
        return {s.name: s.value for s in self.symbols if s.defined}
