"""Symbol definition tables stored alongside indexed documents."""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, field
from typing import Dict, Iterable, List, Optional, Set


@dataclass(frozen=True, slots=True)
class Tag:
    """A single symbol definition."""

    line: int
    symbol: str
    type: str
    text: str = ""


@dataclass(slots=True)
class Definitions:
    """Definitions of a file, looked up by line number or symbol."""

    tags: List[Tag] = field(default_factory=list)
    _by_line: Dict[int, List[Tag]] = field(default_factory=dict, init=False, repr=False)

    def __post_init__(self) -> None:
        for tag in self.tags:
            self._by_line.setdefault(tag.line, []).append(tag)

    def add_tag(self, line: int, symbol: str, type: str, text: str = "") -> None:
        tag = Tag(line=line, symbol=symbol, type=type, text=text)
        self.tags.append(tag)
        self._by_line.setdefault(line, []).append(tag)

    def symbols(self) -> Set[str]:
        return {tag.symbol for tag in self.tags}

    def definitions_of(self, line: int, symbols: Iterable[str]) -> List[Tag]:
        """Tags on ``line`` defining any of ``symbols`` (case-insensitive)."""
        wanted = {symbol.lower() for symbol in symbols}
        return [tag for tag in self._by_line.get(line, ()) if tag.symbol.lower() in wanted]

    def serialize(self) -> bytes:
        return json.dumps([asdict(tag) for tag in self.tags]).encode("utf-8")

    @classmethod
    def from_field(cls, data: Optional[bytes]) -> "Definitions":
        """Deserialize a stored field, treating an absent one as empty."""
        return cls() if data is None else cls.deserialize(data)

    @classmethod
    def deserialize(cls, data: bytes) -> "Definitions":
        rows = json.loads(data.decode("utf-8"))
        if not isinstance(rows, list):
            raise ValueError("Definitions payload must be a list")
        try:
            return cls(tags=[Tag(**row) for row in rows])
        except TypeError as exc:
            raise ValueError(f"Malformed definition entry: {exc}") from exc
