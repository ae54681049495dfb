"""Scope tables (functions, classes) stored alongside indexed documents."""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, field
from typing import List, Optional


@dataclass(frozen=True, slots=True)
class Scope:
    line_from: int
    line_to: int
    name: str
    namespace: str = ""
    signature: str = ""

    def matches(self, line: int) -> bool:
        return self.line_from <= line <= self.line_to


@dataclass(slots=True)
class Scopes:
    scopes: List[Scope] = field(default_factory=list)

    def get_scope(self, line: int) -> Optional[Scope]:
        """Return the innermost scope containing ``line``, if any."""
        best: Optional[Scope] = None
        for scope in self.scopes:
            if scope.matches(line) and (
                best is None or scope.line_to - scope.line_from < best.line_to - best.line_from
            ):
                best = scope
        return best

    def serialize(self) -> bytes:
        return json.dumps([asdict(scope) for scope in self.scopes]).encode("utf-8")

    @classmethod
    def from_field(cls, data: Optional[bytes]) -> "Scopes":
        return cls() if data is None else cls.deserialize(data)

    @classmethod
    def deserialize(cls, data: bytes) -> "Scopes":
        rows = json.loads(data.decode("utf-8"))
        if not isinstance(rows, list):
            raise ValueError("Scopes payload must be a list")
        try:
            return cls(scopes=[Scope(**row) for row in rows])
        except TypeError as exc:
            raise ValueError(f"Malformed scope entry: {exc}") from exc
