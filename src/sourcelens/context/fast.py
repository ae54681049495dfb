"""Context rendered straight from the stored per-line term positions."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Union

from sourcelens.analysis.definitions import Definitions
from sourcelens.analysis.scopes import Scopes
from sourcelens.context.source import SourceContext
from sourcelens.models import Hit
from sourcelens.utils.files import mtime_index_date


@dataclass(frozen=True, slots=True)
class FastContext:
    fragment: str


@dataclass(frozen=True, slots=True)
class NeedsFallback:
    reason: str


FastContextResult = Union[FastContext, NeedsFallback]


class FastContextEngine:
    """Render plain text context from index data without reading the file.

    The stored positions are only trusted while the source file still has
    the modification date recorded at index time.
    """

    def __init__(self, source_context: SourceContext, source_root: Path) -> None:
        self.source_context = source_context
        self.source_root = Path(source_root)

    def render(
        self, hit: Hit, *, xref_prefix: str, more_prefix: str, tab_size: int = 0
    ) -> FastContextResult:
        if hit.positions is None:
            return NeedsFallback("no stored line positions")
        try:
            current = mtime_index_date(self.source_root / hit.path)
        except OSError:
            return NeedsFallback("source file unavailable")
        if hit.date != current:
            return NeedsFallback("source changed since indexing")

        try:
            payload = json.loads(hit.positions.decode("utf-8"))
            terms = payload["terms"]
            lines = payload["lines"]
        except (ValueError, KeyError, TypeError):
            return NeedsFallback("unreadable line positions")

        numbers = sorted(
            {number for term in self.source_context.terms for number in terms.get(term, ())}
        )
        fragment = self.source_context.render_lines(
            ((number, lines[str(number)]) for number in numbers if str(number) in lines),
            path=hit.path,
            xref_prefix=xref_prefix,
            more_prefix=more_prefix,
            definitions=Definitions.from_field(hit.tags),
            scopes=Scopes.from_field(hit.scopes),
            tab_size=tab_size,
        )
        return FastContext(fragment)
