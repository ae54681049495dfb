"""Render matching source lines as linked, highlighted context."""

from __future__ import annotations

from typing import Iterable, List, Optional, TextIO, Tuple
from urllib.parse import quote_plus

from sourcelens.analysis.definitions import Definitions
from sourcelens.analysis.scopes import Scopes
from sourcelens.analysis.tokenizer import PlainLineTokenizer
from sourcelens.utils.web import htmlize, uri_encode_path

DEFAULT_LIMIT = 10


class SourceContext:
    """Query-bound renderer of context lines for plain text files."""

    def __init__(
        self, terms: Iterable[str], *, def_search: bool = False, limit: int = DEFAULT_LIMIT
    ) -> None:
        self.terms = frozenset(term.lower() for term in terms if term)
        self.def_search = def_search
        self.limit = limit

    def render_lines(
        self,
        numbered_lines: Iterable[Tuple[int, str]],
        *,
        path: str,
        xref_prefix: str,
        more_prefix: str,
        definitions: Optional[Definitions] = None,
        scopes: Optional[Scopes] = None,
        tab_size: int = 0,
    ) -> str:
        """Render up to ``limit`` matching lines, then an ``[all...]`` link."""
        tokenizer = PlainLineTokenizer(self.terms, tab_size=tab_size)
        path_e = uri_encode_path(path)
        parts: List[str] = []
        shown = 0
        for number, line in numbered_lines:
            matched = tokenizer.matched_terms(line)
            if not matched:
                continue
            defs = definitions.definitions_of(number, matched) if definitions is not None else []
            if self.def_search and not defs:
                continue
            if shown == self.limit:
                query = quote_plus(" ".join(sorted(self.terms)))
                parts.append(f'<a href="{more_prefix}/{path_e}?t={query}">[all...]</a>')
                break
            shown += 1
            parts.append(
                f'<a class="s" href="{xref_prefix}/{path_e}#{number}">'
                f'<span class="l">{number}</span> {tokenizer.highlight(line)}</a>'
            )
            if defs:
                parts.append(f" <i>{htmlize(defs[0].type)}</i>")
            scope = scopes.get_scope(number) if scopes is not None else None
            if scope is not None:
                parts.append(f' <span class="scope">in {htmlize(scope.name)}()</span>')
            parts.append("<br/>")
        return "".join(parts)

    def get_context(self, reader: TextIO, **kwargs) -> str:
        """Re-tokenize ``reader`` line by line and render its context."""
        return self.render_lines(enumerate(reader, start=1), **kwargs)
