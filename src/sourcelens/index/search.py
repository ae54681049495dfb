"""Hit lookup over the stored document fields."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import List, Set

from sourcelens.analysis.definitions import Definitions
from sourcelens.analysis.tokenizer import TOKEN_RE
from sourcelens.index.storage import HitStore
from sourcelens.models import Hit


@dataclass(slots=True)
class Query:
    terms: List[str] = field(default_factory=list)
    def_search: bool = False

    @classmethod
    def parse(cls, text: str, *, def_search: bool = False) -> "Query":
        terms = [token.lower() for token in TOKEN_RE.findall(text)]
        return cls(terms=terms, def_search=def_search)


class Searcher:
    """List the documents holding every query term, in path order.

    Relevance ranking is left to the search engine proper; this only feeds
    the result page with a hit list.
    """

    def __init__(self, store: HitStore) -> None:
        self.store = store

    def search(self, query: Query) -> List[int]:
        if not query.terms:
            return []
        wanted = set(query.terms)
        return [
            hit.doc_id
            for hit in self.store.list_documents()
            if wanted <= self._terms_of(hit, query)
        ]

    @staticmethod
    def _terms_of(hit: Hit, query: Query) -> Set[str]:
        if query.def_search:
            return {symbol.lower() for symbol in Definitions.from_field(hit.tags).symbols()}
        terms = {token.lower() for token in TOKEN_RE.findall(hit.path or "")}
        if hit.positions is not None:
            terms.update(json.loads(hit.positions.decode("utf-8")).get("terms", {}))
        return terms
