"""Line oriented tokenization and query term highlighting."""

from __future__ import annotations

import json
import re
from typing import Dict, Iterable, List, Set

from sourcelens.utils.web import htmlize

TOKEN_RE = re.compile(r"\w+")


class PlainLineTokenizer:
    """Find query terms in source lines and render them highlighted."""

    def __init__(self, terms: Iterable[str], *, tab_size: int = 0) -> None:
        self.terms = frozenset(term.lower() for term in terms if term)
        self.tab_size = tab_size

    def expand(self, line: str) -> str:
        line = line.rstrip("\r\n")
        return line.expandtabs(self.tab_size) if self.tab_size > 0 else line

    def matched_terms(self, line: str) -> Set[str]:
        return {
            match.group().lower()
            for match in TOKEN_RE.finditer(line)
            if match.group().lower() in self.terms
        }

    def highlight(self, line: str) -> str:
        line = self.expand(line)
        parts: List[str] = []
        last = 0
        for match in TOKEN_RE.finditer(line):
            if match.group().lower() not in self.terms:
                continue
            parts.append(htmlize(line[last : match.start()]))
            parts.append(f"<b>{htmlize(match.group())}</b>")
            last = match.end()
        parts.append(htmlize(line[last:]))
        return "".join(parts)


def encode_positions(text: str) -> bytes:
    """Build the per-line term position blob stored with a plain document.

    The blob maps every lower-cased token to the line numbers (1-based)
    it occurs on and keeps the text of those lines, so context can be
    rendered without reopening the file.
    """
    terms: Dict[str, List[int]] = {}
    lines: Dict[str, str] = {}
    for number, line in enumerate(text.splitlines(), start=1):
        tokens = {token.lower() for token in TOKEN_RE.findall(line)}
        if not tokens:
            continue
        lines[str(number)] = line
        for token in tokens:
            terms.setdefault(token, []).append(number)
    return json.dumps({"terms": terms, "lines": lines}).encode("utf-8")
