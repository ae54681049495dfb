"""Excerpt selection for cross-referenced and HTML documents."""

from __future__ import annotations

import re
from typing import Iterable, List

import numpy as np

from sourcelens.analysis.tokenizer import TOKEN_RE
from sourcelens.utils.web import htmlize

DEFAULT_WINDOW = 20

_SPACE_RE = re.compile(r"\s+")


class Summarizer:
    """Pick the window of words holding the most query terms."""

    def __init__(self, terms: Iterable[str], *, window: int = DEFAULT_WINDOW) -> None:
        self.terms = sorted({term.lower() for term in terms if term})
        self.window = max(window, 1)

    def summarize(self, text: str) -> str:
        tokens = list(TOKEN_RE.finditer(text))
        if not tokens:
            return ""

        words = np.array([match.group().lower() for match in tokens])
        hits = np.isin(words, np.array(self.terms, dtype=str)).astype(np.int32)
        width = min(self.window, len(tokens))
        density = np.convolve(hits, np.ones(width, dtype=np.int32), mode="valid")
        start = int(np.argmax(density))
        end = start + width

        parts: List[str] = ["..."] if start > 0 else []
        for index in range(start, end):
            match = tokens[index]
            if index > start:
                gap = text[tokens[index - 1].end() : match.start()]
                parts.append(htmlize(_SPACE_RE.sub(" ", gap)))
            word = htmlize(match.group())
            parts.append(f"<b>{word}</b>" if hits[index] else word)
        if end < len(tokens):
            parts.append("...")
        return "".join(parts)
