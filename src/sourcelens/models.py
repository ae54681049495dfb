"""Core sourcelens data models."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Optional


class Genre(Enum):
    """Content kind of an indexed file, stored as a one-letter code."""

    XREFABLE = "x"
    HTML = "h"
    PLAIN = "p"
    OTHER = "o"

    @classmethod
    def get(cls, code: Optional[str]) -> "Genre":
        for genre in cls:
            if genre.value == code:
                return genre
        return cls.OTHER


@dataclass(frozen=True, slots=True)
class Hit:
    """Stored fields of one matching document."""

    doc_id: int
    path: Optional[str]
    genre: Genre = Genre.OTHER
    date: Optional[str] = None
    tags: Optional[bytes] = None
    scopes: Optional[bytes] = None
    positions: Optional[bytes] = None

    @property
    def parent(self) -> str:
        if self.path is None:
            raise ValueError(f"document {self.doc_id} has no path")
        index = self.path.rfind("/")
        return self.path[:index] if index >= 0 else ""

    @property
    def name(self) -> str:
        if self.path is None:
            raise ValueError(f"document {self.doc_id} has no path")
        return self.path[self.path.rfind("/") + 1 :]


@dataclass(slots=True)
class DirectoryGroup:
    """Hits sharing one parent directory, in rank order."""

    directory: str
    doc_ids: List[int] = field(default_factory=list)


class SnippetSource(Enum):
    XREF = "xref"
    HTML = "html"
    FAST_CONTEXT = "fast"
    SLOW_CONTEXT = "slow"
    NONE = "none"


@dataclass(frozen=True, slots=True)
class Snippet:
    """Rendered context fragment and the source that produced it."""

    text: str
    source: SnippetSource

    @classmethod
    def empty(cls) -> "Snippet":
        return cls("", SnippetSource.NONE)


@dataclass(frozen=True, slots=True)
class RenderContext:
    """Per-request settings, read-only while a page renders."""

    data_root: Path
    source_root: Path
    context_path: str = "/source"
    tab_size: int = 8
    source_context: bool = True
    history_context: bool = False
    compressed: bool = False
    last_edited_display: bool = True
