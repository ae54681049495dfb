"""Shared fixtures for the sourcelens tests."""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Optional

import pytest

from sourcelens.analysis.tokenizer import encode_positions
from sourcelens.index.storage import HitStore
from sourcelens.models import Genre, RenderContext
from sourcelens.utils.files import mtime_index_date


@pytest.fixture
def store(tmp_path: Path):
    """Create a temporary hit store."""
    store = HitStore(tmp_path / "index.db")
    yield store
    store.close()


@pytest.fixture
def source_root(tmp_path: Path) -> Path:
    root = tmp_path / "src"
    root.mkdir()
    return root


@pytest.fixture
def data_root(tmp_path: Path) -> Path:
    root = tmp_path / "data"
    (root / "xref").mkdir(parents=True)
    return root


@pytest.fixture
def render_context(data_root: Path, source_root: Path) -> RenderContext:
    return RenderContext(data_root=data_root, source_root=source_root)


@pytest.fixture
def add_plain(store: HitStore, source_root: Path) -> Callable[..., int]:
    """Write a source file and index it as plain text.

    With ``fresh`` the stored date matches the file, so stored positions
    can be used; otherwise only the file itself is trustworthy.
    """

    def _add(
        path: str,
        text: str,
        *,
        fresh: bool = True,
        positions: bool = True,
        tags: Optional[bytes] = None,
        scopes: Optional[bytes] = None,
    ) -> int:
        target = source_root / path
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(text, encoding="utf-8")
        date = mtime_index_date(target) if fresh else "20000101000000000"
        return store.add_document(
            path,
            Genre.PLAIN,
            date=date,
            tags=tags,
            scopes=scopes,
            positions=encode_positions(text) if positions else None,
        )

    return _add
