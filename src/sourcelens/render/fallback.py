"""Re-analysis of plain text files when stored context cannot be used."""

from __future__ import annotations

from pathlib import Path

from sourcelens.analysis.definitions import Definitions
from sourcelens.analysis.scopes import Scopes
from sourcelens.context.source import SourceContext
from sourcelens.models import Hit
from sourcelens.utils.files import open_source


class PlainReanalyzer:
    """Rebuild a hit's context from the live source file.

    I/O errors opening or reading the file are not caught here; they abort
    the page being rendered.
    """

    def __init__(self, source_context: SourceContext, source_root: Path) -> None:
        self.source_context = source_context
        self.source_root = Path(source_root)

    def reanalyze(self, hit: Hit, *, xref_prefix: str, more_prefix: str, tab_size: int = 0) -> str:
        definitions = Definitions.from_field(hit.tags)
        scopes = Scopes.from_field(hit.scopes)
        with open_source(self.source_root, hit.path) as reader:
            return self.source_context.get_context(
                reader,
                path=hit.path,
                xref_prefix=xref_prefix,
                more_prefix=more_prefix,
                definitions=definitions,
                scopes=scopes,
                tab_size=tab_size,
            )
