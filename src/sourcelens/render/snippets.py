"""Per-hit snippet selection by content genre."""

from __future__ import annotations

import logging
import zlib
from pathlib import Path
from typing import Callable, Dict, Optional

from sourcelens.context.fast import FastContext, FastContextEngine, NeedsFallback
from sourcelens.context.summarizer import Summarizer
from sourcelens.models import Genre, Hit, RenderContext, Snippet, SnippetSource
from sourcelens.render.fallback import PlainReanalyzer
from sourcelens.utils.files import open_xref
from sourcelens.utils.web import MORE_P, XREF_P, strip_tags, uri_encode_path

LOGGER = logging.getLogger(__name__)

# Only a short excerpt is shown, so only the head of a document is read.
TAGS_BUDGET = 8 * 1024


def read_tags(
    base_dir: Path, path: str, compressed: bool, *, logger: logging.Logger = LOGGER
) -> str:
    """Plain text of the start of a cross-reference or HTML file, or ``""``."""
    try:
        with open_xref(base_dir, path, compressed=compressed) as reader:
            content = reader.read(TAGS_BUDGET)
    except (OSError, EOFError, UnicodeDecodeError, zlib.error) as exc:
        logger.warning(
            "An error reading tags from %s%s: %s",
            Path(base_dir, path),
            ".gz" if compressed else "",
            exc,
        )
        return ""
    return strip_tags(_drop_partial_tag(content))


def _drop_partial_tag(content: str) -> str:
    """Cut a tag left unterminated by the read budget."""
    start = content.rfind("<")
    if start > content.rfind(">"):
        return content[:start]
    return content


class SnippetExtractor:
    """Choose a content source for a hit and render its snippet."""

    def __init__(
        self,
        context: RenderContext,
        *,
        summarizer: Optional[Summarizer] = None,
        fast_context: Optional[FastContextEngine] = None,
        reanalyzer: Optional[PlainReanalyzer] = None,
        logger: logging.Logger = LOGGER,
    ) -> None:
        self.context = context
        self.summarizer = summarizer
        self.fast_context = fast_context
        self.reanalyzer = reanalyzer
        self.logger = logger
        self.xref_dir = Path(context.data_root, XREF_P.lstrip("/"))
        ctx_e = uri_encode_path(context.context_path)
        self.xref_prefix = ctx_e + XREF_P
        self.more_prefix = ctx_e + MORE_P
        self._strategies: Dict[Genre, Callable[[Hit, int], Snippet]] = {
            Genre.XREFABLE: self._from_xref,
            Genre.HTML: self._from_html,
            Genre.PLAIN: self._from_plain,
        }

    def extract(self, hit: Hit, *, tab_size: Optional[int] = None) -> Snippet:
        strategy = self._strategies.get(hit.genre)
        if strategy is None or hit.path is None:
            return Snippet.empty()
        return strategy(hit, self.context.tab_size if tab_size is None else tab_size)

    def _from_xref(self, hit: Hit, tab_size: int) -> Snippet:
        if self.summarizer is None:
            return Snippet.empty()
        text = read_tags(self.xref_dir, hit.path, self.context.compressed, logger=self.logger)
        return self._summarize(text, SnippetSource.XREF)

    def _from_html(self, hit: Hit, tab_size: int) -> Snippet:
        if self.summarizer is None:
            return Snippet.empty()
        text = read_tags(self.context.source_root, hit.path, False, logger=self.logger)
        return self._summarize(text, SnippetSource.HTML)

    def _summarize(self, text: str, source: SnippetSource) -> Snippet:
        if not text:
            return Snippet.empty()
        return Snippet(self.summarizer.summarize(text), source)

    def _from_plain(self, hit: Hit, tab_size: int) -> Snippet:
        if self.fast_context is not None:
            result = self.fast_context.render(
                hit, xref_prefix=self.xref_prefix, more_prefix=self.more_prefix, tab_size=tab_size
            )
        else:
            result = NeedsFallback("no fast context engine")
        if isinstance(result, FastContext):
            return Snippet(result.fragment, SnippetSource.FAST_CONTEXT)

        self.logger.debug("Re-analyzing %s: %s", hit.path, result.reason)
        if self.reanalyzer is None:
            return Snippet.empty()
        fragment = self.reanalyzer.reanalyze(
            hit, xref_prefix=self.xref_prefix, more_prefix=self.more_prefix, tab_size=tab_size
        )
        return Snippet(fragment, SnippetSource.SLOW_CONTEXT)
