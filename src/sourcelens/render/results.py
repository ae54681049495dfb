"""HTML listing of a page of search hits."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional, Protocol, Sequence, TextIO

from sourcelens.context.fast import FastContextEngine
from sourcelens.context.source import SourceContext
from sourcelens.context.summarizer import Summarizer
from sourcelens.models import Hit, RenderContext
from sourcelens.projects import Project, ProjectRegistry, messages_to_json
from sourcelens.render.fallback import PlainReanalyzer
from sourcelens.render.grouping import HitReader, group_by_directory
from sourcelens.render.snippets import SnippetExtractor
from sourcelens.utils.files import format_short_datetime, parse_index_date
from sourcelens.utils.web import XREF_P, htmlize, uri_encode_path, write_had

LOGGER = logging.getLogger(__name__)


class HistoryRenderer(Protocol):
    def render_history(self, source_file: Path, path: str, out: TextIO, context_path: str) -> None: ...


@dataclass(slots=True)
class ResultPage:
    """Collaborators and settings for printing one page of hits.

    ``summarizer`` and ``source_context`` are bound to the query being
    answered; ``history``, ``projects`` and ``descriptions`` are optional.
    """

    store: HitReader
    hits: Sequence[int]
    context: RenderContext
    summarizer: Optional[Summarizer] = None
    source_context: Optional[SourceContext] = None
    history: Optional[HistoryRenderer] = None
    projects: Optional[ProjectRegistry] = None
    descriptions: Optional[Mapping[str, str]] = None

    def tab_size(self, project: Optional[Project]) -> int:
        if project is not None and project.tab_size > 0:
            return project.tab_size
        return self.context.tab_size

    def snippet_extractor(self, logger: logging.Logger = LOGGER) -> SnippetExtractor:
        fast_context = reanalyzer = None
        if self.source_context is not None:
            fast_context = FastContextEngine(self.source_context, self.context.source_root)
            reanalyzer = PlainReanalyzer(self.source_context, self.context.source_root)
        return SnippetExtractor(
            self.context,
            summarizer=self.summarizer,
            fast_context=fast_context,
            reanalyzer=reanalyzer,
            logger=logger,
        )


def pretty_print(
    out: TextIO, page: ResultPage, start: int, end: int, *, logger: logging.Logger = LOGGER
) -> None:
    """Write hits ``start`` to ``end`` (exclusive) as a ``<tbody>`` block.

    Rows already written stay in ``out`` if an index or source read fails
    part way; the error propagates.
    """
    ctx = page.context
    xref_prefix_e = uri_encode_path(ctx.context_path) + XREF_P
    extractor = page.snippet_extractor(logger)

    even_row = True
    out.write('<tbody class="search-result">')
    for group in group_by_directory(page.store, page.hits, start, end, logger=logger):
        parent = group.directory
        out.write('<tr class="dir"><td colspan="3"><a href="')
        out.write(f"{xref_prefix_e}/{uri_encode_path(parent)}/" if parent else f"{xref_prefix_e}/")
        out.write('">')
        out.write(htmlize(parent))
        out.write("/</a>")
        description = page.descriptions.get(parent) if page.descriptions is not None else None
        if description is not None:
            out.write(" - <i>")
            out.write(htmlize(description))
            out.write("</i>")
        project = page.projects.project_for(parent) if page.projects is not None else None
        messages = messages_to_json(project) if project is not None else []
        if messages:
            out.write(f' <a href="{xref_prefix_e}/{uri_encode_path(project.name)}">')
            out.write('<span class="important-note important-note-rounded" data-messages="')
            out.write(htmlize(json.dumps(messages)))
            out.write('">!</span></a>')
        out.write("</td></tr>")

        tab_size = page.tab_size(project)
        for doc_id in group.doc_ids:
            hit = page.store.get_document(doc_id)
            path_e = uri_encode_path(hit.path)
            out.write('<tr class="search-result-even-row">' if even_row else "<tr>")
            even_row = not even_row
            write_had(out, ctx.context_path, path_e)
            out.write('<td class="f"><a href="')
            out.write(f"{xref_prefix_e}/{path_e}")
            out.write('"')
            if ctx.last_edited_display:
                _write_last_edited(out, hit, logger)
            out.write(">")
            out.write(htmlize(hit.name))
            out.write('</a></td><td><code class="con">')
            if ctx.source_context:
                out.write(extractor.extract(hit, tab_size=tab_size).text)
            if ctx.history_context and page.history is not None:
                page.history.render_history(
                    Path(ctx.source_root, hit.path), hit.path, out, ctx.context_path
                )
            out.write("</code></td></tr>\n")
    out.write("</tbody>")


def _write_last_edited(out: TextIO, hit: Hit, logger: logging.Logger) -> None:
    if hit.date is None:
        return
    try:
        modified = parse_index_date(hit.date)
    except ValueError:
        logger.warning("An error parsing date information %r of %s", hit.date, hit.path)
        return
    out.write(' class="result-annotate" title="Last modified: ')
    out.write(htmlize(format_short_datetime(modified)))
    out.write('"')
