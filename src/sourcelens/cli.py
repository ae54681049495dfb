"""Command line interface for sourcelens."""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from sourcelens.config import AppConfig
from sourcelens.context.source import SourceContext
from sourcelens.context.summarizer import Summarizer
from sourcelens.index.search import Query, Searcher
from sourcelens.index.storage import HitStore
from sourcelens.projects import ProjectRegistry, load_projects
from sourcelens.render.grouping import group_by_directory
from sourcelens.render.results import ResultPage, pretty_print


console = Console()
app = typer.Typer(help="sourcelens - search hits grouped by directory, with source context")


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="[%(levelname)s] %(message)s")


def _ensure_parent(path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)


def _open_store(db: Optional[Path]) -> HitStore:
    config = AppConfig(db_path=db if db is not None else AppConfig().db_path)
    resolved_db = config.resolve_db_path(Path.cwd())
    if not resolved_db.exists():
        raise typer.BadParameter(f"Database not found: {resolved_db}")
    return HitStore(resolved_db)


def _load_json(path: Optional[Path]):
    if path is None:
        return None
    with path.open(encoding="utf-8") as handle:
        return json.load(handle)


@app.command()
def render(
    query: str = typer.Argument(..., help="Query text"),
    db: Path = typer.Option(None, "--db", help="SQLite index database path"),
    data_root: Path = typer.Option(AppConfig().data_root, help="Data root holding the xref cache"),
    source_root: Path = typer.Option(AppConfig().source_root, help="Source root"),
    context_path: str = typer.Option(AppConfig().context_path, help="URL prefix of the web application"),
    start: int = typer.Option(0, help="Index of the first hit to render"),
    max_hits: int = typer.Option(AppConfig().hits_per_page, "--max", help="Number of hits to render"),
    tab_size: int = typer.Option(AppConfig().tab_size, help="Default tab width"),
    compressed: bool = typer.Option(False, "--compressed", help="The xref cache is gzip-compressed"),
    defs: bool = typer.Option(False, "--defs", help="Definition search"),
    projects: Path = typer.Option(None, "--projects", help="JSON file describing projects"),
    descriptions: Path = typer.Option(None, "--descriptions", help="JSON object of directory descriptions"),
    output: Path = typer.Option(None, "--output", "-o", help="Write the HTML here instead of stdout"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Render one page of hits as an HTML table body."""
    _setup_logging(verbose)
    config = AppConfig(
        db_path=db if db is not None else AppConfig().db_path,
        data_root=data_root,
        source_root=source_root,
        context_path=context_path,
        tab_size=tab_size,
        compressed=compressed,
    )
    store = _open_store(config.db_path)
    try:
        parsed = Query.parse(query, def_search=defs)
        hits = Searcher(store).search(parsed)
        if not hits:
            console.print("[yellow]No matches found.[/yellow]")
            return

        project_rows = _load_json(projects)
        page = ResultPage(
            store=store,
            hits=hits,
            context=config.render_context(),
            summarizer=Summarizer(parsed.terms),
            source_context=SourceContext(parsed.terms, def_search=parsed.def_search),
            projects=load_projects(project_rows) if project_rows is not None else ProjectRegistry(),
            descriptions=_load_json(descriptions),
        )
        end = min(start + max_hits, len(hits))
        if output is None:
            pretty_print(sys.stdout, page, start, end)
            return

        _ensure_parent(output)
        with output.open("w", encoding="utf-8") as out:
            pretty_print(out, page, start, end)
        console.print(f"Wrote hits {start + 1}-{end} of {len(hits)} to [bold]{output}[/bold]")
    finally:
        store.close()


@app.command()
def groups(
    query: str = typer.Argument(..., help="Query text"),
    db: Path = typer.Option(None, "--db", help="SQLite index database path"),
    start: int = typer.Option(0, help="Index of the first hit"),
    max_hits: int = typer.Option(AppConfig().hits_per_page, "--max", help="Number of hits"),
    defs: bool = typer.Option(False, "--defs", help="Definition search"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Show how a page of hits groups by directory."""
    _setup_logging(verbose)
    store = _open_store(db)
    try:
        hits = Searcher(store).search(Query.parse(query, def_search=defs))
        if not hits:
            console.print("[yellow]No matches found.[/yellow]")
            return

        table = Table(show_header=True, header_style="bold magenta")
        table.add_column("Directory")
        table.add_column("Files")
        table.add_column("Hits")
        for group in group_by_directory(store, hits, start, start + max_hits):
            names = [store.get_document(doc_id).name for doc_id in group.doc_ids]
            table.add_row(group.directory or "/", ", ".join(names), str(len(names)))
        console.print(table)

        stats = store.get_stats()
        console.print(
            f"Documents: {stats['document_count']}, "
            f"without path: {stats['missing_path_count']}, hits: {len(hits)}"
        )
    finally:
        store.close()
