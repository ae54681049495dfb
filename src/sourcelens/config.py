"""Application configuration defaults."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from sourcelens.models import RenderContext


def _get_default_db_path() -> Path:
    """Default index database, next to the default data root."""
    return Path("data/index.db")


@dataclass(slots=True)
class AppConfig:
    db_path: Path | None = None
    data_root: Path = Path("data")
    source_root: Path = Path("src")
    context_path: str = "/source"
    tab_size: int = 8
    hits_per_page: int = 25
    compressed: bool = False
    last_edited_display: bool = True

    def __post_init__(self) -> None:
        if self.db_path is None:
            self.db_path = _get_default_db_path()

    def resolve_db_path(self, base_dir: Path | None = None) -> Path:
        if self.db_path is None:
            self.db_path = _get_default_db_path()
        if Path(self.db_path).is_absolute() or base_dir is None:
            return Path(self.db_path)
        return base_dir / self.db_path

    def render_context(
        self, *, source_context: bool = True, history_context: bool = False
    ) -> RenderContext:
        return RenderContext(
            data_root=Path(self.data_root),
            source_root=Path(self.source_root),
            context_path=self.context_path,
            tab_size=self.tab_size,
            source_context=source_context,
            history_context=history_context,
            compressed=self.compressed,
            last_edited_display=self.last_edited_display,
        )
