"""Utility helpers for reading cached and source files."""

from __future__ import annotations

import gzip
from datetime import datetime, timezone
from pathlib import Path
from typing import TextIO

# Lexical date resolutions used by the index, keyed by digit count.
_DATE_FORMATS = {
    4: "%Y",
    6: "%Y%m",
    8: "%Y%m%d",
    10: "%Y%m%d%H",
    12: "%Y%m%d%H%M",
    14: "%Y%m%d%H%M%S",
}


def open_xref(base_dir: Path, path: str, *, compressed: bool = False) -> TextIO:
    """Open a cross-reference file, stripping any UTF-8 byte order mark."""
    if compressed:
        return gzip.open(Path(base_dir, path + ".gz"), "rt", encoding="utf-8-sig")
    return open(Path(base_dir, path), encoding="utf-8-sig")


def open_source(source_root: Path, path: str) -> TextIO:
    """Open a source file as UTF-8 regardless of how it was indexed."""
    return open(Path(source_root, path), encoding="utf-8-sig", errors="replace")


def parse_index_date(value: str) -> datetime:
    """Parse a stored ``yyyy[MM[dd[HH[mm[ss[SSS]]]]]]`` date as UTC."""
    if not value.isdigit():
        raise ValueError(f"Invalid index date: {value!r}")
    if len(value) == 17:
        parsed = datetime.strptime(value[:14], _DATE_FORMATS[14])
        parsed = parsed.replace(microsecond=int(value[14:]) * 1000)
    elif len(value) in _DATE_FORMATS:
        parsed = datetime.strptime(value, _DATE_FORMATS[len(value)])
    else:
        raise ValueError(f"Invalid index date: {value!r}")
    return parsed.replace(tzinfo=timezone.utc)


def format_index_date(moment: datetime) -> str:
    """Format a moment at millisecond resolution in the index date form."""
    moment = moment.astimezone(timezone.utc)
    return moment.strftime("%Y%m%d%H%M%S") + f"{moment.microsecond // 1000:03d}"


def mtime_index_date(path: Path) -> str:
    return format_index_date(datetime.fromtimestamp(path.stat().st_mtime, timezone.utc))


def format_short_datetime(moment: datetime) -> str:
    """Short date and time, e.g. ``1/15/20 3:04 PM``."""
    hour = moment.hour % 12 or 12
    meridiem = "AM" if moment.hour < 12 else "PM"
    return f"{moment.month}/{moment.day}/{moment:%y} {hour}:{moment:%M} {meridiem}"
