"""Markup and URL helpers shared by the result page writers."""

from __future__ import annotations

import html
from html.parser import HTMLParser
from typing import List, TextIO
from urllib.parse import quote

XREF_P = "/xref"
MORE_P = "/more"
HIST_L = "/history"
DOWNLOAD_P = "/download"


def htmlize(raw: str) -> str:
    """Escape free text for embedding in markup or a quoted attribute."""
    return html.escape(raw, quote=True)


def uri_encode_path(path: str) -> str:
    """Percent-encode a slash separated path, keeping the separators."""
    return quote(path, safe="/")


class _TagStripper(HTMLParser):
    def __init__(self) -> None:
        super().__init__(convert_charrefs=True)
        self.parts: List[str] = []

    def handle_data(self, data: str) -> None:
        self.parts.append(data)


def strip_tags(markup: str) -> str:
    """Return the text content of ``markup`` with entities decoded."""
    stripper = _TagStripper()
    stripper.feed(markup)
    stripper.close()
    return "".join(stripper.parts)


def write_had(out: TextIO, context_path: str, path_e: str) -> None:
    """Write the History/Annotate/Download cell for an encoded file path."""
    ctx_e = uri_encode_path(context_path)
    out.write('<td class="q"><a href="')
    out.write(f"{ctx_e}{HIST_L}/{path_e}")
    out.write('" title="History">H</a> <a href="')
    out.write(f"{ctx_e}{XREF_P}/{path_e}?a=true")
    out.write('" title="Annotate">A</a> <a href="')
    out.write(f"{ctx_e}{DOWNLOAD_P}/{path_e}")
    out.write('" title="Download">D</a></td>')
