"""Search result listing with directory grouping and contextual snippets."""

__version__ = "0.1.0"
