"""Tests for line tokenization and highlighting."""

from __future__ import annotations

import json

from sourcelens.analysis.tokenizer import PlainLineTokenizer, encode_positions


class TestPlainLineTokenizer:
    """Test query term matching and highlighting."""

    def test_matched_terms(self) -> None:
        tokenizer = PlainLineTokenizer(["Foo", "bar"])

        assert tokenizer.matched_terms("foo(x); FOO = bar_2;") == {"foo"}
        assert tokenizer.matched_terms("nothing here") == set()

    def test_highlight_escapes_markup(self) -> None:
        """Should bold matches and escape everything else."""
        tokenizer = PlainLineTokenizer(["foo"])

        result = tokenizer.highlight('if (a < b && foo) "x";\n')

        assert result == "if (a &lt; b &amp;&amp; <b>foo</b>) &quot;x&quot;;"

    def test_highlight_expands_tabs(self) -> None:
        tokenizer = PlainLineTokenizer(["foo"], tab_size=4)

        assert tokenizer.highlight("\tfoo();") == "    <b>foo</b>();"

    def test_no_tab_expansion_by_default(self) -> None:
        tokenizer = PlainLineTokenizer(["foo"])

        assert tokenizer.highlight("\tfoo") == "\t<b>foo</b>"


class TestEncodePositions:
    def test_positions_blob(self) -> None:
        """Should map terms to 1-based line numbers and keep those lines."""
        payload = json.loads(encode_positions("int foo;\n\n  foo(bar);\n").decode("utf-8"))

        assert payload["terms"]["foo"] == [1, 3]
        assert payload["terms"]["bar"] == [3]
        assert payload["lines"] == {"1": "int foo;", "3": "  foo(bar);"}
