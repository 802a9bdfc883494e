"""Unit tests for the tokenizer-driven HTML pretty printer.

These tests cover indentation bookkeeping for nested, mismatched, and
unclosed markup, the token stream produced from chunked input, and the
temporary-file-then-rename behaviour of :func:`write_prettified`.
"""

from __future__ import annotations

import logging
import typing as typ

import pytest

from component_pages.errors import PrettifyError, TokenizeError
from component_pages.prettify import (
    TagStack,
    Token,
    TokenKind,
    prettify_html,
    prettify_stream,
    tokenize,
    write_prettified,
)

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from pathlib import Path


def _lines(*rows: str) -> str:
    return "".join(f"{row}\n" for row in rows)


def test_nested_tags_indent_then_dedent() -> None:
    """Well-formed nesting increases depth per tag and unwinds symmetrically."""
    assert prettify_html("<a><b>text</b></a>") == _lines(
        "<a>",
        "    <b>",
        "        text",
        "    </b>",
        "</a>",
    )


def test_unclosed_tag_keeps_output_and_warns_once(
    caplog: pytest.LogCaptureFixture,
) -> None:
    """Every token is still printed and the open tag is reported."""
    with caplog.at_level(logging.WARNING, logger="component_pages.prettify"):
        output = prettify_html("<a><b>text</b>")
    assert output == _lines("<a>", "    <b>", "        text", "    </b>")
    warnings = [r.getMessage() for r in caplog.records if r.levelno == logging.WARNING]
    assert warnings == ["Unclosed tag: 'a'. Output may be inconsistent."]


def test_mismatched_end_tag_is_printed_without_popping() -> None:
    """An end tag that does not match the stack top leaves the depth alone."""
    out_lines: list[str] = []

    class _Sink:
        def write(self, text: str) -> None:
            out_lines.append(text)

    unclosed = prettify_stream(["<div><span>x</div>"], typ.cast("typ.TextIO", _Sink()))
    assert "".join(out_lines) == _lines(
        "<div>",
        "    <span>",
        "        x",
        "        </div>",
    )
    assert unclosed == ["span", "div"], "unclosed tags should be innermost first"


def test_blank_tokens_are_dropped_and_text_is_trimmed() -> None:
    """Whitespace-only text never becomes an empty output line."""
    html = "<ul>\n\n   <li>  one  </li>\n\t\n</ul>\n"
    assert prettify_html(html) == _lines(
        "<ul>",
        "    <li>",
        "        one",
        "    </li>",
        "</ul>",
    )


def test_void_and_self_closing_elements_do_not_nest() -> None:
    """``<br>``, ``<img/>`` and friends are printed at the current depth."""
    html = '<p>a<br>b<img src="x.png"/></p>'
    assert prettify_html(html) == _lines(
        "<p>",
        "    a",
        "    <br>",
        "    b",
        '    <img src="x.png"/>',
        "</p>",
    )


def test_declarations_comments_and_entities_are_preserved() -> None:
    """Doctype, comments, and character references survive verbatim."""
    html = "<!DOCTYPE html><html><!-- note --><p>a &amp; b &#169;</p></html>"
    assert prettify_html(html) == _lines(
        "<!DOCTYPE html>",
        "<html>",
        "    <!-- note -->",
        "    <p>",
        "        a &amp; b &#169;",
        "    </p>",
        "</html>",
    )


def test_start_tag_attributes_are_kept() -> None:
    """Start tags are printed as written, attributes included."""
    html = '<a href="/docs" class="link">Docs</a>'
    assert prettify_html(html).splitlines()[0] == '<a href="/docs" class="link">'


def test_tokenize_merges_text_across_chunks() -> None:
    """Chunk boundaries inside tags or text do not split tokens."""
    tokens = list(tokenize(["<di", "v>hel", "lo</d", "iv>"]))
    assert tokens == [
        Token(TokenKind.START_TAG, "<div>", "div"),
        Token(TokenKind.TEXT, "hello"),
        Token(TokenKind.END_TAG, "</div>", "div"),
    ]


def test_tag_stack_is_last_in_first_out() -> None:
    """The stack pops and peeks its most recent tag."""
    stack = TagStack()
    assert stack.pop() is None and stack.peek() is None
    stack.push("html")
    stack.push("body")
    assert list(stack) == ["body", "html"]
    assert stack.pop() == "body"
    assert len(stack) == 1


def test_write_prettified_renames_temp_file(tmp_path: Path) -> None:
    """Output appears under its final name and no temporary file remains."""
    target = tmp_path / "out" / "index.html"
    written = write_prettified(["<a><b>text</b></a>"], target)
    assert written == target
    assert target.read_text(encoding="utf-8").startswith("<a>\n    <b>\n")
    assert not (tmp_path / "out" / "index.html.tmp").exists()


def test_tokenizer_failure_leaves_existing_output_untouched(tmp_path: Path) -> None:
    """A failure mid-stream removes the temp file and keeps the old output."""
    target = tmp_path / "index.html"
    target.write_text("previous\n", encoding="utf-8")

    def _chunks() -> cabc.Iterator[str]:
        yield "<html><body>"
        raise TokenizeError("unexpected input")

    with pytest.raises(PrettifyError):
        write_prettified(_chunks(), target)
    assert target.read_text(encoding="utf-8") == "previous\n"
    assert not (tmp_path / "index.html.tmp").exists()


def test_end_tags_keep_their_source_spelling() -> None:
    """End tags are printed as written, matching their start tags."""
    assert prettify_html("<DIV>x</DIV>") == _lines("<DIV>", "    x", "</DIV>")
