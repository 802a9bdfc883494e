"""Re-indent HTML markup with four spaces per open tag.

The pretty printer consumes a stream of :class:`Token` values produced by a
tokenizer built on :class:`html.parser.HTMLParser`. Each non-blank token is
trimmed and written on its own line, prefixed by one :data:`INDENT` per tag on
the :class:`TagStack`:

* a start tag is printed at the current depth and then pushed;
* an end tag matching the top of the stack pops it and is printed at the
  reduced depth;
* any other token (text, comments, declarations, self-closing or void
  elements, and end tags that do not match the top) is printed at the
  current depth and leaves the stack untouched.

Mismatched markup therefore never crashes the printer, and tags still open
at end of input are reported as warnings while the output is kept.
:func:`write_prettified` writes to a temporary sibling file and renames it
into place only after the whole input has been processed.

Examples
--------
>>> from component_pages.prettify import prettify_html
>>> print(prettify_html("<a><b>text</b></a>"), end="")
<a>
    <b>
        text
    </b>
</a>
"""

from __future__ import annotations

import dataclasses as dc
import enum
import functools
import io
import logging
import os
import typing as typ
from html.parser import HTMLParser

from ._constants import INDENT, TEMP_SUFFIX
from .errors import PrettifyError, TokenizeError

if typ.TYPE_CHECKING:
    import collections.abc as cabc
    from pathlib import Path

logger = logging.getLogger(__name__)

CHUNK_SIZE = 64 * 1024

# Elements that never take an end tag; treated like ``<br/>``.
VOID_ELEMENTS = frozenset(
    {
        "area",
        "base",
        "br",
        "col",
        "embed",
        "hr",
        "img",
        "input",
        "link",
        "meta",
        "param",
        "source",
        "track",
        "wbr",
    }
)


class TokenKind(enum.Enum):
    """Categories of markup emitted by :func:`tokenize`."""

    START_TAG = "start_tag"
    END_TAG = "end_tag"
    SELF_CLOSING = "self_closing"
    TEXT = "text"
    COMMENT = "comment"
    DECLARATION = "declaration"


@dc.dataclass(frozen=True, slots=True)
class Token:
    """A single unit of markup and the tag name it refers to, if any."""

    kind: TokenKind
    text: str
    tag: str | None = None


class TagStack:
    """Last-in-first-out stack of open tag names."""

    def __init__(self) -> None:
        self._items: list[str] = []

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> cabc.Iterator[str]:
        """Iterate from the innermost open tag outwards."""
        return reversed(self._items)

    def push(self, tag: str) -> None:
        self._items.append(tag)

    def pop(self) -> str | None:
        return self._items.pop() if self._items else None

    def peek(self) -> str | None:
        return self._items[-1] if self._items else None


class _TokenCollector(HTMLParser):
    """Translate HTMLParser callbacks into buffered :class:`Token` values."""

    def __init__(self) -> None:
        super().__init__(convert_charrefs=False)
        self.tokens: list[Token] = []
        self._text: list[str] = []
        self._endtag_start: int | None = None

    def drain(self) -> list[Token]:
        tokens, self.tokens = self.tokens, []
        return tokens

    def flush_text(self) -> None:
        if self._text:
            self.tokens.append(Token(TokenKind.TEXT, "".join(self._text)))
            self._text.clear()

    def _emit(self, kind: TokenKind, text: str, tag: str | None = None) -> None:
        self.flush_text()
        self.tokens.append(Token(kind, text, tag))

    def handle_starttag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        raw = self.get_starttag_text() or f"<{tag}>"
        kind = TokenKind.SELF_CLOSING if tag in VOID_ELEMENTS else TokenKind.START_TAG
        self._emit(kind, raw, tag)

    def handle_startendtag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        self._emit(TokenKind.SELF_CLOSING, self.get_starttag_text() or f"<{tag}/>", tag)

    def parse_endtag(self, i: int) -> int:
        self._endtag_start = i
        return super().parse_endtag(i)

    def handle_endtag(self, tag: str) -> None:
        raw = f"</{tag}>"
        start = self._endtag_start
        if start is not None and self.rawdata.startswith("</", start):
            end = self.rawdata.find(">", start)
            if end >= 0:
                raw = self.rawdata[start : end + 1]
        self._endtag_start = None
        self._emit(TokenKind.END_TAG, raw, tag)

    def handle_data(self, data: str) -> None:
        self._text.append(data)

    def handle_entityref(self, name: str) -> None:
        self._text.append(f"&{name};")

    def handle_charref(self, name: str) -> None:
        self._text.append(f"&#{name};")

    def handle_comment(self, data: str) -> None:
        self._emit(TokenKind.COMMENT, f"<!--{data}-->")

    def handle_decl(self, decl: str) -> None:
        self._emit(TokenKind.DECLARATION, f"<!{decl}>")

    def handle_pi(self, data: str) -> None:
        self._emit(TokenKind.DECLARATION, f"<?{data}>")

    def unknown_decl(self, data: str) -> None:
        self._emit(TokenKind.DECLARATION, f"<![{data}]>")


def tokenize(chunks: cabc.Iterable[str]) -> cabc.Iterator[Token]:
    """Yield tokens for markup arriving in ``chunks``.

    Text split across chunk boundaries is merged into a single token. Tokens
    are yielded as soon as the parser has seen enough input to complete them.

    Raises
    ------
    TokenizeError
        If the underlying parser rejects the input.
    """
    collector = _TokenCollector()
    for chunk in chunks:
        _run_parser(collector.feed, chunk)
        yield from collector.drain()
    _run_parser(collector.close)
    collector.flush_text()
    yield from collector.drain()


def _run_parser(step: cabc.Callable[..., None], *args: str) -> None:
    try:
        step(*args)
    # HTMLParser reports malformed declarations with AssertionError.
    except (AssertionError, ValueError) as exc:
        raise TokenizeError(str(exc) or exc.__class__.__name__) from exc


class PrettyPrinter:
    """Write tokens to ``out`` indented by the current tag nesting depth."""

    def __init__(self, out: typ.TextIO, *, indent: str = INDENT) -> None:
        self.out = out
        self.indent = indent
        self.stack = TagStack()

    @property
    def depth(self) -> int:
        return len(self.stack)

    def feed(self, token: Token) -> None:
        text = token.text.strip()
        if not text:
            return
        match token.kind:
            case TokenKind.START_TAG if token.tag is not None:
                self._write(text)
                self.stack.push(token.tag)
            case TokenKind.END_TAG if token.tag is not None and token.tag == self.stack.peek():
                self.stack.pop()
                self._write(text)
            case _:
                self._write(text)

    def finish(self) -> list[str]:
        """Report and return tags still open, innermost first."""
        unclosed = list(self.stack)
        for tag in unclosed:
            logger.warning("Unclosed tag: '%s'. Output may be inconsistent.", tag)
        return unclosed

    def _write(self, text: str) -> None:
        self.out.write(f"{self.indent * self.depth}{text}\n")


def prettify_stream(chunks: cabc.Iterable[str], out: typ.TextIO) -> list[str]:
    """Prettify ``chunks`` into ``out`` and return any unclosed tags."""
    printer = PrettyPrinter(out)
    for token in tokenize(chunks):
        printer.feed(token)
    return printer.finish()


def prettify_html(html: str) -> str:
    """Return ``html`` re-indented; convenient for in-memory use."""
    buffer = io.StringIO()
    prettify_stream([html], buffer)
    return buffer.getvalue()


def read_chunks(handle: typ.TextIO, size: int = CHUNK_SIZE) -> cabc.Iterator[str]:
    """Yield successive blocks of text from an open file handle."""
    return iter(functools.partial(handle.read, size), "")


def write_prettified(chunks: cabc.Iterable[str], output_path: Path) -> Path:
    """Prettify ``chunks`` into ``output_path`` through a temporary file.

    The output is first written to ``<output_path>.tmp`` and renamed over
    ``output_path`` once the tokenizer reaches end of input, so readers never
    observe a partially written file.

    Parameters
    ----------
    chunks : Iterable[str]
        Markup to prettify, typically a string in a one-element list or
        :func:`read_chunks` over an open file.
    output_path : Path
        Final destination of the prettified markup.

    Returns
    -------
    Path
        ``output_path`` once the rename has completed.

    Raises
    ------
    PrettifyError
        If the output directory or temporary file cannot be created, the
        tokenizer fails, or the rename fails. The temporary file is removed
        and any existing ``output_path`` is left untouched.
    """
    temp_path = output_path.with_name(output_path.name + TEMP_SUFFIX)
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with temp_path.open("w", encoding="utf-8") as handle:
            prettify_stream(chunks, handle)
            handle.flush()
            os.fsync(handle.fileno())
        os.replace(temp_path, output_path)
    except (OSError, TokenizeError) as exc:
        temp_path.unlink(missing_ok=True)
        raise PrettifyError(output_path, str(exc)) from exc
    return output_path


__all__ = [
    "VOID_ELEMENTS",
    "PrettyPrinter",
    "TagStack",
    "Token",
    "TokenKind",
    "prettify_html",
    "prettify_stream",
    "read_chunks",
    "tokenize",
    "write_prettified",
]
