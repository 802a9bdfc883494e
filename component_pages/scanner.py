"""Locate ``<app-NAME/>`` component references within a line of markup.

The scanner is a pure function over a single line: it walks the characters
once, treats every ``<`` that is not immediately followed by ``/`` as the start
of a candidate tag, and reads the tag name up to the first ``/>`` (or the end
of the line when the tag is unterminated). Only names carrying the literal,
case-sensitive ``app-`` prefix are reported, with the prefix removed.

Examples
--------
>>> from component_pages.scanner import find_component_refs
>>> find_component_refs('<div><app-nav/></div><app-footer/>')
['nav', 'footer']
>>> find_component_refs("<p>no components here</p>")
[]
"""

from __future__ import annotations

from ._constants import COMPONENT_PREFIX


def find_component_refs(line: str) -> list[str]:
    """Return component names referenced on ``line`` in left-to-right order.

    Parameters
    ----------
    line : str
        One line of HTML text. Newlines are not special, but callers feed the
        scanner one line at a time.

    Returns
    -------
    list[str]
        Component names with the ``app-`` prefix stripped. Duplicates are kept
        so each occurrence can be substituted.
    """
    names: list[str] = []
    length = len(line)
    close = -1
    index = line.find("<")
    while 0 <= index < length - 1:
        if line[index + 1] != "/":
            # Tags sharing one terminator reuse its position.
            if close < index:
                close = line.find("/>", index)
                if close < 0:
                    close = length
            start = index + 1
            while start < close and line[start].isspace():
                start += 1
            if line.startswith(COMPONENT_PREFIX, start, close):
                names.append(line[start + len(COMPONENT_PREFIX) : close].rstrip())
        index = line.find("<", index + 1)
    return names


__all__ = ["find_component_refs"]
