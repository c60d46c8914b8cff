# Copyright (c) 2025 Arne Deutsch, itemis AG, MIT License
"""String splitting and replacement helpers used by the PCM codec."""

from __future__ import annotations

import sys
from typing import List

_QUOTES = "\"'"


def split_string(text: str, delimiter: str) -> List[str]:
    """Split ``text`` at every occurrence of the literal ``delimiter``.

    Summary
    -------
    The delimiter is matched as a whole substring, never as a character
    class or pattern, and may be several characters long.

    Parameters
    ----------
    text : str
        Input text.
    delimiter : str
        Non-empty literal separator.

    Returns
    -------
    List[str]
        Segments in input order. ``[text]`` if ``delimiter`` does not occur;
        a delimiter at the very end yields a trailing ``""``.

    Raises
    ------
    ValueError
        If ``delimiter`` is empty.

    Examples
    --------
    >>> split_string("a::b::", "::")
    ['a', 'b', '']
    """

    if not delimiter:
        raise ValueError("delimiter must be a non-empty string")
    return text.split(delimiter)


def replace_all(
    text: str,
    find: str,
    replace: str,
    offset: int = 0,
    respect_quotes: bool = True,
) -> str:
    """Replace occurrences of ``find`` in ``text`` from ``offset`` onwards.

    Summary
    -------
    With ``respect_quotes`` a flag flips at every ``"`` or ``'`` crossed
    before a match; matches found while the flag is set are left alone.

    Parameters
    ----------
    text : str
        Input text.
    find : str
        Substring to search for. An empty value leaves ``text`` unchanged.
    replace : str
        Replacement text.
    offset : int, optional
        Index at which the search starts, by default ``0``.
    respect_quotes : bool, optional
        Skip matches that sit inside quotes, by default ``True``.

    Returns
    -------
    str
        Text with the replacements applied.

    Examples
    --------
    >>> replace_all("a b 'c d'", " ", "_")
    "a_b_'c d'"
    >>> replace_all("a b 'c d'", " ", "_", respect_quotes=False)
    "a_b_'c_d'"
    """

    if not find:
        return text
    if not respect_quotes:
        return text[:offset] + text[offset:].replace(find, replace)

    out = text
    in_quotes = False
    quote_pos = 0
    pos = out.find(find, offset)
    while pos != -1:
        # flip once for every quote character between the last scan and the match
        while quote_pos < pos:
            nxt = _find_quote(out, quote_pos)
            if nxt == -1:
                # no quotes left; stop scanning for good
                quote_pos = sys.maxsize
                break
            if nxt >= pos:
                quote_pos = nxt
                break
            in_quotes = not in_quotes
            quote_pos = nxt + 1

        if in_quotes:
            pos = out.find(find, pos + len(find))
        else:
            out = out[:pos] + replace + out[pos + len(find) :]
            pos = out.find(find, pos + len(replace))
    return out


def _find_quote(text: str, start: int) -> int:
    hits = [i for i in (text.find(q, start) for q in _QUOTES) if i != -1]
    return min(hits) if hits else -1


def split_lines(data: str) -> List[str]:
    """Normalise ``\\r\\n`` to ``\\n`` and split ``data`` into lines.

    Empty lines are kept as ``""`` so callers decide whether to skip them.
    A lone ``\\r`` is not a line break.
    """

    lines = split_string(replace_all(data, "\r\n", "\n", respect_quotes=False), "\n")
    return [line.replace("\n", "") for line in lines]


__all__ = ["replace_all", "split_lines", "split_string"]
