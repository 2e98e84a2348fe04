"""``@NAME@`` interpolation for staged build templates.

The syntax is intentionally small: ``@NAME@`` is replaced with the value of
``NAME`` when the variable is known. A marker whose name is a plain word
(``[A-Za-z0-9_]+``) but unknown is copied whole, closing delimiter included,
so autoconf ``@SUBST@`` markers survive untouched. A backslash directly
before a delimiter (``\\@``) emits a literal ``@``; when it starts a complete
word marker, the whole ``@NAME@`` is emitted literally. Substituted values
are not re-scanned.
"""
from __future__ import annotations

from typing import Mapping, TextIO
import re


DELIMITER = "@"
ESCAPE = "\\"

_TOKEN_PATTERN = re.compile(re.escape(ESCAPE + DELIMITER) + "|" + re.escape(DELIMITER))
_NAME_PATTERN = re.compile(r"[A-Za-z0-9_]+")


def _closing_marker(text: str, start: int) -> tuple[str, int] | None:
    """Return the name and end offset of the marker whose name begins at *start*."""

    closing = text.find(DELIMITER, start)
    if closing == -1:
        return None
    return text[start:closing], closing + len(DELIMITER)


def interpolate(text: str, variables: Mapping[str, str]) -> str:
    """Return *text* with every known ``@NAME@`` marker replaced."""

    if DELIMITER not in text:
        return text

    parts: list[str] = []
    position = 0
    length = len(text)
    while position < length:
        match = _TOKEN_PATTERN.search(text, position)
        if match is None:
            parts.append(text[position:])
            break

        parts.append(text[position:match.start()])
        position = match.end()
        marker = _closing_marker(text, position)
        name, end = marker if marker is not None else ("", position)

        if match.group() != DELIMITER:
            if _NAME_PATTERN.fullmatch(name):
                parts.append(f"{DELIMITER}{name}{DELIMITER}")
                position = end
            else:
                parts.append(DELIMITER)
            continue

        if marker is not None and name in variables:
            parts.append(variables[name])
            position = end
        elif _NAME_PATTERN.fullmatch(name):
            parts.append(f"{DELIMITER}{name}{DELIMITER}")
            position = end
        else:
            # Not a marker: the next delimiter may still open one.
            parts.append(DELIMITER)

    return "".join(parts)


def interpolate_stream(source: TextIO, target: TextIO, variables: Mapping[str, str]) -> None:
    """Read *source* completely and write its interpolated text to *target*."""

    target.write(interpolate(source.read(), variables))


__all__ = ["DELIMITER", "ESCAPE", "interpolate", "interpolate_stream"]
