"""ANSI-aware styling, measuring, truncating and wrapping of terminal text."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterator

from wcwidth import wcwidth

NO_WRAP_MARKER = "\ue000"
"""Prefix for sub-lines that must be truncated rather than soft-wrapped."""

_RESET = "\x1b[0m"
_ANSI = r"\x1b\[[0-9;?]*[ -/]*[@-~]|\x1b\][^\x07\x1b]*(?:\x07|\x1b\\)"
_ANSI_RE = re.compile(_ANSI)
_TOKEN_RE = re.compile(f"({_ANSI})|(.)", re.DOTALL)


def _color_code(color: int, background: bool) -> str:
    if color < 8:
        return str((40 if background else 30) + color)
    if color < 16:
        return str((100 if background else 90) + color - 8)
    return f"{48 if background else 38};5;{color}"


@dataclass(frozen=True)
class Style:
    """A terminal text style using 256-colour palette indices."""

    foreground: int | None = None
    background: int | None = None
    bold: bool = False
    italic: bool = False

    def _codes(self) -> list[str]:
        codes = []
        if self.bold:
            codes.append("1")
        if self.italic:
            codes.append("3")
        if self.foreground is not None:
            codes.append(_color_code(self.foreground, False))
        if self.background is not None:
            codes.append(_color_code(self.background, True))
        return codes

    def render(self, text: str) -> str:
        """Return text wrapped in this style's escape sequences, line by line."""
        codes = self._codes()
        if not codes:
            return text
        prefix = f"\x1b[{';'.join(codes)}m"
        return "\n".join(prefix + part + _RESET for part in text.split("\n"))


def _tokens(text: str) -> Iterator[tuple[bool, str]]:
    """Yield (is_escape, token) pairs: escape sequences whole, other text per character."""
    for match in _TOKEN_RE.finditer(text):
        escape, char = match.groups()
        if escape is not None:
            yield True, escape
        else:
            yield False, char


def _char_width(char: str) -> int:
    return max(wcwidth(char), 0)


def strip_ansi(text: str) -> str:
    """Remove ANSI escape sequences from text."""
    return _ANSI_RE.sub("", text)


def visible_width(text: str) -> int:
    """Return the cell width of the widest line of text, ignoring escapes."""
    return max(
        sum(_char_width(char) for char in strip_ansi(part)) for part in text.split("\n")
    )


def truncate(text: str, width: int) -> str:
    """Cut text to at most ``width`` cells, keeping its escape sequences."""
    if width <= 0:
        return ""
    out = []
    used = 0
    cut = False
    for is_escape, token in _tokens(text):
        if is_escape:
            out.append(token)
            continue
        if cut:
            continue
        char_width = _char_width(token)
        if used + char_width > width:
            cut = True
            continue
        out.append(token)
        used += char_width
    return "".join(out)


def _hard_split(word: str, width: int) -> list[str]:
    """Break a word wider than ``width`` into pieces no wider than it."""
    pieces = [""]
    used = 0
    for is_escape, token in _tokens(word):
        if is_escape:
            pieces[-1] += token
            continue
        char_width = _char_width(token)
        if used + char_width > width and used > 0:
            pieces.append("")
            used = 0
        pieces[-1] += token
        used += char_width
    return pieces


def _wrap_single(line: str, width: int) -> str:
    if visible_width(line) <= width:
        return line
    rows: list[str] = []
    current = ""
    current_width = 0
    started = False
    for word in line.split(" "):
        word_width = visible_width(word)
        if started and current_width + 1 + word_width <= width:
            current += " " + word
            current_width += 1 + word_width
            continue
        if started and word_width == 0:
            continue
        if started:
            rows.append(current)
        pieces = _hard_split(word, width) if word_width > width else [word]
        rows.extend(pieces[:-1])
        current = pieces[-1]
        current_width = visible_width(current)
        started = True
    rows.append(current)
    return "\n".join(rows)


def wrap(text: str, width: int) -> str:
    """Word-wrap every line of text to ``width`` cells, breaking long words."""
    if width < 1:
        return text
    return "\n".join(_wrap_single(part, width) for part in text.split("\n"))


def wrap_line(text: str, width: int) -> str:
    """Wrap text, but truncate sub-lines that start with NO_WRAP_MARKER."""
    if NO_WRAP_MARKER not in text:
        return wrap(text, width)
    result = []
    for part in text.split("\n"):
        if part.startswith(NO_WRAP_MARKER):
            result.append(truncate(part[len(NO_WRAP_MARKER):], width))
        else:
            result.append(wrap(part, width))
    return "\n".join(result)