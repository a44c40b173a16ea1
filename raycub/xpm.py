"""A reader for XPM images with an X11 named-colour table."""

from __future__ import annotations

import re
from dataclasses import dataclass
from collections.abc import Iterable, Iterator
from pathlib import Path

from raycub.colors import lookup_color
from raycub.textutil import parse_int

TRANSPARENT = 0xFF000000

_HEX_RE = re.compile(r"[ \t\n\r\v\f]*([+-]?)(?:0[xX](?=[0-9a-fA-F]))?([0-9a-fA-F]*)")
_WORD_SEP = re.compile(r"[ \t]+")


class XpmError(ValueError):
    """Raised when XPM data cannot be read or understood."""


@dataclass(frozen=True)
class XpmImage:
    """Decoded XPM picture; ``pixels`` holds rows of 0xAARRGGBB values."""

    width: int
    height: int
    pixels: tuple[tuple[int, ...], ...]

    def pixel(self, x: int, y: int) -> int:
        """Return the colour at column ``x`` of row ``y``."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"pixel ({x}, {y}) outside {self.width}x{self.height}")
        return self.pixels[y][x]


def _words(text: str) -> list[str]:
    return [word for word in _WORD_SEP.split(text) if word]


def _blank(text: str, opener: str, closer: str) -> str:
    """Replace every ``opener``..``closer`` span outside quotes with spaces."""
    parts: list[str] = []
    quoted = False
    i = 0
    while i < len(text):
        ch = text[i]
        if ch == '"':
            quoted = not quoted
        elif not quoted and text.startswith(opener, i):
            end = text.find(closer, i + len(opener))
            stop = len(text) if end == -1 else end + len(closer)
            parts.append(" " * (stop - i))
            i = stop
            continue
        parts.append(ch)
        i += 1
    return "".join(parts)


def strip_comments(text: str) -> str:
    """Blank out C comments lying outside string literals.

    Block comments are removed first, then line comments together with the
    newline ending them. The result has the same length as ``text``.
    """
    return _blank(_blank(text, "/*", "*/"), "//", "\n")


def quoted_strings(text: str) -> Iterator[str]:
    """Yield the contents of each double-quoted string in ``text``."""
    pos = 0
    while True:
        start = text.find('"', pos)
        if start == -1:
            return
        end = text.find('"', start + 1)
        if end == -1:
            return
        yield text[start + 1:end]
        pos = end + 1


def text_to_rgb(name: str, extra: str | None) -> int:
    """Turn an XPM colour value into 0xRRGGBB.

    ``#hex`` values are read as hexadecimal; otherwise ``name`` (joined with
    ``extra`` by a space when given) is looked up among the named colours.
    Unknown names give 0 and "None" gives -1.
    """
    if name.startswith("#"):
        match = _HEX_RE.match(name[1:])
        digits = match.group(2) if match else ""
        if not digits:
            return 0
        value = int(digits, 16)
        return -value if match.group(1) == "-" else value
    if extra:
        name = f"{name} {extra}"[:63]
    value = lookup_color(name)
    return 0 if value is None else value


def _next(lines: Iterator[str], what: str) -> str:
    try:
        return next(lines)
    except StopIteration:
        raise XpmError(f"missing {what}") from None


def parse_xpm(lines: Iterable[str]) -> XpmImage:
    """Decode an XPM image from its string lines (header, colours, rows)."""
    it = iter(lines)
    header = _words(_next(it, "header"))
    if len(header) < 4:
        raise XpmError("header needs width, height, colours and chars per pixel")
    width, height, ncolors, cpp = (parse_int(word) for word in header[:4])
    if width <= 0 or height <= 0 or ncolors <= 0 or cpp <= 0:
        raise XpmError("invalid XPM header values")

    last_wins = cpp <= 2
    table: dict[str, int] = {}
    for _ in range(ncolors):
        line = _next(it, "colour definition")
        if len(line) < cpp:
            raise XpmError("colour definition shorter than its key")
        key = line[:cpp]
        words = _words(line[cpp:])
        try:
            index = words.index("c") + 1
        except ValueError:
            raise XpmError(f"no 'c' colour for key {key!r}") from None
        if index >= len(words):
            raise XpmError(f"empty colour for key {key!r}")
        extra = words[index + 1] if index + 1 < len(words) else None
        rgb = text_to_rgb(words[index], extra)
        if last_wins or key not in table:
            table[key] = rgb

    rows: list[tuple[int, ...]] = []
    for _ in range(height):
        line = _next(it, "pixel row")
        if len(line) < width * cpp:
            raise XpmError("pixel row is too short")
        row = []
        for x in range(width):
            color = table.get(line[x * cpp:(x + 1) * cpp], 0)
            row.append(TRANSPARENT if color == -1 else color & 0xFFFFFFFF)
        rows.append(tuple(row))
    return XpmImage(width, height, tuple(rows))


def parse_xpm_text(text: str) -> XpmImage:
    """Decode an XPM image from the text of an XPM file."""
    return parse_xpm(quoted_strings(strip_comments(text)))


def load_xpm(path: str | Path) -> XpmImage:
    """Read and decode the XPM file at ``path``."""
    try:
        text = Path(path).read_text(encoding="latin-1")
    except OSError as exc:
        raise XpmError(f"cannot read {path}: {exc}") from exc
    return parse_xpm_text(text)