"""Animated start-up splash screen with glitching block letters."""

from __future__ import annotations

import math
import random
import time

from cogent.textutil import Style, visible_width


def _marks(*spans: tuple[int, int]) -> tuple[str, ...]:
    """Collect combining characters from inclusive code point spans."""
    return tuple(chr(code) for start, end in spans for code in range(start, end + 1))


ZALGO_ABOVE = _marks(
    (0x300, 0x314), (0x33D, 0x33F), (0x342, 0x344), (0x34A, 0x34C),
    (0x350, 0x352), (0x357, 0x357), (0x35B, 0x35B), (0x363, 0x36F),
)

ZALGO_BELOW = _marks(
    (0x316, 0x319), (0x31C, 0x320), (0x323, 0x326), (0x329, 0x333),
    (0x339, 0x33C), (0x345, 0x345), (0x347, 0x349), (0x34D, 0x34E),
    (0x353, 0x356), (0x359, 0x35A),
)

ZALGO_MIDDLE = _marks(
    (0x315, 0x315), (0x31B, 0x31B), (0x321, 0x322), (0x327, 0x328),
    (0x334, 0x338), (0x340, 0x341), (0x358, 0x358),
)

BLOCK_HEIGHT = 6

# The full banner, one string per row; letters are cut out of it by width.
_BANNER_LETTERS = (("C", 9), ("O", 9), ("G", 9), ("E", 8), ("N", 10), ("T", 9))
_BANNER_ROWS = (
    " ██████╗  ██████╗  ██████╗ ███████╗███╗   ██╗████████╗",
    "██╔════╝ ██╔═══██╗██╔════╝ ██╔════╝████╗  ██║╚══██╔══╝",
    "██║      ██║   ██║██║  ███╗█████╗  ██╔██╗ ██║   ██║   ",
    "██║      ██║   ██║██║   ██║██╔══╝  ██║╚██╗██║   ██║   ",
    "╚██████╗ ╚██████╔╝╚██████╔╝███████╗██║ ╚████║   ██║   ",
    " ╚═════╝  ╚═════╝  ╚═════╝ ╚══════╝╚═╝  ╚═══╝   ╚═╝   ",
)


def _cut_font() -> dict[str, tuple[str, ...]]:
    font = {}
    offset = 0
    for letter, width in _BANNER_LETTERS:
        font[letter] = tuple(row[offset:offset + width] for row in _BANNER_ROWS)
        offset += width
    return font


BLOCK_FONT = _cut_font()

BG_NOISE_CHARS = tuple(".·:∙°⋅∘⁘⁙⁚░▪▫╌╍┄┅┈┉")

WORD = "COGENT"
SUBTITLE = "COding aGENT"
DURATION = 1.75
TICK_INTERVAL = 0.1

_LOGO_COLORS = (2, 3) * 3
_SUBTITLE_STYLE = Style(foreground=8, italic=True)
_BG_STYLE = Style(foreground=236)


def zalgo_char(char: str, intensity: int, rng: random.Random) -> str:
    """Decorate one character with random combining marks."""
    if char in (" ", "\n"):
        return char
    layers = (
        (ZALGO_ABOVE, intensity),
        (ZALGO_BELOW, intensity // 2),
        (ZALGO_MIDDLE, intensity // 3),
    )
    marks = [
        rng.choice(pool)
        for pool, limit in layers
        for _ in range(rng.randrange(limit + 1))
    ]
    return char + "".join(marks)


def zalgo_string(text: str, intensity: int, rng: random.Random) -> str:
    """Apply zalgo marks to every character of text."""
    return "".join(zalgo_char(char, intensity, rng) for char in text)


def block_text(word: str) -> list[str]:
    """Render a word in the block font; unknown letters are left out."""
    glyphs = [BLOCK_FONT[char] for char in word if char in BLOCK_FONT]
    return ["".join(glyph[row] for glyph in glyphs) for row in range(BLOCK_HEIGHT)]


class Splash:
    """The splash screen: a glitching logo over pulsing background noise."""

    def __init__(
        self,
        width: int = 0,
        height: int = 0,
        rng: random.Random | None = None,
        start_time: float | None = None,
    ) -> None:
        self.width = width
        self.height = height
        self.rng = rng if rng is not None else random.Random()
        self.start_time = time.monotonic() if start_time is None else start_time
        self.frame = 0

    def _elapsed(self, now: float | None) -> float:
        return (time.monotonic() if now is None else now) - self.start_time

    def tick(self, now: float | None = None) -> bool:
        """Advance one frame; return True once the splash should close."""
        self.frame += 1
        return self._elapsed(now) >= DURATION

    def noise_cell(self, density: float) -> str:
        """Return one background cell: usually a space, sometimes a dim glyph."""
        if self.rng.random() > density:
            return " "
        cell = self.rng.choice(BG_NOISE_CHARS)
        if self.rng.random() < 0.3:
            cell += self.rng.choice(ZALGO_ABOVE)
        if self.rng.random() < 0.15:
            cell += self.rng.choice(ZALGO_BELOW)
        return _BG_STYLE.render(cell)

    def _noise(self, count: int, density: float) -> str:
        return "".join(self.noise_cell(density) for _ in range(max(count, 0)))

    def view(self, now: float | None = None) -> str:
        """Render the whole screen for the given moment."""
        if self.width == 0 or self.height == 0:
            return ""
        elapsed = self._elapsed(now)

        block_lines = block_text(WORD)
        base_intensity = int(2 + 4 * ((1 + math.sin(elapsed * 3)) / 2))
        zalgo_lines = [
            zalgo_string(line, base_intensity + self.rng.randrange(3), self.rng)
            for line in block_lines
        ]

        content_lines = [*zalgo_lines, "", SUBTITLE]
        subtitle_width = visible_width(SUBTITLE)
        content_width = max([visible_width(line) for line in block_lines] + [subtitle_width])
        content_height = len(content_lines)

        start_y = max((self.height - content_height) // 2, 0)
        start_x = max((self.width - content_width) // 2, 0)
        density = 0.3 + 0.3 * ((1 + math.sin(elapsed * 2)) / 2)

        rows = []
        for y in range(self.height):
            content_row = y - start_y
            if not 0 <= content_row < content_height:
                rows.append(self._noise(self.width, density))
                continue
            parts = [self._noise(start_x, density)]
            line = content_lines[content_row]
            if content_row < len(zalgo_lines):
                color = _LOGO_COLORS[content_row % len(_LOGO_COLORS)]
                parts.append(Style(foreground=color, bold=True).render(line))
            elif content_row == len(zalgo_lines):
                parts.append(self._noise(content_width, density))
            else:
                pad = (content_width - subtitle_width) // 2
                parts.append(self._noise(pad, density))
                parts.append(_SUBTITLE_STYLE.render(line))
                parts.append(self._noise(content_width - subtitle_width - pad, density))
            parts.append(self._noise(self.width - (start_x + content_width), density))
            rows.append("".join(parts))
        return "\n".join(rows)