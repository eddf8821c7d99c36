import random
import unicodedata

from cogent.splash import (
    BG_NOISE_CHARS,
    BLOCK_HEIGHT,
    SUBTITLE,
    Splash,
    block_text,
    zalgo_char,
    zalgo_string,
)
from cogent.textutil import strip_ansi, visible_width


def _base(text):
    return "".join(c for c in text if not unicodedata.combining(c))


def test_block_text_single_letter():
    assert block_text("C") == [
        " ██████╗ ",
        "██╔════╝ ",
        "██║      ",
        "██║      ",
        "╚██████╗ ",
        " ╚═════╝ ",
    ]


def test_block_text_word_rows_align():
    rows = block_text("COGENT")
    assert len(rows) == BLOCK_HEIGHT
    assert len({visible_width(row) for row in rows}) == 1
    assert rows[0].startswith(" ██████╗ ")


def test_block_text_skips_unknown_letters():
    assert block_text("X") == [""] * BLOCK_HEIGHT
    assert block_text("CX") == block_text("C")


def test_zalgo_leaves_spaces_and_newlines():
    rng = random.Random(1)
    assert zalgo_char(" ", 5, rng) == " "
    assert zalgo_char("\n", 5, rng) == "\n"


def test_zalgo_zero_intensity_is_plain():
    assert zalgo_char("A", 0, random.Random(3)) == "A"


def test_zalgo_char_adds_bounded_combining_marks():
    rng = random.Random(7)
    for _ in range(50):
        out = zalgo_char("A", 6, rng)
        assert out[0] == "A"
        marks = out[1:]
        assert all(unicodedata.combining(c) for c in marks)
        assert len(marks) <= 6 + 3 + 2


def test_zalgo_string_preserves_base_text():
    text = "Hello world\nagain"
    out = zalgo_string(text, 4, random.Random(5))
    assert _base(out) == text
    assert visible_width(out.split("\n")[0]) == visible_width("Hello world")


def test_view_empty_without_size():
    assert Splash(rng=random.Random(0), start_time=0.0).view(now=0.5) == ""


def test_view_fills_screen():
    splash = Splash(80, 24, random.Random(11), start_time=0.0)
    screen = splash.view(now=0.3)
    rows = screen.split("\n")
    assert len(rows) == 24
    assert all(visible_width(row) == 80 for row in rows)
    assert SUBTITLE in strip_ansi(screen)
    assert "██" in strip_ansi(screen)


def test_view_is_deterministic_for_seed():
    first = Splash(60, 20, random.Random(42), start_time=0.0).view(now=1.0)
    second = Splash(60, 20, random.Random(42), start_time=0.0).view(now=1.0)
    assert first == second


def test_tick_closes_after_duration():
    splash = Splash(10, 10, random.Random(0), start_time=100.0)
    assert splash.tick(now=100.1) is False
    assert splash.tick(now=101.0) is False
    assert splash.tick(now=101.75) is True
    assert splash.frame == 3


def test_noise_cell_density_extremes():
    splash = Splash(10, 10, random.Random(9), start_time=0.0)
    assert all(splash.noise_cell(-1.0) == " " for _ in range(20))
    for _ in range(20):
        cell = strip_ansi(splash.noise_cell(1.0))
        assert cell[0] in BG_NOISE_CHARS
        assert all(unicodedata.combining(c) for c in cell[1:])