import pytest

from cogent.prompt import Prompt, PromptKind
from cogent.textutil import strip_ansi


def test_new_confirm_prompt():
    request = {"name": "bash", "input": {"command": "ls"}}
    p = Prompt.confirm(request, "Allow bash ls? [Y/n/a] ")
    assert p.kind == PromptKind.CONFIRM
    assert p.request is request
    assert p.message == "Allow bash ls? [Y/n/a] "
    assert p.hint_text() == " y/n/a "


def test_new_plan_confirm_prompt():
    p = Prompt.plan_confirm()
    assert p.kind == PromptKind.PLAN_CONFIRM
    assert "Confirm mode" in p.message
    assert p.hint_text() == " y/n "


def test_plan_confirm_render():
    rendered = strip_ansi(Prompt.plan_confirm().render_prompt_line())
    assert rendered == "Switch to Confirm mode and execute? [Y/n] "


def test_new_choice_prompt():
    p = Prompt.choice("Which approach?", ["Option A", "Option B", "Other (I'll explain)"])
    assert p.kind == PromptKind.CHOICE
    assert p.selected == 0
    assert len(p.choices) == 3
    assert p.freeform is False


def test_choice_navigation():
    p = Prompt.choice("Pick one:", ["A", "B", "C"])
    assert p.selected_choice() == 0
    p.down()
    assert p.selected_choice() == 1
    p.down()
    assert p.selected_choice() == 2
    p.down()
    assert p.selected_choice() == 2
    p.up()
    assert p.selected_choice() == 1
    p.up()
    p.up()
    assert p.selected_choice() == 0


def test_choice_navigation_disabled_in_freeform():
    p = Prompt.choice("Pick:", ["A", "B", "Other"])
    p.selected = 2
    p.freeform = True
    p.up()
    assert p.selected_choice() == 2
    p.down()
    assert p.selected_choice() == 2


def test_choice_select_by_number():
    p = Prompt.choice("Pick one:", ["A", "B", "C"])
    assert p.select_by_number(2) is True
    assert p.selected_choice() == 1
    assert p.select_by_number(0) is False
    assert p.select_by_number(4) is False
    assert p.select_by_number(-1) is False
    assert p.selected_choice() == 1


def test_choice_select_by_number_disabled_in_freeform():
    p = Prompt.choice("Pick:", ["A", "B", "Other"])
    p.freeform = True
    assert p.select_by_number(1) is False


def test_choice_select_by_number_non_choice():
    assert Prompt.plan_confirm().select_by_number(1) is False


def test_up_down_on_non_choice():
    p = Prompt.confirm(None, "test")
    p.up()
    p.down()
    assert p.selected_choice() == 0


def test_is_other_selected():
    p = Prompt.choice("Pick:", ["A", "B", "Other (I'll explain)"])
    assert p.is_other_selected() is False
    p.down()
    p.down()
    assert p.is_other_selected() is True
    p.up()
    assert p.is_other_selected() is False


def test_render_choices():
    p = Prompt.choice("Which pattern?", ["Use interfaces", "Use generics", "Other (I'll explain)"])
    rendered = p.render_prompt_line()
    for text in ("Which pattern?", "Use interfaces", "Use generics", "Other"):
        assert text in rendered
    assert "1." in strip_ansi(rendered)


def test_render_choices_highlights_selected_choice():
    p = Prompt.choice("Choose one:", ["Option A", "Option B", "Other (I'll explain)"])
    p.selected = 1
    rendered = p.render_prompt_line()
    assert "Option B" in rendered
    assert "\x1b[" in rendered
    assert " Option B " in strip_ansi(rendered)


@pytest.mark.parametrize(
    "prompt, want",
    [
        (Prompt.confirm(None, "test"), " y/n/a "),
        (Prompt.plan_confirm(), " y/n "),
        (Prompt.choice("q", ["a", "b"]), " ↑/↓ enter  (1-2) "),
        (Prompt.choice("q", ["a", "b", "c", "d", "e"]), " ↑/↓ enter  (1-5) "),
    ],
)
def test_hint_text(prompt, want):
    assert prompt.hint_text() == want


def test_hint_text_freeform():
    p = Prompt.choice("q", ["a", "Other"])
    p.freeform = True
    assert "type your answer" in p.hint_text()