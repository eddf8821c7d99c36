import pytest

from cogent.tasks import (
    TaskGroup,
    TaskItem,
    TaskModal,
    TaskProvider,
    TaskResult,
    format_task_for_prompt,
    priority_icon,
    priority_icon_plain,
    priority_styled,
    status_icon,
    status_icon_plain,
    status_styled,
    trunc_line,
    word_wrap,
)
from cogent.textutil import strip_ansi, visible_width

MY_ITEMS = [
    TaskItem(id="ENG-1", title="Fix login", status="Todo", priority="High",
             assignee="Ann", description="The login form breaks", labels=["bug"]),
    TaskItem(id="ENG-2", title="Add export", status="In Progress", priority="Low"),
]
GROUPS = [
    TaskGroup(key="p1", name="Alpha", status="In Progress", count=3),
    TaskGroup(key="p2", name="Beta"),
]
GROUP_ITEMS = [TaskItem(id="ENG-9", title="Inside alpha", status="Done")]


class FakeProvider(TaskProvider):
    name = "Fake"
    icon = "*"
    tabs = ("Mine", "Projects")

    def __init__(self, fail=False):
        self.calls = []
        self.fail = fail

    def fetch(self, tab, group):
        self.calls.append((tab, group))
        if self.fail:
            raise RuntimeError("backend unavailable")
        if tab == 0:
            return TaskResult(items=list(MY_ITEMS))
        if not group:
            return TaskResult(groups=list(GROUPS))
        return TaskResult(items=list(GROUP_ITEMS))


def make_modal(width=60, height=20, fail=False):
    modal = TaskModal(FakeProvider(fail=fail), width, height)
    modal.fetch()
    return modal


def box_lines(text):
    return strip_ansi(text).split("\n")


def test_initial_state_is_loading():
    modal = TaskModal(FakeProvider(), 60, 20)
    assert modal.loading is True
    assert modal.tabs == ["Mine", "Projects"]
    assert "Loading…" in strip_ansi(modal.render())


def test_fetch_applies_items():
    modal = make_modal()
    assert modal.loading is False
    assert modal.items == MY_ITEMS
    assert modal.provider.calls == [(0, "")]


def test_fetch_error_sets_message():
    modal = make_modal(fail=True)
    assert modal.error == "backend unavailable"
    assert modal.items is None and modal.groups is None
    assert "⚠ backend unavailable" in strip_ansi(modal.render())


def test_apply_fetch_clears_error():
    modal = make_modal(fail=True)
    modal.apply_fetch(TaskResult(items=list(GROUP_ITEMS)), None)
    assert modal.error == ""
    assert modal.items == GROUP_ITEMS


def test_item_navigation_clamps():
    modal = make_modal()
    modal.up()
    assert modal.cursor == 0
    modal.down()
    modal.down()
    assert modal.cursor == 1
    assert modal.selected_item() == MY_ITEMS[1]


def test_enter_opens_detail_and_back_closes():
    modal = make_modal()
    assert modal.enter() is False
    assert modal.show_detail is True
    modal.down()
    assert modal.cursor == 0
    detail = strip_ansi(modal.render())
    assert "ENG-1" in detail and "Fix login" in detail
    assert "[bug]" in detail
    assert "The login form breaks" in detail
    assert modal.back() is False
    assert modal.show_detail is False


def test_switch_view_and_drill_into_group():
    modal = make_modal()
    assert modal.switch_view() is True
    assert modal.tab == 1 and modal.loading is True
    modal.fetch()
    assert modal.groups == GROUPS
    modal.down()
    modal.down()
    assert modal.cursor == 1
    modal.up()
    assert modal.enter() is True
    assert modal.group_key == "p1" and modal.group_name == "Alpha"
    modal.fetch()
    assert modal.provider.calls[-1] == (1, "p1")
    rendered = strip_ansi(modal.render())
    assert "Projects › Alpha" in rendered
    assert "Inside alpha" in rendered
    assert modal.back() is True
    assert modal.group_key == "" and modal.cursor == 0


def test_switch_view_wraps_around():
    modal = make_modal()
    modal.switch_view()
    modal.switch_view()
    assert modal.tab == 0


def test_switch_view_blocked_in_detail():
    modal = make_modal()
    modal.enter()
    assert modal.switch_view() is False
    assert modal.tab == 0


def test_group_list_render():
    modal = make_modal()
    modal.switch_view()
    modal.fetch()
    rendered = strip_ansi(modal.render())
    assert "▸ In Progress  Alpha  (3)" in rendered
    assert "Beta" in rendered
    assert "enter: open" in rendered


def test_empty_items_render():
    modal = make_modal()
    modal.apply_fetch(TaskResult(items=[]), None)
    assert "No issues found." in strip_ansi(modal.render())


@pytest.mark.parametrize("width,height", [(60, 20), (30, 12), (10, 5)])
def test_box_has_fixed_size(width, height):
    modal = make_modal(width, height)
    inner = max(width - 4, 20)
    rows = box_lines(modal.render_list())
    assert len(rows) == max(height - 2, 10) + 2
    assert all(visible_width(row) == inner + 4 for row in rows)
    assert rows[0].startswith("╭") and rows[-1].startswith("╰")


def test_long_title_stays_in_box():
    modal = make_modal(40, 20)
    modal.apply_fetch(TaskResult(items=[TaskItem(id="X-1", title="word " * 40)]), None)
    rows = box_lines(modal.render())
    assert all(visible_width(row) == 40 for row in rows)


def test_render_detail_without_selection_is_empty():
    modal = make_modal()
    modal.apply_fetch(TaskResult(items=[]), None)
    assert modal.render_detail() == ""


def test_format_task_for_prompt():
    text = format_task_for_prompt(MY_ITEMS[0])
    assert text == (
        "[ENG-1] Fix login\n"
        "Status: Todo | Priority: High | Assignee: Ann\n"
        "Labels: bug\n"
        "\nThe login form breaks"
    )


def test_format_task_for_prompt_minimal():
    text = format_task_for_prompt(TaskItem(id="A", title="B"))
    assert text == "[A] B\nStatus:  | Priority:  | Assignee: \n"


@pytest.mark.parametrize(
    "status,icon",
    [("In Progress", "●"), ("Todo", "○"), ("Done", "✓"), ("Backlog", "◌"), ("Other", "○")],
)
def test_status_icons(status, icon):
    assert status_icon_plain(status) == icon
    assert strip_ansi(status_icon(status)) == icon


@pytest.mark.parametrize(
    "priority,icon",
    [("Urgent", "⚡"), ("High", "↑"), ("Medium", "→"), ("Low", "↓"), ("None", " ")],
)
def test_priority_icons(priority, icon):
    assert priority_icon_plain(priority) == icon
    assert strip_ansi(priority_icon(priority)) == icon


def test_styled_keeps_text_and_unknown_is_plain():
    assert strip_ansi(status_styled("Done")) == "Done"
    assert "\x1b[" in status_styled("Done")
    assert status_styled("Weird") == "Weird"
    assert strip_ansi(priority_styled("Urgent")) == "Urgent"
    assert priority_styled("Weird") == "Weird"


def test_trunc_line():
    assert trunc_line("short", 10) == "short"
    assert trunc_line("abcdef", 4) == "abc…"


def test_word_wrap_invariants():
    text = "the quick brown fox jumps over the lazy dog again and again"
    rows = word_wrap(text, 12)
    assert " ".join(rows) == " ".join(text.split())
    assert all(len(row) <= 12 for row in rows)


def test_word_wrap_edge_cases():
    assert word_wrap("anything here", 0) == ["anything here"]
    assert word_wrap("   ", 10) == []
    assert word_wrap("supercalifragilistic", 5) == ["supercalifragilistic"]