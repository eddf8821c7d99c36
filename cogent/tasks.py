"""Task browser: generic task types, a provider interface and the modal overlay."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Sequence

from cogent.textutil import Style, truncate, visible_width


@dataclass
class TaskItem:
    """An issue, ticket or task from any provider."""

    id: str = ""
    title: str = ""
    status: str = ""
    priority: str = ""
    assignee: str = ""
    description: str = ""
    url: str = ""
    labels: list[str] = field(default_factory=list)


@dataclass
class TaskGroup:
    """A container of tasks such as a project, repository or board."""

    key: str = ""
    name: str = ""
    status: str = ""
    count: int = 0


@dataclass
class TaskResult:
    """What a provider returns: either items or groups."""

    items: list[TaskItem] | None = None
    groups: list[TaskGroup] | None = None


class TaskProvider(ABC):
    """A task backend. Subclasses set ``name``, ``icon`` and ``tabs``."""

    name: str = ""
    icon: str = ""
    tabs: Sequence[str] = ()

    @abstractmethod
    def fetch(self, tab: int, group: str) -> TaskResult:
        """Return the items or groups for a tab, optionally inside a group."""


_TITLE = Style(bold=True, foreground=5)
_HEADER = Style(bold=True, foreground=15)
_SELECTED = Style(bold=True, foreground=0, background=15)
_DIM = Style(foreground=8)
_STATUS_IN_PROGRESS = Style(foreground=3)
_STATUS_TODO = Style(foreground=7)
_STATUS_DONE = Style(foreground=2)
_STATUS_BACKLOG = Style(foreground=8)
_PRIORITY_URGENT = Style(foreground=1, bold=True)
_PRIORITY_HIGH = Style(foreground=208)
_PRIORITY_MEDIUM = Style(foreground=3)
_PRIORITY_LOW = Style(foreground=8)
_LABEL = Style(foreground=4)
_KEY = Style(foreground=8)
_ACCENT = Style(bold=True, foreground=5)
_BORDER = Style(foreground=8)
_DETAIL_KEY = Style(foreground=5, bold=True)
_DETAIL_VAL = Style(foreground=7)

_STATUS = {
    "In Progress": ("●", _STATUS_IN_PROGRESS),
    "Todo": ("○", _STATUS_TODO),
    "Done": ("✓", _STATUS_DONE),
    "Backlog": ("◌", _STATUS_BACKLOG),
}

_PRIORITY = {
    "Urgent": ("⚡", _PRIORITY_URGENT),
    "High": ("↑", _PRIORITY_HIGH),
    "Medium": ("→", _PRIORITY_MEDIUM),
    "Low": ("↓", _PRIORITY_LOW),
}


def status_icon(status: str) -> str:
    if status in _STATUS:
        icon, style = _STATUS[status]
        return style.render(icon)
    return _DIM.render("○")


def status_icon_plain(status: str) -> str:
    return _STATUS[status][0] if status in _STATUS else "○"


def status_styled(status: str) -> str:
    if status in _STATUS:
        return _STATUS[status][1].render(status)
    return status


def priority_icon(priority: str) -> str:
    if priority in _PRIORITY:
        icon, style = _PRIORITY[priority]
        return style.render(icon)
    return " "


def priority_icon_plain(priority: str) -> str:
    return _PRIORITY[priority][0] if priority in _PRIORITY else " "


def priority_styled(priority: str) -> str:
    if priority in _PRIORITY:
        return _PRIORITY[priority][1].render(priority)
    return priority


def trunc_line(text: str, max_width: int) -> str:
    """Shorten text to ``max_width`` characters, ending with an ellipsis."""
    if len(text) > max_width:
        return text[: max(max_width - 1, 0)] + "…"
    return text


def word_wrap(text: str, width: int) -> list[str]:
    """Greedy word wrap on whitespace; words longer than ``width`` stay whole."""
    if width <= 0:
        return [text]
    words = text.split()
    if not words:
        return []
    lines = []
    line = words[0]
    for word in words[1:]:
        if len(line) + 1 + len(word) > width:
            lines.append(line)
            line = word
        else:
            line += " " + word
    lines.append(line)
    return lines


def format_task_for_prompt(item: TaskItem) -> str:
    """Summarise a task as text suitable for inserting into a prompt."""
    parts = [
        f"[{item.id}] {item.title}\n",
        f"Status: {item.status} | Priority: {item.priority} | Assignee: {item.assignee}\n",
    ]
    if item.labels:
        parts.append("Labels: " + ", ".join(item.labels) + "\n")
    if item.description:
        parts.append("\n" + item.description)
    return "".join(parts)


def _fit_height(lines: list[str], height: int) -> list[str]:
    lines = lines[:height]
    lines.extend([""] * (height - len(lines)))
    return lines


class TaskModal:
    """State and rendering of the task browser overlay."""

    def __init__(self, provider: TaskProvider, width: int, height: int) -> None:
        self.provider = provider
        self.tabs = list(provider.tabs)
        self.width = width
        self.height = height
        self.tab = 0
        self.items: list[TaskItem] | None = None
        self.groups: list[TaskGroup] | None = None
        self.group_key = ""
        self.group_name = ""
        self.error = ""
        self.loading = True
        self.cursor = 0
        self.show_detail = False

    @property
    def _in_group_list(self) -> bool:
        return self.groups is not None and not self.group_key

    def fetch(self) -> None:
        """Fetch the current view from the provider and apply the outcome."""
        try:
            result = self.provider.fetch(self.tab, self.group_key)
        except Exception as exc:  # any provider failure is shown in the modal
            self.apply_fetch(None, exc)
        else:
            self.apply_fetch(result, None)

    def apply_fetch(self, result: TaskResult | None, error: BaseException | None) -> None:
        self.loading = False
        if error is not None or result is None:
            self.error = str(error) if error is not None else "no result"
            self.items = None
            self.groups = None
            return
        self.error = ""
        self.items = result.items
        self.groups = result.groups

    def selected_item(self) -> TaskItem | None:
        items = self.items or []
        if 0 <= self.cursor < len(items):
            return items[self.cursor]
        return None

    def up(self) -> None:
        if not self.show_detail and self.cursor > 0:
            self.cursor -= 1

    def down(self) -> None:
        if self.show_detail:
            return
        entries = self.groups if self._in_group_list else (self.items or [])
        if self.cursor < len(entries) - 1:
            self.cursor += 1

    def enter(self) -> bool:
        """Open a group or an item's detail; return True when a fetch is needed."""
        if self.show_detail:
            return False
        if self._in_group_list:
            assert self.groups is not None
            if 0 <= self.cursor < len(self.groups):
                group = self.groups[self.cursor]
                self.group_key = group.key
                self.group_name = group.name
                self.items = None
                self.cursor = 0
                self.loading = True
                return True
            return False
        if self.selected_item() is not None:
            self.show_detail = True
        return False

    def back(self) -> bool:
        """Leave the detail view or group; return True when a fetch is needed."""
        if self.show_detail:
            self.show_detail = False
            return False
        if self.group_key:
            self.group_key = ""
            self.group_name = ""
            self.items = None
            self.cursor = 0
            self.loading = True
            return True
        return False

    def switch_view(self) -> bool:
        """Move to the next tab; return True when a fetch is needed."""
        if self.show_detail:
            return False
        self.tab = (self.tab + 1) % len(self.tabs)
        self.cursor = 0
        self.group_key = ""
        self.group_name = ""
        self.items = None
        self.groups = None
        self.loading = True
        return True

    def render(self) -> str:
        return self.render_detail() if self.show_detail else self.render_list()

    def _inner_width(self) -> int:
        return max(self.width - 4, 20)

    def _max_height(self) -> int:
        return max(self.height - 2, 10)

    def _title(self) -> str:
        return _TITLE.render(f" {self.provider.icon} {self.provider.name} ")

    def render_list(self) -> str:
        inner = self._inner_width()
        lines = [self._title(), ""]

        tab_parts = [
            (_SELECTED if i == self.tab else _DIM).render(f"  {label}  ")
            for i, label in enumerate(self.tabs)
        ]
        lines.append("  ".join(tab_parts) + "    " + _KEY.render("tab: switch view"))
        lines.append(_BORDER.render("─" * inner))

        if self.error:
            lines.append("")
            lines.extend(
                "  " + _PRIORITY_URGENT.render("⚠ " + row)
                for row in word_wrap(self.error, inner - 4)
            )
        elif self.loading:
            lines.append("")
            lines.append(_DIM.render("  Loading…"))
        elif self._in_group_list:
            lines.extend(self._render_group_list(inner))
        else:
            lines.extend(self._render_item_list(inner))

        lines.append("")
        if self._in_group_list:
            help_text = "  ↑/↓: navigate  enter: open  tab: switch view  esc: close"
        elif self.group_key:
            help_text = "  ↑/↓: navigate  enter: view details  tab: switch view  esc: back/close"
        else:
            help_text = "  ↑/↓: navigate  enter: view details  tab: switch view  esc: close"
        lines.append(_KEY.render(help_text))

        return self._wrap_in_box(_fit_height(lines, self._max_height()), inner)

    def _render_group_list(self, inner: int) -> list[str]:
        lines = []
        for i, group in enumerate(self.groups or []):
            count = _DIM.render(f"({group.count})") if group.count > 0 else ""
            status = status_styled(group.status) + "  " if group.status else ""
            status_plain = group.status + "  " if group.status else ""
            entry = f"  {status}{group.name}  {count}"
            if i == self.cursor:
                plain = f"▸ {status_plain}{group.name}"
                if group.count > 0:
                    plain += f"  ({group.count})"
                entry = _SELECTED.render(trunc_line(plain, inner))
            lines.append(entry)
        return lines

    def _render_item_list(self, inner: int) -> list[str]:
        items = self.items or []
        if not items:
            return [_DIM.render("  No issues found.")]

        lines = []
        if self.group_key:
            tab_label = self.tabs[self.tab] if self.tab < len(self.tabs) else ""
            breadcrumb = (
                _DIM.render(tab_label + " › ")
                + _HEADER.render(self.group_name)
                + _DIM.render(f"  ({len(items)} issues)")
            )
            lines.extend(["  " + breadcrumb, ""])

        max_title = inner - 25
        for i, item in enumerate(items):
            title = item.title
            if max_title > 0 and len(title) > max_title:
                title = title[: max(max_title - 3, 0)] + "…"
            row = (
                f"  {status_icon(item.status)} {priority_icon(item.priority)}  "
                f"{_DIM.render(item.id)}  {title}"
            )
            if i == self.cursor:
                plain = (
                    f"▸ {status_icon_plain(item.status)} {priority_icon_plain(item.priority)}  "
                    f"{item.id}  {title}"
                )
                row = _SELECTED.render(trunc_line(plain, inner))
            lines.append(row)
        return lines

    def render_detail(self) -> str:
        item = self.selected_item()
        if item is None:
            return ""
        inner = self._inner_width()

        lines = [
            self._title(),
            "",
            "  " + _ACCENT.render(item.id) + "  " + _HEADER.render(item.title),
            "",
            "  " + _DETAIL_KEY.render("Status    ") + status_styled(item.status),
            "  " + _DETAIL_KEY.render("Priority  ") + priority_styled(item.priority),
            "  " + _DETAIL_KEY.render("Assignee  ") + _DETAIL_VAL.render(item.assignee),
        ]
        if item.labels:
            labels = " ".join(_LABEL.render(f"[{label}]") for label in item.labels)
            lines.append("  " + _DETAIL_KEY.render("Labels    ") + labels)
        lines.append("")

        lines.append("  " + _DETAIL_KEY.render("Description"))
        desc_width = max(inner - 4, 10)
        lines.extend("  " + _DIM.render("  " + row) for row in word_wrap(item.description, desc_width))

        lines.append("")
        lines.append(
            "  "
            + _ACCENT.render("[ Insert into Prompt ]")
            + "    "
            + _KEY.render("⏎ insert  esc/backspace: back")
        )

        return self._wrap_in_box(_fit_height(lines, self._max_height()), inner)

    @staticmethod
    def _wrap_in_box(lines: list[str], inner: int) -> str:
        top = _BORDER.render("╭" + "─" * (inner + 2) + "╮")
        bottom = _BORDER.render("╰" + "─" * (inner + 2) + "╯")
        left = _BORDER.render("│") + " "
        right = " " + _BORDER.render("│")
        rows = [top]
        for line in lines:
            width = visible_width(line)
            if width < inner:
                line += " " * (inner - width)
            elif width > inner:
                line = truncate(line, inner)
            rows.append(left + line + right)
        rows.append(bottom)
        return "\n".join(rows)