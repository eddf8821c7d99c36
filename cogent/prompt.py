"""Inline user prompts: tool confirmations, plan confirmation and choices."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any

from cogent.textutil import Style

_YELLOW = Style(foreground=3)
_CHOICE_ACTIVE = Style(bold=True, foreground=15, background=4)
_CHOICE_INACTIVE = Style(foreground=7)
_CHOICE_DIM = Style(foreground=8)


class PromptKind(IntEnum):
    """The type of prompt shown to the user."""

    CONFIRM = 0
    PLAN_CONFIRM = 1
    CHOICE = 2


@dataclass
class Prompt:
    """An active user prompt; for choices the last option is freeform."""

    kind: PromptKind
    message: str
    request: Any = None
    choices: list[str] = field(default_factory=list)
    selected: int = 0
    freeform: bool = False

    @classmethod
    def confirm(cls, request: Any, display_text: str) -> "Prompt":
        """A tool confirmation prompt (y/n/a)."""
        return cls(kind=PromptKind.CONFIRM, message=display_text, request=request)

    @classmethod
    def plan_confirm(cls) -> "Prompt":
        """A plan-ready confirmation prompt (y/n)."""
        return cls(kind=PromptKind.PLAN_CONFIRM, message="Switch to Confirm mode and execute?")

    @classmethod
    def choice(cls, question: str, choices: list[str]) -> "Prompt":
        """A multiple-choice prompt."""
        return cls(kind=PromptKind.CHOICE, message=question, choices=list(choices))

    def _navigable(self) -> bool:
        return self.kind == PromptKind.CHOICE and bool(self.choices) and not self.freeform

    def up(self) -> None:
        if self._navigable() and self.selected > 0:
            self.selected -= 1

    def down(self) -> None:
        if self._navigable() and self.selected < len(self.choices) - 1:
            self.selected += 1

    def select_by_number(self, n: int) -> bool:
        """Select a choice by its 1-based number; return whether it was valid."""
        if self.kind != PromptKind.CHOICE or self.freeform:
            return False
        if 1 <= n <= len(self.choices):
            self.selected = n - 1
            return True
        return False

    def selected_choice(self) -> int:
        return self.selected

    def is_other_selected(self) -> bool:
        return (
            self.kind == PromptKind.CHOICE
            and bool(self.choices)
            and self.selected == len(self.choices) - 1
        )

    def render_prompt_line(self) -> str:
        if self.kind == PromptKind.CONFIRM:
            return _YELLOW.render(self.message)
        if self.kind == PromptKind.PLAN_CONFIRM:
            return _YELLOW.render(self.message + " [Y/n] ")
        return self.render_choices()

    def render_choices(self) -> str:
        rows = [_YELLOW.render(self.message)]
        for number, label in enumerate(self.choices, start=1):
            prefix = _CHOICE_DIM.render(f"  {number}. ")
            if number - 1 == self.selected:
                rows.append(prefix + _CHOICE_ACTIVE.render(f" {label} "))
            else:
                rows.append(prefix + _CHOICE_INACTIVE.render(label))
        return "\n".join(rows)

    def hint_text(self) -> str:
        if self.kind == PromptKind.CONFIRM:
            return " y/n/a "
        if self.kind == PromptKind.PLAN_CONFIRM:
            return " y/n "
        if self.freeform:
            return " type your answer, enter to submit "
        return f" ↑/↓ enter  (1-{len(self.choices)}) "