"""Per-session input helpers: history browsing, naming, sizing and shell runs."""

from __future__ import annotations

import math
import os
import subprocess
from dataclasses import dataclass, field
from typing import Iterable

from cogent.textutil import visible_width

_NAME_LIMIT = 24
_HIDDEN_ENV = "ANTHROPIC_API_KEY"


@dataclass
class InputHistory:
    """Shell-like history of submitted inputs, browsed with up and down."""

    entries: list[str] = field(default_factory=list)
    index: int = -1
    saved: str = ""

    def _reset(self) -> None:
        self.index = -1
        self.saved = ""

    def push(self, text: str) -> None:
        """Record a submitted input, skipping empty text and repeats."""
        if not text:
            return
        if not self.entries or self.entries[-1] != text:
            self.entries.append(text)
        self._reset()

    def up(self, current: str) -> str | None:
        """Move to an older entry; return the text to show, or None to keep the input."""
        if not self.entries:
            return None
        if self.index == -1:
            self.saved = current
            self.index = len(self.entries) - 1
        elif self.index > 0:
            self.index -= 1
        else:
            return None
        return self.entries[self.index]

    def down(self) -> str | None:
        """Move to a newer entry, restoring the saved input past the newest."""
        if self.index == -1:
            return None
        if self.index < len(self.entries) - 1:
            self.index += 1
            return self.entries[self.index]
        saved = self.saved
        self._reset()
        return saved

    def rebuild(self, entries: Iterable[str]) -> None:
        """Replace the history with the given prompt texts."""
        self.entries = []
        for entry in entries:
            text = entry.strip()
            if text and (not self.entries or self.entries[-1] != text):
                self.entries.append(text)
        self._reset()


def auto_name(prompt: str, current: str, name_set: bool) -> str:
    """Return a tab name taken from the first line of a prompt."""
    if name_set:
        return current
    name = prompt.strip()
    newline = name.find("\n")
    if newline > 0:
        name = name[:newline]
    encoded = name.encode("utf-8")
    if len(encoded) > _NAME_LIMIT:
        name = encoded[:_NAME_LIMIT].decode("utf-8", errors="ignore") + "…"
    return name or current


def input_visual_lines(value: str, width: int) -> int:
    """Count the visual rows the input occupies in a text area of ``width`` cells."""
    if not value:
        return 1
    wrap_width = max(width - 2, 1)
    total = 0
    for row in value.split("\n"):
        row_width = visible_width(row)
        total += 1 if row_width == 0 else math.ceil(row_width / wrap_width)
    return total


@dataclass(frozen=True)
class ShellResult:
    """Outcome of a shell command run from the input box."""

    command: str
    lines: list[str]
    exit_code: int
    exit_message: str
    output: str


def run_shell_command(command: str, cwd: str | os.PathLike[str]) -> ShellResult:
    """Run ``command`` with ``sh -c`` in ``cwd`` and collect its combined output."""
    env = {key: value for key, value in os.environ.items() if key != _HIDDEN_ENV}
    proc = subprocess.run(
        ["sh", "-c", command],
        cwd=cwd,
        env=env,
        stdout=subprocess.PIPE,
        stderr=subprocess.STDOUT,
        check=False,
    )
    output = proc.stdout.decode("utf-8", errors="replace").rstrip("\n")
    lines = output.split("\n") if output else []
    if proc.returncode == 0:
        return ShellResult(command, lines, 0, "", output)
    code = proc.returncode if proc.returncode > 0 else -1
    exit_message = f"(exit code {code})"
    full = f"{output}\n{exit_message}" if output else exit_message
    return ShellResult(command, lines, code, exit_message, full)