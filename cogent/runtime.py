"""Where agent execution happens."""

from __future__ import annotations

from enum import IntEnum


class RuntimeKind(IntEnum):
    """Distinguishes local from remote runtimes."""

    LOCAL = 0
    REMOTE = 1


class RuntimeStatus(IntEnum):
    """The current state of a runtime."""

    READY = 0
    SLEEPING = 1
    WAKING = 2
    ERROR = 3


class InProcessRuntime:
    """Runs the agent in the same process; lifecycle and sync change nothing."""

    def kind(self) -> RuntimeKind:
        return RuntimeKind.LOCAL

    def runtime_id(self) -> str:
        return ""

    def status(self) -> RuntimeStatus:
        return RuntimeStatus.READY

    def wake(self) -> RuntimeStatus:
        """An in-process runtime is always awake; return its status."""
        return self.status()

    def sleep(self) -> RuntimeStatus:
        """An in-process runtime never sleeps; return its status."""
        return self.status()

    def sync_to(self, repo_url: str, branch: str, commit: str) -> bool:
        """Return whether anything was synced; the working tree is already local."""
        return False

    def sync_from(self) -> str:
        """Return the synced branch name, which is empty for local runs."""
        return ""