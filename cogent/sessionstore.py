"""Persistence of session data."""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from pathlib import Path

from cogent.sessiondata import SessionData


class SessionStore(ABC):
    """Storage backend for session data."""

    @abstractmethod
    def save(self, data: SessionData) -> None:
        """Store a session, replacing any earlier copy with the same id."""

    @abstractmethod
    def load(self, session_id: str) -> SessionData:
        """Return the stored session with the given id."""

    @abstractmethod
    def list(self) -> list[SessionData]:
        """Return every stored session, most recently updated first."""

    @abstractmethod
    def delete(self, session_id: str) -> None:
        """Remove the stored session with the given id."""


class LocalSessionStore(SessionStore):
    """Stores sessions as JSON files under ``<cwd>/.cogent/sessions/``."""

    def __init__(self, cwd: str | Path) -> None:
        self.cwd = Path(cwd)

    @property
    def directory(self) -> Path:
        return self.cwd / ".cogent" / "sessions"

    def _path(self, session_id: str) -> Path:
        return self.directory / f"{session_id}.json"

    def save(self, data: SessionData) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        self._path(data.id).write_text(data.to_json(), encoding="utf-8")

    def load(self, session_id: str) -> SessionData:
        return SessionData.from_json(self._path(session_id).read_bytes())

    def list(self) -> list[SessionData]:
        try:
            entries = list(self.directory.iterdir())
        except FileNotFoundError:
            return []
        sessions = []
        for entry in entries:
            if entry.is_dir() or entry.suffix != ".json":
                continue
            try:
                sessions.append(SessionData.from_json(entry.read_bytes()))
            except (OSError, ValueError, TypeError):
                continue
        sessions.sort(key=lambda sd: sd.updated_at, reverse=True)
        return sessions

    def delete(self, session_id: str) -> None:
        self._path(session_id).unlink()