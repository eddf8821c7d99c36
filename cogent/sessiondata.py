"""Serializable session state and helpers for persisting it."""

from __future__ import annotations

import json
import re
import secrets
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any, Mapping

ZERO_TIME = datetime(1, 1, 1, tzinfo=timezone.utc)

_TIME_RE = re.compile(
    r"^(\d{4})-(\d{2})-(\d{2})T(\d{2}):(\d{2}):(\d{2})"
    r"(?:\.(\d+))?(Z|[+-]\d{2}:\d{2})$"
)


def _format_time(moment: datetime) -> str:
    """Format a datetime as RFC 3339 with trailing fractional zeros trimmed."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    text = (
        f"{moment.year:04d}-{moment.month:02d}-{moment.day:02d}"
        f"T{moment.hour:02d}:{moment.minute:02d}:{moment.second:02d}"
    )
    if moment.microsecond:
        text += "." + f"{moment.microsecond:06d}".rstrip("0")
    offset = moment.utcoffset() or timedelta(0)
    if offset == timedelta(0):
        return text + "Z"
    sign = "+" if offset > timedelta(0) else "-"
    minutes = abs(int(offset.total_seconds())) // 60
    return f"{text}{sign}{minutes // 60:02d}:{minutes % 60:02d}"


def _parse_time(text: str) -> datetime:
    """Parse an RFC 3339 timestamp, accepting up to nanosecond precision."""
    match = _TIME_RE.match(text)
    if match is None:
        raise ValueError(f"invalid timestamp: {text!r}")
    year, month, day, hour, minute, second, frac, zone = match.groups()
    micro = int((frac or "0")[:6].ljust(6, "0"))
    if zone == "Z":
        tz = timezone.utc
    else:
        sign = 1 if zone[0] == "+" else -1
        hours, minutes = int(zone[1:3]), int(zone[4:6])
        tz = timezone(sign * timedelta(hours=hours, minutes=minutes))
    return datetime(
        int(year), int(month), int(day), int(hour), int(minute), int(second), micro, tzinfo=tz
    )


@dataclass
class SessionLine:
    """One structured line of session output."""

    type: str = ""
    data: str = ""

    def to_dict(self) -> dict[str, str]:
        result: dict[str, str] = {}
        if self.type:
            result["type"] = self.type
        if self.data:
            result["data"] = self.data
        return result

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SessionLine":
        return cls(type=str(data.get("type") or ""), data=str(data.get("data") or ""))


@dataclass
class SessionData:
    """The JSON-serializable representation of a session."""

    id: str = ""
    name: str = ""
    name_set: bool = False
    model: str = ""
    runtime_id: str = ""
    tab_order: int = 0
    messages: list[Any] = field(default_factory=list)
    permission_mode: str = ""
    allowed_tools: list[str] = field(default_factory=list)
    lines: list[SessionLine] = field(default_factory=list)
    total_cost: float = 0.0
    context_used: int = 0
    created_at: datetime = ZERO_TIME
    updated_at: datetime = ZERO_TIME

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"id": self.id, "name": self.name}
        if self.name_set:
            result["name_set"] = True
        if self.model:
            result["model"] = self.model
        if self.runtime_id:
            result["runtime_id"] = self.runtime_id
        result["tab_order"] = self.tab_order
        if self.messages:
            result["messages"] = list(self.messages)
        result["permission_mode"] = self.permission_mode
        if self.allowed_tools:
            result["allowed_tools"] = list(self.allowed_tools)
        if self.lines:
            result["lines"] = [line.to_dict() for line in self.lines]
        if self.total_cost:
            result["total_cost"] = self.total_cost
        if self.context_used:
            result["context_used"] = self.context_used
        result["created_at"] = _format_time(self.created_at)
        result["updated_at"] = _format_time(self.updated_at)
        return result

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SessionData":
        created = data.get("created_at")
        updated = data.get("updated_at")
        return cls(
            id=str(data.get("id") or ""),
            name=str(data.get("name") or ""),
            name_set=bool(data.get("name_set", False)),
            model=str(data.get("model") or ""),
            runtime_id=str(data.get("runtime_id") or ""),
            tab_order=int(data.get("tab_order") or 0),
            messages=list(data.get("messages") or []),
            permission_mode=str(data.get("permission_mode") or ""),
            allowed_tools=[str(t) for t in data.get("allowed_tools") or []],
            lines=[SessionLine.from_dict(item) for item in data.get("lines") or []],
            total_cost=float(data.get("total_cost") or 0.0),
            context_used=int(data.get("context_used") or 0),
            created_at=_parse_time(created) if created else ZERO_TIME,
            updated_at=_parse_time(updated) if updated else ZERO_TIME,
        )

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False, separators=(",", ":"))

    @classmethod
    def from_json(cls, text: str | bytes) -> "SessionData":
        data = json.loads(text)
        if not isinstance(data, dict):
            raise ValueError("session JSON must be an object")
        return cls.from_dict(data)


def generate_persist_id() -> str:
    """Return a random 8-character hex identifier."""
    return secrets.token_hex(4)


def sorted_true_keys(mapping: Mapping[str, bool]) -> list[str]:
    """Return the keys whose value is true, sorted."""
    return sorted(key for key, enabled in mapping.items() if enabled)