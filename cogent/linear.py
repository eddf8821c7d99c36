"""Task provider backed by the Linear GraphQL API."""

from __future__ import annotations

import json
import os
import urllib.error
import urllib.request
from typing import Any, Mapping

from cogent.tasks import TaskGroup, TaskItem, TaskProvider, TaskResult

_ENDPOINT = "https://api.linear.app/graphql"

_ISSUES_QUERY = """{
	issues(
		first: 50
		filter: {
			%s: { id: { eq: "%s" } }
			state: { type: { nin: ["canceled", "completed"] } }
		}
		orderBy: updatedAt
	) {
		nodes {
			identifier title
			state { name }
			priorityLabel
			assignee { name }
			labels { nodes { name } }
			description url
		}
	}
}"""

_PROJECTS_QUERY = """{
	projects(first: 50) {
		nodes {
			id name state
			issues { nodes { id } }
		}
	}
}"""

_USERS_QUERY = "{ users { nodes { id name displayName } } }"
_VIEWER_QUERY = "{ viewer { id } }"

_PRIORITY_LABELS = {"urgent": "Urgent", "high": "High", "medium": "Medium", "low": "Low"}

_PROJECT_STATES = {
    "started": "In Progress",
    "planned": "Todo",
    "completed": "Done",
    "canceled": "Backlog",
    "paused": "Backlog",
    "backlog": "Backlog",
}


class LinearError(RuntimeError):
    """A failure talking to Linear or understanding its reply."""


def json_path(data: Any, *args: str) -> Any:
    """Follow nested mapping keys; return None when a step is not a mapping."""
    current = data
    for key in args:
        if not isinstance(current, Mapping):
            return None
        current = current.get(key)
    return current


def _json_str(data: Mapping[str, Any], key: str) -> str:
    value = data.get(key)
    return value if isinstance(value, str) else ""


def map_priority_label(label: str) -> str:
    """Normalise a Linear priority label to the task modal's names."""
    return _PRIORITY_LABELS.get(label.lower(), label)


def map_project_state(state: str) -> str:
    """Map a Linear project state to a task modal status label."""
    return _PROJECT_STATES.get(state.lower(), state)


def parse_issue_nodes(data: Mapping[str, Any], key: str) -> list[TaskItem]:
    """Extract task items from an issues connection at ``data[key]``."""
    nodes = json_path(data, key, "nodes")
    if not isinstance(nodes, list):
        return []
    items = []
    for node in nodes:
        if not isinstance(node, Mapping):
            continue
        item = TaskItem(id=_json_str(node, "identifier"), title=_json_str(node, "title"))
        state = json_path(node, "state")
        if isinstance(state, Mapping):
            item.status = _json_str(state, "name")
        item.priority = map_priority_label(_json_str(node, "priorityLabel"))
        assignee = json_path(node, "assignee")
        if isinstance(assignee, Mapping):
            item.assignee = _json_str(assignee, "name")
        item.description = _json_str(node, "description")
        item.url = _json_str(node, "url")
        labels = json_path(node, "labels", "nodes")
        if isinstance(labels, list):
            item.labels = [
                label["name"]
                for label in labels
                if isinstance(label, Mapping) and isinstance(label.get("name"), str)
            ]
        items.append(item)
    return items


class LinearProvider(TaskProvider):
    """Lists a user's issues and the workspace's projects from Linear."""

    name = "Linear"
    icon = "◆"
    tabs = ("My Issues", "Projects")

    def __init__(
        self,
        api_key: str | None = None,
        username: str | None = None,
        timeout: float = 30.0,
    ) -> None:
        self.api_key = os.environ.get("LINEAR_API_KEY", "") if api_key is None else api_key
        self.username = os.environ.get("LINEAR_USERNAME", "") if username is None else username
        self.timeout = timeout
        self.viewer_id = ""

    def fetch(self, tab: int, group: str) -> TaskResult:
        if not self.api_key:
            raise LinearError(
                "LINEAR_API_KEY not set — add it to ~/.cogent/settings or .cogent/.env"
            )
        if tab == 0:
            return self.fetch_my_issues()
        if tab == 1:
            return self.fetch_project_issues(group) if group else self.fetch_projects()
        return TaskResult()

    def query(self, query: str) -> dict[str, Any]:
        """Run a GraphQL query and return its ``data`` object."""
        body = json.dumps({"query": query}).encode("utf-8")
        request = urllib.request.Request(
            _ENDPOINT,
            data=body,
            method="POST",
            headers={"Content-Type": "application/json", "Authorization": self.api_key},
        )
        try:
            with urllib.request.urlopen(request, timeout=self.timeout) as response:
                status = response.status
                raw = response.read()
        except urllib.error.HTTPError as exc:
            status = exc.code
            raw = exc.read() if exc.fp is not None else b""
        except OSError as exc:
            raise LinearError(f"Linear API request failed: {exc}") from exc

        text = raw.decode("utf-8", errors="replace")
        if status != 200:
            raise LinearError(f"Linear API returned {status}: {text}")

        try:
            result = json.loads(text)
        except ValueError as exc:
            raise LinearError(f"parsing Linear API response: {exc}") from exc
        if not isinstance(result, dict):
            raise LinearError("parsing Linear API response: expected a JSON object")

        errors = result.get("errors")
        if isinstance(errors, list) and errors:
            first = errors[0]
            if isinstance(first, Mapping) and isinstance(first.get("message"), str):
                raise LinearError(f"Linear API error: {first['message']}")
            raise LinearError("Linear API returned errors")

        data = result.get("data")
        if not isinstance(data, dict):
            raise LinearError("Linear API response missing data field")
        return data

    def resolve_viewer_id(self) -> str:
        """Return the user whose issues to list, matching the username if one is set."""
        if self.viewer_id:
            return self.viewer_id

        if self.username:
            data = self.query(_USERS_QUERY)
            target = self.username.lower()
            users = json_path(data, "users", "nodes")
            if isinstance(users, list):
                for user in users:
                    fields = user if isinstance(user, Mapping) else {}
                    if target in _json_str(fields, "name").lower() or target in _json_str(
                        fields, "displayName"
                    ).lower():
                        self.viewer_id = _json_str(fields, "id")
                        return self.viewer_id
            raise LinearError(
                f"no Linear user matching {json.dumps(self.username, ensure_ascii=False)}"
            )

        data = self.query(_VIEWER_QUERY)
        viewer = json_path(data, "viewer")
        if isinstance(viewer, Mapping):
            self.viewer_id = _json_str(viewer, "id")
        if not self.viewer_id:
            raise LinearError("could not determine Linear user ID")
        return self.viewer_id

    def fetch_my_issues(self) -> TaskResult:
        user_id = self.resolve_viewer_id()
        data = self.query(_ISSUES_QUERY % ("assignee", user_id))
        return TaskResult(items=parse_issue_nodes(data, "issues"))

    def fetch_projects(self) -> TaskResult:
        data = self.query(_PROJECTS_QUERY)
        groups = []
        nodes = json_path(data, "projects", "nodes")
        if isinstance(nodes, list):
            for node in nodes:
                fields = node if isinstance(node, Mapping) else {}
                issues = json_path(fields, "issues", "nodes")
                groups.append(
                    TaskGroup(
                        key=_json_str(fields, "id"),
                        name=_json_str(fields, "name"),
                        status=map_project_state(_json_str(fields, "state")),
                        count=len(issues) if isinstance(issues, list) else 0,
                    )
                )
        return TaskResult(groups=groups or None)

    def fetch_project_issues(self, project_id: str) -> TaskResult:
        data = self.query(_ISSUES_QUERY % ("project", project_id))
        return TaskResult(items=parse_issue_nodes(data, "issues"))


def detect_task_provider() -> TaskProvider:
    """Return the task provider configured by the environment."""
    return LinearProvider()