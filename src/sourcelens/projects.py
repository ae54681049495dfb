"""Projects and the notification messages attached to them."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, FrozenSet, Iterable, List, Mapping, Optional

MESSAGES_MAIN_PAGE_TAG = "main"


@dataclass(frozen=True, slots=True)
class Message:
    text: str
    tags: FrozenSet[str] = frozenset({MESSAGES_MAIN_PAGE_TAG})
    css_class: str = "info"
    created: Optional[datetime] = None
    expiration: Optional[datetime] = None

    def is_expired(self, now: datetime) -> bool:
        return self.expiration is not None and self.expiration <= now


@dataclass(slots=True)
class Project:
    """A top level source tree, e.g. ``name="kernel", path="kernel"``."""

    name: str
    path: str
    tab_size: int = 0
    messages: List[Message] = field(default_factory=list)


class ProjectRegistry:
    """Map directory paths to the project that contains them."""

    def __init__(self, projects: Iterable[Project] = ()) -> None:
        self._projects = list(projects)

    def add(self, project: Project) -> None:
        self._projects.append(project)

    def project_for(self, path: str) -> Optional[Project]:
        path = path.strip("/")
        best: Optional[Project] = None
        for project in self._projects:
            root = project.path.strip("/")
            if path == root or path.startswith(root + "/"):
                if best is None or len(root) > len(best.path.strip("/")):
                    best = project
        return best


def messages_to_json(
    project: Project, tag: str = MESSAGES_MAIN_PAGE_TAG, *, now: Optional[datetime] = None
) -> List[Dict[str, Any]]:
    """Pending (unexpired) messages of ``project`` carrying ``tag``."""
    now = now or datetime.now(timezone.utc)
    payload: List[Dict[str, Any]] = []
    for message in project.messages:
        if tag not in message.tags or message.is_expired(now):
            continue
        payload.append(
            {
                "class": message.css_class,
                "text": message.text,
                "created": message.created.isoformat() if message.created else None,
                "expiration": message.expiration.isoformat() if message.expiration else None,
            }
        )
    return payload


def load_projects(rows: Iterable[Mapping[str, Any]]) -> ProjectRegistry:
    """Build a registry from decoded JSON project entries."""
    registry = ProjectRegistry()
    for row in rows:
        messages = [
            Message(
                text=entry["text"],
                tags=frozenset(entry.get("tags", [MESSAGES_MAIN_PAGE_TAG])),
                css_class=entry.get("class", "info"),
                created=_parse_moment(entry.get("created")),
                expiration=_parse_moment(entry.get("expiration")),
            )
            for entry in row.get("messages", [])
        ]
        registry.add(
            Project(
                name=row["name"],
                path=row.get("path", row["name"]),
                tab_size=int(row.get("tab_size", 0)),
                messages=messages,
            )
        )
    return registry


def _parse_moment(value: Optional[str]) -> Optional[datetime]:
    if value is None:
        return None
    moment = datetime.fromisoformat(value)
    return moment if moment.tzinfo else moment.replace(tzinfo=timezone.utc)
