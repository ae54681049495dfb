"""Tests for projects and their messages."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from sourcelens.projects import (
    Message,
    Project,
    ProjectRegistry,
    load_projects,
    messages_to_json,
)

NOW = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


class TestProjectRegistry:
    """Test directory to project lookup."""

    def test_project_for_subdirectory(self) -> None:
        registry = ProjectRegistry([Project("kernel", "kernel"), Project("libc", "/libc")])

        assert registry.project_for("kernel").name == "kernel"
        assert registry.project_for("kernel/fs/ext4").name == "kernel"
        assert registry.project_for("/libc/string").name == "libc"

    def test_no_partial_segment_match(self) -> None:
        registry = ProjectRegistry([Project("kernel", "kernel")])

        assert registry.project_for("kernel2/fs") is None
        assert registry.project_for("") is None

    def test_longest_root_wins(self) -> None:
        registry = ProjectRegistry()
        registry.add(Project("all", "src"))
        registry.add(Project("tools", "src/tools"))

        assert registry.project_for("src/tools/bin").name == "tools"
        assert registry.project_for("src/lib").name == "all"


class TestMessagesToJson:
    """Test pending message selection."""

    def test_pending_messages(self) -> None:
        project = Project(
            "kernel",
            "kernel",
            messages=[
                Message("maintenance tonight", css_class="warning"),
                Message("old news", expiration=NOW - timedelta(days=1)),
                Message("other page", tags=frozenset({"project"})),
            ],
        )

        payload = messages_to_json(project, now=NOW)

        assert payload == [
            {"class": "warning", "text": "maintenance tonight", "created": None, "expiration": None}
        ]

    def test_no_messages(self) -> None:
        assert messages_to_json(Project("kernel", "kernel"), now=NOW) == []


class TestLoadProjects:
    def test_load_projects(self) -> None:
        registry = load_projects(
            [
                {
                    "name": "kernel",
                    "tab_size": 4,
                    "messages": [{"text": "frozen", "expiration": "2030-01-01T00:00:00"}],
                },
                {"name": "tools", "path": "src/tools"},
            ]
        )

        kernel = registry.project_for("kernel/fs")
        assert kernel.tab_size == 4
        assert kernel.messages[0].text == "frozen"
        assert kernel.messages[0].expiration == datetime(2030, 1, 1, tzinfo=timezone.utc)
        assert registry.project_for("src/tools").name == "tools"
