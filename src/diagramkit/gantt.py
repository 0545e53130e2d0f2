"""Gantt diagram: tasks grouped into titled sections.

While a chart has no sections of its own it holds a single empty
"Default Section"; adding the first real section replaces it. Tasks are
always added to the last section.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping

from diagramkit.base import (
    DEFAULT_VERSION,
    Diagram,
    VersionToken,
    ensure_unique,
    payload_list,
    require_text,
)
from diagramkit.exceptions import DuplicateElementError
from diagramkit.models.base import build_element, build_elements
from diagramkit.models.config import DiagramConfig
from diagramkit.models.gantt import GanttSection, Task, TaskStatus

logger = logging.getLogger(__name__)

DEFAULT_SECTION_TITLE = "Default Section"


class GanttDiagram(Diagram):
    """A Gantt chart. Tasks are identified by id across all sections."""

    def __init__(
        self,
        title: str = "",
        sections: Iterable[GanttSection | Mapping[str, Any]] | None = None,
        version: VersionToken = DEFAULT_VERSION,
        *,
        config: DiagramConfig | None = None,
    ) -> None:
        super().__init__(version, config=config)
        section_list = build_elements(GanttSection, sections)
        if not section_list:
            section_list = [GanttSection(title=DEFAULT_SECTION_TITLE)]
        ensure_unique((s.title for s in section_list), "Section")
        ensure_unique((t.id for s in section_list for t in s.tasks), "Task")

        self._title: str = title if isinstance(title, str) else ""
        self._sections: list[GanttSection] = section_list
        self._update_checksum()

    @property
    def title(self) -> str:
        return self._title

    @property
    def sections(self) -> list[GanttSection]:
        return list(self._sections)

    @property
    def tasks(self) -> list[Task]:
        return [t for s in self._sections for t in s.tasks]

    def add_section(self, section_title: str) -> GanttSection:
        """Append a section; later tasks go into it.

        Raises:
            EmptyFieldError: If the title is blank.
            DuplicateElementError: If a section with that title exists.
        """
        title = require_text(section_title, "Section title")
        if self.find_section(title) is not None:
            raise DuplicateElementError("Section", title)

        if self._has_only_empty_default_section():
            self._sections.clear()

        section = GanttSection(title=title)
        self._sections.append(section)
        self._update_checksum()
        logger.debug("Added section %s", title)
        return section

    def add_task(
        self,
        id: str,
        label: str,
        start: str,
        duration: str,
        status: TaskStatus | str | None = None,
    ) -> Task:
        """Add a task to the last section.

        Raises:
            EmptyFieldError: If the id is blank.
            DuplicateElementError: If a task with that id exists.
        """
        require_text(id, "Task ID")
        if self.find_task(id) is not None:
            raise DuplicateElementError("Task", id)

        task = build_element(Task, {
            "id": id,
            "label": label,
            "start": start,
            "duration": duration,
            "status": status,
        })
        self._sections[-1] = self._sections[-1].with_task(task)
        self._update_checksum()
        logger.debug("Added task %s to section %s", id, self._sections[-1].title)
        return task

    def find_task(self, task_id: str) -> Task | None:
        return next((t for t in self.tasks if t.id == task_id), None)

    def find_section(self, section_title: str) -> GanttSection | None:
        return next((s for s in self._sections if s.title == section_title), None)

    def _has_only_empty_default_section(self) -> bool:
        return (
            len(self._sections) == 1
            and self._sections[0].title == DEFAULT_SECTION_TITLE
            and not self._sections[0].tasks
        )

    def content_payload(self) -> dict[str, Any]:
        return {
            "title": self._title,
            "sections": [s.to_dict() for s in self._sections],
        }

    def identifiable_elements(self) -> dict[str, list[Any]]:
        return {"tasks": self.tasks}

    @classmethod
    def _from_payload(
        cls,
        data: Mapping[str, Any],
        *,
        version: VersionToken,
        config: DiagramConfig | None,
    ) -> GanttDiagram:
        return cls(
            title=data.get("title") or "",
            sections=payload_list(data, "sections"),
            version=version,
            config=config,
        )
