"""Timeline diagram: titled sections of labelled periods."""

from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping, Optional, Sequence

from diagramkit.base import (
    DEFAULT_VERSION,
    Diagram,
    VersionToken,
    ensure_unique,
    payload_list,
    require_text,
)
from diagramkit.exceptions import DuplicateElementError, EmptyFieldError
from diagramkit.models.base import build_elements
from diagramkit.models.config import DiagramConfig
from diagramkit.models.timeline import TimelineEvent, TimelinePeriod, TimelineSection

logger = logging.getLogger(__name__)

DEFAULT_SECTION_TITLE = "Default Section"


class TimelineDiagram(Diagram):
    """A timeline. Periods are appended to the last section.

    The title is optional and left out of the payload entirely when unset.
    """

    def __init__(
        self,
        title: Optional[str] = None,
        sections: Iterable[TimelineSection | Mapping[str, Any]] | None = None,
        version: VersionToken = DEFAULT_VERSION,
        *,
        config: DiagramConfig | None = None,
    ) -> None:
        super().__init__(version, config=config)
        section_list = build_elements(TimelineSection, sections)
        if not section_list:
            section_list = [TimelineSection(title=DEFAULT_SECTION_TITLE)]
        ensure_unique((s.title for s in section_list), "Section")

        self._title: Optional[str] = title.strip() if isinstance(title, str) else None
        self._sections: list[TimelineSection] = section_list
        self._update_checksum()

    @property
    def title(self) -> Optional[str]:
        return self._title

    @property
    def sections(self) -> list[TimelineSection]:
        return list(self._sections)

    @property
    def periods(self) -> list[TimelinePeriod]:
        return [p for s in self._sections for p in s.periods]

    def set_title(self, new_title: str) -> str:
        self._title = new_title.strip()
        self._update_checksum()
        return self._title

    def add_section(self, section_title: str) -> TimelineSection:
        """Append a section, replacing the untouched default section if present.

        Raises:
            EmptyFieldError: If the title is blank.
            DuplicateElementError: If a section with that title exists.
        """
        title = require_text(section_title, "Section title")
        if self.find_section(title) is not None:
            raise DuplicateElementError("Section", title)

        if (
            len(self._sections) == 1
            and self._sections[0].title == DEFAULT_SECTION_TITLE
            and not self._sections[0].periods
        ):
            self._sections.clear()

        section = TimelineSection(title=title)
        self._sections.append(section)
        self._update_checksum()
        logger.debug("Added timeline section %s", title)
        return section

    def add_period(self, period_label: str, events: str | Sequence[str]) -> TimelinePeriod:
        """Add a period with one or more event descriptions to the last section.

        Blank descriptions are dropped after stripping.

        Raises:
            EmptyFieldError: If the label is blank or no event text remains.
        """
        label = require_text(period_label, "Period label")
        if isinstance(events, str):
            events = [events]
        descriptions = [d.strip() for d in events if d and d.strip()]
        if not descriptions:
            raise EmptyFieldError("Events cannot be empty")

        period = TimelinePeriod(
            label=label,
            events=tuple(TimelineEvent(description=d) for d in descriptions),
        )
        self._sections[-1] = self._sections[-1].with_period(period)
        self._update_checksum()
        logger.debug("Added period %s to section %s", label, self._sections[-1].title)
        return period

    def find_section(self, section_title: str) -> TimelineSection | None:
        return next((s for s in self._sections if s.title == section_title), None)

    def content_payload(self) -> dict[str, Any]:
        content: dict[str, Any] = {"sections": [s.to_dict() for s in self._sections]}
        if self._title is not None:
            content["title"] = self._title
        return content

    def identifiable_elements(self) -> dict[str, list[Any]]:
        return {"sections": list(self._sections), "periods": self.periods}

    @classmethod
    def _from_payload(
        cls,
        data: Mapping[str, Any],
        *,
        version: VersionToken,
        config: DiagramConfig | None,
    ) -> TimelineDiagram:
        return cls(
            title=data.get("title"),
            sections=payload_list(data, "sections"),
            version=version,
            config=config,
        )
