"""Timeline element models.

A timeline is a list of sections; each section holds time periods and each
period holds one or more event descriptions.
"""

from __future__ import annotations

from pydantic import Field

from diagramkit.models.base import Element, NonEmptyStr


class TimelineEvent(Element):
    description: NonEmptyStr


class TimelinePeriod(Element):
    """A point or span on the timeline, e.g. "2004" or "Bronze Age"."""

    label: NonEmptyStr
    events: tuple[TimelineEvent, ...] = Field(min_length=1)


class TimelineSection(Element):
    title: NonEmptyStr
    periods: tuple[TimelinePeriod, ...] = ()

    def with_period(self, period: TimelinePeriod) -> TimelineSection:
        return self.model_copy(update={"periods": self.periods + (period,)})
