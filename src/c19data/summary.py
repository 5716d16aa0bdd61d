"""
Summary domain model.

A Summary is one chart series together with its last-update stamp, the
shape the dashboard's per-metric charts are fed with. Its entries are
stamped with a UTC instant rather than a calendar day.
"""

import typing
from dataclasses import dataclass
from datetime import datetime, timezone

from .last_update import require_stamp
from .schema import Field, FieldKind, require_count


@dataclass(frozen=True)
class SummaryContent:
    """
    Attributes:
        date: Instant the entry covers, an aware datetime normalized to UTC.
        sum: Running total at that instant, non-negative.
    """

    date: datetime
    sum: int

    SCHEMA: typing.ClassVar[typing.Tuple[Field, ...]] = (
        Field("date", "date", FieldKind.TIMESTAMP),
        Field("sum", "sum", FieldKind.COUNT),
    )

    def __post_init__(self) -> None:
        if not isinstance(self.date, datetime):
            raise ValueError(f"date must be a datetime, got {self.date!r}")
        if self.date.tzinfo is None or self.date.utcoffset() is None:
            raise ValueError(f"date must be timezone-aware, got {self.date!r}")
        object.__setattr__(self, "date", self.date.astimezone(timezone.utc))
        require_count("sum", self.sum)


@dataclass(frozen=True)
class Summary:
    """
    Attributes:
        data: Chart entries, in publication order.
        last_update: When the series was last refreshed.
    """

    data: typing.Tuple[SummaryContent, ...]
    last_update: datetime

    SCHEMA: typing.ClassVar[typing.Tuple[Field, ...]] = (
        Field("data", "data", FieldKind.RECORDS, target=SummaryContent),
        Field("last_update", "last_update", FieldKind.DATETIME),
    )

    def __post_init__(self) -> None:
        # accept any sequence but store a tuple so the record stays immutable
        object.__setattr__(self, "data", tuple(self.data))
        for entry in self.data:
            if not isinstance(entry, SummaryContent):
                raise ValueError(f"data must hold SummaryContent items, got {type(entry).__name__}")
        require_stamp("last_update", self.last_update)
