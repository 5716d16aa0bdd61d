"""
Metric domain model.

Defines the MetricRecord dataclass: one daily observation of a dashboard
metric (confirmed cases, PCR-tested persons, hospitalizations, ...).
"""

import typing
from dataclasses import dataclass
from datetime import date, datetime

from .schema import Field, FieldKind, require_count


@dataclass(frozen=True)
class MetricRecord:
    """
    Represents one observation of a metric for one calendar day.

    Attributes:
        date: Calendar day of the observation (no time of day).
        value: Non-negative count for that day.
    """

    date: date
    value: int

    SCHEMA: typing.ClassVar[typing.Tuple[Field, ...]] = (
        Field("date", "date", FieldKind.DATE),
        Field("value", "value", FieldKind.COUNT),
    )

    def __post_init__(self) -> None:
        if isinstance(self.date, datetime) or not isinstance(self.date, date):
            raise ValueError(f"date must be a datetime.date, got {self.date!r}")
        require_count("value", self.value)


# One ordered series per metric kind, e.g. "confirmed_cases" -> Dataset.
Dataset = typing.Tuple[MetricRecord, ...]
