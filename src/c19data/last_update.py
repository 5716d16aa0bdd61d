"""
Last-update domain model.

Defines the LastUpdate dataclass, the stamp the dashboard shows for when its
data was last refreshed.
"""

import typing
from dataclasses import dataclass
from datetime import datetime

from .schema import Field, FieldKind


def require_stamp(attribute: str, value: typing.Any) -> None:
    if not isinstance(value, datetime):
        raise ValueError(f"{attribute} must be a datetime, got {value!r}")
    # the wire form has minute precision and no zone
    if value.tzinfo is not None:
        raise ValueError(f"{attribute} must be a naive local datetime, got {value!r}")
    if value.second or value.microsecond:
        raise ValueError(f"{attribute} must have minute precision, got {value!r}")


@dataclass(frozen=True)
class LastUpdate:
    """
    Attributes:
        last_update: Naive local datetime, minute precision ('2020/03/25 21:40').
    """

    last_update: datetime

    SCHEMA: typing.ClassVar[typing.Tuple[Field, ...]] = (
        Field("last_update", "last_update", FieldKind.DATETIME),
    )

    def __post_init__(self) -> None:
        require_stamp("last_update", self.last_update)
