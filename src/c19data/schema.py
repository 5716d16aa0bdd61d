"""
Declarative record schema.

Each record class lists its fields once, as a SCHEMA tuple of Field entries.
The codec reads that declaration in both directions, so the wire names live
in exactly one place.
"""

import typing
from dataclasses import dataclass
from enum import Enum


class FieldKind(Enum):
    """How a field is represented on the wire."""
    DATE = "date"          # 'YYYY-MM-DD' string
    DATETIME = "datetime"  # 'YYYY/MM/DD HH:MM' string
    TIMESTAMP = "timestamp"  # RFC 3339 string, UTC
    COUNT = "count"        # non-negative integer
    TEXT = "text"          # string
    CHOICE = "choice"      # string drawn from an Enum's values
    RECORD = "record"      # nested object
    RECORDS = "records"    # array of nested objects


@dataclass(frozen=True)
class Field:
    """
    One entry of a record schema.

    Attributes:
        attribute: Python attribute name on the record dataclass.
        wire_name: Key used in the interchange object. Renaming is a breaking change.
        kind: Wire representation.
        required: Missing required fields fail decoding; missing optional
            fields decode to None and None is omitted on encode.
        target: Enum class for CHOICE, record class for RECORD/RECORDS.
    """

    attribute: str
    wire_name: str
    kind: FieldKind
    required: bool = True
    target: typing.Optional[type] = None

    def __post_init__(self):
        needs_target = self.kind in (FieldKind.CHOICE, FieldKind.RECORD, FieldKind.RECORDS)
        if needs_target and self.target is None:
            raise ValueError(f"Field {self.wire_name!r} of kind {self.kind.value} needs a target type")


def schema_of(record_type: type) -> typing.Tuple[Field, ...]:
    """Return the SCHEMA declared on a record class."""
    try:
        return record_type.SCHEMA
    except AttributeError:
        raise TypeError(f"{record_type.__name__} does not declare a SCHEMA") from None


def require_count(attribute: str, value: typing.Any) -> None:
    """Shared __post_init__ check for count fields."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{attribute} must be an integer, got {type(value).__name__}")
    if value < 0:
        raise ValueError(f"{attribute} must be a non-negative integer, got {value!r}")
