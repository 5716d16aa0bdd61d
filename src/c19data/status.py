"""
Status domain model.

Defines the Attribute enumeration and the recursive Status dataclass used for
the dashboard's breakdown of current patient status (hospitalized, at home,
discharged, ...).
"""

import typing
from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from .last_update import require_stamp
from .schema import Field, FieldKind, require_count


class Attribute(Enum):
    """
    Attributes of a status node. Values are the published wire names.
    'coodinating' is misspelled upstream and must stay that way.
    """
    ACCOMMODATIONS = "accommodations"
    COORDINATING = "coodinating"
    DEAD = "dead"
    HOME = "home"
    HOSPITALIZATIONS = "hospitalizations"
    INSPECTIONS = "inspections"
    LEAVE = "leave"
    PATIENTS = "patients"
    SEVERELY_PATIENTS = "severely_patients"
    OTHER = "other"

    @classmethod
    def from_label(cls, label: str) -> "Attribute":
        """
        Convert a human-readable label ("Severely patients", "LEAVE") into the enum.
        Normalizes spacing and casing; the misspelled wire name is accepted too.
        """
        key = label.strip().lower().replace(" ", "_").replace("-", "_")
        if key == "coordinating":
            key = "coodinating"
        try:
            return cls(key)
        except ValueError:
            raise ValueError(f"Unknown status attribute label: {label!r}")


@dataclass(frozen=True)
class Status:
    """
    One node of the status breakdown.

    Attributes:
        attr: What the count measures.
        value: Non-negative count.
        children: Finer breakdown of this node, or None when it is a leaf.
        last_update: Refresh stamp, usually only present on the root node.
    """

    attr: Attribute
    value: int
    children: typing.Optional[typing.Tuple["Status", ...]] = None
    last_update: typing.Optional[datetime] = None

    SCHEMA: typing.ClassVar[typing.Tuple[Field, ...]]

    def __post_init__(self) -> None:
        if not isinstance(self.attr, Attribute):
            raise ValueError(f"attr must be an Attribute, got {self.attr!r}")
        require_count("value", self.value)
        if self.children is not None:
            object.__setattr__(self, "children", tuple(self.children))
            for child in self.children:
                if not isinstance(child, Status):
                    raise ValueError(f"children must hold Status items, got {type(child).__name__}")
        if self.last_update is not None:
            require_stamp("last_update", self.last_update)

    def walk(self, depth: int = 0) -> typing.Iterator[typing.Tuple[int, "Status"]]:
        """Yield (depth, node) for this node and all descendants, depth first; the root is at `depth`."""
        yield depth, self
        for child in self.children or ():
            yield from child.walk(depth + 1)


# declared after the class so children can refer to Status itself
Status.SCHEMA = (
    Field("attr", "attr", FieldKind.CHOICE, target=Attribute),
    Field("value", "value", FieldKind.COUNT),
    Field("children", "children", FieldKind.RECORDS, required=False, target=Status),
    Field("last_update", "last_update", FieldKind.DATETIME, required=False),
)
