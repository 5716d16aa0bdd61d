"""
News domain model.

Defines NewsItem, a dated announcement linked from the dashboard, and the
NewsItems envelope it is published in.
"""

import typing
from dataclasses import dataclass
from datetime import date, datetime

from .schema import Field, FieldKind


@dataclass(frozen=True)
class NewsItem:
    """
    Attributes:
        date: Publication day.
        text: Headline shown on the dashboard.
        url: Link to the full announcement.
    """

    date: date
    text: str
    url: str

    SCHEMA: typing.ClassVar[typing.Tuple[Field, ...]] = (
        Field("date", "date", FieldKind.DATE),
        Field("text", "text", FieldKind.TEXT),
        Field("url", "url", FieldKind.TEXT),
    )

    def __post_init__(self) -> None:
        if isinstance(self.date, datetime) or not isinstance(self.date, date):
            raise ValueError(f"date must be a datetime.date, got {self.date!r}")
        for attr in ("text", "url"):
            if not isinstance(getattr(self, attr), str):
                raise ValueError(f"{attr} must be a string")


@dataclass(frozen=True)
class NewsItems:
    news_items: typing.Tuple[NewsItem, ...]

    SCHEMA: typing.ClassVar[typing.Tuple[Field, ...]] = (
        Field("news_items", "news_items", FieldKind.RECORDS, target=NewsItem),
    )

    def __post_init__(self) -> None:
        object.__setattr__(self, "news_items", tuple(self.news_items))
        for item in self.news_items:
            if not isinstance(item, NewsItem):
                raise ValueError(f"news_items must hold NewsItem items, got {type(item).__name__}")
