"""
Round trips and shape errors for NewsItem(s), Summary and LastUpdate,
using the dashboard's launch time (2020/03/25 21:40) as the sample stamp.
"""

import pytest
from datetime import date, datetime, timedelta, timezone
from c19data.codec import decode, encode
from c19data.errors import InvalidDate, MissingField, NegativeValue, TypeMismatch
from c19data.last_update import LastUpdate
from c19data.news import NewsItem, NewsItems
from c19data.summary import Summary, SummaryContent

LAUNCH = datetime(2020, 3, 25, 21, 40)


def test_last_update_round_trip():
    assert encode(LastUpdate(LAUNCH)) == {"last_update": "2020/03/25 21:40"}
    assert decode({"last_update": "2020/03/25 21:40"}, LastUpdate) == LastUpdate(LAUNCH)


def test_last_update_round_trip_pads_early_years():
    early = LastUpdate(datetime(50, 1, 1))
    assert encode(early) == {"last_update": "0050/01/01 00:00"}
    assert decode(encode(early), LastUpdate) == early


def test_last_update_rejects_iso_timestamp():
    with pytest.raises(InvalidDate) as excinfo:
        decode({"last_update": "2020-03-25T21:40:00"}, LastUpdate)
    assert excinfo.value.expected_format == "YYYY/MM/DD HH:MM"


@pytest.mark.parametrize("bad_stamp", [datetime(2020, 3, 25, 21, 40, 5), date(2020, 3, 25), "2020/03/25 21:40"])
def test_last_update_rejects_values_the_wire_cannot_carry(bad_stamp):
    with pytest.raises(ValueError):
        LastUpdate(bad_stamp)


def test_summary_round_trip():
    summary = Summary(
        data=[
            SummaryContent(datetime(2020, 3, 24, 9, 40, tzinfo=timezone.utc), 10),
            SummaryContent(datetime(2020, 3, 25, 9, 40, tzinfo=timezone.utc), 12),
        ],
        last_update=LAUNCH,
    )
    tree = encode(summary)
    assert tree == {
        "data": [
            {"date": "2020-03-24T09:40:00Z", "sum": 10},
            {"date": "2020-03-25T09:40:00Z", "sum": 12},
        ],
        "last_update": "2020/03/25 21:40",
    }
    assert decode(tree, Summary) == summary


def test_summary_decodes_dashboard_payload():
    tree = {"data": [{"date": "2020-03-25T09:40:00.000Z", "sum": 10}], "last_update": "2020/03/25 21:25"}
    summary = decode(tree, Summary)
    assert summary.data == (SummaryContent(datetime(2020, 3, 25, 9, 40, tzinfo=timezone.utc), 10),)
    assert summary.last_update == datetime(2020, 3, 25, 21, 25)


def test_summary_content_normalizes_offset_to_utc():
    jst = timezone(timedelta(hours=9))
    entry = SummaryContent(datetime(2020, 3, 25, 18, 40, tzinfo=jst), 3)
    assert entry.date == datetime(2020, 3, 25, 9, 40, tzinfo=timezone.utc)
    assert entry.date.tzinfo is timezone.utc
    assert decode({"date": "2020-03-25T18:40:00+09:00", "sum": 3}, SummaryContent) == entry


@pytest.mark.parametrize("bad_stamp", [datetime(2020, 3, 25, 9, 40), date(2020, 3, 25), "2020-03-25T09:40:00Z"])
def test_summary_content_requires_aware_datetime(bad_stamp):
    with pytest.raises(ValueError):
        SummaryContent(bad_stamp, 1)


def test_summary_content_rejects_zoneless_timestamp():
    with pytest.raises(InvalidDate) as excinfo:
        decode({"data": [{"date": "2020-03-25T09:40:00", "sum": 1}], "last_update": "2020/03/25 21:25"}, Summary)
    assert excinfo.value.path == "data[0].date"
    assert excinfo.value.expected_format == "RFC 3339 timestamp"


def test_summary_content_sum_is_a_count():
    with pytest.raises(NegativeValue):
        decode({"date": "2020-03-25T09:40:00Z", "sum": -1}, SummaryContent)
    with pytest.raises(TypeMismatch):
        decode({"date": "2020-03-25T09:40:00Z", "sum": 1.5}, SummaryContent)


def test_summary_missing_last_update():
    with pytest.raises(MissingField) as excinfo:
        decode({"data": []}, Summary)
    assert excinfo.value.name == "last_update"


def test_summary_data_must_be_array():
    with pytest.raises(TypeMismatch) as excinfo:
        decode({"data": {"date": "2020-03-24T09:40:00Z", "sum": 1}, "last_update": "2020/03/25 21:40"}, Summary)
    assert excinfo.value.path == "data"
    assert excinfo.value.expected == "array"


def test_news_items_round_trip():
    news = NewsItems(
        news_items=[
            NewsItem(date(2020, 3, 25), "対策サイトを公開しました", "https://example.org/news/1"),
            NewsItem(date(2020, 3, 26), "PCR検査の件数を更新しました", "https://example.org/news/2"),
        ]
    )
    tree = encode(news)
    assert tree["news_items"][0] == {
        "date": "2020-03-25",
        "text": "対策サイトを公開しました",
        "url": "https://example.org/news/1",
    }
    assert decode(tree, NewsItems) == news


def test_news_item_text_must_be_string():
    with pytest.raises(TypeMismatch) as excinfo:
        decode({"news_items": [{"date": "2020-03-25", "text": 1, "url": "u"}]}, NewsItems)
    assert excinfo.value.path == "news_items[0].text"
