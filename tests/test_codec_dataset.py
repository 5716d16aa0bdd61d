"""
Sequence-level codec behaviour: order preservation, error paths inside
series and collections, and independence of concurrent calls.
"""

import pytest
from concurrent.futures import ThreadPoolExecutor
from datetime import date, timedelta
from c19data.codec import (
    decode,
    decode_collection,
    decode_dataset,
    encode,
    encode_collection,
    encode_dataset,
)
from c19data.errors import InvalidDate, NegativeValue, TypeMismatch
from c19data.metric import MetricRecord


def test_decode_dataset_keeps_order_and_gaps():
    """A gap at 04-02 is passed through: nothing is inserted or reordered."""
    records = decode_dataset(
        [
            {"date": "2020-04-03", "value": 2},
            {"date": "2020-04-01", "value": 1},
        ]
    )
    assert records == (
        MetricRecord(date(2020, 4, 3), 2),
        MetricRecord(date(2020, 4, 1), 1),
    )


def test_decode_dataset_keeps_duplicates():
    payload = [{"date": "2020-04-01", "value": 1}] * 2
    assert len(decode_dataset(payload)) == 2


def test_decode_dataset_error_path_names_index():
    with pytest.raises(NegativeValue) as excinfo:
        decode_dataset([{"date": "2020-04-01", "value": 1}, {"date": "2020-04-02", "value": -1}])
    assert excinfo.value.path == "[1].value"
    assert str(excinfo.value).startswith("[1].value:")


def test_decode_dataset_rejects_non_array():
    with pytest.raises(TypeMismatch) as excinfo:
        decode_dataset({"date": "2020-04-01", "value": 1})
    assert excinfo.value.expected == "array"


def test_decode_collection(collection_tree):
    datasets = decode_collection(collection_tree)
    assert list(datasets) == ["confirmed_cases", "pcr_tested_persons"]
    assert [r.date.day for r in datasets["pcr_tested_persons"]] == [1, 3]
    assert encode_collection(datasets) == collection_tree


def test_decode_collection_error_path_names_dataset(collection_tree):
    collection_tree["pcr_tested_persons"][1]["date"] = "2020-04-31"
    with pytest.raises(InvalidDate) as excinfo:
        decode_collection(collection_tree)
    assert excinfo.value.path == "pcr_tested_persons[1].date"


def test_encode_dataset_keeps_order():
    records = [MetricRecord(date(2020, 4, d), d) for d in (5, 2, 9)]
    assert [row["date"] for row in encode_dataset(records)] == ["2020-04-05", "2020-04-02", "2020-04-09"]


def test_concurrent_calls_do_not_interfere():
    """Each call's output depends only on its own input."""
    start = date(2020, 1, 1)
    records = [MetricRecord(start + timedelta(days=i), i) for i in range(500)]

    def round_trip(record):
        return decode(encode(record))

    with ThreadPoolExecutor(max_workers=16) as pool:
        results = list(pool.map(round_trip, records))
    assert results == records
