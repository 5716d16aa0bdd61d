"""
Tabular view of metric series.

dataset_to_frame() lays a series out as a two-column DataFrame for display or
export; frame_to_dataset() goes the other way by building interchange rows
and handing them to the codec, so tables obey the same schema as JSON.
"""

import typing
from datetime import date, datetime

import numpy as np
import pandas as pd

from .codec import decode_dataset, encode_dataset
from .formats import format_date
from .metric import Dataset, MetricRecord

FRAME_COLUMNS = ["date", "value"]


def dataset_to_frame(records: typing.Iterable[MetricRecord]) -> pd.DataFrame:
    """One row per record, in record order, with 'date' as 'YYYY-MM-DD' text."""
    rows = encode_dataset(records)
    if not rows:
        return pd.DataFrame(columns=FRAME_COLUMNS)
    return pd.DataFrame(rows, columns=FRAME_COLUMNS)


def _cell_to_interchange(value: typing.Any) -> typing.Any:
    """
    Undo pandas/numpy typing on a single cell:
    - timestamps and dates -> 'YYYY-MM-DD'
    - numpy integers -> int; integral floats (from NaN-widened columns) -> int
    - other values pass through so the codec can report them
    """
    if isinstance(value, (pd.Timestamp, datetime)):
        return format_date(value.date())
    if isinstance(value, date):
        return format_date(value)
    if isinstance(value, np.integer):
        return int(value)
    if isinstance(value, (float, np.floating)) and float(value).is_integer():
        return int(value)
    if isinstance(value, np.bool_):
        return bool(value)
    return value


def _is_missing(value: typing.Any) -> bool:
    # None, NaN and NaT; list-like cells are left for the codec to reject
    return not pd.api.types.is_list_like(value) and bool(pd.isna(value))


def frame_to_dataset(df: pd.DataFrame) -> Dataset:
    """
    Decode a DataFrame with 'date' and 'value' columns (or 'date' as the index).
    Empty cells are treated as missing fields.

    Raises:
        DecodeError: with a '[row].field' path for the first bad row.
    """
    if "date" not in df.columns and df.index.name == "date":
        df = df.reset_index()

    rows = []
    for row in df.to_dict(orient="records"):
        rows.append({
            key: _cell_to_interchange(cell)
            for key, cell in row.items()
            if not _is_missing(cell)
        })
    return decode_dataset(rows, MetricRecord)
