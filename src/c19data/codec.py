"""
Schema-driven codec.

encode() and decode() walk the SCHEMA declared on a record class, so the
field names and wire formats used in both directions come from one place.

Policies:
- Unknown keys in an interchange object are ignored.
- Sequences keep their input order; nothing is sorted, deduplicated or filled in.
- Optional fields that are absent or null decode to None; None is omitted on encode.
- encode() does not re-validate: records check their invariants when constructed.
"""

import logging
import typing

from .errors import (
    DecodeError,
    InvalidChoice,
    InvalidDate,
    MissingField,
    NegativeValue,
    TypeMismatch,
    interchange_type,
)
from .formats import (
    format_date,
    format_datetime,
    format_timestamp,
    parse_date,
    parse_datetime,
    parse_timestamp,
)
from .metric import Dataset, MetricRecord
from .schema import Field, FieldKind, schema_of

logger = logging.getLogger(__name__)

R = typing.TypeVar("R")


# -------
# Encode
# -------


def encode(record: typing.Any) -> dict:
    """Render a record as an interchange object holding exactly its schema's fields."""
    tree: dict = {}
    for field in schema_of(type(record)):
        value = getattr(record, field.attribute)
        if value is None and not field.required:
            continue
        tree[field.wire_name] = _encode_value(field, value)
    return tree


def _encode_value(field: Field, value: typing.Any) -> typing.Any:
    kind = field.kind
    if kind is FieldKind.DATE:
        return format_date(value)
    if kind is FieldKind.DATETIME:
        return format_datetime(value)
    if kind is FieldKind.TIMESTAMP:
        return format_timestamp(value)
    if kind is FieldKind.CHOICE:
        return value.value
    if kind is FieldKind.RECORD:
        return encode(value)
    if kind is FieldKind.RECORDS:
        return encode_dataset(value)
    # COUNT and TEXT are already interchange scalars
    return value


def encode_dataset(records: typing.Iterable[typing.Any]) -> list:
    return [encode(record) for record in records]


def encode_collection(datasets: typing.Mapping[str, typing.Iterable[MetricRecord]]) -> dict:
    """Encode named metric series, e.g. {"confirmed_cases": [...], ...}."""
    return {name: encode_dataset(records) for name, records in datasets.items()}


# -------
# Decode
# -------


def decode(value: typing.Any, record_type: typing.Type[R] = MetricRecord) -> R:
    """
    Parse an interchange object into a record of `record_type`.

    Raises:
        TypeMismatch: `value` is not an object, or a field has the wrong interchange type.
        MissingField: a required field is absent (first one in schema order).
        InvalidDate: a date/timestamp string is malformed or not a real calendar value.
        NegativeValue: a count is below zero.
        InvalidChoice: an enumerated string is not one of the allowed values.
    """
    if not isinstance(value, dict):
        raise TypeMismatch("", "object", interchange_type(value))

    kwargs: dict = {}
    for field in schema_of(record_type):
        raw = value.get(field.wire_name)
        if raw is None and not field.required:
            kwargs[field.attribute] = None
            continue
        if field.wire_name not in value:
            raise MissingField(field.wire_name)
        kwargs[field.attribute] = _decode_value(field, raw)
    return record_type(**kwargs)


def _decode_value(field: Field, raw: typing.Any) -> typing.Any:
    name = field.wire_name
    kind = field.kind

    if kind is FieldKind.COUNT:
        if isinstance(raw, bool) or not isinstance(raw, int):
            raise TypeMismatch(name, "integer", interchange_type(raw))
        if raw < 0:
            raise NegativeValue(name, raw)
        return raw

    if kind in (FieldKind.DATE, FieldKind.DATETIME, FieldKind.TIMESTAMP, FieldKind.TEXT, FieldKind.CHOICE):
        if not isinstance(raw, str):
            raise TypeMismatch(name, "string", interchange_type(raw))

    if kind is FieldKind.DATE:
        try:
            return parse_date(raw)
        except ValueError:
            raise InvalidDate(name, raw) from None

    if kind is FieldKind.DATETIME:
        try:
            return parse_datetime(raw)
        except ValueError:
            raise InvalidDate(name, raw, "YYYY/MM/DD HH:MM") from None

    if kind is FieldKind.TIMESTAMP:
        try:
            return parse_timestamp(raw)
        except ValueError:
            raise InvalidDate(name, raw, "RFC 3339 timestamp") from None

    if kind is FieldKind.TEXT:
        return raw

    if kind is FieldKind.CHOICE:
        try:
            return field.target(raw)
        except ValueError:
            allowed = [member.value for member in field.target]
            raise InvalidChoice(name, raw, allowed) from None

    if kind is FieldKind.RECORD:
        try:
            return decode(raw, field.target)
        except DecodeError as error:
            error.at(name)
            raise

    if kind is FieldKind.RECORDS:
        try:
            return decode_dataset(raw, field.target)
        except DecodeError as error:
            error.at(name)
            raise

    raise TypeError(f"Unhandled field kind: {kind!r}")


def decode_dataset(value: typing.Any, record_type: typing.Type[R] = MetricRecord) -> typing.Tuple[R, ...]:
    """
    Decode an interchange array into a tuple of records, in input order.
    Date gaps are passed through untouched.
    """
    if not isinstance(value, list):
        raise TypeMismatch("", "array", interchange_type(value))
    records = []
    for index, item in enumerate(value):
        try:
            records.append(decode(item, record_type))
        except DecodeError as error:
            error.at(f"[{index}]")
            raise
    return tuple(records)


def decode_collection(value: typing.Any) -> typing.Dict[str, Dataset]:
    """Decode {"<dataset name>": [<metric record>, ...], ...}, keeping key order."""
    if not isinstance(value, dict):
        raise TypeMismatch("", "object", interchange_type(value))
    datasets: typing.Dict[str, Dataset] = {}
    for name, series in value.items():
        try:
            datasets[name] = decode_dataset(series, MetricRecord)
        except DecodeError as error:
            error.at(name)
            raise
    logger.debug("Decoded %d datasets: %s", len(datasets), list(datasets))
    return datasets
