"""
JSON payload helpers.

Bridges byte/text payloads and the interchange trees the codec works on.
Duplicate keys are rejected rather than silently keeping the last one.
"""

import dataclasses
import json
import typing

from .codec import decode, encode, encode_collection, encode_dataset
from .errors import DecodeError, DuplicateField, PayloadError


class _Pairs(list):
    """Key/value pairs of one JSON object, kept as parsed so duplicates can be located."""


def _build(node: typing.Any) -> typing.Any:
    """Turn parsed pairs into dicts, rejecting repeated keys with the path to them."""
    if isinstance(node, _Pairs):
        obj: dict = {}
        for key, value in node:
            if key in obj:
                raise DuplicateField(key)
            try:
                obj[key] = _build(value)
            except DecodeError as error:
                error.at(key)
                raise
        return obj
    if isinstance(node, list):
        items = []
        for index, item in enumerate(node):
            try:
                items.append(_build(item))
            except DecodeError as error:
                error.at(f"[{index}]")
                raise
        return items
    return node


def loads(payload: typing.Union[bytes, str], record_type: typing.Optional[type] = None) -> typing.Any:
    """
    Parse a JSON payload into an interchange tree, or into a record when
    `record_type` is given.

    Raises:
        PayloadError: the payload is not valid JSON (or not valid UTF-8).
        DuplicateField: an object repeats a key.
        DecodeError: any decode failure when `record_type` is given.
    """
    try:
        parsed = json.loads(payload, object_pairs_hook=_Pairs)
    except json.JSONDecodeError as e:
        raise PayloadError(f"{e.msg} (line {e.lineno}, column {e.colno})") from e
    except UnicodeDecodeError as e:
        raise PayloadError(str(e)) from e
    tree = _build(parsed)

    if record_type is None:
        return tree
    return decode(tree, record_type)


def _is_record(value: typing.Any) -> bool:
    return dataclasses.is_dataclass(value) and hasattr(type(value), "SCHEMA")


def to_tree(value: typing.Any) -> typing.Any:
    """
    Encode a record, a sequence of records, or a mapping of name -> records.
    Anything else is assumed to be an interchange tree already.
    """
    if _is_record(value):
        return encode(value)
    if isinstance(value, (list, tuple)) and value and all(_is_record(v) for v in value):
        return encode_dataset(value)
    if isinstance(value, dict) and value and all(
        isinstance(series, (list, tuple)) and all(_is_record(v) for v in series)
        for series in value.values()
    ):
        return encode_collection(value)
    return value


def dumps(value: typing.Any, indent: typing.Optional[int] = None) -> str:
    """Serialize records (or a ready-made tree) to JSON text, keeping non-ASCII text as-is."""
    return json.dumps(to_tree(value), ensure_ascii=False, indent=indent)
