"""
Decode errors.

Every failure raised while turning an interchange value into a record is a
DecodeError. Each one names the offending field and, where it makes sense,
the raw value, so callers can print an actionable message without knowing
the schema.
"""

import typing


def interchange_type(value: typing.Any) -> str:
    """Name the interchange (JSON) type of a Python value."""
    if value is None:
        return "null"
    # bool must be tested before int
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, int):
        return "integer"
    if isinstance(value, float):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, (list, tuple)):
        return "array"
    if isinstance(value, dict):
        return "object"
    return type(value).__name__


class DecodeError(ValueError):
    """
    Base class for decode failures.

    Attributes:
        name: Wire name of the offending field ('' for the payload itself).
        path: Location of the field inside the payload, e.g.
            'confirmed_cases[1].value'. Starts out equal to `name` and is
            extended as the error travels out of nested decoders.
    """

    def __init__(self, name: str):
        self.name = name
        self.path = name
        super().__init__(name)

    def at(self, prefix: str) -> "DecodeError":
        """Prepend `prefix` to the error path and return self."""
        if not self.path:
            self.path = prefix
        elif self.path.startswith("["):
            self.path = f"{prefix}{self.path}"
        else:
            self.path = f"{prefix}.{self.path}"
        return self

    def describe(self) -> str:
        return "invalid value"

    def __str__(self) -> str:
        where = self.path or "<payload>"
        return f"{where}: {self.describe()}"


class MissingField(DecodeError):
    def describe(self) -> str:
        return "required field is missing"


class TypeMismatch(DecodeError):
    def __init__(self, name: str, expected: str, actual: str):
        super().__init__(name)
        self.expected = expected
        self.actual = actual

    def describe(self) -> str:
        return f"expected {self.expected}, got {self.actual}"


class InvalidDate(DecodeError):
    def __init__(self, name: str, raw: str, expected_format: str = "YYYY-MM-DD"):
        super().__init__(name)
        self.raw = raw
        self.expected_format = expected_format

    def describe(self) -> str:
        return f"{self.raw!r} is not a valid {self.expected_format} value"


class NegativeValue(DecodeError):
    def __init__(self, name: str, value: int):
        super().__init__(name)
        self.value = value

    def describe(self) -> str:
        return f"count must be non-negative, got {self.value}"


class InvalidChoice(DecodeError):
    def __init__(self, name: str, raw: str, allowed: typing.Sequence[str]):
        super().__init__(name)
        self.raw = raw
        self.allowed = tuple(allowed)

    def describe(self) -> str:
        return f"{self.raw!r} is not one of {', '.join(self.allowed)}"


class DuplicateField(DecodeError):
    def describe(self) -> str:
        return "field appears more than once"


class PayloadError(DecodeError):
    """The byte payload is not parseable JSON."""

    def __init__(self, message: str):
        super().__init__("")
        self.message = message

    def describe(self) -> str:
        return f"malformed payload: {self.message}"
