"""Typed decoding of response records.

Record models are dataclasses whose fields name their wire key in the
field metadata::

    @dataclass
    class Summary:
        mhs_av: float = field(default=0.0, metadata={"key": "MHS av"})

Values arrive as JSON scalars or as plain-text strings and are converted
to the field's declared type. A value that cannot be converted raises
:class:`~cgminer_api.errors.DecodeError`; nothing is silently defaulted.
"""

from __future__ import annotations

import dataclasses
import types
import typing
from collections.abc import Iterable, Mapping
from typing import Any, Generic, Protocol, TypeVar, Union

from ..errors import DecodeError

T = TypeVar("T")

TRUE_VALUES = frozenset({"y", "yes", "true", "1"})
FALSE_VALUES = frozenset({"n", "no", "false", "0"})

_MISSING = object()


class AbstractResponse(Protocol):
    """Anything a transport can hand decoded result records to."""

    def load(self, raw_records: Iterable[Mapping[str, Any]]) -> None:
        ...


class Response(Generic[T]):
    """Destination holding the decoded records of one result section.

    Usage::

        out = Response(Summary)
        client.call(summary(), out)
        print(out.first.mhs_av)
    """

    def __init__(self, record_type: type[T] = dict) -> None:
        self.record_type = record_type
        self.records: list[T] = []

    def load(self, raw_records: Iterable[Mapping[str, Any]]) -> None:
        # Decode everything before touching self.records.
        decoded = [decode_record(self.record_type, raw) for raw in raw_records]
        self.records = decoded

    @property
    def first(self) -> T | None:
        return self.records[0] if self.records else None

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self):
        return iter(self.records)

    def __repr__(self) -> str:
        return (
            f"Response({getattr(self.record_type, '__name__', self.record_type)}, "
            f"records={len(self.records)})"
        )


def wire_key(f: dataclasses.Field) -> str:
    """Wire key for a dataclass field, defaulting to the field name."""
    return f.metadata.get("key", f.name)


def decode_record(record_type: type[T], raw: Mapping[str, Any]) -> T:
    """Build a ``record_type`` instance from one raw result object.

    Raises:
        DecodeError: If a value does not fit its field or a field without a
            default has no value.
    """
    if not isinstance(raw, Mapping):
        raise DecodeError(getattr(record_type, "__name__", "?"), "", raw)
    if record_type is dict or not dataclasses.is_dataclass(record_type):
        return record_type(raw)

    hints = typing.get_type_hints(record_type)
    kwargs: dict[str, Any] = {}
    for f in dataclasses.fields(record_type):
        if not f.init:
            continue
        key = wire_key(f)
        value = raw.get(key, _MISSING)
        if value is _MISSING:
            if (
                f.default is dataclasses.MISSING
                and f.default_factory is dataclasses.MISSING
            ):
                raise DecodeError(f.name, key, None)
            continue
        kwargs[f.name] = convert_value(f.name, key, value, hints[f.name])
    return record_type(**kwargs)


def convert_value(name: str, key: str, value: Any, target: Any) -> Any:
    """Convert a wire value to ``target``, raising DecodeError on mismatch."""
    origin = typing.get_origin(target)
    if origin is Union or origin is types.UnionType:
        args = [a for a in typing.get_args(target) if a is not type(None)]
        if value is None or value == "":
            if len(args) < len(typing.get_args(target)):
                return None
        if len(args) == 1:
            return convert_value(name, key, value, args[0])
        raise DecodeError(name, key, value)

    if target is Any:
        return value

    try:
        if target is bool:
            return _to_bool(value)
        if target is int:
            return _to_int(value)
        if target is float:
            return _to_float(value)
        if target is str:
            if value is None or isinstance(value, (dict, list)):
                raise TypeError(f"expected scalar, got {type(value).__name__}")
            return str(value)
    except (TypeError, ValueError) as e:
        raise DecodeError(name, key, value, e) from e

    if not isinstance(target, type) or isinstance(value, target):
        return value
    raise DecodeError(name, key, value)


def _to_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in TRUE_VALUES:
            return True
        if lowered in FALSE_VALUES:
            return False
    raise ValueError(f"not a boolean: {value!r}")


def _to_int(value: Any) -> int:
    if isinstance(value, bool):
        raise TypeError("boolean is not an integer")
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if not value.is_integer():
            raise ValueError(f"not an integer: {value!r}")
        return int(value)
    if isinstance(value, str):
        return int(value.strip())
    raise TypeError(f"expected integer, got {type(value).__name__}")


def _to_float(value: Any) -> float:
    if isinstance(value, bool):
        raise TypeError("boolean is not a number")
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        return float(value.strip())
    raise TypeError(f"expected number, got {type(value).__name__}")
