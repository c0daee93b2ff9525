"""Canonical stringification of structured values for hashing.

Objects are first lowered into a closed set of variants (null, scalar,
sequence, mapping) and then rendered by a visitor, so two values that are
equal up to key order and sequence order produce the same string.
"""

from __future__ import annotations

import dataclasses
import enum
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any, Protocol, Union

from pydantic import BaseModel

from rulematch.errors import SerializationError

__all__ = [
    "CanonicalStringifier",
    "CanonicalValue",
    "MappingValue",
    "NullValue",
    "ScalarValue",
    "SequenceValue",
    "lower",
    "stringify",
]

_SEPARATOR = "#"


class ValueVisitor(Protocol):
    def visit_null(self, value: NullValue) -> str: ...

    def visit_scalar(self, value: ScalarValue) -> str: ...

    def visit_sequence(self, value: SequenceValue) -> str: ...

    def visit_mapping(self, value: MappingValue) -> str: ...


@dataclass(frozen=True)
class NullValue:
    def accept(self, visitor: ValueVisitor) -> str:
        return visitor.visit_null(self)


@dataclass(frozen=True)
class ScalarValue:
    value: str | int | float | bool

    def accept(self, visitor: ValueVisitor) -> str:
        return visitor.visit_scalar(self)


@dataclass(frozen=True)
class SequenceValue:
    items: tuple[CanonicalValue, ...]

    def accept(self, visitor: ValueVisitor) -> str:
        return visitor.visit_sequence(self)


@dataclass(frozen=True)
class MappingValue:
    entries: tuple[tuple[str, CanonicalValue], ...]

    def accept(self, visitor: ValueVisitor) -> str:
        return visitor.visit_mapping(self)


CanonicalValue = Union[NullValue, ScalarValue, SequenceValue, MappingValue]


def lower(obj: Any) -> CanonicalValue:
    """Convert a Python object into its canonical variant.

    Pydantic models are dumped in JSON mode and dataclass instances through
    ``dataclasses.asdict``, so only their field values take part.

    Raises:
        SerializationError: If the object has no canonical form.
    """
    if obj is None:
        return NullValue()
    if isinstance(obj, enum.Enum):
        return lower(obj.value)
    if isinstance(obj, (str, bool, int, float)):
        return ScalarValue(obj)
    if isinstance(obj, BaseModel):
        return lower(obj.model_dump(mode="json"))
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return lower(dataclasses.asdict(obj))
    if isinstance(obj, Mapping):
        return MappingValue(tuple((str(k), lower(v)) for k, v in obj.items()))
    if isinstance(obj, Iterable) and not isinstance(obj, (bytes, bytearray)):
        return SequenceValue(tuple(lower(item) for item in obj))
    raise SerializationError(type_name=type(obj).__name__)


class CanonicalStringifier:
    """Render canonical values as order-insensitive strings.

    Sequence elements are rendered, sorted and concatenated. Mapping entries
    are emitted in key order; excluded keys and null values are dropped at
    every depth.
    """

    def __init__(self, exclude: Iterable[str] = ()) -> None:
        self._exclude = frozenset(exclude)

    def render(self, value: CanonicalValue) -> str:
        return value.accept(self)

    def visit_null(self, value: NullValue) -> str:
        return "null"

    def visit_scalar(self, value: ScalarValue) -> str:
        raw = value.value
        if isinstance(raw, bool):
            return "true" if raw else "false"
        if isinstance(raw, float) and raw.is_integer() and abs(raw) < 1e21:
            return str(int(raw))
        return str(raw)

    def visit_sequence(self, value: SequenceValue) -> str:
        parts = sorted(f"{_SEPARATOR}{item.accept(self)}" for item in value.items)
        return "".join(parts)

    def visit_mapping(self, value: MappingValue) -> str:
        parts: list[str] = []
        for key, item in sorted(value.entries, key=lambda entry: entry[0]):
            if key in self._exclude or isinstance(item, NullValue):
                continue
            parts.append(f"{_SEPARATOR}{key}{_SEPARATOR}{item.accept(self)}")
        return "".join(parts)


def stringify(obj: Any, exclude: Iterable[str] = ()) -> str:
    """Return the canonical string form of ``obj``.

    Args:
        obj: A mapping, sequence, scalar, pydantic model or dataclass.
        exclude: Mapping keys to leave out at any depth.

    Raises:
        SerializationError: If ``obj`` contains an unsupported value.
    """
    return CanonicalStringifier(exclude).render(lower(obj))
