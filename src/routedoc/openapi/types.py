"""Payload type descriptors.

Maps Python annotations onto a closed set of kinds so the eligibility
rule for reusable schemas is a pure function of the descriptor:

    describe(User)          -> STRUCT
    describe(User | None)   -> POINTER -> STRUCT
    describe(Any)           -> INTERFACE
    describe(None)          -> INVALID

Only ``X | None`` counts as an indirection; ``is_eligible`` unwraps at
most one of them.
"""

from __future__ import annotations

import dataclasses
import datetime
import decimal
import enum
import inspect
import types
import typing
import uuid
from collections.abc import Mapping, Sequence, Set
from dataclasses import dataclass
from typing import Annotated, Any, TypeVar, Union, get_args, get_origin


class TypeKind(enum.Enum):
    STRUCT = "struct"
    POINTER = "pointer"
    INTERFACE = "interface"
    INVALID = "invalid"
    SCALAR = "scalar"
    SLICE = "slice"
    MAP = "map"


# Leaf types that serialize as a single JSON value
SCALAR_TYPES: tuple[type, ...] = (
    str,
    int,
    float,
    bool,
    bytes,
    datetime.datetime,
    datetime.date,
    datetime.time,
    uuid.UUID,
    decimal.Decimal,
)

_SEQUENCE_ORIGINS = (list, tuple, set, frozenset, Sequence, Set)
_MAPPING_ORIGINS = (dict, Mapping)


@dataclass(frozen=True, slots=True)
class TypeDescriptor:
    """Kind of a payload annotation plus what it wraps.

    ``annotation`` is the original annotation; ``elem`` is set for
    POINTER descriptors only.
    """

    kind: TypeKind
    annotation: Any = None
    elem: TypeDescriptor | None = None

    def unwrap(self) -> TypeDescriptor:
        """Strip one POINTER indirection, if any."""
        if self.kind is TypeKind.POINTER and self.elem is not None:
            return self.elem
        return self


def describe(annotation: Any) -> TypeDescriptor:
    """Classify a payload annotation."""
    if isinstance(annotation, TypeDescriptor):
        return annotation

    if annotation is None or annotation is type(None):
        return TypeDescriptor(TypeKind.INVALID, annotation)

    if annotation is Any or annotation is object or isinstance(annotation, TypeVar):
        return TypeDescriptor(TypeKind.INTERFACE, annotation)

    origin = get_origin(annotation)

    if origin is Annotated:
        return describe(get_args(annotation)[0])

    if origin is Union or origin is types.UnionType:
        args = get_args(annotation)
        non_none = [a for a in args if a is not type(None)]
        if len(non_none) == 1 and len(args) == 2:
            return TypeDescriptor(TypeKind.POINTER, annotation, describe(non_none[0]))
        # No single shape for a multi-member union
        return TypeDescriptor(TypeKind.INTERFACE, annotation)

    if origin is not None:
        if origin in _SEQUENCE_ORIGINS:
            return TypeDescriptor(TypeKind.SLICE, annotation)
        if origin in _MAPPING_ORIGINS:
            return TypeDescriptor(TypeKind.MAP, annotation)
        # Parametrized user generics (e.g. Page[User])
        annotation_cls = origin
    else:
        annotation_cls = annotation

    if not isinstance(annotation_cls, type):
        return TypeDescriptor(TypeKind.INVALID, annotation)

    return TypeDescriptor(_class_kind(annotation_cls), annotation)


def _class_kind(cls: type) -> TypeKind:
    if issubclass(cls, enum.Enum) or issubclass(cls, SCALAR_TYPES):
        return TypeKind.SCALAR
    if _is_struct(cls):
        return TypeKind.STRUCT
    if issubclass(cls, (list, tuple, set, frozenset)):
        return TypeKind.SLICE
    if issubclass(cls, dict):
        return TypeKind.MAP
    if getattr(cls, "_is_protocol", False) or inspect.isabstract(cls):
        return TypeKind.INTERFACE
    return TypeKind.STRUCT


def _is_struct(cls: type) -> bool:
    """Dataclasses, NamedTuples and TypedDicts are structs despite their bases."""
    return (
        dataclasses.is_dataclass(cls)
        or typing.is_typeddict(cls)
        or (issubclass(cls, tuple) and hasattr(cls, "_fields"))
    )


def is_eligible(descriptor: TypeDescriptor | Any) -> bool:
    """Whether a payload may get a reusable schema entry.

    Unwraps at most one POINTER; interface and invalid kinds are never
    eligible.
    """
    kind = describe(descriptor).unwrap().kind
    return kind is not TypeKind.INTERFACE and kind is not TypeKind.INVALID
