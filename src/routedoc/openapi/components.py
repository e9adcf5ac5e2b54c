"""Reusable schema registry — the ``components.schemas`` section.

Struct payload types are registered once under a key derived from their
module and qualified name plus the encoding discriminator::

    components.add_schema(User, "json", "binding")
    # -> "app_models_User_json"

Field wire names and required-ness come from dataclass field metadata,
keyed by the encoding and validation discriminators::

    @dataclass
    class User:
        id: str = field(metadata={"json": "id", "binding": "required"})
        nickname: str | None = field(default=None, metadata={"json": "nick"})

Nested struct fields are registered recursively and referenced.

Free-threading safety:
    Every mutation happens under the lock handed in by the owning
    ``Document``, the same lock that guards its path table.
"""

from __future__ import annotations

import copy
import dataclasses
import datetime
import decimal
import enum
import re
import threading
import typing
import uuid
from collections.abc import Mapping
from typing import Any, get_args, get_type_hints

from routedoc.errors import SchemaRegistrationError
from routedoc.openapi.types import TypeKind, describe

SCHEMA_REF_PREFIX = "#/components/schemas/"

# Python type → JSON Schema fragment
_SCALAR_SCHEMAS: dict[type, dict[str, str]] = {
    bool: {"type": "boolean"},
    int: {"type": "integer"},
    float: {"type": "number"},
    str: {"type": "string"},
    bytes: {"type": "string", "format": "byte"},
    datetime.datetime: {"type": "string", "format": "date-time"},
    datetime.date: {"type": "string", "format": "date"},
    datetime.time: {"type": "string", "format": "time"},
    uuid.UUID: {"type": "string", "format": "uuid"},
    decimal.Decimal: {"type": "number"},
}

_UNSAFE_KEY_CHARS = re.compile(r"[^A-Za-z0-9_]+")


def schema_path(annotation: Any) -> str:
    """Stable, type-derived name for a struct *annotation*.

    ``app.models.User`` -> ``app_models_User``. Locally defined classes
    keep their enclosing function in the name. Parametrized generics
    carry their arguments, so ``Page[User]`` -> ``app_models_Page_User``.
    """
    cls = typing.get_origin(annotation) or annotation
    raw = f"{cls.__module__}.{cls.__qualname__}"
    args = get_args(annotation)
    if args:
        raw += "_" + "_".join(_arg_name(arg) for arg in args)
    return _UNSAFE_KEY_CHARS.sub("_", raw).strip("_")


def _arg_name(arg: Any) -> str:
    if typing.get_origin(arg) is not None:
        origin = typing.get_origin(arg)
        name = getattr(origin, "__qualname__", str(origin))
        return "_".join([name, *(_arg_name(a) for a in get_args(arg))])
    if isinstance(arg, type):
        return arg.__qualname__
    return str(arg)


def schema_ref(key: str) -> str:
    return f"{SCHEMA_REF_PREFIX}{key}"


@dataclasses.dataclass(frozen=True, slots=True)
class _Field:
    name: str
    annotation: Any
    has_default: bool
    metadata: Mapping[str, Any]


class Components:
    """Schema registry keyed by type-derived names.

    ``add_schema`` is add-or-find: the same type always yields the same
    key; a different type that maps to an existing key is a collision.
    """

    __slots__ = ("_lock", "_schemas", "_types")

    def __init__(self, lock: threading.RLock | None = None) -> None:
        self._lock = lock if lock is not None else threading.RLock()
        self._schemas: dict[str, dict[str, Any]] = {}
        self._types: dict[str, Any] = {}

    def add_schema(
        self,
        annotation: Any,
        encoding_key: str = "json",
        validation_key: str = "binding",
    ) -> str:
        """Register the struct behind *annotation* and return its key.

        Unwraps one ``X | None``. Raises ``SchemaRegistrationError`` for
        non-struct kinds, unresolvable annotations, and name collisions.
        A failed call leaves the registry as it was, nested structs
        included.
        """
        descriptor = describe(annotation).unwrap()
        if descriptor.kind is not TypeKind.STRUCT:
            msg = f"Cannot register a schema for {annotation!r}: unsupported kind {descriptor.kind.value!r}"
            raise SchemaRegistrationError(msg)

        with self._lock:
            before = set(self._types)
            try:
                return self._add_struct(descriptor.annotation, encoding_key, validation_key)
            except Exception:
                for key in set(self._types) - before:
                    del self._types[key]
                    self._schemas.pop(key, None)
                raise

    def _add_struct(self, annotation: Any, encoding_key: str, validation_key: str) -> str:
        key = f"{schema_path(annotation)}_{encoding_key}"

        existing = self._types.get(key)
        if existing is not None:
            if existing == annotation:
                return key
            msg = (
                f"Schema name collision: {key!r} is already registered for "
                f"{existing!r}, cannot register {annotation!r}"
            )
            raise SchemaRegistrationError(msg)

        # Reserve the key first so self-referencing structs terminate
        self._types[key] = annotation
        self._schemas[key] = {"type": "object"}
        self._schemas[key] = self._struct_schema(annotation, encoding_key, validation_key)
        return key

    def _struct_schema(self, annotation: Any, encoding_key: str, validation_key: str) -> dict[str, Any]:
        properties: dict[str, Any] = {}
        required: list[str] = []

        for f in _struct_fields(annotation):
            wire_name = str(f.metadata.get(encoding_key) or f.name).split(",", 1)[0]
            if wire_name == "-":
                continue

            schema = self._field_schema(f.annotation, encoding_key, validation_key)
            description = f.metadata.get("description")
            if description:
                schema = {**schema, "description": description}
            properties[wire_name] = schema

            rules = str(f.metadata.get(validation_key, "")).split(",")
            if "required" in rules or not (f.has_default or _is_optional(f.annotation)):
                required.append(wire_name)

        result: dict[str, Any] = {"type": "object", "properties": properties}
        if required:
            result["required"] = required
        return result

    def _field_schema(self, annotation: Any, encoding_key: str, validation_key: str) -> dict[str, Any]:
        descriptor = describe(annotation)
        annotation = descriptor.annotation
        kind = descriptor.kind

        if kind is TypeKind.POINTER and descriptor.elem is not None:
            inner = self._field_schema(descriptor.elem.annotation, encoding_key, validation_key)
            if "$ref" in inner:
                return {"allOf": [inner], "nullable": True}
            return {**inner, "nullable": True}

        if kind is TypeKind.SCALAR:
            return _scalar_schema(annotation)

        if kind is TypeKind.SLICE:
            args = [a for a in get_args(annotation) if a is not Ellipsis]
            if args:
                return {
                    "type": "array",
                    "items": self._field_schema(args[0], encoding_key, validation_key),
                }
            return {"type": "array"}

        if kind is TypeKind.MAP:
            args = get_args(annotation)
            if len(args) == 2:
                return {
                    "type": "object",
                    "additionalProperties": self._field_schema(args[1], encoding_key, validation_key),
                }
            return {"type": "object"}

        if kind is TypeKind.STRUCT:
            return {"$ref": schema_ref(self._add_struct(annotation, encoding_key, validation_key))}

        # Interface / invalid — any JSON value
        return {}

    # -- Read access --

    @property
    def schemas(self) -> dict[str, dict[str, Any]]:
        """Snapshot of all registered schemas."""
        with self._lock:
            return copy.deepcopy(self._schemas)

    def get(self, key: str) -> dict[str, Any] | None:
        with self._lock:
            schema = self._schemas.get(key)
            return copy.deepcopy(schema) if schema is not None else None

    def type_for(self, key: str) -> Any:
        """The annotation registered under *key*, or ``None``."""
        return self._types.get(key)

    def as_dict(self) -> dict[str, Any]:
        return {"schemas": self.schemas}

    def __len__(self) -> int:
        return len(self._schemas)

    def __contains__(self, key: object) -> bool:
        return key in self._schemas


def _struct_fields(annotation: Any) -> list[_Field]:
    cls = typing.get_origin(annotation) or annotation
    try:
        hints = get_type_hints(cls)
    except (NameError, TypeError) as exc:
        msg = f"Cannot resolve field annotations of {cls!r}: {exc}"
        raise SchemaRegistrationError(msg) from exc

    # Page[User]: T -> User in every field hint
    bindings = dict(zip(getattr(cls, "__parameters__", ()), get_args(annotation), strict=False))
    if bindings:
        hints = {name: _substitute(hint, bindings) for name, hint in hints.items()}

    if dataclasses.is_dataclass(cls):
        return [
            _Field(
                name=f.name,
                annotation=hints.get(f.name, f.type),
                has_default=(
                    f.default is not dataclasses.MISSING
                    or f.default_factory is not dataclasses.MISSING
                ),
                metadata=f.metadata,
            )
            for f in dataclasses.fields(cls)
        ]

    if typing.is_typeddict(cls):
        required_keys = getattr(cls, "__required_keys__", frozenset(hints))
        return [
            _Field(name, annotation, name not in required_keys, {})
            for name, annotation in hints.items()
        ]

    if issubclass(cls, tuple) and hasattr(cls, "_fields"):
        defaults = getattr(cls, "_field_defaults", {})
        return [
            _Field(name, hints.get(name, Any), name in defaults, {})
            for name in cls._fields
        ]

    return [
        _Field(name, annotation, hasattr(cls, name), {})
        for name, annotation in hints.items()
        if typing.get_origin(annotation) is not typing.ClassVar
    ]


def _substitute(hint: Any, bindings: Mapping[Any, Any]) -> Any:
    if isinstance(hint, typing.TypeVar):
        return bindings.get(hint, hint)
    params = getattr(hint, "__parameters__", ())
    if params and not isinstance(hint, type):
        return hint[tuple(bindings.get(p, p) for p in params)]
    return hint


def _scalar_schema(annotation: Any) -> dict[str, Any]:
    if isinstance(annotation, type) and issubclass(annotation, enum.Enum):
        values = [member.value for member in annotation]
        schema = _scalar_schema(type(values[0])) if values else {}
        return {**schema, "enum": values}
    for scalar_type, schema in _SCALAR_SCHEMAS.items():
        if isinstance(annotation, type) and issubclass(annotation, scalar_type):
            return dict(schema)
    return {"type": "string"}


def _is_optional(annotation: Any) -> bool:
    return describe(annotation).kind is TypeKind.POINTER
