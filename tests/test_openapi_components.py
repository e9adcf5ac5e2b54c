"""Tests for routedoc.openapi.components — schema registry."""

import datetime
import enum
from dataclasses import dataclass, field
from typing import Any, Generic, NamedTuple, TypedDict, TypeVar

import pytest

from routedoc.errors import SchemaRegistrationError
from routedoc.openapi.components import SCHEMA_REF_PREFIX, Components, schema_path
from routedoc.openapi.document import Document


class Role(enum.Enum):
    ADMIN = "admin"
    MEMBER = "member"


@dataclass
class Address:
    city: str
    zip_code: str | None = None


@dataclass
class User:
    id: str = field(metadata={"json": "id", "binding": "required", "description": "User ID"})
    name: str = field(default="", metadata={"json": "full_name,omitempty"})
    secret: str = field(default="", metadata={"json": "-"})
    role: Role = Role.MEMBER
    address: Address | None = None
    tags: list[str] = field(default_factory=list)
    scores: dict[str, float] = field(default_factory=dict)
    created: datetime.datetime | None = None
    extra: Any = None


@dataclass
class Node:
    value: int
    children: list["Node"] = field(default_factory=list)


class Point(NamedTuple):
    x: int
    y: int = 0


class Movie(TypedDict, total=False):
    title: str


@dataclass
class Broken:
    other: "DoesNotExist"  # noqa: F821


def _make_clash() -> type:
    @dataclass
    class Clash:
        x: int

    return Clash


_FIRST_CLASH = _make_clash()
_SECOND_CLASH = _make_clash()


@dataclass
class Outer:
    child: "Child"
    clash: _SECOND_CLASH  # type: ignore[valid-type]


@dataclass
class Child:
    parent: "Outer | None" = None


T = TypeVar("T")


@dataclass
class Page(Generic[T]):
    items: list[T]
    first: T | None = None


def _key(cls: Any, encoding: str = "json") -> str:
    return f"{schema_path(cls)}_{encoding}"


class TestSchemaPath:
    def test_module_and_qualname(self) -> None:
        assert schema_path(User) == f"{User.__module__}_User".replace(".", "_")

    def test_local_class(self) -> None:
        @dataclass
        class Local:
            x: int

        path = schema_path(Local)
        assert path.endswith("_Local")
        assert "locals" in path
        assert "<" not in path

    def test_generic_arguments_in_name(self) -> None:
        assert schema_path(Page[User]).endswith("_Page_User")
        assert schema_path(Page[list[User]]).endswith("_Page_list_User")
        assert schema_path(Page[User]) != schema_path(Page[Address])


class TestAddSchema:
    def test_returns_type_derived_key(self) -> None:
        components = Components()
        key = components.add_schema(Address, "json", "binding")

        assert key == _key(Address)
        assert key in components
        assert components.type_for(key) is Address

    def test_same_type_deduplicated(self) -> None:
        components = Components()
        first = components.add_schema(Address)
        second = components.add_schema(Address)

        assert first == second
        assert len(components) == 1

    def test_pointer_unwrapped(self) -> None:
        components = Components()
        assert components.add_schema(Address | None) == components.add_schema(Address)
        assert len(components) == 1

    def test_encoding_key_discriminates(self) -> None:
        components = Components()
        components.add_schema(Address, "json")
        components.add_schema(Address, "form")

        assert len(components) == 2

    def test_name_collision(self) -> None:
        def make() -> type:
            @dataclass
            class Twin:
                x: int

            return Twin

        components = Components()
        components.add_schema(make())

        with pytest.raises(SchemaRegistrationError, match="collision"):
            components.add_schema(make())
        assert len(components) == 1

    @pytest.mark.parametrize("annotation", [None, Any, int, list[User], dict[str, User]])
    def test_unsupported_kind(self, annotation: Any) -> None:
        components = Components()

        with pytest.raises(SchemaRegistrationError, match="unsupported kind"):
            components.add_schema(annotation)
        assert len(components) == 0

    def test_unresolvable_annotation_rolls_back(self) -> None:
        components = Components()

        with pytest.raises(SchemaRegistrationError):
            components.add_schema(Broken)
        assert len(components) == 0

    def test_failed_cyclic_registration_leaves_no_dangling_reference(self) -> None:
        document = Document()
        components = document.components
        components.add_schema(_FIRST_CLASH)

        with pytest.raises(SchemaRegistrationError, match="collision"):
            components.add_schema(Outer)

        assert list(components.schemas) == [_key(_FIRST_CLASH)]
        assert _key(Outer) not in components
        assert _key(Child) not in components
        assert document.unresolved_references() == []

    def test_generic_instantiations_registered_separately(self) -> None:
        components = Components()
        users = components.add_schema(Page[User])
        addresses = components.add_schema(Page[Address])

        assert users != addresses
        assert components.add_schema(Page[User]) == users
        assert components.type_for(users) == Page[User]
        user_ref = {"$ref": f"{SCHEMA_REF_PREFIX}{_key(User)}"}
        schema = components.get(users)
        assert schema is not None
        assert schema["properties"]["items"] == {"type": "array", "items": user_ref}
        assert schema["properties"]["first"] == {"allOf": [user_ref], "nullable": True}
        assert components.get(addresses)["properties"]["items"]["items"] == {  # type: ignore[index]
            "$ref": f"{SCHEMA_REF_PREFIX}{_key(Address)}"
        }


class TestStructSchema:
    def test_fields(self) -> None:
        components = Components()
        schema = components.get(components.add_schema(User))
        assert schema is not None
        props = schema["properties"]

        assert props["id"] == {"type": "string", "description": "User ID"}
        assert props["full_name"] == {"type": "string"}
        assert "secret" not in props
        assert "name" not in props
        assert props["role"] == {"type": "string", "enum": ["admin", "member"]}
        assert props["tags"] == {"type": "array", "items": {"type": "string"}}
        assert props["scores"] == {"type": "object", "additionalProperties": {"type": "number"}}
        assert props["created"] == {"type": "string", "format": "date-time", "nullable": True}
        assert props["extra"] == {}

    def test_required_from_binding_and_defaults(self) -> None:
        components = Components()
        user = components.get(components.add_schema(User))
        address = components.get(components.add_schema(Address))
        assert user is not None
        assert address is not None

        assert user["required"] == ["id"]
        assert address["required"] == ["city"]

    def test_nested_struct_registered_and_referenced(self) -> None:
        components = Components()
        schema = components.get(components.add_schema(User))
        assert schema is not None

        assert _key(Address) in components
        assert schema["properties"]["address"] == {
            "allOf": [{"$ref": SCHEMA_REF_PREFIX + _key(Address)}],
            "nullable": True,
        }

    def test_self_reference_terminates(self) -> None:
        components = Components()
        key = components.add_schema(Node)
        schema = components.get(key)
        assert schema is not None

        assert schema["properties"]["children"] == {
            "type": "array",
            "items": {"$ref": SCHEMA_REF_PREFIX + key},
        }
        assert len(components) == 1

    def test_named_tuple(self) -> None:
        components = Components()
        schema = components.get(components.add_schema(Point))
        assert schema is not None

        assert schema["properties"] == {"x": {"type": "integer"}, "y": {"type": "integer"}}
        assert schema["required"] == ["x"]

    def test_typed_dict_not_total(self) -> None:
        components = Components()
        schema = components.get(components.add_schema(Movie))
        assert schema is not None

        assert schema["properties"] == {"title": {"type": "string"}}
        assert "required" not in schema

    def test_validation_key_selects_metadata(self) -> None:
        @dataclass
        class Login:
            email: str = field(default="", metadata={"validate": "required,email"})

        components = Components()
        strict = components.get(components.add_schema(Login, "json", "validate"))
        assert strict is not None
        assert strict["required"] == ["email"]

    def test_schemas_snapshot_is_a_copy(self) -> None:
        components = Components()
        key = components.add_schema(Address)
        components.schemas[key]["type"] = "string"

        assert components.as_dict()["schemas"][key]["type"] == "object"
