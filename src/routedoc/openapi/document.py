"""The shared API-description document.

One ``Document`` per application, created from an ``OpenAPIConfig`` and
passed explicitly to everything that registers routes. It owns the path
table and the schema registry behind a single re-entrant lock.
"""

import copy
import threading
from dataclasses import dataclass
from typing import Any

from routedoc._internal.types import Operation
from routedoc.config import OpenAPIConfig
from routedoc.openapi.components import SCHEMA_REF_PREFIX, Components

# PathItem operation slots, in OpenAPI field order
PATH_ITEM_SLOTS: tuple[str, ...] = ("get", "put", "post", "delete", "options", "head", "patch")


@dataclass(slots=True)
class PathItem:
    """Per-method operations documented for a single path."""

    get: Operation | None = None
    put: Operation | None = None
    post: Operation | None = None
    delete: Operation | None = None
    options: Operation | None = None
    head: Operation | None = None
    patch: Operation | None = None

    def operations(self) -> dict[str, Operation]:
        """Populated slots only, keyed by slot name."""
        return {
            slot: op for slot in PATH_ITEM_SLOTS if (op := getattr(self, slot)) is not None
        }

    def as_dict(self) -> dict[str, Any]:
        return copy.deepcopy(self.operations())


class Document:
    """Process-lifetime API description, mutated on every route registration.

    Thread safety:
        ``lock`` is re-entrant and shared with ``components``, so one
        holder can read a PathItem, register schemas, and write the
        PathItem back without another registration interleaving.
    """

    __slots__ = ("components", "config", "info", "lock", "openapi", "paths")

    def __init__(self, config: OpenAPIConfig | None = None) -> None:
        self.config: OpenAPIConfig = config or OpenAPIConfig()
        self.openapi: str = self.config.openapi_version
        self.info: dict[str, Any] = _info_from_config(self.config)
        self.lock = threading.RLock()
        self.paths: dict[str, PathItem] = {}
        self.components = Components(self.lock)

    def path_item(self, path: str) -> PathItem | None:
        """Copy of the PathItem stored for *path*, or ``None``."""
        with self.lock:
            return copy.deepcopy(self.paths.get(path))

    def operation(self, path: str, method: str) -> Operation | None:
        """Copy of the committed operation for (path, method), or ``None``."""
        slot = method.lower()
        if slot not in PATH_ITEM_SLOTS:
            return None
        with self.lock:
            item = self.paths.get(path)
            if item is None:
                return None
            return copy.deepcopy(getattr(item, slot))

    def unresolved_references(self) -> list[str]:
        """Every ``$ref`` that does not point at a registered schema.

        Must be empty before the document is handed to a renderer.
        """
        with self.lock:
            refs: set[str] = set()
            for item in self.paths.values():
                _collect_refs(item.operations(), refs)
            _collect_refs(self.components.schemas, refs)
            return sorted(
                ref
                for ref in refs
                if not (ref.startswith(SCHEMA_REF_PREFIX) and ref[len(SCHEMA_REF_PREFIX):] in self.components)
            )

    def as_dict(self) -> dict[str, Any]:
        """OpenAPI mapping for the external renderer (deep copy)."""
        with self.lock:
            return {
                "openapi": self.openapi,
                "info": copy.deepcopy(self.info),
                "paths": {path: item.as_dict() for path, item in self.paths.items()},
                "components": self.components.as_dict(),
            }

    def __len__(self) -> int:
        return len(self.paths)


def _info_from_config(config: OpenAPIConfig) -> dict[str, Any]:
    info: dict[str, Any] = {"title": config.title, "version": config.version}
    if config.description:
        info["description"] = config.description
    if config.contact is not None:
        contact = {
            "name": config.contact.name,
            "url": config.contact.url,
            "email": config.contact.email,
        }
        info["contact"] = {k: v for k, v in contact.items() if v}
    if config.license is not None:
        license_ = {"name": config.license.name, "url": config.license.url}
        info["license"] = {k: v for k, v in license_.items() if v}
    return info


def _collect_refs(value: Any, refs: set[str]) -> None:
    if isinstance(value, dict):
        for key, item in value.items():
            if key == "$ref" and isinstance(item, str):
                refs.add(item)
            else:
                _collect_refs(item, refs)
    elif isinstance(value, list | tuple):
        for item in value:
            _collect_refs(item, refs)
