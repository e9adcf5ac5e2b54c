"""Documented route registration.

``add_route`` binds a handler chain on a router group and records the
matching operation in the shared ``Document``, in one locked step::

    document = Document(OpenAPIConfig(title="Users API"))
    engine = Engine()
    users = engine.group("/api/users")

    add_route(
        document,
        users,
        RouteDescriptor("GET", "/:id", (get_user,), response_type=User)
            .with_options({"summary": "Fetch a user", "tags": ["users"]}),
    )

Ordering inside the lock is fixed: validate the method, build the
operation (registering schemas), bind the router, commit the path table.
A router failure therefore leaves the path table untouched; schema
entries registered on the way stay, since the registry only grows.
"""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass
from typing import Any

from routedoc._internal.types import Handler, Operation
from routedoc.errors import ConfigurationError, InvalidRouterHandle
from routedoc.openapi.dispatch import dispatch, method_slot
from routedoc.openapi.document import Document
from routedoc.openapi.merge import merge_operation
from routedoc.openapi.paths import commit
from routedoc.openapi.resolve import resolve_content
from routedoc.routing.group import RouterGroup
from routedoc.routing.route import Route
from routedoc.routing.router import parse_path

logger = logging.getLogger("routedoc.openapi")

# Methods whose request payload is documented as a requestBody
_BODY_METHODS = frozenset({"POST", "PUT", "PATCH"})


@dataclass(frozen=True, slots=True)
class RouteDescriptor:
    """One route to register: where, what runs, and how to document it.

    ``overrides`` are partial operations applied in order; later ones
    win per field and all of them win over generated documentation.
    ``request_type`` / ``response_type`` are payload annotations.
    """

    method: str
    path: str
    handlers: tuple[Handler, ...] = ()
    overrides: tuple[Operation, ...] = ()
    request_type: Any = None
    response_type: Any = None

    def with_options(self, *overrides: Operation) -> RouteDescriptor:
        """Copy with *overrides* appended after the existing ones."""
        return dataclasses.replace(self, overrides=self.overrides + overrides)


def add_route(document: Document, router: RouterGroup, route: RouteDescriptor) -> Route | None:
    """Register *route* on *router* and document it in *document*.

    Returns the bound ``Route``, or ``None`` when the document is in
    lenient mode and the method is unsupported (nothing is registered).

    Raises:
        InvalidRouterHandle: *router* is not a ``RouterGroup``/``Engine``.
        ConfigurationError: empty handler chain or malformed path.
        UnsupportedMethod: unknown method with ``strict_methods`` enabled.
    """
    if not isinstance(router, RouterGroup):
        msg = f"Invalid router handle {type(router).__name__!r}: expected RouterGroup or Engine"
        raise InvalidRouterHandle(msg)
    if not route.handlers:
        msg = f"Route {route.method} {route.path!r} has an empty handler chain"
        raise ConfigurationError(msg)

    with document.lock:
        slot = method_slot(route.method, strict=document.config.strict_methods)
        if slot is None:
            return None

        method = slot.upper()
        full_path = router.full_path(route.path)
        generated = generate_operation(document, method, full_path, route)
        operation = merge_operation(route.overrides, generated)

        _, registered = dispatch(router, method, route.path, route.handlers)
        commit(document, full_path, method, operation)

    logger.debug("Documented %s %s", method, full_path)
    return registered


def generate_operation(
    document: Document,
    method: str,
    full_path: str,
    route: RouteDescriptor,
) -> Operation:
    """Default documentation for a route before overrides are applied."""
    config = document.config
    operation: Operation = {"operationId": f"{method}_{full_path}"}

    parameters = path_parameters(full_path)
    if parameters:
        operation["parameters"] = parameters

    if method in _BODY_METHODS and route.request_type is not None:
        operation["requestBody"] = {
            "required": True,
            "content": resolve_content(
                document.components,
                route.request_type,
                encoding_key=config.encoding_key,
                validation_key=config.validation_key,
            ),
        }

    operation["responses"] = {
        "200": {
            "description": "OK",
            "content": resolve_content(
                document.components,
                route.response_type,
                encoding_key=config.encoding_key,
                validation_key=config.validation_key,
            ),
        },
    }
    return operation


def path_parameters(full_path: str) -> list[dict[str, Any]]:
    """``in: path`` parameter objects for every ``:name`` / ``*name`` segment."""
    return [
        {
            "name": seg.param_name,
            "in": "path",
            "required": True,
            "schema": {"type": "string"},
        }
        for seg in parse_path(full_path)
        if seg.is_param
    ]
