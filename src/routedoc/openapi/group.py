"""Documented router groups.

Wraps a ``RouterGroup`` so the familiar ``get``/``post``/... calls also
document the route::

    api = with_openapi(engine.group("/api/users"), document)

    api.get("/:id", load_user, get_user, response=User)
    api.post(
        "/",
        create_user,
        request=CreateUser,
        response=User,
        overrides=[{"summary": "Create a user", "tags": ["users"]}],
    )
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from routedoc._internal.types import Handler, Operation
from routedoc.config import OpenAPIConfig
from routedoc.openapi.document import Document
from routedoc.openapi.route import RouteDescriptor, add_route
from routedoc.routing.group import RouterGroup
from routedoc.routing.route import Route


class DocumentedGroup:
    """A router group paired with the document it records into."""

    __slots__ = ("document", "router")

    def __init__(self, router: RouterGroup, document: Document) -> None:
        self.router = router
        self.document = document

    @property
    def base_path(self) -> str:
        return self.router.base_path

    def group(self, prefix: str, *middleware: Handler) -> DocumentedGroup:
        """Nested documented group sharing this group's document."""
        return DocumentedGroup(self.router.group(prefix, *middleware), self.document)

    def add(
        self,
        method: str,
        path: str,
        *handlers: Handler,
        request: Any = None,
        response: Any = None,
        overrides: Iterable[Operation] = (),
    ) -> Route | None:
        return add_route(
            self.document,
            self.router,
            RouteDescriptor(
                method=method,
                path=path,
                handlers=handlers,
                overrides=tuple(overrides),
                request_type=request,
                response_type=response,
            ),
        )

    def get(self, path: str, *handlers: Handler, **docs: Any) -> Route | None:
        return self.add("GET", path, *handlers, **docs)

    def post(self, path: str, *handlers: Handler, **docs: Any) -> Route | None:
        return self.add("POST", path, *handlers, **docs)

    def put(self, path: str, *handlers: Handler, **docs: Any) -> Route | None:
        return self.add("PUT", path, *handlers, **docs)

    def patch(self, path: str, *handlers: Handler, **docs: Any) -> Route | None:
        return self.add("PATCH", path, *handlers, **docs)

    def delete(self, path: str, *handlers: Handler, **docs: Any) -> Route | None:
        return self.add("DELETE", path, *handlers, **docs)

    def options(self, path: str, *handlers: Handler, **docs: Any) -> Route | None:
        return self.add("OPTIONS", path, *handlers, **docs)

    def head(self, path: str, *handlers: Handler, **docs: Any) -> Route | None:
        return self.add("HEAD", path, *handlers, **docs)


def with_openapi(
    router: RouterGroup,
    document: Document | None = None,
    *,
    config: OpenAPIConfig | None = None,
) -> DocumentedGroup:
    """Pair *router* with *document*, creating one from *config* if omitted."""
    if document is None:
        document = Document(config)
    return DocumentedGroup(router, document)
