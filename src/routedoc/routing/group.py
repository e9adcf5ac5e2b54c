"""Router groups — prefixed views onto a shared Router.

An ``Engine`` is the root group (base path ``/``). ``group()`` derives a
child with a longer prefix and extra middleware; every group registers
into the same underlying ``Router``.
"""

from __future__ import annotations

import posixpath

from routedoc._internal.types import Handler
from routedoc.routing.route import Route, RouteMatch
from routedoc.routing.router import Router


def join_paths(base: str, relative: str) -> str:
    """Join a group prefix and a relative route path.

    Duplicate and trailing slashes are dropped, matching how the router
    splits paths into segments, so one route has exactly one key::

        join_paths("/", "/users")        -> "/users"
        join_paths("/api", "users/:id")  -> "/api/users/:id"
        join_paths("/api/users", "/")    -> "/api/users"
    """
    joined = posixpath.normpath(posixpath.join(base or "/", relative.lstrip("/")))
    return "/" + joined.lstrip("/")


class RouterGroup:
    """A prefix plus middleware chain over a shared ``Router``.

    Usage::

        engine = Engine()
        api = engine.group("/api", auth_middleware)
        api.get("/users/:id", get_user)   # registered at /api/users/:id
    """

    __slots__ = ("_middleware", "_router", "base_path")

    def __init__(
        self,
        router: Router,
        base_path: str = "/",
        middleware: tuple[Handler, ...] = (),
    ) -> None:
        self._router = router
        self.base_path = base_path
        self._middleware = middleware

    @property
    def router(self) -> Router:
        return self._router

    @property
    def middleware(self) -> tuple[Handler, ...]:
        return self._middleware

    def group(self, prefix: str, *middleware: Handler) -> RouterGroup:
        """Return a child group under *prefix* with extra *middleware*."""
        return RouterGroup(
            self._router,
            join_paths(self.base_path, prefix),
            self._middleware + middleware,
        )

    def full_path(self, relative: str) -> str:
        """Absolute path for a route registered on this group."""
        return join_paths(self.base_path, relative)

    def handle(self, method: str, relative: str, *handlers: Handler) -> Route:
        """Bind *handlers* (after the group middleware) to *method* at *relative*."""
        route = Route(
            path=self.full_path(relative),
            method=method,
            handlers=self._middleware + handlers,
        )
        self._router.add(route)
        return route

    def get(self, relative: str, *handlers: Handler) -> Route:
        return self.handle("GET", relative, *handlers)

    def post(self, relative: str, *handlers: Handler) -> Route:
        return self.handle("POST", relative, *handlers)

    def put(self, relative: str, *handlers: Handler) -> Route:
        return self.handle("PUT", relative, *handlers)

    def patch(self, relative: str, *handlers: Handler) -> Route:
        return self.handle("PATCH", relative, *handlers)

    def delete(self, relative: str, *handlers: Handler) -> Route:
        return self.handle("DELETE", relative, *handlers)

    def options(self, relative: str, *handlers: Handler) -> Route:
        return self.handle("OPTIONS", relative, *handlers)

    def head(self, relative: str, *handlers: Handler) -> Route:
        return self.handle("HEAD", relative, *handlers)


class Engine(RouterGroup):
    """Root router group owning a fresh ``Router``."""

    __slots__ = ()

    def __init__(self, *middleware: Handler) -> None:
        super().__init__(Router(), "/", middleware)

    def match(self, method: str, path: str) -> RouteMatch:
        return self._router.match(method, path)

    def compile(self) -> None:
        self._router.compile()

    @property
    def routes(self) -> list[Route]:
        return self._router.routes
