"""Trie-based router.

Routes are added during setup, possibly from several threads at once,
and matched against request paths. ``compile()`` freezes the table.
"""

import logging
import threading
from dataclasses import dataclass

from routedoc.errors import ConfigurationError, MethodNotAllowed, NotFound
from routedoc.routing.route import PathSegment, Route, RouteMatch

logger = logging.getLogger("routedoc.routing")


def parse_path(path: str) -> list[PathSegment]:
    """Parse a route path string into segments.

    Examples::

        "/users"           -> [PathSegment("users")]
        "/users/:id"       -> [PathSegment("users"), PathSegment(":id", is_param=True, ...)]
        "/files/*filepath" -> [PathSegment("files"), PathSegment("*filepath", catch_all=True, ...)]

    Raises ``ConfigurationError`` for ``{param}`` placeholders, unnamed
    parameters, and catch-all segments that are not last.
    """
    segments: list[PathSegment] = []
    parts = [p for p in path.strip("/").split("/") if p]
    for index, part in enumerate(parts):
        if part.startswith("{") and part.endswith("}"):
            msg = (
                f"Route path {path!r} uses {{param}} placeholders. "
                f"Use :param instead (e.g. /users/:id)."
            )
            raise ConfigurationError(msg)
        if part[0] in (":", "*"):
            name = part[1:]
            if not name:
                msg = f"Route path {path!r} has an unnamed parameter segment {part!r}."
                raise ConfigurationError(msg)
            catch_all = part[0] == "*"
            if catch_all and index != len(parts) - 1:
                msg = f"Catch-all segment {part!r} must be the last segment of {path!r}."
                raise ConfigurationError(msg)
            segments.append(
                PathSegment(value=part, is_param=True, param_name=name, catch_all=catch_all)
            )
        else:
            segments.append(PathSegment(value=part))
    return segments


class _TrieNode:
    """A node in the route trie."""

    __slots__ = ("catch_all", "children", "param_child", "routes_by_method")

    def __init__(self) -> None:
        # Static segment children: "users" -> node
        self.children: dict[str, _TrieNode] = {}
        # Single parameter child (only one param name per level)
        self.param_child: _ParamEdge | None = None
        # Catch-all edge (consumes the rest of the path)
        self.catch_all: _CatchAllEdge | None = None
        # Routes at this node, keyed by HTTP method
        self.routes_by_method: dict[str, Route] = {}


@dataclass(slots=True)
class _ParamEdge:
    """A parameter edge in the trie."""

    param_name: str
    node: _TrieNode


@dataclass(slots=True)
class _CatchAllEdge:
    """A catch-all edge — consumes remaining path."""

    param_name: str
    route_by_method: dict[str, Route]


class Router:
    """Trie router keyed by HTTP method.

    Usage::

        router = Router()
        router.add(Route("/users", "GET", (list_users,)))
        router.add(Route("/users/:id", "GET", (get_user,)))
        match = router.match("GET", "/users/42")

    Thread safety:
        ``add()`` and ``compile()`` take an internal lock, so concurrent
        setup code cannot corrupt the trie. Matching reads a trie that
        only grows.
    """

    __slots__ = ("_compiled", "_lock", "_root")

    def __init__(self) -> None:
        self._root = _TrieNode()
        self._compiled = False
        self._lock = threading.Lock()

    def add(self, route: Route) -> None:
        """Add a route. Must be called before compile().

        Adding the same (method, path) twice replaces the earlier route.
        Raises ``ConfigurationError`` when a parameter name clashes with
        an existing one at the same depth.
        """
        segments = parse_path(route.path)
        with self._lock:
            if self._compiled:
                msg = "Cannot add routes after compilation."
                raise RuntimeError(msg)
            self._insert(route, segments)
        logger.debug("Registered %s %s", route.method, route.path)

    def _insert(self, route: Route, segments: list[PathSegment]) -> None:
        node = self._root

        for seg in segments:
            name = seg.param_name or ""
            if seg.catch_all:
                if node.catch_all is None:
                    node.catch_all = _CatchAllEdge(param_name=name, route_by_method={})
                elif node.catch_all.param_name != name:
                    msg = (
                        f"Catch-all {seg.value!r} in {route.path!r} conflicts with "
                        f"existing *{node.catch_all.param_name}."
                    )
                    raise ConfigurationError(msg)
                node.catch_all.route_by_method[route.method] = route
                return

            if seg.is_param:
                if node.param_child is None:
                    node.param_child = _ParamEdge(param_name=name, node=_TrieNode())
                elif node.param_child.param_name != name:
                    msg = (
                        f"Parameter {seg.value!r} in {route.path!r} conflicts with "
                        f"existing :{node.param_child.param_name}."
                    )
                    raise ConfigurationError(msg)
                node = node.param_child.node
            else:
                if seg.value not in node.children:
                    node.children[seg.value] = _TrieNode()
                node = node.children[seg.value]

        node.routes_by_method[route.method] = route

    @property
    def routes(self) -> list[Route]:
        """Return all registered routes, one per (method, path)."""
        result: list[Route] = []
        self._collect_routes(self._root, result)
        return result

    def _collect_routes(self, node: _TrieNode, result: list[Route]) -> None:
        """Recursively collect routes from the trie."""
        result.extend(node.routes_by_method.values())

        for child in node.children.values():
            self._collect_routes(child, result)

        if node.param_child is not None:
            self._collect_routes(node.param_child.node, result)

        if node.catch_all is not None:
            result.extend(node.catch_all.route_by_method.values())

    def compile(self) -> None:
        """Freeze the router. No more routes can be added."""
        with self._lock:
            self._compiled = True

    @property
    def compiled(self) -> bool:
        return self._compiled

    def match(self, method: str, path: str) -> RouteMatch:
        """Match a request path and method against the registered routes.

        Returns a ``RouteMatch`` on success.
        Raises ``NotFound`` if no route matches the path.
        Raises ``MethodNotAllowed`` if the path matches but the method doesn't.
        """
        parts = [p for p in path.strip("/").split("/") if p]
        result = self._match_node(self._root, parts, 0, {})

        if result is None:
            raise NotFound(f"No route matches {method} {path!r}")

        routes_by_method, params = result
        if method in routes_by_method:
            return RouteMatch(route=routes_by_method[method], path_params=params)

        raise MethodNotAllowed(frozenset(routes_by_method))

    def _match_node(
        self,
        node: _TrieNode,
        parts: list[str],
        index: int,
        params: dict[str, str],
    ) -> tuple[dict[str, Route], dict[str, str]] | None:
        """Recursively match path parts against the trie."""
        if index == len(parts):
            if node.routes_by_method:
                return node.routes_by_method, params
            return None

        part = parts[index]

        # 1. Static child first (exact match)
        if part in node.children:
            result = self._match_node(node.children[part], parts, index + 1, params)
            if result is not None:
                return result

        # 2. Parameter child
        if node.param_child is not None:
            edge = node.param_child
            new_params = {**params, edge.param_name: part}
            result = self._match_node(edge.node, parts, index + 1, new_params)
            if result is not None:
                return result

        # 3. Catch-all
        if node.catch_all is not None:
            remaining = "/".join(parts[index:])
            new_params = {**params, node.catch_all.param_name: remaining}
            return node.catch_all.route_by_method, new_params

        return None
