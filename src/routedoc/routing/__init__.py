"""Routing — trie route table with O(path-depth) matching.

Handler chains are bound to ``(method, path)`` through an ``Engine`` or
one of its ``RouterGroup`` prefixes. Paths use colon parameters
(``/users/:id``) and a trailing catch-all (``/files/*filepath``).
"""

from routedoc.routing.group import Engine, RouterGroup, join_paths
from routedoc.routing.route import PathSegment, Route, RouteMatch
from routedoc.routing.router import Router, parse_path

__all__ = [
    "Engine",
    "PathSegment",
    "Route",
    "RouteMatch",
    "Router",
    "RouterGroup",
    "join_paths",
    "parse_path",
]
