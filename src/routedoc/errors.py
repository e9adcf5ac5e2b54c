"""Routedoc exception hierarchy.

Shared across the router, the schema registry, and route registration so
every module raises and catches the same types.
"""

from dataclasses import dataclass


class RoutedocError(Exception):
    """Base for all routedoc-specific errors."""


class ConfigurationError(RoutedocError):
    """Raised when a route or document is set up incorrectly."""


class UnsupportedMethod(RoutedocError, ValueError):  # noqa: N818 — mirrors MethodNotAllowed
    """Raised when a route is registered with an HTTP method that has no
    PathItem slot.

    Nothing is routed and nothing is documented when this is raised.
    """

    def __init__(self, method: str) -> None:
        self.method = method
        super().__init__(
            f"Unsupported HTTP method: {method!r}. "
            "Expected one of GET, POST, PUT, PATCH, DELETE, OPTIONS, HEAD."
        )


class InvalidRouterHandle(RoutedocError, TypeError):  # noqa: N818
    """Raised when ``add_route`` receives something that is not a router group."""


class SchemaRegistrationError(RoutedocError):
    """Raised by the schema registry on a name collision or unsupported kind.

    Route registration catches this and falls back to a generic schema.
    """


@dataclass(frozen=True, slots=True)
class HTTPError(RoutedocError):
    """An error that maps directly to an HTTP status code.

    Raised by the router when a request cannot be matched.
    """

    status: int
    detail: str = ""
    headers: tuple[tuple[str, str], ...] = ()

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class NotFound(HTTPError):  # noqa: N818 — conventional name in web frameworks
    """404 — no route matched the request path."""

    def __init__(self, detail: str = "Not Found") -> None:
        super().__init__(status=404, detail=detail)


class MethodNotAllowed(HTTPError):  # noqa: N818 — conventional name in web frameworks
    """405 — route exists but not for this HTTP method.

    Includes an ``Allow`` header listing the valid methods.
    """

    def __init__(self, allowed: frozenset[str], detail: str = "") -> None:
        allow_value = ", ".join(sorted(allowed))
        default_detail = f"Method not allowed. Allowed methods: {allow_value}"
        super().__init__(
            status=405,
            detail=detail or default_detail,
            headers=(("Allow", allow_value),),
        )
