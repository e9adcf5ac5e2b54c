"""Route and RouteMatch frozen dataclasses."""

from dataclasses import dataclass

from routedoc._internal.types import Handler


@dataclass(frozen=True, slots=True)
class PathSegment:
    """A parsed segment of a route path.

    Static:    ``/users``     (is_param=False)
    Param:     ``/:id``       (is_param=True, param_name="id")
    Catch-all: ``/*filepath`` (is_param=True, param_name="filepath", catch_all=True)
    """

    value: str
    is_param: bool = False
    param_name: str | None = None
    catch_all: bool = False


@dataclass(frozen=True, slots=True)
class Route:
    """A handler chain bound to one method at one absolute path."""

    path: str
    method: str
    handlers: tuple[Handler, ...]
    name: str | None = None

    @property
    def handler(self) -> Handler:
        """The terminal handler of the chain."""
        return self.handlers[-1]


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Result of a successful route match."""

    route: Route
    path_params: dict[str, str]
