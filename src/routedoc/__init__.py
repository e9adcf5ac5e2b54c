"""Routedoc — routes and their OpenAPI document, registered together.

Every route added through a documented group is bound to the router and
recorded in a shared, in-memory OpenAPI document, with caller-supplied
documentation merged over generated defaults and payload schemas
deduplicated by type.

Basic usage::

    from routedoc import Document, Engine, OpenAPIConfig, with_openapi

    document = Document(OpenAPIConfig(title="Users API"))
    engine = Engine()
    users = with_openapi(engine.group("/api/users"), document)

    users.get("/:id", get_user, response=User)
    users.post("/", create_user, request=CreateUser, response=User)

    document.as_dict()  # hand to a JSON renderer at config.json_path
"""

__version__ = "0.1.0-dev"
__all__ = [
    "ConfigurationError",
    "Document",
    "DocumentedGroup",
    "Engine",
    "InvalidRouterHandle",
    "MethodNotAllowed",
    "NotFound",
    "OpenAPIConfig",
    "RouteDescriptor",
    "RouterGroup",
    "RoutedocError",
    "SchemaRegistrationError",
    "UnsupportedMethod",
    "add_route",
    "with_openapi",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import routedoc`` fast while providing a clean top-level API.
    """
    if name == "OpenAPIConfig":
        from routedoc.config import OpenAPIConfig

        return OpenAPIConfig

    if name in ("Engine", "RouterGroup"):
        from routedoc.routing import group as _group

        return getattr(_group, name)

    if name in ("Document", "DocumentedGroup", "RouteDescriptor", "add_route", "with_openapi"):
        from routedoc import openapi as _openapi

        return getattr(_openapi, name)

    if name in (
        "ConfigurationError",
        "InvalidRouterHandle",
        "MethodNotAllowed",
        "NotFound",
        "RoutedocError",
        "SchemaRegistrationError",
        "UnsupportedMethod",
    ):
        from routedoc import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
