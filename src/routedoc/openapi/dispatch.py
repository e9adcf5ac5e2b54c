"""Method dispatch — router registration call plus PathItem slot.

Maps an HTTP method onto the router group's registration call and onto
the ``PathItem`` slot its documentation belongs in.
"""

import logging

from routedoc._internal.types import Handler
from routedoc.errors import UnsupportedMethod
from routedoc.openapi.document import PATH_ITEM_SLOTS
from routedoc.routing.group import RouterGroup
from routedoc.routing.route import Route

logger = logging.getLogger("routedoc.openapi")

# "GET" -> "get", ...
METHOD_SLOTS: dict[str, str] = {slot.upper(): slot for slot in PATH_ITEM_SLOTS}


def require_slot(method: str) -> str:
    """PathItem slot for *method* (case-insensitive), else ``UnsupportedMethod``."""
    slot = METHOD_SLOTS.get(method.upper())
    if slot is None:
        raise UnsupportedMethod(method)
    return slot


def method_slot(method: str, *, strict: bool = True) -> str | None:
    """PathItem slot for *method*, as ``require_slot``.

    With ``strict=False`` an unsupported method logs a warning and
    returns ``None`` instead, and the caller must drop the route.
    """
    if strict:
        return require_slot(method)
    slot = METHOD_SLOTS.get(method.upper())
    if slot is not None:
        return slot
    logger.warning("Unsupported HTTP method %r, route dropped", method)
    return None


def dispatch(
    router: RouterGroup,
    method: str,
    path: str,
    handlers: tuple[Handler, ...],
) -> tuple[str, Route]:
    """Bind *handlers* on *router* and return ``(slot, route)``.

    The method is validated before the router is touched.
    """
    slot = require_slot(method)
    route = router.handle(slot.upper(), path, *handlers)
    return slot, route
