"""Response and request content resolution.

Eligible payload types become ``$ref`` content pointing into the schema
registry. Everything else, including registry failures, degrades to a
generic open-object schema so route registration always proceeds.
"""

import logging
from typing import Any

from routedoc.errors import SchemaRegistrationError
from routedoc.openapi.components import Components, schema_ref
from routedoc.openapi.types import is_eligible

logger = logging.getLogger("routedoc.openapi")

JSON_MEDIA_TYPE = "application/json"


def default_content() -> dict[str, Any]:
    """Generic ``application/json`` open-object content."""
    return {JSON_MEDIA_TYPE: {"schema": {"type": "object"}}}


def reference_content(key: str) -> dict[str, Any]:
    return {JSON_MEDIA_TYPE: {"schema": {"$ref": schema_ref(key)}}}


def resolve_content(
    components: Components,
    payload: Any,
    *,
    encoding_key: str = "json",
    validation_key: str = "binding",
) -> dict[str, Any]:
    """Media-type content for *payload*; never raises for schema problems."""
    if not is_eligible(payload):
        logger.debug("No reusable schema for %r, using generic object", payload)
        return default_content()

    try:
        key = components.add_schema(payload, encoding_key, validation_key)
    except SchemaRegistrationError as exc:
        logger.warning("Schema registration failed, using generic object: %s", exc)
        return default_content()

    return reference_content(key)
