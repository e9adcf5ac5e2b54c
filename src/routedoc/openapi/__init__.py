"""OpenAPI document maintenance for registered routes.

Every documented route registration binds a handler chain on the router
and records a merged operation in the shared ``Document``.
"""

from routedoc.openapi.components import SCHEMA_REF_PREFIX, Components, schema_path
from routedoc.openapi.dispatch import METHOD_SLOTS, dispatch, method_slot, require_slot
from routedoc.openapi.document import PATH_ITEM_SLOTS, Document, PathItem
from routedoc.openapi.group import DocumentedGroup, with_openapi
from routedoc.openapi.merge import fold_overrides, merge_operation
from routedoc.openapi.paths import commit
from routedoc.openapi.resolve import default_content, resolve_content
from routedoc.openapi.route import RouteDescriptor, add_route, generate_operation
from routedoc.openapi.types import TypeDescriptor, TypeKind, describe, is_eligible

__all__ = [
    "METHOD_SLOTS",
    "PATH_ITEM_SLOTS",
    "SCHEMA_REF_PREFIX",
    "Components",
    "Document",
    "DocumentedGroup",
    "PathItem",
    "RouteDescriptor",
    "TypeDescriptor",
    "TypeKind",
    "add_route",
    "commit",
    "default_content",
    "describe",
    "dispatch",
    "fold_overrides",
    "generate_operation",
    "is_eligible",
    "merge_operation",
    "method_slot",
    "require_slot",
    "resolve_content",
    "schema_path",
    "with_openapi",
]
