"""Path table updates."""

from routedoc._internal.types import Operation
from routedoc.openapi.dispatch import require_slot
from routedoc.openapi.document import Document, PathItem


def commit(document: Document, full_path: str, method: str, operation: Operation) -> PathItem:
    """Store *operation* in the *method* slot of ``document.paths[full_path]``.

    Creates the PathItem on first use. Other method slots on an existing
    PathItem are left untouched; the same slot is overwritten in place.
    Raises ``UnsupportedMethod`` for methods without a slot.
    """
    slot = require_slot(method)
    with document.lock:
        item = document.paths.get(full_path)
        if item is None:
            item = PathItem()
            document.paths[full_path] = item
        setattr(item, slot, operation)
        return item
