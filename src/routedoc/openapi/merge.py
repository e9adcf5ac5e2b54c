"""Operation merging.

Caller overrides are folded left to right (later override wins per
field), then the generated operation fills in only what the folded
overrides leave unset::

    merge_operation(
        [{"summary": "List users"}, {"tags": ["users"]}],
        {"operationId": "GET_/users", "responses": {"200": {...}}},
    )
    # -> {"operationId": "GET_/users", "responses": {...},
    #     "summary": "List users", "tags": ["users"]}

Fields are top-level operation keys. Mapping-valued fields such as
``responses`` merge one level down, per status code, and each entry is
taken whole from whichever side wins.
"""

import copy
from collections.abc import Iterable, Mapping
from typing import Any

from routedoc._internal.types import Operation


def is_unset(value: Any) -> bool:
    """Missing, ``None``, or an empty string/list/mapping."""
    if value is None:
        return True
    if isinstance(value, str | list | tuple | dict):
        return not value
    return False


def overlay(lower: Mapping[str, Any], upper: Mapping[str, Any], *, depth: int = 1) -> Operation:
    """Return *lower* with every set field of *upper* on top.

    Where both sides hold a mapping and *depth* allows, the mappings are
    overlaid key by key instead of replaced.
    """
    result = dict(lower)
    for key, value in upper.items():
        if is_unset(value):
            continue
        current = result.get(key)
        if depth > 0 and isinstance(value, Mapping) and isinstance(current, Mapping) and current:
            result[key] = overlay(current, value, depth=depth - 1)
        else:
            result[key] = value
    return result


def fold_overrides(overrides: Iterable[Mapping[str, Any]]) -> Operation:
    """Collapse partial operations left to right; later fields win."""
    base: Operation = {}
    for patch in overrides:
        base = overlay(base, patch)
    return copy.deepcopy(base)


def merge_operation(overrides: Iterable[Mapping[str, Any]], generated: Mapping[str, Any]) -> Operation:
    """Final operation: folded *overrides* win, *generated* fills the gaps."""
    base = fold_overrides(overrides)
    return copy.deepcopy(overlay(generated, base))
