"""Shared type aliases used across routedoc modules."""

from collections.abc import Callable
from typing import Any, TypeAlias

# Route handler — one link of a handler chain
Handler: TypeAlias = Callable[..., Any]

# A documented operation or a partial override of one (JSON-like)
Operation: TypeAlias = dict[str, Any]
