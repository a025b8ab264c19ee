"""Shared type aliases used across wicket modules."""

from collections.abc import Callable
from typing import Any, TypeAlias

# Route handler: receives (request, response) and populates the response
Handler: TypeAlias = Callable[[Any, Any], Any]
