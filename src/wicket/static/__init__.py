"""Static asset serving, diverted before routing."""

from wicket.static.files import StaticFiles

__all__ = ["StaticFiles"]
