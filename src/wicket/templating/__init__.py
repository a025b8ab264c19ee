"""Kida template environment for ``Response.render()``."""

from wicket.templating.integration import create_environment

__all__ = ["create_environment"]
