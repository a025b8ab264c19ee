"""Kida environment setup.

Creates a kida Environment from wicket's AppConfig. The environment is
created once when the app freezes and handed to every ``Response`` so
handlers can call ``response.render("page.html", name=...)``.
"""

from kida import Environment, FileSystemLoader

from wicket.config import AppConfig


def create_environment(config: AppConfig) -> Environment:
    """Create a kida Environment rooted at ``config.template_dir``.

    The returned environment is shared read-only across requests.
    """
    return Environment(
        loader=FileSystemLoader(str(config.template_dir)),
        autoescape=config.autoescape,
        auto_reload=config.debug,
    )
