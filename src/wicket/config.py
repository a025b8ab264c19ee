"""Application configuration.

AppConfig is a frozen dataclass: immutable after creation and autocompletable,
no string-key dict lookups.
"""

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Application configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = AppConfig(debug=True, port=3000, static_dir="public")
    """

    # Server
    host: str = "127.0.0.1"
    port: int = 8000
    debug: bool = False
    workers: int = 1
    reload: bool = False

    # Static files (diverted before routing). None disables diversion.
    static_dir: str | Path | None = "static"
    static_url: str = "/static"

    # Templates
    template_dir: str | Path = "templates"
    autoescape: bool = True

    # Failure pages include the stack trace. Turn off outside trusted networks.
    expose_tracebacks: bool = True

    # Logging
    access_log: bool = True
    log_level: str = "info"

    # Limits
    max_content_length: int = 16 * 1024 * 1024  # 16 MB
