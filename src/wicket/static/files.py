"""Static file serving for a URL prefix.

Any request whose path starts with the prefix is answered here and never
reaches the route tables:

- GET/HEAD, readable file: 200 with the raw bytes and a guessed content type
- missing or unreadable file, directory, or a path escaping the directory:
  404 ``File not found``
- ``OSError`` while reading: 500 with an empty body
- any other method: 405
"""

import logging
import mimetypes
from pathlib import Path

from wicket.http.response import Reply
from wicket.server.finalizer import method_not_allowed_reply

logger = logging.getLogger("wicket.static")

FILE_NOT_FOUND = "File not found"


class StaticFiles:
    """Serves files from a directory for paths under a URL prefix.

    Security: resolves symlinks and verifies the final path is within
    the configured directory to prevent path traversal.

    Usage::

        static = StaticFiles(directory="./static", prefix="/static")
        if static.handles(path):
            reply = static.serve(method, path)
    """

    __slots__ = ("_directory", "_prefix")

    def __init__(self, directory: str | Path, prefix: str = "/static") -> None:
        self._directory = Path(directory).resolve()
        # Normalize prefix: ensure leading slash, strip trailing
        self._prefix = "/" + prefix.strip("/")

    @property
    def prefix(self) -> str:
        return self._prefix

    @property
    def directory(self) -> Path:
        return self._directory

    def handles(self, path: str) -> bool:
        """True if *path* falls under the static prefix."""
        return path == self._prefix or path.startswith(self._prefix + "/")

    def serve(self, method: str, path: str) -> Reply:
        """Answer a request already known to be under the prefix."""
        if method.upper() not in ("GET", "HEAD"):
            return method_not_allowed_reply()

        relative = path[len(self._prefix) :].lstrip("/")
        file_path = (self._directory / relative).resolve()
        if not file_path.is_relative_to(self._directory) or not file_path.is_file():
            return _not_found()

        try:
            body = file_path.read_bytes()
        except (FileNotFoundError, PermissionError):
            return _not_found()
        except OSError:
            logger.exception("Failed to read static file %s", file_path)
            return Reply(status=500, body=b"", content_type=None)

        content_type, _ = mimetypes.guess_type(file_path.name)
        return Reply(status=200, body=body, content_type=content_type or "application/octet-stream")


def _not_found() -> Reply:
    return Reply(status=404, body=FILE_NOT_FOUND, content_type="text/plain; charset=utf-8")
