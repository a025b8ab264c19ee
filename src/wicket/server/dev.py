"""Server startup.

Starts a pounce ASGI server with the live wicket App object.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from wicket.app import App

logger = logging.getLogger("wicket.server")


def run_server(
    app: App,
    host: str,
    port: int,
    *,
    workers: int = 1,
    reload: bool = False,
) -> None:
    """Serve *app* with pounce until interrupted.

    Pounce's ``run()`` takes an import string (e.g., ``"myapp:app"``),
    but we hold a live ``App`` object, so ``pounce.Server`` is used
    directly with the ASGI callable.
    """
    from pounce.config import ServerConfig
    from pounce.server import Server

    config = ServerConfig(
        host=host,
        port=port,
        workers=workers,
        reload=reload,
    )
    logger.info("Serving %d route table(s) on http://%s:%d", len(app.tables), host, port)
    Server(config, app).run()
