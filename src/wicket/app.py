"""Wicket application class.

Mutable during setup (route tables, lifecycle hooks).
Frozen at runtime when app.run() or __call__() is first invoked.
"""

import inspect
import logging
import threading
from collections.abc import Callable
from typing import Any

from kida import Environment

from wicket._internal.asgi import Receive, Scope, Send
from wicket.config import AppConfig
from wicket.errors import ConfigurationError
from wicket.routing.dispatcher import Router
from wicket.routing.table import RouteTable, RouteTableBuilder
from wicket.server.handler import handle_request
from wicket.static import StaticFiles
from wicket.templating import create_environment

logger = logging.getLogger("wicket.server")


class App:
    """The wicket application.

    Usage::

        app = App()

        def show_user(request, response):
            response.send(f"user {request.param('id')}")

        app.route("/users").get(show_user, ["id"], "/users/*")
        app.run()

    Thread safety:
        Setup is single-threaded (module import time). The freeze
        transition uses a Lock + double-check so exactly one thread builds
        the route tables, even if several ASGI workers call ``__call__()``
        concurrently on the first request. After that every table is
        read-only.
    """

    __slots__ = (
        "_builders",
        "_freeze_lock",
        "_frozen",
        "_kida_env",
        # Compiled state (populated by _freeze)
        "_router",
        "_shutdown_hooks",
        "_startup_hooks",
        "_static",
        "config",
    )

    def __init__(self, config: AppConfig | None = None) -> None:
        self.config: AppConfig = config or AppConfig()
        self._builders: dict[str, RouteTableBuilder] = {}
        self._startup_hooks: list[Callable[..., Any]] = []
        self._shutdown_hooks: list[Callable[..., Any]] = []
        self._frozen: bool = False
        self._freeze_lock: threading.Lock = threading.Lock()

        # Compiled state, set during _freeze()
        self._router: Router | None = None
        self._static: StaticFiles | None = None
        self._kida_env: Environment | None = None

    # -- Route registration --

    def route(self, path: str) -> RouteTableBuilder:
        """Return the registration handle for the route table at *path*.

        Calling ``route()`` again with the same path returns the same
        builder, so registrations can be spread across modules.
        """
        self._check_not_frozen()
        builder = self._builders.get(path)
        if builder is None:
            builder = RouteTableBuilder(path)
            self._builders[path] = builder
        return builder

    @property
    def tables(self) -> tuple[RouteTable, ...]:
        """The frozen route tables (freezes the app if needed)."""
        self._ensure_frozen()
        assert self._router is not None
        return self._router.tables

    @property
    def router(self) -> Router:
        self._ensure_frozen()
        assert self._router is not None
        return self._router

    # -- Lifecycle hooks --

    def on_startup(self, func: Callable[..., Any]) -> Callable[..., Any]:
        """Register an async or sync startup hook via decorator.

        Hooks run in registration order during ASGI lifespan startup,
        before the server begins accepting HTTP requests.
        """
        self._check_not_frozen()
        self._startup_hooks.append(func)
        return func

    def on_shutdown(self, func: Callable[..., Any]) -> Callable[..., Any]:
        """Register an async or sync shutdown hook via decorator."""
        self._check_not_frozen()
        self._shutdown_hooks.append(func)
        return func

    # -- Server --

    def run(self, host: str | None = None, port: int | None = None) -> None:
        """Freeze the route tables and start serving.

        Args:
            host: Override bind host.
            port: Override bind port.
        """
        logging.basicConfig(
            level=self.config.log_level.upper(),
            format="%(message)s",
        )
        self._ensure_frozen()

        from wicket.server.dev import run_server

        run_server(
            self,
            host or self.config.host,
            port or self.config.port,
            workers=self.config.workers,
            reload=self.config.reload,
        )

    # -- ASGI interface --

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI 3.0 entry point.

        Handles lifespan scopes directly, then delegates HTTP scopes to
        the request pipeline.
        """
        if scope["type"] == "lifespan":
            await self._handle_lifespan(scope, receive, send)
            return

        self._ensure_frozen()

        assert self._router is not None

        await handle_request(
            scope,
            receive,
            send,
            router=self._router,
            config=self.config,
            static=self._static,
            env=self._kida_env,
        )

    async def _handle_lifespan(self, scope: Scope, receive: Receive, send: Send) -> None:
        """Run the ASGI lifespan protocol."""
        while True:
            message = await receive()
            msg_type = message["type"]

            if msg_type == "lifespan.startup":
                try:
                    self._ensure_frozen()
                    await self.startup()
                except Exception as exc:
                    logger.exception("Startup failed")
                    await send({"type": "lifespan.startup.failed", "message": str(exc)})
                    return
                await send({"type": "lifespan.startup.complete"})

            elif msg_type == "lifespan.shutdown":
                try:
                    await self.shutdown()
                except Exception as exc:
                    logger.exception("Shutdown failed")
                    await send({"type": "lifespan.shutdown.failed", "message": str(exc)})
                    return
                await send({"type": "lifespan.shutdown.complete"})
                return

    async def startup(self) -> None:
        """Run startup hooks in registration order."""
        for hook in self._startup_hooks:
            result = hook()
            if inspect.isawaitable(result):
                await result

    async def shutdown(self) -> None:
        """Run shutdown hooks in registration order."""
        for hook in self._shutdown_hooks:
            result = hook()
            if inspect.isawaitable(result):
                await result

    # -- Internal --

    def _ensure_frozen(self) -> None:
        """Thread-safe freeze with double-check locking."""
        if self._frozen:
            return
        with self._freeze_lock:
            if self._frozen:
                return
            self._freeze()

    def _freeze(self) -> None:
        """Compile the app into its frozen runtime state.

        MUST only be called while holding _freeze_lock.
        """
        # 1. Freeze every route table
        self._router = Router(builder.build() for builder in self._builders.values())

        # 2. Static diversion, if a directory is configured
        if self.config.static_dir is not None:
            self._static = StaticFiles(self.config.static_dir, self.config.static_url)

        # 3. Template environment for Response.render()
        self._kida_env = create_environment(self.config)

        self._frozen = True

    def _check_not_frozen(self) -> None:
        if self._frozen:
            msg = (
                "Cannot modify the app after it has started serving requests. "
                "Register route tables and hooks before calling app.run()."
            )
            raise ConfigurationError(msg)
