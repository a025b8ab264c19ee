"""Route tables and their fluent builder.

A table belongs to one registered route string and holds five ordered
entry sequences, one per supported method. Tables are assembled through
``RouteTableBuilder`` during setup and frozen by ``build()``; the frozen
``RouteTable`` is shared read-only by every request.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

from wicket._internal.types import Handler
from wicket.errors import ConfigurationError
from wicket.routing.pattern import compile_pattern
from wicket.routing.route import METHODS, RouteEntry, disallow


@dataclass(frozen=True, slots=True)
class RouteTable:
    """A frozen per-route handler table.

    Registration order within each method's sequence is preserved and
    significant: dispatch returns the first entry that matches.
    """

    route: str
    handlers: Mapping[str, tuple[RouteEntry, ...]]

    def lookup(self, method: str) -> tuple[RouteEntry, ...]:
        """Return the ordered entries for *method* (empty if unsupported)."""
        return self.handlers.get(method, ())

    def entries(self) -> Iterator[tuple[str, RouteEntry]]:
        """Yield ``(method, entry)`` pairs in method then registration order."""
        for method in METHODS:
            for entry in self.lookup(method):
                yield method, entry

    def __len__(self) -> int:
        return sum(len(seq) for seq in self.handlers.values())


class RouteTableBuilder:
    """Mutable, chainable registration handle for one route.

    Usage::

        (
            app.route("/users")
            .get(list_users)
            .post(create_user)
            .get(show_user, ["id"], "/users/*")
        )

    Each registration method returns the same builder. ``build()``
    freezes the entries into a ``RouteTable``; after that the builder
    rejects further registrations.
    """

    __slots__ = ("_built", "_handlers", "route")

    def __init__(self, route: str) -> None:
        if not isinstance(route, str) or not route.startswith("/"):
            msg = f"Route must be a string starting with '/', got {route!r}."
            raise ConfigurationError(msg)
        self.route = route
        self._handlers: dict[str, list[RouteEntry]] = {m: [] for m in METHODS}
        self._built: RouteTable | None = None

    # -- Registration --

    def register(
        self,
        method: str,
        handler: Handler,
        params: Iterable[str] | None = (),
        pattern: str | None = None,
    ) -> RouteTableBuilder:
        """Append an entry to *method*'s sequence.

        No deduplication or conflict detection: a later entry whose
        pattern is shadowed by an earlier one is simply unreachable.
        """
        if self._built is not None:
            msg = (
                f"Route table {self.route!r} is already built. "
                "Register handlers before the app starts serving."
            )
            raise ConfigurationError(msg)
        verb = method.upper()
        if verb not in self._handlers:
            msg = f"Unsupported method {method!r}; expected one of {', '.join(METHODS)}."
            raise ConfigurationError(msg)
        if not callable(handler):
            msg = f"Handler for {verb} {self.route!r} is not callable: {handler!r}."
            raise ConfigurationError(msg)
        params = _normalize_params(params)
        entry = RouteEntry(
            params=tuple(params),
            pattern=compile_pattern(pattern) if pattern is not None else None,
            handler=handler,
        )
        self._handlers[verb].append(entry)
        return self

    def get(
        self, handler: Handler, params: Iterable[str] | None = (), pattern: str | None = None
    ) -> RouteTableBuilder:
        """Register a GET handler."""
        return self.register("GET", handler, params, pattern)

    def post(
        self, handler: Handler, params: Iterable[str] | None = (), pattern: str | None = None
    ) -> RouteTableBuilder:
        """Register a POST handler."""
        return self.register("POST", handler, params, pattern)

    def put(
        self, handler: Handler, params: Iterable[str] | None = (), pattern: str | None = None
    ) -> RouteTableBuilder:
        """Register a PUT handler."""
        return self.register("PUT", handler, params, pattern)

    def delete(
        self, handler: Handler, params: Iterable[str] | None = (), pattern: str | None = None
    ) -> RouteTableBuilder:
        """Register a DELETE handler."""
        return self.register("DELETE", handler, params, pattern)

    def patch(
        self, handler: Handler, params: Iterable[str] | None = (), pattern: str | None = None
    ) -> RouteTableBuilder:
        """Register a PATCH handler."""
        return self.register("PATCH", handler, params, pattern)

    def attach(
        self, bundle: Any, params: Iterable[str] | None = (), pattern: str | None = None
    ) -> RouteTableBuilder:
        """Register *bundle*'s per-verb methods for all five methods.

        A verb the bundle does not define answers 405.
        """
        params = _normalize_params(params)
        for method in METHODS:
            handler = getattr(bundle, method.lower(), None) or disallow
            self.register(method, handler, params, pattern)
        return self

    # -- Freeze --

    def build(self) -> RouteTable:
        """Freeze the registered entries. Idempotent."""
        if self._built is None:
            self._built = RouteTable(
                route=self.route,
                handlers=MappingProxyType(
                    {method: tuple(seq) for method, seq in self._handlers.items()}
                ),
            )
        return self._built

    @property
    def is_built(self) -> bool:
        return self._built is not None


def _normalize_params(params: Iterable[str] | None) -> tuple[str, ...]:
    """Declared names as a tuple. ``None`` means no names."""
    if params is None:
        return ()
    if isinstance(params, str):
        # A bare string would otherwise be split into characters
        return (params,)
    try:
        names = tuple(params)
    except TypeError:
        msg = f"Route params must be an iterable of names, got {params!r}."
        raise ConfigurationError(msg) from None
    for name in names:
        if not isinstance(name, str):
            msg = f"Route param names must be strings, got {name!r}."
            raise ConfigurationError(msg)
    return names
