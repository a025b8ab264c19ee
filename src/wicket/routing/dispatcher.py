"""Dispatch — first-match-wins selection of a route entry.

Two layers:

- ``dispatch(table, method, path)`` scans one table's sequence for the
  method in registration order.
- ``Router`` holds every frozen table and picks the one whose route is
  the longest prefix of the request path before dispatching into it.
"""

import logging
from collections.abc import Iterable

from wicket.errors import ConfigurationError, MethodNotAllowed, NotFound
from wicket.routing.route import METHODS, RouteEntry, RouteMatch
from wicket.routing.table import RouteTable

logger = logging.getLogger("wicket.server")

ROOT = "/"


def match_entry(entry: RouteEntry, route: str, path: str) -> tuple[str, ...] | None:
    """Return captures if *entry* accepts *path*, else ``None``.

    A literal entry accepts only the table's route string itself. A
    wildcard entry accepts a path the pattern matches with at least one
    capture, and never the bare root ``/``.
    """
    if entry.pattern is None:
        return () if path == route else None
    captures = entry.pattern.match(path)
    if not captures or path == ROOT:
        return None
    return captures


def dispatch(table: RouteTable, method: str, path: str) -> RouteMatch:
    """Select the first entry of *table* that matches *method* and *path*.

    Raises ``MethodNotAllowed`` for a verb outside the supported five,
    without consulting the table. Raises ``NotFound`` when the scan
    finishes without a match.
    """
    verb = method.upper()
    if verb not in METHODS:
        raise MethodNotAllowed(method)

    for entry in table.lookup(verb):
        captures = match_entry(entry, table.route, path)
        if captures is not None:
            return RouteMatch(entry=entry, captures=captures)

    raise NotFound(f"No route matches {verb} {path!r}")


class Router:
    """All frozen route tables, keyed by route string.

    Usage::

        router = Router([users_table, files_table])
        match = router.match("GET", "/users/42")

    Table selection is by longest string prefix, the way an HTTP server
    picks a context for a request path. Within the selected table,
    registration order decides.
    """

    __slots__ = ("_ordered", "_tables")

    def __init__(self, tables: Iterable[RouteTable] = ()) -> None:
        self._tables: dict[str, RouteTable] = {}
        for table in tables:
            if table.route in self._tables:
                msg = f"Duplicate route table for {table.route!r}."
                raise ConfigurationError(msg)
            self._tables[table.route] = table
        # Longest route first so the first prefix hit is the most specific
        self._ordered: tuple[RouteTable, ...] = tuple(
            sorted(self._tables.values(), key=lambda t: len(t.route), reverse=True)
        )

    @property
    def tables(self) -> tuple[RouteTable, ...]:
        """Tables in registration order."""
        return tuple(self._tables.values())

    def table_for(self, path: str) -> RouteTable | None:
        """Return the table whose route is the longest prefix of *path*."""
        for table in self._ordered:
            if path.startswith(table.route):
                return table
        return None

    def match(self, method: str, path: str) -> RouteMatch:
        """Select a table by prefix and dispatch into it.

        Raises ``MethodNotAllowed`` or ``NotFound`` like ``dispatch()``.
        """
        if method.upper() not in METHODS:
            raise MethodNotAllowed(method)
        table = self.table_for(path)
        if table is None:
            raise NotFound(f"No route table for {path!r}")
        logger.debug("%s %s -> table %r", method, path, table.route)
        return dispatch(table, method, path)
