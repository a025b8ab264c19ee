"""RouteEntry and RouteMatch frozen dataclasses, plus the handler bundle protocol."""

from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

from wicket._internal.types import Handler
from wicket.routing.pattern import CompiledPattern

# Supported verbs, in the order tables list them
METHODS: tuple[str, ...] = ("GET", "POST", "PUT", "DELETE", "PATCH")


@dataclass(frozen=True, slots=True)
class RouteEntry:
    """One registered handler for a single HTTP method.

    Created at registration time, owned by the RouteTable that holds it.
    ``pattern=None`` means the entry only matches the table's own route
    string exactly.
    """

    params: tuple[str, ...]
    pattern: CompiledPattern | None
    handler: Handler

    @property
    def is_literal(self) -> bool:
        return self.pattern is None


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Result of a successful dispatch.

    Captures travel with the match so concurrent requests never share
    wildcard state.
    """

    entry: RouteEntry
    captures: tuple[str, ...] = ()

    @property
    def path_params(self) -> dict[str, str]:
        """Declared parameter names bound to captures by position."""
        return bind_path_params(self.entry.params, self.captures)


def bind_path_params(names: tuple[str, ...], captures: tuple[str, ...]) -> dict[str, str]:
    """Zip declared names to captures by index.

    Count mismatches are tolerated: extra captures are dropped and
    names without a capture are left unbound.
    """
    return dict(zip(names, captures, strict=False))


@runtime_checkable
class HandlerBundle(Protocol):
    """An object with one handler method per supported verb.

    Used with ``RouteTableBuilder.attach()`` to register the same pattern
    for all five methods at once::

        class Users:
            def get(self, request, response): ...
            def post(self, request, response): ...
            def put(self, request, response): ...
            def delete(self, request, response): ...
            def patch(self, request, response): ...
    """

    def get(self, request: Any, response: Any) -> Any: ...
    def post(self, request: Any, response: Any) -> Any: ...
    def put(self, request: Any, response: Any) -> Any: ...
    def delete(self, request: Any, response: Any) -> Any: ...
    def patch(self, request: Any, response: Any) -> Any: ...


def disallow(request: Any, response: Any) -> None:  # noqa: ARG001
    """Handler that answers 405 for a verb a bundle does not implement."""
    response.disallow_method()


class Resource:
    """Base class for handler bundles.

    Every verb answers 405 until overridden::

        class Users(Resource):
            def get(self, request, response):
                response.send(f"user {request.path_params['id']}")

        app.route("/users").attach(Users(), ["id"], "/users/*")
    """

    def get(self, request: Any, response: Any) -> Any:
        disallow(request, response)

    def post(self, request: Any, response: Any) -> Any:
        disallow(request, response)

    def put(self, request: Any, response: Any) -> Any:
        disallow(request, response)

    def delete(self, request: Any, response: Any) -> Any:
        disallow(request, response)

    def patch(self, request: Any, response: Any) -> Any:
        disallow(request, response)
