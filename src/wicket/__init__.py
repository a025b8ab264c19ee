"""Wicket — a per-path request router in front of an ASGI transport.

Route tables hold ordered handlers per HTTP method. Paths are matched
literally or through ``*`` wildcard patterns, the first matching entry
wins, and whatever the handler does (respond, redirect, refuse the
method, raise) becomes exactly one HTTP reply.

Basic usage::

    from wicket import App

    app = App()

    def hello(request, response):
        response.send("Hello, World!")

    def show_user(request, response):
        response.json({"id": request.param("id")})

    app.route("/").get(hello)
    app.route("/users").get(show_user, ["id"], "/users/*")

    app.run()
"""

__version__ = "0.1.0"
__all__ = [
    "App",
    "AppConfig",
    "ConfigurationError",
    "HTTPError",
    "InvalidPatternError",
    "MethodNotAllowed",
    "NotFound",
    "Reply",
    "Request",
    "Resource",
    "Response",
    "WicketError",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import wicket`` fast while providing a clean top-level API.
    """
    if name == "App":
        from wicket.app import App

        return App

    if name == "AppConfig":
        from wicket.config import AppConfig

        return AppConfig

    if name == "Request":
        from wicket.http.request import Request

        return Request

    if name in ("Response", "Reply"):
        from wicket.http import response as _resp

        return getattr(_resp, name)

    if name == "Resource":
        from wicket.routing.route import Resource

        return Resource

    if name in (
        "ConfigurationError",
        "HTTPError",
        "InvalidPatternError",
        "MethodNotAllowed",
        "NotFound",
        "WicketError",
    ):
        from wicket import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
