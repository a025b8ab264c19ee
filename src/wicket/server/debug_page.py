"""Self-contained failure page renderer.

Renders the 500 page without depending on kida or any user template,
using plain f-strings so a broken template setup cannot prevent error
reporting.

The page shows:
- Exception type and message
- Traceback with source context, locals, and app-frame highlighting
- Request context (method, path, path params, wildcards, headers)
- Editor-clickable file:line links (via WICKET_EDITOR env var)

With ``include_trace=False`` only the status and message are rendered.
The trace leaks internals to the client, so only trusted deployments
should leave it on.
"""

import html
import linecache
import os
import types
from typing import Any

# ---------------------------------------------------------------------------
# Editor link support
# ---------------------------------------------------------------------------

_EDITOR_PRESETS: dict[str, str] = {
    "vscode": "vscode://file/__FILE__:__LINE__",
    "cursor": "cursor://file/__FILE__:__LINE__",
    "sublime": "subl://open?url=file://__FILE__&line=__LINE__",
    "pycharm": "pycharm://open?file=__FILE__&line=__LINE__",
}


def _editor_url(filepath: str, lineno: int) -> str | None:
    """Build a clickable editor URL from the WICKET_EDITOR env var.

    Accepts a preset name or a custom pattern with ``__FILE__`` and
    ``__LINE__`` placeholders. Returns ``None`` if the variable is unset.
    """
    pattern = os.environ.get("WICKET_EDITOR", "")
    if not pattern:
        return None
    pattern = _EDITOR_PRESETS.get(pattern.lower(), pattern)
    return pattern.replace("__FILE__", filepath).replace("__LINE__", str(lineno))


# ---------------------------------------------------------------------------
# Frame extraction
# ---------------------------------------------------------------------------


def _is_app_frame(filename: str) -> bool:
    """True if the frame is from the application (not stdlib/site-packages)."""
    if "site-packages" in filename:
        return False
    if filename.startswith("<"):
        return False
    stdlib_prefix = os.path.dirname(os.__file__)
    return not filename.startswith(stdlib_prefix)


def _extract_frames(tb: types.TracebackType | None) -> list[dict[str, Any]]:
    """Walk a traceback and extract frame info with source context and locals."""
    frames: list[dict[str, Any]] = []
    while tb is not None:
        frame = tb.tb_frame
        lineno = tb.tb_lineno
        filename = frame.f_code.co_filename

        # Source context: 3 lines either side
        source_lines: list[tuple[int, str]] = []
        for i in range(max(1, lineno - 3), lineno + 4):
            line = linecache.getline(filename, i, frame.f_globals)
            if line:
                source_lines.append((i, line.rstrip()))

        local_vars: dict[str, str] = {}
        for name, value in frame.f_locals.items():
            if name.startswith("__") and name.endswith("__"):
                continue
            try:
                r = repr(value)
            except Exception:
                r = "<unrepresentable>"
            if len(r) > 200:
                r = r[:197] + "..."
            local_vars[name] = r

        frames.append({
            "filename": filename,
            "lineno": lineno,
            "func_name": frame.f_code.co_name,
            "source_lines": source_lines,
            "locals": local_vars,
            "is_app": _is_app_frame(filename),
        })
        tb = tb.tb_next

    return frames


# ---------------------------------------------------------------------------
# Request context extraction
# ---------------------------------------------------------------------------

# Headers whose values are masked on the page
_SENSITIVE_HEADERS = frozenset({
    "authorization",
    "cookie",
    "proxy-authorization",
    "x-api-key",
    "x-auth-token",
})


def _extract_request_context(request: Any) -> dict[str, Any]:
    """Extract displayable request context from a Request (or look-alike)."""
    ctx: dict[str, Any] = {
        "method": getattr(request, "method", "?"),
        "path": getattr(request, "path", "?"),
    }

    path_params = getattr(request, "path_params", None)
    if path_params:
        ctx["path_params"] = dict(path_params)

    wildcards = getattr(request, "wildcards", None)
    if wildcards:
        ctx["wildcards"] = list(wildcards)

    headers = getattr(request, "headers", None)
    if headers:
        masked: list[tuple[str, str]] = []
        for name, value in headers.items():
            if str(name).lower() in _SENSITIVE_HEADERS:
                masked.append((str(name), "••••••••"))
            else:
                masked.append((str(name), str(value)))
        ctx["headers"] = masked

    return ctx


# ---------------------------------------------------------------------------
# HTML builders
# ---------------------------------------------------------------------------

_CSS = """\
* { margin: 0; padding: 0; box-sizing: border-box; }
body { font-family: ui-monospace, Menlo, Consolas, monospace; background: #1a1b26;
       color: #a9b1d6; line-height: 1.6; padding: 2rem; font-size: 14px; }
.error-page { max-width: 960px; margin: 0 auto; }
h1 { color: #f7768e; font-size: 1.4rem; }
h2 { color: #7aa2f7; font-size: 1.1rem; margin: 1.5rem 0 0.5rem;
     border-bottom: 1px solid #2f3549; padding-bottom: 0.3rem; }
h3 { color: #bb9af7; font-size: 0.95rem; margin-bottom: 0.5rem; }
.exc-message { color: #e0af68; font-size: 1rem; margin-bottom: 1rem; white-space: pre-wrap; }
.frame { margin: 0.5rem 0; border: 1px solid #2f3549; border-radius: 6px; overflow: hidden; }
.frame.app-frame { border-color: #7aa2f7; }
.frame-header { padding: 0.4rem 0.8rem; background: #24283b; font-size: 0.85rem;
                display: flex; justify-content: space-between; }
.frame-header a { color: #7dcfff; }
.frame-header .func { color: #bb9af7; }
.frame-header .app-badge { color: #9ece6a; font-size: 0.75rem; margin-left: 0.5rem; }
.source-line { display: flex; padding: 0 0.8rem; font-size: 0.82rem; }
.source-line .lineno { color: #565f89; min-width: 3.5rem; text-align: right; padding-right: 1rem; }
.source-line .code { white-space: pre; }
.source-line.error-line { background: rgba(247, 118, 142, 0.15); }
details.locals { padding: 0.3rem 0.8rem; font-size: 0.8rem; border-top: 1px solid #2f3549; }
.local-var { display: flex; gap: 0.5rem; }
.local-var .name { color: #7dcfff; min-width: 120px; }
.request-line { display: flex; gap: 0.5rem; font-size: 0.85rem; }
.request-line .label { color: #7aa2f7; min-width: 140px; }
"""


def _esc(text: object) -> str:
    """HTML-escape a value."""
    return html.escape(str(text), quote=True)


def _render_frame(frame: dict[str, Any]) -> str:
    """Render a single traceback frame."""
    filename = frame["filename"]
    lineno = frame["lineno"]

    location = f"{_esc(filename)}:{lineno}"
    editor_link = _editor_url(filename, lineno)
    if editor_link:
        location = f'<a href="{_esc(editor_link)}">{location}</a>'

    app_badge = ' <span class="app-badge">APP</span>' if frame["is_app"] else ""
    frame_cls = "frame app-frame" if frame["is_app"] else "frame"

    source = "".join(
        f'<div class="source-line{" error-line" if n == lineno else ""}">'
        f'<span class="lineno">{n}</span><span class="code">{_esc(code)}</span></div>'
        for n, code in frame["source_lines"]
    )
    locals_html = ""
    if frame["locals"]:
        items = "".join(
            f'<div class="local-var"><span class="name">{_esc(name)}</span>'
            f'<span class="value">{_esc(value)}</span></div>'
            for name, value in frame["locals"].items()
        )
        locals_html = f'<details class="locals"><summary>locals</summary>{items}</details>'

    return (
        f'<div class="{frame_cls}">'
        f'<div class="frame-header"><span>{location}</span>'
        f'<span><span class="func">{_esc(frame["func_name"])}</span>{app_badge}</span></div>'
        f'<div class="source">{source}</div>{locals_html}</div>'
    )


def _render_request(ctx: dict[str, Any]) -> str:
    """Render the request context panel."""
    lines = [
        ("Method", ctx["method"]),
        ("Path", ctx["path"]),
    ]
    if "path_params" in ctx:
        lines.append(("Path params", ", ".join(f"{k}={v}" for k, v in ctx["path_params"].items())))
    if "wildcards" in ctx:
        lines.append(("Wildcards", ", ".join(repr(w) for w in ctx["wildcards"])))
    lines.extend((f"Header {name}", value) for name, value in ctx.get("headers", ()))
    return "".join(
        f'<div class="request-line"><span class="label">{_esc(label)}</span>'
        f'<span class="val">{_esc(value)}</span></div>'
        for label, value in lines
    )


def render_failure_page(
    exc: BaseException,
    request: Any = None,
    *,
    include_trace: bool = True,
) -> str:
    """Render the 500 page for a handler failure as a complete HTML document."""
    parts: list[str] = [
        '<div class="error-page">',
        "<h1>500</h1><h3>(Internal Server Error)</h3>",
        f'<div class="exc-message">{_esc(type(exc).__qualname__)}: {_esc(exc)}</div>',
    ]

    if include_trace:
        frames = _extract_frames(exc.__traceback__)
        if frames:
            parts.append("<h2>Traceback</h2>")
            parts.extend(_render_frame(f) for f in frames)
        if request is not None:
            parts.append("<h2>Request</h2>")
            parts.append(_render_request(_extract_request_context(request)))

    parts.append("</div>")
    body = "".join(parts)
    return (
        "<!DOCTYPE html>\n<html>\n<head>\n"
        '<meta charset="utf-8">\n'
        "<title>Internal Server Error</title>\n"
        f"<style>{_CSS}</style>\n"
        f"</head>\n<body>\n{body}\n</body>\n</html>\n"
    )
