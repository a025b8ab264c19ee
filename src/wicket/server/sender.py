"""ASGI reply sending — translates a Reply into ASGI messages."""

from wicket._internal.asgi import Send
from wicket.http.response import Reply

# Set on every reply, whatever produced it
CACHE_CONTROL = (b"cache-control", b"no-cache")


def _body_allowed(status: int) -> bool:
    """Whether an HTTP status code permits a response body."""
    # RFC: 1xx, 204, and 304 responses do not include a message body.
    return not (100 <= status < 200 or status in {204, 304})


async def send_reply(reply: Reply, send: Send, *, head: bool = False) -> None:
    """Write *reply* as one ``http.response.start`` and one body message.

    For HEAD requests the body is dropped but ``content-length`` still
    reports its size.
    """
    raw_headers: list[tuple[bytes, bytes]] = [CACHE_CONTROL]
    if reply.content_type:
        raw_headers.append((b"content-type", reply.content_type.encode("latin-1")))
    for name, value in reply.headers:
        lowered = name.lower()
        if lowered in ("cache-control", "content-length"):
            continue
        raw_headers.append((lowered.encode("latin-1"), value.encode("latin-1")))

    body = reply.body_bytes if _body_allowed(reply.status) else b""
    raw_headers.append((b"content-length", str(len(body)).encode("latin-1")))

    await send(
        {
            "type": "http.response.start",
            "status": reply.status,
            "headers": raw_headers,
        }
    )
    await send(
        {
            "type": "http.response.body",
            "body": b"" if head else body,
        }
    )
