"""Write a burrow Response to an ASGI ``send`` callable."""

from burrow._internal.asgi import Send
from burrow.http.response import Response

# Statuses that never carry a message body
_BODYLESS_STATUSES = frozenset({204, 304})


def _encode(value: str) -> bytes:
    return value.encode("latin-1")


def body_permitted(status: int) -> bool:
    return status >= 200 and status not in _BODYLESS_STATUSES


async def send_response(response: Response, send: Send, *, head: bool = False) -> None:
    """Emit ``http.response.start`` then a single ``http.response.body``.

    ``Content-Length`` is computed from the body unless the response
    already sets one (static assets answering HEAD do).  With *head* the
    headers go out unchanged and the body is left empty.
    """
    body = response.body_bytes if body_permitted(response.status) else b""

    headers = [(b"content-type", _encode(response.content_type))]
    headers.extend((_encode(name.lower()), _encode(value)) for name, value in response.headers)
    if not any(name == b"content-length" for name, _ in headers):
        headers.append((b"content-length", _encode(str(len(body)))))

    await send({"type": "http.response.start", "status": response.status, "headers": headers})
    await send({"type": "http.response.body", "body": b"" if head else body})
