r"""Request body rewinding before a retry.

A retried request is sent again with the same ``httpx.Request`` object.
In-memory bodies can be re-read as-is, but bodies backed by file-like
objects (multipart file fields or a file passed as ``content``) must be
moved back to their first byte, otherwise the retry would send a
truncated or empty body.

Async bodies may expose ``seek``/``rewind`` as coroutines; the async
variants await them.
"""

from __future__ import annotations

__all__ = [
    "arewind_part",
    "arewind_request",
    "iter_rewindable_parts",
    "rewind_part",
    "rewind_request",
]

import inspect
import logging
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator

    import httpx

logger: logging.Logger = logging.getLogger(__name__)


def iter_rewindable_parts(stream: Any) -> Iterator[Any]:
    """Iterate over the file-like parts of a request stream.

    Args:
        stream: The request stream (``request.stream``).

    Yields:
        The objects backing the stream that may need rewinding: the file
        of every multipart file field, or the object wrapped by an
        iterator stream (e.g. a file passed as ``content``).
    """
    # Multipart streams list their fields; only file fields carry ``file``.
    fields = getattr(stream, "fields", None)
    if fields is not None:
        for field in fields:
            file = getattr(field, "file", None)
            if file is not None:
                yield file
        return

    # Iterator streams keep the wrapped content in ``_stream``.
    inner = getattr(stream, "_stream", None)
    if inner is not None:
        yield inner


def _find_rewinder(part: Any) -> Callable[[], Any] | None:
    rewind = getattr(part, "rewind", None)
    if callable(rewind):
        return rewind
    seek = getattr(part, "seek", None)
    if callable(seek):
        return lambda: seek(0)
    return None


def rewind_part(part: Any) -> bool:
    """Move a body part back to its start.

    Parts exposing ``rewind()`` are rewound with it, otherwise parts
    exposing ``seek()`` are moved to position 0. Any error raised while
    rewinding propagates.

    Args:
        part: The body part.

    Returns:
        ``True`` if the part was rewound, ``False`` if it has no rewind
        capability (e.g. bytes or a generator).

    Raises:
        TypeError: If the part rewinds asynchronously. Use
            ``arewind_part`` for async bodies.

    Example:
        ```pycon
        >>> from io import BytesIO
        >>> from retryx.utils.rewind import rewind_part
        >>> buffer = BytesIO(b"payload")
        >>> buffer.read()
        b'payload'
        >>> rewind_part(buffer)
        True
        >>> buffer.read()
        b'payload'
        >>> rewind_part(b"payload")
        False

        ```
    """
    rewinder = _find_rewinder(part)
    if rewinder is None:
        return False
    result = rewinder()
    if inspect.isawaitable(result):
        if inspect.iscoroutine(result):
            result.close()
        msg = f"{type(part).__qualname__} rewinds asynchronously, use arewind_part"
        raise TypeError(msg)
    return True


async def arewind_part(part: Any) -> bool:
    """Move a body part back to its start, awaiting async rewinds.

    Args:
        part: The body part.

    Returns:
        ``True`` if the part was rewound, ``False`` if it has no rewind
        capability.
    """
    rewinder = _find_rewinder(part)
    if rewinder is None:
        return False
    result = rewinder()
    if inspect.isawaitable(result):
        await result
    return True


def _log_rewound(request: httpx.Request, count: int) -> None:
    if count:
        logger.debug(f"Rewound {count} body part(s) of {request.method} request to {request.url}")


def rewind_request(request: httpx.Request) -> int:
    """Rewind every streamable part of the request body.

    Args:
        request: The request about to be retried.

    Returns:
        The number of parts that were rewound. In-memory bodies need no
        action and return 0.

    Example:
        ```pycon
        >>> from io import BytesIO
        >>> import httpx
        >>> from retryx.utils.rewind import rewind_request
        >>> request = httpx.Request(
        ...     "POST", "https://example.com", files={"file": BytesIO(b"data")}
        ... )
        >>> rewind_request(request)
        1
        >>> rewind_request(httpx.Request("POST", "https://example.com", content=b"data"))
        0

        ```
    """
    count = sum(rewind_part(part) for part in iter_rewindable_parts(request.stream))
    _log_rewound(request, count)
    return count


async def arewind_request(request: httpx.Request) -> int:
    """Rewind every streamable part of an async request body.

    Same as ``rewind_request``, but ``seek``/``rewind`` results that are
    awaitable are awaited before the retry is sent.

    Args:
        request: The request about to be retried.

    Returns:
        The number of parts that were rewound.
    """
    count = 0
    for part in iter_rewindable_parts(request.stream):
        if await arewind_part(part):
            count += 1
    _log_rewound(request, count)
    return count
