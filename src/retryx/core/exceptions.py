r"""Resolution of configured exception types.

Retryable exceptions can be configured as classes or as names. Names are
resolved once, when the retry decider is built, into a tuple of classes
usable with ``isinstance``. A name that cannot be resolved is dropped from
the table, so it never matches.
"""

from __future__ import annotations

__all__ = ["resolve_exception", "resolve_exceptions"]

import builtins
import importlib
import logging
from typing import TYPE_CHECKING

import httpx

if TYPE_CHECKING:
    from collections.abc import Iterable

logger: logging.Logger = logging.getLogger(__name__)


def _is_exception_class(obj: object) -> bool:
    # BaseException subclasses outside Exception (cancellation, interrupts)
    # must never be swallowed by the retry loop.
    return isinstance(obj, type) and issubclass(obj, Exception)


def _import_dotted(name: str) -> object | None:
    module_name, _, attr = name.rpartition(".")
    if not module_name or name.startswith("."):
        return None
    try:
        module = importlib.import_module(module_name)
    except (ImportError, TypeError, ValueError):
        return None
    return getattr(module, attr, None)


def resolve_exception(entry: type[Exception] | str) -> type[Exception] | None:
    """Resolve one exception entry into an exception class.

    Lookup order for names: builtins (e.g. ``"TimeoutError"``), httpx
    public exceptions (e.g. ``"ConnectTimeout"``), then a dotted import
    path (e.g. ``"httpx.ReadTimeout"``).

    Args:
        entry: An exception class or the name of one.

    Returns:
        The exception class, or ``None`` if the entry cannot be resolved
        to a subclass of ``Exception``.

    Example:
        ```pycon
        >>> from retryx.core.exceptions import resolve_exception
        >>> resolve_exception("TimeoutError")
        <class 'TimeoutError'>
        >>> resolve_exception("httpx.ConnectError")
        <class 'httpx.ConnectError'>
        >>> resolve_exception("NotAnExistingError") is None
        True

        ```
    """
    if isinstance(entry, str):
        name = entry.strip()
        candidate = getattr(builtins, name, None)
        if candidate is None:
            candidate = getattr(httpx, name, None)
        if candidate is None:
            candidate = _import_dotted(name)
    else:
        candidate = entry

    if not _is_exception_class(candidate):
        logger.debug(f"Ignoring unresolvable retry exception {entry!r}")
        return None
    return candidate


def resolve_exceptions(
    entries: Iterable[type[Exception] | str],
) -> tuple[type[Exception], ...]:
    """Build the exception lookup table from configured entries.

    Args:
        entries: Exception classes and/or names.

    Returns:
        A tuple of exception classes without duplicates, in configuration
        order. Unresolvable entries are omitted.

    Example:
        ```pycon
        >>> from retryx.core.exceptions import resolve_exceptions
        >>> resolve_exceptions(["TimeoutError", "WrongErrorName", ValueError])
        (<class 'TimeoutError'>, <class 'ValueError'>)

        ```
    """
    table: list[type[Exception]] = []
    for entry in entries:
        exc_type = resolve_exception(entry)
        if exc_type is not None and exc_type not in table:
            table.append(exc_type)
    return tuple(table)
