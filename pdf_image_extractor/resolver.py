"""Serialized access to the document's lazy object graph."""

from __future__ import annotations

import threading
from typing import Any, Callable, TypeVar

from .exceptions import ResolutionError

T = TypeVar("T")


class ResolverProxy:
    """Single shared gate in front of a non-thread-safe PDF reader.

    pypdf resolves indirect objects lazily by seeking in, and caching from,
    one shared stream. Every worker holds the same proxy and every call
    into the reader goes through its lock.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()

    def resolve(self, reference: Any) -> Any:
        """Return the object ``reference`` points at.

        Direct objects are returned unchanged.

        Raises:
            ResolutionError: If the reference cannot be resolved. The lock
                is released first so later calls are unaffected.
        """

        with self._lock:
            try:
                if hasattr(reference, "get_object"):
                    return reference.get_object()
                return reference
            except Exception as exc:
                raise ResolutionError(f"Failed to resolve {reference!r}: {exc}") from exc

    def call(self, func: Callable[..., T], *args: Any, **kwargs: Any) -> T:
        """Run ``func`` while holding the resolver lock.

        Exceptions raised by ``func`` propagate unchanged.
        """

        with self._lock:
            return func(*args, **kwargs)

    @property
    def locked(self) -> bool:
        return self._lock.locked()


__all__ = ["ResolverProxy"]
