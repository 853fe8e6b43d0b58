"""Request-scoped cache for one resolution session."""

from collections.abc import Awaitable, Callable, Hashable
from typing import Any, TypeVar

T = TypeVar("T")


class RequestCache:
    """Memoizes sub-results (group and dynamic group memberships) of one logical request.

    Owned by exactly one AuthorizationSession; never shared across users or requests.
    """

    def __init__(self) -> None:
        self._entries: dict[Hashable, Any] = {}

    async def get_or_load(self, key: Hashable, loader: Callable[[], Awaitable[T]]) -> T:
        """Return the cached value for key, awaiting loader on a miss."""
        if key in self._entries:
            return self._entries[key]
        value = await loader()
        self._entries[key] = value
        return value

    def get_or_compute(self, key: Hashable, compute: Callable[[], T]) -> T:
        """Return the cached value for key, calling compute on a miss."""
        if key in self._entries:
            return self._entries[key]
        value = compute()
        self._entries[key] = value
        return value

    def clear(self) -> None:
        self._entries.clear()

    def __contains__(self, key: Hashable) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)
