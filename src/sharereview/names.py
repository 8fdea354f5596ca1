"""DisplayNameCache — memoized identifier to display-name resolution."""

from __future__ import annotations

import logging
import threading
from collections import OrderedDict
from typing import TYPE_CHECKING

from .types import ShareType

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Mapping

    NameResolver = Callable[[str], str]

logger = logging.getLogger(__name__)

RESOLVED_TYPES: frozenset[ShareType] = frozenset(
    {ShareType.USER, ShareType.GROUP, ShareType.ROOM, ShareType.DECK, ShareType.CIRCLE}
)
"""Share types whose ids are looked up through an injected resolver."""


def _identity(identifier: str) -> str:
    return identifier


class DisplayNameCache:
    """Memoizes display names per ``(share_type, identifier)``.

    Owned by a single pipeline rather than held globally, and bounded:
    once *max_size* entries exist the least recently used one is evicted.
    Email ids are their own display value; types without a resolver fall
    back to the raw id.

    Lookups are guarded by a lock.  Two threads missing the same key may
    both call the resolver; the last write wins, which is fine as long
    as resolvers are pure functions of their input.
    """

    def __init__(
        self,
        resolvers: Mapping[ShareType, NameResolver] | None = None,
        max_size: int = 1024,
    ) -> None:
        self._resolvers: dict[int, NameResolver] = {ShareType.EMAIL: _identity}
        for share_type, resolver in (resolvers or {}).items():
            if share_type not in RESOLVED_TYPES:
                raise ValueError(f"No display names are resolved for {share_type!r}")
            self._resolvers[share_type] = resolver
        self._max_size = max_size
        self._entries: OrderedDict[tuple[int, str], str] = OrderedDict()
        self._lock = threading.Lock()

    def resolve(self, share_type: int, identifier: str) -> str:
        """Return the display name of *identifier* for *share_type*."""
        key = (int(share_type), identifier)
        with self._lock:
            if key in self._entries:
                self._entries.move_to_end(key)
                return self._entries[key]

        resolver = self._resolvers.get(key[0])
        if resolver is None:
            return identifier

        try:
            name = resolver(identifier)
        except Exception:
            logger.warning(
                "Display name lookup failed for %s %r",
                key[0],
                identifier,
                exc_info=True,
            )
            return identifier

        with self._lock:
            self._entries[key] = name
            self._entries.move_to_end(key)
            while len(self._entries) > self._max_size:
                self._entries.popitem(last=False)
        return name

    def warm(self, share_type: int, identifiers: Iterable[str]) -> None:
        """Resolve each distinct non-empty identifier ahead of formatting."""
        for identifier in dict.fromkeys(identifiers):
            if identifier:
                self.resolve(share_type, identifier)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries
