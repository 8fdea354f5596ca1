"""SourceRegistry — the set of pluggable share sources."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from .actions import SEPARATOR
from .exceptions import SourceError

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from .protocols import Source

    SourceFactory = Callable[[], Source]

logger = logging.getLogger(__name__)


class SourceRegistry:
    """Registry of share sources, populated at startup.

    Factories (source classes or zero-argument callables) are registered
    up front.  ``sources()`` instantiates them lazily on first use and
    caches the result for both aggregation and deletion routing.

    A factory that fails to instantiate is logged and skipped; it never
    aborts discovery of the others.  When two sources report the same
    name, the first one registered wins and the later one is discarded.
    """

    def __init__(self, factories: Iterable[SourceFactory] = ()) -> None:
        self._factories: list[SourceFactory] = list(factories)
        self._sources: dict[str, Source] | None = None

    def register(self, factory: SourceFactory) -> None:
        """Append *factory*. Invalidates previously discovered sources."""
        self._factories.append(factory)
        self._sources = None

    def sources(self) -> dict[str, Source]:
        """Return ``{name: source}``, instantiating factories on first call."""
        if self._sources is not None:
            return self._sources

        sources: dict[str, Source] = {}
        for factory in self._factories:
            try:
                source, name = self._instantiate(factory)
            except SourceError:
                logger.error("Can not initialize share source %r", factory, exc_info=True)
                continue

            if name in sources:
                logger.error("Share source with the same name already registered: %s", name)
                continue
            sources[name] = source

        self._sources = sources
        return sources

    def get(self, name: str) -> Source | None:
        return self.sources().get(name)

    def __contains__(self, name: object) -> bool:
        return name in self.sources()

    def __len__(self) -> int:
        return len(self.sources())

    @staticmethod
    def _instantiate(factory: SourceFactory) -> tuple[Source, str]:
        try:
            source = factory()
            name = source.name()
        except Exception as e:
            raise SourceError(f"Share source {factory!r} failed to initialize: {e}") from e
        if not isinstance(name, str) or not name or SEPARATOR in name:
            raise SourceError(f"Share source {factory!r} has an invalid name: {name!r}")
        return source, name
