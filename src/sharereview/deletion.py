"""DeletionRouter — delete a share by its composite action token."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from .actions import decode_action
from .config import ReviewConfig

if TYPE_CHECKING:
    from .protocols import FileShareBackend
    from .registry import SourceRegistry

logger = logging.getLogger(__name__)


class DeletionRouter:
    """Routes a delete to the file share backend or the owning source.

    - Malformed tokens raise ``MalformedActionError``.
    - A file share that no longer exists raises ``ShareNotFoundError``.
    - A namespace with no registered source returns False.
    """

    def __init__(
        self,
        registry: SourceRegistry,
        backend: FileShareBackend,
        config: ReviewConfig | None = None,
    ) -> None:
        self._registry = registry
        self._backend = backend
        self._config = config or ReviewConfig()

    def delete(self, token: str) -> bool:
        app, action = decode_action(token)

        if app == self._config.file_namespace:
            logger.info("Deleting file share %s", action)
            share = self._backend.get_share_by_id(action)
            return self._backend.delete_share(share)

        source = self._registry.get(app)
        if source is None:
            logger.info("Can not delete share of unknown source %s", app)
            return False

        logger.info("Deleting %s share %s", app, action)
        return bool(source.delete_share(action))
