"""ShareReviewService — facade wiring sources, collectors, pipeline, and deletion."""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING

from .collectors import AppShareAggregator, FileShareCollector
from .config import ReviewConfig
from .deletion import DeletionRouter
from .exceptions import AuthenticationRequiredError
from .folders import DatabaseFolderResolver
from .names import DisplayNameCache
from .pipeline import ReviewPipeline
from .preferences import AppConfigService, PreferenceService
from .registry import SourceRegistry
from .sharing import ShareStore

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Mapping

    from sqlmodel import Session

    from .protocols import FolderResolver, PreferenceStore, Source
    from .types import FormattedShare, ShareType

logger = logging.getLogger(__name__)


def _parse_watermark(value: str) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        logger.debug("Ignoring unparseable review timestamp %r", value)
        return 0


class ShareReviewService:
    """Share review operations for one request.

    Wires the file share backend, folder resolver, preference store and
    source registry onto a single SQLModel session.  Everything flushes
    but nothing commits; the caller owns the transaction.

    Usage::

        with Session(engine) as session:
            service = ShareReviewService(
                session,
                user_id="alice",
                sources=[TalkSource, DeckSource],
                name_resolvers={ShareType.USER: users.display_name},
            )
            feed = service.read(only_new=True)
            service.confirm()
            session.commit()
    """

    def __init__(
        self,
        session: Session,
        *,
        user_id: str | None = None,
        sources: Iterable[Callable[[], Source]] | SourceRegistry = (),
        name_resolvers: Mapping[ShareType, Callable[[str], str]] | None = None,
        folders: FolderResolver | None = None,
        preferences: PreferenceStore | None = None,
        config: ReviewConfig | None = None,
    ) -> None:
        self._config = config or ReviewConfig()
        self._user_id = user_id

        self._store = ShareStore(session)
        self._preferences = preferences or PreferenceService(session, self._config.app_id)
        self._app_config = AppConfigService(session)
        self._registry = sources if isinstance(sources, SourceRegistry) else SourceRegistry(sources)

        self._pipeline = ReviewPipeline(
            FileShareCollector(
                self._store,
                folders or DatabaseFolderResolver(session),
                self._config,
            ),
            AppShareAggregator(self._registry),
            DisplayNameCache(name_resolvers, max_size=self._config.name_cache_size),
            self._config,
        )
        self._router = DeletionRouter(self._registry, self._store, self._config)

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def store(self) -> ShareStore:
        return self._store

    @property
    def registry(self) -> SourceRegistry:
        return self._registry

    @property
    def pipeline(self) -> ReviewPipeline:
        return self._pipeline

    def _require_user(self, user_id: str | None = None) -> str:
        uid = user_id or self._user_id
        if not uid:
            raise AuthenticationRequiredError("a user is required for share review")
        return uid

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def read(self, only_new: bool = False, user_id: str | None = None) -> list[FormattedShare]:
        """Return the review feed of *user_id* (a background job) or the session user."""
        uid = self._require_user(user_id)
        cfg = self._config
        watermark = _parse_watermark(self._preferences.get(uid, cfg.watermark_key, "0"))
        show_talk = self._preferences.get(uid, cfg.show_talk_key, "true") != "false"
        return self._pipeline.read(only_new, watermark, include_room_shares=show_talk)

    def delete(self, token: str) -> bool:
        """Delete the share behind a composite action token."""
        return self._router.delete(token)

    def confirm(self, timestamp: int | str | None = None) -> int | str:
        """Set the review watermark (now when *timestamp* is None) and echo it.

        Raises ``ValueError`` unless *timestamp* is an integer epoch.
        """
        uid = self._require_user()
        if timestamp is None:
            timestamp = int(time.time())
        try:
            int(timestamp)
        except (TypeError, ValueError):
            raise ValueError(f"Invalid review timestamp: {timestamp!r}") from None
        self._preferences.set(uid, self._config.watermark_key, str(timestamp))
        return timestamp

    def set_show_talk(self, state: bool) -> bool:
        """Persist whether room shares are part of the feed."""
        uid = self._require_user()
        self._preferences.set(uid, self._config.show_talk_key, "true" if state else "false")
        return state

    def is_secured(self) -> bool:
        """True when the app is restricted to groups rather than enabled for everyone."""
        return self._app_config.get_value(self._config.app_id, "enabled") != "yes"
