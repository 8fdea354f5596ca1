"""ReviewPipeline — merge, filter, and format the share review feed."""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from functools import lru_cache
from typing import TYPE_CHECKING

from .actions import encode_action
from .config import ReviewConfig
from .names import DisplayNameCache
from .types import FormattedShare, ShareType

if TYPE_CHECKING:
    from .collectors import AppShareAggregator, FileShareCollector
    from .types import RawShare

logger = logging.getLogger(__name__)


def is_new(share: RawShare, watermark: int) -> bool:
    """True when *share* was created after the review *watermark*."""
    return share.time > watermark


@lru_cache(maxsize=4096)
def format_time(unix_time: int) -> str:
    """ISO-8601 in UTC, e.g. ``2024-01-01T00:00:00+00:00``."""
    return datetime.fromtimestamp(unix_time, UTC).isoformat()


def format_permissions(share: RawShare) -> str:
    password = "1" if share.password else ""
    return f"{share.permissions};{password};{share.expiration or ''}"


class ReviewPipeline:
    """Builds the uniform review feed from file and application shares.

    With ``only_new`` set, shares at or below the watermark are dropped
    and only the initiators of the remaining shares are pre-resolved.
    An entry that fails to format is skipped; it never fails the read.
    """

    def __init__(
        self,
        files: FileShareCollector,
        apps: AppShareAggregator,
        names: DisplayNameCache | None = None,
        config: ReviewConfig | None = None,
    ) -> None:
        self._config = config or ReviewConfig()
        self._files = files
        self._apps = apps
        if names is None:
            names = DisplayNameCache(max_size=self._config.name_cache_size)
        self._names = names

    @property
    def names(self) -> DisplayNameCache:
        return self._names

    def read(
        self,
        only_new: bool,
        watermark: int = 0,
        *,
        include_room_shares: bool = True,
    ) -> list[FormattedShare]:
        shares = self._files.collect(include_room_shares) + self._apps.collect()
        relevant = [s for s in shares if not only_new or is_new(s, watermark)]

        self._names.warm(ShareType.USER, (s.initiator for s in relevant))

        formatted: list[FormattedShare] = []
        for share in relevant:
            try:
                formatted.append(self.format_share(share))
            except Exception:
                logger.debug("Skipping share %s of %s", share.id, share.app, exc_info=True)
        return formatted

    def format_share(self, share: RawShare) -> FormattedShare:
        recipient = (
            self._names.resolve(share.share_type, share.recipient) if share.recipient else ""
        )
        initiator = (
            self._names.resolve(ShareType.USER, share.initiator) if share.initiator else ""
        )
        return FormattedShare(
            app=share.app_display,
            object=share.object,
            initiator=initiator,
            type=f"{int(share.share_type)};{recipient}",
            permissions=format_permissions(share),
            time=format_time(share.time),
            action=encode_action(share.app, share.type_action),
        )
