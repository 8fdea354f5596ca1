"""Share collectors — file shares and application source shares.

Both collectors turn their input into ``RawShare`` records and contain
failures to the partition they occur in: a broken owner degrades that
owner's shares, a broken source drops that source's shares, and the
rest of the feed is unaffected.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from datetime import UTC
from typing import TYPE_CHECKING

from .actions import file_share_action
from .config import ReviewConfig
from .types import RawShare, ShareType

if TYPE_CHECKING:
    from datetime import datetime

    from sharereview.models.shares import ShareRecordBase

    from .protocols import FileShareBackend, Folder, FolderResolver
    from .registry import SourceRegistry

logger = logging.getLogger(__name__)


def _format_expiration(expiration: datetime | None) -> str | None:
    if expiration is None:
        return None
    # SQLite hands back naive datetimes; stored values are UTC
    if expiration.tzinfo is None:
        expiration = expiration.replace(tzinfo=UTC)
    return expiration.isoformat()


class FileShareCollector:
    """Loads file shares and resolves their paths, batched per owner."""

    def __init__(
        self,
        backend: FileShareBackend,
        folders: FolderResolver,
        config: ReviewConfig | None = None,
    ) -> None:
        self._backend = backend
        self._folders = folders
        self._config = config or ReviewConfig()

    def collect(self, include_room_shares: bool = True) -> list[RawShare]:
        records = self._backend.find_all()

        by_owner: dict[str, list[ShareRecordBase]] = {}
        for record in records:
            if not include_room_shares and record.share_type == ShareType.ROOM:
                continue
            by_owner.setdefault(record.uid_initiator, []).append(record)

        collected: list[RawShare] = []
        for owner, owner_records in by_owner.items():
            folder = self._open_root(owner)
            if folder is None:
                invalid = self._config.invalid_object_label
                collected.extend(self._to_raw(r, invalid) for r in owner_records)
                continue

            paths = self._resolve_paths(folder, owner_records)
            collected.extend(
                self._to_raw(r, paths.get(r.file_source, "")) for r in owner_records
            )
        return collected

    def _open_root(self, owner: str) -> Folder | None:
        """Return *owner*'s root folder, or None when it cannot be opened."""
        try:
            return self._folders.resolve_owner_root(owner)
        except Exception:
            logger.warning("Error accessing root folder of %s", owner, exc_info=True)
            return None

    @staticmethod
    def _resolve_paths(folder: Folder, records: list[ShareRecordBase]) -> dict[str, str]:
        """Resolve each distinct file id once: ``{file_id: "<path>;<name>"}``."""
        paths: dict[str, str] = {}
        for file_id in dict.fromkeys(r.file_source for r in records):
            try:
                refs = folder.get_by_id(file_id)
            except Exception:
                logger.warning("Error resolving file %s", file_id, exc_info=True)
                paths[file_id] = ""
                continue
            paths[file_id] = f"{refs[0].path};{refs[0].name}" if refs else ""
        return paths

    def _to_raw(self, record: ShareRecordBase, path: str) -> RawShare:
        recipient = record.share_with or ""
        if record.share_type == ShareType.LINK:
            recipient = record.token or ""

        return RawShare(
            id=record.id,
            share_type=record.share_type,
            initiator=record.uid_initiator,
            recipient=recipient,
            permissions=record.permissions,
            password=bool(record.password),
            expiration=_format_expiration(record.expiration),
            time=record.stime,
            app=self._config.file_namespace,
            app_label=self._config.file_app_label,
            object=path,
            action=file_share_action(record.share_type, record.id),
        )


class AppShareAggregator:
    """Collects the shares of every registered application source."""

    def __init__(self, registry: SourceRegistry) -> None:
        self._registry = registry

    def collect(self) -> list[RawShare]:
        collected: list[RawShare] = []
        for name, source in self._registry.sources().items():
            try:
                items = list(source.shares())
            except Exception:
                logger.warning("Share source %s failed to list shares", name, exc_info=True)
                continue

            for item in items:
                try:
                    share = item if isinstance(item, RawShare) else RawShare.from_mapping(item)
                except (AttributeError, KeyError, TypeError, ValueError):
                    logger.warning("Skipping malformed share from %s: %r", name, item)
                    continue
                collected.append(replace(share, app=name))
        return collected

