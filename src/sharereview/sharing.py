"""ShareStore — SQL-backed file share backend.

Receives the share model and a session at construction.  Flushes but
does not commit; the caller owns the transaction.
"""

from __future__ import annotations

import logging
import secrets
import time
import uuid
from typing import TYPE_CHECKING

from sqlmodel import select

from .actions import file_share_action, parse_file_share_action
from .exceptions import MalformedActionError, ShareNotFoundError
from .types import ShareType

if TYPE_CHECKING:
    from datetime import datetime

    from sqlmodel import Session

    from sharereview.models.shares import ShareRecordBase

logger = logging.getLogger(__name__)


class ShareStore:
    """Reads and deletes raw file shares.

    Implements the ``FileShareBackend`` protocol.  Share lookups take the
    provider-qualified id found in file share actions
    (``"ocinternal:<id>"``, ``"ocMailShare:<id>"``, ...).
    """

    def __init__(
        self,
        session: Session,
        share_model: type[ShareRecordBase] | None = None,
    ) -> None:
        from sharereview.models.shares import ShareRecord

        self._session = session
        self._share_model: type[ShareRecordBase] = share_model or ShareRecord

    def create_share(
        self,
        initiator: str,
        file_source: str,
        share_type: int = ShareType.USER,
        *,
        share_with: str | None = None,
        owner: str | None = None,
        token: str | None = None,
        permissions: int = 1,
        password: str | None = None,
        expiration: datetime | None = None,
        stime: int | None = None,
    ) -> ShareRecordBase:
        """Create a share record. Flushes but does not commit."""
        if share_type == ShareType.LINK:
            token = token or secrets.token_urlsafe(12)
        elif not share_with:
            raise ValueError(f"share_with is required for share type {share_type}")

        share = self._share_model(
            id=str(uuid.uuid4()),
            share_type=int(share_type),
            uid_initiator=initiator,
            uid_owner=owner or initiator,
            share_with=share_with,
            token=token,
            file_source=file_source,
            permissions=permissions,
            password=password,
            expiration=expiration,
            stime=int(time.time()) if stime is None else stime,
        )
        self._session.add(share)
        self._session.flush()
        return share

    def find_all(self) -> list[ShareRecordBase]:
        """All file shares, oldest first."""
        model = self._share_model
        result = self._session.exec(select(model).order_by(model.stime, model.id))
        return list(result.all())

    def get_share_by_id(self, full_id: str) -> ShareRecordBase:
        """Look up a share by its provider-qualified id.

        Raises ``ShareNotFoundError`` when the id is not provider-qualified,
        no such share exists, or the provider prefix does not match the
        share's type.
        """
        try:
            prefix, share_id = parse_file_share_action(full_id)
        except MalformedActionError:
            raise ShareNotFoundError(f"Share not found: {full_id}") from None
        share = self._session.get(self._share_model, share_id)
        if share is None:
            raise ShareNotFoundError(f"Share not found: {full_id}")
        if file_share_action(share.share_type, share.id) != f"{prefix}:{share_id}":
            raise ShareNotFoundError(f"Share {share_id} is not provided by {prefix}")
        return share

    def delete_share(self, share: ShareRecordBase) -> bool:
        """Delete *share*. Flushes but does not commit."""
        self._session.delete(share)
        self._session.flush()
        logger.info("Deleted file share %s", share.id)
        return True
