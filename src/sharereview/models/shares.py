"""ShareRecord model — raw persisted file shares.

Provides ``ShareRecordBase`` (non-table) and ``ShareRecord`` (concrete table).
Subclass ``ShareRecordBase`` with ``table=True`` and a custom ``__tablename__``
to read shares from a different table.
"""

from __future__ import annotations

import time
import uuid
from datetime import datetime

from sqlalchemy import DateTime
from sqlmodel import Field, SQLModel


class ShareRecordBase(SQLModel):
    """Base fields for a file share record. Subclass with ``table=True`` for a concrete table."""

    id: str = Field(default_factory=lambda: str(uuid.uuid4()), primary_key=True)
    share_type: int = Field(default=0, index=True)
    uid_initiator: str = Field(index=True)
    uid_owner: str = Field(default="")
    share_with: str | None = Field(default=None)
    token: str | None = Field(default=None)
    file_source: str = Field(index=True)
    permissions: int = Field(default=1)
    password: str | None = Field(default=None)
    expiration: datetime | None = Field(
        default=None,
        sa_type=DateTime(timezone=True),  # type: ignore[invalid-argument-type]
    )
    stime: int = Field(default_factory=lambda: int(time.time()), index=True)


class ShareRecord(ShareRecordBase, table=True):
    """Default file share table — ``sharereview_shares``."""

    __tablename__ = "sharereview_shares"
