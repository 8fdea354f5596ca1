"""FileRecord model — the file tree shares point into.

An owner's root is the directory record at ``/{owner_id}``; every file
the owner holds lives below it.
"""

from __future__ import annotations

import uuid

from sqlmodel import Field, SQLModel


class FileRecordBase(SQLModel):
    """Base fields for a file record. Subclass with ``table=True`` for a concrete table."""

    id: str = Field(default_factory=lambda: str(uuid.uuid4()), primary_key=True)
    owner_id: str = Field(index=True)
    path: str = Field(index=True)
    name: str = Field(default="")
    is_directory: bool = Field(default=False)


class FileRecord(FileRecordBase, table=True):
    """Default file table — ``sharereview_files``."""

    __tablename__ = "sharereview_files"
