"""Collaborator protocols — runtime-checkable interfaces.

The review pipeline only depends on these shapes.  The SQL-backed
implementations in ``sharing``, ``folders`` and ``preferences`` are one
way to provide them; a host application can supply its own.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from sharereview.models.shares import ShareRecordBase

    from .types import FileRef, RawShare


@runtime_checkable
class Source(Protocol):
    """A pluggable provider of application-specific shares."""

    def name(self) -> str:
        """Unique name; also the namespace of this source's action tokens."""
        ...

    def shares(self) -> Sequence[RawShare | Mapping[str, Any]]:
        """List the source's pending shares."""
        ...

    def delete_share(self, share_id: str) -> bool:
        """Delete one share by its type-specific action string."""
        ...


@runtime_checkable
class Folder(Protocol):
    """An owner's root folder."""

    def get_by_id(self, file_id: str) -> list[FileRef]:
        """Return every file with *file_id* below this folder."""
        ...


@runtime_checkable
class FolderResolver(Protocol):
    def resolve_owner_root(self, owner_id: str) -> Folder:
        """Return *owner_id*'s root folder.

        Raises ``PathNotFoundError`` (or any other error) when the owner
        is unknown or inaccessible.
        """
        ...


@runtime_checkable
class FileShareBackend(Protocol):
    """Persistent store of raw file shares."""

    def find_all(self) -> list[ShareRecordBase]: ...

    def get_share_by_id(self, full_id: str) -> ShareRecordBase:
        """Look up a share by ``"<provider>:<id>"``; raises ``ShareNotFoundError``."""
        ...

    def delete_share(self, share: ShareRecordBase) -> bool: ...


@runtime_checkable
class PreferenceStore(Protocol):
    """Per-user key/value settings."""

    def get(self, user_id: str, key: str, default: str = "") -> str: ...

    def set(self, user_id: str, key: str, value: str) -> None: ...
