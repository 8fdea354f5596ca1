"""DatabaseFolderResolver — owner root folders backed by the file table."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlmodel import select

from .exceptions import PathNotFoundError
from .types import FileRef

if TYPE_CHECKING:
    from sqlmodel import Session

    from sharereview.models.files import FileRecordBase


def _validate_owner_id(owner_id: str) -> str:
    if not owner_id:
        raise PathNotFoundError("owner id is empty")
    if owner_id == ".." or "/" in owner_id or "\\" in owner_id or "\0" in owner_id:
        raise PathNotFoundError(f"owner id contains invalid characters: {owner_id!r}")
    return owner_id


class DatabaseFolder:
    """An owner's root, ``/{owner_id}``, in the file table."""

    def __init__(
        self,
        session: Session,
        file_model: type[FileRecordBase],
        root_path: str,
    ) -> None:
        self._session = session
        self._file_model = file_model
        self.root_path = root_path

    def get_by_id(self, file_id: str) -> list[FileRef]:
        """Return the file with *file_id* if it lives below this root."""
        model = self._file_model
        result = self._session.exec(select(model).where(model.id == file_id))
        prefix = self.root_path + "/"
        return [
            FileRef(id=record.id, path=record.path, name=record.name)
            for record in result.all()
            if record.path == self.root_path or record.path.startswith(prefix)
        ]


class DatabaseFolderResolver:
    """Resolves owner roots from directory records at ``/{owner_id}``.

    Implements the ``FolderResolver`` protocol.  An owner without a root
    directory (e.g. a deleted account) raises ``PathNotFoundError``.
    """

    def __init__(
        self,
        session: Session,
        file_model: type[FileRecordBase] | None = None,
    ) -> None:
        from sharereview.models.files import FileRecord

        self._session = session
        self._file_model: type[FileRecordBase] = file_model or FileRecord

    def resolve_owner_root(self, owner_id: str) -> DatabaseFolder:
        owner_id = _validate_owner_id(owner_id)
        root_path = f"/{owner_id}"
        model = self._file_model
        result = self._session.exec(
            select(model).where(
                model.path == root_path,
                model.owner_id == owner_id,
                model.is_directory == True,  # noqa: E712
            )
        )
        if result.first() is None:
            raise PathNotFoundError(f"No root folder for owner {owner_id!r}")
        return DatabaseFolder(self._session, model, root_path)
