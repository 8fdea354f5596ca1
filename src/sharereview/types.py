"""Share types: ShareType, RawShare, FormattedShare, FileRef."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import datetime
from enum import IntEnum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Mapping


class ShareType(IntEnum):
    """Kind of recipient a share was granted to.

    Values are the wire codes emitted in ``FormattedShare.type``.
    Application sources may emit codes outside this enum; those are
    carried as plain integers.
    """

    USER = 0
    GROUP = 1
    USERGROUP = 2
    LINK = 3
    EMAIL = 4
    CONTACT = 5
    REMOTE = 6
    CIRCLE = 7
    GUEST = 8
    REMOTE_GROUP = 9
    ROOM = 10
    USERROOM = 11
    DECK = 12
    DECK_USER = 13
    SCIENCEMESH = 15


@dataclass(frozen=True, slots=True)
class FileRef:
    """A file found inside an owner's root folder."""

    id: str
    path: str
    name: str


@dataclass(frozen=True, slots=True)
class RawShare:
    """Unified ingestion shape for file shares and application shares.

    Attributes:
        id: Identifier, unique within its ``app`` namespace.
        share_type: ``ShareType`` code (or a source-specific integer).
        initiator: User id of whoever created the share.
        recipient: Recipient id; the access token for link shares.
        permissions: Permission bitmask.
        password: Whether the share is password protected.
        expiration: Expiration as given by the source, if any.
        time: Creation time in unix epoch seconds.
        app: Owning namespace, the prefix of the composite action token.
        app_label: Human-readable app name (defaults to ``app``).
        object: Description of the shared object, e.g. its path.
        action: Type-specific action, un-encoded (defaults to ``id``).
    """

    id: str
    share_type: int
    initiator: str = ""
    recipient: str = ""
    permissions: int = 0
    password: bool = False
    expiration: str | None = None
    time: int = 0
    app: str = ""
    app_label: str = ""
    object: str = ""
    action: str = ""

    @property
    def app_display(self) -> str:
        return self.app_label or self.app

    @property
    def type_action(self) -> str:
        return self.action or self.id

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> RawShare:
        """Build a share from the dict shape application sources return.

        Accepts ``type`` or ``share_type``, and ``expiration`` as either a
        string or a ``datetime``.  A source-supplied ``app`` doubles as the
        display label when no ``app_label`` is given.  Raises ``KeyError``
        without an ``id``.
        """
        share_type = data.get("share_type", data.get("type", -1))
        expiration = data.get("expiration")
        if isinstance(expiration, datetime):
            expiration = expiration.isoformat()
        return cls(
            id=str(data["id"]),
            share_type=int(share_type),
            initiator=str(data.get("initiator") or ""),
            recipient=str(data.get("recipient") or ""),
            permissions=int(data.get("permissions") or 0),
            password=bool(data.get("password")),
            expiration=str(expiration) if expiration else None,
            time=int(data.get("time") or 0),
            app=str(data.get("app") or ""),
            app_label=str(data.get("app_label") or data.get("app") or ""),
            object=str(data.get("object") or ""),
            action=str(data.get("action") or ""),
        )


@dataclass(frozen=True, slots=True)
class FormattedShare:
    """One entry of the review feed.

    Attributes:
        app: App display name.
        object: Object description.
        initiator: Initiator display name.
        type: ``"<type-code>;<recipient-display-name>"``.
        permissions: ``"<perm>;<password-flag>;<expiration>"``.
        time: ISO-8601 creation time.
        action: Composite action token ``"<app>_<encoded-action>"``.
    """

    app: str
    object: str
    initiator: str
    type: str
    permissions: str
    time: str
    action: str

    def to_dict(self) -> dict[str, str]:
        return asdict(self)
