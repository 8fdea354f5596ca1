"""Composite action tokens — ``"<app>_<rawurlencoded action>"``.

The token lets a delete request be routed back to the namespace that
produced the share without a separate lookup.
"""

from __future__ import annotations

from urllib.parse import quote, unquote

from .exceptions import MalformedActionError
from .types import ShareType

SEPARATOR = "_"

FILE_SHARE_PREFIXES: dict[int, str] = {
    ShareType.EMAIL: "ocMailShare",
    ShareType.REMOTE: "ocFederatedSharing",
    ShareType.ROOM: "ocRoomShare",
    ShareType.CIRCLE: "ocCircleShare",
    ShareType.DECK: "deck",
}
"""Share provider prefix per share type; everything else is ``ocinternal``."""

DEFAULT_FILE_SHARE_PREFIX = "ocinternal"


def encode_action(app: str, action: str) -> str:
    """Build a composite action token from *app* and a type-specific *action*."""
    if not app or SEPARATOR in app:
        raise ValueError(
            f"Invalid app namespace: {app!r}. Must be non-empty and must not contain {SEPARATOR!r}."
        )
    return app + SEPARATOR + quote(action, safe="")


def decode_action(token: str) -> tuple[str, str]:
    """Split a composite token into ``(app, action)``.

    Splits on the first separator only; the remainder is URL-decoded.
    """
    app, sep, encoded = token.partition(SEPARATOR)
    if not sep:
        raise MalformedActionError(f"Malformed action token: {token!r}")
    return app, unquote(encoded)


def file_share_action(share_type: int, share_id: str) -> str:
    """Return the provider-qualified action of a file share, e.g. ``ocinternal:42``."""
    prefix = FILE_SHARE_PREFIXES.get(share_type, DEFAULT_FILE_SHARE_PREFIX)
    return f"{prefix}:{share_id}"


def parse_file_share_action(action: str) -> tuple[str, str]:
    """Split ``"<prefix>:<id>"`` into ``(prefix, id)``."""
    prefix, sep, share_id = action.partition(":")
    if not sep or not prefix or not share_id:
        raise MalformedActionError(f"Malformed file share action: {action!r}")
    return prefix, share_id
