"""ReviewConfig — settings shared by collectors, pipeline, and service."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ReviewConfig:
    """Configuration for a share review deployment."""

    app_id: str = "sharereview"
    """App namespace under which user preferences and app settings live."""

    file_namespace: str = "files"
    """Action token namespace of direct file shares."""

    file_app_label: str = "Files"
    """App display name of direct file shares."""

    invalid_object_label: str = "invalid share (*) "
    """Object description used when the share owner cannot be resolved."""

    watermark_key: str = "reviewTimestamp"
    """Preference key of the per-user review watermark."""

    show_talk_key: str = "showTalk"
    """Preference key toggling room shares in the feed."""

    name_cache_size: int = 1024
    """Maximum number of memoized display names per pipeline."""

    def __post_init__(self) -> None:
        if not self.file_namespace or "_" in self.file_namespace:
            raise ValueError(
                f"Invalid file namespace: {self.file_namespace!r}. "
                "Must be non-empty and must not contain '_'."
            )
        if self.name_cache_size < 1:
            raise ValueError(
                f"name_cache_size must be positive, got {self.name_cache_size}"
            )
