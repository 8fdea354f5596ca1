"""SQLModel database models for share review."""

from sharereview.models.files import FileRecord, FileRecordBase
from sharereview.models.preferences import (
    AppSetting,
    AppSettingBase,
    UserPreference,
    UserPreferenceBase,
)
from sharereview.models.shares import ShareRecord, ShareRecordBase

__all__ = [
    "AppSetting",
    "AppSettingBase",
    "FileRecord",
    "FileRecordBase",
    "ShareRecord",
    "ShareRecordBase",
    "UserPreference",
    "UserPreferenceBase",
]
