"""UserPreference and AppSetting models — per-user and per-app key/value rows."""

from __future__ import annotations

from sqlmodel import Field, SQLModel


class UserPreferenceBase(SQLModel):
    user_id: str = Field(primary_key=True)
    app: str = Field(primary_key=True)
    key: str = Field(primary_key=True)
    value: str = Field(default="")


class UserPreference(UserPreferenceBase, table=True):
    """Default preference table — ``sharereview_preferences``."""

    __tablename__ = "sharereview_preferences"


class AppSettingBase(SQLModel):
    app: str = Field(primary_key=True)
    key: str = Field(primary_key=True)
    value: str = Field(default="")


class AppSetting(AppSettingBase, table=True):
    """Default app settings table — ``sharereview_app_settings``."""

    __tablename__ = "sharereview_app_settings"
