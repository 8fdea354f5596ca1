"""PreferenceService and AppConfigService — SQL-backed key/value settings.

Both flush but do not commit.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from sqlmodel import Session

    from sharereview.models.preferences import AppSettingBase, UserPreferenceBase


class PreferenceService:
    """Per-user settings scoped to one app.

    Implements the ``PreferenceStore`` protocol.  Each ``set`` is a
    single-row upsert.
    """

    def __init__(
        self,
        session: Session,
        app: str,
        preference_model: type[UserPreferenceBase] | None = None,
    ) -> None:
        from sharereview.models.preferences import UserPreference

        self._session = session
        self._app = app
        self._model: type[UserPreferenceBase] = preference_model or UserPreference

    def get(self, user_id: str, key: str, default: str = "") -> str:
        row = self._session.get(self._model, (user_id, self._app, key))
        return default if row is None else row.value

    def set(self, user_id: str, key: str, value: str) -> None:
        row = self._session.get(self._model, (user_id, self._app, key))
        if row is None:
            row = self._model(user_id=user_id, app=self._app, key=key, value=value)
        else:
            row.value = value
        self._session.add(row)
        self._session.flush()


class AppConfigService:
    """App-wide settings, e.g. the ``enabled`` restriction of an app."""

    def __init__(
        self,
        session: Session,
        setting_model: type[AppSettingBase] | None = None,
    ) -> None:
        from sharereview.models.preferences import AppSetting

        self._session = session
        self._model: type[AppSettingBase] = setting_model or AppSetting

    def get_value(self, app: str, key: str, default: str = "") -> str:
        row = self._session.get(self._model, (app, key))
        return default if row is None else row.value

    def set_value(self, app: str, key: str, value: str) -> None:
        row = self._session.get(self._model, (app, key))
        if row is None:
            row = self._model(app=app, key=key, value=value)
        else:
            row.value = value
        self._session.add(row)
        self._session.flush()
