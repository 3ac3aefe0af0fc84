from finboard.repositories.settings_repo import SettingsRepository

__all__ = ["SettingsRepository"]
