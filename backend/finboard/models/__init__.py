from finboard.models.user_settings import UserSettings  # noqa: F401
