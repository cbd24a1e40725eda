"""Utility layer errors."""


class UtilError(Exception):
    """Base utility error."""

    pass


class ConfigurationError(UtilError):
    """Required configuration is missing or invalid."""

    def __init__(self, setting: str, message: str | None = None):
        self.setting = setting
        super().__init__(message or f"Setting {setting} must be configured")
