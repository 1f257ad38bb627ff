class HeistError(Exception):
    """Base exception for the Great Heist project."""


class ConfigError(HeistError):
    """Raised when configuration values are missing, malformed or out of range."""
