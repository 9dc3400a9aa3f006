"""
utils/errors.py
---------------
Error taxonomy shared by every layer.

Startup errors (ConfigError, DatabaseConnectionError) are fatal.
Per-request errors are translated to HTTP status codes in app.py.
"""


class PortfolioError(Exception):
    """Base class for all application errors."""


class ConfigError(PortfolioError):
    """A configuration value could not be parsed."""


class DatabaseConnectionError(PortfolioError):
    """The database could not be reached or verified."""


class StorageError(PortfolioError):
    """A statement failed to execute or a row could not be decoded."""


class NotFoundError(PortfolioError):
    """An id-qualified operation matched no rows."""


class InvalidArgumentError(PortfolioError):
    """The caller supplied an unusable argument (bad id, empty update)."""
