"""Errors raised by outbound ports."""


class RepositoryError(Exception):
    """Raised when a persistence operation fails."""
