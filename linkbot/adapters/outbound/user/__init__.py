"""User repository adapters."""

from linkbot.adapters.outbound.user.noop_user_repository import NoOpUserRepository
from linkbot.adapters.outbound.user.postgres_user_repository import PostgresUserRepository
from linkbot.adapters.outbound.user.user_repository import InMemoryUserRepository

__all__ = [
    "InMemoryUserRepository",
    "NoOpUserRepository",
    "PostgresUserRepository",
]
