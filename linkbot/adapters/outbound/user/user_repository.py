"""In-memory user repository adapter."""

from linkbot.application.dtos.user import TelegramUser
from linkbot.application.ports.user_repository import UserRepository


class InMemoryUserRepository(UserRepository):
    """In-memory implementation of user repository."""

    def __init__(self) -> None:
        """Initialize in-memory repository."""
        self._storage: dict[int, TelegramUser] = {}

    async def upsert(self, user: TelegramUser) -> None:
        """
        Insert a user or overwrite its metadata.

        Args:
            user: User identity and metadata
        """
        self._storage[user.id] = user

    async def list(self) -> list[TelegramUser]:
        """
        List all users.

        Returns:
            List of stored users
        """
        return list(self._storage.values())
