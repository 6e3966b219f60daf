"""User repository port."""

from abc import ABC, abstractmethod

from linkbot.application.dtos.user import TelegramUser


class UserRepository(ABC):
    """Port interface for user metadata."""

    @abstractmethod
    async def upsert(self, user: TelegramUser) -> None:
        """
        Insert a user or overwrite its metadata.

        Args:
            user: User identity and metadata

        Raises:
            RepositoryError: If the backing store fails
        """
        pass
