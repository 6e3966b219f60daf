"""No-op user repository for when persistence is not configured."""

from linkbot.application.dtos.user import TelegramUser
from linkbot.application.ports.user_repository import UserRepository


class NoOpUserRepository(UserRepository):
    """No-op adapter that stores nothing."""

    async def upsert(self, user: TelegramUser) -> None:
        """No-op (does nothing)."""
        pass
