"""User DTOs."""

from typing import Optional

from linkbot.application.dtos.base import DTO


class TelegramUser(DTO):
    """Telegram user identity and display metadata."""

    id: int
    username: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
