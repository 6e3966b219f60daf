"""Link request repository port."""

from abc import ABC, abstractmethod
from typing import Optional

from linkbot.application.dtos.link_request import LinkRequest


class LinkRequestRepository(ABC):
    """Port interface for the token-keyed link request store."""

    @abstractmethod
    async def get(self, token: str) -> Optional[LinkRequest]:
        """
        Get a link request by token.

        Args:
            token: Public request token

        Returns:
            LinkRequest DTO, or None if not found

        Raises:
            RepositoryError: If the backing store fails
        """
        pass

    @abstractmethod
    async def save(self, link_request: LinkRequest) -> None:
        """
        Save a link request (upsert by token).

        Args:
            link_request: LinkRequest DTO to save

        Raises:
            RepositoryError: If the backing store fails
        """
        pass
