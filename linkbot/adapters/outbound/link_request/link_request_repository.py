"""In-memory link request repository adapter."""

from typing import Optional

from linkbot.application.dtos.link_request import LinkRequest
from linkbot.application.ports.link_request_repository import LinkRequestRepository


class InMemoryLinkRequestRepository(LinkRequestRepository):
    """In-memory implementation of link request repository."""

    def __init__(self) -> None:
        """Initialize in-memory repository."""
        self._storage: dict[str, LinkRequest] = {}

    async def get(self, token: str) -> Optional[LinkRequest]:
        """
        Get a link request by token.

        Args:
            token: Public request token

        Returns:
            LinkRequest DTO, or None if not found
        """
        return self._storage.get(token)

    async def save(self, link_request: LinkRequest) -> None:
        """
        Save a link request (upsert by token).

        Args:
            link_request: LinkRequest DTO to save
        """
        self._storage[link_request.token] = link_request

    async def list(self) -> list[LinkRequest]:
        """
        List all link requests.

        Returns:
            List of stored link requests
        """
        return list(self._storage.values())
