"""No-op link request repository for when persistence is not configured."""

from typing import Optional

from linkbot.application.dtos.link_request import LinkRequest
from linkbot.application.ports.link_request_repository import LinkRequestRepository


class NoOpLinkRequestRepository(LinkRequestRepository):
    """No-op adapter that stores nothing and finds nothing."""

    async def get(self, token: str) -> Optional[LinkRequest]:
        """
        Always return None (nothing stored).

        Args:
            token: Public request token (ignored)

        Returns:
            Always None
        """
        return None

    async def save(self, link_request: LinkRequest) -> None:
        """
        No-op (does nothing).

        Args:
            link_request: LinkRequest DTO (ignored)
        """
        pass
