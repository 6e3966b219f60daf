"""Resolve link use case."""

from typing import Callable, Optional

from linkbot.application.dtos.link_page import LinkPage, LinkPageStatus
from linkbot.application.dtos.link_request import LinkRequest
from linkbot.application.ports.errors import RepositoryError
from linkbot.application.ports.link_request_repository import LinkRequestRepository
from linkbot.application.use_cases.user_messages_ru import UserMessagesRU
from linkbot.domain.value_objects.public_link import build_public_link
from linkbot.domain.value_objects.request_input import RequestType


def format_request_value(link_request: LinkRequest) -> str:
    """
    Human-readable form of a stored request value.

    Args:
        link_request: Stored link request

    Returns:
        Star count with unit label, or the NFT URL unchanged
    """
    if link_request.request_type == RequestType.STARS:
        try:
            return UserMessagesRU.stars_label(int(link_request.request_value))
        except ValueError:
            return link_request.request_value
    return link_request.request_value


class ResolveLinkUseCase:
    """Use case for turning a token from a URL into a link page view model."""

    def __init__(
        self,
        link_request_repository: Optional[LinkRequestRepository],
        public_base_url: str,
        token_validator: Optional[Callable[[str], bool]] = None,
    ) -> None:
        """
        Initialize resolve link use case.

        Args:
            link_request_repository: Link request store, or None when persistence
                is not configured (degraded mode)
            public_base_url: Base URL used to compose links
            token_validator: Optional predicate; tokens failing it are reported
                as not found without a lookup
        """
        self._link_request_repository = link_request_repository
        self._public_base_url = public_base_url
        self._token_validator = token_validator

    async def execute(self, token: str) -> LinkPage:
        """
        Resolve a token.

        Args:
            token: Token from the URL path

        Returns:
            LinkPage with status FOUND, NOT_FOUND, DEGRADED or ERROR
        """
        link = build_public_link(self._public_base_url, token)

        if self._link_request_repository is None:
            return LinkPage(token=token, status=LinkPageStatus.DEGRADED, link=link)

        if self._token_validator and not self._token_validator(token):
            return LinkPage(token=token, status=LinkPageStatus.NOT_FOUND, link=link)

        try:
            link_request = await self._link_request_repository.get(token)
        except RepositoryError:
            return LinkPage(token=token, status=LinkPageStatus.ERROR, link=link)

        if link_request is None:
            return LinkPage(token=token, status=LinkPageStatus.NOT_FOUND, link=link)

        return LinkPage(
            token=token,
            status=LinkPageStatus.FOUND,
            link=link_request.generated_link,
            display_value=format_request_value(link_request),
            request_type=link_request.request_type,
        )
