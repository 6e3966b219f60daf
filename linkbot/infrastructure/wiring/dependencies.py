"""Dependency injection factory functions."""

from typing import Optional

from fastapi import Request

from linkbot.adapters.outbound.link_request import (
    InMemoryLinkRequestRepository,
    NoOpLinkRequestRepository,
    PostgresLinkRequestRepository,
)
from linkbot.adapters.outbound.state import (
    InMemoryConversationStateRepository,
    NoOpConversationStateRepository,
    PostgresConversationStateRepository,
)
from linkbot.adapters.outbound.token.random_token_generator import (
    RandomTokenGenerator,
    is_well_formed_token,
)
from linkbot.adapters.outbound.user import (
    InMemoryUserRepository,
    NoOpUserRepository,
    PostgresUserRepository,
)
from linkbot.application.ports.conversation_state_repository import ConversationStateRepository
from linkbot.application.ports.link_request_repository import LinkRequestRepository
from linkbot.application.ports.user_repository import UserRepository
from linkbot.application.use_cases.link_request_flow_use_case import LinkRequestFlowUseCase
from linkbot.application.use_cases.resolve_link_use_case import ResolveLinkUseCase
from linkbot.infrastructure.config.settings import Settings
from linkbot.infrastructure.logging.logger import log_event


class Repositories:
    """Repositories shared by the bot and the web server."""

    def __init__(
        self,
        state_repository: ConversationStateRepository,
        link_request_repository: LinkRequestRepository,
        user_repository: UserRepository,
        persistence_enabled: bool,
    ) -> None:
        self.state_repository = state_repository
        self.link_request_repository = link_request_repository
        self.user_repository = user_repository
        self.persistence_enabled = persistence_enabled


def create_repositories(settings: Settings) -> Repositories:
    """
    Factory function to create all repositories for the configured backend.

    Args:
        settings: Application settings

    Returns:
        Repositories bundle (no-op adapters when persistence is not configured)
    """
    if settings.repository_backend == "in_memory":
        return Repositories(
            InMemoryConversationStateRepository(),
            InMemoryLinkRequestRepository(),
            InMemoryUserRepository(),
            persistence_enabled=True,
        )

    if not settings.database_url:
        # Degraded mode: the service starts but nothing is stored
        return Repositories(
            NoOpConversationStateRepository(),
            NoOpLinkRequestRepository(),
            NoOpUserRepository(),
            persistence_enabled=False,
        )

    return Repositories(
        PostgresConversationStateRepository(),
        PostgresLinkRequestRepository(),
        PostgresUserRepository(),
        persistence_enabled=True,
    )


def create_link_request_flow_use_case(
    settings: Settings, repositories: Repositories
) -> LinkRequestFlowUseCase:
    """
    Factory function to create LinkRequestFlowUseCase with dependencies.

    Args:
        settings: Application settings
        repositories: Repositories bundle

    Returns:
        LinkRequestFlowUseCase instance
    """

    # Wire logger function
    def _logger_func(user_id, event_id, component, **kwargs):
        log_event(user_id, event_id, component, **kwargs)

    return LinkRequestFlowUseCase(
        repositories.state_repository,
        repositories.link_request_repository,
        repositories.user_repository,
        RandomTokenGenerator(),
        owner_id=settings.bot_owner_id,
        public_base_url=settings.public_base_url,
        logger=_logger_func,
    )


def create_resolve_link_use_case(
    settings: Settings, repositories: Repositories
) -> ResolveLinkUseCase:
    """
    Factory function to create ResolveLinkUseCase.

    Args:
        settings: Application settings
        repositories: Repositories bundle

    Returns:
        ResolveLinkUseCase instance (without a repository in degraded mode)
    """
    link_request_repository: Optional[LinkRequestRepository] = (
        repositories.link_request_repository if repositories.persistence_enabled else None
    )
    return ResolveLinkUseCase(
        link_request_repository,
        public_base_url=settings.public_base_url,
        token_validator=is_well_formed_token,
    )


def get_resolve_link_use_case(request: Request) -> ResolveLinkUseCase:
    """
    FastAPI dependency returning the application's ResolveLinkUseCase.

    Args:
        request: Incoming request

    Returns:
        ResolveLinkUseCase stored on app.state at startup
    """
    return request.app.state.resolve_link_use_case
