"""Link request flow use case: the owner's two-state conversation."""

from datetime import datetime, timezone
from typing import Any, Callable, Optional

from linkbot.application.dtos.flow import FlowOutcome, FlowResult
from linkbot.application.dtos.link_request import LinkRequest
from linkbot.application.dtos.user import TelegramUser
from linkbot.application.ports.conversation_state_repository import ConversationStateRepository
from linkbot.application.ports.errors import RepositoryError
from linkbot.application.ports.link_request_repository import LinkRequestRepository
from linkbot.application.ports.token_generator import TokenGenerator
from linkbot.application.ports.user_repository import UserRepository
from linkbot.domain.entities.conversation_state import FlowState
from linkbot.domain.value_objects.public_link import build_public_link
from linkbot.domain.value_objects.request_input import InvalidRequestInputError, RequestInput

MAX_TOKEN_ATTEMPTS = 5


class LinkRequestFlowUseCase:
    """
    Use case driving the owner's link request conversation.

    NO_FLOW -> AWAITING_REQUEST when the owner presses "get link";
    AWAITING_REQUEST -> NO_FLOW when the owner sends a valid star count or
    NFT URL. Every step returns a FlowResult; replies are left to the caller.
    """

    def __init__(
        self,
        state_repository: ConversationStateRepository,
        link_request_repository: LinkRequestRepository,
        user_repository: UserRepository,
        token_generator: TokenGenerator,
        owner_id: int,
        public_base_url: str,
        logger: Optional[Callable[..., None]] = None,
    ) -> None:
        """
        Initialize link request flow use case.

        Args:
            state_repository: Repository for per-user flow state
            link_request_repository: Token-keyed link request store
            user_repository: Repository for user metadata
            token_generator: Source of request tokens
            owner_id: Telegram id of the only user allowed to request links
            public_base_url: Base URL used to compose generated links
            logger: Optional logger function (user_id, event_id, component, **kwargs)
        """
        self._state_repository = state_repository
        self._link_request_repository = link_request_repository
        self._user_repository = user_repository
        self._token_generator = token_generator
        self._owner_id = owner_id
        self._public_base_url = public_base_url
        self._logger = logger

    def _log(self, user_id: int, event_id: str, component: str, **kwargs: Any) -> None:
        """Log event if logger is available."""
        if self._logger:
            self._logger(user_id, event_id, component, **kwargs)

    def is_owner(self, user_id: int) -> bool:
        """Check if the user is the owner."""
        return user_id == self._owner_id

    def _result(self, outcome: FlowOutcome, user: TelegramUser, **kwargs: Any) -> FlowResult:
        return FlowResult(outcome=outcome, user_id=user.id, **kwargs)

    def _persistence_error(
        self, user: TelegramUser, event_id: str, step: str, error: RepositoryError
    ) -> FlowResult:
        self._log(user.id, event_id, "flow", step=step, error=str(error))
        return self._result(FlowOutcome.PERSISTENCE_ERROR, user)

    async def greet(self, user: TelegramUser, event_id: Optional[str] = None) -> FlowResult:
        """
        Handle /start: record the user and pick the greeting variant.

        Args:
            user: Sender identity and metadata
            event_id: Optional event identifier for logging

        Returns:
            GREETED_OWNER, GREETED_GUEST or PERSISTENCE_ERROR
        """
        event_id = event_id or "unknown"
        try:
            await self._user_repository.upsert(user)
        except RepositoryError as e:
            return self._persistence_error(user, event_id, "greet", e)

        if self.is_owner(user.id):
            return self._result(FlowOutcome.GREETED_OWNER, user)
        return self._result(FlowOutcome.GREETED_GUEST, user)

    async def trigger(self, user: TelegramUser, event_id: Optional[str] = None) -> FlowResult:
        """
        Handle the "get link" action.

        Args:
            user: Sender identity and metadata
            event_id: Optional event identifier for logging

        Returns:
            PROMPTED for the owner, UNAVAILABLE for anyone else,
            PERSISTENCE_ERROR if the state could not be stored
        """
        event_id = event_id or "unknown"
        if not self.is_owner(user.id):
            self._log(user.id, event_id, "flow", action="get_link", allowed=False)
            return self._result(FlowOutcome.UNAVAILABLE, user)

        try:
            await self._user_repository.upsert(user)
            await self._state_repository.set(user.id, FlowState.AWAITING_REQUEST)
        except RepositoryError as e:
            return self._persistence_error(user, event_id, "trigger", e)

        self._log(
            user.id,
            event_id,
            "flow",
            state_after=FlowState.AWAITING_REQUEST.value,
        )
        return self._result(FlowOutcome.PROMPTED, user)

    async def submit_text(
        self, user: TelegramUser, text: str, event_id: Optional[str] = None
    ) -> FlowResult:
        """
        Handle free text: create a link request if the owner is awaiting one.

        Args:
            user: Sender identity and metadata
            text: Message text
            event_id: Optional event identifier for logging

        Returns:
            LINK_CREATED, VALIDATION_ERROR, PERSISTENCE_ERROR or IGNORED
        """
        event_id = event_id or "unknown"
        if not self.is_owner(user.id):
            return self._result(FlowOutcome.IGNORED, user)

        try:
            state = await self._state_repository.get(user.id)
        except RepositoryError as e:
            return self._persistence_error(user, event_id, "get_state", e)

        if state != FlowState.AWAITING_REQUEST:
            return self._result(FlowOutcome.IGNORED, user)

        try:
            request_input = RequestInput.parse(text)
        except InvalidRequestInputError as e:
            self._log(user.id, event_id, "flow", validation_error=e.reason)
            return self._result(
                FlowOutcome.VALIDATION_ERROR, user, validation_reason=e.reason
            )

        try:
            await self._user_repository.upsert(user)
            token = await self._issue_token()
            link = build_public_link(self._public_base_url, token)
            await self._link_request_repository.save(
                LinkRequest(
                    token=token,
                    user_id=user.id,
                    request_type=request_input.request_type,
                    request_value=request_input.value,
                    generated_link=link,
                    created_at=datetime.now(timezone.utc),
                )
            )
            # Cleared only after the request is stored
            await self._state_repository.clear(user.id)
        except RepositoryError as e:
            return self._persistence_error(user, event_id, "create_link", e)

        self._log(
            user.id,
            event_id,
            "link_request",
            token=token,
            request_type=request_input.request_type.value,
            state_before=FlowState.AWAITING_REQUEST.value,
            state_after=FlowState.NO_FLOW.value,
        )
        return self._result(
            FlowOutcome.LINK_CREATED,
            user,
            link=link,
            request_type=request_input.request_type,
        )

    async def _issue_token(self) -> str:
        """
        Generate a token that is not already stored.

        Returns:
            Fresh token

        Raises:
            RepositoryError: If no free token was found
        """
        for _ in range(MAX_TOKEN_ATTEMPTS):
            token = self._token_generator.generate()
            if await self._link_request_repository.get(token) is None:
                return token
        raise RepositoryError(f"No free token after {MAX_TOKEN_ATTEMPTS} attempts")
