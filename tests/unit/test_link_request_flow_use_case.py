"""Unit tests for LinkRequestFlowUseCase."""

import random

import pytest

from linkbot.adapters.outbound.link_request import InMemoryLinkRequestRepository
from linkbot.adapters.outbound.state import InMemoryConversationStateRepository
from linkbot.adapters.outbound.token.random_token_generator import (
    TOKEN_ALPHABET,
    RandomTokenGenerator,
)
from linkbot.adapters.outbound.user import InMemoryUserRepository
from linkbot.application.dtos.flow import FlowOutcome
from linkbot.application.dtos.link_request import LinkRequest
from linkbot.application.dtos.user import TelegramUser
from linkbot.application.ports.errors import RepositoryError
from linkbot.application.ports.token_generator import TokenGenerator
from linkbot.application.use_cases.link_request_flow_use_case import (
    MAX_TOKEN_ATTEMPTS,
    LinkRequestFlowUseCase,
)
from linkbot.domain.entities.conversation_state import FlowState
from linkbot.domain.value_objects.request_input import (
    InvalidRequestInputError,
    RequestType,
)

OWNER_ID = 6910097562
GUEST_ID = 111
BASE_URL = "https://borkstudio"

OWNER = TelegramUser(id=OWNER_ID, username="owner", first_name="Owner")
GUEST = TelegramUser(id=GUEST_ID, username="guest", first_name="Guest")


class FixedTokenGenerator(TokenGenerator):
    """Token generator returning a predefined sequence."""

    def __init__(self, tokens: list[str]) -> None:
        self._tokens = list(tokens)
        self.calls = 0

    def generate(self) -> str:
        self.calls += 1
        return self._tokens.pop(0)


class FailingStateRepository(InMemoryConversationStateRepository):
    """State repository whose operations can be made to fail."""

    def __init__(self, fail_on: set[str]) -> None:
        super().__init__()
        self._fail_on = fail_on

    async def get(self, user_id: int) -> FlowState:
        if "get" in self._fail_on:
            raise RepositoryError("get failed")
        return await super().get(user_id)

    async def set(self, user_id: int, state: FlowState) -> None:
        if "set" in self._fail_on:
            raise RepositoryError("set failed")
        await super().set(user_id, state)

    async def clear(self, user_id: int) -> None:
        if "clear" in self._fail_on:
            raise RepositoryError("clear failed")
        await super().clear(user_id)


class FailingLinkRequestRepository(InMemoryLinkRequestRepository):
    """Link request repository that fails on save."""

    async def save(self, link_request: LinkRequest) -> None:
        raise RepositoryError("save failed")


class FailingUserRepository(InMemoryUserRepository):
    """User repository that fails on upsert."""

    async def upsert(self, user: TelegramUser) -> None:
        raise RepositoryError("upsert failed")


def make_use_case(
    state_repository=None,
    link_request_repository=None,
    user_repository=None,
    token_generator=None,
) -> LinkRequestFlowUseCase:
    return LinkRequestFlowUseCase(
        state_repository or InMemoryConversationStateRepository(),
        link_request_repository or InMemoryLinkRequestRepository(),
        user_repository or InMemoryUserRepository(),
        token_generator or RandomTokenGenerator(rng=random.Random(7)),
        owner_id=OWNER_ID,
        public_base_url=BASE_URL,
    )


@pytest.fixture
def state_repository():
    """Create in-memory state repository."""
    return InMemoryConversationStateRepository()


@pytest.fixture
def link_request_repository():
    """Create in-memory link request repository."""
    return InMemoryLinkRequestRepository()


@pytest.fixture
def user_repository():
    """Create in-memory user repository."""
    return InMemoryUserRepository()


@pytest.fixture
def use_case(state_repository, link_request_repository, user_repository):
    """Create use case with in-memory dependencies."""
    return make_use_case(state_repository, link_request_repository, user_repository)


@pytest.mark.asyncio
async def test_greet_owner(use_case, user_repository):
    """Test that the owner gets the owner greeting and is recorded."""
    result = await use_case.greet(OWNER)

    assert result.outcome == FlowOutcome.GREETED_OWNER
    assert result.user_id == OWNER_ID
    assert await user_repository.list() == [OWNER]


@pytest.mark.asyncio
async def test_greet_guest(use_case, user_repository):
    """Test that other users get the sponsor greeting and are recorded."""
    result = await use_case.greet(GUEST)

    assert result.outcome == FlowOutcome.GREETED_GUEST
    assert await user_repository.list() == [GUEST]


@pytest.mark.asyncio
async def test_owner_trigger_sets_awaiting_request(use_case, state_repository):
    """Test NO_FLOW -> AWAITING_REQUEST on the owner's trigger."""
    result = await use_case.trigger(OWNER)

    assert result.outcome == FlowOutcome.PROMPTED
    assert await state_repository.get(OWNER_ID) == FlowState.AWAITING_REQUEST


@pytest.mark.asyncio
async def test_scenario_a_owner_requests_stars(use_case, state_repository, link_request_repository):
    """Test trigger then "42" stores a stars request and clears state."""
    await use_case.trigger(OWNER)

    result = await use_case.submit_text(OWNER, "42")

    assert result.outcome == FlowOutcome.LINK_CREATED
    assert result.request_type == RequestType.STARS
    assert await state_repository.get(OWNER_ID) == FlowState.NO_FLOW

    token = result.link.rsplit("/", 1)[-1]
    assert len(token) == 14
    assert all(ch in TOKEN_ALPHABET for ch in token)
    assert result.link == f"{BASE_URL}/link/{token}"

    stored = await link_request_repository.get(token)
    assert stored is not None
    assert stored.request_type == RequestType.STARS
    assert stored.request_value == "42"
    assert stored.user_id == OWNER_ID
    assert stored.generated_link == result.link


@pytest.mark.asyncio
async def test_owner_requests_nft(use_case, link_request_repository):
    """Test that a URL creates an NFT request with the URL as value."""
    await use_case.trigger(OWNER)

    result = await use_case.submit_text(OWNER, "  https://t.me/nft/PlushPepe-1  ")

    assert result.outcome == FlowOutcome.LINK_CREATED
    assert result.request_type == RequestType.NFT
    requests = await link_request_repository.list()
    assert len(requests) == 1
    assert requests[0].request_value == "https://t.me/nft/PlushPepe-1"


@pytest.mark.asyncio
async def test_leading_zeros_are_normalized(use_case, link_request_repository):
    """Test that "007" is stored as 7 stars."""
    await use_case.trigger(OWNER)

    await use_case.submit_text(OWNER, "007")

    requests = await link_request_repository.list()
    assert requests[0].request_value == "7"


@pytest.mark.asyncio
async def test_scenario_b_invalid_text_keeps_state(
    use_case, state_repository, link_request_repository
):
    """Test that unrecognized text is rejected and the flow keeps waiting."""
    await use_case.trigger(OWNER)

    result = await use_case.submit_text(OWNER, "hello world")

    assert result.outcome == FlowOutcome.VALIDATION_ERROR
    assert result.validation_reason == InvalidRequestInputError.UNRECOGNIZED
    assert result.is_error is True
    assert await state_repository.get(OWNER_ID) == FlowState.AWAITING_REQUEST
    assert await link_request_repository.list() == []


@pytest.mark.asyncio
async def test_zero_stars_rejected_and_retry_succeeds(
    use_case, state_repository, link_request_repository
):
    """Test that "0" is rejected and a later valid count still works."""
    await use_case.trigger(OWNER)

    rejected = await use_case.submit_text(OWNER, "0")
    assert rejected.outcome == FlowOutcome.VALIDATION_ERROR
    assert rejected.validation_reason == InvalidRequestInputError.NON_POSITIVE_STARS
    assert await state_repository.get(OWNER_ID) == FlowState.AWAITING_REQUEST

    accepted = await use_case.submit_text(OWNER, "10")
    assert accepted.outcome == FlowOutcome.LINK_CREATED
    assert len(await link_request_repository.list()) == 1


@pytest.mark.asyncio
async def test_owner_text_without_flow_is_ignored(use_case, link_request_repository):
    """Test that owner text in NO_FLOW is a no-op."""
    result = await use_case.submit_text(OWNER, "42")

    assert result.outcome == FlowOutcome.IGNORED
    assert await link_request_repository.list() == []


@pytest.mark.asyncio
async def test_second_message_after_completion_is_ignored(use_case, link_request_repository):
    """Test that the flow ends after one request."""
    await use_case.trigger(OWNER)
    await use_case.submit_text(OWNER, "42")

    result = await use_case.submit_text(OWNER, "43")

    assert result.outcome == FlowOutcome.IGNORED
    assert len(await link_request_repository.list()) == 1


@pytest.mark.asyncio
async def test_scenario_d_guest_trigger_is_unavailable(use_case, state_repository):
    """Test that a non-owner pressing the button changes nothing."""
    result = await use_case.trigger(GUEST)

    assert result.outcome == FlowOutcome.UNAVAILABLE
    assert await state_repository.get(GUEST_ID) == FlowState.NO_FLOW


@pytest.mark.asyncio
@pytest.mark.parametrize("text", ["42", "https://t.me/nft/gift-1", "hello", "0"])
async def test_guest_never_changes_state_or_creates_requests(
    use_case, state_repository, link_request_repository, text
):
    """Test that non-owner actions never touch state or requests."""
    await use_case.trigger(GUEST)
    result = await use_case.submit_text(GUEST, text)

    assert result.outcome == FlowOutcome.IGNORED
    assert await state_repository.get(GUEST_ID) == FlowState.NO_FLOW
    assert await link_request_repository.list() == []


@pytest.mark.asyncio
async def test_guest_text_ignored_even_if_state_was_set(use_case, state_repository):
    """Test that a stray state record does not open the flow for a guest."""
    await state_repository.set(GUEST_ID, FlowState.AWAITING_REQUEST)

    result = await use_case.submit_text(GUEST, "42")

    assert result.outcome == FlowOutcome.IGNORED


@pytest.mark.asyncio
async def test_token_collision_is_retried(state_repository, link_request_repository):
    """Test that an already stored token is not reused."""
    token_generator = FixedTokenGenerator(["TAKENTOKEN0001", "FRESHTOKEN0002"])
    use_case = make_use_case(
        state_repository, link_request_repository, token_generator=token_generator
    )
    await use_case.trigger(OWNER)
    await use_case.submit_text(OWNER, "5")
    await use_case.trigger(OWNER)

    token_generator._tokens = ["TAKENTOKEN0001", "FRESHTOKEN0002"]
    result = await use_case.submit_text(OWNER, "6")

    assert result.outcome == FlowOutcome.LINK_CREATED
    assert result.link.endswith("/FRESHTOKEN0002")
    assert (await link_request_repository.get("TAKENTOKEN0001")).request_value == "5"


@pytest.mark.asyncio
async def test_token_exhaustion_is_persistence_error(state_repository, link_request_repository):
    """Test that running out of fresh tokens fails without clearing state."""
    await link_request_repository.save(
        LinkRequest(
            token="SAMETOKEN00001",
            user_id=OWNER_ID,
            request_type=RequestType.STARS,
            request_value="1",
            generated_link=f"{BASE_URL}/link/SAMETOKEN00001",
            created_at="2024-01-01T00:00:00+00:00",
        )
    )
    token_generator = FixedTokenGenerator(["SAMETOKEN00001"] * MAX_TOKEN_ATTEMPTS)
    use_case = make_use_case(
        state_repository, link_request_repository, token_generator=token_generator
    )
    await use_case.trigger(OWNER)

    result = await use_case.submit_text(OWNER, "5")

    assert result.outcome == FlowOutcome.PERSISTENCE_ERROR
    assert token_generator.calls == MAX_TOKEN_ATTEMPTS
    assert await state_repository.get(OWNER_ID) == FlowState.AWAITING_REQUEST


@pytest.mark.asyncio
async def test_trigger_persistence_error():
    """Test that a failed state write surfaces as a persistence error."""
    use_case = make_use_case(state_repository=FailingStateRepository({"set"}))

    result = await use_case.trigger(OWNER)

    assert result.outcome == FlowOutcome.PERSISTENCE_ERROR
    assert result.is_error is True


@pytest.mark.asyncio
async def test_state_lookup_error_is_persistence_error():
    """Test that a failed state read surfaces as a persistence error."""
    use_case = make_use_case(state_repository=FailingStateRepository({"get"}))

    result = await use_case.submit_text(OWNER, "42")

    assert result.outcome == FlowOutcome.PERSISTENCE_ERROR


@pytest.mark.asyncio
async def test_save_error_keeps_state(state_repository):
    """Test that a failed request write leaves the flow waiting."""
    use_case = make_use_case(
        state_repository, link_request_repository=FailingLinkRequestRepository()
    )
    await use_case.trigger(OWNER)

    result = await use_case.submit_text(OWNER, "42")

    assert result.outcome == FlowOutcome.PERSISTENCE_ERROR
    assert await state_repository.get(OWNER_ID) == FlowState.AWAITING_REQUEST


@pytest.mark.asyncio
async def test_clear_error_after_save_keeps_request(link_request_repository):
    """Test that a failed state clear does not roll back the stored request."""
    state_repository = FailingStateRepository({"clear"})
    use_case = make_use_case(state_repository, link_request_repository)
    await use_case.trigger(OWNER)

    result = await use_case.submit_text(OWNER, "42")

    assert result.outcome == FlowOutcome.PERSISTENCE_ERROR
    assert len(await link_request_repository.list()) == 1
    assert await state_repository.get(OWNER_ID) == FlowState.AWAITING_REQUEST


@pytest.mark.asyncio
async def test_greet_persistence_error():
    """Test that a failed user upsert on /start is a persistence error."""
    use_case = make_use_case(user_repository=FailingUserRepository())

    result = await use_case.greet(GUEST)

    assert result.outcome == FlowOutcome.PERSISTENCE_ERROR


@pytest.mark.asyncio
async def test_logger_receives_events(state_repository, link_request_repository, user_repository):
    """Test that the injected logger is called with flow events."""
    calls = []

    def _logger(user_id, event_id, component, **kwargs):
        calls.append((user_id, event_id, component, kwargs))

    use_case = LinkRequestFlowUseCase(
        state_repository,
        link_request_repository,
        user_repository,
        RandomTokenGenerator(rng=random.Random(1)),
        owner_id=OWNER_ID,
        public_base_url=BASE_URL,
        logger=_logger,
    )

    await use_case.trigger(OWNER, event_id="evt-1")
    await use_case.submit_text(OWNER, "42", event_id="evt-2")

    assert calls[0][:3] == (OWNER_ID, "evt-1", "flow")
    assert calls[0][3]["state_after"] == "awaiting_request"
    assert calls[-1][:3] == (OWNER_ID, "evt-2", "link_request")
    assert calls[-1][3]["request_type"] == "stars"
