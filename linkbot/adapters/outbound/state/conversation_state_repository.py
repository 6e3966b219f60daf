"""In-memory conversation state repository adapter."""

from linkbot.application.ports.conversation_state_repository import ConversationStateRepository
from linkbot.domain.entities.conversation_state import ConversationState, FlowState


class InMemoryConversationStateRepository(ConversationStateRepository):
    """In-memory implementation of conversation state repository."""

    def __init__(self) -> None:
        """Initialize in-memory repository."""
        self._storage: dict[int, ConversationState] = {}

    async def get(self, user_id: int) -> FlowState:
        """
        Get the flow state for a user.

        Args:
            user_id: Telegram user identifier

        Returns:
            Stored state, or FlowState.NO_FLOW if there is no record
        """
        state = self._storage.get(user_id)
        if state is None:
            return FlowState.NO_FLOW
        return state.state

    async def set(self, user_id: int, state: FlowState) -> None:
        """
        Persist the flow state for a user.

        Args:
            user_id: Telegram user identifier
            state: State to store
        """
        if state == FlowState.NO_FLOW:
            await self.clear(user_id)
            return
        existing = self._storage.get(user_id)
        if existing:
            existing.state = state
            existing.touch()
        else:
            self._storage[user_id] = ConversationState(user_id=user_id, state=state)

    async def clear(self, user_id: int) -> None:
        """
        Delete the flow state for a user.

        Args:
            user_id: Telegram user identifier
        """
        if user_id in self._storage:
            del self._storage[user_id]
