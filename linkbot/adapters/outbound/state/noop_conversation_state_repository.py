"""No-op conversation state repository for when persistence is not configured."""

from linkbot.application.ports.conversation_state_repository import ConversationStateRepository
from linkbot.domain.entities.conversation_state import FlowState


class NoOpConversationStateRepository(ConversationStateRepository):
    """No-op adapter: nothing is stored, every user is in NO_FLOW."""

    async def get(self, user_id: int) -> FlowState:
        """Always return NO_FLOW."""
        return FlowState.NO_FLOW

    async def set(self, user_id: int, state: FlowState) -> None:
        """No-op (does nothing)."""
        pass

    async def clear(self, user_id: int) -> None:
        """No-op (does nothing)."""
        pass
