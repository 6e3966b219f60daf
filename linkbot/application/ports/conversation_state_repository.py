"""Conversation state repository port."""

from abc import ABC, abstractmethod

from linkbot.domain.entities.conversation_state import FlowState


class ConversationStateRepository(ABC):
    """Port interface for per-user conversation state."""

    @abstractmethod
    async def get(self, user_id: int) -> FlowState:
        """
        Get the flow state for a user.

        Args:
            user_id: Telegram user identifier

        Returns:
            Stored state, or FlowState.NO_FLOW if there is no record

        Raises:
            RepositoryError: If the backing store fails
        """
        pass

    @abstractmethod
    async def set(self, user_id: int, state: FlowState) -> None:
        """
        Persist the flow state for a user.

        Args:
            user_id: Telegram user identifier
            state: State to store

        Raises:
            RepositoryError: If the backing store fails
        """
        pass

    @abstractmethod
    async def clear(self, user_id: int) -> None:
        """
        Delete the flow state for a user.

        Args:
            user_id: Telegram user identifier

        Raises:
            RepositoryError: If the backing store fails
        """
        pass
