"""State outbound adapter."""

from linkbot.adapters.outbound.state.conversation_state_repository import (
    InMemoryConversationStateRepository,
)
from linkbot.adapters.outbound.state.noop_conversation_state_repository import (
    NoOpConversationStateRepository,
)
from linkbot.adapters.outbound.state.postgres_conversation_state_repository import (
    PostgresConversationStateRepository,
)

__all__ = [
    "InMemoryConversationStateRepository",
    "NoOpConversationStateRepository",
    "PostgresConversationStateRepository",
]
