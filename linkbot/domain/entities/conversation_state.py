"""Conversation state entity."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum


class FlowState(str, Enum):
    """States of the link-request flow for a single user."""

    NO_FLOW = "no_flow"  # implicit, never persisted
    AWAITING_REQUEST = "awaiting_request"


@dataclass
class ConversationState:
    """Conversation state entity."""

    user_id: int
    state: FlowState = FlowState.NO_FLOW
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def touch(self) -> None:
        """Update the updated_at timestamp."""
        self.updated_at = datetime.now(timezone.utc)
