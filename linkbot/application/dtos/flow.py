"""Flow result DTOs shared by the chat flow and its dispatcher."""

from enum import Enum
from typing import Optional

from linkbot.application.dtos.base import DTO
from linkbot.domain.value_objects.request_input import RequestType


class FlowOutcome(str, Enum):
    """Kind of result produced by a single flow step."""

    GREETED_OWNER = "greeted_owner"
    GREETED_GUEST = "greeted_guest"
    PROMPTED = "prompted"
    LINK_CREATED = "link_created"
    VALIDATION_ERROR = "validation_error"
    PERSISTENCE_ERROR = "persistence_error"
    UNAVAILABLE = "unavailable"
    IGNORED = "ignored"


class FlowResult(DTO):
    """Result of a flow step; the dispatcher turns it into replies."""

    outcome: FlowOutcome
    user_id: int
    link: Optional[str] = None
    request_type: Optional[RequestType] = None
    validation_reason: Optional[str] = None

    @property
    def is_error(self) -> bool:
        """Check if the step failed."""
        return self.outcome in (FlowOutcome.VALIDATION_ERROR, FlowOutcome.PERSISTENCE_ERROR)
