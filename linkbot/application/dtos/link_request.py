"""Link request DTOs."""

from datetime import datetime

from linkbot.application.dtos.base import DTO
from linkbot.domain.value_objects.request_input import RequestType


class LinkRequest(DTO):
    """Stored link request, keyed by its public token."""

    token: str
    user_id: int
    request_type: RequestType
    request_value: str
    generated_link: str
    created_at: datetime
