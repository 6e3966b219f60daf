"""Link resolution page DTOs."""

from enum import Enum
from typing import Optional

from linkbot.application.dtos.base import DTO
from linkbot.domain.value_objects.request_input import RequestType


class LinkPageStatus(str, Enum):
    """Variant of the link page to render."""

    FOUND = "found"
    NOT_FOUND = "not_found"
    DEGRADED = "degraded"
    ERROR = "error"


class LinkPage(DTO):
    """View model for the link resolution page."""

    token: str
    status: LinkPageStatus
    link: str
    display_value: Optional[str] = None
    request_type: Optional[RequestType] = None
