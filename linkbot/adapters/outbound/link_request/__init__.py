"""Link request repository adapters."""

from linkbot.adapters.outbound.link_request.link_request_repository import (
    InMemoryLinkRequestRepository,
)
from linkbot.adapters.outbound.link_request.noop_link_request_repository import (
    NoOpLinkRequestRepository,
)
from linkbot.adapters.outbound.link_request.postgres_link_request_repository import (
    PostgresLinkRequestRepository,
)

__all__ = [
    "InMemoryLinkRequestRepository",
    "NoOpLinkRequestRepository",
    "PostgresLinkRequestRepository",
]
