"""Structured logger for observability."""

import logging
from typing import Any, Optional

# Named "linkbot" logger; structured fields are rendered as key=value pairs
_logger = logging.getLogger("linkbot")
_logger.setLevel(logging.INFO)

# Create console handler if not exists
if not _logger.handlers:
    handler = logging.StreamHandler()
    handler.setLevel(logging.INFO)
    formatter = logging.Formatter(
        "%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    handler.setFormatter(formatter)
    _logger.addHandler(handler)


def log_event(
    user_id: Optional[int],
    event_id: str,
    component: str,
    level: int = logging.INFO,
    **kwargs: Any,
) -> None:
    """
    Log structured event for a bot update or HTTP request.

    Args:
        user_id: Telegram user identifier, if known
        event_id: Event identifier (UUID string)
        component: Component name (e.g., 'telegram', 'flow', 'http')
        level: Log level (default: INFO)
        **kwargs: Additional structured fields to log
    """
    fields = {
        "user_id": user_id,
        "event_id": event_id,
        "component": component,
    }
    fields.update(kwargs)

    # Format as key=value pairs for readability
    log_parts = [f"{k}={v!r}" for k, v in fields.items()]
    log_message = " | ".join(log_parts)

    _logger.log(level, log_message)


def log_link_resolved(
    event_id: str,
    token: str,
    page_status: str,
    **kwargs: Any,
) -> None:
    """
    Log link page resolution.

    Args:
        event_id: Event identifier
        token: Requested token
        page_status: Rendered page variant
        **kwargs: Additional fields
    """
    log_event(
        user_id=None,
        event_id=event_id,
        component="link_page",
        token=token,
        page_status=page_status,
        **kwargs,
    )


# Export logger instance
logger = _logger
