"""HTTP routes."""

from pathlib import Path
from uuid import uuid4

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import HTMLResponse, PlainTextResponse
from fastapi.templating import Jinja2Templates

from linkbot.application.dtos.link_page import LinkPageStatus
from linkbot.application.use_cases.resolve_link_use_case import ResolveLinkUseCase
from linkbot.application.use_cases.user_messages_ru import UserMessagesRU
from linkbot.domain.value_objects.public_link import LINK_PATH
from linkbot.infrastructure.logging.logger import log_link_resolved
from linkbot.infrastructure.wiring.dependencies import get_resolve_link_use_case

router = APIRouter()

templates = Jinja2Templates(directory=str(Path(__file__).parent / "templates"))

STATUS_CODES = {
    LinkPageStatus.FOUND: status.HTTP_200_OK,
    LinkPageStatus.DEGRADED: status.HTTP_200_OK,
    LinkPageStatus.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    LinkPageStatus.ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


@router.get("/", response_class=PlainTextResponse)
async def root() -> str:
    """
    Landing endpoint.

    Returns:
        Plain text status line
    """
    return "Telegram bot is running."


@router.get("/health", status_code=status.HTTP_200_OK)
async def health_check() -> dict[str, str]:
    """
    Health check endpoint for liveness/readiness.

    Returns:
        Health status
    """
    return {"status": "ok"}


@router.get(LINK_PATH + "{token}", response_class=HTMLResponse)
async def link_page(
    request: Request,
    token: str,
    use_case: ResolveLinkUseCase = Depends(get_resolve_link_use_case),
) -> HTMLResponse:
    """
    Render the page for a generated link.

    Args:
        request: FastAPI request object (needed by the template renderer)
        token: Token from the URL path
        use_case: Resolve link use case

    Returns:
        HTML page: 200 when found or degraded, 404 when unknown, 500 on lookup failure
    """
    event_id = str(uuid4())
    page = await use_case.execute(token)

    log_link_resolved(event_id=event_id, token=token, page_status=page.status.value)

    return templates.TemplateResponse(
        request,
        "link_page.html",
        {"page": page, "messages": UserMessagesRU, "statuses": LinkPageStatus},
        status_code=STATUS_CODES[page.status],
    )
