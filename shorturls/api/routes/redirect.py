"""Short link redirection endpoint with click counting."""

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import PlainTextResponse, RedirectResponse
from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from shorturls.api.dependencies import get_link_service
from shorturls.core.decorators import log_link_click_decorator
from shorturls.db.session import get_db
from shorturls.services.exceptions import LinkNotFoundError
from shorturls.services.links import LinkService

router = APIRouter(tags=["redirect"])


@router.get(
    "/{shorturl}",
    response_class=RedirectResponse,
    status_code=status.HTTP_302_FOUND,
    responses={404: {"description": "Unknown short code"}},
)
@log_link_click_decorator()
async def redirect_to_full_url(
    request: Request,
    shorturl: str,
    db: AsyncSession = Depends(get_db),
    link_service: LinkService = Depends(get_link_service),
):
    """Count the click and redirect to the link's destination."""
    try:
        link = await link_service.resolve_and_record_click(db, shorturl)
    except LinkNotFoundError:
        logger.info(f"Short code not found: {shorturl}")
        return PlainTextResponse("Not Found", status_code=status.HTTP_404_NOT_FOUND)

    return RedirectResponse(url=link.full, status_code=status.HTTP_302_FOUND)
