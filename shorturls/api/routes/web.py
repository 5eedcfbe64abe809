"""Management page and HTML form endpoints."""

from pathlib import Path as FilePath
from typing import Optional

from fastapi import APIRouter, Depends, Form, Path, Request, status
from fastapi.responses import HTMLResponse, PlainTextResponse, RedirectResponse
from fastapi.templating import Jinja2Templates
from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from shorturls.api.dependencies import get_link_service
from shorturls.db.session import get_db
from shorturls.services.exceptions import (
    MissingURLError,
    InvalidURLError,
    InvalidCodeError,
    CodeAlreadyExistsError,
    LinkNotFoundError,
)
from shorturls.services.links import LinkService

TEMPLATES_DIR = FilePath(__file__).resolve().parent.parent.parent / "templates"
templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

INVALID_URL_MESSAGE = "Invalid full URL"
INVALID_CODE_MESSAGE = "Invalid short code. Must be 6-8 alphanumeric characters."
CODE_TAKEN_MESSAGE = "Short code already exists. Please choose a different one."

router = APIRouter(tags=["web"])

# Single-segment routes that would also match fixed paths; included after them
catch_all_router = APIRouter(tags=["web"])


@router.get("/", response_class=HTMLResponse, include_in_schema=False)
async def index(
    request: Request,
    db: AsyncSession = Depends(get_db),
    link_service: LinkService = Depends(get_link_service),
):
    """Render the management page with every link."""
    links = await link_service.list_links(db)
    return templates.TemplateResponse(request, "index.html", {"links": links})


@router.post("/shorturls", include_in_schema=False)
async def create_from_form(
    full_url: Optional[str] = Form(None, alias="fullUrl"),
    full: Optional[str] = Form(None),
    code: Optional[str] = Form(None),
    db: AsyncSession = Depends(get_db),
    link_service: LinkService = Depends(get_link_service),
):
    """Create a link from the management page form and go back to it."""
    destination = full_url if full_url is not None else full
    if code is not None and not code.strip():
        code = None

    try:
        await link_service.create_link(db, full=destination, code=code)
    except (MissingURLError, InvalidURLError):
        return PlainTextResponse(INVALID_URL_MESSAGE, status_code=status.HTTP_400_BAD_REQUEST)
    except InvalidCodeError:
        return PlainTextResponse(INVALID_CODE_MESSAGE, status_code=status.HTTP_400_BAD_REQUEST)
    except CodeAlreadyExistsError:
        return PlainTextResponse(CODE_TAKEN_MESSAGE, status_code=status.HTTP_409_CONFLICT)

    return RedirectResponse(url="/", status_code=status.HTTP_302_FOUND)


async def _delete_and_return(link_id: str, db: AsyncSession, link_service: LinkService):
    try:
        await link_service.delete_link_by_id(db, link_id)
    except LinkNotFoundError:
        logger.info(f"Delete requested for unknown link id: {link_id}")
        return PlainTextResponse("Not Found", status_code=status.HTTP_404_NOT_FOUND)
    return RedirectResponse(url="/", status_code=status.HTTP_302_FOUND)


@catch_all_router.delete("/{link_id}", include_in_schema=False)
async def delete_link(
    link_id: str = Path(..., description="Id of the link to delete"),
    db: AsyncSession = Depends(get_db),
    link_service: LinkService = Depends(get_link_service),
):
    return await _delete_and_return(link_id, db, link_service)


@catch_all_router.post("/{link_id}", include_in_schema=False)
async def delete_link_from_form(
    link_id: str = Path(..., description="Id of the link to delete"),
    db: AsyncSession = Depends(get_db),
    link_service: LinkService = Depends(get_link_service),
):
    """HTML forms cannot send DELETE, so the page posts here instead."""
    return await _delete_and_return(link_id, db, link_service)
