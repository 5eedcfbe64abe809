"""REST endpoints for programmatic link management."""

from typing import List, Optional

from fastapi import APIRouter, Body, Depends, HTTPException, Path, Response, status
from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from shorturls.api import schemas
from shorturls.api.dependencies import get_link_service
from shorturls.db.session import get_db
from shorturls.services.exceptions import (
    MissingURLError,
    InvalidURLError,
    InvalidCodeError,
    CodeAlreadyExistsError,
    LinkNotFoundError,
    LinkError,
)
from shorturls.services.links import LinkService

router = APIRouter(prefix="/links", tags=["links"])

NOT_FOUND = {"error": "not_found"}
INTERNAL_ERROR = {"error": "internal_error"}


@router.get("", response_model=List[schemas.LinkResponse])
async def list_links(
    db: AsyncSession = Depends(get_db),
    link_service: LinkService = Depends(get_link_service),
):
    try:
        links = await link_service.list_links(db)
    except LinkError:
        raise HTTPException(status_code=500, detail=INTERNAL_ERROR)
    return [schemas.LinkResponse.model_validate(link) for link in links]


@router.post(
    "",
    response_model=schemas.LinkResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": schemas.ErrorResponse, "description": "Missing or invalid URL, or invalid code"},
        409: {"description": "Short code already exists"},
    },
)
async def create_link(
    payload: Optional[schemas.LinkCreateRequest] = Body(None),
    db: AsyncSession = Depends(get_db),
    link_service: LinkService = Depends(get_link_service),
):
    payload = payload or schemas.LinkCreateRequest()
    try:
        link = await link_service.create_link(db, full=payload.full, code=payload.code)
    except MissingURLError:
        raise HTTPException(status_code=400, detail={"error": "missing_full_url"})
    except InvalidURLError:
        raise HTTPException(status_code=400, detail={"error": "invalid_full_url"})
    except InvalidCodeError:
        raise HTTPException(status_code=400, detail={"error": "invalid_short_code"})
    except CodeAlreadyExistsError:
        return Response(status_code=status.HTTP_409_CONFLICT)
    except LinkError as e:
        logger.error(f"Error creating link: {e}")
        raise HTTPException(status_code=500, detail=INTERNAL_ERROR)
    return schemas.LinkResponse.model_validate(link)


@router.get(
    "/{code}",
    response_model=schemas.LinkResponse,
    responses={404: {"model": schemas.ErrorResponse, "description": "Unknown short code"}},
)
async def get_link_stats(
    code: str = Path(..., description="The short code of the link"),
    db: AsyncSession = Depends(get_db),
    link_service: LinkService = Depends(get_link_service),
):
    logger.info(f"Fetching stats for code: {code}")
    try:
        link = await link_service.get_link_by_code(db, code)
    except LinkNotFoundError:
        logger.info(f"Code not found: {code}")
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    except LinkError:
        raise HTTPException(status_code=500, detail=INTERNAL_ERROR)
    logger.info(f"Found stats for: {code}, clicks: {link.clicks}")
    return schemas.LinkResponse.model_validate(link)


@router.delete(
    "/{code}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={404: {"model": schemas.ErrorResponse, "description": "Unknown short code"}},
)
async def delete_link(
    code: str = Path(..., description="The short code of the link"),
    db: AsyncSession = Depends(get_db),
    link_service: LinkService = Depends(get_link_service),
):
    try:
        await link_service.delete_link_by_code(db, code)
    except LinkNotFoundError:
        raise HTTPException(status_code=404, detail=NOT_FOUND)
    except LinkError:
        raise HTTPException(status_code=500, detail=INTERNAL_ERROR)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
