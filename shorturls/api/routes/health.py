"""Health check endpoints for monitoring application status."""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Path, status
from fastapi.responses import JSONResponse, PlainTextResponse
from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from shorturls.api import schemas
from shorturls.api.dependencies import get_link_service
from shorturls.db.session import get_db
from shorturls.services.exceptions import LinkNotFoundError, LinkLookupError
from shorturls.services.links import LinkService

router = APIRouter(tags=["health"])


@router.get(
    "/healthz",
    response_class=PlainTextResponse,
    status_code=status.HTTP_200_OK,
    summary="Liveness probe",
)
async def healthz():
    """Report that the process is serving requests. Never touches the database."""
    return PlainTextResponse("OK")


@router.get(
    "/{prefix}/healthz",
    response_model=schemas.LinkHealthResponse,
    summary="Check that a short code resolves",
    responses={
        404: {"model": schemas.LinkHealthResponse, "description": "Unknown short code"},
        500: {"model": schemas.LinkHealthResponse, "description": "Store unavailable"},
    },
)
async def link_healthz(
    prefix: str = Path(..., description="Short code to check"),
    db: AsyncSession = Depends(get_db),
    link_service: LinkService = Depends(get_link_service),
):
    """Check the service end to end for one short code."""
    logger.info(f"Health check requested with prefix: {prefix}")
    try:
        link = await link_service.get_link_by_code(db, prefix)
    except LinkNotFoundError:
        logger.info(f"Link not found for prefix: {prefix}")
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={
                "status": "not_found",
                "code": 404,
                "message": f"Link with code '{prefix}' not found",
            },
        )
    except LinkLookupError:
        logger.exception("Health check error")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "status": "error",
                "code": 500,
                "message": "Internal server error",
            },
        )

    logger.info(f"Health check passed for link: {prefix}")
    return schemas.LinkHealthResponse(
        status="ok",
        code=200,
        message="Service is running and link exists",
        link=schemas.LinkSummary.model_validate(link),
        timestamp=schemas.to_utc_iso(datetime.now(timezone.utc)),
    )
