"""APOD routes — today's picture and a picture for a given date."""

import logging
import re

from fastapi import APIRouter, Depends, Query, Request

from errors import (
    InvalidParameterFormatError,
    MissingParameterError,
    UpstreamError,
    UpstreamRejectedError,
    UpstreamUnavailableError,
)
from services.apod import APOD_FIRST_DATE, ApodService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/space/apod")

# ASCII digits only, matched with fullmatch so a trailing newline is rejected.
DATE_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2}", re.ASCII)


def get_apod_service(request: Request) -> ApodService:
    return request.app.state.apod_service


@router.get("/today")
async def apod_today(service: ApodService = Depends(get_apod_service)) -> dict:
    """Picture of the day for today."""
    try:
        return await service.fetch()
    except UpstreamError as e:
        logger.warning("APOD fetch for today failed: %s", e)
        raise UpstreamUnavailableError(
            "Failed to fetch APOD for today",
            upstream_status=e.upstream_status,
            payload=e.payload,
        ) from e


@router.get("/date")
async def apod_for_date(
    date: str | None = Query(None),
    service: ApodService = Depends(get_apod_service),
) -> dict:
    """Picture of the day for ?date=YYYY-MM-DD."""
    if not date:
        raise MissingParameterError("date", "YYYY-MM-DD")
    if not DATE_PATTERN.fullmatch(date):
        raise InvalidParameterFormatError("date", date, "YYYY-MM-DD")

    try:
        return await service.fetch(date)
    except UpstreamError as e:
        logger.warning("APOD fetch for %s failed: %s", date, e)
        if isinstance(e, UpstreamRejectedError) and e.status_code == 400:
            raise UpstreamRejectedError(
                f"No APOD available for this date. APOD images start at {APOD_FIRST_DATE}.",
                upstream_status=e.upstream_status,
                payload=e.payload,
            ) from e
        raise UpstreamUnavailableError(
            "Failed to fetch APOD for given date",
            upstream_status=e.upstream_status,
            payload=e.payload,
        ) from e
