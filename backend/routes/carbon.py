"""Carbon intensity routes: cached upstream dataset + query pipeline."""

import logging

from fastapi import APIRouter, Depends, Query, Request

from errors import error_response
from services.cache import DatasetCache
from services.query import QueryParams, list_countries, process

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")


def get_dataset_cache(request: Request) -> DatasetCache:
    """The cache is owned by the app instance (see app.create_app)."""
    return request.app.state.dataset_cache


@router.get("/carbon-intensity")
async def carbon_intensity(
    country: str | None = Query(None),
    country_code: str | None = Query(None),
    min_intensity: str | None = Query(None),
    max_intensity: str | None = Query(None),
    search: str | None = Query(None),
    sort: str | None = Query(None),
    order: str | None = Query(None),
    page: str | None = Query(None),
    limit: str | None = Query(None),
    cache: DatasetCache = Depends(get_dataset_cache),
):
    """Filtered, sorted and paginated carbon intensity records."""
    params = QueryParams(
        country=country,
        country_code=country_code,
        min_intensity=min_intensity,
        max_intensity=max_intensity,
        search=search,
        sort=sort,
        order=order,
        page=page,
        limit=limit,
    )
    try:
        dataset = await cache.get_dataset()
        return process(dataset, params)
    except Exception as e:
        logger.exception("Carbon intensity endpoint failed")
        return error_response("Failed to fetch carbon intensity data", e)


@router.get("/countries")
async def countries(cache: DatasetCache = Depends(get_dataset_cache)):
    """Distinct country names across the full dataset."""
    try:
        dataset = await cache.get_dataset()
        names = list_countries(dataset)
    except Exception as e:
        logger.exception("Countries endpoint failed")
        return error_response("Failed to fetch countries", e)

    return {"success": True, "total": len(names), "countries": names}
