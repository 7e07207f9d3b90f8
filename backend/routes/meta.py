"""Static index and API description routes. No upstream calls."""

from fastapi import APIRouter

router = APIRouter()

CARBON_INTENSITY_PARAMETERS = {
    "country": "Filter by country name, comma-separated, partial match (e.g. 'germany,france')",
    "country_code": "Filter by country code, comma-separated, exact match (e.g. 'DE,FR')",
    "min_intensity": "Minimum carbon intensity, inclusive (gCO2/kWh)",
    "max_intensity": "Maximum carbon intensity, inclusive (gCO2/kWh)",
    "search": "Case-insensitive substring search on country name",
    "sort": "Field to sort by (e.g. 'carbon_intensity', 'country')",
    "order": "Sort order: 'asc' (default) or 'desc'",
    "page": "Page number, starting at 1 (default 1)",
    "limit": "Records per page (default: all records on one page)",
}


@router.get("/")
async def index() -> dict:
    """Links and example queries."""
    return {
        "message": "Carbon Intensity API",
        "endpoints": {
            "data": "/api/carbon-intensity",
            "countries": "/api/countries",
            "docs": "/api/docs",
            "health": "/health",
        },
        "examples": [
            "/api/carbon-intensity?country=germany",
            "/api/carbon-intensity?country_code=DE,FR",
            "/api/carbon-intensity?min_intensity=100&max_intensity=300",
            "/api/carbon-intensity?search=united&sort=carbon_intensity&order=desc",
            "/api/carbon-intensity?page=2&limit=10",
        ],
    }


@router.get("/api/docs")
async def docs() -> dict:
    """Machine-readable description of the endpoints and their parameters."""
    return {
        "title": "Carbon Intensity API",
        "description": "Carbon intensity by country, cached hourly from a static upstream dataset",
        "endpoints": {
            "GET /api/carbon-intensity": {
                "description": "Filtered, sorted and paginated carbon intensity records",
                "parameters": CARBON_INTENSITY_PARAMETERS,
            },
            "GET /api/countries": {
                "description": "Sorted list of distinct country names",
                "parameters": {},
            },
            "GET /health": {
                "description": "Dataset availability, record count and last refresh time",
                "parameters": {},
            },
        },
    }
