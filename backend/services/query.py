"""Filter, search, sort and paginate the carbon intensity dataset.

Everything here is a pure function of (dataset, params). Query parameters
arrive as raw strings and are parsed leniently: anything unparseable simply
disables the stage it belongs to instead of raising.

Field precedence for records whose upstream schema varies:
- code: ``country_code``, then ``code``
- intensity: ``carbon_intensity``, then ``intensity``, then 0
- sort value: the requested field, then intensity as above
"""

import math
import re
import unicodedata
from dataclasses import dataclass
from functools import cmp_to_key

_FLOAT_PREFIX = re.compile(
    r"\s*([+-]?(?:Infinity|\d+\.?\d*(?:[eE][+-]?\d+)?|\.\d+(?:[eE][+-]?\d+)?))"
)
_INT_PREFIX = re.compile(r"\s*([+-]?\d+)")


@dataclass(frozen=True)
class QueryParams:
    """Raw query string values. Empty strings are treated as absent."""

    country: str | None = None
    country_code: str | None = None
    min_intensity: str | None = None
    max_intensity: str | None = None
    search: str | None = None
    sort: str | None = None
    order: str | None = None
    page: str | None = None
    limit: str | None = None


def parse_float(value: str | None) -> float | None:
    """Leading-number float parse: '12.5kg' -> 12.5, 'abc' -> None."""
    if not value:
        return None
    match = _FLOAT_PREFIX.match(value)
    if not match:
        return None
    return float(match.group(1))


def parse_int(value: str | None) -> int | None:
    """Leading-digits int parse: '3rd' -> 3, '' -> None."""
    if not value:
        return None
    match = _INT_PREFIX.match(value)
    if not match:
        return None
    return int(match.group(1))


def _first_present(record: dict, *fields: str, default=None):
    for field in fields:
        value = record.get(field)
        if value is not None:
            return value
    return default


def record_code(record: dict):
    return _first_present(record, "country_code", "code")


def record_intensity(record: dict):
    return _first_present(record, "carbon_intensity", "intensity", default=0)


def _to_number(value) -> float:
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value.strip() or 0)
        except ValueError:
            return math.nan
    return math.nan


def _split_tokens(raw: str) -> list[str]:
    return [token.strip() for token in raw.split(",")]


# ---------------------------------------------------------------------------
# Pipeline stages
# ---------------------------------------------------------------------------

def filter_country(records: list[dict], raw: str) -> list[dict]:
    """Keep records whose country contains any comma-separated token."""
    tokens = [t.lower() for t in _split_tokens(raw)]
    return [
        r for r in records
        if isinstance(r.get("country"), str)
        and any(t in r["country"].lower() for t in tokens)
    ]


def filter_country_code(records: list[dict], raw: str) -> list[dict]:
    """Keep records whose code exactly equals one of the uppercased tokens."""
    codes = {t.upper() for t in _split_tokens(raw)}
    return [r for r in records if record_code(r) in codes]


def filter_min_intensity(records: list[dict], raw: str) -> list[dict]:
    threshold = parse_float(raw)
    if threshold is None:
        return records
    return [r for r in records if _to_number(record_intensity(r)) >= threshold]


def filter_max_intensity(records: list[dict], raw: str) -> list[dict]:
    threshold = parse_float(raw)
    if threshold is None:
        return records
    return [r for r in records if _to_number(record_intensity(r)) <= threshold]


def filter_search(records: list[dict], raw: str) -> list[dict]:
    term = raw.lower()
    return [
        r for r in records
        if isinstance(r.get("country"), str) and term in r["country"].lower()
    ]


def _collation_key(text: str) -> str:
    """Accent- and case-insensitive form: "Åland" -> "aland"."""
    decomposed = unicodedata.normalize("NFKD", text)
    return "".join(c for c in decomposed if not unicodedata.combining(c)).casefold()


def _cmp(a, b) -> int:
    return (a > b) - (a < b)


def _locale_compare(a: str, b: str) -> int:
    return _cmp(_collation_key(a), _collation_key(b)) or _cmp(a, b)


def _as_text(value) -> str:
    # 300.0 -> "300", matching how the upstream JSON numbers print
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _compare_values(a, b) -> int:
    if isinstance(a, str):
        return _locale_compare(a, _as_text(b))
    diff = _to_number(a) - _to_number(b)
    if math.isnan(diff):
        return 0
    return (diff > 0) - (diff < 0)


def sort_records(records: list[dict], field: str, order: str | None = None) -> list[dict]:
    """Stable sort on ``field`` falling back to intensity; ``order='desc'`` reverses."""
    direction = -1 if order == "desc" else 1

    def value(record: dict):
        return _first_present(record, field, "carbon_intensity", "intensity", default=0)

    def compare(a: dict, b: dict) -> int:
        return _compare_values(value(a), value(b)) * direction

    return sorted(records, key=cmp_to_key(compare))


def paginate(records: list[dict], page: int, limit: int) -> list[dict]:
    start = (page - 1) * limit
    end = start + limit
    # pages below 1 fall before the sequence and come back empty
    return records[max(start, 0):max(end, 0)]


# ---------------------------------------------------------------------------
# Entry points
# ---------------------------------------------------------------------------

def process(dataset: list[dict], params: QueryParams) -> dict:
    """Run the full pipeline and build the response envelope."""
    records = list(dataset)

    if params.country:
        records = filter_country(records, params.country)
    if params.country_code:
        records = filter_country_code(records, params.country_code)
    if params.min_intensity:
        records = filter_min_intensity(records, params.min_intensity)
    if params.max_intensity:
        records = filter_max_intensity(records, params.max_intensity)
    if params.search:
        records = filter_search(records, params.search)
    if params.sort:
        records = sort_records(records, params.sort, params.order)

    total = len(records)
    page = parse_int(params.page)
    if not page:
        page = 1
    limit = parse_int(params.limit)
    if limit is None or limit < 1:
        limit = total

    return {
        "success": True,
        "total": total,
        "page": page,
        "limit": limit,
        "pages": math.ceil(total / limit) if limit else 0,
        "filters_applied": {
            "country": params.country or None,
            "country_code": params.country_code or None,
            "min_intensity": params.min_intensity or None,
            "max_intensity": params.max_intensity or None,
            "search": params.search or None,
            "sort": params.sort or None,
            "order": params.order or "asc",
        },
        "data": paginate(records, page, limit),
    }


def list_countries(dataset: list[dict]) -> list[str]:
    """Sorted distinct non-empty country names across the whole dataset."""
    names = {r.get("country") for r in dataset}
    return sorted(name for name in names if isinstance(name, str) and name)
