from typing import Dict, Iterable, Optional

from pymongo import ASCENDING, DESCENDING

from ziel.crud.common import serialize
from ziel.errors import ValidationError

DEFAULT_LIMIT = 25
MAX_LIMIT = 100


def parse_sort(sort: Optional[str]):
    if not sort:
        return [("createdAt", DESCENDING)]
    sort_fields = []
    for field in sort.split(","):
        field = field.strip()
        if not field:
            continue
        if field.startswith("-"):
            sort_fields.append((field[1:], DESCENDING))
        else:
            sort_fields.append((field, ASCENDING))
    return sort_fields or [("createdAt", DESCENDING)]


def parse_select(select: Optional[str]) -> Dict[str, int]:
    projection = {"password": 0}
    if select:
        fields = [f.strip() for f in select.split(",") if f.strip() and f.strip() != "password"]
        if fields:
            projection = {field: 1 for field in fields}
    return projection


async def advanced_results(
    collection,
    filters: Dict[str, str],
    allowed_filters: Iterable[str],
    select: Optional[str] = None,
    sort: Optional[str] = None,
    page: int = 1,
    limit: int = DEFAULT_LIMIT,
):
    """Filtered, sorted, paginated listing in the ``{success, count, pagination, data}`` shape."""
    allowed = set(allowed_filters)
    unknown = [key for key in filters if key not in allowed]
    if unknown:
        raise ValidationError(f"Cannot filter on {', '.join(sorted(unknown))}")
    if page < 1:
        raise ValidationError("page must be at least 1")
    if limit < 1 or limit > MAX_LIMIT:
        raise ValidationError(f"limit must be between 1 and {MAX_LIMIT}")

    query = {key: value for key, value in filters.items() if value is not None}
    total = await collection.count_documents(query)
    skip = (page - 1) * limit

    cursor = collection.find(query, parse_select(select)).sort(parse_sort(sort)).skip(skip).limit(limit)
    docs = await cursor.to_list(length=limit)

    pagination = {}
    if skip + limit < total:
        pagination["next"] = {"page": page + 1, "limit": limit}
    if skip > 0:
        pagination["prev"] = {"page": page - 1, "limit": limit}

    return {
        "success": True,
        "count": len(docs),
        "pagination": pagination,
        "data": [serialize(doc) for doc in docs],
    }
