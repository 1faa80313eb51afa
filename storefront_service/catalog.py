"""Catalog listing and search."""

import re
from typing import Any, Optional

from storefront_service.errors import InvalidRequest
from storefront_service.store import DocumentCollection

TEXT_FIELDS = ("name", "location")
NUMERIC_FIELDS = ("price", "availability")


def parse_number(term: str) -> Optional[float]:
    """Return ``term`` as a number, or None if it is not numeric.

    Only the exact term counts: padding and digit separators, which
    ``float()`` would tolerate, make it text.
    """
    if "_" in term or term != term.strip():
        return None
    try:
        value = float(term)
    except ValueError:
        return None
    if value != value or value in (float("inf"), float("-inf")):
        return None
    return value


def build_search_query(term: Optional[str]) -> dict[str, Any]:
    """Build the MongoDB filter for a free-text/numeric search.

    Text fields match ``term`` as a case-insensitive literal substring.
    When ``term`` is numeric, price and availability must equal it.
    """
    if not term:
        raise InvalidRequest("search query is required")

    pattern = re.escape(term)
    clauses: list[dict[str, Any]] = [{field: {"$regex": pattern, "$options": "i"}} for field in TEXT_FIELDS]

    number = parse_number(term)
    if number is not None:
        if number.is_integer():
            number = int(number)
        clauses.extend({field: number} for field in NUMERIC_FIELDS)

    return {"$or": clauses}


class CatalogQueryService:
    def __init__(self, products: DocumentCollection):
        self.products = products

    async def list_all(self) -> list[dict]:
        return await self.products.find_all()

    async def search(self, term: Optional[str]) -> list[dict]:
        return await self.products.find(build_search_query(term))
