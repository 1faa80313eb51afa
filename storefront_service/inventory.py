"""Inventory reservation against product availability counts."""

from collections import Counter
from typing import Any

from bson import ObjectId

from storefront_service.errors import InsufficientStock, InvalidRequest, NotFound, StoreError
from storefront_service.logger import logger
from storefront_service.store import DocumentCollection, parse_object_id

AVAILABILITY_FIELD = "availability"


def compute_demand(cart: Any) -> Counter:
    """Count how many units of each product a cart requests.

    Args:
        cart: Sequence of cart lines, each a mapping with an ``_id``.

    Returns:
        Counter: ObjectId -> requested units, in order of first appearance.

    Raises:
        InvalidRequest: If the cart is not a non-empty list of lines with ids.
    """
    if not isinstance(cart, list) or not cart:
        raise InvalidRequest("cart must not be a empty array")

    demand: Counter = Counter()
    for line in cart:
        if not isinstance(line, dict) or "_id" not in line:
            raise InvalidRequest("every cart line must have an _id")
        demand[parse_object_id(line["_id"])] += 1
    return demand


class InventoryReservationEngine:
    """Checks and decrements product availability for a cart.

    Each distinct product is decremented with a single conditional update
    (``availability >= demand``), so two carts racing for the last unit
    cannot both win. The decrements for different products are independent:
    a failure part-way through leaves earlier products decremented unless
    ``compensate`` is enabled.
    """

    def __init__(self, products: DocumentCollection, compensate: bool = False):
        self.products = products
        self.compensate = compensate

    async def reserve(self, cart: Any) -> dict[ObjectId, int]:
        """Reserve stock for every line in the cart.

        Args:
            cart: List of cart lines (``{"_id": ...}`` mappings).

        Returns:
            dict: The demand that was applied, keyed by product id.

        Raises:
            InvalidRequest: The cart is empty or malformed.
            NotFound: A product id does not exist.
            InsufficientStock: A product has fewer units than requested.
            StoreError: The document store failed.
        """
        demand = compute_demand(cart)
        applied: dict[ObjectId, int] = {}

        for product_id, quantity in demand.items():
            try:
                await self._decrement(product_id, quantity)
            except (NotFound, InsufficientStock, StoreError):
                if self.compensate and applied:
                    await self._release(applied)
                raise
            applied[product_id] = quantity

        logger.info(f"Reserved {sum(demand.values())} unit(s) across {len(demand)} product(s)")
        return applied

    async def _decrement(self, product_id: ObjectId, quantity: int) -> None:
        if await self.products.increment(product_id, AVAILABILITY_FIELD, -quantity, minimum=quantity):
            return

        # The conditional update matched nothing: find out why
        product = await self.products.find_by_id(product_id)
        if product is None:
            logger.warning(f"Reservation failed: product {product_id} not found")
            raise NotFound(str(product_id))

        available = product.get(AVAILABILITY_FIELD) or 0
        logger.warning(
            f"Reservation failed: product {product_id} has {available} unit(s), {quantity} requested"
        )
        raise InsufficientStock(str(product_id), requested=quantity, available=available)

    async def _release(self, applied: dict[ObjectId, int]) -> None:
        """Give back units already taken by a reservation that failed later."""
        for product_id, quantity in applied.items():
            try:
                await self.products.increment(product_id, AVAILABILITY_FIELD, quantity)
                logger.info(f"Released {quantity} unit(s) of product {product_id}")
            except StoreError as e:
                # Nothing left to retry with; leave a trail for manual repair
                logger.error(f"Could not release {quantity} unit(s) of product {product_id}: {e.detail}")
