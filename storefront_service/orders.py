"""Order recording."""

from datetime import datetime, timezone
from typing import Any, Optional

from bson import ObjectId

from storefront_service.errors import InvalidRequest
from storefront_service.logger import logger
from storefront_service.store import DocumentCollection, parse_object_id


def reduce_order_lines(cart_lines: Any) -> list[dict]:
    """Strip cart lines down to ``{_id, name}``.

    Any other client-supplied attribute is dropped before persistence.

    Raises:
        InvalidRequest: If the lines are not a list of mappings with ids.
    """
    if cart_lines is None:
        return []
    if not isinstance(cart_lines, list):
        raise InvalidRequest("order must be an array")

    reduced = []
    for line in cart_lines:
        if not isinstance(line, dict):
            raise InvalidRequest("every order line must be an object")
        reduced.append({"_id": parse_object_id(line.get("_id")), "name": line.get("name")})
    return reduced


class OrderRecorder:
    """Persists orders to the order log.

    The recorder never touches stock; reserving inventory for the same
    checkout is a separate call made by the HTTP layer.
    """

    def __init__(self, orders: DocumentCollection):
        self.orders = orders

    async def create_order(
        self,
        name: Optional[str],
        phone: Optional[str],
        total_price: Any,
        cart_lines: Any,
    ) -> ObjectId:
        """Validate and store an order.

        Args:
            name: Customer name, required.
            phone: Customer phone, required.
            total_price: Client-supplied total, stored as given.
            cart_lines: Cart lines; reduced to ``{_id, name}``.

        Returns:
            ObjectId: The identifier assigned by the store.
        """
        if not name or not phone:
            raise InvalidRequest("name and phone are required")

        document = {
            "name": name,
            "phone": phone,
            "totalPrice": total_price,
            "order": reduce_order_lines(cart_lines),
            "date": datetime.now(timezone.utc),
        }
        order_id = await self.orders.insert_one(document)
        logger.info(f"Order {order_id} recorded with {len(document['order'])} line(s)")
        return order_id
