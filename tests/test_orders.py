"""Tests for the order recorder."""

from datetime import datetime, timedelta, timezone

import pytest
from bson import ObjectId

from storefront_service.errors import InvalidRequest
from storefront_service.orders import OrderRecorder, reduce_order_lines


def test_reduce_order_lines_strips_extra_fields():
    product_id = ObjectId()
    lines = [{"_id": str(product_id), "name": "A", "color": "red", "price": 1}]
    assert reduce_order_lines(lines) == [{"_id": product_id, "name": "A"}]


def test_reduce_order_lines_keeps_duplicates_in_order():
    first, second = ObjectId(), ObjectId()
    lines = [{"_id": str(first), "name": "A"}, {"_id": str(second), "name": "B"}, {"_id": str(first), "name": "A"}]
    assert [line["_id"] for line in reduce_order_lines(lines)] == [first, second, first]


@pytest.mark.parametrize("lines", ["not a list", [1], [{"_id": "bogus", "name": "A"}], [{"name": "no id"}]])
def test_reduce_order_lines_rejects_malformed(lines):
    with pytest.raises(InvalidRequest):
        reduce_order_lines(lines)


@pytest.mark.asyncio
@pytest.mark.parametrize("name,phone", [("", "0712"), ("Ada", ""), (None, "0712"), ("Ada", None)])
async def test_create_order_requires_name_and_phone(orders, name, phone):
    with pytest.raises(InvalidRequest):
        await OrderRecorder(orders).create_order(name, phone, 10, [{"_id": str(ObjectId()), "name": "A"}])
    assert orders.all() == []


@pytest.mark.asyncio
async def test_create_order_persists_reduced_order(orders):
    product_id = ObjectId()
    before = datetime.now(timezone.utc)

    order_id = await OrderRecorder(orders).create_order(
        "Ada", "07123456789", 180, [{"_id": str(product_id), "name": "A", "color": "red"}]
    )

    stored = orders.get(order_id)
    assert stored["name"] == "Ada"
    assert stored["phone"] == "07123456789"
    assert stored["totalPrice"] == 180
    assert stored["order"] == [{"_id": product_id, "name": "A"}]
    assert before <= stored["date"] <= datetime.now(timezone.utc) + timedelta(seconds=1)
    assert stored["date"].tzinfo is not None


@pytest.mark.asyncio
async def test_create_order_does_not_touch_inventory(fake_store, products, product_ids, orders):
    chess = product_ids["Chess Club"]
    await OrderRecorder(orders).create_order("Ada", "0712", 100, [{"_id": str(chess), "name": "Chess Club"}])
    assert products.get(chess)["availability"] == 5


@pytest.mark.asyncio
async def test_create_order_accepts_missing_lines(orders):
    order_id = await OrderRecorder(orders).create_order("Ada", "0712", 0, None)
    assert orders.get(order_id)["order"] == []
