"""
webshop.controllers.orders

Order handlers.

Responsibilities:
- List orders (admins see every order, customers only their own).
- View a single order without revealing other customers' orders.
- Create an order from a basket; admins do not place orders.
"""

from __future__ import annotations

from typing import Any

from starlette.responses import Response

from webshop.api import responses
from webshop.controllers.schemas import OrderOut
from webshop.domain import OrderItem
from webshop.routing.context import HandlerCall

# Product fields copied into the order snapshot.
PRODUCT_SNAPSHOT_FIELDS = ("_id", "name", "price", "description")


def _is_quantity(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value >= 1


def validate_order(data: dict[str, Any]) -> list[str]:
    items = data.get("items")
    if not isinstance(items, list) or not items:
        return ["Missing list of products"]

    errors: list[str] = []
    for item in items:
        if not isinstance(item, dict):
            errors.append("Invalid order item")
            continue

        if "quantity" not in item:
            errors.append("Missing product quantity")
        elif not _is_quantity(item["quantity"]):
            errors.append("Invalid product quantity")

        product = item.get("product")
        if product is None:
            errors.append("Missing product")
        elif not isinstance(product, dict):
            errors.append("Invalid product")
        else:
            if "_id" not in product:
                errors.append("Missing product id")
            if "name" not in product:
                errors.append("Missing product name")
            if "price" not in product:
                errors.append("Missing product price")
    return errors


def _to_item(raw: dict[str, Any]) -> OrderItem:
    product = raw["product"]
    return OrderItem(
        product={k: product[k] for k in PRODUCT_SNAPSHOT_FIELDS if k in product},
        quantity=raw["quantity"],
    )


async def list_orders(call: HandlerCall) -> Response:
    principal = call.actor
    if principal.is_admin:
        orders = await call.uow.orders.list_all()
    else:
        orders = await call.uow.orders.list_for_customer(principal.subject)
    return responses.send_json([OrderOut.of(o).to_json() for o in orders])


async def view_order(call: HandlerCall) -> Response:
    principal = call.actor
    order = await call.uow.orders.get(call.resource_id or "")
    # Someone else's order is reported exactly like a missing one.
    if order is None or (not principal.is_admin and order.customer_id != principal.subject):
        return responses.not_found()
    return responses.send_json(OrderOut.of(order).to_json())


async def create_order(call: HandlerCall) -> Response:
    principal = call.actor
    errors = validate_order(call.data)
    if errors:
        return responses.bad_request(errors)

    order = await call.uow.orders.create(
        customer_id=principal.subject,
        items=[_to_item(raw) for raw in call.data["items"]],
    )
    return responses.created_resource(OrderOut.of(order).to_json())
