"""
webshop.controllers.products

Product catalogue handlers.

Responsibilities:
- List/view products for any authenticated caller.
- Create/update/delete products (the gate restricts these to admins).
"""

from __future__ import annotations

from dataclasses import replace
from typing import Any

from starlette.responses import Response

from webshop.api import responses
from webshop.controllers.schemas import ProductOut
from webshop.routing.context import HandlerCall

WRITABLE_FIELDS = ("name", "price", "image", "description")


def _is_number(value: Any) -> bool:
    return isinstance(value, int | float) and not isinstance(value, bool)


def validate_product(data: dict[str, Any]) -> list[str]:
    errors: list[str] = []

    name = data.get("name")
    if not isinstance(name, str) or not name.strip():
        errors.append("Missing name")

    price = data.get("price")
    if price is None:
        errors.append("Missing price")
    elif not _is_number(price) or price <= 0:
        errors.append("Invalid price")

    for optional in ("image", "description"):
        value = data.get(optional)
        if value is not None and not isinstance(value, str):
            errors.append(f"Invalid {optional}")

    return errors


def _optional_text(value: Any) -> str | None:
    return value.strip() if isinstance(value, str) else None


async def list_products(call: HandlerCall) -> Response:
    products = await call.uow.products.list_all()
    return responses.send_json([ProductOut.of(p).to_json() for p in products])


async def create_product(call: HandlerCall) -> Response:
    data = call.data
    errors = validate_product(data)
    if errors:
        return responses.bad_request(errors)

    name = data["name"].strip()
    if await call.uow.products.find_by_name(name) is not None:
        return responses.bad_request("Product is already in database")

    product = await call.uow.products.create(
        name=name,
        price=float(data["price"]),
        image=_optional_text(data.get("image")),
        description=_optional_text(data.get("description")),
    )
    return responses.created_resource(ProductOut.of(product).to_json())


async def view_product(call: HandlerCall) -> Response:
    product = await call.uow.products.get(call.resource_id or "")
    if product is None:
        return responses.not_found()
    return responses.send_json(ProductOut.of(product).to_json())


async def update_product(call: HandlerCall) -> Response:
    product = await call.uow.products.get(call.resource_id or "")
    if product is None:
        return responses.not_found()

    # Validate the merged view so partial updates keep the stored values.
    merged = {
        "name": product.name,
        "price": product.price,
        "image": product.image,
        "description": product.description,
    }
    merged.update({k: v for k, v in call.data.items() if k in WRITABLE_FIELDS})
    errors = validate_product(merged)
    if errors:
        return responses.bad_request(errors)

    saved = await call.uow.products.update(
        replace(
            product,
            name=merged["name"].strip(),
            price=float(merged["price"]),
            image=_optional_text(merged["image"]),
            description=_optional_text(merged["description"]),
        )
    )
    return responses.send_json(ProductOut.of(saved).to_json())


async def delete_product(call: HandlerCall) -> Response:
    product = await call.uow.products.get(call.resource_id or "")
    if product is None:
        return responses.not_found()
    await call.uow.products.delete(product.id)
    return responses.send_json(ProductOut.of(product).to_json())
