"""
Product service (orchestration).

Turns request models into the plain dicts the repository works with.
Not-found is returned as None/False; the router decides the status code.
"""

from __future__ import annotations

from typing import Any

from . import repository, schemas


async def list_products(*, page: int, limit: int) -> dict[str, Any]:
    return await repository.list_products(page=page, limit=limit)


async def get_product(product_id: int) -> dict[str, Any] | None:
    return await repository.get_product(product_id)


async def create_product(payload: schemas.ProductCreate) -> dict[str, Any]:
    return await repository.create_product(payload.model_dump())


async def update_product(product_id: int, payload: schemas.ProductUpdate) -> bool:
    # exclude_unset keeps "omitted" apart from "sent as null/[]".
    return await repository.update_product(product_id, payload.changes())


async def delete_product(product_id: int) -> bool:
    return await repository.delete_product(product_id)
