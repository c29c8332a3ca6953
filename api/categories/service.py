"""
Category service (orchestration).
"""

from __future__ import annotations

from typing import Any

from products import repository as product_repository

from . import repository, schemas


async def list_categories() -> list[dict[str, Any]]:
    return await repository.list_categories()


async def get_category(category_id: int) -> dict[str, Any] | None:
    return await repository.get_category(category_id)


async def create_category(payload: schemas.CategoryCreate) -> dict[str, Any]:
    return await repository.create_category(
        name=payload.name,
        image=payload.image,
        description=payload.description,
    )


async def update_category(category_id: int, payload: schemas.CategoryUpdate) -> dict[str, Any] | None:
    return await repository.update_category(category_id, payload.model_dump(exclude_unset=True))


async def delete_category(category_id: int) -> bool:
    return await repository.delete_category(category_id)


async def category_products(category_id: int, *, page: int, limit: int) -> dict[str, Any] | None:
    """
    Paginated products of one category, or None if the category does not exist.

    Product shaping is shared with the product listing.
    """
    if await repository.get_category(category_id) is None:
        return None
    return await product_repository.list_products_in_category(category_id, page=page, limit=limit)
