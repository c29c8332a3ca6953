"""
Category API endpoints.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Path, status

from core import config, pagination
from core.errors import not_found

from . import schemas, service

router = APIRouter(prefix="/api/categories")

CategoryId = Annotated[int, Path(ge=1, le=config.MAX_BIGINT)]


@router.get("")
async def list_categories() -> list[dict]:
    return await service.list_categories()


@router.get("/{category_id}")
async def get_category(category_id: CategoryId) -> dict:
    category = await service.get_category(category_id)
    if category is None:
        raise not_found("Category not found")
    return category


@router.get("/{category_id}/products")
async def get_category_products(
    category_id: CategoryId,
    page: str | None = None,
    limit: str | None = None,
) -> dict:
    result = await service.category_products(
        category_id,
        page=pagination.parse_page(page),
        limit=pagination.parse_limit(limit),
    )
    if result is None:
        raise not_found("Category not found")
    return result


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_category(request: schemas.CategoryCreate) -> dict:
    return await service.create_category(request)


@router.put("/{category_id}")
async def update_category(category_id: CategoryId, request: schemas.CategoryUpdate) -> dict:
    category = await service.update_category(category_id, request)
    if category is None:
        raise not_found("Category not found")
    return category


@router.delete("/{category_id}")
async def delete_category(category_id: CategoryId) -> dict:
    deleted = await service.delete_category(category_id)
    if not deleted:
        raise not_found("Category not found")
    return {"message": "Category deleted successfully"}
