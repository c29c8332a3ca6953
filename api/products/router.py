"""
Product API endpoints.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Path, status

from core import config, pagination
from core.errors import not_found

from . import schemas, service

router = APIRouter(prefix="/api/products")

ProductId = Annotated[int, Path(ge=1, le=config.MAX_BIGINT)]


@router.get("")
async def list_products(page: str | None = None, limit: str | None = None) -> dict:
    """
    Paginated products. `page`/`limit` fall back to 1/10 when missing or invalid.
    """
    return await service.list_products(
        page=pagination.parse_page(page),
        limit=pagination.parse_limit(limit),
    )


@router.get("/{product_id}")
async def get_product(product_id: ProductId) -> dict:
    product = await service.get_product(product_id)
    if product is None:
        raise not_found("Product not found")
    return product


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_product(request: schemas.ProductCreate) -> dict:
    return await service.create_product(request)


@router.put("/{product_id}")
async def update_product(product_id: ProductId, request: schemas.ProductUpdate) -> dict:
    updated = await service.update_product(product_id, request)
    if not updated:
        raise not_found("Product not found")
    return {"message": "Product updated"}


@router.delete("/{product_id}")
async def delete_product(product_id: ProductId) -> dict:
    deleted = await service.delete_product(product_id)
    if not deleted:
        raise not_found("Product not found")
    return {"message": "Product deleted"}
