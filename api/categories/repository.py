"""
Category persistence (raw SQL).
"""

from __future__ import annotations

import logging
from typing import Any

from core import db

logger = logging.getLogger(__name__)

CATEGORY_COLUMNS = ("name", "image", "description")


async def list_categories() -> list[dict[str, Any]]:
    return await db.fetch_all(
        """
        SELECT id, name, image, description, created_at
        FROM categories
        ORDER BY name ASC
        """
    )


async def get_category(category_id: int) -> dict[str, Any] | None:
    return await db.fetch_one(
        """
        SELECT id, name, image, description, created_at
        FROM categories
        WHERE id = $1
        """,
        category_id,
    )


async def create_category(*, name: str, image: str | None = None, description: str | None = None) -> dict[str, Any]:
    row = await db.fetch_one(
        """
        INSERT INTO categories (name, image, description)
        VALUES ($1, $2, $3)
        RETURNING id, name, image, description, created_at
        """,
        name,
        image,
        description,
    )
    if row is None:
        raise RuntimeError("Failed to create category.")
    logger.info("category_created name=%s category_id=%s", name, row["id"])
    return row


async def update_category(category_id: int, changes: dict[str, Any]) -> dict[str, Any] | None:
    """
    Update only the columns present in `changes`.
    Returns the updated row, or None when the category does not exist.
    """
    fields = {column: changes[column] for column in CATEGORY_COLUMNS if column in changes}
    if not fields:
        return await get_category(category_id)

    assignments = ", ".join(f"{column} = ${i}" for i, column in enumerate(fields, start=2))
    row = await db.fetch_one(
        f"""
        UPDATE categories
        SET {assignments}
        WHERE id = $1
        RETURNING id, name, image, description, created_at
        """,
        category_id,
        *fields.values(),
    )
    if row is not None:
        logger.info("category_updated category_id=%s fields=%s", category_id, sorted(fields))
    return row


async def delete_category(category_id: int) -> bool:
    """
    Delete a category. Its products keep existing with category_id = NULL.
    """
    row = await db.fetch_one(
        """
        DELETE FROM categories
        WHERE id = $1
        RETURNING id
        """,
        category_id,
    )
    if row is not None:
        logger.info("category_deleted category_id=%s", category_id)
    return row is not None
