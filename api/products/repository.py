"""
Product persistence (raw SQL).

A product owns its `product_images` and `product_features` rows. Writes that
touch more than one table run inside `db.transaction()`, so a product is never
visible half-written.

Reads return the external record shape:
    {id, name, price, description, shortDescription, inStock, created_at,
     category, images, features}
where `category` is the category name (or None) and images/features are in
insertion order.
"""

from __future__ import annotations

import asyncio
import logging
from decimal import Decimal
from typing import Any, Sequence

import asyncpg

from core import db, pagination

logger = logging.getLogger(__name__)

# External field name -> products column.
SCALAR_COLUMNS: dict[str, str] = {
    "name": "name",
    "price": "price",
    "description": "description",
    "shortDescription": "short_description",
    "inStock": "in_stock",
}

PRODUCT_SELECT = """
    SELECT
      p.id,
      p.name,
      p.price,
      p.description,
      p.short_description AS "shortDescription",
      p.in_stock AS "inStock",
      p.created_at,
      p.category_id,
      c.name AS category_name
    FROM products p
    LEFT JOIN categories c ON c.id = p.category_id
"""


def _json_price(value: Any) -> Any:
    return float(value) if isinstance(value, Decimal) else value


def _scalar_fields(data: dict[str, Any]) -> dict[str, Any]:
    return {key: data[key] for key in SCALAR_COLUMNS if key in data}


def to_product_record(row: dict[str, Any], *, images: list[str], features: list[str]) -> dict[str, Any]:
    record = {k: v for k, v in row.items() if k not in ("category_id", "category_name")}
    record["price"] = _json_price(record.get("price"))
    record["category"] = row.get("category_name")
    record["images"] = images
    record["features"] = features
    return record


async def fetch_images(product_id: int) -> list[str]:
    rows = await db.fetch_all(
        """
        SELECT image_url
        FROM product_images
        WHERE product_id = $1
        ORDER BY id
        """,
        product_id,
    )
    return [str(r["image_url"]) for r in rows]


async def fetch_features(product_id: int) -> list[str]:
    rows = await db.fetch_all(
        """
        SELECT feature
        FROM product_features
        WHERE product_id = $1
        ORDER BY id
        """,
        product_id,
    )
    return [str(r["feature"]) for r in rows]


async def _aggregate(row: dict[str, Any]) -> dict[str, Any]:
    product_id = int(row["id"])
    images, features = await asyncio.gather(fetch_images(product_id), fetch_features(product_id))
    return to_product_record(row, images=images, features=features)


async def paginate_products(
    *,
    page: int,
    limit: int,
    where: str = "",
    args: Sequence[Any] = (),
) -> dict[str, Any]:
    """
    Count, fetch one page, then attach images/features to every row.

    `where` is an optional SQL filter over `products p` using placeholders
    $1..$n for `args`; LIMIT/OFFSET are appended after them.
    """
    where_sql = f"WHERE {where}" if where else ""
    count_row = await db.fetch_one(
        f"SELECT count(*) AS total FROM products p {where_sql}",
        *args,
    )
    total = int((count_row or {}).get("total", 0))

    n = len(args)
    rows = await db.fetch_all(
        f"""
        {PRODUCT_SELECT}
        {where_sql}
        ORDER BY p.id
        LIMIT ${n + 1}
        OFFSET ${n + 2}
        """,
        *args,
        limit,
        pagination.offset_for(page, limit),
    )

    # Per-product fetches run concurrently; gather keeps row order.
    products = await asyncio.gather(*(_aggregate(row) for row in rows))
    return {
        "products": list(products),
        "pagination": pagination.page_meta(total, page, limit),
    }


async def list_products(*, page: int, limit: int) -> dict[str, Any]:
    return await paginate_products(page=page, limit=limit)


async def list_products_in_category(category_id: int, *, page: int, limit: int) -> dict[str, Any]:
    return await paginate_products(
        page=page,
        limit=limit,
        where="p.category_id = $1",
        args=(category_id,),
    )


async def get_product(product_id: int) -> dict[str, Any] | None:
    row = await db.fetch_one(
        f"""
        {PRODUCT_SELECT}
        WHERE p.id = $1
        """,
        product_id,
    )
    if row is None:
        return None
    return await _aggregate(row)


async def resolve_category_id(conn: asyncpg.Connection, name: str) -> int:
    """
    Get-or-create a category by name and return its id.

    The upsert relies on the UNIQUE(name) constraint, so two writers racing
    on the same new name end up with one row.
    """
    row = await conn.fetchrow("SELECT id FROM categories WHERE name = $1", name)
    if row is not None:
        return int(row["id"])

    row = await conn.fetchrow(
        """
        INSERT INTO categories (name)
        VALUES ($1)
        ON CONFLICT (name) DO UPDATE
        SET name = EXCLUDED.name
        RETURNING id
        """,
        name,
    )
    if row is None:
        raise RuntimeError("Failed to create category.")
    logger.info("category_created name=%s category_id=%s", name, row["id"])
    return int(row["id"])


async def _insert_images(conn: asyncpg.Connection, product_id: int, images: Sequence[str]) -> None:
    if not images:
        return
    await conn.executemany(
        "INSERT INTO product_images (product_id, image_url) VALUES ($1, $2)",
        [(product_id, url) for url in images],
    )


async def _insert_features(conn: asyncpg.Connection, product_id: int, features: Sequence[str]) -> None:
    if not features:
        return
    await conn.executemany(
        "INSERT INTO product_features (product_id, feature) VALUES ($1, $2)",
        [(product_id, feature) for feature in features],
    )


async def create_product(data: dict[str, Any]) -> dict[str, Any]:
    """
    Insert a product, its category link, images, and features in one transaction.

    Returns `data` merged with the generated id.
    """
    category = data.get("category")
    images = list(data.get("images") or [])
    features = list(data.get("features") or [])
    fields = _scalar_fields(data)

    async with db.transaction() as conn:
        category_id = await resolve_category_id(conn, category) if category else None

        columns = [SCALAR_COLUMNS[key] for key in fields] + ["category_id"]
        values = list(fields.values()) + [category_id]
        column_sql = ", ".join(columns)
        placeholders = ", ".join(f"${i}" for i in range(1, len(values) + 1))
        row = await conn.fetchrow(
            f"""
            INSERT INTO products ({column_sql})
            VALUES ({placeholders})
            RETURNING id
            """,
            *values,
        )
        if row is None:
            raise RuntimeError("Failed to insert product.")

        product_id = int(row["id"])
        await _insert_images(conn, product_id, images)
        await _insert_features(conn, product_id, features)

    logger.info(
        "product_created product_id=%s category_id=%s images=%s features=%s",
        product_id,
        category_id,
        len(images),
        len(features),
    )
    return {"id": product_id, **data, "price": _json_price(data.get("price"))}


async def update_product(product_id: int, changes: dict[str, Any]) -> bool:
    """
    Apply a partial update in one transaction.

    Only keys present in `changes` are touched:
    - `category`: None clears the link, a name is resolved (get-or-create);
    - scalar fields: one UPDATE when at least one is present;
    - `images` / `features`: existing rows are deleted and replaced by the
      given list (None or [] leaves none). Absent keys keep existing rows.

    Returns False when the product does not exist.
    """
    fields = {SCALAR_COLUMNS[key]: value for key, value in _scalar_fields(changes).items()}

    async with db.transaction() as conn:
        exists = await conn.fetchrow("SELECT id FROM products WHERE id = $1 FOR UPDATE", product_id)
        if exists is None:
            return False

        if "category" in changes:
            name = changes["category"]
            fields["category_id"] = await resolve_category_id(conn, name) if name else None

        if fields:
            assignments = ", ".join(f"{column} = ${i}" for i, column in enumerate(fields, start=2))
            await conn.execute(
                f"UPDATE products SET {assignments} WHERE id = $1",
                product_id,
                *fields.values(),
            )

        if "images" in changes:
            await conn.execute("DELETE FROM product_images WHERE product_id = $1", product_id)
            await _insert_images(conn, product_id, changes["images"] or [])

        if "features" in changes:
            await conn.execute("DELETE FROM product_features WHERE product_id = $1", product_id)
            await _insert_features(conn, product_id, changes["features"] or [])

    logger.info("product_updated product_id=%s fields=%s", product_id, sorted(changes))
    return True


async def delete_product(product_id: int) -> bool:
    """
    Delete a product. Images and features go with it (ON DELETE CASCADE).
    """
    row = await db.fetch_one(
        """
        DELETE FROM products
        WHERE id = $1
        RETURNING id
        """,
        product_id,
    )
    if row is not None:
        logger.info("product_deleted product_id=%s", product_id)
    return row is not None
