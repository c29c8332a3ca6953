"""
Schema bootstrap.

Runs once on startup. Every statement is idempotent, so restarting against an
existing database is a no-op.
"""

from __future__ import annotations

import logging

from core import db

logger = logging.getLogger(__name__)

# Order matters: parents before children.
TABLES: list[tuple[str, str]] = [
    (
        "categories",
        """
        CREATE TABLE IF NOT EXISTS categories (
          id bigserial PRIMARY KEY,
          name varchar(100) NOT NULL UNIQUE,
          image varchar(255),
          description text,
          created_at timestamptz NOT NULL DEFAULT now()
        )
        """,
    ),
    (
        "products",
        """
        CREATE TABLE IF NOT EXISTS products (
          id bigserial PRIMARY KEY,
          name varchar(255) NOT NULL,
          price numeric(10, 2) NOT NULL,
          description text,
          short_description varchar(255),
          category_id bigint REFERENCES categories(id) ON DELETE SET NULL,
          in_stock boolean NOT NULL DEFAULT true,
          created_at timestamptz NOT NULL DEFAULT now()
        )
        """,
    ),
    (
        "product_images",
        """
        CREATE TABLE IF NOT EXISTS product_images (
          id bigserial PRIMARY KEY,
          product_id bigint NOT NULL REFERENCES products(id) ON DELETE CASCADE,
          image_url varchar(255) NOT NULL
        )
        """,
    ),
    (
        "product_features",
        """
        CREATE TABLE IF NOT EXISTS product_features (
          id bigserial PRIMARY KEY,
          product_id bigint NOT NULL REFERENCES products(id) ON DELETE CASCADE,
          feature varchar(255) NOT NULL
        )
        """,
    ),
]

INDEXES: list[str] = [
    # Backs ON CONFLICT (name) when the table predates the UNIQUE column constraint.
    "CREATE UNIQUE INDEX IF NOT EXISTS categories_name_key ON categories (name)",
    "CREATE INDEX IF NOT EXISTS products_category_id_idx ON products (category_id)",
    "CREATE INDEX IF NOT EXISTS product_images_product_id_idx ON product_images (product_id)",
    "CREATE INDEX IF NOT EXISTS product_features_product_id_idx ON product_features (product_id)",
]


async def ensure_schema() -> None:
    """
    Create the catalog tables (and their lookup indexes) if missing.
    """
    for table, ddl in TABLES:
        await db.execute(ddl)
        logger.info("schema_table_ready table=%s", table)

    for ddl in INDEXES:
        await db.execute(ddl)
