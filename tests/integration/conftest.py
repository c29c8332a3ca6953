import os

import pytest

from core import db, schema


@pytest.fixture
async def store():
    """Connect, bootstrap the schema and start every test from empty tables."""
    await db.init_pool(os.environ["TEST_DATABASE_URL"])
    try:
        await schema.ensure_schema()
        await db.execute(
            "TRUNCATE product_features, product_images, products, categories RESTART IDENTITY CASCADE"
        )
        yield
    finally:
        await db.close_pool()
