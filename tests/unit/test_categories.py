"""
CategoryStore and category service tests with the database mocked out.
"""
from unittest.mock import AsyncMock, patch

import pytest

from categories import repository, service
from core import db

CATEGORY = {"id": 1, "name": "Accessories", "image": None, "description": None, "created_at": None}


class TestCategoryRepository:
    @pytest.mark.asyncio
    async def test_list_is_ordered_by_name(self, monkeypatch):
        fetch_all = AsyncMock(return_value=[CATEGORY])
        monkeypatch.setattr(db, "fetch_all", fetch_all)

        assert await repository.list_categories() == [CATEGORY]
        assert "ORDER BY name ASC" in fetch_all.await_args.args[0]

    @pytest.mark.asyncio
    async def test_create_returns_row(self, monkeypatch):
        fetch_one = AsyncMock(return_value=CATEGORY)
        monkeypatch.setattr(db, "fetch_one", fetch_one)

        row = await repository.create_category(name="Accessories", description="Watches")

        assert row == CATEGORY
        assert fetch_one.await_args.args[1:] == ("Accessories", None, "Watches")

    @pytest.mark.asyncio
    async def test_update_touches_only_given_columns(self, monkeypatch):
        fetch_one = AsyncMock(return_value={**CATEGORY, "description": "New"})
        monkeypatch.setattr(db, "fetch_one", fetch_one)

        row = await repository.update_category(1, {"description": "New"})

        sql = " ".join(fetch_one.await_args.args[0].split())
        assert "SET description = $2 WHERE id = $1" in sql
        assert fetch_one.await_args.args[1:] == (1, "New")
        assert row["description"] == "New"

    @pytest.mark.asyncio
    async def test_update_with_no_changes_reads_row(self, monkeypatch):
        fetch_one = AsyncMock(return_value=CATEGORY)
        monkeypatch.setattr(db, "fetch_one", fetch_one)

        assert await repository.update_category(1, {}) == CATEGORY
        assert fetch_one.await_args.args[0].strip().startswith("SELECT")

    @pytest.mark.asyncio
    async def test_update_missing_category(self, monkeypatch):
        monkeypatch.setattr(db, "fetch_one", AsyncMock(return_value=None))

        assert await repository.update_category(7, {"name": "X"}) is None

    @pytest.mark.asyncio
    async def test_delete(self, monkeypatch):
        monkeypatch.setattr(db, "fetch_one", AsyncMock(side_effect=[{"id": 1}, None]))

        assert await repository.delete_category(1) is True
        assert await repository.delete_category(1) is False


class TestCategoryProducts:
    @pytest.mark.asyncio
    async def test_missing_category_skips_product_query(self):
        with patch("categories.service.repository.get_category", new=AsyncMock(return_value=None)), \
             patch("categories.service.product_repository.list_products_in_category", new=AsyncMock()) as listing:
            assert await service.category_products(5, page=1, limit=10) is None
            listing.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_delegates_to_product_pagination(self):
        page = {"products": [], "pagination": {"total": 0, "totalPages": 0, "currentPage": 2, "limit": 5}}
        with patch("categories.service.repository.get_category", new=AsyncMock(return_value=CATEGORY)), \
             patch("categories.service.product_repository.list_products_in_category",
                   new=AsyncMock(return_value=page)) as listing:
            assert await service.category_products(1, page=2, limit=5) == page
            listing.assert_awaited_once_with(1, page=2, limit=5)
