"""Tests for Supabase repositories"""
from unittest.mock import Mock

import pytest

from cafepos.services.models import MenuItem
from cafepos.services.repositories import MenuRepository, OrderRepository, TableRepository
from cafepos.services.repositories.menu_repo import search_pattern


def test_table_repository_requires_table(mock_supabase_client):
    with pytest.raises(ValueError):
        TableRepository(mock_supabase_client)


@pytest.mark.asyncio
async def test_create_returns_stored_row(mock_supabase_client):
    table = mock_supabase_client.table.return_value
    table.execute.return_value = Mock(data=[{"id": "menu-9", "name": "Mocha"}])
    repo = TableRepository(mock_supabase_client, table="menu_items")

    row = await repo.create({"name": "Mocha"})

    assert row == {"id": "menu-9", "name": "Mocha"}
    table.insert.assert_called_once_with({"name": "Mocha"})


@pytest.mark.asyncio
async def test_update_no_match(mock_supabase_client):
    repo = TableRepository(mock_supabase_client, table="menu_items")

    assert await repo.update("missing", {"active": False}) is None
    mock_supabase_client.table.return_value.eq.assert_called_once_with("id", "missing")


@pytest.mark.asyncio
async def test_delete(mock_supabase_client):
    table = mock_supabase_client.table.return_value
    repo = TableRepository(mock_supabase_client, table="menu_items")

    assert await repo.delete("x") is False

    table.execute.return_value = Mock(data=[{"id": "x"}])
    assert await repo.delete("x") is True


@pytest.mark.asyncio
async def test_menu_get_all_active(mock_supabase_client, sample_menu_item):
    table = mock_supabase_client.table.return_value
    table.execute.return_value = Mock(data=[sample_menu_item])
    repo = MenuRepository(mock_supabase_client)

    items = await repo.get_all(active_only=True, category="Coffee")

    assert items == [MenuItem(**sample_menu_item)]
    mock_supabase_client.table.assert_called_with("menu_items")
    table.eq.assert_any_call("active", True)
    table.eq.assert_any_call("category", "Coffee")


@pytest.mark.asyncio
async def test_menu_categories(mock_supabase_client, sample_menu_item):
    table = mock_supabase_client.table.return_value
    table.execute.return_value = Mock(data=[
        sample_menu_item,
        {**sample_menu_item, "id": "menu-2", "category": "Bakery"},
        {**sample_menu_item, "id": "menu-3", "category": None},
    ])

    assert await MenuRepository(mock_supabase_client).get_categories() == ["Bakery", "Coffee"]


def test_menu_item_to_cart_candidate(sample_menu_item):
    candidate = MenuItem(**sample_menu_item).to_cart_candidate(quantity=2, notes="hot")

    assert candidate == {
        "id": "menu-1",
        "name": "Latte",
        "unit_price_cents": 500,
        "quantity": 2,
        "notes": "hot",
    }


def test_menu_item_rejects_negative_price(sample_menu_item):
    with pytest.raises(ValueError):
        MenuItem(**{**sample_menu_item, "price_cents": -1})


def test_menu_item_ignores_extra_columns(sample_menu_item):
    item = MenuItem(**{**sample_menu_item, "image_url": "x.png"})
    assert not hasattr(item, "image_url")


@pytest.mark.asyncio
async def test_menu_search_matches_name_or_category(mock_supabase_client):
    table = mock_supabase_client.table.return_value
    repo = MenuRepository(mock_supabase_client)

    await repo.get_all(search="  Lat ")

    table.or_.assert_called_once_with("name.ilike.%Lat%,category.ilike.%Lat%")


@pytest.mark.asyncio
async def test_menu_blank_search_is_no_filter(mock_supabase_client):
    table = mock_supabase_client.table.return_value
    repo = MenuRepository(mock_supabase_client)

    await repo.get_all(search="   ")

    table.or_.assert_not_called()


@pytest.mark.parametrize("text,expected", [
    ("latte", "%latte%"),
    ("Cold Brew", "%Cold Brew%"),
    ("tea,(chai)", "%tea  chai%"),
    ("100%", "%100%"),
    ("%*", None),
    (None, None),
])
def test_search_pattern(text, expected):
    assert search_pattern(text) == expected


@pytest.mark.asyncio
async def test_order_items_lookup(mock_supabase_client):
    table = mock_supabase_client.table.return_value
    table.execute.return_value = Mock(data=[{
        "order_id": "order-1", "item_id": "a", "name": "Croissant",
        "unit_price_cents": 450, "quantity": 1, "notes": None,
    }])
    repo = OrderRepository(mock_supabase_client)

    items = await repo.get_items("order-1")

    assert [item.item_id for item in items] == ["a"]
    mock_supabase_client.table.assert_called_with("order_items")
    table.eq.assert_called_once_with("order_id", "order-1")
