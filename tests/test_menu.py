from app.core.models import MenuItem
from app.core.seed import MENU_SEED, seed_menu


def test_seed_menu_is_idempotent(test_db):
    assert seed_menu(test_db) == len(MENU_SEED)
    assert seed_menu(test_db) == 0
    assert test_db.query(MenuItem).count() == len(MENU_SEED)


def test_list_menu_orders_by_category_then_name(client, test_db):
    seed_menu(test_db)

    response = client.get("/api/menu")
    assert response.status_code == 200
    items = response.json()
    assert [i["name"] for i in items] == [
        "Banana Cakes",
        "Fried Chips",
        "Pancakes",
        "Toasted Waffle",
        "Chocolate Milk",
        "Dark Chocolate",
        "Greentea",
        "Latte",
        "White Coffee",
    ]

    pancakes = items[2]
    assert pancakes["category"] == "breakfast"
    assert pancakes["price"] == 12.5
    assert pancakes["is_available"] is True
    assert pancakes["is_recommended"] is False
    assert items[1]["is_recommended"] is True


def test_empty_menu(client):
    response = client.get("/api/menu")
    assert response.status_code == 200
    assert response.json() == []
