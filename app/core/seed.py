from decimal import Decimal
import logging

from sqlalchemy.orm import Session

from app.core.models import MenuCategory, MenuItem

logger = logging.getLogger(__name__)


MENU_SEED = [
    # Breakfast
    {"name": "Pancakes", "description": "Fresh brewed coffee and steamed milk", "price": "12.50", "category": MenuCategory.BREAKFAST},
    {"name": "Toasted Waffle", "description": "Brewed coffee and steamed milk", "price": "12.00", "category": MenuCategory.BREAKFAST},
    {"name": "Fried Chips", "description": "Rich Milk and Foam", "price": "15.00", "category": MenuCategory.BREAKFAST, "is_recommended": True},
    {"name": "Banana Cakes", "description": "Rich Milk and Foam", "price": "18.00", "category": MenuCategory.BREAKFAST},
    # Coffee
    {"name": "Latte", "description": "Fresh brewed coffee and steamed milk", "price": "7.50", "category": MenuCategory.COFFEE},
    {"name": "White Coffee", "description": "Brewed coffee and steamed milk", "price": "5.90", "category": MenuCategory.COFFEE, "is_recommended": True},
    {"name": "Chocolate Milk", "description": "Rich Milk and Foam", "price": "5.50", "category": MenuCategory.COFFEE},
    {"name": "Greentea", "description": "Fresh brewed coffee and steamed milk", "price": "7.50", "category": MenuCategory.COFFEE},
    {"name": "Dark Chocolate", "description": "Rich Milk and Foam", "price": "7.25", "category": MenuCategory.COFFEE},
]


def seed_menu(db: Session) -> int:
    """Insert the sample menu, skipping names already present. Returns rows added."""
    existing = {name for (name,) in db.query(MenuItem.name).all()}
    added = 0
    try:
        for item in MENU_SEED:
            if item["name"] in existing:
                continue
            db.add(
                MenuItem(
                    name=item["name"],
                    description=item["description"],
                    price=Decimal(item["price"]),
                    category=item["category"],
                    is_recommended=item.get("is_recommended", False),
                )
            )
            added += 1
        db.commit()
    except Exception:
        db.rollback()
        raise
    logger.info("Sample menu items inserted: %s", added)
    return added
