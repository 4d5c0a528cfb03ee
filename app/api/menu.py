from typing import List

from fastapi import APIRouter, Depends

from app.api.deps import get_store
from app.core.models import MenuItem
from app.services.booking_store import BookingStore

router = APIRouter()


def serialize_menu_item(item: MenuItem) -> dict:
    return {
        "id": item.id,
        "name": item.name,
        "description": item.description,
        "price": float(item.price),
        "category": item.category.value if item.category else None,
        "is_available": item.is_available,
        "is_recommended": item.is_recommended,
        "created_at": item.created_at.isoformat() if item.created_at else None,
        "updated_at": item.updated_at.isoformat() if item.updated_at else None,
    }


@router.get("")
def list_menu(store: BookingStore = Depends(get_store)) -> List[dict]:
    return [serialize_menu_item(i) for i in store.list_menu()]
