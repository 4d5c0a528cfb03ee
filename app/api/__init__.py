from fastapi import APIRouter
from .health import router as health_router
from .booking import router as booking_router
from .menu import router as menu_router
from .availability import router as availability_router

router = APIRouter()

router.include_router(health_router, prefix="/health", tags=["health"])
router.include_router(booking_router, prefix="/bookings", tags=["bookings"])
router.include_router(menu_router, prefix="/menu", tags=["menu"])
router.include_router(
    availability_router, prefix="/available-slots", tags=["availability"]
)
