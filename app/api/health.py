from fastapi import APIRouter

from app.core.config import settings

router = APIRouter()


@router.get("")
async def health_check():
    """Liveness probe; does not touch the database."""
    return {"status": "OK", "message": f"{settings.APP_NAME} is running"}
