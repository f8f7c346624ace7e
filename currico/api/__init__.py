from fastapi import APIRouter

from currico.api.admin import router as admin_router
from currico.api.seller import router as seller_router

api_router = APIRouter(prefix="/api")
api_router.include_router(seller_router)
api_router.include_router(admin_router)

__all__ = ["api_router"]
