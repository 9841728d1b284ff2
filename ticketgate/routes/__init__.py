from fastapi import APIRouter

from .auth import router as auth_router
from .pages import router as pages_router
from .tickets import router as tickets_router

api_router = APIRouter()
api_router.include_router(pages_router)
api_router.include_router(tickets_router)
api_router.include_router(auth_router)
