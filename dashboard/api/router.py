from fastapi import APIRouter

from dashboard.features.widgets.api import router as widgets_router

api_router = APIRouter()
api_router.include_router(widgets_router)
