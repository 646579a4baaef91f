#To aggregate all routes for API1


from fastapi import APIRouter

from app.api.v1.routes.interconnections import router as interconnections_router

api_router = APIRouter(prefix="/api/v1")
api_router.include_router(interconnections_router, prefix="/interconnections", tags=["interconnections"])
