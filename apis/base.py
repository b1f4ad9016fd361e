from fastapi import APIRouter
from apis.v1.route_compile import router as compile_router
from apis.v1.route_health import router as health_router

api_router = APIRouter()
api_router.include_router(health_router, tags=["health"])
api_router.include_router(compile_router, tags=["compile"])
