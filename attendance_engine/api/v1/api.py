from fastapi import APIRouter
from attendance_engine.api.v1.endpoints import attendance

api_router = APIRouter()

api_router.include_router(attendance.router, prefix="/attendance", tags=["attendance"])
