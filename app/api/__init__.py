"""API 라우터 패키지 — 모든 엔드포인트 통합.

API Router package — Aggregates every endpoint into a single router
mounted under ``/api`` by the FastAPI application.

Included routers:
    - roles: 역할 관리 (Role management)
    - staff: 직원 관리 (Staff management)
    - schedules: 근무 스케줄 관리 (Shift scheduling, single and batch)
"""

from fastapi import APIRouter

from app.api.roles import router as roles_router
from app.api.schedules import router as schedules_router
from app.api.staff import router as staff_router

api_router: APIRouter = APIRouter()

api_router.include_router(roles_router, prefix="/roles", tags=["Roles"])
api_router.include_router(staff_router, prefix="/staff", tags=["Staff"])
api_router.include_router(schedules_router, prefix="/schedules", tags=["Schedules"])
