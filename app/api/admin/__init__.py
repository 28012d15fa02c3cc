"""관리자 API 라우터 패키지 — 스케줄 관리 엔드포인트 통합.

Admin API Router package — Aggregates the schedule management endpoints
into a single router for inclusion in the FastAPI application.

Included routers:
    - businesses: 사업장 및 영업시간 (Businesses and operating hours)
    - employees: 직원 명부 (Employee roster under businesses)
    - shifts: 직원 근무 일정 (Employee shifts under businesses)
"""

from fastapi import APIRouter

from app.api.admin.businesses import router as businesses_router
from app.api.admin.employees import router as employees_router
from app.api.admin.shifts import router as shifts_router

admin_router: APIRouter = APIRouter()

# 모든 라우터는 /businesses/{business_id} 하위 경로를 직접 선언
# Each router declares its full /businesses/... paths
admin_router.include_router(businesses_router, tags=["Businesses"])
admin_router.include_router(employees_router, tags=["Employees"])
admin_router.include_router(shifts_router, tags=["Shifts"])
