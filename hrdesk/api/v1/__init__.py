"""API v1 routes."""

from fastapi import APIRouter

from hrdesk.api.v1 import auth, dashboard, employees, health

router = APIRouter()
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(employees.router, prefix="/employees", tags=["employees"])
router.include_router(dashboard.router, prefix="/dashboard", tags=["dashboard"])
