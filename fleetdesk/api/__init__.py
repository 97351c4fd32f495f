"""API routes."""

from fastapi import APIRouter

from fleetdesk.api import auth, expenses, external_expenses, health, users, vehicles

router = APIRouter()
router.include_router(auth.router, tags=["auth"])
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(users.router, prefix="/users", tags=["users"])
router.include_router(vehicles.router, prefix="/vehicles", tags=["vehicles"])
router.include_router(expenses.router, prefix="/expenses", tags=["expenses"])
router.include_router(
    external_expenses.router, prefix="/external-expenses", tags=["external-expenses"]
)
