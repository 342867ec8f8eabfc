"""API v1 routes."""

from fastapi import APIRouter

from docuploader.api.v1 import accounts, auth, auth_groups, documents, health, register, users

router = APIRouter()
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(register.router, prefix="/register", tags=["register"])
router.include_router(users.router, prefix="/users", tags=["users"])
router.include_router(accounts.router, prefix="/accounts", tags=["accounts"])
router.include_router(documents.router, prefix="/documents", tags=["documents"])
router.include_router(auth_groups.router, prefix="/auth-groups", tags=["auth-groups"])
