from fastapi import APIRouter, Depends, status

from taletrail.api.dependencies import get_admin_service, get_current_identity
from taletrail.api.models import (
    CleanupResponse,
    CreateUserRequest,
    SuccessResponse,
    UpdateRoleRequest,
    UserProfileResponse,
)
from taletrail.core.models import Identity
from taletrail.services.admin_service import AdminService

admin_router = APIRouter(prefix="/api/admin", tags=["admin"])


@admin_router.get("/users", response_model=list[UserProfileResponse])
def list_users(
    identity: Identity = Depends(get_current_identity),
    service: AdminService = Depends(get_admin_service),
) -> list[UserProfileResponse]:
    return service.list_users(identity)


@admin_router.post(
    "/users", response_model=UserProfileResponse, status_code=status.HTTP_201_CREATED
)
def create_user(
    request: CreateUserRequest,
    identity: Identity = Depends(get_current_identity),
    service: AdminService = Depends(get_admin_service),
) -> UserProfileResponse:
    return service.create_user(identity, request)


@admin_router.put("/users/{user_id}", response_model=UserProfileResponse)
def update_user_role(
    user_id: str,
    request: UpdateRoleRequest,
    identity: Identity = Depends(get_current_identity),
    service: AdminService = Depends(get_admin_service),
) -> UserProfileResponse:
    return service.update_user_role(identity, user_id, request)


@admin_router.delete("/users/{user_id}", response_model=SuccessResponse)
def delete_user(
    user_id: str,
    identity: Identity = Depends(get_current_identity),
    service: AdminService = Depends(get_admin_service),
) -> SuccessResponse:
    service.delete_user(identity, user_id)
    return SuccessResponse()


@admin_router.post("/cleanup", response_model=CleanupResponse)
def cleanup_orphaned_users(
    identity: Identity = Depends(get_current_identity),
    service: AdminService = Depends(get_admin_service),
) -> CleanupResponse:
    return service.cleanup_orphans(identity)
