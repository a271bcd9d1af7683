import logging
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from app.database import get_db
from app.deps import require_roles
from app.models.user import ROLE_ADMIN
from app.admin_module import logic as admin_logic
from app.admin_module import schemas as admin_schemas
from app.auth_module import logic as auth_logic
from app.auth_module import schemas as auth_schemas
from app.schemas.errors import AUTH_RESPONSES, Error403, Error404, ValidationErrorResponse


# Every route here requires an authenticated admin.
router = APIRouter(
    prefix="/api/v1/admin",
    tags=["admin"],
    dependencies=[Depends(require_roles(ROLE_ADMIN))],
    responses={**AUTH_RESPONSES, 403: {"model": Error403}},
)


@router.get("/users", status_code=200,
            summary="List users", description="All users, newest first. Password hashes are never returned.",
            response_model=admin_schemas.UserListResponse,
            operation_id="list_users")
def list_users(db: Session = Depends(get_db)):
    users = admin_logic.list_users(db)
    return {"count": len(users), "data": {"users": users}}


@router.put("/users/{user_id}/role", status_code=200,
            summary="Update user role", response_model=admin_schemas.RoleUpdateResponse,
            responses={400: {"model": ValidationErrorResponse}, 404: {"model": Error404}},
            operation_id="update_user_role")
def update_user_role(
    user_id: str,
    payload: admin_schemas.RoleUpdateRequest,
    db: Session = Depends(get_db),
):
    user = auth_logic.get_user(db, user_id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    user = admin_logic.update_role(db, user, payload.role.value)
    logging.info(f"User role updated: {user.email} -> {user.role}")
    return {"message": "User role updated successfully", "data": {"user": user}}


@router.delete("/users/{user_id}", status_code=200,
            summary="Delete user", response_model=auth_schemas.MessageResponse,
            responses={404: {"model": Error404}},
            operation_id="delete_user")
def delete_user(user_id: str, db: Session = Depends(get_db)):
    user = auth_logic.get_user(db, user_id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    email = user.email
    admin_logic.delete_user(db, user)
    logging.info(f"User deleted: {email}")
    return {"message": "User deleted successfully"}
