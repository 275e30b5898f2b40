from fastapi import APIRouter, Depends, HTTPException
from models import Notification, Role, RoleActionResult, UserDirectory
from auth import get_current_user
from storage.user_roles import (
    AdminAlreadyExists,
    bootstrap_admin,
    demote_to_user,
    fetch_user_directory,
    get_role,
    profile_exists,
    promote_to_admin,
)
from pymongo.errors import PyMongoError
import logging

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["Admin"])

def _failure(action: str, error: Exception) -> HTTPException:
    notification = Notification(title="Error", description=f"Could not {action}: {error}", variant="destructive")
    return HTTPException(status_code=500, detail=notification.model_dump())

def _result(message: str, directory: UserDirectory) -> RoleActionResult:
    return RoleActionResult(
        notification=Notification(title="Success", description=message),
        users=directory.users,
        hasAdmin=directory.has_admin,
    )

def _ensure_admin(user):
    if get_role(user["id"]) != Role.admin:
        raise HTTPException(status_code=403, detail="Only admins can change user roles")

def _ensure_profile(user_id: str):
    if not profile_exists(user_id):
        raise HTTPException(status_code=404, detail="User not found")

@router.get("/users", response_model=UserDirectory)
def list_users(user=Depends(get_current_user)):
    try:
        return fetch_user_directory()
    except PyMongoError as e:
        logger.error("Error fetching users: %s", e)
        raise _failure("load the users", e)

# Only available while nobody holds the admin role
@router.post("/bootstrap", response_model=RoleActionResult)
def bootstrap(user=Depends(get_current_user)):
    try:
        directory = bootstrap_admin(user["id"])
    except AdminAlreadyExists as e:
        raise HTTPException(status_code=409, detail=str(e))
    except PyMongoError as e:
        logger.error("Error promoting user %s to admin: %s", user["id"], e)
        raise _failure("create the administrator", e)
    return _result("You are now an administrator. Log out and back in for the change to take effect.", directory)

@router.post("/users/{user_id}/promote", response_model=RoleActionResult)
def promote(user_id: str, user=Depends(get_current_user)):
    try:
        _ensure_admin(user)
        _ensure_profile(user_id)
        directory = promote_to_admin(user_id)
    except PyMongoError as e:
        logger.error("Error promoting user %s: %s", user_id, e)
        raise _failure("promote the user", e)
    return _result("User promoted to administrator.", directory)

@router.post("/users/{user_id}/demote", response_model=RoleActionResult)
def demote(user_id: str, user=Depends(get_current_user)):
    try:
        _ensure_admin(user)
        if user_id == user["id"]:
            raise HTTPException(status_code=400, detail="You cannot demote yourself")
        _ensure_profile(user_id)
        directory = demote_to_user(user_id)
    except PyMongoError as e:
        logger.error("Error demoting user %s: %s", user_id, e)
        raise _failure("demote the user", e)
    return _result("User demoted to regular user.", directory)
