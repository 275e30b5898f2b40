# routes/account.py

from fastapi import APIRouter, Depends, HTTPException
from models import UserCreate, UserLogin, UserWithRole
from database import db
from auth import hash_password, verify_password, create_access_token, get_current_user
from storage.user_roles import get_role
from datetime import datetime
import logging
import uuid

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Auth"])

# Registration creates the profile only; without a role row the user is a plain "user"
@router.post("/register")
def register(user: UserCreate):
    if db.profiles.find_one({"email": user.email}):
        raise HTTPException(status_code=400, detail="User already exists")
    profile = {
        "id": str(uuid.uuid4()),
        "email": user.email,
        "full_name": user.full_name,
        "password": hash_password(user.password),
        "created_at": datetime.utcnow().isoformat(),
    }
    db.profiles.insert_one(profile)
    logger.info("Registered user %s", profile["id"])
    return {"message": "Registered successfully", "id": profile["id"]}

@router.post("/login")
def login(user: UserLogin):
    found = db.profiles.find_one({"email": user.email})
    if not found or not verify_password(user.password, found["password"]):
        raise HTTPException(status_code=401, detail="Invalid credentials")
    token = create_access_token({"sub": user.email})
    return {"access_token": token, "token_type": "bearer"}

@router.get("/me", response_model=UserWithRole)
def me(user=Depends(get_current_user)):
    return UserWithRole(
        id=user["id"],
        email=user["email"],
        full_name=user.get("full_name"),
        role=get_role(user["id"]),
        created_at=user.get("created_at"),
    )
