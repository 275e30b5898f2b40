# models.py

from datetime import datetime
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class Role(str, Enum):
    admin = "admin"
    user = "user"


class UserCreate(BaseModel):
    email: EmailStr
    password: str
    full_name: Optional[str] = None

class UserLogin(BaseModel):
    email: EmailStr
    password: str

class User(BaseModel):
    id: str
    email: str
    full_name: Optional[str] = None
    created_at: Optional[str] = None

class UserRole(BaseModel):
    user_id: str
    role: Role

class UserWithRole(User):
    role: Role = Role.user

class UserDirectory(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    users: List[UserWithRole]
    has_admin: bool = Field(alias="hasAdmin")

class Notification(BaseModel):
    title: str
    description: str
    variant: str = "default"  # default, destructive

class RoleActionResult(UserDirectory):
    notification: Notification


def _utc_now():
    return datetime.utcnow().isoformat()

class CompletedServiceCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    mechanic_id: str = Field("", alias="mechanicId")
    service_ids: List[str] = Field(default_factory=list, alias="serviceIds")
    total_amount: float = Field(alias="totalAmount")
    received_amount: float = Field(alias="receivedAmount")
    completion_date: str = Field(alias="completionDate")
    created_at: str = Field(default_factory=_utc_now, alias="createdAt")

class CompletedService(CompletedServiceCreate):
    # stored rows may carry null dates; they pass through as None
    completion_date: Optional[str] = Field(None, alias="completionDate")
    created_at: Optional[str] = Field(None, alias="createdAt")
    id: str


class MechanicFields(BaseModel):
    # name is checked by MechanicForm so a blank one gets the form's message
    name: str = ""
    specialization: Optional[str] = None
    phone: Optional[str] = None

class Mechanic(BaseModel):
    id: str
    name: str
    specialization: Optional[str] = None
    phone: Optional[str] = None


class ServiceCreate(BaseModel):
    name: str
    price: float = 0
    description: Optional[str] = None

class Service(ServiceCreate):
    id: str
