"""
Profiles joined with their role records.

Role rows live apart from profiles, so the directory is built with an
in-memory left join and a user without a role row counts as a plain user.
Every role change goes through ``assign_role``, which updates the user's row
when there is one and inserts it otherwise, and is followed by a full reload
of the directory.
"""

import logging
from typing import Iterable, List

from database import db
from models import Role, UserDirectory, UserWithRole
from storage.reload import mutate_then_reload

logger = logging.getLogger(__name__)


class AdminAlreadyExists(Exception):
    pass


def join_users_with_roles(profiles: Iterable[dict], roles: Iterable[dict]) -> List[UserWithRole]:
    role_by_user = {}
    for row in roles:
        # first row wins if the store ever holds duplicates
        role_by_user.setdefault(row["user_id"], row["role"])

    return [
        UserWithRole(
            id=profile["id"],
            email=profile["email"],
            full_name=profile.get("full_name"),
            role=role_by_user.get(profile["id"], Role.user),
            created_at=profile.get("created_at"),
        )
        for profile in profiles
    ]

def fetch_user_directory() -> UserDirectory:
    profiles = list(db.profiles.find({}, {"_id": 0, "id": 1, "email": 1, "full_name": 1, "created_at": 1}))
    roles = list(db.user_roles.find({}, {"_id": 0, "user_id": 1, "role": 1}))
    logger.debug("Fetched %d profiles and %d roles", len(profiles), len(roles))

    users = join_users_with_roles(profiles, roles)
    has_admin = any(user.role == Role.admin for user in users)
    return UserDirectory(users=users, hasAdmin=has_admin)

def profile_exists(user_id: str) -> bool:
    return db.profiles.find_one({"id": user_id}, {"_id": 1}) is not None

def get_role(user_id: str) -> Role:
    row = db.user_roles.find_one({"user_id": user_id})
    return Role(row["role"]) if row else Role.user

def assign_role(user_id: str, role: Role):
    existing = db.user_roles.find_one({"user_id": user_id})
    if existing:
        db.user_roles.update_one({"user_id": user_id}, {"$set": {"role": role.value}})
    else:
        db.user_roles.insert_one({"user_id": user_id, "role": role.value})
    logger.info("Assigned role %s to user %s", role.value, user_id)


def bootstrap_admin(user_id: str) -> UserDirectory:
    """Make ``user_id`` the first administrator.

    Raises ``AdminAlreadyExists`` once any user holds the admin role.
    """
    if fetch_user_directory().has_admin:
        raise AdminAlreadyExists("An administrator already exists")
    return mutate_then_reload(lambda: assign_role(user_id, Role.admin), fetch_user_directory)

def promote_to_admin(user_id: str) -> UserDirectory:
    return mutate_then_reload(lambda: assign_role(user_id, Role.admin), fetch_user_directory)

def demote_to_user(user_id: str) -> UserDirectory:
    return mutate_then_reload(lambda: assign_role(user_id, Role.user), fetch_user_directory)
