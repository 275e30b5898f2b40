import pytest

from models import Role
from storage import user_roles
from storage.user_roles import (
    AdminAlreadyExists,
    assign_role,
    bootstrap_admin,
    demote_to_user,
    fetch_user_directory,
    get_role,
    join_users_with_roles,
    promote_to_admin,
)


class TestJoinUsersWithRoles:
    def test_user_without_role_record_is_plain_user(self):
        users = join_users_with_roles([{"id": "u1", "email": "a@x.com"}], [])

        assert len(users) == 1
        assert users[0].id == "u1"
        assert users[0].email == "a@x.com"
        assert users[0].role == Role.user
        assert users[0].full_name is None

    def test_matching_role_record_is_used(self):
        profiles = [
            {"id": "u1", "email": "a@x.com", "full_name": "Ana", "created_at": "2024-01-01"},
            {"id": "u2", "email": "b@x.com", "full_name": "Bruno", "created_at": "2024-01-02"},
        ]
        roles = [{"user_id": "u2", "role": "admin"}]

        users = join_users_with_roles(profiles, roles)

        assert [(u.id, u.role) for u in users] == [("u1", Role.user), ("u2", Role.admin)]
        assert users[1].full_name == "Bruno"
        assert users[1].created_at == "2024-01-02"

    def test_role_for_unknown_user_is_ignored(self):
        users = join_users_with_roles([{"id": "u1", "email": "a@x.com"}], [{"user_id": "ghost", "role": "admin"}])
        assert users[0].role == Role.user


class TestUserDirectory:
    def test_single_profile_without_roles(self, make_profile):
        make_profile("u1", "a@x.com")

        directory = fetch_user_directory()

        assert [u.id for u in directory.users] == ["u1"]
        assert directory.users[0].role == Role.user
        assert directory.has_admin is False

    def test_has_admin_when_any_user_is_admin(self, make_profile):
        make_profile("u1", "a@x.com", role="user")
        make_profile("u2", "b@x.com", role="admin")

        assert fetch_user_directory().has_admin is True

    def test_empty_directory(self):
        directory = fetch_user_directory()
        assert directory.users == []
        assert directory.has_admin is False


class TestRoleChanges:
    def test_get_role_defaults_to_user(self, make_profile):
        make_profile("u1", "a@x.com")
        assert get_role("u1") == Role.user

    def test_assign_role_inserts_then_updates(self, db, make_profile):
        make_profile("u1", "a@x.com")

        assign_role("u1", Role.admin)
        assert db.user_roles.count_documents({"user_id": "u1"}) == 1
        assert get_role("u1") == Role.admin

        assign_role("u1", Role.user)
        assert db.user_roles.count_documents({"user_id": "u1"}) == 1
        assert get_role("u1") == Role.user

    def test_promote_twice_is_idempotent(self, db, make_profile):
        make_profile("u1", "a@x.com", role="user")

        promote_to_admin("u1")
        directory = promote_to_admin("u1")

        assert directory.users[0].role == Role.admin
        assert db.user_roles.count_documents({"user_id": "u1"}) == 1

    def test_promote_without_role_record_creates_one(self, db, make_profile):
        make_profile("u1", "a@x.com")

        directory = promote_to_admin("u1")

        assert directory.has_admin is True
        assert db.user_roles.find_one({"user_id": "u1"})["role"] == "admin"

    def test_demote_returns_reloaded_directory(self, make_profile):
        make_profile("u1", "a@x.com", role="admin")
        make_profile("u2", "b@x.com", role="admin")

        directory = demote_to_user("u2")

        roles = {u.id: u.role for u in directory.users}
        assert roles == {"u1": Role.admin, "u2": Role.user}
        assert directory.has_admin is True


class TestBootstrapAdmin:
    def test_bootstrap_promotes_current_user(self, make_profile):
        make_profile("u1", "a@x.com")
        make_profile("u2", "b@x.com")

        directory = bootstrap_admin("u2")

        assert directory.has_admin is True
        assert {u.id: u.role for u in directory.users}["u2"] == Role.admin

    def test_bootstrap_updates_existing_role_record(self, db, make_profile):
        make_profile("u1", "a@x.com", role="user")

        bootstrap_admin("u1")

        assert db.user_roles.count_documents({"user_id": "u1"}) == 1
        assert get_role("u1") == Role.admin

    def test_bootstrap_refused_once_an_admin_exists(self, db, make_profile):
        make_profile("u1", "a@x.com", role="admin")
        make_profile("u2", "b@x.com")

        with pytest.raises(AdminAlreadyExists):
            bootstrap_admin("u2")
        assert get_role("u2") == Role.user


def test_directory_errors_propagate(monkeypatch, broken_db):
    from pymongo.errors import PyMongoError

    monkeypatch.setattr(user_roles, "db", broken_db)
    with pytest.raises(PyMongoError):
        fetch_user_directory()
