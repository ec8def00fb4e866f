"""
Tests for the user repository and service
"""

from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError
from strawberry import UNSET

from user_graphql.handler.utils import (
    MutationOutcome,
    UserPatch,
    UserRepository,
    UserService,
    parse_user_id,
)
from user_graphql.model.sqlalchemy.user import UserModel


def make_user(repository, **overrides):
    fields = {"first_name": "A", "last_name": "B", "age": 30, "email": "a@b.com"}
    fields.update(overrides)
    return repository.create(**fields)


@pytest.mark.parametrize("raw, expected", [
    ("1", 1), (7, 7), ("abc", None), ("1.5", None), (None, None),
    ("2147483647", 2147483647), ("2147483648", None), ("99999999999999999999", None),
])
def test_parse_user_id(raw, expected):
    assert parse_user_id(raw) == expected


class TestUserRepository:
    def test_create_assigns_id(self, repository):
        user = make_user(repository)
        assert isinstance(user.id, int)
        assert repository.find_one(user.id) is user

    def test_find_one_accepts_string_ids(self, repository):
        user = make_user(repository)
        assert repository.find_one(str(user.id)).email == "a@b.com"

    def test_find_one_absent(self, repository):
        assert repository.find_one(123) is None
        assert repository.find_one("abc") is None

    def test_find_all(self, repository):
        first = make_user(repository, email="one@example.com")
        second = make_user(repository, email="two@example.com")
        assert {u.id for u in repository.find_all()} == {first.id, second.id}

    def test_save_persists_changes(self, repository, database):
        user = make_user(repository)
        user.age = 44
        repository.save(user)

        with database.session() as other:
            assert other.query(UserModel).filter(UserModel.id == user.id).one().age == 44

    def test_remove(self, repository):
        user = make_user(repository)
        repository.remove(user)
        assert repository.find_all() == []

    def test_failed_commit_rolls_back(self, repository):
        user = make_user(repository)
        user.email = None
        with pytest.raises(IntegrityError):
            repository.save(user)
        assert repository.find_one(user.id).email == "a@b.com"


class TestUserPatch:
    def test_empty_patch_changes_nothing(self):
        user = UserModel(first_name="A", last_name="B", age=30, email="a@b.com")
        UserPatch().apply_to(user)
        assert (user.first_name, user.last_name, user.age, user.email) == ("A", "B", 30, "a@b.com")

    def test_supplied_fields_overwrite(self):
        user = UserModel(first_name="A", last_name="B", age=30, email="a@b.com")
        UserPatch(last_name="Z", age=31).apply_to(user)
        assert (user.first_name, user.last_name, user.age, user.email) == ("A", "Z", 31, "a@b.com")

    def test_explicit_none_is_supplied(self):
        user = UserModel(first_name="A", last_name="B", age=30, email="a@b.com")
        patch = UserPatch(first_name=None)
        assert patch.last_name is UNSET
        patch.apply_to(user)
        assert user.first_name is None


class TestUserService:
    def test_update_applied(self, service, repository):
        user = make_user(repository)
        assert service.update(user.id, UserPatch(age=31)) is MutationOutcome.APPLIED
        assert service.get(user.id).age == 31

    def test_update_not_found(self, service):
        assert service.update("42", UserPatch(age=1)) is MutationOutcome.NOT_FOUND

    def test_delete_applied_then_not_found(self, service, repository):
        user = make_user(repository)
        user_id = user.id
        assert service.delete(user_id) is MutationOutcome.APPLIED
        assert service.delete(user_id) is MutationOutcome.NOT_FOUND

    def test_update_swallows_save_errors(self):
        repository = MagicMock(spec=UserRepository)
        repository.find_one.return_value = UserModel(id=1, first_name="A", last_name="B", age=30, email="a@b.com")
        repository.save.side_effect = OperationalError("UPDATE user", {}, Exception("connection lost"))

        assert UserService(repository).update("1", UserPatch(age=31)) is MutationOutcome.FAILED

    def test_update_swallows_lookup_errors(self):
        repository = MagicMock(spec=UserRepository)
        repository.find_one.side_effect = OperationalError("SELECT", {}, Exception("connection lost"))

        assert UserService(repository).update("1", UserPatch()) is MutationOutcome.FAILED
        repository.save.assert_not_called()

    def test_delete_swallows_errors(self):
        repository = MagicMock(spec=UserRepository)
        repository.find_one.return_value = UserModel(id=1, first_name="A", last_name="B", age=30, email="a@b.com")
        repository.remove.side_effect = OperationalError("DELETE", {}, Exception("connection lost"))

        assert UserService(repository).delete("1") is MutationOutcome.FAILED

    def test_create_propagates_errors(self):
        repository = MagicMock(spec=UserRepository)
        repository.create.side_effect = OperationalError("INSERT", {}, Exception("connection lost"))

        with pytest.raises(OperationalError):
            UserService(repository).create("A", "B", 30, "a@b.com")
