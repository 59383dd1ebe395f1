from datetime import timedelta

import pytest

from eb_course.aws.signups import SignupStore
from eb_course.errors import SignupExistsError, SignupNotFoundError
from eb_course.utils.clock import utc_now
from tests.consts import TEST_TABLE_NAME


def test_ensure_table_is_idempotent(aws_clients):
    store = SignupStore(aws_clients.dynamodb, TEST_TABLE_NAME)

    assert store.ensure_table() is True
    assert store.ensure_table() is False
    assert store.table_available()


def test_table_available_is_false_without_table(aws_clients):
    store = SignupStore(aws_clients.dynamodb, "missing-table")

    assert store.table_available() is False


def test_put_and_get_signup(signup_store):
    record = signup_store.put_signup(name="Ada Lovelace", email="ada@example.com")

    stored = signup_store.get_signup("ada@example.com")
    assert stored == record
    assert stored.name == "Ada Lovelace"
    assert stored.timestamp.endswith("+00:00")


def test_duplicate_signup_is_not_overwritten(signup_store):
    signup_store.put_signup(name="Ada", email="ada@example.com")

    with pytest.raises(SignupExistsError):
        signup_store.put_signup(name="Someone Else", email="ada@example.com")

    assert signup_store.get_signup("ada@example.com").name == "Ada"


def test_get_missing_signup_raises(signup_store):
    with pytest.raises(SignupNotFoundError):
        signup_store.get_signup("nobody@example.com")


def test_count(signup_store):
    assert signup_store.count() == 0

    for i in range(3):
        signup_store.put_signup(name=f"User {i}", email=f"user{i}@example.com")

    assert signup_store.count() == 3


def test_delete_older_than_only_removes_old_records(signup_store):
    now = utc_now()
    signup_store.put_signup(name="Old", email="old@example.com", timestamp=now - timedelta(days=40))
    signup_store.put_signup(name="New", email="new@example.com", timestamp=now)

    deleted = signup_store.delete_older_than(now - timedelta(days=30))

    assert deleted == 1
    assert signup_store.count() == 1
    assert signup_store.get_signup("new@example.com").name == "New"
