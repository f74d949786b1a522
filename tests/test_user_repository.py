"""UserRepository: unique emails, in-place updates, upgrade flag."""

import pytest

from utils.exceptions import Conflict, NotFound


def test_create_and_fetch(users, password_hash):
    user = users.create("a@x.com", password_hash)
    assert user.id == 1
    assert user.is_upgraded is False
    assert users.get_by_email("a@x.com") == user
    assert users.get(1) == user


def test_duplicate_email_conflicts(users, password_hash):
    users.create("a@x.com", password_hash)
    with pytest.raises(Conflict):
        users.create("a@x.com", password_hash)
    # Comparison is exact, as stored
    assert users.create("A@x.com", password_hash).id == 2


def test_get_by_email_is_exact(users, password_hash):
    users.create("a@x.com", password_hash)
    with pytest.raises(NotFound):
        users.get_by_email("A@X.COM")
    with pytest.raises(NotFound):
        users.get(99)


def test_update_overwrites_in_place(users, password_hash):
    user = users.create("a@x.com", password_hash)
    updated = users.update(user.id, "b@x.com", "new-hash")

    assert updated.id == user.id
    assert users.get(user.id).email == "b@x.com"
    assert users.get(user.id).password_hash == "new-hash"
    with pytest.raises(NotFound):
        users.get_by_email("a@x.com")


def test_update_keeps_own_email(users, password_hash):
    user = users.create("a@x.com", password_hash)
    assert users.update(user.id, "a@x.com", "other-hash").email == "a@x.com"


def test_update_to_another_users_email_conflicts(users, password_hash):
    users.create("a@x.com", password_hash)
    second = users.create("b@x.com", password_hash)
    with pytest.raises(Conflict):
        users.update(second.id, "a@x.com", password_hash)
    assert users.get(second.id).email == "b@x.com"


def test_update_missing_user(users):
    with pytest.raises(NotFound):
        users.update(3, "a@x.com", "hash")


def test_upgrade(users, password_hash):
    user = users.create("a@x.com", password_hash)
    users.upgrade(user.id)
    assert users.get(user.id).is_upgraded is True
    with pytest.raises(NotFound):
        users.upgrade(404)
