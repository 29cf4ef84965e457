from __future__ import annotations

from datetime import timedelta

import pytest
from sqlalchemy.orm import Session

from segmentation.db.repositories.membership_repo import MembershipRepository
from segmentation.db.repositories.user_repo import UserRepository
from segmentation.domain.membership import Membership
from segmentation.exceptions import WriteError

from .conftest import FakeClock


def test_exists_ignores_expiry(session: Session, clock: FakeClock) -> None:
    user = UserRepository(session).create(name="alice")
    repo = MembershipRepository(session, clock)

    assert repo.exists(user.id, "promo") is False
    assert repo.add(user.id, "promo", clock.now - timedelta(seconds=1)) is True

    assert repo.exists(user.id, "promo") is True
    assert repo.active_for_user(user.id) == []
    assert [m.slug for m in repo.list_for_user(user.id)] == ["promo"]


def test_add_reports_unique_violation(session: Session, clock: FakeClock) -> None:
    user = UserRepository(session).create(name="alice")
    repo = MembershipRepository(session, clock)

    assert repo.add(user.id, "promo") is True
    assert repo.add(user.id, "promo") is False
    assert len(repo.list_for_user(user.id)) == 1


def test_active_for_user_accepts_explicit_now(session: Session, clock: FakeClock) -> None:
    user = UserRepository(session).create(name="alice")
    repo = MembershipRepository(session, clock)
    repo.add(user.id, "promo", clock.now + timedelta(days=1))

    assert [m.slug for m in repo.active_for_user(user.id)] == ["promo"]
    assert repo.active_for_user(user.id, now=clock.now + timedelta(days=2)) == []


def test_remove_and_remove_slug(session: Session, clock: FakeClock) -> None:
    users = UserRepository(session)
    alice = users.create(name="alice")
    bob = users.create(name="bob")
    repo = MembershipRepository(session, clock)
    repo.add(alice.id, "promo")
    repo.add(bob.id, "promo")
    repo.add(bob.id, "beta")

    assert repo.remove(alice.id, "beta") is False
    assert repo.remove_slug("promo") == [alice.id, bob.id]
    assert repo.list_for_user(alice.id) == []
    assert [m.slug for m in repo.list_for_user(bob.id)] == ["beta"]


def test_membership_is_active(clock: FakeClock) -> None:
    assert Membership(user_id=1, slug="promo").is_active(clock.now)
    assert Membership(user_id=1, slug="promo", deadline=clock.now + timedelta(seconds=1)).is_active(clock.now)
    assert not Membership(user_id=1, slug="promo", deadline=clock.now).is_active(clock.now)


def test_add_for_missing_user_is_write_error(session: Session, clock: FakeClock) -> None:
    repo = MembershipRepository(session, clock)

    with pytest.raises(WriteError):
        repo.add(999999, "promo")
    assert repo.exists(999999, "promo") is False


def test_add_with_missing_slug_is_write_error(session: Session, clock: FakeClock) -> None:
    user = UserRepository(session).create(name="alice")
    repo = MembershipRepository(session, clock)

    with pytest.raises(WriteError):
        repo.add(user.id, None)  # type: ignore[arg-type]
    assert repo.list_for_user(user.id) == []
