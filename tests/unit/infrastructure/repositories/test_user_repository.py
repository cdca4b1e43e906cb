"""
ユーザー・クリエイターリポジトリの単体テスト
"""

from datetime import datetime, timedelta

import pytest
from sqlalchemy.orm import Session

from creohub.domain.exceptions.base import ConflictError
from creohub.domain.pricing import PRICING_PLANS
from creohub.infrastructure.repositories import CreatorRepository, UserRepository
from tests.helpers import create_user


class TestUserRepository:
    """UserRepositoryのテスト"""

    def test_create_hashes_password(self, db_session: Session) -> None:
        """パスワードは平文で保存されないこと"""
        user = UserRepository(db_session).create(
            username="kofi", email="Kofi@Example.com", password="p4ssword!"
        )

        assert user.id is not None
        assert user.email == "kofi@example.com"
        assert user.password_hash != "p4ssword!"
        assert user.password_hash.startswith("$argon2id$")

    def test_duplicate_username(self, db_session: Session) -> None:
        repo = UserRepository(db_session)
        repo.create(username="kofi", email="kofi@example.com", password="p4ssword!")

        with pytest.raises(ConflictError):
            repo.create(username="kofi", email="other@example.com", password="p4ssword!")

    def test_duplicate_email_is_case_insensitive(self, db_session: Session) -> None:
        repo = UserRepository(db_session)
        repo.create(username="kofi", email="kofi@example.com", password="p4ssword!")

        with pytest.raises(ConflictError):
            repo.create(username="kofi2", email="KOFI@example.com", password="p4ssword!")

    def test_authenticate(self, db_session: Session) -> None:
        user = create_user(db_session, username="kofi", password="p4ssword!")
        repo = UserRepository(db_session)

        assert repo.authenticate(username="kofi", password="p4ssword!") is user
        assert repo.authenticate(email="KOFI@example.com", password="p4ssword!") is user
        assert repo.authenticate(username="kofi", password="wrong") is None
        assert repo.authenticate(username="nobody", password="p4ssword!") is None
        assert repo.authenticate(password="p4ssword!") is None


class TestCreatorRepository:
    """CreatorRepositoryのテスト"""

    def test_create_starts_free_trial(self, db_session: Session) -> None:
        user = create_user(db_session)
        creator = CreatorRepository(db_session).create(
            user_id=user.id, store_name="Amina Art", store_handle="amina-art"
        )

        assert creator.plan_type == "free"
        assert creator.subscription_status == "trial"
        assert creator.trial_ends_at is not None
        assert creator.trial_ends_at > datetime.now() + timedelta(days=29)

    def test_duplicate_handle(self, db_session: Session) -> None:
        repo = CreatorRepository(db_session)
        first = create_user(db_session, username="first")
        second = create_user(db_session, username="second")
        repo.create(user_id=first.id, store_name="A", store_handle="shared")

        with pytest.raises(ConflictError):
            repo.create(user_id=second.id, store_name="B", store_handle="shared")

    def test_change_plan(self, db_session: Session) -> None:
        repo = CreatorRepository(db_session)
        user = create_user(db_session)
        creator = repo.create(user_id=user.id, store_name="A", store_handle="a-store")

        updated = repo.change_plan(creator, PRICING_PLANS["pro"])

        assert updated.plan_type == "pro"
        assert updated.subscription_status == "active"
        assert updated.subscription_ends_at is not None
        assert repo.get_by_user_id(user.id) is updated
