"""Unit tests for SqlAlchemyUserStore against a mocked SQLAlchemy session."""

import unittest
from unittest.mock import MagicMock

from sqlalchemy.exc import IntegrityError

from fakes import make_user
from rolegate.services.user_store import (
    EmailAlreadyExistsError,
    SqlAlchemyUserStore,
    UserNotFoundError,
)


def _session_returning(first=None, all_=None) -> MagicMock:
    session = MagicMock()
    query = session.query.return_value
    query.filter.return_value.first.return_value = first
    query.filter.return_value.order_by.return_value.all.return_value = all_ or []
    query.order_by.return_value.all.return_value = all_ or []
    return session


class TestGetById(unittest.TestCase):
    def test_returns_user(self) -> None:
        user = make_user(1)
        store = SqlAlchemyUserStore(_session_returning(first=user))
        self.assertIs(store.get_by_id(1), user)

    def test_missing_raises_not_found(self) -> None:
        store = SqlAlchemyUserStore(_session_returning(first=None))
        with self.assertRaises(UserNotFoundError) as ctx:
            store.get_by_id(7)
        self.assertEqual(ctx.exception.user_id, 7)


class TestUpdateRole(unittest.TestCase):
    def test_sets_role_and_commits(self) -> None:
        user = make_user(1, role="user")
        session = _session_returning(first=user)
        updated = SqlAlchemyUserStore(session).update_role(1, "admin")
        self.assertEqual(updated.role, "admin")
        session.commit.assert_called_once()
        session.refresh.assert_called_once_with(user)

    def test_commit_failure_rolls_back_and_raises(self) -> None:
        session = _session_returning(first=make_user(1))
        session.commit.side_effect = RuntimeError("lost connection")
        with self.assertRaises(RuntimeError):
            SqlAlchemyUserStore(session).update_role(1, "admin")
        session.rollback.assert_called_once()

    def test_missing_user_does_not_commit(self) -> None:
        session = _session_returning(first=None)
        with self.assertRaises(UserNotFoundError):
            SqlAlchemyUserStore(session).update_role(1, "admin")
        session.commit.assert_not_called()


class TestListByRole(unittest.TestCase):
    def test_returns_query_result(self) -> None:
        users = [make_user(1, "moderator"), make_user(4, "moderator")]
        store = SqlAlchemyUserStore(_session_returning(all_=users))
        self.assertEqual(store.list_by_role("moderator"), users)


class TestDelete(unittest.TestCase):
    def test_deletes_and_commits(self) -> None:
        user = make_user(1)
        session = _session_returning(first=user)
        SqlAlchemyUserStore(session).delete(1)
        session.delete.assert_called_once_with(user)
        session.commit.assert_called_once()

    def test_commit_failure_rolls_back_and_raises(self) -> None:
        session = _session_returning(first=make_user(1))
        session.commit.side_effect = RuntimeError("foreign key violation")
        with self.assertRaises(RuntimeError):
            SqlAlchemyUserStore(session).delete(1)
        session.rollback.assert_called_once()


class TestCreate(unittest.TestCase):
    def test_adds_and_commits(self) -> None:
        session = MagicMock()
        user = SqlAlchemyUserStore(session).create("Ann", "ann@example.com", "hash", "user")
        session.add.assert_called_once_with(user)
        session.commit.assert_called_once()
        self.assertEqual(user.role, "user")

    def test_integrity_error_becomes_duplicate_email(self) -> None:
        session = MagicMock()
        session.commit.side_effect = IntegrityError("INSERT", {}, Exception("unique"))
        with self.assertRaises(EmailAlreadyExistsError):
            SqlAlchemyUserStore(session).create("Ann", "ann@example.com", "hash", "user")
        session.rollback.assert_called_once()


if __name__ == "__main__":
    unittest.main()
