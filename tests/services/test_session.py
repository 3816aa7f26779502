"""Tests for UserSession."""

import pytest

from storyvine.services import UserSession


def test_sign_in_and_out_emit_changes():
    session = UserSession()
    changes = []
    session.user_changed.connect(lambda user_id: changes.append(user_id))

    session.sign_in("reader")
    session.sign_in("reader")
    session.sign_out()
    session.sign_out()

    assert changes == ["reader", None]
    assert session.is_authenticated is False


def test_sign_in_rejects_empty_id():
    with pytest.raises(ValueError, match="User id must not be empty"):
        UserSession().sign_in("")
