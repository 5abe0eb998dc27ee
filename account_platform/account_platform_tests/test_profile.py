import pytest

from account_platform.account_platform.account_service import credentials, sessions
from account_platform.account_platform.account_service.errors import InvalidToken
from account_platform.account_platform.account_service.profile import get_profile


def test_get_profile_returns_owner(db_session):
    credentials.register("alice", "secret", db_session)
    credentials.register("bob", "hunter2", db_session)
    token = sessions.issue(credentials.verify("bob", "hunter2", db_session), db_session)

    profile = get_profile(token, db_session)
    assert profile.name == "bob"
    assert profile.password == "hunter2"
    assert profile.describe() == "Your name is bob and your password is hunter2"


def test_get_profile_unknown_token(db_session):
    credentials.register("alice", "secret", db_session)
    sessions.issue(credentials.verify("alice", "secret", db_session), db_session)

    with pytest.raises(InvalidToken):
        get_profile("f" * 64, db_session)


def test_get_profile_after_revoke(db_session):
    credentials.register("alice", "secret", db_session)
    token = sessions.issue(credentials.verify("alice", "secret", db_session), db_session)
    sessions.revoke(token, db_session)

    with pytest.raises(InvalidToken):
        get_profile(token, db_session)
