import pytest

from extensions import db
from models import User
from utils.errors import AuthenticationRejected
from utils.strategy import (
    AuthStrategy,
    Credentials,
    GENERIC_FAILURE_MESSAGE,
    LocalStrategy,
    REASON_MISMATCH,
    REASON_NO_LOCAL_CREDENTIAL,
    REASON_NOT_FOUND,
)


@pytest.fixture()
def strategy():
    return LocalStrategy()


def test_correct_credentials_authenticate(app, user, strategy):
    with app.app_context():
        result = strategy.authenticate(Credentials(user['email'], user['password']))
        assert result.authenticated
        assert result.user.id == user['id']
        assert result.reason is None


def test_email_is_normalized_before_lookup(app, user, strategy):
    with app.app_context():
        result = strategy.authenticate(Credentials('  ALICE@Example.com', user['password']))
        assert result.authenticated


def test_unknown_email_rejected(app, strategy):
    with app.app_context():
        result = strategy.authenticate(Credentials('nouser@x.com', 'whatever1'))
        assert not result.authenticated
        assert result.user is None
        assert result.reason == REASON_NOT_FOUND


def test_wrong_password_rejected(app, user, strategy):
    with app.app_context():
        result = strategy.authenticate(Credentials(user['email'], 'wrongpass'))
        assert not result.authenticated
        assert result.reason == REASON_MISMATCH


def test_account_without_local_password_rejected(app, strategy):
    with app.app_context():
        db.session.add(User(username='oauth', email='oauth@example.com'))
        db.session.commit()
        result = strategy.authenticate(Credentials('oauth@example.com', 'whatever1'))
        assert result.reason == REASON_NO_LOCAL_CREDENTIAL


def test_rejections_share_one_message(app, user, strategy):
    with app.app_context():
        unknown = strategy.authenticate(Credentials('nouser@x.com', 'whatever1'))
        mismatch = strategy.authenticate(Credentials(user['email'], 'wrongpass'))
    assert unknown.message == mismatch.message == GENERIC_FAILURE_MESSAGE


def test_require_raises_on_rejection(app, user, strategy):
    with app.app_context():
        assert strategy.require(Credentials(user['email'], user['password'])).id == user['id']
        with pytest.raises(AuthenticationRejected) as excinfo:
            strategy.require(Credentials(user['email'], 'wrongpass'))
    assert excinfo.value.reason == REASON_MISMATCH
    assert str(excinfo.value) == GENERIC_FAILURE_MESSAGE


def test_base_strategy_is_abstract():
    with pytest.raises(NotImplementedError):
        AuthStrategy().authenticate(Credentials('a@b.co', 'x'))
