import pytest

from app import create_app
from extensions import db
from utils.data import create_user

COOKIE_NAME = 'todoauth_session'

ALICE = {
    'userName': 'alice',
    'email': 'alice@example.com',
    'password': 'longpass1',
    'confirmPassword': 'longpass1',
}


@pytest.fixture()
def app():
    """Application on a private in-memory database."""
    app = create_app('testing')
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def user(app):
    """A registered user; returns the id and the plaintext credentials."""
    with app.app_context():
        created = create_user(ALICE['userName'], ALICE['email'], ALICE['password'])
        return {
            'id': created.id,
            'username': created.username,
            'email': created.email,
            'password': ALICE['password'],
        }


def login(client, email, password, follow_redirects=False):
    return client.post('/login', data={'email': email, 'password': password},
                       follow_redirects=follow_redirects)


@pytest.fixture()
def logged_in_client(client, user):
    response = login(client, user['email'], user['password'])
    assert response.status_code == 302
    return client
