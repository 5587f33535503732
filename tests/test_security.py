import pytest

from app import create_app
from utils.errors import InfrastructureError
from utils.security import get_client_ip, hash_password, verify_password


def test_hash_is_not_plaintext_and_verifies(app):
    with app.app_context():
        digest = hash_password('longpass1')
    assert digest != 'longpass1'
    assert 'longpass1' not in digest
    assert verify_password('longpass1', digest)


def test_verify_rejects_other_strings(app):
    with app.app_context():
        digest = hash_password('longpass1')
    for candidate in ['longpass2', 'longpass', 'LONGPASS1', '', 'longpass1 ']:
        assert not verify_password(candidate, digest)


def test_each_hash_uses_a_fresh_salt(app):
    with app.app_context():
        first = hash_password('longpass1')
        second = hash_password('longpass1')
    assert first != second
    assert verify_password('longpass1', first)
    assert verify_password('longpass1', second)


def test_missing_hash_never_verifies():
    assert not verify_password('anything', None)
    assert not verify_password('anything', '')


def test_default_method_is_expensive(app):
    app.config['PASSWORD_HASH_METHOD'] = 'scrypt'
    with app.app_context():
        assert hash_password('longpass1').startswith('scrypt:')


def test_hashing_failure_is_not_swallowed(app):
    app.config['PASSWORD_HASH_METHOD'] = 'no-such-method'
    with app.app_context():
        with pytest.raises(InfrastructureError):
            hash_password('longpass1')


def test_client_ip_ignores_forwarded_header(app):
    with app.test_request_context('/', headers={'X-Forwarded-For': '203.0.113.9'},
                                  environ_base={'REMOTE_ADDR': '10.0.0.1'}):
        assert get_client_ip() == '10.0.0.1'


def test_client_ip_from_configured_proxy():
    app = create_app('testing', {'PROXY_FIX_X_FOR': 1})

    @app.route('/whoami')
    def whoami():
        return get_client_ip()

    response = app.test_client().get('/whoami', headers={'X-Forwarded-For': '203.0.113.9'},
                                     environ_base={'REMOTE_ADDR': '10.0.0.1'})
    assert response.get_data(as_text=True) == '203.0.113.9'
