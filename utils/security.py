"""
Security Module - Password hashing, client IP lookup and audit logging
"""

from flask import request, current_app, has_request_context
from werkzeug.security import generate_password_hash, check_password_hash
from .errors import InfrastructureError


def hash_password(password):
    """Hash a plaintext password with a fresh random salt"""
    method = current_app.config.get('PASSWORD_HASH_METHOD', 'scrypt')
    try:
        return generate_password_hash(password, method=method)
    except (ValueError, TypeError, OSError) as e:
        # Never fall back to storing anything derived weakly from the input
        raise InfrastructureError(f'Password hashing failed: {e}') from e


def verify_password(password, password_hash):
    """Verify password against hash"""
    if not password_hash or password is None:
        return False
    return check_password_hash(password_hash, password)


def get_client_ip():
    """Get real client IP address"""
    if not has_request_context():
        return 'unknown'
    # Behind a proxy, set PROXY_FIX_X_FOR so ProxyFix rewrites remote_addr
    return request.remote_addr or 'unknown'


def log_audit_event(event_type, username=None, details=''):
    """Log authentication events for administrative review"""
    current_app.logger.info(
        f"audit event={event_type} user={username or '-'} ip={get_client_ip()} {details}".rstrip()
    )


__all__ = [
    'hash_password',
    'verify_password',
    'get_client_ip',
    'log_audit_event'
]
