"""
Utils Package - Centralized utility modules initialization
"""

from .decorators import login_required, anonymous_required
from .errors import (
    ValidationError,
    DuplicateAccountError,
    AuthenticationRejected,
    InfrastructureError,
    SessionTeardownError
)
from .security import (
    hash_password,
    verify_password,
    get_client_ip,
    log_audit_event
)
from .validation import normalize_email, is_valid_email, validate_signup, validate_login, ensure_valid
from .data import create_user, find_user_by_email, find_user_by_id
from .strategy import AuthStrategy, LocalStrategy, AuthResult, Credentials
from .sessions import SqlAlchemySessionInterface, destroy_session, regenerate_session

__all__ = [
    # Decorators
    'login_required',
    'anonymous_required',

    # Errors
    'ValidationError',
    'DuplicateAccountError',
    'AuthenticationRejected',
    'InfrastructureError',
    'SessionTeardownError',

    # Security
    'hash_password',
    'verify_password',
    'get_client_ip',
    'log_audit_event',

    # Validation
    'normalize_email',
    'is_valid_email',
    'validate_signup',
    'validate_login',
    'ensure_valid',

    # Credential store
    'create_user',
    'find_user_by_email',
    'find_user_by_id',

    # Strategy
    'AuthStrategy',
    'LocalStrategy',
    'AuthResult',
    'Credentials',

    # Sessions
    'SqlAlchemySessionInterface',
    'destroy_session',
    'regenerate_session'
]
