"""
Strategy Module - Pluggable credential verification

A strategy turns raw credentials into an AuthResult. LocalStrategy checks an
email/password pair against the credential store.
"""

from dataclasses import dataclass
from typing import Optional

from flask import current_app

from models import User
from .data import find_user_by_email
from .errors import AuthenticationRejected
from .validation import normalize_email

AUTHENTICATED = 'authenticated'
REJECTED = 'rejected'

REASON_NOT_FOUND = 'identity not found'
REASON_NO_LOCAL_CREDENTIAL = 'no local credential set'
REASON_MISMATCH = 'credential mismatch'

# Shown for every rejection so responses do not reveal which emails exist
GENERIC_FAILURE_MESSAGE = 'Invalid email or password.'


@dataclass(frozen=True)
class Credentials:
    email: str
    password: str


@dataclass(frozen=True)
class AuthResult:
    status: str
    user: Optional[User] = None
    reason: Optional[str] = None
    message: Optional[str] = None

    @property
    def authenticated(self) -> bool:
        return self.status == AUTHENTICATED

    @classmethod
    def success(cls, user: User) -> 'AuthResult':
        return cls(status=AUTHENTICATED, user=user)

    @classmethod
    def rejected(cls, reason: str) -> 'AuthResult':
        return cls(status=REJECTED, reason=reason, message=GENERIC_FAILURE_MESSAGE)


class AuthStrategy:
    """Base class for authentication backends"""

    name = 'base'

    def authenticate(self, credentials: Credentials) -> AuthResult:
        raise NotImplementedError

    def require(self, credentials: Credentials) -> User:
        """Like authenticate(), but raise AuthenticationRejected on failure"""
        result = self.authenticate(credentials)
        if not result.authenticated:
            raise AuthenticationRejected(result.reason, result.message)
        return result.user


class LocalStrategy(AuthStrategy):
    """Email + password checked against locally stored hashes"""

    name = 'local'

    def authenticate(self, credentials: Credentials) -> AuthResult:
        email = normalize_email(credentials.email)
        user = find_user_by_email(email)
        if user is None:
            return self._reject(email, REASON_NOT_FOUND)
        if not user.has_local_password:
            return self._reject(email, REASON_NO_LOCAL_CREDENTIAL)
        if not user.check_password(credentials.password):
            return self._reject(email, REASON_MISMATCH)
        return AuthResult.success(user)

    def _reject(self, email, reason):
        current_app.logger.info(f"Authentication rejected for {email}: {reason}")
        return AuthResult.rejected(reason)
