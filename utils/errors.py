"""
Errors Module - Exception taxonomy for the auth and todo flows
"""


class ValidationError(Exception):
    """Malformed form input, correctable by the user"""

    def __init__(self, errors):
        self.errors = list(errors)
        super().__init__('; '.join(self.errors))


class DuplicateAccountError(Exception):
    """Username or email already taken"""

    def __init__(self, username=None, email=None):
        self.username = username
        self.email = email
        super().__init__('Account with that email address or username already exists.')


class AuthenticationRejected(Exception):
    """Credentials did not authenticate; `reason` is for logs only"""

    def __init__(self, reason, message):
        self.reason = reason
        self.message = message
        super().__init__(message)


class InfrastructureError(Exception):
    """Store or hashing failure that no handler recovers from locally"""


class SessionTeardownError(Exception):
    """The server-side session record could not be destroyed"""


__all__ = [
    'ValidationError',
    'DuplicateAccountError',
    'AuthenticationRejected',
    'InfrastructureError',
    'SessionTeardownError'
]
