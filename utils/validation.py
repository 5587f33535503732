"""
Validation Module - Shape checks for the signup and login forms
"""

from email_validator import validate_email, EmailNotValidError
from flask import current_app
from .errors import ValidationError


def normalize_email(email):
    """Lowercase and trim an address.

    Provider-specific aliasing (dots, plus tags) is left untouched so that
    two distinct mailboxes never collapse into one account.
    """
    return (email or '').strip().lower()


def is_valid_email(email):
    try:
        validate_email((email or '').strip(), check_deliverability=False)
    except EmailNotValidError:
        return False
    return True


def validate_signup(form):
    """Return the list of problems with a signup submission"""
    min_length = current_app.config.get('PASSWORD_MIN_LENGTH', 8)
    password = form.get('password') or ''
    errors = []
    if not (form.get('userName') or '').strip():
        errors.append('Please enter a username.')
    if not is_valid_email(form.get('email')):
        errors.append('Please enter a valid email address.')
    if len(password) < min_length:
        errors.append(f'Password must be at least {min_length} characters long')
    if password != (form.get('confirmPassword') or ''):
        errors.append('Passwords do not match')
    return errors


def validate_login(form):
    """Return the list of problems with a login submission"""
    errors = []
    if not is_valid_email(form.get('email')):
        errors.append('Please enter a valid email address.')
    if not form.get('password'):
        errors.append('Password cannot be blank.')
    return errors


def ensure_valid(errors):
    """Raise ValidationError when a validator reported problems"""
    if errors:
        raise ValidationError(errors)


__all__ = ['normalize_email', 'is_valid_email', 'validate_signup', 'validate_login', 'ensure_valid']
