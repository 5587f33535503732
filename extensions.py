"""
Extensions Module - Centralized initialization of Flask extensions
Decouples extensions from the main app.py to avoid circular imports
and enable better testing.
"""

from flask_sqlalchemy import SQLAlchemy
from flask_login import LoginManager

# Initialize extensions without binding to app
db = SQLAlchemy()
login_manager = LoginManager()
login_manager.session_protection = 'basic'


@login_manager.user_loader
def load_user(user_id):
    """Resolve the id stored in the session back to a User.

    Returning None makes Flask-Login treat the request as anonymous, so a
    session pointing at a user that no longer exists never errors out.
    """
    from utils.data import find_user_by_id
    return find_user_by_id(user_id)


__all__ = ['db', 'login_manager']
