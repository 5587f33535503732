"""
Decorators Module - Route guards based on the current login
"""

from functools import wraps
from flask import session, redirect, url_for, request
from flask_login import current_user


def login_required(f):
    """Decorator to require a logged-in user"""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if not current_user.is_authenticated:
            # Remember where the user was headed so login can send them back
            if request.method == 'GET':
                session['return_to'] = request.full_path.rstrip('?')
            return redirect(url_for('main.index'))
        return f(*args, **kwargs)
    return decorated_function


def anonymous_required(f):
    """Decorator for pages only guests should see (login, signup)"""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if current_user.is_authenticated:
            return redirect(url_for('todos.index'))
        return f(*args, **kwargs)
    return decorated_function
