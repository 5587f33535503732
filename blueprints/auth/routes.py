"""
Auth Routes - Signup, login and logout
"""

from flask import render_template, session, redirect, url_for, request, flash, current_app
from flask_login import login_user, logout_user, current_user
from utils.data import create_user
from utils.decorators import anonymous_required
from utils.errors import ValidationError, DuplicateAccountError, SessionTeardownError
from utils.security import log_audit_event
from utils.sessions import destroy_session, regenerate_session
from utils.strategy import LocalStrategy, Credentials
from utils.validation import validate_login, validate_signup, ensure_valid, normalize_email
from . import auth_bp

strategy = LocalStrategy()


def flash_errors(errors):
    for error in errors:
        flash(error, 'errors')


def safe_return_to(target):
    """Only follow local paths captured by the route guard"""
    if target and target.startswith('/') and not target.startswith('//'):
        return target
    return None


@auth_bp.route('/login', methods=['GET'])
@anonymous_required
def login():
    """Login form"""
    return render_template('login.html', title='Login')


@auth_bp.route('/login', methods=['POST'])
def login_post():
    """Authenticate with email and password"""
    try:
        ensure_valid(validate_login(request.form))
    except ValidationError as e:
        flash_errors(e.errors)
        return redirect(url_for('auth.login'))

    email = normalize_email(request.form.get('email'))
    result = strategy.authenticate(Credentials(email=email, password=request.form.get('password')))
    if not result.authenticated:
        flash(result.message, 'errors')
        log_audit_event('failed_login', username=email, details=f"reason={result.reason}")
        return redirect(url_for('auth.login'))

    regenerate_session()
    login_user(result.user)
    flash('Success! You are logged in.', 'success')
    log_audit_event('login', username=result.user.username)
    return redirect(safe_return_to(session.pop('return_to', None)) or url_for('todos.index'))


@auth_bp.route('/logout')
def logout():
    """Log out and destroy the whole session"""
    username = current_user.username if current_user.is_authenticated else None
    logout_user()
    try:
        destroy_session()
    except SessionTeardownError as e:
        current_app.logger.error(f"Error: Failed to destroy the session during logout: {str(e)}")
    log_audit_event('logout', username=username)
    return redirect(url_for('main.index'))


@auth_bp.route('/signup', methods=['GET'])
@anonymous_required
def signup():
    """Signup form"""
    return render_template('signup.html', title='Create Account')


@auth_bp.route('/signup', methods=['POST'])
def signup_post():
    """Register a new account and log it in"""
    try:
        ensure_valid(validate_signup(request.form))
    except ValidationError as e:
        flash_errors(e.errors)
        return redirect(url_for('auth.signup'))

    try:
        user = create_user(
            request.form.get('userName'),
            normalize_email(request.form.get('email')),
            request.form.get('password')
        )
    except DuplicateAccountError as e:
        flash(str(e), 'errors')
        return redirect(url_for('auth.signup'))

    regenerate_session()
    login_user(user)
    log_audit_event('signup', username=user.username)
    return redirect(url_for('todos.index'))
