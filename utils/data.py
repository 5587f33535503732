"""
Data Management Module - Credential store and todo persistence
All writes go through SQLAlchemy; uniqueness is left to the database.
"""

from flask import current_app
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from extensions import db
from models import User, Todo
from .errors import DuplicateAccountError, InfrastructureError
from .validation import normalize_email


def create_user(username, email, password):
    """
    Create a user with a hashed password

    The unique constraints on username and email decide duplicates, so two
    concurrent signups for the same account cannot both succeed.

    Args:
        username (str): Display/login name, must be unique
        email (str): Address, normalized before storing
        password (str): Plaintext password, only its hash is persisted

    Returns:
        User: The persisted user

    Raises:
        DuplicateAccountError: username or email already registered
        InfrastructureError: hashing or database failure
    """
    user = User(username=(username or '').strip(), email=normalize_email(email))
    user.set_password(password)
    db.session.add(user)
    try:
        db.session.commit()
    except IntegrityError as e:
        db.session.rollback()
        current_app.logger.info(f"Duplicate signup rejected for {user.email}")
        raise DuplicateAccountError(username=user.username, email=user.email) from e
    except SQLAlchemyError as e:
        db.session.rollback()
        current_app.logger.error(f"Error creating user {user.email}: {str(e)}")
        raise InfrastructureError('Could not create user') from e
    current_app.logger.info(f"Created user {user.username} ({user.id})")
    return user


def find_user_by_email(email):
    """Get user by (normalized) email"""
    email = normalize_email(email)
    if not email:
        return None
    return User.query.filter_by(email=email).first()


def find_user_by_id(user_id):
    """Get user by primary key, None when it no longer exists"""
    if not user_id:
        return None
    return db.session.get(User, str(user_id))


def get_todos(user):
    """Todos of a user, oldest first"""
    return Todo.query.filter_by(user_id=user.id).order_by(Todo.created_at).all()


def count_items_left(user):
    return Todo.query.filter_by(user_id=user.id, completed=False).count()


def create_todo(user, text):
    todo = Todo(user_id=user.id, todo=text, completed=False)
    db.session.add(todo)
    db.session.commit()
    current_app.logger.info(f"Todo {todo.id} created for {user.username}")
    return todo


def get_user_todo(user, todo_id):
    """A todo owned by `user`, or None"""
    if not todo_id:
        return None
    return Todo.query.filter_by(id=str(todo_id), user_id=user.id).first()


def set_todo_completed(user, todo_id, completed):
    todo = get_user_todo(user, todo_id)
    if todo is None:
        return None
    todo.completed = completed
    db.session.commit()
    return todo


def delete_todo(user, todo_id):
    todo = get_user_todo(user, todo_id)
    if todo is None:
        return False
    db.session.delete(todo)
    db.session.commit()
    current_app.logger.info(f"Todo {todo_id} deleted for {user.username}")
    return True
