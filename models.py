from extensions import db
from datetime import datetime, timezone
from flask_login import UserMixin
import uuid


def utcnow():
    """Naive UTC timestamp, comparable with values read back from SQLite"""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class User(UserMixin, db.Model):
    __tablename__ = 'users'
    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    username = db.Column(db.String(255), unique=True, nullable=False)
    email = db.Column(db.String(255), unique=True, nullable=False)
    # NULL for accounts provisioned through an external sign-in provider
    password_hash = db.Column(db.String(255), nullable=True)
    created_at = db.Column(db.DateTime, default=utcnow)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow)

    # Relationships
    todos = db.relationship('Todo', backref='user', lazy=True, cascade='all, delete-orphan')

    def set_password(self, password):
        from utils.security import hash_password
        self.password_hash = hash_password(password)

    def check_password(self, password):
        from utils.security import verify_password
        return verify_password(password, self.password_hash)

    @property
    def has_local_password(self):
        return bool(self.password_hash)

    def __repr__(self):
        return f'<User {self.username}>'


class Todo(db.Model):
    __tablename__ = 'todos'
    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = db.Column(db.String(36), db.ForeignKey('users.id'), nullable=False)
    todo = db.Column(db.Text, nullable=False)
    completed = db.Column(db.Boolean, default=False, nullable=False)
    created_at = db.Column(db.DateTime, default=utcnow)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow)

    __table_args__ = (
        db.Index('idx_todo_user_created', 'user_id', 'created_at'),
    )


class SessionRecord(db.Model):
    """Server-side session storage, keyed by the sid carried in the cookie"""
    __tablename__ = 'sessions'
    sid = db.Column(db.String(64), primary_key=True)
    data = db.Column(db.Text, nullable=False, default='{}')
    expires_at = db.Column(db.DateTime, nullable=False, index=True)
    created_at = db.Column(db.DateTime, default=utcnow)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow)
