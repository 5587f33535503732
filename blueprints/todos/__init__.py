"""
Todos Blueprint - Per-user todo list
Handles: Listing, creating, completing and deleting todos
"""

from flask import Blueprint

todos_bp = Blueprint('todos', __name__, url_prefix='/todos')

from . import routes
