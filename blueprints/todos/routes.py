"""
Todos Routes - Every route is scoped to the logged-in user
"""

from flask import render_template, redirect, url_for, request, flash, jsonify
from flask_login import current_user
from utils.data import get_todos, count_items_left, create_todo, set_todo_completed, delete_todo
from utils.decorators import login_required
from . import todos_bp


def todo_id_from_request():
    """The client script sends the id as `todoIdFromJSFile`"""
    payload = request.get_json(silent=True) or request.form
    return payload.get('todoIdFromJSFile')


def not_found():
    return jsonify({'error': 'Todo not found'}), 404


@todos_bp.route('')
@login_required
def index():
    """List the current user's todos"""
    return render_template('todos.html',
                           todos=get_todos(current_user),
                           left=count_items_left(current_user),
                           user=current_user)


@todos_bp.route('/createTodo', methods=['POST'])
@login_required
def create():
    text = (request.form.get('todoItem') or '').strip()
    if not text:
        flash('Todo cannot be blank.', 'errors')
        return redirect(url_for('todos.index'))
    create_todo(current_user, text)
    return redirect(url_for('todos.index'))


@todos_bp.route('/markComplete', methods=['PUT'])
@login_required
def mark_complete():
    if set_todo_completed(current_user, todo_id_from_request(), True) is None:
        return not_found()
    return jsonify('Marked Complete')


@todos_bp.route('/markIncomplete', methods=['PUT'])
@login_required
def mark_incomplete():
    if set_todo_completed(current_user, todo_id_from_request(), False) is None:
        return not_found()
    return jsonify('Marked Incomplete')


@todos_bp.route('/deleteTodo', methods=['DELETE'])
@login_required
def delete():
    if not delete_todo(current_user, todo_id_from_request()):
        return not_found()
    return jsonify('Deleted It')
