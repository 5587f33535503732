import pytest

from conftest import login
from extensions import db
from models import Todo
from utils.data import create_user


def todo_id(app, text):
    with app.app_context():
        return Todo.query.filter_by(todo=text).one().id


@pytest.fixture()
def other_client(app):
    with app.app_context():
        create_user('bob', 'bob@example.com', 'longpass1')
    client = app.test_client()
    login(client, 'bob@example.com', 'longpass1')
    return client


def test_list_requires_login(client):
    response = client.get('/todos')
    assert response.status_code == 302
    assert response.headers['Location'] == '/'


def test_create_and_list(app, logged_in_client):
    response = logged_in_client.post('/todos/createTodo', data={'todoItem': 'Buy milk'})
    assert response.status_code == 302
    assert response.headers['Location'] == '/todos'

    page = logged_in_client.get('/todos').get_data(as_text=True)
    assert 'Buy milk' in page
    assert 'Things left to do: 1' in page


def test_blank_todo_is_rejected(app, logged_in_client):
    logged_in_client.post('/todos/createTodo', data={'todoItem': '   '})
    assert 'Todo cannot be blank.' in logged_in_client.get('/todos').get_data(as_text=True)
    with app.app_context():
        assert Todo.query.count() == 0


def test_mark_complete_and_incomplete(app, logged_in_client):
    logged_in_client.post('/todos/createTodo', data={'todoItem': 'Walk dog'})
    tid = todo_id(app, 'Walk dog')

    response = logged_in_client.put('/todos/markComplete', json={'todoIdFromJSFile': tid})
    assert response.get_json() == 'Marked Complete'
    assert 'Things left to do: 0' in logged_in_client.get('/todos').get_data(as_text=True)

    response = logged_in_client.put('/todos/markIncomplete', json={'todoIdFromJSFile': tid})
    assert response.get_json() == 'Marked Incomplete'
    with app.app_context():
        assert db.session.get(Todo, tid).completed is False


def test_delete(app, logged_in_client):
    logged_in_client.post('/todos/createTodo', data={'todoItem': 'Old task'})
    tid = todo_id(app, 'Old task')
    response = logged_in_client.delete('/todos/deleteTodo', json={'todoIdFromJSFile': tid})
    assert response.get_json() == 'Deleted It'
    with app.app_context():
        assert Todo.query.count() == 0


def test_unknown_todo_is_404(logged_in_client):
    response = logged_in_client.put('/todos/markComplete', json={'todoIdFromJSFile': 'missing'})
    assert response.status_code == 404


def test_todos_are_scoped_to_their_owner(app, logged_in_client, other_client):
    logged_in_client.post('/todos/createTodo', data={'todoItem': 'Private'})
    tid = todo_id(app, 'Private')

    assert 'Private' not in other_client.get('/todos').get_data(as_text=True)
    assert other_client.put('/todos/markComplete', json={'todoIdFromJSFile': tid}).status_code == 404
    assert other_client.delete('/todos/deleteTodo', json={'todoIdFromJSFile': tid}).status_code == 404
    with app.app_context():
        assert Todo.query.count() == 1


@pytest.mark.parametrize('method, path', [
    ('post', '/todos/createTodo'),
    ('put', '/todos/markComplete'),
    ('put', '/todos/markIncomplete'),
    ('delete', '/todos/deleteTodo'),
])
def test_mutations_require_login(app, client, method, path):
    response = getattr(client, method)(path, data={'todoItem': 'x'})
    assert response.status_code == 302
    assert response.headers['Location'] == '/'
    with app.app_context():
        assert Todo.query.count() == 0
