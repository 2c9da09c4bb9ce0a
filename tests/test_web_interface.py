"""
Tests for the flow editor REST API.
"""

import pytest

from flow_editor_core.config import EditorSettings
from web_interface.app import create_app


@pytest.fixture
def app():
    app = create_app(EditorSettings())
    app.config['TESTING'] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()


def create(client, tool_id, x=0, y=0):
    response = client.post(f'/api/palette/{tool_id}', json={'x': x, 'y': y})
    assert response.status_code == 201
    return response.get_json()['data']


class TestWebInterface:
    """Test cases for the Flask routes."""

    def test_palette(self, client):
        response = client.get('/api/palette')
        data = response.get_json()['data']

        assert response.status_code == 200
        ids = [entry['id'] for entry in data]
        assert ids[0] == 'create.start-event'
        assert ids[-2:] == ['tool-separator', 'tool-global-connect']
        assert len(ids) == 11

    def test_create_node(self, client):
        node = create(client, 'create.switch-task', 100, 100)

        assert node['type'] == 'bpmn:UserTask'
        assert (node['x'], node['y']) == (50, 60)

    def test_create_unknown_tool(self, client):
        response = client.post('/api/palette/create.nothing', json={})
        assert response.status_code == 404
        assert response.get_json()['success'] is False

    def test_create_bad_position(self, client):
        response = client.post('/api/palette/create.switch-task', json={'x': 'left'})
        assert response.status_code == 400

    def test_connection_veto(self, client):
        switch = create(client, 'create.switch-task')
        end_a = create(client, 'create.end-event')
        end_b = create(client, 'create.end-event')

        first = client.post('/api/connections', json={'source': switch['id'], 'target': end_a['id']})
        second = client.post('/api/connections', json={'source': switch['id'], 'target': end_b['id']})

        assert first.status_code == 201
        assert second.status_code == 409
        body = second.get_json()
        assert body['error'] == "Switch Task allows only 1 outgoing connection"
        assert body['data']['verdict'] == 'reject'
        assert len(client.get('/api/nodes').get_json()['data']['connections']) == 1

    def test_validate_connection(self, client):
        broadcast = create(client, 'create.broadcast-task')
        start = create(client, 'create.start-event')

        response = client.post('/api/connections/validate',
                               json={'source': start['id'], 'target': broadcast['id']})

        assert response.get_json()['data']['verdict'] == 'accept'
        assert client.get('/api/nodes').get_json()['data']['connections'] == []

    def test_dangling_connection(self, client):
        switch = create(client, 'create.switch-task')
        response = client.post('/api/connections', json={'source': switch['id']})
        assert response.status_code == 400

    def test_unknown_node(self, client):
        assert client.get('/api/nodes/missing/context-pad').status_code == 404
        assert client.delete('/api/nodes/missing').status_code == 404

    def test_context_pad(self, client):
        node = create(client, 'create.rollback-gateway')
        data = client.get(f"/api/nodes/{node['id']}/context-pad").get_json()['data']
        assert set(data) == {'delete', 'connect'}

    def test_render_node(self, client):
        node = create(client, 'create.join-task')
        response = client.get(f"/api/nodes/{node['id']}/render")

        assert response.status_code == 200
        assert response.mimetype == 'image/svg+xml'
        assert b'/icons/join-task.svg' in response.data

    def test_shape_path(self, client):
        node = create(client, 'create.condition-flow-gateway', 25, 25)
        data = client.get(f"/api/nodes/{node['id']}/path").get_json()['data']
        assert data['path'] == "M25,0l25,25l-25,25l-25,-25z"

    def test_delete_node(self, client):
        node = create(client, 'create.wait-event')
        assert client.delete(f"/api/nodes/{node['id']}").status_code == 200
        assert client.get('/api/nodes').get_json()['data']['nodes'] == []

    def test_toggle_global_connect(self, client):
        first = client.post('/api/tools/global-connect').get_json()['data']['active']
        second = client.post('/api/tools/global-connect').get_json()['data']['active']
        assert (first, second) == (True, False)

    def test_non_create_entry_is_rejected(self, client):
        response = client.post('/api/palette/tool-global-connect', json={})

        assert response.status_code == 400
        assert response.get_json()['success'] is False
        active = client.post('/api/tools/global-connect').get_json()['data']['active']
        assert active is True

    @pytest.mark.parametrize('path', [
        '/api/palette/create.switch-task',
        '/api/connections',
        '/api/connections/validate',
    ])
    def test_non_object_body(self, client, path):
        response = client.post(path, json=[1, 2])

        assert response.status_code == 400
        assert response.get_json()['success'] is False

    def test_non_string_node_ids(self, client):
        switch = create(client, 'create.switch-task')
        response = client.post('/api/connections', json={'source': switch['id'], 'target': [1]})

        assert response.status_code == 400
        assert client.get('/api/nodes').get_json()['data']['connections'] == []

    def test_vietnamese_palette_title(self):
        client = create_app(EditorSettings(locale='vi')).test_client()
        data = client.get('/api/palette').get_json()['data']

        assert data[-1]['title'] == "Kích hoạt công cụ nối"
