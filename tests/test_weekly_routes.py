from teamops.documents import WEEKLY_ASSIGNMENTS_PATH


def _create(client, **overrides):
    body = {'engineerName': 'Keerthi', 'weekStart': '2025-01-06', 'projectName': 'Spot Welding Line'}
    body.update(overrides)
    return client.post('/api/weekly-assignments', json=body)


def test_create_requires_fields(client):
    response = client.post('/api/weekly-assignments', json={'engineerName': 'Keerthi'})
    assert response.status_code == 400
    assert response.get_json() == {'message': 'Missing required fields: engineerName, weekStart, projectName'}


def test_create_generates_id_and_defaults(client, document_store):
    response = _create(client, notes='Cell commissioning')

    assignment = response.get_json()
    assert response.status_code == 200
    assert assignment['id'].startswith('Keerthi-2025-01-06-')
    assert assignment['tasks'] == []
    assert assignment['currentStatus'] == 'not_started'
    assert assignment['notes'] == 'Cell commissioning'
    assert document_store.writes[0]['sha'] is None


def test_create_with_same_id_overwrites(client, document_store):
    _create(client, id='w1')
    _create(client, id='w1', currentStatus='in_progress')

    stored = document_store.data(WEEKLY_ASSIGNMENTS_PATH)['assignments']
    assert len(stored) == 1
    assert stored[0]['currentStatus'] == 'in_progress'


def test_create_rejects_unknown_status(client):
    assert _create(client, currentStatus='paused').status_code == 400


def test_list_filters_by_week(client):
    _create(client, id='w1')
    _create(client, id='w2', weekStart='2025-01-13')

    assert [a['id'] for a in client.get('/api/weekly-assignments?weekStart=2025-01-13').get_json()] == ['w2']
    assert len(client.get('/api/weekly-assignments').get_json()) == 2


def test_patch_merges_fields(client):
    _create(client, id='w1', notes='Before')

    response = client.patch('/api/weekly-assignments/w1', json={'notes': 'After', 'id': 'ignored'})

    assert response.status_code == 200
    assert response.get_json()['notes'] == 'After'
    assert response.get_json()['id'] == 'w1'
    assert response.get_json()['projectName'] == 'Spot Welding Line'
    assert client.patch('/api/weekly-assignments/missing', json={}).status_code == 404


def test_tasks_must_be_a_list_of_objects(client, document_store):
    response = _create(client, id='w1', tasks='oops')
    assert response.status_code == 400
    assert response.get_json() == {'message': 'tasks must be a list of objects'}
    assert _create(client, id='w1', tasks=['IO check']).status_code == 400
    assert document_store.writes == []

    _create(client, id='w1')
    assert client.patch('/api/weekly-assignments/w1', json={'tasks': 'oops'}).status_code == 400
    task = client.post('/api/weekly-assignments/w1/tasks', json={'taskName': 'IO check'})
    assert task.status_code == 200


def test_delete_assignment(client):
    _create(client, id='w1')
    assert client.delete('/api/weekly-assignments/w1').get_json() == {'message': 'Assignment deleted'}
    assert client.delete('/api/weekly-assignments/w1').status_code == 404


def test_task_lifecycle(client):
    _create(client, id='w1')

    assert client.post('/api/weekly-assignments/w1/tasks', json={}).status_code == 400

    task = client.post('/api/weekly-assignments/w1/tasks',
                       json={'taskName': 'IO check', 'targetDate': '2025-01-08'}).get_json()
    assert task['id'].startswith('task-')
    assert task['status'] == 'not_started'

    updated = client.patch(f"/api/weekly-assignments/w1/tasks/{task['id']}",
                           json={'status': 'completed', 'completionDate': '2025-01-07'})
    assert updated.get_json()['status'] == 'completed'
    assert updated.get_json()['taskName'] == 'IO check'

    assert client.patch('/api/weekly-assignments/w1/tasks/missing', json={}).status_code == 404
    assert client.patch(f"/api/weekly-assignments/w1/tasks/{task['id']}",
                        json={'status': 'done'}).status_code == 400

    assert client.delete(f"/api/weekly-assignments/w1/tasks/{task['id']}").status_code == 200
    assert client.delete(f"/api/weekly-assignments/w1/tasks/{task['id']}").status_code == 404


def test_save_all(client, document_store):
    _create(client, id='w1')
    _create(client, id='w2', weekStart='2025-01-13')
    writes = len(document_store.writes)

    response = client.post('/api/weekly-assignments/save-all', json={'weekStart': '2025-01-06'})

    body = response.get_json()
    assert body['success'] is True
    assert body['count'] == 1
    assert len(document_store.writes) == writes + 1


def test_failed_write_is_reported(client, document_store):
    document_store.fail_writes = True
    response = _create(client, id='w1')
    assert response.status_code == 500
    assert response.get_json() == {'message': 'Failed to save assignment'}
