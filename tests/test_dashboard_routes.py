import pytest

from teamops import storage
from teamops.documents import ASSIGNMENTS_PATH, DAILY_ACTIVITIES_PATH, ENGINEER_MASTER_LIST_PATH
from teamops.models import Notification


@pytest.fixture
def seeded(app):
    storage.seed_data()
    return app


def test_stats_and_analytics(client, seeded):
    stats = client.get('/api/stats').get_json()
    assert stats['totalProjects'] == 2
    assert stats['activeMembers'] == 2

    analytics = client.get('/api/analytics').get_json()
    assert {p['name'] for p in analytics['teamPerformance']} == {'Keerthi', 'Sachin'}


def test_engineer_workload(client, seeded):
    workload = client.get('/api/analytics/engineer-workload').get_json()
    assert workload['totalEngineers'] == 2


def test_performance_with_partial_data(client, seeded):
    response = client.get('/api/analytics/performance')

    assert response.status_code == 200
    body = response.get_json()
    assert body['message'] == 'Partial data - attendance unavailable from SharePoint'
    assert body['dataSources']['sharepoint'] is False
    assert len(body['data']) == 2


def test_performance_unavailable_without_github_data(client, seeded, document_store):
    document_store.fail_reads.add(ASSIGNMENTS_PATH)

    response = client.get('/api/analytics/performance')

    assert response.status_code == 503
    assert response.get_json()['data'] == []


def test_daily_task_routes(client, seeded, document_store):
    added = client.post('/api/engineer-daily-activities/Keerthi',
                        json={'activity': 'Wired panel', 'date': '2025-01-06'}).get_json()
    target = client.post('/api/engineer-target-tasks/Keerthi',
                         json={'task': 'IO check', 'date': '2025-01-06'}).get_json()
    assert added['success'] and target['success']

    tasks = client.get('/api/engineer-daily-tasks?date=2025-01-06').get_json()
    keerthi = next(t for t in tasks if t['engineerName'] == 'Keerthi')
    assert [a['id'] for a in keerthi['customActivities']] == [added['id']]
    assert [t['id'] for t in keerthi['targetTasks']] == [target['id']]

    client.delete(f"/api/engineer-daily-activities/Keerthi/{added['id']}", json={'date': '2025-01-06'})
    entry = document_store.data(DAILY_ACTIVITIES_PATH)['engineerDailyData'][0]
    assert entry['completedActivities'] == []
    assert len(entry['targetTasks']) == 1


def test_daily_task_routes_validate_input(client, seeded):
    assert client.post('/api/engineer-daily-activities/Keerthi', json={'activity': ' '}).status_code == 400
    assert client.post('/api/engineer-target-tasks/Keerthi',
                       json={'task': 'IO check', 'date': '06-01-2025'}).status_code == 400
    assert client.get('/api/engineer-daily-tasks?date=yesterday').status_code == 400
    assert client.patch('/api/engineer-daily-tasks/Keerthi/p1', json={'completed': 'yes'}).status_code == 400


def test_task_completion_route(client, seeded):
    project_id = client.get('/api/projects').get_json()[0]['id']

    response = client.patch(f'/api/engineer-daily-tasks/Keerthi/{project_id}', json={'completed': True})

    assert response.get_json() == {'success': True}


def test_pending_tasks_route(client, seeded):
    client.post('/api/engineer-target-tasks/Keerthi', json={'task': 'Carry over', 'date': '2025-01-06'})
    pending = client.get('/api/pending-tasks/Keerthi').get_json()
    assert [p['text'] for p in pending] == ['Carry over']


def test_team_members(client, seeded):
    created = client.post('/api/team-members', json={
        'name': 'Anand', 'role': 'Engineer', 'email': 'anand@drbtechverse.in', 'department': 'Controls'})
    assert created.status_code == 201
    member_id = created.get_json()['id']

    assert client.post('/api/team-members', json={'name': 'Anand'}).status_code == 400
    assert client.post('/api/team-members', json={
        'name': 'A', 'role': 'R', 'email': 'a@b.co', 'department': 'D', 'status': 'sleeping'}).status_code == 400

    renamed = client.patch(f'/api/team-members/{member_id}', json={'name': 'Anand K', 'role': 'Lead'})
    assert renamed.get_json()['name'] == 'Anand K'
    assert renamed.get_json()['role'] == 'Engineer'

    assert client.get(f'/api/team-members/{member_id}').status_code == 200
    assert client.get('/api/team-members/missing').status_code == 404
    assert len(client.get('/api/team-members').get_json()) == 3


def test_projects_sorted_by_status_then_progress(client, seeded):
    client.post('/api/projects', json={'name': 'Pending One', 'status': 'pending'})
    client.post('/api/projects', json={'name': 'Risky', 'status': 'at_risk', 'progress': 10})
    client.post('/api/projects', json={'name': 'Almost', 'status': 'in_progress', 'progress': 99})

    names = [p['name'] for p in client.get('/api/projects').get_json()]

    assert names.index('Almost') < names.index('Risky') < names.index('Nozzle Cleaner') < names.index('Pending One')


def test_project_validation_and_lookup(client, seeded):
    assert client.post('/api/projects', json={'name': 'X', 'priority': 'urgent'}).status_code == 400
    assert client.post('/api/projects', json={'name': 'X', 'progress': 101}).status_code == 400
    assert client.post('/api/projects', json={'name': 'X', 'dueDate': '2025/01/01'}).status_code == 400

    created = client.post('/api/projects', json={'name': 'X', 'dueDate': '2025-01-31'}).get_json()
    assert client.get(f"/api/projects/{created['id']}").get_json()['dueDate'] == '2025-01-31'
    assert client.get('/api/projects/missing').status_code == 404


def test_project_comments(client, seeded):
    project_id = client.get('/api/projects').get_json()[0]['id']

    created = client.post(f'/api/projects/{project_id}/comments', json={
        'content': 'Ready for trials @Keerthi', 'authorId': 'u1', 'authorName': 'Admin', 'mentions': ['Keerthi']})
    assert created.status_code == 201
    assert created.get_json()['mentions'] == 'Keerthi'

    comments = client.get(f'/api/projects/{project_id}/comments').get_json()
    assert [c['content'] for c in comments] == ['Ready for trials @Keerthi']
    assert client.post('/api/projects/missing/comments', json={'content': 'x'}).status_code == 404


def test_notifications(client, seeded):
    created = client.post('/api/notifications', json={'type': 'alert', 'title': 'PLC down', 'message': 'Cell 3'})
    assert created.status_code == 201
    assert created.get_json()['read'] is False
    assert client.post('/api/notifications', json={'type': 'spam', 'title': 't', 'message': 'm'}).status_code == 400

    notifications = client.get('/api/notifications').get_json()
    assert notifications[0]['title'] == 'PLC down'

    assert client.patch(f"/api/notifications/{created.get_json()['id']}/read").status_code == 200
    assert client.patch('/api/notifications/missing/read').status_code == 404

    client.patch('/api/notifications/read-all')
    assert Notification.query.filter_by(read=False).count() == 0


def test_engineer_roster_routes(client, document_store):
    assert client.put('/api/engineers-master-list', json={'engineers': 'Keerthi'}).status_code == 400

    config = client.get('/api/engineer-daily-tasks-config').get_json()
    assert len(config) == 10

    response = client.put('/api/engineers-master-list', json={'engineers': [{'name': 'Anand'}]})
    assert response.get_json() == {'success': True, 'engineers': [{'id': 'eng-1', 'name': 'Anand', 'initials': 'A'}]}
    assert document_store.data(ENGINEER_MASTER_LIST_PATH)['engineers'][0]['name'] == 'Anand'

    assert client.post('/api/engineer-daily-tasks-config/initialize').get_json() == {'success': True}
    assert client.post('/api/engineers-master-list/initialize').get_json() == {'success': True}


def test_master_list_write_failure(client, document_store):
    document_store.fail_writes = True
    response = client.put('/api/engineers-master-list', json={'engineers': [{'name': 'Anand'}]})
    assert response.status_code == 500


def test_enums(client):
    enums = client.get('/api/enums').get_json()
    assert '' in enums['tracking_statuses']
    assert 'Dispatch Stage' in enums['project_stages']


def test_unknown_route_returns_json(client):
    response = client.get('/api/nothing-here')
    assert response.status_code == 404
    assert response.get_json() == {'message': 'Resource not found'}


def test_blank_member_name_is_rejected(client, seeded):
    response = client.post('/api/team-members', json={
        'name': '   ', 'role': 'Engineer', 'email': 'blank@drbtechverse.in', 'department': 'Controls'})
    assert response.status_code == 400
    assert response.get_json() == {'message': 'name is required'}

    assert client.get('/api/analytics').status_code == 200
    assert client.get('/api/analytics/performance').status_code == 200
