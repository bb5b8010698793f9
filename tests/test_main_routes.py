from datetime import date

import pytest

from hostel_dashboard.components.attendance import routes as attendance_routes
from hostel_dashboard.components.mess_menu import routes as mess_routes

MONDAY = date(2026, 10, 19)


def test_health(client):
    data = client.get('/health').get_json()
    assert data['status'] == 'healthy'


def test_index_lists_logins(client):
    body = client.get('/').get_data(as_text=True)
    assert '/login/student' in body
    assert '/login/warden' in body


def test_index_redirects_logged_in_user(client, login):
    login('warden')
    assert client.get('/').headers['Location'].endswith('/dashboard/warden')


def test_admin_home_merges_pending_newest_first(client, login, backend):
    login('admin')
    backend.add('GET', '/api/admin/leave', {'data': [
        {'_id': 'l1', 'leaveType': 'medical', 'createdAt': '2026-10-10T00:00:00Z', 'student': {'name': 'Asha'}},
    ]})
    backend.add('GET', '/api/admin/complaints', [
        {'_id': 'c1', 'title': 'Leaking tap', 'createdAt': '2026-10-12T00:00:00Z', 'submittedBy': {'name': 'Ben'}},
        {'_id': 'c2', 'title': 'Broken lock', 'createdAt': '2026-10-08T00:00:00Z'},
    ])

    body = client.get('/dashboard/admin').get_data(as_text=True)

    assert body.index('Leaking tap') < body.index('Medical leave request') < body.index('Broken lock')
    assert backend.calls_to('GET', '/api/admin/leave')[0]['params'] == {'status': 'pending'}
    assert '3 pending items' in body


def test_admin_home_survives_one_failing_source(client, login, backend):
    login('admin')
    backend.add('GET', '/api/admin/leave', {'message': 'down'}, status=503)
    backend.add('GET', '/api/admin/complaints', [{'_id': 'c1', 'title': 'Leaking tap'}])

    body = client.get('/dashboard/admin').get_data(as_text=True)

    assert 'Leaking tap' in body
    assert '1 pending item' in body


def test_admin_home_401_logs_out(client, login, backend):
    login('admin')
    backend.add('GET', '/api/admin/leave', {}, status=401)
    response = client.get('/dashboard/admin')
    assert response.headers['Location'].endswith('/login/admin')


def test_student_home_sections(client, login, backend, monkeypatch):
    monkeypatch.setattr(mess_routes.service, 'today', lambda: MONDAY)
    login('student')
    backend.add('GET', '/api/student/room-info', {'success': True, 'data': {'student': {
        'name': 'Asha Rao', 'room': {'block': 'A', 'roomNumber': '101'}}}})
    backend.add('GET', '/api/student/complaints', {'data': [{'title': 'Tap', 'status': 'pending'}]})
    backend.add('GET', '/api/notices', {'message': 'down'}, status=500)
    backend.add('GET', '/api/menu', {'data': [{'_id': 'm1', 'day': 'Monday', 'breakfast': 'Poha',
                                               'lunch': 'Dal', 'snacks': 'Tea', 'dinner': 'Roti'}]})

    body = client.get('/dashboard/student').get_data(as_text=True)

    assert 'Welcome, Asha Rao' in body
    assert 'Room A-101' in body
    assert 'Pending complaints: 1' in body
    assert 'Pending leave: 0' in body
    assert 'Urgent Notices' not in body
    assert 'Poha' in body


def test_warden_home_counts(client, login, backend, monkeypatch):
    monkeypatch.setattr(attendance_routes.service, 'today', lambda: '2026-10-19')
    login('warden')
    backend.add('GET', '/api/warden/leave', [{'status': 'pending'}, {'status': 'approved'}])
    backend.add('GET', '/api/warden/complaints', [{'status': 'pending'}, {'status': 'pending'}])
    backend.add('GET', '/api/warden/attendance/2026-10-19', [
        {'student': 's1', 'morningStatus': 'present', 'eveningStatus': 'absent'},
        {'student': 's2', 'morningStatus': 'present', 'eveningStatus': 'present'},
    ])

    body = client.get('/dashboard/warden').get_data(as_text=True)

    assert 'Pending leave: 1 &middot; Pending complaints: 2' in body
    assert '<td>Morning</td><td>2</td><td>0</td>' in body
    assert '<td>Evening</td><td>1</td><td>1</td>' in body


@pytest.mark.parametrize('role, link', [
    ('student', '/dashboard/student/fees'),
    ('admin', '/dashboard/admin/room-allocation'),
    ('warden', '/dashboard/warden/attendance'),
])
def test_sidebar_links_per_role(client, login, backend, role, link):
    login(role)
    body = client.get(f'/dashboard/{role}/notices').get_data(as_text=True)
    assert f'href="{link}"' in body
