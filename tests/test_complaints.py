import pytest

from hostel_dashboard.components.complaints.service import ComplaintsService
from hostel_dashboard.core.exceptions import ValidationError

COMPLAINTS = [
    {'_id': 'c1', 'title': 'Leaking tap', 'description': 'Bathroom tap drips', 'category': 'Maintenance',
     'status': 'pending', 'roomNumber': '101', 'createdAt': '2026-10-01T10:00:00Z',
     'submittedBy': {'email': 'asha@hostel.test', 'studentId': 'ST01'}},
    {'_id': 'c2', 'title': 'Cold food', 'description': 'Dinner served cold', 'category': 'Food',
     'status': 'resolved', 'roomNumber': '204', 'createdAt': '2026-10-05T10:00:00Z',
     'submittedBy': {'email': 'ben@hostel.test', 'studentId': 'ST02'}},
    {'_id': 'c3', 'title': 'Broken lock', 'description': 'Door lock jammed', 'category': 'Security',
     'status': 'in_progress', 'roomNumber': '310', 'createdAt': '2026-10-03T10:00:00Z',
     'submittedBy': None},
]


@pytest.fixture
def service():
    return ComplaintsService()


@pytest.mark.parametrize('search, expected', [
    ('TAP', ['c1']),
    ('ben@', ['c2']),
    ('st01', ['c1']),
    ('310', ['c3']),
    ('jammed', ['c3']),
    ('', ['c1', 'c2', 'c3']),
])
def test_search_is_case_insensitive_over_fields(service, search, expected):
    assert [c['_id'] for c in service.filter_complaints(COMPLAINTS, search=search)] == expected


def test_status_and_category_filters(service):
    assert [c['_id'] for c in service.filter_complaints(COMPLAINTS, status='resolved')] == ['c2']
    assert [c['_id'] for c in service.filter_complaints(COMPLAINTS, category='Security')] == ['c3']
    assert service.filter_complaints(COMPLAINTS, status='pending', category='Food') == []


def test_status_counts(app, service):
    with app.app_context():
        counts = service.status_counts(COMPLAINTS)
    assert counts == {'pending': 1, 'in_progress': 1, 'resolved': 1, 'rejected': 0, 'total': 3}


def test_create_requires_fields(app, service):
    with app.app_context():
        with pytest.raises(ValidationError, match='required fields'):
            service.validate_complaint({'title': 'x', 'description': ' ', 'roomNumber': '1'})


def test_student_create_sends_default_priority(client, login, backend):
    login('student')
    backend.add('POST', '/api/student/complaints', {'success': True, 'data': {'_id': 'c9'}})

    client.post('/dashboard/student/complaints', data={
        'title': 'Fan noise', 'description': 'Ceiling fan rattles', 'roomNumber': '101', 'category': 'Maintenance',
    })

    assert backend.calls_to('POST', '/api/student/complaints')[0]['json'] == {
        'title': 'Fan noise', 'description': 'Ceiling fan rattles', 'roomNumber': '101',
        'category': 'Maintenance', 'priority': 'medium',
    }


def test_student_list_newest_first(client, login, backend):
    login('student')
    backend.add('GET', '/api/student/complaints', {'data': COMPLAINTS})
    body = client.get('/dashboard/student/complaints').get_data(as_text=True)
    assert body.index('Cold food') < body.index('Broken lock') < body.index('Leaking tap')


def test_staff_list_filters_and_counts(client, login, backend):
    login('warden')
    backend.add('GET', '/api/warden/complaints', COMPLAINTS)

    body = client.get('/dashboard/warden/complaints?status=pending').get_data(as_text=True)

    assert 'Leaking tap' in body
    assert 'Cold food' not in body
    assert 'Total: 3' in body


def test_staff_detail_fetched_when_not_in_list(client, login, backend):
    login('admin')
    backend.add('GET', '/api/admin/complaints', [])
    backend.add('GET', '/api/admin/complaints/c7', {'_id': 'c7', 'title': 'Window stuck', 'status': 'pending',
                                                    'comments': [{'text': 'Looking into it'}]})
    body = client.get('/dashboard/admin/complaints?id=c7').get_data(as_text=True)
    assert 'Window stuck' in body
    assert 'Looking into it' in body


def test_staff_status_update(client, login, backend):
    login('admin')
    backend.add('PUT', '/api/admin/complaints/c1', {'_id': 'c1', 'status': 'in_progress'})
    backend.add('GET', '/api/admin/complaints', COMPLAINTS)

    response = client.post('/dashboard/admin/complaints/c1/status', data={'status': 'in_progress'},
                           follow_redirects=True)

    assert backend.calls_to('PUT', '/api/admin/complaints/c1')[0]['json'] == {'status': 'in_progress'}
    assert b'Status updated to in progress' in response.data


def test_invalid_status_is_not_sent(client, login, backend, flashes):
    login('admin')
    client.post('/dashboard/admin/complaints/c1/status', data={'status': 'closed'})
    assert backend.calls_to('PUT', '/api/admin/complaints/c1') == []
    assert flashes() == ['Invalid status: closed']


def test_empty_comment_rejected(client, login, backend, flashes):
    login('student')
    client.post('/dashboard/student/complaints/c1/comments', data={'text': '  '})
    assert backend.calls == []
    assert flashes() == ['Please enter a comment']


def test_list_failure_renders_empty(client, login, backend):
    login('admin')
    backend.add('GET', '/api/admin/complaints', {'message': 'Server error'}, status=500)
    response = client.get('/dashboard/admin/complaints')
    assert response.status_code == 200
    assert b'Server error' in response.data
    assert b'No complaints found' in response.data
