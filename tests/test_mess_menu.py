from datetime import date

import pytest

from hostel_dashboard.components.mess_menu import routes as mess_routes
from hostel_dashboard.components.mess_menu.service import MessMenuService, normalize_reviews
from hostel_dashboard.core.exceptions import ValidationError

MONDAY = date(2026, 10, 19)

MENU = [
    {'_id': 'm2', 'day': 'Tuesday', 'breakfast': 'Dosa', 'lunch': 'Rajma', 'snacks': 'Samosa',
     'dinner': 'Khichdi', 'averageRating': 3.5, 'reviews': []},
    {'_id': 'm1', 'day': 'Monday', 'breakfast': 'Poha', 'lunch': 'Dal rice', 'snacks': 'Tea',
     'dinner': 'Paneer', 'averageRating': 4,
     'reviews': [{'_id': 'r1', 'userId': {'_id': 'u1'}, 'userName': 'Asha Rao', 'rating': 4, 'comment': 'Tasty'}]},
]


@pytest.fixture
def fixed_today(monkeypatch):
    monkeypatch.setattr(mess_routes.service, 'today', lambda: MONDAY)


def test_normalize_reviews_flattens_user_ids():
    item = normalize_reviews(MENU[1])
    assert item['reviews'][0]['userId'] == 'u1'
    assert MENU[1]['reviews'][0]['userId'] == {'_id': 'u1'}
    assert normalize_reviews({'reviews': None})['reviews'] == []


def test_todays_menu_by_weekday(monkeypatch):
    service = MessMenuService()
    monkeypatch.setattr(service, 'today', lambda: MONDAY)
    assert service.todays_menu(MENU)['_id'] == 'm1'
    assert service.todays_menu(MENU[:1]) is None


def test_review_by_matches_plain_id():
    item = normalize_reviews(MENU[1])
    assert MessMenuService.review_by(item, 'u1')['comment'] == 'Tasty'
    assert MessMenuService.review_by(item, 'u2') is None


@pytest.mark.parametrize('rating', ['0', '6', 'abc', None])
def test_rating_must_be_one_to_five(rating):
    with pytest.raises(ValidationError):
        MessMenuService().submit_review(None, 'm1', rating, 'ok')


def test_student_page_sorted_with_today_and_prefilled_review(client, login, backend, fixed_today):
    login('student', user={'_id': 'u1', 'role': 'student'})
    backend.add('GET', '/api/menu', {'success': True, 'data': MENU})

    body = client.get('/dashboard/student/mess?review=m1').get_data(as_text=True)

    assert body.index('<h2>Monday') < body.index('<h2>Tuesday')
    assert 'Monday, October 19, 2026' in body
    assert 'Feedback for Monday' in body
    assert '>Tasty</textarea>' in body
    assert 'Edit Feedback' in body


def test_submit_review(client, login, backend):
    login('student')
    backend.add('POST', '/api/menu/m1/reviews', {'success': True, 'data': {
        'reviews': [{'userId': {'_id': 'u1'}, 'rating': 5}], 'averageRating': 5,
    }})

    response = client.post('/dashboard/student/mess/m1/review', data={'rating': '5', 'comment': ' Great '})

    assert response.headers['Location'].endswith('/dashboard/student/mess')
    assert backend.calls_to('POST', '/api/menu/m1/reviews')[0]['json'] == {'comment': 'Great', 'rating': 5}


def test_warden_day_filter_passes_query(client, login, backend):
    login('warden')
    backend.add('GET', '/api/menu', {'data': MENU[:1]})

    body = client.get('/dashboard/warden/mess-menu?day=Tuesday').get_data(as_text=True)

    assert backend.calls[0]['params'] == {'day': 'Tuesday'}
    assert 'Samosa' in body


def test_warden_all_days_sends_no_filter(client, login, backend):
    login('warden')
    backend.add('GET', '/api/menu', {'data': []})
    body = client.get('/dashboard/warden/mess-menu').get_data(as_text=True)
    assert backend.calls[0]['params'] is None
    assert 'No menu items found for selected day' in body


def test_warden_create_requires_every_field(client, login, backend, flashes):
    login('warden')
    client.post('/dashboard/warden/mess-menu', data={'day': 'Monday', 'breakfast': 'Poha', 'lunch': '',
                                                     'snacks': 'Tea', 'dinner': 'Rice'})
    assert backend.calls == []
    assert flashes() == ['Please fill all fields']


def test_warden_create_rejects_unknown_day(client, login, backend, flashes):
    login('warden')
    client.post('/dashboard/warden/mess-menu', data={'day': 'Funday', 'breakfast': 'a', 'lunch': 'b',
                                                     'snacks': 'c', 'dinner': 'd'})
    assert backend.calls == []
    assert flashes() == ['Invalid day: Funday']


def test_warden_update_and_delete(client, login, backend):
    login('warden')
    backend.add('PUT', '/api/menu/m1', {'success': True})
    backend.add('DELETE', '/api/menu/m1', {'success': True})

    client.post('/dashboard/warden/mess-menu/m1', data={'day': 'Monday', 'breakfast': 'Upma', 'lunch': 'b',
                                                        'snacks': 'c', 'dinner': 'd'})
    client.post('/dashboard/warden/mess-menu/m1/delete')

    assert backend.calls_to('PUT', '/api/menu/m1')[0]['json']['breakfast'] == 'Upma'
    assert len(backend.calls_to('DELETE', '/api/menu/m1')) == 1


def test_students_cannot_open_warden_menu(client, login):
    login('student')
    response = client.get('/dashboard/warden/mess-menu')
    assert response.headers['Location'].endswith('/login/warden')
