import pytest

from hostel_dashboard.components.auth.service import AuthService
from hostel_dashboard.core import system_logs
from hostel_dashboard.core.exceptions import ValidationError

SIGNUP = {
    'firstName': 'Maya',
    'lastName': 'Iyer',
    'email': 'maya@hostel.test',
    'phone': '',
    'password': 'longenough',
    'confirmPassword': 'longenough',
    'adminCode': 'HOSTEL-ADMIN',
}


def test_login_form_renders(client):
    response = client.get('/login/warden')
    assert response.status_code == 200
    assert b'Warden Login' in response.data


def test_unknown_role_is_404(client):
    assert client.get('/login/janitor').status_code == 404


def test_student_login_stores_token(client, backend):
    backend.add('POST', '/api/auth/login', {
        'success': True, 'token': 'jwt-1', 'user': {'_id': 'u1', 'role': 'student', 'name': 'Asha'},
    })

    response = client.post('/login/student', data={'email': 'asha@hostel.test', 'password': 'pw'})

    assert response.status_code == 302
    assert response.headers['Location'].endswith('/dashboard/student')
    assert backend.calls[0]['json'] == {'email': 'asha@hostel.test', 'password': 'pw', 'role': 'student'}
    with client.session_transaction() as sess:
        assert sess['token'] == 'jwt-1'
        assert sess['student_user']['_id'] == 'u1'


def test_student_portal_refuses_other_roles(client, backend, flashes):
    backend.add('POST', '/api/auth/login', {'token': 'jwt-1', 'user': {'role': 'admin'}})

    response = client.post('/login/student', data={'email': 'a@b.c', 'password': 'pw'})

    assert response.status_code == 200
    assert b'This portal is for students only' in response.data
    with client.session_transaction() as sess:
        assert 'token' not in sess


def test_admin_and_warden_tokens_use_their_own_keys(client, backend):
    backend.add('POST', '/api/auth/login', {'data': {'token': 'jwt-2', 'user': {'role': 'warden'}}})
    client.post('/login/warden', data={'email': 'w@hostel.test', 'password': 'pw'})
    with client.session_transaction() as sess:
        assert sess['wardenToken'] == 'jwt-2'
        assert 'token' not in sess
        assert 'adminToken' not in sess


def test_login_requires_fields(client, backend):
    response = client.post('/login/admin', data={'email': '', 'password': ''})
    assert b'Please fill in all fields' in response.data
    assert backend.calls == []


def test_bad_credentials_401_stays_on_form(client, backend):
    backend.add('POST', '/api/auth/login', {'message': 'Invalid credentials'}, status=401)
    response = client.post('/login/admin', data={'email': 'a@b.c', 'password': 'x'})
    assert response.status_code == 200
    assert b'Invalid email or password' in response.data


def test_login_logs_do_not_carry_email(client, backend):
    backend.add('POST', '/api/auth/login', {'message': 'Invalid credentials'}, status=401)
    client.post('/login/admin', data={'email': 'maya@hostel.test', 'password': 'x'})
    backend.add('POST', '/api/auth/login', {'token': 'jwt-3', 'user': {'role': 'admin'}})
    client.post('/login/admin', data={'email': 'maya@hostel.test', 'password': 'right'})

    messages = [entry['message'] for entry in system_logs]
    assert any('admin login rejected' in m for m in messages)
    assert any('admin login succeeded' in m for m in messages)
    assert not any('maya@hostel.test' in m for m in messages)


def test_login_page_redirects_when_logged_in(client, login):
    login('admin')
    response = client.get('/login/admin')
    assert response.headers['Location'].endswith('/dashboard/admin')


def test_logout_clears_only_that_role(client, login):
    login('admin')
    login('student')
    response = client.post('/logout/admin')
    assert response.headers['Location'].endswith('/login/admin')
    with client.session_transaction() as sess:
        assert 'adminToken' not in sess
        assert sess['token'] == 'tok-123'


def test_admin_signup_success(client, backend):
    backend.add('POST', '/api/auth/register/admin', {'success': True})
    response = client.post('/signup/admin', data=SIGNUP)
    assert response.headers['Location'].endswith('/login/admin')
    assert backend.calls[0]['json']['adminCode'] == 'HOSTEL-ADMIN'
    assert 'confirmPassword' not in backend.calls[0]['json']


@pytest.mark.parametrize('changes, message', [
    ({'confirmPassword': 'different1'}, "Passwords don't match"),
    ({'password': 'short', 'confirmPassword': 'short'}, 'at least 8 characters'),
    ({'adminCode': ''}, 'Please fill in all required fields'),
])
def test_admin_signup_validation(changes, message):
    with pytest.raises(ValidationError, match=message):
        AuthService().validate_admin_signup(dict(SIGNUP, **changes))


def test_profile_uses_auth_me_for_staff(client, login, backend):
    login('admin')
    backend.add('GET', '/api/auth/me', {'success': True, 'data': {'user': {'name': 'Maya Iyer', 'email': 'm@h.t'}}})
    response = client.get('/dashboard/admin/profile')
    assert b'Maya Iyer' in response.data
    assert b'MI' in response.data


def test_profile_uses_student_profile(client, login, backend):
    login('student')
    backend.add('GET', '/api/student/profile', {'success': True, 'data': {'name': 'Asha Rao', 'studentId': 'ST01'}})
    response = client.get('/dashboard/student/profile')
    assert b'ST01' in response.data


def test_login_is_rate_limited(backend):
    from hostel_dashboard import create_app
    from conftest import API_BASE_URL

    app = create_app(config={
        'TESTING': True,
        'SECRET_KEY': 'x',
        'API_BASE_URL': API_BASE_URL,
        'RATELIMIT_ENABLED': True,
        'LOGIN_RATE_LIMIT': '2 per minute',
    }, http_session=backend)
    client = app.test_client()
    backend.add('POST', '/api/auth/login', {'message': 'Invalid credentials'}, status=400)

    codes = [client.post('/login/admin', data={'email': 'a@b.c', 'password': 'x'}).status_code
             for _ in range(3)]
    assert codes == [200, 200, 429]
