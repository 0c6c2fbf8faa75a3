"""
Tests für Session-Cookie, Anmeldung und gleitenden Sitzungsablauf.
"""

import pytest
from itsdangerous import TimestampSigner

SESSION_COOKIE = 'loca_session'


@pytest.fixture
def clock(monkeypatch):
    """Steuert die Zeitstempel, mit denen Session-Cookies signiert und geprüft werden."""
    state = {'now': 1_700_000_000}
    monkeypatch.setattr(TimestampSigner, 'get_timestamp', lambda self: state['now'])
    return state


def login(client, email='test@example.com', password='geheim123'):
    return client.post('/login', data={'email': email, 'password': password})


def session_cookies(response):
    return [c for c in response.headers.getlist('Set-Cookie') if c.startswith(SESSION_COOKIE + '=')]


def test_anonymous_request_sets_no_session_cookie(client):
    response = client.get('/')
    assert response.status_code == 200
    assert not session_cookies(response)


def test_login_and_session_info(client, test_user):
    response = login(client)
    assert response.status_code == 302
    assert response.headers['Location'].endswith('/dashboard')

    cookie = session_cookies(response)[0]
    assert 'HttpOnly' in cookie
    assert 'Expires=' in cookie

    response = client.get('/api/session')
    assert response.status_code == 200
    data = response.get_json()
    assert data['authenticated'] is True
    assert data['user']['id'] == test_user['id']
    assert data['user']['email'] == 'test@example.com'


def test_dashboard_requires_login(client, test_user):
    response = client.get('/dashboard')
    assert response.status_code == 302
    assert '/login' in response.headers['Location']

    login(client)
    client.set_cookie('locaI18next', 'fr')
    response = client.get('/dashboard')
    assert response.status_code == 200
    assert 'Bonjour Test User' in response.get_data(as_text=True)
    assert 'window.LOCA_USER' in response.get_data(as_text=True)


def test_session_api_without_login(client):
    response = client.get('/api/session')
    assert response.status_code == 401
    assert response.get_json() == {'authenticated': False}


def test_wrong_password(client, test_user):
    response = login(client, password='falsch')
    assert response.status_code == 401
    assert b'Invalid email or password' in response.data
    assert client.get('/api/session').status_code == 401


def test_unknown_email(client, test_user):
    response = login(client, email='niemand@example.com')
    assert response.status_code == 401


def test_login_json_body(client, test_user):
    response = client.post('/login', json={'email': 'TEST@example.com', 'password': 'geheim123'})
    assert response.status_code == 302


def test_logout(client, test_user):
    login(client)
    response = client.get('/logout')
    assert response.status_code == 302
    assert client.get('/api/session').status_code == 401


def test_session_slides_with_activity(client, test_user, clock):
    login(client)

    # Jede Anfrage innerhalb der Lebensdauer verlängert die Sitzung
    clock['now'] += 240
    response = client.get('/api/session')
    assert response.status_code == 200
    assert session_cookies(response)

    clock['now'] += 240
    assert client.get('/api/session').status_code == 200


def test_session_expires_after_inactivity(client, test_user, clock):
    login(client)

    clock['now'] += 240
    assert client.get('/api/session').status_code == 200

    clock['now'] += 301
    assert client.get('/api/session').status_code == 401


def test_session_lifetime_is_exact(client, test_user, clock):
    login(client)
    clock['now'] += 300
    assert client.get('/api/session').status_code == 200


def test_demo_mode_refuses_login(make_app):
    app = make_app(LOCA_DEMO_MODE='true')
    client = app.test_client()

    page = client.get('/login')
    assert b'demo-banner' in page.data

    response = login(client)
    assert response.status_code == 403
    assert b'Login is disabled in demo mode' in response.data


@pytest.mark.parametrize('payload', [['a'], 'x', 42])
def test_login_rejects_non_object_body(client, payload):
    response = client.post('/login', json=payload)
    assert response.status_code == 400
    assert b'Invalid request' in response.data


def test_login_rejects_non_string_fields(client, test_user):
    response = client.post('/login', json={'email': 5, 'password': 'geheim123'})
    assert response.status_code == 400

    response = client.post('/login', json={'email': 'test@example.com', 'password': ['geheim123']})
    assert response.status_code == 400


def test_login_rejects_repeated_form_field(client, test_user):
    response = client.post('/login', data={'email': ['a@example.com', 'test@example.com'],
                                           'password': 'geheim123'})
    assert response.status_code == 400
    assert client.get('/api/session').status_code == 401


def test_login_rejects_malformed_json(client, test_user):
    response = client.post('/login', data='{kaputt', content_type='application/json')
    assert response.status_code == 400
