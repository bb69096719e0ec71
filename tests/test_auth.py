"""
Admin credential check and the auth endpoints.
Run with: pytest tests/test_auth.py -v
"""

import pytest

from orderdesk import create_app
from orderdesk.core.exceptions import ConfigurationError
from orderdesk.modules.auth.credentials import AdminCredentials, check_credentials


CREDENTIALS = AdminCredentials('Admin', 's3cret!')


# ---------------------------------------------------------------------------
# check_credentials
# ---------------------------------------------------------------------------

@pytest.mark.parametrize('username', ['Admin', 'admin', '  ADMIN  ', 'aDmIn\n'])
def test_username_is_trimmed_and_case_insensitive(username):
    user = check_credentials(username, 's3cret!', CREDENTIALS)
    assert user == {
        'id': 1,
        'username': 'Admin',
        'name': 'Administrator',
        'email': 'admin@example.com',
        'role': 'admin',
    }


@pytest.mark.parametrize('username, password', [
    ('Admin', 'S3cret!'),
    ('Admin', ' s3cret!'),
    ('Admin', ''),
    ('root', 's3cret!'),
    (None, 's3cret!'),
    ('Admin', None),
])
def test_bad_credentials_are_rejected(username, password):
    assert check_credentials(username, password, CREDENTIALS) is None


def test_missing_configuration_raises():
    with pytest.raises(ConfigurationError) as exc:
        check_credentials('Admin', 's3cret!', AdminCredentials('Admin', None))
    assert exc.value.missing == ['ADMIN_PASSWORD']


# ---------------------------------------------------------------------------
# POST /api/auth/login
# ---------------------------------------------------------------------------

def test_login_success_starts_session(client):
    response = client.post('/api/auth/login', json={'username': ' admin ', 'password': 's3cret!'})

    assert response.status_code == 200
    data = response.get_json()
    assert data['success'] is True
    assert data['user']['role'] == 'admin'

    with client.session_transaction() as sess:
        assert sess['admin_id'] == 1


def test_login_failure_is_generic(client):
    wrong_user = client.post('/api/auth/login', json={'username': 'root', 'password': 's3cret!'})
    wrong_pass = client.post('/api/auth/login', json={'username': 'Admin', 'password': 'nope'})

    for response in (wrong_user, wrong_pass):
        assert response.status_code == 401
        assert response.get_json() == {'success': False, 'error': 'Invalid username or password'}


def test_login_malformed_body_is_internal_error(client):
    response = client.post('/api/auth/login', data='{not json', content_type='application/json')

    assert response.status_code == 500
    assert response.get_json() == {'success': False, 'error': 'Internal server error'}


def test_login_without_configured_credentials(app_config, fake_backend):
    app_config['ADMIN_PASSWORD'] = None
    app = create_app(app_config, supabase_client=fake_backend)

    response = app.test_client().post('/api/auth/login',
                                      json={'username': 'Admin', 'password': 's3cret!'})

    assert response.status_code == 500
    assert response.get_json() == {'success': False, 'error': 'Server configuration error'}


# ---------------------------------------------------------------------------
# Session endpoints
# ---------------------------------------------------------------------------

def test_me_requires_login(client):
    assert client.get('/api/auth/me').status_code == 401


def test_me_and_logout(admin_client):
    response = admin_client.get('/api/auth/me')
    assert response.status_code == 200
    assert response.get_json()['user']['username'] == 'Admin'

    assert admin_client.post('/api/auth/logout').get_json() == {'success': True}
    assert admin_client.get('/api/auth/me').status_code == 401
