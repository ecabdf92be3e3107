"""
Tests for login, logout, session and permission checks.
"""


class TestLogin:

    def test_login_success(self, client):
        response = client.post('/login', json={'username': 'admin', 'password': 'admin123'})
        assert response.status_code == 200
        data = response.get_json()
        assert data['success'] is True
        assert data['data']['username'] == 'admin'
        assert data['data']['permissions'] == {'all': True}

    def test_login_form_post(self, client):
        response = client.post('/login', data={'username': 'admin', 'password': 'admin123'})
        assert response.status_code == 200

    def test_wrong_password(self, client):
        response = client.post('/login', json={'username': 'admin', 'password': 'nope'})
        assert response.status_code == 401
        assert response.get_json()['success'] is False

    def test_unknown_user(self, client):
        response = client.post('/login', json={'username': 'ghost', 'password': 'admin123'})
        assert response.status_code == 401

    def test_missing_fields(self, client):
        response = client.post('/login', json={'username': 'admin'})
        assert response.status_code == 400
        assert 'password' in response.get_json()['errors']

    def test_inactive_user(self, app, client):
        from database import get_db
        get_db().execute("UPDATE users SET active = 0 WHERE username = 'admin'")
        get_db().commit()

        response = client.post('/login', json={'username': 'admin', 'password': 'admin123'})
        assert response.status_code == 403

    def test_session_is_permanent(self, client):
        client.post('/login', json={'username': 'admin', 'password': 'admin123'})
        with client.session_transaction() as sess:
            assert sess.permanent is True

    def test_last_login_recorded(self, app, client):
        from models.user import get_user_by_username

        client.post('/login', json={'username': 'admin', 'password': 'admin123'})
        assert get_user_by_username('admin')['last_login'] is not None


class TestSession:

    def test_me_requires_login(self, client):
        response = client.get('/me')
        assert response.status_code == 401
        assert response.get_json()['success'] is False

    def test_me(self, authenticated_client):
        response = authenticated_client.get('/me')
        assert response.status_code == 200
        assert response.get_json()['data']['role'] == 'admin'

    def test_logout(self, authenticated_client):
        assert authenticated_client.post('/logout').status_code == 200
        assert authenticated_client.get('/me').status_code == 401

    def test_csrf_token_endpoint(self, client):
        response = client.get('/csrf-token')
        assert response.status_code == 200
        assert response.get_json()['data']['csrf_token']


class TestPermissions:

    def _login_as(self, client, role):
        from models.user import create_user, get_role_by_name

        create_user(
            username=f'{role}_user', password='secret123',
            full_name=f'{role.title()} User', role_id=get_role_by_name(role)['id']
        )
        client.post('/login', json={'username': f'{role}_user', 'password': 'secret123'})

    def test_viewer_cannot_list_bookings(self, app, client):
        self._login_as(client, 'viewer')
        response = client.get('/api/resort/bookings')
        assert response.status_code == 403

    def test_viewer_can_read_reports(self, app, client):
        self._login_as(client, 'viewer')
        response = client.get('/api/resort/reports/daily?date=2024-06-01')
        assert response.status_code == 200

    def test_staff_cannot_access_ledger(self, app, client):
        self._login_as(client, 'staff')
        assert client.get('/api/resort/transactions').status_code == 403
        assert client.get('/api/resort/calendar?start=2024-06-01&end=2024-06-02').status_code == 200

    def test_permits_wildcard(self):
        from utils.permissions import permits

        assert permits({'all': True}, 'reports')
        assert permits({'reports': True}, 'reports')
        assert not permits({'reports': True}, 'staff')
        assert not permits({}, 'reports')


class TestApi:

    def test_health(self, client):
        response = client.get('/api/health')
        assert response.status_code == 200
        assert response.get_json()['success'] is True

    def test_unknown_route_is_json_404(self, client):
        response = client.get('/api/does-not-exist')
        assert response.status_code == 404
        assert response.get_json()['success'] is False

    def test_constants(self, authenticated_client):
        data = authenticated_client.get('/api/constants').get_json()['data']
        assert 'Standard Room' in data['room_types']
        assert 'blocked' in data['room_availability_statuses']
        assert data['currency'] == 'INR'
