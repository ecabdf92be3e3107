"""
Tests for customer model and customer API routes.
"""

import pytest


class TestCustomerModel:

    def test_create_trims_and_validates(self, app):
        from models.customer import create_customer, get_customer_by_id

        customer = get_customer_by_id(create_customer('  Meera Nair ', '9123456780'))
        assert customer['name'] == 'Meera Nair'
        assert customer['email'] is None
        assert customer['total_bookings'] == 0
        assert customer['total_spent'] == 0

    def test_name_required(self, app):
        from models.customer import create_customer

        with pytest.raises(ValueError, match='Name is required'):
            create_customer('   ', '9123456780')

    def test_invalid_phone(self, app):
        from models.customer import create_customer

        with pytest.raises(ValueError, match='Invalid phone number'):
            create_customer('Meera', '12345')

    def test_invalid_email(self, app):
        from models.customer import create_customer

        with pytest.raises(ValueError, match='Invalid email'):
            create_customer('Meera', '9123456780', email='not-an-email')

    def test_totals_exclude_cancelled(self, app, customer_id):
        from models.booking import create_booking
        from models.booking_state import cancel_booking
        from models.customer import get_customer_by_id

        stay = {'check_in': '2024-06-01', 'check_out': '2024-06-02', 'room_type': 'Suite'}
        create_booking(customer_id, total_amount=5000, **stay)
        cancel_booking(create_booking(customer_id, total_amount=9000, **stay))

        customer = get_customer_by_id(customer_id)
        assert customer['total_bookings'] == 1
        assert customer['total_spent'] == 5000

    def test_search(self, app, customer_id):
        from models.customer import get_all_customers

        assert [c['id'] for c in get_all_customers(search='asha@')] == [customer_id]
        assert get_all_customers(search='nobody') == []

    def test_update_partial(self, app, customer_id):
        from models.customer import get_customer_by_id, update_customer

        assert update_customer(customer_id, address='MG Road, Pune') is True
        customer = get_customer_by_id(customer_id)
        assert customer['address'] == 'MG Road, Pune'
        assert customer['name'] == 'Asha Verma'
        assert update_customer(customer_id) is False

    def test_delete_blocked_by_active_booking(self, app, customer_id):
        from models.booking import create_booking
        from models.customer import delete_customer

        create_booking(customer_id, check_in='2024-06-01', check_out='2024-06-02', room_type='Suite')
        with pytest.raises(ValueError, match='active bookings'):
            delete_customer(customer_id)

    def test_delete(self, app, customer_id):
        from models.customer import delete_customer, get_customer_by_id

        assert delete_customer(customer_id) is True
        assert get_customer_by_id(customer_id) is None
        assert delete_customer(customer_id) is False


class TestCustomerApi:

    def test_create(self, authenticated_client):
        response = authenticated_client.post('/api/resort/customers', json={
            'name': 'Kiran Rao', 'phone': '9988776655'
        })
        assert response.status_code == 201
        assert response.get_json()['data']['customer']['name'] == 'Kiran Rao'

    def test_create_invalid(self, authenticated_client):
        response = authenticated_client.post('/api/resort/customers', json={'name': 'Kiran'})
        assert response.status_code == 400
        assert response.get_json()['error'] == 'Phone is required'

    def test_get_includes_bookings(self, authenticated_client, customer_id):
        response = authenticated_client.get(f'/api/resort/customers/{customer_id}')
        assert response.get_json()['data']['customer']['bookings'] == []

    def test_delete_conflict(self, authenticated_client, customer_id):
        from models.booking import create_booking

        create_booking(customer_id, check_in='2024-06-01', check_out='2024-06-02', room_type='Suite')
        response = authenticated_client.delete(f'/api/resort/customers/{customer_id}')
        assert response.status_code == 409

    def test_patch_without_editable_fields(self, authenticated_client, customer_id):
        response = authenticated_client.patch(f'/api/resort/customers/{customer_id}', json={'id': 5})
        assert response.status_code == 400
        assert response.get_json()['error'] == 'No editable fields'

    def test_missing(self, authenticated_client):
        assert authenticated_client.get('/api/resort/customers/9999').status_code == 404
        assert authenticated_client.patch('/api/resort/customers/9999', json={}).status_code == 404
