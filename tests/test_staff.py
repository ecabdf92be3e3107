"""
Tests for staff records and payroll.
"""

import pytest


MEMBER = {
    'name': 'Suresh Patil',
    'phone': '9876501234',
    'position': 'Chef',
    'salary': 25000,
}


class TestStaffModel:

    def test_create_defaults(self, app):
        from models.staff import create_staff, get_staff_by_id
        from utils.datetime_helpers import get_today

        member = get_staff_by_id(create_staff(**MEMBER))
        assert member['status'] == 'active'
        assert member['hire_date'] == get_today().isoformat()

    def test_invalid_position(self, app):
        from models.staff import create_staff

        with pytest.raises(ValueError, match='Invalid position'):
            create_staff(**dict(MEMBER, position='Astronaut'))

    def test_negative_salary(self, app):
        from models.staff import create_staff

        with pytest.raises(ValueError, match='non-negative'):
            create_staff(**dict(MEMBER, salary=-1))

    def test_filters(self, app):
        from models.staff import create_staff, get_all_staff

        create_staff(**MEMBER)
        create_staff(**dict(MEMBER, name='Lata Desai', position='Receptionist', status='inactive'))

        assert [s['name'] for s in get_all_staff(position='Chef')] == ['Suresh Patil']
        assert [s['name'] for s in get_all_staff(status='inactive')] == ['Lata Desai']
        assert [s['name'] for s in get_all_staff(search='Lata')] == ['Lata Desai']

    def test_payroll_counts_active_only(self, app):
        from models.staff import create_staff, get_payroll_summary

        create_staff(**MEMBER)
        create_staff(**dict(MEMBER, name='Anil', salary=15000))
        create_staff(**dict(MEMBER, name='Lata', position='Receptionist', status='inactive'))

        payroll = get_payroll_summary()
        assert payroll['active_count'] == 2
        assert payroll['total_salary'] == 40000
        assert payroll['by_position'] == {'Chef': 40000}

    def test_payroll_empty(self, app):
        from models.staff import get_payroll_summary

        assert get_payroll_summary() == {'active_count': 0, 'total_salary': 0, 'by_position': {}}


class TestStaffApi:

    def test_crud(self, authenticated_client):
        response = authenticated_client.post('/api/resort/staff', json=MEMBER)
        assert response.status_code == 201
        staff_id = response.get_json()['data']['staff']['id']

        response = authenticated_client.patch(f'/api/resort/staff/{staff_id}', json={'salary': 27000})
        assert response.get_json()['data']['staff']['salary'] == 27000

        assert authenticated_client.get('/api/resort/staff/payroll').get_json()['data']['active_count'] == 1

        assert authenticated_client.delete(f'/api/resort/staff/{staff_id}').status_code == 200
        assert authenticated_client.get(f'/api/resort/staff/{staff_id}').status_code == 404

    def test_invalid(self, authenticated_client):
        response = authenticated_client.post('/api/resort/staff', json=dict(MEMBER, salary='lots'))
        assert response.status_code == 400
