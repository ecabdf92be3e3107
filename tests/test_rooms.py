"""
Tests for room model and room API routes.
"""

import pytest


class TestRoomModel:

    def test_seeded_rooms(self, app):
        from models.room import get_all_rooms

        rooms = get_all_rooms()
        assert [r['room_number'] for r in rooms] == ['101', '201', '301', '401', '501']
        assert rooms[0]['amenities'] == ['AC', 'TV', 'WiFi']

    def test_create_room_uses_type_defaults(self, app):
        from models.room import create_room, get_room_by_id

        room = get_room_by_id(create_room('a12', 'Suite'))
        assert room['room_number'] == 'A12'
        assert room['capacity'] == 4
        assert room['base_price'] == 5000
        assert room['amenities'] == []

    def test_duplicate_room_number(self, app):
        from models.room import create_room

        with pytest.raises(ValueError, match='already exists'):
            create_room('101', 'Suite')

    def test_invalid_room_number(self, app):
        from models.room import create_room

        with pytest.raises(ValueError):
            create_room('10-1', 'Suite')

    def test_unknown_amenity(self, app):
        from models.room import create_room

        with pytest.raises(ValueError, match='Unknown amenities'):
            create_room('601', 'Suite', amenities=['Jacuzzi'])

    def test_custom_room_type_becomes_bookable(self, app):
        from models.room import create_room, get_room_types

        create_room('701', 'Treehouse')
        assert 'Treehouse' in get_room_types()

    def test_deactivate_hides_room(self, app):
        from models.room import create_room, deactivate_room, get_all_rooms, get_room_by_id

        room_id = create_room('801', 'Deluxe Room')
        assert deactivate_room(room_id) is True
        assert room_id not in [r['id'] for r in get_all_rooms()]
        assert room_id in [r['id'] for r in get_all_rooms(active_only=False)]
        assert get_room_by_id(room_id)['is_active'] == 0

    def test_search_and_filter(self, app):
        from models.room import get_all_rooms

        assert [r['room_number'] for r in get_all_rooms(room_type='Suite')] == ['301']
        assert [r['room_number'] for r in get_all_rooms(search='50')] == ['501']


class TestRoomApi:

    def test_requires_login(self, client):
        assert client.get('/api/resort/rooms').status_code == 401

    def test_list(self, authenticated_client):
        response = authenticated_client.get('/api/resort/rooms')
        assert response.status_code == 200
        assert response.get_json()['data']['count'] == 5

    def test_create_and_get(self, authenticated_client):
        response = authenticated_client.post('/api/resort/rooms', json={
            'room_number': '102',
            'room_type': 'Standard Room',
            'amenities': ['AC', 'Balcony'],
        })
        assert response.status_code == 201
        room = response.get_json()['data']['room']
        assert room['amenities'] == ['AC', 'Balcony']

        response = authenticated_client.get(f"/api/resort/rooms/{room['id']}")
        assert response.get_json()['data']['room']['room_number'] == '102'

    def test_create_invalid(self, authenticated_client):
        response = authenticated_client.post('/api/resort/rooms', json={'room_number': '102'})
        assert response.status_code == 400
        assert response.get_json()['error'] == 'Room type is required'

    def test_update(self, authenticated_client, standard_room):
        response = authenticated_client.patch(
            f"/api/resort/rooms/{standard_room['id']}", json={'base_price': 2800}
        )
        assert response.status_code == 200
        assert response.get_json()['data']['room']['base_price'] == 2800

    def test_missing_room(self, authenticated_client):
        assert authenticated_client.get('/api/resort/rooms/9999').status_code == 404
        assert authenticated_client.delete('/api/resort/rooms/9999').status_code == 404

    def test_room_types(self, authenticated_client):
        response = authenticated_client.get('/api/resort/rooms/types')
        assert 'Suite' in response.get_json()['data']['room_types']
