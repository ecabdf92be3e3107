"""
Tests for the room calendar service (database-backed availability).
"""

import pytest

from utils.datetime_helpers import InvalidDateError


def _create_booking(customer_id, check_in='2024-06-01', check_out='2024-06-03',
                    room_type='Standard Room'):
    from models.booking import create_booking
    return create_booking(
        customer_id, check_in=check_in, check_out=check_out,
        room_type=room_type, guests=2, total_amount=7000
    )


class TestEffectiveStatus:

    def test_booking_then_override_then_cancel(self, app, customer_id, standard_room):
        from models.booking_state import cancel_booking
        from models.room_calendar import get_effective_status, set_override

        room_id = standard_room['id']
        b1 = _create_booking(customer_id)

        assert get_effective_status(room_id, '2024-06-01') == 'occupied'
        assert get_effective_status(room_id, '2024-06-03') == 'available'

        set_override(room_id, '2024-06-01', 'maintenance', updated_by='admin')
        assert get_effective_status(room_id, '2024-06-01') == 'maintenance'

        cancel_booking(b1)
        assert get_effective_status(room_id, '2024-06-02') == 'available'
        assert get_effective_status(room_id, '2024-06-01') == 'maintenance'

    def test_upsert_last_write_wins(self, app, standard_room):
        from database import get_db
        from models.room_calendar import get_effective_status, set_override

        room_id = standard_room['id']
        set_override(room_id, '2024-06-10', 'maintenance')
        set_override(room_id, '2024-06-10', 'blocked', notes='Wedding party')

        assert get_effective_status(room_id, '2024-06-10') == 'blocked'
        count = get_db().execute(
            'SELECT COUNT(*) FROM room_availability WHERE room_id = ? AND date = ?',
            (room_id, '2024-06-10')
        ).fetchone()[0]
        assert count == 1

    def test_clear_override_restores_inference(self, app, customer_id, standard_room):
        from models.room_calendar import clear_override, get_effective_status, set_override

        room_id = standard_room['id']
        _create_booking(customer_id)
        set_override(room_id, '2024-06-02', 'available')
        assert get_effective_status(room_id, '2024-06-02') == 'available'

        assert clear_override(room_id, '2024-06-02') is True
        assert get_effective_status(room_id, '2024-06-02') == 'occupied'
        assert clear_override(room_id, '2024-06-02') is False

    def test_unknown_room(self, app):
        from models.room_calendar import get_effective_status
        with pytest.raises(ValueError, match='Room not found'):
            get_effective_status(99999, '2024-06-01')

    def test_invalid_date(self, app, standard_room):
        from models.room_calendar import get_effective_status
        with pytest.raises(InvalidDateError):
            get_effective_status(standard_room['id'], '2024-13-01')

    def test_range(self, app, customer_id, standard_room):
        from models.room_calendar import get_effective_status_range

        _create_booking(customer_id)
        statuses = get_effective_status_range(standard_room['id'], '2024-05-31', '2024-06-03')
        assert list(statuses.values()) == ['available', 'occupied', 'occupied', 'available']

    def test_range_too_wide(self, app, standard_room):
        from models.room_calendar import get_effective_status_range

        app.config['CALENDAR_MAX_DAYS'] = 7
        with pytest.raises(InvalidDateError):
            get_effective_status_range(standard_room['id'], '2024-06-01', '2024-06-08')


class TestOverrideWrites:

    def test_override_conflicting_with_booking_is_written_and_reported(
            self, app, customer_id, standard_room):
        from models.room_calendar import set_override

        booking_id = _create_booking(customer_id)
        result = set_override(standard_room['id'], '2024-06-02', 'maintenance')

        assert result['override']['status'] == 'maintenance'
        assert [c['booking_id'] for c in result['conflicting_bookings']] == [booking_id]
        assert result['conflicting_bookings'][0]['dates'] == ['2024-06-02']

    def test_occupied_override_has_no_conflicts(self, app, customer_id, standard_room):
        from models.room_calendar import set_override

        _create_booking(customer_id)
        result = set_override(standard_room['id'], '2024-06-02', 'occupied')
        assert result['conflicting_bookings'] == []

    def test_invalid_status_rejected(self, app, standard_room):
        from models.room_calendar import set_override
        with pytest.raises(ValueError):
            set_override(standard_room['id'], '2024-06-02', 'flooded')

    def test_range_override(self, app, customer_id, standard_room):
        from models.room_calendar import get_effective_status_range, set_override_range

        _create_booking(customer_id, check_in='2024-06-02', check_out='2024-06-04')
        result = set_override_range(standard_room['id'], '2024-06-01', '2024-06-03', 'blocked')

        assert result['dates'] == ['2024-06-01', '2024-06-02', '2024-06-03']
        assert result['conflicting_bookings'][0]['dates'] == ['2024-06-02', '2024-06-03']
        statuses = get_effective_status_range(standard_room['id'], '2024-06-01', '2024-06-04')
        assert list(statuses.values()) == ['blocked', 'blocked', 'blocked', 'available']


class TestCalendar:

    def test_grid_and_summary(self, app, customer_id, standard_room):
        from models.room_calendar import get_calendar, set_override

        _create_booking(customer_id)
        set_override(standard_room['id'], '2024-06-03', 'maintenance')

        calendar = get_calendar('2024-06-01', '2024-06-03')
        assert calendar['dates'] == ['2024-06-01', '2024-06-02', '2024-06-03']

        row = next(r for r in calendar['rooms'] if r['room']['id'] == standard_room['id'])
        assert row['days'] == {
            '2024-06-01': 'occupied',
            '2024-06-02': 'occupied',
            '2024-06-03': 'maintenance',
        }

        total_rooms = len(calendar['rooms'])
        assert calendar['summary']['2024-06-01']['occupied'] == 1
        assert calendar['summary']['2024-06-01']['available'] == total_rooms - 1
        assert calendar['summary']['2024-06-03']['maintenance'] == 1

    def test_filter_by_room_type(self, app):
        from models.room_calendar import get_calendar

        calendar = get_calendar('2024-06-01', '2024-06-01', room_type='Suite')
        assert {r['room']['room_type'] for r in calendar['rooms']} == {'Suite'}

    def test_week_view_starts_on_sunday(self, app):
        from models.room_calendar import get_calendar_view

        # 2024-06-05 is a Wednesday
        calendar = get_calendar_view('2024-06-05', 'week')
        assert calendar['start'] == '2024-06-02'
        assert calendar['end'] == '2024-06-08'
        assert calendar['view'] == 'week'

    def test_month_view(self, app):
        from models.room_calendar import get_calendar_view

        calendar = get_calendar_view('2024-02-14', 'month')
        assert calendar['start'] == '2024-02-01'
        assert calendar['end'] == '2024-02-29'
        assert len(calendar['dates']) == 29

    def test_room_day_reports_ambiguity(self, app, customer_id, standard_room):
        from models.availability import AmbiguousMatchWarning
        from models.room_calendar import get_room_day

        first = _create_booking(customer_id, check_in='2024-05-31', check_out='2024-06-03')
        _create_booking(customer_id)

        detail = get_room_day(standard_room['id'], '2024-06-01')
        assert detail['status'] == 'occupied'
        assert detail['booking']['id'] == first
        assert isinstance(detail['ambiguous'], AmbiguousMatchWarning)
        assert detail['room']['id'] == standard_room['id']

    def test_occupancy_rate(self, app, customer_id):
        from models.room import get_all_rooms
        from models.room_calendar import get_occupancy_rate

        _create_booking(customer_id)
        rooms = get_all_rooms()
        standard_count = sum(1 for r in rooms if r['room_type'] == 'Standard Room')
        expected = round(standard_count * 100.0 / len(rooms), 1)
        assert get_occupancy_rate('2024-06-01') == expected
