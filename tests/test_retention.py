"""
Unit tests for the trash retention window.
"""
from datetime import datetime, timedelta

from app.core.retention import (
    get_days_left,
    get_retention_window,
    get_scheduled_deletion,
    is_expired,
)


DELETED_AT = datetime(2026, 10, 1, 12, 0, 0)


def test_scheduled_deletion_is_five_days_after_delete():
    assert get_retention_window() == timedelta(days=5)
    assert get_scheduled_deletion(DELETED_AT) == datetime(2026, 10, 6, 12, 0, 0)


def test_full_window_right_after_delete():
    assert get_days_left(DELETED_AT, DELETED_AT) == 5
    assert get_days_left(DELETED_AT, DELETED_AT + timedelta(minutes=1)) == 5


def test_days_left_rounds_up_partial_days():
    assert get_days_left(DELETED_AT, DELETED_AT + timedelta(days=1)) == 4
    assert get_days_left(DELETED_AT, DELETED_AT + timedelta(days=1, hours=1)) == 4
    assert get_days_left(DELETED_AT, DELETED_AT + timedelta(days=4, hours=23)) == 1


def test_days_left_floors_at_zero():
    assert get_days_left(DELETED_AT, DELETED_AT + timedelta(days=5)) == 0
    assert get_days_left(DELETED_AT, DELETED_AT + timedelta(days=30)) == 0
    assert is_expired(DELETED_AT, DELETED_AT + timedelta(days=5))
    assert not is_expired(DELETED_AT, DELETED_AT + timedelta(days=4, hours=23))


def test_days_left_never_increases_over_time():
    previous = get_days_left(DELETED_AT, DELETED_AT)
    for hours in range(0, 24 * 7, 5):
        current = get_days_left(DELETED_AT, DELETED_AT + timedelta(hours=hours))
        assert 0 <= current <= previous
        previous = current


def test_custom_retention_window():
    assert get_days_left(DELETED_AT, DELETED_AT, days=10) == 10
    assert get_scheduled_deletion(DELETED_AT, days=1) == DELETED_AT + timedelta(days=1)
