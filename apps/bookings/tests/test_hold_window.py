from datetime import timedelta

import pytest

from apps.bookings.domain.hold_window import compute_hold_window
from shared.domain.value_objects import parse_timestamp


def test_margin_applied_on_both_sides():
    window = compute_hold_window('2024-01-15T09:00:00Z', '2024-01-17T09:00:00Z', 6)

    assert window.to_dict() == {'holdStart': '2024-01-15T03:00:00Z', 'holdEnd': '2024-01-17T15:00:00Z'}


@pytest.mark.parametrize('margin', [0, 6, 7.5, 8])
def test_width_is_event_plus_twice_the_margin(margin):
    start, end = '2024-03-01T08:00:00Z', '2024-03-03T20:00:00Z'
    window = compute_hold_window(start, end, margin)

    event = parse_timestamp(end) - parse_timestamp(start)
    assert window.duration == event + timedelta(hours=2 * margin)


def test_zero_margin_keeps_event_window():
    window = compute_hold_window('2024-01-10T10:00:00Z', '2024-01-10T18:00:00Z', 0)

    assert window.start == parse_timestamp('2024-01-10T10:00:00Z')
    assert window.end == parse_timestamp('2024-01-10T18:00:00Z')


def test_margin_is_not_clamped():
    window = compute_hold_window('2024-01-10T10:00:00Z', '2024-01-10T18:00:00Z', 24)

    assert window.to_dict()['holdStart'] == '2024-01-09T10:00:00Z'


def test_crosses_month_boundary():
    window = compute_hold_window('2024-02-01T02:00:00Z', '2024-02-29T22:00:00Z', 6)

    assert window.to_dict() == {'holdStart': '2024-01-31T20:00:00Z', 'holdEnd': '2024-03-01T04:00:00Z'}


def test_invalid_timestamp():
    with pytest.raises(ValueError):
        compute_hold_window('not a date', '2024-01-10T18:00:00Z', 6)
