from datetime import datetime, timedelta, timezone

import pytest

from shared.domain.value_objects import HoldWindow, TimeWindow, format_timestamp, parse_timestamp


def _window(start, end):
    return TimeWindow(parse_timestamp(start), parse_timestamp(end))


class TestTimestamps:
    def test_trailing_z_is_utc(self):
        assert parse_timestamp('2024-01-10T10:00:00Z') == datetime(2024, 1, 10, 10, tzinfo=timezone.utc)

    def test_naive_is_read_as_utc(self):
        parsed = parse_timestamp('2024-01-10T10:00:00')
        assert parsed.tzinfo is not None
        assert parsed == datetime(2024, 1, 10, 10, tzinfo=timezone.utc)

    def test_offset_is_converted_to_utc(self):
        assert parse_timestamp('2024-01-10T07:00:00-03:00') == parse_timestamp('2024-01-10T10:00:00Z')

    def test_datetime_passes_through(self):
        moment = datetime(2024, 1, 10, 10, tzinfo=timezone.utc)
        assert parse_timestamp(moment) == moment

    def test_invalid_string(self):
        with pytest.raises(ValueError):
            parse_timestamp('next tuesday')

    def test_invalid_type(self):
        with pytest.raises(TypeError):
            parse_timestamp(1704880800)

    def test_format_uses_z_suffix(self):
        assert format_timestamp(parse_timestamp('2024-01-10T07:00:00-03:00')) == '2024-01-10T10:00:00Z'
        assert format_timestamp(None) is None


class TestTimeWindow:
    def test_overlap(self):
        a = _window('2024-01-10T09:00:00Z', '2024-01-10T15:00:00Z')
        b = _window('2024-01-10T12:00:00Z', '2024-01-10T18:00:00Z')
        assert a.overlaps_with(b)
        assert b.overlaps_with(a)

    def test_touching_windows_overlap(self):
        a = _window('2024-01-10T09:00:00Z', '2024-01-10T15:00:00Z')
        b = _window('2024-01-10T15:00:00Z', '2024-01-10T18:00:00Z')
        assert a.overlaps_with(b)

    def test_disjoint_windows(self):
        a = _window('2024-01-10T09:00:00Z', '2024-01-10T15:00:00Z')
        b = _window('2024-01-10T15:00:01Z', '2024-01-10T18:00:00Z')
        assert not a.overlaps_with(b)
        assert not b.overlaps_with(a)

    def test_overlap_requires_window(self):
        with pytest.raises(TypeError):
            _window('2024-01-10T09:00:00Z', '2024-01-10T15:00:00Z').overlaps_with('2024-01-10')

    def test_expand_and_duration(self):
        window = _window('2024-01-10T10:00:00Z', '2024-01-10T18:00:00Z').expand(2)
        assert window.duration == timedelta(hours=12)
        assert window.contains(parse_timestamp('2024-01-10T08:00:00Z'))
        assert not window.contains(parse_timestamp('2024-01-10T20:00:01Z'))


def test_hold_window_to_dict():
    window = HoldWindow(parse_timestamp('2024-01-10T04:00:00Z'), parse_timestamp('2024-01-11T00:00:00Z'))
    assert window.hold_start == window.start
    assert window.to_dict() == {'holdStart': '2024-01-10T04:00:00Z', 'holdEnd': '2024-01-11T00:00:00Z'}
