from datetime import datetime, timedelta, timezone

from app.core.clock import FixedClock, ensure_utc, from_ist_input, is_overdue, to_ist

DUE = datetime(2025, 2, 18, 17, 45, tzinfo=timezone.utc)


def test_is_overdue_is_strict():
    assert is_overdue(DUE, DUE) is False
    assert is_overdue(DUE + timedelta(seconds=1), DUE) is True
    assert is_overdue(DUE - timedelta(minutes=45), DUE) is False


def test_naive_values_are_treated_as_utc():
    naive_due = datetime(2025, 2, 18, 17, 45)
    assert ensure_utc(naive_due) == DUE
    assert is_overdue(datetime(2025, 2, 18, 17, 46), DUE) is True
    assert is_overdue(DUE + timedelta(minutes=1), naive_due) is True


def test_ist_input_is_converted_to_utc():
    # 23:15 IST is 17:45 UTC
    assert from_ist_input(datetime(2025, 2, 18, 23, 15)) == DUE
    # explicit offsets are honoured as given
    assert from_ist_input(DUE) == DUE


def test_to_ist_for_display():
    shown = to_ist(DUE)
    assert (shown.hour, shown.minute) == (23, 15)
    assert shown.utcoffset() == timedelta(hours=5, minutes=30)
    assert to_ist(None) is None


def test_fixed_clock():
    clock = FixedClock(datetime(2025, 1, 1))
    assert clock.now() == datetime(2025, 1, 1, tzinfo=timezone.utc)
    clock.advance_to(DUE)
    assert clock.now() == DUE
