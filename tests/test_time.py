import pickle
from copy import copy, deepcopy
from datetime import time, timezone

import pytest

from wallclock import NANOS_PER_DAY, InvalidComponent, InvalidFormat, Time

from .common import AlwaysEqual, AlwaysLarger, AlwaysSmaller, NeverEqual


class TestInit:

    def test_all_params(self):
        t = Time(14, 30, 45, 123_456_789)
        assert t.hour == 14
        assert t.minute == 30
        assert t.second == 45
        assert t.millisecond == 123
        assert t.microsecond == 123_456
        assert t.nanosecond == 123_456_789

    def test_defaults(self):
        t = Time()
        assert t.hour == 0
        assert t.minute == 0
        assert t.second == 0
        assert t.nanosecond == 0
        assert t == Time.MIDNIGHT

    @pytest.mark.parametrize(
        "args, field",
        [
            ((24, 0, 0, 0), "hour"),
            ((-1, 0, 0, 0), "hour"),
            ((0, 60, 0, 0), "minute"),
            ((0, -1, 0, 0), "minute"),
            ((0, 0, 60, 0), "second"),
            ((0, 0, 0, 1_000_000_000), "nanosecond"),
            ((0, 0, 0, -1), "nanosecond"),
            ((24, 60, 0, 0), "hour"),
        ],
    )
    def test_invalid(self, args, field):
        with pytest.raises(InvalidComponent, match=field) as exc_info:
            Time(*args)
        assert exc_info.value.field == field
        assert isinstance(exc_info.value, ValueError)


def test_totals():
    t = Time(14, 30, 45, 123_456_789)
    assert t.total_seconds() == 52_245
    assert t.total_milliseconds() == 52_245_123
    assert t.total_microseconds() == 52_245_123_456
    assert t.total_nanoseconds() == 52_245_123_456_789


def test_immutable():
    t = Time(14, 30)
    with pytest.raises(AttributeError):
        t.hour = 2  # type: ignore[misc]


class TestFromNanoseconds:

    def test_valid(self):
        assert Time.from_nanoseconds(0) == Time.MIDNIGHT
        assert Time.from_nanoseconds(3_600_000_000_001) == Time(1, 0, 0, 1)
        assert Time.from_nanoseconds(NANOS_PER_DAY - 1) == Time(
            23, 59, 59, 999_999_999
        )

    @pytest.mark.parametrize("nanos", [NANOS_PER_DAY, -1, 10**20])
    def test_out_of_range(self, nanos):
        with pytest.raises(InvalidComponent):
            Time.from_nanoseconds(nanos)


@pytest.mark.parametrize(
    "seconds, expect",
    [
        (0, Time()),
        (3_661, Time(1, 1, 1)),
        (90_000, Time(1, 0, 0)),
        (-60, Time(23, 59, 0)),
        (-86_400, Time()),
    ],
)
def test_from_seconds(seconds, expect):
    assert Time.from_seconds(seconds) == expect


def test_from_milliseconds():
    assert Time.from_milliseconds(1_500) == Time(0, 0, 1, 500_000_000)
    assert Time.from_milliseconds(-1) == Time(23, 59, 59, 999_000_000)


class TestArithmetic:

    def test_add_hours_wraps(self):
        assert Time(23, 30, 0).add_hours(2) == Time(1, 30, 0)
        assert Time(0, 0).add_hours(-25) == Time(23, 0)

    def test_negative_wrap(self):
        assert Time(0, 0, 0).add_seconds(-1) == Time(23, 59, 59)

    def test_add_minutes(self):
        assert Time(0, 30).add_minutes(-90) == Time(23, 0)
        assert Time(10, 0).add_minutes(75) == Time(11, 15)

    def test_add_milliseconds(self):
        assert Time(23, 59, 59).add_milliseconds(1_500) == Time(
            0, 0, 0, 500_000_000
        )

    def test_add_nanoseconds(self):
        assert Time(23, 59, 59, 999_999_999).add_nanoseconds(1) == Time()
        assert Time().add_nanoseconds(-1) == Time(23, 59, 59, 999_999_999)

    def test_whole_days_are_a_no_op(self):
        t = Time(8, 15, 30, 5)
        assert t.add_nanoseconds(3 * NANOS_PER_DAY) == t
        assert t.add_hours(-48) == t
        assert t.add_seconds(86_400) == t

    def test_keeps_subsecond_part(self):
        assert Time(10, 0, 0, 250).add_seconds(1) == Time(10, 0, 1, 250)
        assert Time(10, 0, 0, 250).add_hours(-11) == Time(23, 0, 0, 250)

    def test_does_not_modify_original(self):
        t = Time(12)
        t.add_hours(1)
        assert t == Time(12)


class TestPredicates:

    def test_midnight_and_noon(self):
        assert Time().is_midnight()
        assert not Time(0, 0, 0, 1).is_midnight()
        assert Time(12).is_noon()
        assert not Time(12, 0, 1).is_noon()
        assert Time.NOON.is_noon()

    def test_am_pm(self):
        assert Time(0).is_am()
        assert Time(11, 59, 59, 999_999_999).is_am()
        assert not Time(12).is_am()
        assert Time(12).is_pm()
        assert Time(23).is_pm()

    @pytest.mark.parametrize(
        "hour, expect",
        [(0, 12), (1, 1), (11, 11), (12, 12), (13, 1), (23, 11)],
    )
    def test_hour12(self, hour, expect):
        assert Time(hour).hour12() == expect


class TestFormat:

    def test_default(self):
        assert Time(14, 30, 45, 123_456_789).format() == "14:30:45"

    @pytest.mark.parametrize(
        "fmt, expect",
        [
            ("%H:%M:%S.%f", "14:30:45.123"),
            ("%u", "123456"),
            ("%N", "123456789"),
            ("%Hh%Mm", "14h30m"),
            ("%Y-%H", "Y-14"),
            ("100%%", "100%"),
            ("%H%", "14%"),
        ],
    )
    def test_directives(self, fmt, expect):
        assert Time(14, 30, 45, 123_456_789).format(fmt) == expect

    def test_padding(self):
        t = Time(1, 2, 3, 4_005_006)
        assert t.format("%H:%M:%S.%f") == "01:02:03.004"
        assert t.format("%u") == "004005"
        assert t.format("%N") == "004005006"


class TestCanonicalFormat:

    @pytest.mark.parametrize(
        "t, expect",
        [
            (Time(), "00:00:00"),
            (Time(8, 5), "08:05:00"),
            (Time(23, 59, 59), "23:59:59"),
            (Time(8, 5, 0, 1_500), "08:05:00.000001500"),
            (Time(8, 5, 0, 500_000_000), "08:05:00.500000000"),
        ],
    )
    def test_format(self, t, expect):
        assert t.canonical_format() == expect
        assert str(t) == expect
        assert Time.from_canonical_format(expect) == t

    @pytest.mark.parametrize(
        "s, expect",
        [
            ("08:05:00.25", Time(8, 5, 0, 250_000_000)),
            ("08:05:00.000000001", Time(8, 5, 0, 1)),
            ("00:00:00.0", Time()),
        ],
    )
    def test_fractions(self, s, expect):
        assert Time.from_canonical_format(s) == expect

    @pytest.mark.parametrize(
        "s",
        [
            "8:05:00",
            "08:05",
            "08:05:00.",
            "08:05:00.1234567890",
            "08-05-00",
            "08:05:00Z",
            "",
        ],
    )
    def test_invalid_format(self, s):
        with pytest.raises(InvalidFormat):
            Time.from_canonical_format(s)

    @pytest.mark.parametrize("s", ["24:00:00", "12:60:00", "12:00:60"])
    def test_out_of_range(self, s):
        with pytest.raises(InvalidComponent):
            Time.from_canonical_format(s)


def test_repr():
    assert repr(Time(8, 5)) == "Time(08:05:00)"


def test_equality():
    t = Time(14, 30, 45, 1)
    same = Time(14, 30, 45, 1)
    different = Time(14, 30, 45, 2)
    assert t == same
    assert not t == different
    assert not t == NeverEqual()
    assert t == AlwaysEqual()
    assert not t != same
    assert t != different
    assert t != NeverEqual()
    assert not t != AlwaysEqual()

    assert hash(t) == hash(same)
    assert hash(t) != hash(different)


def test_comparison():
    t = Time(14, 30)
    same = Time(14, 30)
    bigger = Time(14, 30, 0, 1)
    smaller = Time(14, 29, 59, 999_999_999)

    assert t <= same
    assert t <= bigger
    assert not t <= smaller
    assert t <= AlwaysLarger()
    assert not t <= AlwaysSmaller()

    assert not t < same
    assert t < bigger
    assert not t < smaller
    assert t < AlwaysLarger()
    assert not t < AlwaysSmaller()

    assert t >= same
    assert not t >= bigger
    assert t >= smaller
    assert not t >= AlwaysLarger()
    assert t >= AlwaysSmaller()

    assert not t > same
    assert not t > bigger
    assert t > smaller
    assert not t > AlwaysLarger()
    assert t > AlwaysSmaller()


class TestReplace:

    def test_valid(self):
        t = Time(8, 5, 1, 2)
        assert t.replace(minute=45) == Time(8, 45, 1, 2)
        assert t.replace(hour=0, nanosecond=0) == Time(0, 5, 1)

    def test_invalid(self):
        with pytest.raises(InvalidComponent):
            Time(8, 5).replace(hour=24)

        with pytest.raises(TypeError):
            Time(8, 5).replace(day=3)  # type: ignore[call-arg]


class TestPyTime:

    def test_to_py_time_truncates(self):
        assert Time(14, 30, 45, 123_456_789).py_time() == time(
            14, 30, 45, 123_456
        )

    def test_from_py_time(self):
        assert Time.from_py_time(time(14, 30, 45, 123_456)) == Time(
            14, 30, 45, 123_456_000
        )

    def test_aware_time_rejected(self):
        with pytest.raises(ValueError, match="naive"):
            Time.from_py_time(time(1, tzinfo=timezone.utc))


def test_now():
    assert isinstance(Time.now(), Time)


def test_copy():
    t = Time(1, 2, 3, 4)
    assert copy(t) is t
    assert deepcopy(t) is t


def test_pickle():
    t = Time(1, 2, 3, 4)
    assert pickle.loads(pickle.dumps(t)) == t
