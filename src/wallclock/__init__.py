# The MIT License (MIT)
#
# Copyright (c) The wallclock contributors
#
# Permission is hereby granted, free of charge, to any person obtaining a copy
# of this software and associated documentation files (the "Software"), to deal
# in the Software without restriction, including without limitation the rights
# to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
# copies of the Software, and to permit persons to whom the Software is
# furnished to do so, subject to the following conditions:
#
# The above copyright notice and this permission notice shall be included in all
# copies or substantial portions of the Software.
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
# IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
# FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
# AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
# LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
# OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
# SOFTWARE.

# Maintainer's notes:
#
# - Why is everything in one file?
#   - Flat is better than nested
#   - It prevents circular imports since the classes 'know' about each other
#   - It's easier to vendor (i.e. copy-paste) this library if needed
# - The calendar arithmetic is done on plain integers, not on the standard
#   library's date types. These are only used for interop and for reading
#   the current time.
# - Construction is strict (InvalidComponent), arithmetic is total:
#   it clamps or normalizes, but never raises.
from __future__ import annotations

__version__ = "0.1.0"

import re
from datetime import (
    date as _date,
    datetime as _datetime,
    time as _time,
)
from operator import attrgetter
from typing import (
    TYPE_CHECKING,
    Any,
    Callable,
    ClassVar,
    Literal,
    Mapping,
    no_type_check,
)

__all__ = [
    "Date",
    "Time",
    "DateTime",
    "is_leap_year",
    "days_in_month",
    "days_in_year",
    "days_since_epoch",
    "is_valid_year",
    "is_valid_month",
    "is_valid_day",
    "is_valid_date",
    "is_valid_hour",
    "is_valid_minute",
    "is_valid_second",
    "is_valid_nanosecond",
    "is_valid_time",
    "InvalidComponent",
    "InvalidFormat",
]


MONDAY, TUESDAY, WEDNESDAY, THURSDAY, FRIDAY, SATURDAY, SUNDAY = range(7)

NANOS_PER_MICROSECOND = 1_000
NANOS_PER_MILLISECOND = 1_000_000
NANOS_PER_SECOND = 1_000_000_000
NANOS_PER_MINUTE = 60 * NANOS_PER_SECOND
NANOS_PER_HOUR = 60 * NANOS_PER_MINUTE
NANOS_PER_DAY = 24 * NANOS_PER_HOUR

SECONDS_PER_MINUTE = 60
SECONDS_PER_HOUR = 3_600
SECONDS_PER_DAY = 86_400

MIN_YEAR = 1
MAX_YEAR = 9999

_DAYS_PER_MONTH = (31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)
# days before the first of each month, in a common year
_CUMULATIVE_DAYS = (0, 31, 59, 90, 120, 151, 181, 212, 243, 273, 304, 334)

MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)
MONTH_ABBREVIATIONS = tuple(name[:3] for name in MONTH_NAMES)
WEEKDAY_NAMES = (
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
)
WEEKDAY_ABBREVIATIONS = tuple(name[:3] for name in WEEKDAY_NAMES)


class NOT_SET:
    pass  # sentinel for when no value is passed


_object_new = object.__new__


def is_leap_year(year: int, /) -> bool:
    """Whether the year is a leap year in the proleptic Gregorian calendar

    Example
    -------

    >>> is_leap_year(2024)
    True
    >>> is_leap_year(1900)
    False
    >>> is_leap_year(2000)
    True

    """
    return year % 400 == 0 or (year % 4 == 0 and year % 100 != 0)


def days_in_month(month: int, year: int, /) -> int:
    """The number of days in the month, or 0 if the month doesn't exist

    Example
    -------

    >>> days_in_month(2, 2024)
    29
    >>> days_in_month(2, 2023)
    28
    >>> days_in_month(13, 2023)
    0

    """
    if not 1 <= month <= 12:
        return 0
    if month == 2 and is_leap_year(year):
        return 29
    return _DAYS_PER_MONTH[month - 1]


def days_in_year(year: int, /) -> int:
    """366 for leap years, 365 otherwise"""
    return 366 if is_leap_year(year) else 365


def days_since_epoch(year: int, /) -> int:
    """The number of days from 0001-01-01 to January 1st of the given year

    Example
    -------

    >>> days_since_epoch(1)
    0
    >>> days_since_epoch(2)
    365
    >>> days_since_epoch(1970)
    719162

    """
    year -= 1
    return year * 365 + year // 4 - year // 100 + year // 400


def is_valid_year(year: int, /) -> bool:
    return MIN_YEAR <= year <= MAX_YEAR


def is_valid_month(month: int, /) -> bool:
    return 1 <= month <= 12


def is_valid_day(day: int, month: int, year: int, /) -> bool:
    return 1 <= day <= days_in_month(month, year)


def is_valid_date(year: int, month: int, day: int, /) -> bool:
    return (
        is_valid_year(year)
        and is_valid_month(month)
        and is_valid_day(day, month, year)
    )


def is_valid_hour(hour: int, /) -> bool:
    return 0 <= hour < 24


def is_valid_minute(minute: int, /) -> bool:
    return 0 <= minute < 60


def is_valid_second(second: int, /) -> bool:
    return 0 <= second < 60


def is_valid_nanosecond(nanosecond: int, /) -> bool:
    return 0 <= nanosecond < NANOS_PER_SECOND


def is_valid_time(
    hour: int, minute: int, second: int, nanosecond: int, /
) -> bool:
    return (
        is_valid_hour(hour)
        and is_valid_minute(minute)
        and is_valid_second(second)
        and is_valid_nanosecond(nanosecond)
    )


def _day_of_year(year: int, month: int, day: int) -> int:
    doy = _CUMULATIVE_DAYS[month - 1] + day
    if month > 2 and is_leap_year(year):
        doy += 1
    return doy


def _ordinal(year: int, month: int, day: int) -> int:
    # 0001-01-01 is day 1
    return days_since_epoch(year) + _day_of_year(year, month, day)


def _day_of_week(year: int, month: int, day: int) -> int:
    # Zeller's congruence, with January and February counted
    # as months 13 and 14 of the previous year
    if month < 3:
        month += 12
        year -= 1
    k, j = year % 100, year // 100
    h = (day + 13 * (month + 1) // 5 + k + k // 4 + j // 4 - 2 * j) % 7
    # Zeller's week starts on Saturday
    return (h + 5) % 7


def _iso_week(year: int, month: int, day: int) -> int:
    jan1 = _day_of_week(year, 1, 1)
    week = (_day_of_year(year, month, day) + jan1 - 1) // 7
    if jan1 <= THURSDAY:
        week += 1
    if week == 0:
        return _iso_week(year - 1, 12, 31)
    if week == 53 and _day_of_week(year + 1, 1, 1) <= THURSDAY:
        return 1
    return week


def _shift_days(
    year: int, month: int, day: int, days: int
) -> tuple[int, int, int]:
    day += days
    while day > (length := days_in_month(month, year)):
        day -= length
        if (month := month + 1) > 12:
            month = 1
            year += 1
    while day < 1:
        if (month := month - 1) < 1:
            month = 12
            year -= 1
        day += days_in_month(month, year)
    return year, month, day


_MIN_ORDINAL = 1
_MAX_ORDINAL = _ordinal(MAX_YEAR, 12, 31)
# months from January 0001 to December 9999
_MAX_MONTH_INDEX = MAX_YEAR * 12 - 1


class Time:
    """A time of day without a date component, with nanosecond precision.

    Internally, the time is a single count of nanoseconds since midnight.
    Arithmetic wraps around midnight: it never fails and never
    carries over into a date. Use :class:`DateTime` if you need that.

    Example
    -------

    >>> t = Time(14, 30, 45)
    Time(14:30:45)
    >>> t.add_hours(12)
    Time(02:30:45)
    >>> Time(0, 0, 0).add_seconds(-1)
    Time(23:59:59)

    """

    __slots__ = ("_nanos",)

    MIDNIGHT: ClassVar[Time]
    """Midnight, the start of the day"""
    NOON: ClassVar[Time]
    """Twelve o'clock"""

    def __init__(
        self,
        hour: int = 0,
        minute: int = 0,
        second: int = 0,
        nanosecond: int = 0,
    ) -> None:
        if not is_valid_time(hour, minute, second, nanosecond):
            raise InvalidComponent.for_time(hour, minute, second, nanosecond)
        self._nanos = (
            hour * NANOS_PER_HOUR
            + minute * NANOS_PER_MINUTE
            + second * NANOS_PER_SECOND
            + nanosecond
        )

    @property
    def hour(self) -> int:
        return self._nanos // NANOS_PER_HOUR

    @property
    def minute(self) -> int:
        return self._nanos % NANOS_PER_HOUR // NANOS_PER_MINUTE

    @property
    def second(self) -> int:
        return self._nanos % NANOS_PER_MINUTE // NANOS_PER_SECOND

    @property
    def millisecond(self) -> int:
        """The sub-second part, in whole milliseconds"""
        return self._nanos % NANOS_PER_SECOND // NANOS_PER_MILLISECOND

    @property
    def microsecond(self) -> int:
        """The sub-second part, in whole microseconds"""
        return self._nanos % NANOS_PER_SECOND // NANOS_PER_MICROSECOND

    @property
    def nanosecond(self) -> int:
        """The sub-second part, in nanoseconds"""
        return self._nanos % NANOS_PER_SECOND

    def total_seconds(self) -> int:
        """The whole seconds elapsed since midnight

        Example
        -------

        >>> Time(1, 2, 3, 400).total_seconds()
        3723

        """
        return self._nanos // NANOS_PER_SECOND

    def total_milliseconds(self) -> int:
        return self._nanos // NANOS_PER_MILLISECOND

    def total_microseconds(self) -> int:
        return self._nanos // NANOS_PER_MICROSECOND

    def total_nanoseconds(self) -> int:
        return self._nanos

    @classmethod
    def from_nanoseconds(cls, nanos: int, /) -> Time:
        """Create from the number of nanoseconds since midnight

        Raises
        ------
        InvalidComponent
            If the count is negative or spans a full day or more.

        Example
        -------

        >>> Time.from_nanoseconds(3_600_000_000_000)
        Time(01:00:00)

        """
        if not 0 <= nanos < NANOS_PER_DAY:
            raise InvalidComponent("nanoseconds since midnight", nanos)
        return cls._from_nanos_unchecked(nanos)

    @classmethod
    def from_seconds(cls, seconds: int, /) -> Time:
        """Create from a number of seconds, wrapped into a single day

        Example
        -------

        >>> Time.from_seconds(90_000)
        Time(01:00:00)
        >>> Time.from_seconds(-60)
        Time(23:59:00)

        """
        return cls._from_nanos_unchecked(
            seconds % SECONDS_PER_DAY * NANOS_PER_SECOND
        )

    @classmethod
    def from_milliseconds(cls, milliseconds: int, /) -> Time:
        """Create from a number of milliseconds, wrapped into a single day"""
        return cls._from_nanos_unchecked(
            milliseconds * NANOS_PER_MILLISECOND % NANOS_PER_DAY
        )

    @classmethod
    def now(cls) -> Time:
        """The current time of day, as shown on the local wall clock"""
        t = _datetime.now()
        return cls(
            t.hour, t.minute, t.second, t.microsecond * NANOS_PER_MICROSECOND
        )

    def add_nanoseconds(self, nanoseconds: int, /) -> Time:
        """Add (or subtract) nanoseconds, wrapping around midnight

        Example
        -------

        >>> Time(23, 59, 59, 999_999_999).add_nanoseconds(1)
        Time(00:00:00)

        """
        return self._from_nanos_unchecked(
            (self._nanos + nanoseconds) % NANOS_PER_DAY
        )

    def add_milliseconds(self, milliseconds: int, /) -> Time:
        return self.add_nanoseconds(milliseconds * NANOS_PER_MILLISECOND)

    def add_seconds(self, seconds: int, /) -> Time:
        """Add (or subtract) seconds, wrapping around midnight.
        The sub-second part is kept as-is.

        Example
        -------

        >>> Time(0, 0, 0).add_seconds(-1)
        Time(23:59:59)

        """
        return self.add_nanoseconds(seconds * NANOS_PER_SECOND)

    def add_minutes(self, minutes: int, /) -> Time:
        return self.add_nanoseconds(minutes * NANOS_PER_MINUTE)

    def add_hours(self, hours: int, /) -> Time:
        """Add (or subtract) hours, wrapping around midnight

        Example
        -------

        >>> Time(23, 30).add_hours(2)
        Time(01:30:00)

        """
        return self.add_nanoseconds(hours * NANOS_PER_HOUR)

    def is_midnight(self) -> bool:
        return self._nanos == 0

    def is_noon(self) -> bool:
        return self._nanos == 12 * NANOS_PER_HOUR

    def is_am(self) -> bool:
        return self._nanos < 12 * NANOS_PER_HOUR

    def is_pm(self) -> bool:
        return self._nanos >= 12 * NANOS_PER_HOUR

    def hour12(self) -> int:
        """The hour on a 12-hour clock (1-12)

        Example
        -------

        >>> Time(0, 15).hour12()
        12
        >>> Time(13, 15).hour12()
        1

        """
        hour = self.hour
        if hour == 0:
            return 12
        return hour - 12 if hour > 12 else hour

    def format(self, fmt: str = "%H:%M:%S", /) -> str:
        """Format the time according to the given template.

        Supported directives are ``%H``, ``%M``, ``%S`` (two digits),
        ``%f`` (milliseconds, three digits), ``%u`` (microseconds,
        six digits) and ``%N`` (nanoseconds, nine digits).
        ``%%`` is a literal percent sign. Other letters following ``%``
        are emitted without the percent sign.

        Example
        -------

        >>> Time(14, 30, 45, 123_456_789).format("%H:%M:%S.%f")
        '14:30:45.123'

        """
        return _render(fmt, _TIME_DIRECTIVES, self)

    def canonical_format(self) -> str:
        """The time in canonical format: ``HH:MM:SS``, followed by
        nine fractional digits if the sub-second part is non-zero.

        Example
        -------

        >>> Time(8, 5).canonical_format()
        '08:05:00'
        >>> Time(8, 5, 0, 1_500).canonical_format()
        '08:05:00.000001500'

        """
        hms = f"{self.hour:02}:{self.minute:02}:{self.second:02}"
        if nanos := self.nanosecond:
            return f"{hms}.{nanos:09}"
        return hms

    __str__ = canonical_format

    @classmethod
    def from_canonical_format(cls, s: str, /) -> Time:
        """Create from the canonical string representation.

        Inverse of :meth:`canonical_format`. Up to nine fractional
        digits are accepted.

        Example
        -------

        >>> Time.from_canonical_format("08:05:00.25")
        Time(08:05:00.250000000)

        Raises
        ------
        InvalidFormat
            If the string does not match this exact format.
        InvalidComponent
            If a component is out of range, e.g. ``25:00:00``.

        """
        if not (match := _match_time_str(s)):
            raise InvalidFormat(f"Invalid time format: {s!r}")
        hour, minute, second, fraction = match.groups()
        return cls(
            int(hour),
            int(minute),
            int(second),
            int((fraction or "").ljust(9, "0")),
        )

    def __repr__(self) -> str:
        return f"Time({self})"

    if TYPE_CHECKING:

        def replace(
            self,
            *,
            hour: int | NOT_SET = NOT_SET(),
            minute: int | NOT_SET = NOT_SET(),
            second: int | NOT_SET = NOT_SET(),
            nanosecond: int | NOT_SET = NOT_SET(),
        ) -> Time: ...

    else:

        def replace(self, /, **kwargs) -> Time:
            """Create a new instance with the given fields replaced.
            The result is validated like the constructor.

            Example
            -------

            >>> Time(8, 5).replace(minute=45)
            Time(08:45:00)

            """
            return Time(
                **{
                    "hour": self.hour,
                    "minute": self.minute,
                    "second": self.second,
                    "nanosecond": self.nanosecond,
                    **kwargs,
                }
            )

    def py_time(self) -> _time:
        """Convert to a :class:`~datetime.time`.
        Nanoseconds are truncated to microseconds.
        """
        return _time(self.hour, self.minute, self.second, self.microsecond)

    @classmethod
    def from_py_time(cls, t: _time, /) -> Time:
        """Create from a naive :class:`~datetime.time`"""
        if t.tzinfo is not None:
            raise ValueError(
                "Can only create Time from a naive time, "
                f"got time with tzinfo={t.tzinfo!r}"
            )
        return cls._from_nanos_unchecked(
            t.hour * NANOS_PER_HOUR
            + t.minute * NANOS_PER_MINUTE
            + t.second * NANOS_PER_SECOND
            + t.microsecond * NANOS_PER_MICROSECOND
        )

    if not TYPE_CHECKING:  # pragma: no branch

        def __eq__(self, other: object) -> bool:
            """Compare for equality

            Example
            -------

            >>> Time(8, 5) == Time(8, 5, 0, 0)
            True
            >>> Time(8, 5) == Time(8, 6)
            False

            """
            if not isinstance(other, Time):
                return NotImplemented
            return self._nanos == other._nanos

    def __hash__(self) -> int:
        return hash(self._nanos)

    def __lt__(self, other: Time) -> bool:
        if not isinstance(other, Time):
            return NotImplemented
        return self._nanos < other._nanos

    def __le__(self, other: Time) -> bool:
        if not isinstance(other, Time):
            return NotImplemented
        return self._nanos <= other._nanos

    def __gt__(self, other: Time) -> bool:
        if not isinstance(other, Time):
            return NotImplemented
        return self._nanos > other._nanos

    def __ge__(self, other: Time) -> bool:
        if not isinstance(other, Time):
            return NotImplemented
        return self._nanos >= other._nanos

    @classmethod
    def _from_nanos_unchecked(cls, nanos: int, /) -> Time:
        self = _object_new(cls)
        self._nanos = nanos
        return self

    # We don't need to copy, because it's immutable
    def __copy__(self) -> Time:
        return self

    def __deepcopy__(self, _: object) -> Time:
        return self

    def __reduce__(self) -> tuple[object, ...]:
        return _unpkl_time, (self._nanos,)


# A separate unpickling function allows us to make backwards-compatible changes
# to the pickling format in the future
@no_type_check
def _unpkl_time(nanos: int) -> Time:
    return Time.from_nanoseconds(nanos)


Time.MIDNIGHT = Time()
Time.NOON = Time(12)


class Date:
    """A date in the proleptic Gregorian calendar, without a time component.

    Years range from 1 to 9999. Arithmetic never fails:
    month and year steps clamp the day to the end of the month.

    Example
    -------

    >>> d = Date(2024, 1, 31)
    Date(2024-01-31)
    >>> d.add_months(1)
    Date(2024-02-29)
    >>> d.day_of_week()  # Wednesday
    2

    """

    __slots__ = ("_year", "_month", "_day")

    min: ClassVar[Date]
    max: ClassVar[Date]

    def __init__(self, year: int, month: int, day: int) -> None:
        if not is_valid_date(year, month, day):
            raise InvalidComponent.for_date(year, month, day)
        self._year = year
        self._month = month
        self._day = day

    @property
    def year(self) -> int:
        return self._year

    @property
    def month(self) -> int:
        return self._month

    @property
    def day(self) -> int:
        return self._day

    @classmethod
    def today(cls) -> Date:
        """The current date, as shown on the local calendar"""
        d = _date.today()
        return cls(d.year, d.month, d.day)

    @classmethod
    def from_day_of_year(cls, year: int, day_of_year: int, /) -> Date:
        """Create from a year and the day within that year (1-366)

        Example
        -------

        >>> Date.from_day_of_year(2024, 60)
        Date(2024-02-29)

        Raises
        ------
        InvalidComponent
            If the year or the day of the year is out of range.

        """
        if not is_valid_year(year):
            raise InvalidComponent("year", year)
        if not 1 <= day_of_year <= days_in_year(year):
            raise InvalidComponent("day of year", day_of_year)
        month = 1
        while day_of_year > (length := days_in_month(month, year)):
            day_of_year -= length
            month += 1
        return cls._from_ymd_unchecked(year, month, day_of_year)

    def day_of_week(self) -> int:
        """The day of the week, where 0 is Monday and 6 is Sunday

        Example
        -------

        >>> from wallclock import WEDNESDAY
        >>> Date(2024, 12, 25).day_of_week()
        2
        >>> Date(2024, 12, 25).day_of_week() == WEDNESDAY
        True

        """
        return _day_of_week(self._year, self._month, self._day)

    def day_of_year(self) -> int:
        """The day within the year, from 1 to 366

        Example
        -------

        >>> Date(2024, 12, 31).day_of_year()
        366

        """
        return _day_of_year(self._year, self._month, self._day)

    def week_number(self) -> int:
        """The ISO 8601 week number, from 1 to 53.

        Week 1 is the week containing the first Thursday of the year.
        Days at the start or end of a year may belong to a week of the
        adjacent year.

        Example
        -------

        >>> Date(2024, 12, 31).week_number()
        1
        >>> Date(2021, 1, 3).week_number()
        53

        """
        return _iso_week(self._year, self._month, self._day)

    def quarter(self) -> int:
        """The quarter of the year, from 1 to 4"""
        return (self._month - 1) // 3 + 1

    def is_leap_year(self) -> bool:
        return is_leap_year(self._year)

    def is_weekend(self) -> bool:
        return self.day_of_week() >= SATURDAY

    def is_weekday(self) -> bool:
        return self.day_of_week() < SATURDAY

    def first_day_of_month(self) -> Date:
        return self._from_ymd_unchecked(self._year, self._month, 1)

    def last_day_of_month(self) -> Date:
        return self._from_ymd_unchecked(
            self._year, self._month, days_in_month(self._month, self._year)
        )

    def first_day_of_year(self) -> Date:
        return self._from_ymd_unchecked(self._year, 1, 1)

    def last_day_of_year(self) -> Date:
        return self._from_ymd_unchecked(self._year, 12, 31)

    def add_days(self, days: int, /) -> Date:
        """Add (or subtract) a number of days.

        The date is stepped month by month, rolling over into
        the next or previous year where needed.

        Note
        ----
        If the result would be outside the supported range
        (0001-01-01 to 9999-12-31), the date is returned unchanged.

        Example
        -------

        >>> Date(2024, 12, 25).add_days(10)
        Date(2025-01-04)
        >>> Date(2024, 3, 1).add_days(-1)
        Date(2024-02-29)

        """
        if not _MIN_ORDINAL <= self._ordinal() + days <= _MAX_ORDINAL:
            return self
        return self._from_ymd_unchecked(
            *_shift_days(self._year, self._month, self._day, days)
        )

    def add_weeks(self, weeks: int, /) -> Date:
        return self.add_days(weeks * 7)

    def add_months(self, months: int, /) -> Date:
        """Add (or subtract) a number of months.

        The day is clamped to the length of the resulting month.
        A result before January 0001 or after December 9999
        saturates at that month.

        Example
        -------

        >>> Date(2023, 1, 31).add_months(1)
        Date(2023-02-28)
        >>> Date(2024, 11, 15).add_months(-12)
        Date(2023-11-15)
        >>> Date(1, 3, 15).add_months(-3)
        Date(0001-01-15)

        """
        index = (self._year - 1) * 12 + self._month - 1 + months
        year, month = divmod(min(max(index, 0), _MAX_MONTH_INDEX), 12)
        year += 1
        month += 1
        return self._from_ymd_unchecked(
            year, month, min(self._day, days_in_month(month, year))
        )

    def add_years(self, years: int, /) -> Date:
        """Add (or subtract) a number of years.

        Example
        -------

        >>> Date(2024, 2, 29).add_years(1)
        Date(2025-02-28)

        """
        return self.add_months(years * 12)

    def days_between(self, other: Date, /) -> int:
        """The number of days from the other date to this one.
        Positive if this date is later.

        Example
        -------

        >>> Date(2024, 12, 31).days_between(Date(2024, 1, 1))
        365

        """
        return self._ordinal() - other._ordinal()

    def format(self, fmt: str = "%Y-%m-%d", /) -> str:
        """Format the date according to the given template.

        Supported directives:

        - ``%Y``: year (four digits)
        - ``%m``, ``%d``: month and day (two digits)
        - ``%w``: day of the week (0 is Monday)
        - ``%j``: day of the year (three digits)
        - ``%q``: quarter
        - ``%W``: ISO week number (two digits)
        - ``%B``, ``%b``: month name and abbreviation
        - ``%A``, ``%a``: weekday name and abbreviation
        - ``%%``: a literal percent sign

        Other letters following ``%`` are emitted without the percent sign.

        Example
        -------

        >>> Date(2024, 12, 25).format("%A, %B %d, %Y")
        'Wednesday, December 25, 2024'

        """
        return _render(fmt, _DATE_DIRECTIVES, self)

    def canonical_format(self) -> str:
        """The date in canonical format.

        Example
        -------

        >>> d = Date(2021, 1, 2)
        >>> d.canonical_format()
        '2021-01-02'

        """
        return f"{self._year:04}-{self._month:02}-{self._day:02}"

    __str__ = canonical_format

    @classmethod
    def from_canonical_format(cls, s: str, /) -> Date:
        """Create from the canonical string representation.

        Inverse of :meth:`canonical_format`

        Example
        -------

        >>> Date.from_canonical_format("2021-01-02")
        Date(2021-01-02)

        Raises
        ------
        InvalidFormat
            If the string does not match this exact format.
        InvalidComponent
            If the date doesn't exist, e.g. ``2023-02-29``.

        """
        if not (match := _match_date_str(s)):
            raise InvalidFormat(f"Invalid date format: {s!r}")
        return cls(*map(int, match.groups()))

    def __repr__(self) -> str:
        return f"Date({self})"

    if TYPE_CHECKING:

        def replace(
            self,
            *,
            year: int | NOT_SET = NOT_SET(),
            month: int | NOT_SET = NOT_SET(),
            day: int | NOT_SET = NOT_SET(),
        ) -> Date: ...

    else:

        def replace(self, /, **kwargs) -> Date:
            """Create a new instance with the given fields replaced.
            The result is validated like the constructor.

            Example
            -------

            >>> Date(2024, 2, 29).replace(day=1)
            Date(2024-02-01)

            """
            return Date(
                **{
                    "year": self._year,
                    "month": self._month,
                    "day": self._day,
                    **kwargs,
                }
            )

    def py_date(self) -> _date:
        """Convert to a :class:`~datetime.date`"""
        return _date(self._year, self._month, self._day)

    @classmethod
    def from_py_date(cls, d: _date, /) -> Date:
        """Create from a :class:`~datetime.date`

        Example
        -------

        >>> from datetime import date
        >>> Date.from_py_date(date(2021, 1, 2))
        Date(2021-01-02)

        """
        return cls._from_ymd_unchecked(d.year, d.month, d.day)

    if not TYPE_CHECKING:  # pragma: no branch

        def __eq__(self, other: object) -> bool:
            """Compare for equality

            Example
            -------

            >>> d = Date(2021, 1, 2)
            >>> d == Date(2021, 1, 2)
            True
            >>> d == Date(2021, 1, 3)
            False

            """
            if not isinstance(other, Date):
                return NotImplemented
            return self._ymd() == other._ymd()

    def __hash__(self) -> int:
        return hash(self._ymd())

    def __lt__(self, other: Date) -> bool:
        if not isinstance(other, Date):
            return NotImplemented
        return self._ymd() < other._ymd()

    def __le__(self, other: Date) -> bool:
        if not isinstance(other, Date):
            return NotImplemented
        return self._ymd() <= other._ymd()

    def __gt__(self, other: Date) -> bool:
        if not isinstance(other, Date):
            return NotImplemented
        return self._ymd() > other._ymd()

    def __ge__(self, other: Date) -> bool:
        if not isinstance(other, Date):
            return NotImplemented
        return self._ymd() >= other._ymd()

    def _ymd(self) -> tuple[int, int, int]:
        return self._year, self._month, self._day

    def _ordinal(self) -> int:
        return _ordinal(self._year, self._month, self._day)

    @classmethod
    def _from_ymd_unchecked(cls, year: int, month: int, day: int) -> Date:
        self = _object_new(cls)
        self._year = year
        self._month = month
        self._day = day
        return self

    def __copy__(self) -> Date:
        return self

    def __deepcopy__(self, _: object) -> Date:
        return self

    def __reduce__(self) -> tuple[object, ...]:
        return _unpkl_date, self._ymd()


@no_type_check
def _unpkl_date(*args) -> Date:
    return Date(*args)


Date.min = Date(MIN_YEAR, 1, 1)
Date.max = Date(MAX_YEAR, 12, 31)
_UNIX_EPOCH = Date(1970, 1, 1)


class DateTime:
    """A date and time of day, without a timezone or offset.

    It is composed of a :class:`Date` and a :class:`Time`.
    Adding hours, minutes or smaller units carries whole days over
    into the date, in both directions.

    Note
    ----

    The canonical string format is:

    .. code-block:: text

       YYYY-MM-DDTHH:MM:SS(.fffffffff)

    Example
    -------

    >>> d = DateTime(2024, 12, 31, 23, 30)
    DateTime(2024-12-31 23:30:00)
    >>> d.add_hours(2)
    DateTime(2025-01-01 01:30:00)

    """

    __slots__ = ("_date", "_time")

    min: ClassVar[DateTime]
    max: ClassVar[DateTime]

    def __init__(
        self,
        year: int,
        month: int,
        day: int,
        hour: int = 0,
        minute: int = 0,
        second: int = 0,
        nanosecond: int = 0,
    ) -> None:
        self._date = Date(year, month, day)
        self._time = Time(hour, minute, second, nanosecond)

    if TYPE_CHECKING:

        @property
        def year(self) -> int: ...

        @property
        def month(self) -> int: ...

        @property
        def day(self) -> int: ...

        @property
        def hour(self) -> int: ...

        @property
        def minute(self) -> int: ...

        @property
        def second(self) -> int: ...

        @property
        def millisecond(self) -> int: ...

        @property
        def microsecond(self) -> int: ...

        @property
        def nanosecond(self) -> int: ...

    else:
        # Defining properties this way is faster than declaring a `def`,
        # but the type checker doesn't like it.
        year = property(attrgetter("_date._year"))
        month = property(attrgetter("_date._month"))
        day = property(attrgetter("_date._day"))
        hour = property(attrgetter("_time.hour"))
        minute = property(attrgetter("_time.minute"))
        second = property(attrgetter("_time.second"))
        millisecond = property(attrgetter("_time.millisecond"))
        microsecond = property(attrgetter("_time.microsecond"))
        nanosecond = property(attrgetter("_time.nanosecond"))

    @classmethod
    def combine(cls, date: Date, time: Time = Time.MIDNIGHT, /) -> DateTime:
        """Create from a date and a time, which defaults to midnight

        Example
        -------

        >>> DateTime.combine(Date(2024, 12, 25), Time(14, 30))
        DateTime(2024-12-25 14:30:00)

        """
        return cls._from_parts(date, time)

    @classmethod
    def now(cls) -> DateTime:
        """The current date and time, as shown on the local wall clock"""
        t = _datetime.now()
        return cls(
            t.year,
            t.month,
            t.day,
            t.hour,
            t.minute,
            t.second,
            t.microsecond * NANOS_PER_MICROSECOND,
        )

    def date(self) -> Date:
        """The date part of the datetime

        Example
        -------

        >>> d = DateTime(2021, 1, 2, 3, 4, 5)
        >>> d.date()
        Date(2021-01-02)

        """
        return self._date

    def time(self) -> Time:
        """The time part of the datetime"""
        return self._time

    def day_of_week(self) -> int:
        """The day of the week, where 0 is Monday and 6 is Sunday"""
        return self._date.day_of_week()

    def day_of_year(self) -> int:
        return self._date.day_of_year()

    def week_number(self) -> int:
        """The ISO 8601 week number of the date"""
        return self._date.week_number()

    def quarter(self) -> int:
        return self._date.quarter()

    def total_seconds(self) -> int:
        """The whole seconds elapsed since midnight"""
        return self._time.total_seconds()

    def add_days(self, days: int, /) -> DateTime:
        """Add (or subtract) days. The time of day is unchanged."""
        return self._from_parts(self._date.add_days(days), self._time)

    def add_weeks(self, weeks: int, /) -> DateTime:
        return self._from_parts(self._date.add_weeks(weeks), self._time)

    def add_months(self, months: int, /) -> DateTime:
        """Add (or subtract) months. The day is clamped to the end of
        the month, see :meth:`Date.add_months`.

        Example
        -------

        >>> DateTime(2024, 1, 31, 12).add_months(1)
        DateTime(2024-02-29 12:00:00)

        """
        return self._from_parts(self._date.add_months(months), self._time)

    def add_years(self, years: int, /) -> DateTime:
        return self._from_parts(self._date.add_years(years), self._time)

    def add_nanoseconds(self, nanoseconds: int, /) -> DateTime:
        """Add (or subtract) nanoseconds, carrying whole days
        over into the date.

        Note
        ----
        If the result would be outside the supported range,
        the datetime is returned unchanged.

        Example
        -------

        >>> DateTime(2025, 1, 1).add_nanoseconds(-1)
        DateTime(2024-12-31 23:59:59.999999999)

        """
        days, nanos = divmod(self._time._nanos + nanoseconds, NANOS_PER_DAY)
        if not _MIN_ORDINAL <= self._date._ordinal() + days <= _MAX_ORDINAL:
            return self
        return self._from_parts(
            self._date.add_days(days), Time._from_nanos_unchecked(nanos)
        )

    def add_milliseconds(self, milliseconds: int, /) -> DateTime:
        return self.add_nanoseconds(milliseconds * NANOS_PER_MILLISECOND)

    def add_seconds(self, seconds: int, /) -> DateTime:
        """Add (or subtract) seconds, carrying whole days
        over into the date.

        Example
        -------

        >>> DateTime(2024, 3, 1).add_seconds(-1)
        DateTime(2024-02-29 23:59:59)

        """
        return self.add_nanoseconds(seconds * NANOS_PER_SECOND)

    def add_minutes(self, minutes: int, /) -> DateTime:
        return self.add_nanoseconds(minutes * NANOS_PER_MINUTE)

    def add_hours(self, hours: int, /) -> DateTime:
        """Add (or subtract) hours, carrying whole days
        over into the date.

        Example
        -------

        >>> DateTime(2024, 12, 31, 23, 30).add_hours(2)
        DateTime(2025-01-01 01:30:00)
        >>> DateTime(2025, 1, 1, 0, 30).add_hours(-1)
        DateTime(2024-12-31 23:30:00)

        """
        return self.add_nanoseconds(hours * NANOS_PER_HOUR)

    def seconds_between(self, other: DateTime, /) -> int:
        """The number of whole seconds from the other datetime to this one.
        Positive if this datetime is later. Sub-second parts are ignored.

        Example
        -------

        >>> a = DateTime(2024, 12, 25, 12)
        >>> a.seconds_between(DateTime(2024, 12, 24, 11, 59))
        86460

        """
        return (
            self._date.days_between(other._date) * SECONDS_PER_DAY
            + self._time.total_seconds()
            - other._time.total_seconds()
        )

    def to_unix_timestamp(self) -> int:
        """The number of seconds since 1970-01-01T00:00:00.
        No offset is applied: the datetime is treated as if it were UTC.

        Example
        -------

        >>> DateTime(1970, 1, 2).to_unix_timestamp()
        86400

        """
        return (
            self._date.days_between(_UNIX_EPOCH) * SECONDS_PER_DAY
            + self._time.total_seconds()
        )

    def to_unix_timestamp_ms(self) -> int:
        """The number of milliseconds since 1970-01-01T00:00:00"""
        return self.to_unix_timestamp() * 1_000 + self._time.millisecond

    @classmethod
    def from_unix_timestamp(cls, seconds: int, /) -> DateTime:
        """Create from the number of seconds since 1970-01-01T00:00:00.
        Inverse of :meth:`to_unix_timestamp`.

        Raises
        ------
        InvalidComponent
            If the timestamp is outside the supported years.

        Example
        -------

        >>> DateTime.from_unix_timestamp(-1)
        DateTime(1969-12-31 23:59:59)

        """
        return cls._from_unix_nanos(seconds * NANOS_PER_SECOND, seconds)

    @classmethod
    def from_unix_timestamp_ms(cls, milliseconds: int, /) -> DateTime:
        """Create from the number of milliseconds since 1970-01-01T00:00:00.
        Inverse of :meth:`to_unix_timestamp_ms`.
        """
        return cls._from_unix_nanos(
            milliseconds * NANOS_PER_MILLISECOND, milliseconds
        )

    @classmethod
    def _from_unix_nanos(cls, nanos: int, timestamp: int) -> DateTime:
        days, nanos = divmod(nanos, NANOS_PER_DAY)
        if not _MIN_ORDINAL <= _UNIX_EPOCH._ordinal() + days <= _MAX_ORDINAL:
            raise InvalidComponent("timestamp", timestamp)
        return cls._from_parts(
            _UNIX_EPOCH.add_days(days), Time._from_nanos_unchecked(nanos)
        )

    def format(self, fmt: str = "%Y-%m-%d %H:%M:%S", /) -> str:
        """Format the datetime according to the given template.

        All directives of :meth:`Date.format` and :meth:`Time.format`
        are supported.

        Example
        -------

        >>> d = DateTime(2024, 12, 25, 14, 30, 45, 123_456_789)
        >>> d.format("%a %d %b %Y, %H:%M:%S.%u")
        'Wed 25 Dec 2024, 14:30:45.123456'

        """
        return _render(fmt, _DATETIME_DIRECTIVES, self)

    def to_iso8601(self) -> str:
        """Format as ``YYYY-MM-DDTHH:MM:SS``"""
        return self.format("%Y-%m-%dT%H:%M:%S")

    def to_iso8601_ms(self) -> str:
        return self.format("%Y-%m-%dT%H:%M:%S.%f")

    def to_iso8601_us(self) -> str:
        return self.format("%Y-%m-%dT%H:%M:%S.%u")

    def to_iso8601_ns(self) -> str:
        return self.format("%Y-%m-%dT%H:%M:%S.%N")

    def canonical_format(self, sep: Literal[" ", "T"] = "T") -> str:
        """Format as the canonical string representation.
        Inverse of :meth:`from_canonical_format`.

        Example
        -------

        >>> DateTime(2024, 12, 25, 14, 30).canonical_format()
        '2024-12-25T14:30:00'

        """
        return f"{self._date}{sep}{self._time}"

    def __str__(self) -> str:
        """Same as :meth:`canonical_format` with ``sep=" "``"""
        return self.canonical_format(" ")

    @classmethod
    def from_canonical_format(cls, s: str, /) -> DateTime:
        """Create an instance from the canonical string representation.

        Inverse of :meth:`__str__` and :meth:`canonical_format`.

        Note
        ----
        ``T`` may be replaced with a single space

        Raises
        ------
        InvalidFormat
            If the string does not match this exact format.
        InvalidComponent
            If a component is out of range.
        """
        if not (match := _match_datetime_str(s)):
            raise InvalidFormat(f"Invalid datetime format: {s!r}")
        *components, fraction = match.groups()
        return cls(
            *map(int, components), int((fraction or "").ljust(9, "0"))
        )

    def __repr__(self) -> str:
        return f"DateTime({self})"

    if TYPE_CHECKING:

        def replace(
            self,
            *,
            year: int | NOT_SET = NOT_SET(),
            month: int | NOT_SET = NOT_SET(),
            day: int | NOT_SET = NOT_SET(),
            hour: int | NOT_SET = NOT_SET(),
            minute: int | NOT_SET = NOT_SET(),
            second: int | NOT_SET = NOT_SET(),
            nanosecond: int | NOT_SET = NOT_SET(),
        ) -> DateTime: ...

    else:

        def replace(self, /, **kwargs) -> DateTime:
            """Construct a new instance with the given fields replaced.

            Note
            ----
            If you need to shift the datetime,
            use the ``add_*`` methods instead.
            These carry over into the adjacent fields.

            Example
            -------

            >>> d = DateTime(2020, 8, 15, 23, 12)
            >>> d.replace(year=2021)
            DateTime(2021-08-15 23:12:00)
            """
            return DateTime(
                **{
                    "year": self.year,
                    "month": self.month,
                    "day": self.day,
                    "hour": self.hour,
                    "minute": self.minute,
                    "second": self.second,
                    "nanosecond": self.nanosecond,
                    **kwargs,
                }
            )

    def py_datetime(self) -> _datetime:
        """Convert to a naive :class:`~datetime.datetime`.
        Nanoseconds are truncated to microseconds.
        """
        return _datetime.combine(self._date.py_date(), self._time.py_time())

    @classmethod
    def from_py_datetime(cls, d: _datetime, /) -> DateTime:
        """Create from a naive :class:`~datetime.datetime`.
        Inverse of :meth:`py_datetime`.
        """
        if d.tzinfo is not None:
            raise ValueError(
                "Can only create DateTime from a naive datetime, "
                f"got datetime with tzinfo={d.tzinfo!r}"
            )
        return cls._from_parts(
            Date.from_py_date(d.date()), Time.from_py_time(d.time())
        )

    if not TYPE_CHECKING:  # pragma: no branch

        def __eq__(self, other: object) -> bool:
            """Compare objects for equality.
            Only ever equal to other :class:`DateTime` instances with the
            same values.

            Example
            -------

            >>> DateTime(2020, 8, 15, 23) == DateTime(2020, 8, 15, 23)
            True
            >>> DateTime(2020, 8, 15, 23, 1) == DateTime(2020, 8, 15, 23)
            False

            """
            if not isinstance(other, DateTime):
                return NotImplemented
            return self._key() == other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    def __lt__(self, other: DateTime) -> bool:
        if not isinstance(other, DateTime):
            return NotImplemented
        return self._key() < other._key()

    def __le__(self, other: DateTime) -> bool:
        if not isinstance(other, DateTime):
            return NotImplemented
        return self._key() <= other._key()

    def __gt__(self, other: DateTime) -> bool:
        if not isinstance(other, DateTime):
            return NotImplemented
        return self._key() > other._key()

    def __ge__(self, other: DateTime) -> bool:
        if not isinstance(other, DateTime):
            return NotImplemented
        return self._key() >= other._key()

    def _key(self) -> tuple[int, int, int, int]:
        return (*self._date._ymd(), self._time._nanos)

    @classmethod
    def _from_parts(cls, date: Date, time: Time) -> DateTime:
        self = _object_new(cls)
        self._date = date
        self._time = time
        return self

    def __copy__(self) -> DateTime:
        return self

    def __deepcopy__(self, _: object) -> DateTime:
        return self

    def __reduce__(self) -> tuple[object, ...]:
        return _unpkl_datetime, (*self._date._ymd(), self._time._nanos)


@no_type_check
def _unpkl_datetime(year, month, day, nanos) -> DateTime:
    return DateTime.combine(
        Date(year, month, day), Time.from_nanoseconds(nanos)
    )


DateTime.min = DateTime.combine(Date.min)
DateTime.max = DateTime.combine(
    Date.max, Time.from_nanoseconds(NANOS_PER_DAY - 1)
)


def _render(
    fmt: str, directives: Mapping[str, Callable[[Any], str]], value: object
) -> str:
    out: list[str] = []
    chars = iter(fmt)
    for char in chars:
        if char != "%":
            out.append(char)
        elif (letter := next(chars, None)) is None:
            out.append("%")
        elif (render := directives.get(letter)) is None:
            # covers '%%' as well as unknown directives
            out.append(letter)
        else:
            out.append(render(value))
    return "".join(out)


_DATE_DIRECTIVES: dict[str, Callable[[Any], str]] = {
    "Y": lambda d: f"{d.year:04}",
    "m": lambda d: f"{d.month:02}",
    "d": lambda d: f"{d.day:02}",
    "w": lambda d: str(d.day_of_week()),
    "j": lambda d: f"{d.day_of_year():03}",
    "q": lambda d: str(d.quarter()),
    "W": lambda d: f"{d.week_number():02}",
    "B": lambda d: MONTH_NAMES[d.month - 1],
    "b": lambda d: MONTH_ABBREVIATIONS[d.month - 1],
    "A": lambda d: WEEKDAY_NAMES[d.day_of_week()],
    "a": lambda d: WEEKDAY_ABBREVIATIONS[d.day_of_week()],
}
_TIME_DIRECTIVES: dict[str, Callable[[Any], str]] = {
    "H": lambda t: f"{t.hour:02}",
    "M": lambda t: f"{t.minute:02}",
    "S": lambda t: f"{t.second:02}",
    "f": lambda t: f"{t.millisecond:03}",
    "u": lambda t: f"{t.microsecond:06}",
    "N": lambda t: f"{t.nanosecond:09}",
}
_DATETIME_DIRECTIVES = {**_DATE_DIRECTIVES, **_TIME_DIRECTIVES}


class InvalidComponent(ValueError):
    """A date or time component is out of range"""

    def __init__(self, field: str, value: object) -> None:
        super().__init__(f"Invalid {field}: {value!r}")
        self.field = field
        self.value = value

    def __reduce__(self) -> tuple[object, ...]:
        return InvalidComponent, (self.field, self.value)

    @staticmethod
    def for_date(year: int, month: int, day: int) -> InvalidComponent:
        if not is_valid_year(year):
            return InvalidComponent("year", year)
        elif not is_valid_month(month):
            return InvalidComponent("month", month)
        return InvalidComponent("day", day)

    @staticmethod
    def for_time(
        hour: int, minute: int, second: int, nanosecond: int
    ) -> InvalidComponent:
        if not is_valid_hour(hour):
            return InvalidComponent("hour", hour)
        elif not is_valid_minute(minute):
            return InvalidComponent("minute", minute)
        elif not is_valid_second(second):
            return InvalidComponent("second", second)
        return InvalidComponent("nanosecond", nanosecond)


class InvalidFormat(ValueError):
    """A string has an invalid format"""


# YYYY-MM-DD
_DATE_RE = r"(\d{4})-(\d{2})-(\d{2})"
# HH:MM:SS[.fffffffff]
_TIME_RE = r"(\d{2}):(\d{2}):(\d{2})(?:\.(\d{1,9}))?"
_match_date_str = re.compile(_DATE_RE, re.ASCII).fullmatch
_match_time_str = re.compile(_TIME_RE, re.ASCII).fullmatch
_match_datetime_str = re.compile(rf"{_DATE_RE}[T ]{_TIME_RE}", re.ASCII).fullmatch
