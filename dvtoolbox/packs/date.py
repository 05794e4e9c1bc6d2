"""AAUX and VAUX recording date packs."""

from __future__ import annotations

import datetime
import enum
from dataclasses import dataclass
from typing import Any, Dict, Iterator, Optional

from dvtoolbox.packs.base import PackContext, PackData, RawPackError, Validator

_SECONDS_PER_HOUR = 60 * 60
_SECONDS_PER_HALF_HOUR = 30 * 60
_MAX_OFFSET_SECONDS = 24 * _SECONDS_PER_HOUR
_RAW_WEEKDAY_NO_INFO = 0x7
_MIN_YEAR = 1975
_MAX_YEAR = 2074
_Y2K_THRESHOLD = 75


class DaylightSavingTime(enum.Enum):
    """Whether daylight saving time is in effect."""

    DAYLIGHT_SAVING_TIME = 0x0
    NORMAL = 0x1


_DST_LABELS = {
    DaylightSavingTime.DAYLIGHT_SAVING_TIME: "DaylightSavingTime",
    DaylightSavingTime.NORMAL: "Normal",
}
_DST_BY_LABEL = {label: member for member, label in _DST_LABELS.items()}


class Weekday(enum.Enum):
    """Day of the week; values match :meth:`datetime.date.weekday`."""

    MON = 0
    TUE = 1
    WED = 2
    THU = 3
    FRI = 4
    SAT = 5
    SUN = 6

    @classmethod
    def of(cls, date: datetime.date) -> "Weekday":
        """The weekday on which ``date`` falls."""
        return cls(date.weekday())

    def __str__(self) -> str:
        return self.name.title()


def _bits(value: int, shift: int, width: int) -> int:
    return (value >> shift) & ((1 << width) - 1)


def _from_bcd(tens: int, units: int, tens_width: int) -> Optional[int]:
    """Decode a binary-coded decimal pair; all bits set means "no information"."""
    if tens == (1 << tens_width) - 1 and units == 0xF:
        return None
    if tens > 9:
        raise ValueError(f"tens place value of {tens} is greater than 9")
    if units > 9:
        raise ValueError(f"units place value of {units} is greater than 9")
    return tens * 10 + units


def _read_bcd(value: int, units_shift: int, tens_shift: int, tens_width: int, what: str):
    try:
        return _from_bcd(
            _bits(value, tens_shift, tens_width), _bits(value, units_shift, 4), tens_width
        )
    except ValueError as exc:
        raise RawPackError(f"couldn't read the date's {what}") from exc


def _offset_seconds(tz: datetime.timezone) -> int:
    return tz.utcoffset(None) // datetime.timedelta(seconds=1)


def _timezone_from_seconds(seconds: int) -> Optional[datetime.timezone]:
    if not -_MAX_OFFSET_SECONDS < seconds < _MAX_OFFSET_SECONDS:
        return None
    return datetime.timezone(datetime.timedelta(seconds=seconds))


@dataclass(frozen=True)
class RecordingDate(PackData):
    """Date on which audio or video data was recorded.

    See IEC 61834-4:1998 Sections 8.3 and 9.3.  Only a two-digit year is stored;
    years below 75 are taken to be in the 2000s, others in the 1900s.
    """

    date: Optional[datetime.date]
    weekday: Optional[Weekday]
    timezone: Optional[datetime.timezone]
    daylight_saving_time: Optional[DaylightSavingTime]
    reserved: int

    # ----- binary form -----

    @classmethod
    def _unpack(cls, value: int, ctx: PackContext) -> "RecordingDate":
        year = _read_bcd(value, 24, 28, 4, "year")
        if year is not None:
            year += 2000 if year < _Y2K_THRESHOLD else 1900
        month = _read_bcd(value, 16, 20, 1, "month")
        day = _read_bcd(value, 8, 12, 2, "day")
        tz_hour = _read_bcd(value, 0, 4, 2, "timezone")

        timezone = None
        if tz_hour is not None:
            half_hour = 1 - _bits(value, 6, 1)
            timezone = _timezone_from_seconds(
                tz_hour * _SECONDS_PER_HOUR + half_hour * _SECONDS_PER_HALF_HOUR
            )
            if timezone is None:
                raise RawPackError(f"timezone hour {tz_hour} is out of range")

        parts = (year, month, day)
        if all(part is None for part in parts):
            date = None
        elif any(part is None for part in parts):
            raise RawPackError(
                "year/month/day date fields must be fully present or fully absent"
            )
        else:
            try:
                date = datetime.date(year, month, day)
            except ValueError:
                raise RawPackError(f"the date {year}-{month}-{day} is not a valid date") from None

        raw_week = _bits(value, 21, 3)
        weekday = None if raw_week == _RAW_WEEKDAY_NO_INFO else Weekday((raw_week - 1) % 7)

        return cls(
            date=date,
            weekday=weekday,
            timezone=timezone,
            daylight_saving_time=(
                None if timezone is None else DaylightSavingTime(_bits(value, 7, 1))
            ),
            reserved=_bits(value, 14, 2),
        )

    def _pack(self, ctx: PackContext) -> int:
        if self.timezone is None:
            tz_units, tz_tens, tm = 0xF, 0x3, 0x1
        else:
            hours, rest = divmod(_offset_seconds(self.timezone), _SECONDS_PER_HOUR)
            tz_units, tz_tens = hours % 10, hours // 10
            tm = 1 - rest // _SECONDS_PER_HALF_HOUR
        dst = self.daylight_saving_time or DaylightSavingTime.NORMAL

        if self.date is None:
            day_units, day_tens = 0xF, 0x3
            month_units, month_tens = 0xF, 0x1
            year_units, year_tens = 0xF, 0xF
        else:
            day_tens, day_units = divmod(self.date.day, 10)
            month_tens, month_units = divmod(self.date.month, 10)
            year_units, year_tens = self.date.year % 10, (self.date.year // 10) % 10

        week = _RAW_WEEKDAY_NO_INFO if self.weekday is None else (self.weekday.value + 1) % 7

        return (
            tz_units
            | (tz_tens << 4)
            | (tm << 6)
            | (dst.value << 7)
            | (day_units << 8)
            | (day_tens << 12)
            | (self.reserved << 14)
            | (month_units << 16)
            | (month_tens << 20)
            | (week << 21)
            | (year_units << 24)
            | (year_tens << 28)
        )

    # ----- validation -----

    def _validators(self, ctx: PackContext) -> Iterator[Validator]:
        yield "date", self._check_date
        yield "weekday", self._check_weekday
        yield "timezone", self._check_timezone
        yield "daylight_saving_time", self._check_dst
        yield "reserved", self._check_reserved

    def _check_date(self) -> None:
        if self.date is None:
            return
        year = self.date.year
        if year < _MIN_YEAR:
            raise ValueError(f"the year {year} is before the minimum allowed year {_MIN_YEAR}")
        if year > _MAX_YEAR:
            raise ValueError(f"the year {year} is after the maximum allowed year {_MAX_YEAR}")

    def _check_weekday(self) -> None:
        if self.weekday is None:
            return
        if self.date is None:
            raise ValueError("a weekday must not be provided if the date is otherwise absent.")
        actual = Weekday.of(self.date)
        if actual is not self.weekday:
            raise ValueError(
                f"the weekday field value of {self.weekday} does not match the date "
                f"weekday of {self.date.isoformat()} which is {actual}"
            )

    def _check_timezone(self) -> None:
        if self.timezone is None:
            return
        offset = _offset_seconds(self.timezone)
        if offset < 0:
            raise ValueError(
                f"the time zone offset of {offset} seconds must be a positive offset from GMT"
            )
        if offset % _SECONDS_PER_HALF_HOUR:
            raise ValueError(
                f"the time zone offset of {offset} seconds must be a multiple of 30 "
                "minutes, or 1800 seconds"
            )

    def _check_dst(self) -> None:
        has_tz = self.timezone is not None
        has_dst = self.daylight_saving_time is not None
        if has_tz and not has_dst:
            raise ValueError(
                "daylight saving time value must be specified if time zone is present"
            )
        if has_dst and not has_tz:
            raise ValueError(
                "daylight saving time value must be not specified if time zone is absent"
            )

    def _check_reserved(self) -> None:
        if not 0 <= self.reserved <= 0x3:
            raise ValueError(f"value {self.reserved} does not fit in 2 bits")

    # ----- plain data form -----

    def to_dict(self) -> Dict[str, Any]:
        """Plain-data form; the time zone is given as an offset in seconds."""
        return {
            "date": None if self.date is None else self.date.isoformat(),
            "weekday": None if self.weekday is None else str(self.weekday),
            "timezone": None if self.timezone is None else _offset_seconds(self.timezone),
            "daylight_saving_time": (
                None
                if self.daylight_saving_time is None
                else _DST_LABELS[self.daylight_saving_time]
            ),
            "reserved": self.reserved,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RecordingDate":
        """Build from the form produced by :meth:`to_dict`."""
        date = data.get("date")
        weekday = data.get("weekday")
        offset = data.get("timezone")
        dst = data.get("daylight_saving_time")

        timezone = None
        if offset is not None:
            timezone = _timezone_from_seconds(offset)
            if timezone is None:
                raise ValueError(
                    f"invalid value: integer `{offset}`, expected a time zone offset "
                    "measured in seconds and less than 24 hours"
                )
        try:
            weekday_member = None if weekday is None else Weekday[weekday.upper()]
        except KeyError:
            raise ValueError(f"unknown weekday {weekday!r}") from None
        try:
            dst_member = None if dst is None else _DST_BY_LABEL[dst]
        except KeyError:
            raise ValueError(f"unknown daylight saving time value {dst!r}") from None

        return cls(
            date=None if date is None else datetime.date.fromisoformat(date),
            weekday=weekday_member,
            timezone=timezone,
            daylight_saving_time=dst_member,
            reserved=data["reserved"],
        )