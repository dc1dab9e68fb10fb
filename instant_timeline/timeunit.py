from enum import Enum
from typing import Self

from .bigintmath import BILLION, DAY_NANOS, HOUR_NANOS, MILLION, MINUTE_NANOS, THOUSAND
from .errors import RangeError

CALENDAR_UNIT_NAMES = frozenset(['year', 'years', 'month', 'months', 'week', 'weeks', 'day', 'days'])


class TimeUnit(Enum):
  """Units that have a fixed length in nanoseconds, largest first."""

  HOUR = 'hour'
  MINUTE = 'minute'
  SECOND = 'second'
  MILLISECOND = 'millisecond'
  MICROSECOND = 'microsecond'
  NANOSECOND = 'nanosecond'

  @property
  def nanoseconds(self) -> int:
    return _NANOSECONDS[self]

  @property
  def per_day(self) -> int:
    # Upper bound of the rounding increment when rounding an instant.
    return DAY_NANOS // _NANOSECONDS[self]

  @property
  def max_difference_increment(self) -> int:
    # Exclusive upper bound of the rounding increment for until() and since().
    return _MAX_DIFFERENCE_INCREMENTS[self]

  @property
  def plural(self) -> str:
    return self.value + 's'

  def is_larger_than(self, other: Self) -> bool:
    return self.nanoseconds > other.nanoseconds

  @classmethod
  def larger_of(cls, one: Self, two: Self) -> Self:
    return one if one.nanoseconds >= two.nanoseconds else two

  @classmethod
  def build(cls, name: str) -> Self:
    singular = name[:-1] if name.endswith('s') else name
    try:
      return cls(singular)
    except ValueError:
      pass

    if name in CALENDAR_UNIT_NAMES:
      raise RangeError(f'"{name}" is a calendar unit, expected a time unit from hour to nanosecond')
    raise RangeError(f'invalid unit "{name}", expected one of {", ".join(unit.value for unit in cls)}')


_NANOSECONDS: dict[TimeUnit, int] = {
    TimeUnit.HOUR: HOUR_NANOS,
    TimeUnit.MINUTE: MINUTE_NANOS,
    TimeUnit.SECOND: BILLION,
    TimeUnit.MILLISECOND: MILLION,
    TimeUnit.MICROSECOND: THOUSAND,
    TimeUnit.NANOSECOND: 1,
}

_MAX_DIFFERENCE_INCREMENTS: dict[TimeUnit, int] = {
    TimeUnit.HOUR: 24,
    TimeUnit.MINUTE: 60,
    TimeUnit.SECOND: 60,
    TimeUnit.MILLISECOND: 1000,
    TimeUnit.MICROSECOND: 1000,
    TimeUnit.NANOSECOND: 1000,
}
