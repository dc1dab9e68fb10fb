from collections.abc import Mapping
from dataclasses import astuple, dataclass, fields
from typing import Any, ClassVar, Self

from jsonschema import Draft202012Validator, ValidationError

from .bigintmath import BILLION, HOUR_NANOS, MILLION, MINUTE_NANOS, THOUSAND, divmod_trunc
from .errors import RangeError, UsageError


@dataclass(frozen=True, kw_only=True)
class Duration:
  """A signed span split into calendar and time components.

  Instants only ever read the time components. The calendar components exist so that a duration-like value coming
  from a calendar-aware caller can be rejected with a precise error instead of being silently misread.
  """

  years: int = 0
  months: int = 0
  weeks: int = 0
  days: int = 0
  hours: int = 0
  minutes: int = 0
  seconds: int = 0
  milliseconds: int = 0
  microseconds: int = 0
  nanoseconds: int = 0

  def __post_init__(self) -> None:
    for field in fields(self):
      value = getattr(self, field.name)
      if isinstance(value, bool) or not isinstance(value, int):
        raise UsageError(f'expected "{field.name}" to be an int, got {type(value).__name__}')

    signs = {1 if value > 0 else -1 for value in astuple(self) if value != 0}
    if len(signs) > 1:
      raise RangeError(f'mixed-sign values not allowed as duration fields, got {astuple(self)}')

  @property
  def sign(self) -> int:
    for value in astuple(self):
      if value != 0:
        return 1 if value > 0 else -1
    return 0

  def is_zero(self) -> bool:
    return self.sign == 0

  def has_calendar_units(self) -> bool:
    return any([self.years, self.months, self.weeks, self.days])

  def negated(self) -> Self:
    return self.__class__(**{field.name: -getattr(self, field.name) for field in fields(self)})

  def abs(self) -> Self:
    return self.negated() if self.sign < 0 else self

  def time_nanoseconds(self) -> int:
    total = self.nanoseconds
    total += self.microseconds * THOUSAND
    total += self.milliseconds * MILLION
    total += self.seconds * BILLION
    total += self.minutes * MINUTE_NANOS
    total += self.hours * HOUR_NANOS
    return total

  def __neg__(self) -> Self:
    return self.negated()

  def __str__(self) -> str:
    magnitude = self.abs()
    date_part = ''.join(f'{value}{designator}' for value, designator in [
        (magnitude.years, 'Y'),
        (magnitude.months, 'M'),
        (magnitude.weeks, 'W'),
        (magnitude.days, 'D'),
    ] if value != 0)

    subsecond_ns = magnitude.milliseconds * MILLION + magnitude.microseconds * THOUSAND + magnitude.nanoseconds
    whole_seconds, fraction_ns = divmod_trunc(magnitude.seconds * BILLION + subsecond_ns, BILLION)
    time_part = ''.join(f'{value}{designator}' for value, designator in [
        (magnitude.hours, 'H'),
        (magnitude.minutes, 'M'),
    ] if value != 0)
    if whole_seconds != 0 or fraction_ns != 0 or (date_part == '' and time_part == ''):
      fraction = '{:09d}'.format(fraction_ns).rstrip('0')
      time_part += f'{whole_seconds}{"." + fraction if fraction else ""}S'

    sign = '-' if self.sign < 0 else ''
    return f'{sign}P{date_part}{"T" + time_part if time_part else ""}'

  @classmethod
  def build(cls, duration_like: Any) -> Self:
    if isinstance(duration_like, Duration):
      return duration_like
    if not isinstance(duration_like, Mapping):
      raise UsageError(f'expected a Duration or a mapping of duration fields, got {type(duration_like).__name__}')

    try:
      _DURATION_LIKE_VALIDATOR.validate(dict(duration_like))
    except ValidationError as e:
      raise RangeError(f'invalid duration-like value {dict(duration_like)}: {e.message}') from e
    return cls(**duration_like)

  ZERO: ClassVar[Self]


_DURATION_LIKE_VALIDATOR = Draft202012Validator({
    'type': 'object',
    'properties': {field.name: {
        'type': 'integer'
    } for field in fields(Duration)},
    'additionalProperties': False,
    'minProperties': 1,
})
Draft202012Validator.check_schema(_DURATION_LIKE_VALIDATOR.schema)

Duration.ZERO = Duration()
