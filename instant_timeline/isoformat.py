"""UTC ISO-8601 rendering of epoch nanoseconds.

datetime only covers years 1 through 9999, while the timeline reaches from year -271821 to +275760, so the date is
derived directly from the day count on the proleptic Gregorian calendar.
"""

from typing import Literal

from .bigintmath import BILLION, DAY_NANOS, HOUR_NANOS, MINUTE_NANOS, non_negative_divmod
from .errors import RangeError

Precision = Literal['auto', 'minute', 0, 1, 2, 3, 4, 5, 6, 7, 8, 9]

_DAYS_PER_ERA = 146097


def civil_from_days(epoch_days: int) -> tuple[int, int, int]:
  """Converts days since 1970-01-01 to (year, month, day).

  http://howardhinnant.github.io/date_algorithms.html#civil_from_days
  """
  # Eras are 400-year cycles starting on 0000-03-01.
  era, day_of_era = non_negative_divmod(epoch_days + 719468, _DAYS_PER_ERA)
  year_of_era = (day_of_era - day_of_era // 1460 + day_of_era // 36524 - day_of_era // 146096) // 365
  day_of_year = day_of_era - (365 * year_of_era + year_of_era // 4 - year_of_era // 100)
  shifted_month = (5 * day_of_year + 2) // 153
  day = day_of_year - (153 * shifted_month + 2) // 5 + 1
  month = shifted_month + 3 if shifted_month < 10 else shifted_month - 9
  year = year_of_era + era * 400 + (1 if month <= 2 else 0)
  return year, month, day


def format_year(year: int) -> str:
  if 0 <= year <= 9999:
    return '{:04d}'.format(year)
  sign = '-' if year < 0 else '+'
  return sign + '{:06d}'.format(abs(year))


def format_fractional_seconds(subsecond_ns: int, precision: Precision) -> str:
  fraction = '{:09d}'.format(subsecond_ns)
  if precision == 'auto':
    fraction = fraction.rstrip('0')
  else:
    fraction = fraction[:precision]
  return '.' + fraction if fraction else ''


def format_epoch_nanoseconds(epoch_ns: int, precision: Precision = 'auto') -> str:
  if precision not in ('auto', 'minute') and not 0 <= precision <= 9:
    raise RangeError(f'fractional second digits must be "auto" or 0 through 9, got {precision}')

  epoch_days, time_ns = non_negative_divmod(epoch_ns, DAY_NANOS)
  year, month, day = civil_from_days(epoch_days)
  hour, time_ns = divmod(time_ns, HOUR_NANOS)
  minute, time_ns = divmod(time_ns, MINUTE_NANOS)
  second, subsecond_ns = divmod(time_ns, BILLION)

  result = f'{format_year(year)}-{month:02d}-{day:02d}T{hour:02d}:{minute:02d}'
  if precision != 'minute':
    result += f':{second:02d}' + format_fractional_seconds(subsecond_ns, precision)
  return result + 'Z'
