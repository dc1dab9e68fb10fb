from typing import TYPE_CHECKING, Any

from absl import logging

from .bigintmath import abs_, divmod_trunc
from .duration import Duration
from .options import DifferenceOperation, resolve_difference_settings
from .rounding import round_to_increment
from .roundingmode import RoundingMode
from .timeunit import TimeUnit

if TYPE_CHECKING:
  from .instant import Instant


def round_time_nanoseconds(nanoseconds: int, increment: int, unit: TimeUnit, mode: RoundingMode) -> int:
  if unit is TimeUnit.NANOSECOND and increment == 1:
    return nanoseconds
  return round_to_increment(nanoseconds, unit.nanoseconds * increment, mode)


def balance_time_nanoseconds(nanoseconds: int, largest_unit: TimeUnit) -> Duration:
  """Splits nanoseconds into largest_unit and every smaller unit.

  largest_unit takes whatever is left over at its size, so it may exceed its usual range (90 minutes stays 90
  minutes with largest_unit=minute). Every nonzero component carries the sign of the input.
  """
  sign = -1 if nanoseconds < 0 else 1
  remaining = abs_(nanoseconds)
  components: dict[str, int] = {}
  for unit in TimeUnit:
    if unit.is_larger_than(largest_unit):
      continue
    quotient, remaining = divmod_trunc(remaining, unit.nanoseconds)
    components[unit.plural] = sign * quotient
  return Duration(**components)


def difference_instant(operation: DifferenceOperation, instant: 'Instant', other: 'Instant', options: Any) -> Duration:
  """Computes the span from instant to other for until(), or from other to instant for since().

  since() runs the same computation as until() with the rounding mode mirrored and the result negated, which makes
  a.since(b) equal to b.until(a) under every rounding mode.
  """
  settings = resolve_difference_settings(operation, options)

  delta = other.epoch_nanoseconds - instant.epoch_nanoseconds
  rounded = round_time_nanoseconds(delta, settings.rounding_increment, settings.smallest_unit, settings.rounding_mode)
  duration = balance_time_nanoseconds(rounded, settings.largest_unit)
  logging.debug(f'Computed difference. {operation=}, {delta=}, {rounded=}, {duration=}')

  return duration.negated() if operation == 'since' else duration
