from absl import logging

from .bigintmath import ONE, TWO, ZERO, abs_, compare, divmod_trunc, is_even
from .errors import RangeError
from .roundingmode import RoundingMode, UnsignedRoundingMode
from .timeunit import TimeUnit

ROUNDING_INCREMENT_MAX = 10**9


def apply_unsigned_rounding_mode(r1: int, r2: int, cmp: int, even: bool, mode: UnsignedRoundingMode) -> int:
  """Picks between the lower candidate r1 and the upper candidate r2.

  cmp compares the distance to r1 against half the distance between r1 and r2: negative when r1 is nearer, positive
  when r2 is nearer, zero on a tie.
  """
  if mode is UnsignedRoundingMode.ZERO:
    return r1
  if mode is UnsignedRoundingMode.INFINITY:
    return r2
  if cmp < 0:
    return r1
  if cmp > 0:
    return r2
  if mode is UnsignedRoundingMode.HALF_ZERO:
    return r1
  if mode is UnsignedRoundingMode.HALF_INFINITY:
    return r2
  return r1 if even else r2


def round_to_increment(quantity: int, increment: int, mode: RoundingMode) -> int:
  """Rounds a signed magnitude to a multiple of increment.

  Modes act on the magnitude: halfExpand sends -1500 to -2000 at increment 1000. Used for durations.
  """
  quotient, remainder = divmod_trunc(quantity, increment)
  if remainder == ZERO:
    return quantity

  is_negative = quantity < ZERO
  r1 = abs_(quotient)
  r2 = r1 + ONE
  cmp = compare(abs_(remainder * TWO), increment)
  rounded = apply_unsigned_rounding_mode(r1, r2, cmp, is_even(r1), mode.unsigned(is_negative))
  return increment * (-rounded if is_negative else rounded)


def round_to_increment_as_if_positive(quantity: int, increment: int, mode: RoundingMode) -> int:
  """Rounds a point on the number line to a multiple of increment.

  Unlike round_to_increment(), the direction of every mode is fixed on the line itself, so halfExpand breaks ties
  toward positive infinity regardless of the sign: -1500 becomes -1000 at increment 1000. Used for instants.
  """
  quotient, remainder = divmod_trunc(quantity, increment)
  if remainder == ZERO:
    return quantity

  if quantity < ZERO:
    r1, r2 = quotient - ONE, quotient
    # The distance to r1 is |increment| - |remainder|, so the comparison flips.
    cmp = -compare(abs_(remainder * TWO), increment)
  else:
    r1, r2 = quotient, quotient + ONE
    cmp = compare(abs_(remainder * TWO), increment)
  rounded = apply_unsigned_rounding_mode(r1, r2, cmp, is_even(r1), mode.unsigned(False))
  return rounded * increment


def validate_rounding_increment(increment: int, dividend: int, inclusive: bool) -> None:
  maximum = dividend if inclusive else dividend - 1
  if not 1 <= increment <= maximum:
    raise RangeError(f'rounding increment must be at least 1 and at most {maximum}, got {increment}')
  if dividend % increment != 0:
    raise RangeError(f'rounding increment {increment} must divide evenly into {dividend}')


def round_epoch_nanoseconds(epoch_ns: int, increment: int, unit: TimeUnit, mode: RoundingMode) -> int:
  increment_ns = unit.nanoseconds * increment
  rounded = round_to_increment_as_if_positive(epoch_ns, increment_ns, mode)
  logging.debug(f'Rounded epoch nanoseconds. {epoch_ns=}, {increment_ns=}, {mode=}, {rounded=}')
  return rounded
