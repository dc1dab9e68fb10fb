from typing import Literal

ZERO = 0
ONE = 1
TWO = 2
THOUSAND = 10**3
MILLION = 10**6
BILLION = 10**9
MINUTE_NANOS = 60 * BILLION
HOUR_NANOS = 60 * MINUTE_NANOS
DAY_NANOS = 24 * HOUR_NANOS


def _check_divisor(y: int) -> None:
  if y == ZERO:
    raise ZeroDivisionError('division by zero')


def compare(x: int, y: int) -> Literal[-1, 0, 1]:
  if x < y:
    return -1
  if x > y:
    return 1
  return 0


def abs_(x: int) -> int:
  return -x if x < ZERO else x


def is_even(x: int) -> bool:
  return x % TWO == ZERO


def divmod_trunc(x: int, y: int) -> tuple[int, int]:
  """Divides rounding the quotient toward zero.

  The remainder carries the sign of the dividend, so `quotient * y + remainder == x` always holds. Python's builtin
  divmod() floors instead, which is the wrong answer whenever the operand signs differ.
  """
  _check_divisor(y)
  quotient = abs_(x) // abs_(y)
  if (x < ZERO) != (y < ZERO):
    quotient = -quotient
  return quotient, x - quotient * y


def floor_div(x: int, y: int) -> int:
  quotient, remainder = divmod_trunc(x, y)
  if remainder != ZERO and (x < ZERO) != (y < ZERO):
    quotient -= ONE
  return quotient


def non_negative_divmod(x: int, y: int) -> tuple[int, int]:
  """Like divmod_trunc() but the remainder always lies in [0, |y|)."""
  quotient, remainder = divmod_trunc(x, y)
  if remainder < ZERO:
    if y < ZERO:
      quotient += ONE
    else:
      quotient -= ONE
    remainder += abs_(y)
  return quotient, remainder
