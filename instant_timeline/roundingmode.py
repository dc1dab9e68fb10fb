from enum import Enum
from typing import Self

from .errors import RangeError


class UnsignedRoundingMode(Enum):
  """A rounding mode with the sign of the operand already folded in."""

  ZERO = 'zero'
  INFINITY = 'infinity'
  HALF_ZERO = 'half-zero'
  HALF_INFINITY = 'half-infinity'
  HALF_EVEN = 'half-even'


class RoundingMode(Enum):
  CEIL = 'ceil'
  FLOOR = 'floor'
  EXPAND = 'expand'
  TRUNC = 'trunc'
  HALF_CEIL = 'halfCeil'
  HALF_FLOOR = 'halfFloor'
  HALF_EXPAND = 'halfExpand'
  HALF_TRUNC = 'halfTrunc'
  HALF_EVEN = 'halfEven'

  def negated(self) -> Self:
    """The mode that gives the mirrored result when applied to the negated operand."""
    return _NEGATED.get(self, self)

  def unsigned(self, is_negative: bool) -> UnsignedRoundingMode:
    return _UNSIGNED[self][1 if is_negative else 0]

  @classmethod
  def build(cls, name: str) -> Self:
    try:
      return cls(name)
    except ValueError:
      raise RangeError(f'invalid rounding mode "{name}", expected one of {", ".join(mode.value for mode in cls)}')


_NEGATED: dict[RoundingMode, RoundingMode] = {
    RoundingMode.CEIL: RoundingMode.FLOOR,
    RoundingMode.FLOOR: RoundingMode.CEIL,
    RoundingMode.HALF_CEIL: RoundingMode.HALF_FLOOR,
    RoundingMode.HALF_FLOOR: RoundingMode.HALF_CEIL,
}

# (positive operand, negative operand)
_UNSIGNED: dict[RoundingMode, tuple[UnsignedRoundingMode, UnsignedRoundingMode]] = {
    RoundingMode.CEIL: (UnsignedRoundingMode.INFINITY, UnsignedRoundingMode.ZERO),
    RoundingMode.FLOOR: (UnsignedRoundingMode.ZERO, UnsignedRoundingMode.INFINITY),
    RoundingMode.EXPAND: (UnsignedRoundingMode.INFINITY, UnsignedRoundingMode.INFINITY),
    RoundingMode.TRUNC: (UnsignedRoundingMode.ZERO, UnsignedRoundingMode.ZERO),
    RoundingMode.HALF_CEIL: (UnsignedRoundingMode.HALF_INFINITY, UnsignedRoundingMode.HALF_ZERO),
    RoundingMode.HALF_FLOOR: (UnsignedRoundingMode.HALF_ZERO, UnsignedRoundingMode.HALF_INFINITY),
    RoundingMode.HALF_EXPAND: (UnsignedRoundingMode.HALF_INFINITY, UnsignedRoundingMode.HALF_INFINITY),
    RoundingMode.HALF_TRUNC: (UnsignedRoundingMode.HALF_ZERO, UnsignedRoundingMode.HALF_ZERO),
    RoundingMode.HALF_EVEN: (UnsignedRoundingMode.HALF_EVEN, UnsignedRoundingMode.HALF_EVEN),
}
