import math
import operator
from dataclasses import dataclass
from typing import Any, ClassVar, Literal, NoReturn, Self, overload

from .bigintmath import MILLION, compare, floor_div
from .bounds import NS_MAX, NS_MIN, validate_epoch_nanoseconds
from .difference import difference_instant
from .duration import Duration
from .errors import RangeError, UsageError
from .isoformat import format_epoch_nanoseconds
from .options import resolve_rounding_options, resolve_string_precision
from .rounding import round_epoch_nanoseconds

# Set only by __init__, so an Instant conjured through object.__new__() is told apart from a validated one.
_BRAND = object()
_MISSING: Any = object()


@dataclass(frozen=True, init=False, eq=False)
class Instant:
  """A point on the UTC timeline with nanosecond resolution.

  The value is an exact count of nanoseconds since 1970-01-01T00:00:00Z and is limited to 10**8 days either side of
  it. Instants are immutable; add(), subtract() and round() all return a new Instant.
  """

  epoch_ns: int

  def __init__(self, epoch_ns: int = _MISSING) -> None:  # type: ignore[assignment]
    if epoch_ns is _MISSING:
      raise UsageError('missing argument: epoch_ns is required')
    if isinstance(epoch_ns, bool):
      raise UsageError('expected epoch_ns to be an int, got bool')
    try:
      epoch_ns = operator.index(epoch_ns)
    except TypeError as e:
      raise UsageError(f'expected epoch_ns to be an int, got {type(epoch_ns).__name__}') from e

    object.__setattr__(self, 'epoch_ns', int(validate_epoch_nanoseconds(epoch_ns)))
    object.__setattr__(self, '_brand', _BRAND)

  def _check_receiver(self) -> None:
    if getattr(self, '_brand', None) is not _BRAND:
      raise UsageError(f'receiver is not a validated {Instant.__name__}')

  @classmethod
  def _check_instant(cls, value: Any, name: str) -> Self:
    if not isinstance(value, cls):
      raise UsageError(f'expected "{name}" to be an {Instant.__name__}, got {type(value).__name__}')
    value._check_receiver()
    return value

  @classmethod
  def from_epoch_nanoseconds(cls, epoch_ns: int) -> Self:
    return cls(epoch_ns)

  @classmethod
  def from_epoch_milliseconds(cls, epoch_ms: int | float) -> Self:
    if isinstance(epoch_ms, bool) or not isinstance(epoch_ms, int | float):
      raise UsageError(f'expected epoch_ms to be a number, got {type(epoch_ms).__name__}')
    if isinstance(epoch_ms, float):
      if not math.isfinite(epoch_ms) or not epoch_ms.is_integer():
        raise RangeError(f'expected epoch_ms to be an integral number, got {epoch_ms}')
      epoch_ms = int(epoch_ms)
    return cls(epoch_ms * MILLION)

  @property
  def epoch_nanoseconds(self) -> int:
    self._check_receiver()
    return self.epoch_ns  # type: ignore[return-value]

  @property
  def epoch_milliseconds(self) -> int:
    # Floor, so that 1969-12-31T23:59:59.9995Z reads as -1 and not 0.
    return floor_div(self.epoch_nanoseconds, MILLION)

  def _add_duration(self, sign: Literal[-1, 1], duration_like: Any) -> Self:
    self._check_receiver()
    duration = Duration.build(duration_like)
    if duration.has_calendar_units():
      raise RangeError(f'an {Instant.__name__} cannot be shifted by years, months, weeks or days, got {duration}')
    return self.__class__(self.epoch_nanoseconds + sign * duration.time_nanoseconds())

  def add(self, duration_like: Duration | dict[str, int]) -> Self:
    return self._add_duration(1, duration_like)

  def subtract(self, duration_like: Duration | dict[str, int]) -> Self:
    return self._add_duration(-1, duration_like)

  def until(self, other: 'Instant', options: dict[str, Any] | None = None) -> Duration:
    self._check_receiver()
    return difference_instant('until', self, self._check_instant(other, 'other'), options)

  def since(self, other: 'Instant', options: dict[str, Any] | None = None) -> Duration:
    self._check_receiver()
    return difference_instant('since', self, self._check_instant(other, 'other'), options)

  def round(self, options: str | dict[str, Any]) -> Self:
    self._check_receiver()
    resolved = resolve_rounding_options(options)
    rounded_ns = round_epoch_nanoseconds(self.epoch_nanoseconds, resolved.rounding_increment, resolved.smallest_unit,
                                         resolved.rounding_mode)
    return self.__class__(rounded_ns)

  def equals(self, other: 'Instant') -> bool:
    self._check_receiver()
    return self.epoch_nanoseconds == self._check_instant(other, 'other').epoch_nanoseconds

  @staticmethod
  def compare(one: 'Instant', two: 'Instant') -> Literal[-1, 0, 1]:
    one = Instant._check_instant(one, 'one')
    two = Instant._check_instant(two, 'two')
    return compare(one.epoch_nanoseconds, two.epoch_nanoseconds)

  def _compare_to(self, other: object) -> int | None:
    self._check_receiver()
    if not isinstance(other, Instant):
      return None
    return Instant.compare(self, other)

  def __eq__(self, other: object) -> bool:
    result = self._compare_to(other)
    return NotImplemented if result is None else result == 0

  def __lt__(self, other: object) -> bool:
    result = self._compare_to(other)
    return NotImplemented if result is None else result < 0

  def __le__(self, other: object) -> bool:
    result = self._compare_to(other)
    return NotImplemented if result is None else result <= 0

  def __gt__(self, other: object) -> bool:
    result = self._compare_to(other)
    return NotImplemented if result is None else result > 0

  def __ge__(self, other: object) -> bool:
    result = self._compare_to(other)
    return NotImplemented if result is None else result >= 0

  def __hash__(self) -> int:
    return hash(self.epoch_nanoseconds)

  # Copies and unpickled values are rebuilt through __init__, which brands them again.
  def __reduce__(self) -> tuple[type[Self], tuple[int]]:
    return self.__class__, (self.epoch_nanoseconds,)

  def __copy__(self) -> Self:
    return self

  def __deepcopy__(self, memo: dict[int, Any]) -> Self:
    return self

  def to_string(self, options: dict[str, Any] | None = None) -> str:
    self._check_receiver()
    resolved = resolve_string_precision(options)
    rounded_ns = round_epoch_nanoseconds(self.epoch_nanoseconds, resolved.increment, resolved.unit,
                                         resolved.rounding_mode)
    return format_epoch_nanoseconds(validate_epoch_nanoseconds(rounded_ns), resolved.precision)

  def to_json(self) -> str:
    self._check_receiver()
    return format_epoch_nanoseconds(self.epoch_nanoseconds, 'auto')

  def __str__(self) -> str:
    return self.to_string()

  @overload
  def __sub__(self, other: Duration) -> Self:
    ...

  @overload
  def __sub__(self, other: 'Instant') -> Duration:
    ...

  def __sub__(self, other: object) -> Self | Duration:
    """Shifts back by a Duration, or measures the span from another Instant: a - b is b.until(a)."""
    if isinstance(other, Duration):
      return self.subtract(other)
    if isinstance(other, Instant):
      return other.until(self)
    return NotImplemented

  def __add__(self, other: object) -> Self:
    if isinstance(other, Duration):
      return self.add(other)
    return NotImplemented

  def _refuse_number(self) -> NoReturn:
    raise UsageError(f'use epoch_nanoseconds or compare() to read an {Instant.__name__} as a number')

  def __int__(self) -> NoReturn:
    self._refuse_number()

  def __float__(self) -> NoReturn:
    self._refuse_number()

  def __index__(self) -> NoReturn:
    self._refuse_number()

  MAX: ClassVar[Self]
  MIN: ClassVar[Self]
  EPOCH: ClassVar[Self]


Instant.MAX = Instant(NS_MAX)
Instant.MIN = Instant(NS_MIN)
Instant.EPOCH = Instant(0)
