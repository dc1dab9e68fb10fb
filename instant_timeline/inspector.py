from typing import Any

from absl import app, flags, logging

from .instant import Instant
from .roundingmode import RoundingMode
from .timeunit import TimeUnit

_EPOCH_NS = flags.DEFINE_integer(
    name='epoch_ns',
    default=None,
    help='Instant to inspect, in nanoseconds since 1970-01-01T00:00:00Z. '
    'Exactly one of --epoch_ns and --epoch_ms must be provided.',
)
_EPOCH_MS = flags.DEFINE_integer(
    name='epoch_ms',
    default=None,
    help='Instant to inspect, in milliseconds since 1970-01-01T00:00:00Z.',
)
_SMALLEST_UNIT = flags.DEFINE_enum(
    name='smallest_unit',
    default=None,
    enum_values=[unit.value for unit in TimeUnit],
    help='If provided, the instant is also rounded to a multiple of this unit.',
)
_ROUNDING_INCREMENT = flags.DEFINE_integer(
    name='rounding_increment',
    default=1,
    lower_bound=1,
    help='Number of smallest units to round to. Must divide evenly into one day.',
)
_ROUNDING_MODE = flags.DEFINE_enum(
    name='rounding_mode',
    default=None,
    enum_values=[mode.value for mode in RoundingMode],
    help='Rounding mode for --smallest_unit and --until_epoch_ns. '
    'Defaults to halfExpand when rounding and trunc when computing differences.',
)
_FRACTIONAL_SECOND_DIGITS = flags.DEFINE_string(
    name='fractional_second_digits',
    default='auto',
    help='Digits after the decimal point when printing instants: "auto" or 0 through 9.',
)
_UNTIL_EPOCH_NS = flags.DEFINE_integer(
    name='until_epoch_ns',
    default=None,
    help='If provided, the span from the inspected instant to this one is printed.',
)
_LARGEST_UNIT = flags.DEFINE_enum(
    name='largest_unit',
    default=None,
    enum_values=[unit.value for unit in TimeUnit],
    help='Largest unit of the span printed for --until_epoch_ns.',
)


class Inspector:

  def __init__(self) -> None:
    self._EPOCH_NS = _EPOCH_NS.value if _EPOCH_NS.present else _EPOCH_NS.default
    self._EPOCH_MS = _EPOCH_MS.value if _EPOCH_MS.present else _EPOCH_MS.default
    self._SMALLEST_UNIT = _SMALLEST_UNIT.value if _SMALLEST_UNIT.present else _SMALLEST_UNIT.default
    self._ROUNDING_INCREMENT = _ROUNDING_INCREMENT.value if _ROUNDING_INCREMENT.present else _ROUNDING_INCREMENT.default
    self._ROUNDING_MODE = _ROUNDING_MODE.value if _ROUNDING_MODE.present else _ROUNDING_MODE.default
    self._FRACTIONAL_SECOND_DIGITS = (_FRACTIONAL_SECOND_DIGITS.value
                                      if _FRACTIONAL_SECOND_DIGITS.present else _FRACTIONAL_SECOND_DIGITS.default)
    self._UNTIL_EPOCH_NS = _UNTIL_EPOCH_NS.value if _UNTIL_EPOCH_NS.present else _UNTIL_EPOCH_NS.default
    self._LARGEST_UNIT = _LARGEST_UNIT.value if _LARGEST_UNIT.present else _LARGEST_UNIT.default

  def _instant(self) -> Instant:
    if (self._EPOCH_NS is None) == (self._EPOCH_MS is None):
      raise app.UsageError('exactly one of --epoch_ns and --epoch_ms must be provided')
    if self._EPOCH_NS is not None:
      return Instant(self._EPOCH_NS)
    return Instant.from_epoch_milliseconds(self._EPOCH_MS)

  def _string_options(self) -> dict[str, Any]:
    digits = self._FRACTIONAL_SECOND_DIGITS
    if digits != 'auto':
      try:
        return {'fractional_second_digits': int(digits)}
      except ValueError as e:
        raise app.UsageError(f'--fractional_second_digits must be "auto" or 0 through 9, got {digits}') from e
    return {}

  def run(self) -> list[str]:
    instant = self._instant()
    string_options = self._string_options()
    lines = [
        f'instant: {instant.to_string(string_options)}',
        f'epoch_ns: {instant.epoch_nanoseconds}',
        f'epoch_ms: {instant.epoch_milliseconds}',
    ]

    if self._SMALLEST_UNIT is not None:
      round_options: dict[str, Any] = {
          'smallest_unit': self._SMALLEST_UNIT,
          'rounding_increment': self._ROUNDING_INCREMENT,
      }
      if self._ROUNDING_MODE is not None:
        round_options['rounding_mode'] = self._ROUNDING_MODE
      rounded = instant.round(round_options)
      logging.info(f'Rounded {instant.epoch_nanoseconds} to {rounded.epoch_nanoseconds}, {round_options=}')
      lines.append(f'rounded: {rounded.to_string(string_options)}')

    if self._UNTIL_EPOCH_NS is not None:
      other = Instant(self._UNTIL_EPOCH_NS)
      difference_options: dict[str, Any] = {}
      if self._LARGEST_UNIT is not None:
        difference_options['largest_unit'] = self._LARGEST_UNIT
      if self._SMALLEST_UNIT is not None:
        difference_options['smallest_unit'] = self._SMALLEST_UNIT
      if self._ROUNDING_MODE is not None:
        difference_options['rounding_mode'] = self._ROUNDING_MODE
      until = instant.until(other, difference_options)
      logging.info(f'Span from {instant} to {other} is {until}, {difference_options=}')
      lines.append(f'until: {until}')

    for line in lines:
      logging.debug(line)
    return lines
