from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Literal

from absl import logging
from jsonschema import Draft202012Validator, ValidationError

from .errors import RangeError, UsageError
from .isoformat import Precision
from .rounding import ROUNDING_INCREMENT_MAX, validate_rounding_increment
from .roundingmode import RoundingMode
from .timeunit import TimeUnit

DifferenceOperation = Literal['until', 'since']


@dataclass(frozen=True, kw_only=True)
class RoundingOptions:
  smallest_unit: TimeUnit
  rounding_increment: int
  rounding_mode: RoundingMode


@dataclass(frozen=True, kw_only=True)
class DifferenceSettings:
  largest_unit: TimeUnit
  smallest_unit: TimeUnit
  rounding_increment: int
  rounding_mode: RoundingMode


@dataclass(frozen=True, kw_only=True)
class StringPrecision:
  precision: Precision
  unit: TimeUnit
  increment: int
  rounding_mode: RoundingMode


def _validate(validator: Draft202012Validator, options: Any) -> dict[str, Any]:
  if options is None:
    return {}
  if not isinstance(options, Mapping):
    raise UsageError(f'expected options to be a mapping, got {type(options).__name__}')

  options = dict(options)
  try:
    validator.validate(options)
  except ValidationError as e:
    path = '.'.join(str(p) for p in e.absolute_path) or 'options'
    raise RangeError(f'invalid value for "{path}": {e.message}') from e
  return options


def _rounding_mode(options: dict[str, Any], fallback: RoundingMode) -> RoundingMode:
  if 'rounding_mode' not in options:
    return fallback
  return RoundingMode.build(options['rounding_mode'])


def resolve_rounding_options(options: Any) -> RoundingOptions:
  """Reads the options of Instant.round(), where a bare string names the smallest unit."""
  if options is None:
    raise UsageError('options parameter is required')
  if isinstance(options, str):
    options = {'smallest_unit': options}
  options = _validate(_ROUNDING_OPTIONS_VALIDATOR, options)

  increment = int(options.get('rounding_increment', 1))
  mode = _rounding_mode(options, RoundingMode.HALF_EXPAND)
  if 'smallest_unit' not in options:
    raise UsageError('smallest_unit is required')
  unit = TimeUnit.build(options['smallest_unit'])

  validate_rounding_increment(increment, unit.per_day, inclusive=True)
  return RoundingOptions(smallest_unit=unit, rounding_increment=increment, rounding_mode=mode)


def resolve_difference_settings(operation: DifferenceOperation, options: Any) -> DifferenceSettings:
  options = _validate(_DIFFERENCE_OPTIONS_VALIDATOR, options)

  largest_unit_name = options.get('largest_unit', 'auto')
  largest_unit = None if largest_unit_name == 'auto' else TimeUnit.build(largest_unit_name)

  increment = int(options.get('rounding_increment', 1))
  mode = _rounding_mode(options, RoundingMode.TRUNC)
  if operation == 'since':
    mode = mode.negated()

  smallest_unit = TimeUnit.build(options.get('smallest_unit', TimeUnit.NANOSECOND.value))

  if largest_unit is None:
    largest_unit = TimeUnit.larger_of(TimeUnit.SECOND, smallest_unit)
  if smallest_unit.is_larger_than(largest_unit):
    raise RangeError(f'largest unit {largest_unit.value} cannot be smaller than smallest unit {smallest_unit.value}')

  validate_rounding_increment(increment, smallest_unit.max_difference_increment, inclusive=False)

  settings = DifferenceSettings(largest_unit=largest_unit,
                                smallest_unit=smallest_unit,
                                rounding_increment=increment,
                                rounding_mode=mode)
  logging.debug(f'Resolved difference settings. {operation=}, {settings=}')
  return settings


def resolve_string_precision(options: Any) -> StringPrecision:
  options = _validate(_TO_STRING_OPTIONS_VALIDATOR, options)

  digits = options.get('fractional_second_digits', 'auto')
  mode = _rounding_mode(options, RoundingMode.TRUNC)
  smallest_unit = TimeUnit.build(options['smallest_unit']) if 'smallest_unit' in options else None
  if smallest_unit is TimeUnit.HOUR:
    raise RangeError('smallest unit must be a time unit other than "hour"')

  match smallest_unit:
    case TimeUnit.MINUTE:
      return StringPrecision(precision='minute', unit=TimeUnit.MINUTE, increment=1, rounding_mode=mode)
    case TimeUnit.SECOND:
      return StringPrecision(precision=0, unit=TimeUnit.SECOND, increment=1, rounding_mode=mode)
    case TimeUnit.MILLISECOND:
      return StringPrecision(precision=3, unit=TimeUnit.MILLISECOND, increment=1, rounding_mode=mode)
    case TimeUnit.MICROSECOND:
      return StringPrecision(precision=6, unit=TimeUnit.MICROSECOND, increment=1, rounding_mode=mode)
    case TimeUnit.NANOSECOND:
      return StringPrecision(precision=9, unit=TimeUnit.NANOSECOND, increment=1, rounding_mode=mode)

  # Only fractional_second_digits left to decide.
  if digits == 'auto':
    return StringPrecision(precision='auto', unit=TimeUnit.NANOSECOND, increment=1, rounding_mode=mode)
  digits = int(digits)
  if digits == 0:
    return StringPrecision(precision=0, unit=TimeUnit.SECOND, increment=1, rounding_mode=mode)
  if digits <= 3:
    return StringPrecision(precision=digits, unit=TimeUnit.MILLISECOND, increment=10**(3 - digits), rounding_mode=mode)
  if digits <= 6:
    return StringPrecision(precision=digits, unit=TimeUnit.MICROSECOND, increment=10**(6 - digits), rounding_mode=mode)
  return StringPrecision(precision=digits, unit=TimeUnit.NANOSECOND, increment=10**(9 - digits), rounding_mode=mode)


_UNIT_SCHEMA = {'type': 'string'}
_ROUNDING_INCREMENT_SCHEMA = {'type': 'integer', 'minimum': 1, 'maximum': ROUNDING_INCREMENT_MAX}
_ROUNDING_MODE_SCHEMA = {'type': 'string', 'enum': [mode.value for mode in RoundingMode]}

_ROUNDING_OPTIONS_VALIDATOR = Draft202012Validator({
    'type': 'object',
    'properties': {
        'smallest_unit': _UNIT_SCHEMA,
        'rounding_increment': _ROUNDING_INCREMENT_SCHEMA,
        'rounding_mode': _ROUNDING_MODE_SCHEMA,
    },
    'additionalProperties': False,
})
Draft202012Validator.check_schema(_ROUNDING_OPTIONS_VALIDATOR.schema)

_DIFFERENCE_OPTIONS_VALIDATOR = Draft202012Validator({
    'type': 'object',
    'properties': {
        'largest_unit': _UNIT_SCHEMA,
        'smallest_unit': _UNIT_SCHEMA,
        'rounding_increment': _ROUNDING_INCREMENT_SCHEMA,
        'rounding_mode': _ROUNDING_MODE_SCHEMA,
    },
    'additionalProperties': False,
})
Draft202012Validator.check_schema(_DIFFERENCE_OPTIONS_VALIDATOR.schema)

_TO_STRING_OPTIONS_VALIDATOR = Draft202012Validator({
    'type': 'object',
    'properties': {
        'smallest_unit': _UNIT_SCHEMA,
        'fractional_second_digits': {
            'anyOf': [
                {
                    'const': 'auto'
                },
                {
                    'type': 'integer',
                    'minimum': 0,
                    'maximum': 9
                },
            ]
        },
        'rounding_mode': _ROUNDING_MODE_SCHEMA,
    },
    'additionalProperties': False,
})
Draft202012Validator.check_schema(_TO_STRING_OPTIONS_VALIDATOR.schema)
