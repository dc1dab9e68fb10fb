import copy
import math
import operator
import pickle

from absl.testing import parameterized

from instant_timeline.bounds import NS_MAX, NS_MIN
from instant_timeline.duration import Duration
from instant_timeline.errors import RangeError, UsageError
from instant_timeline.instant import Instant
from instant_timeline.roundingmode import RoundingMode


def _forged_instant(epoch_ns: int) -> Instant:
  forged = object.__new__(Instant)
  object.__setattr__(forged, 'epoch_ns', epoch_ns)
  return forged


class TestInstantConstruction(parameterized.TestCase):

  @parameterized.parameters(NS_MIN, -1, 0, 1, NS_MAX)
  def test_validValue(self, epoch_ns: int):
    self.assertEqual(Instant(epoch_ns).epoch_nanoseconds, epoch_ns)

  @parameterized.parameters(NS_MIN - 1, NS_MAX + 1)
  def test_outOfRange_raises(self, epoch_ns: int):
    with self.assertRaises(RangeError):
      Instant(epoch_ns)

  def test_missingArgument_raises(self):
    with self.assertRaises(UsageError):
      Instant()

  @parameterized.parameters(1.0, 1.5, '1', True, None)
  def test_notInteger_raises(self, epoch_ns):
    with self.assertRaises(UsageError):
      Instant(epoch_ns)

  def test_usageError_isTypeError(self):
    with self.assertRaises(TypeError):
      Instant('0')

  def test_constants(self):
    self.assertEqual(Instant.MAX, Instant(NS_MAX))
    self.assertEqual(Instant.MIN, Instant(NS_MIN))
    self.assertEqual(Instant.EPOCH, Instant(0))

  def test_fromEpochNanoseconds(self):
    self.assertEqual(Instant.from_epoch_nanoseconds(123), Instant(123))

  @parameterized.parameters(-8_640_000_000_000_000, -1, 0, 1, 1_700_000_000_000, 8_640_000_000_000_000)
  def test_fromEpochMilliseconds_roundTrip(self, epoch_ms: int):
    instant = Instant.from_epoch_milliseconds(epoch_ms)
    self.assertEqual(instant.epoch_nanoseconds, epoch_ms * 10**6)
    self.assertEqual(instant.epoch_milliseconds, epoch_ms)

  def test_fromEpochMilliseconds_integralFloat(self):
    self.assertEqual(Instant.from_epoch_milliseconds(2.0), Instant(2_000_000))

  @parameterized.parameters(1.5, math.nan, math.inf, -math.inf, 8_640_000_000_000_001)
  def test_fromEpochMilliseconds_invalid_raisesRangeError(self, epoch_ms):
    with self.assertRaises(RangeError):
      Instant.from_epoch_milliseconds(epoch_ms)

  @parameterized.parameters('1', None, True)
  def test_fromEpochMilliseconds_notNumber_raisesUsageError(self, epoch_ms):
    with self.assertRaises(UsageError):
      Instant.from_epoch_milliseconds(epoch_ms)

  @parameterized.parameters(
      (-1, -1),
      (-500_000, -1),
      (-1_000_000, -1),
      (-1_000_001, -2),
      (0, 0),
      (999_999, 0),
      (1_000_000, 1),
      (NS_MIN, -8_640_000_000_000_000),
  )
  def test_epochMilliseconds_floors(self, epoch_ns: int, epoch_ms: int):
    self.assertEqual(Instant(epoch_ns).epoch_milliseconds, epoch_ms)


class TestInstantComparison(parameterized.TestCase):

  @parameterized.product(
      epoch_ns_1=[NS_MIN, -1, 0, 1, NS_MAX],
      epoch_ns_2=[NS_MIN, -1, 0, 1, NS_MAX],
  )
  def test_compare_preservesOrder(self, epoch_ns_1: int, epoch_ns_2: int):
    expected = (epoch_ns_1 > epoch_ns_2) - (epoch_ns_1 < epoch_ns_2)
    instant_1, instant_2 = Instant(epoch_ns_1), Instant(epoch_ns_2)

    self.assertEqual(Instant.compare(instant_1, instant_2), expected)
    self.assertEqual(Instant.compare(instant_2, instant_1), -expected)
    self.assertEqual(instant_1.equals(instant_2), expected == 0)
    self.assertEqual(instant_1 == instant_2, expected == 0)
    self.assertEqual(instant_1 < instant_2, expected < 0)
    self.assertEqual(instant_1 <= instant_2, expected <= 0)
    self.assertEqual(instant_1 > instant_2, expected > 0)
    self.assertEqual(instant_1 >= instant_2, expected >= 0)
    self.assertEqual(sorted([instant_2, instant_1]), [min(instant_1, instant_2), max(instant_1, instant_2)])

  def test_hash_followsEquality(self):
    self.assertEqual(hash(Instant(5)), hash(Instant(5)))
    self.assertLen({Instant(5), Instant(5), Instant(6)}, 2)

  def test_notEqualToInt(self):
    self.assertNotEqual(Instant(5), 5)

  @parameterized.parameters(5, None, '1970-01-01T00:00:00Z')
  def test_compare_notInstant_raises(self, other):
    with self.assertRaises(UsageError):
      Instant.compare(Instant(0), other)
    with self.assertRaises(UsageError):
      Instant.compare(other, Instant(0))
    with self.assertRaises(UsageError):
      Instant(0).equals(other)


class TestInstantReceiverCheck(parameterized.TestCase):

  @parameterized.parameters(
      lambda instant: instant.epoch_nanoseconds,
      lambda instant: instant.epoch_milliseconds,
      lambda instant: instant.add({'seconds': 1}),
      lambda instant: instant.subtract({'seconds': 1}),
      lambda instant: instant.round('second'),
      lambda instant: instant.equals(Instant(0)),
      lambda instant: instant.until(Instant(0)),
      lambda instant: instant.since(Instant(0)),
      lambda instant: instant.to_string(),
      lambda instant: instant.to_json(),
      lambda instant: Instant.compare(instant, Instant(0)),
      lambda instant: Instant(0).until(instant),
      lambda instant: instant == Instant(0),
      lambda instant: Instant(0) == instant,
      lambda instant: instant != Instant(5),
      lambda instant: instant < Instant(0),
      lambda instant: instant <= Instant(0),
      lambda instant: instant > Instant(0),
      lambda instant: instant >= Instant(0),
      lambda instant: instant == 5,
      hash,
  )
  def test_forgedInstant_raises(self, operation):
    with self.assertRaises(UsageError):
      operation(_forged_instant(5))

  @parameterized.parameters(5, NS_MAX + 1, None)
  def test_forgedInstant_comparison_raises(self, epoch_ns):
    with self.assertRaises(UsageError):
      _ = _forged_instant(epoch_ns) < Instant(0)
    with self.assertRaises(UsageError):
      _ = Instant(0) == _forged_instant(epoch_ns)

  def test_forgedWithoutValue_raises(self):
    with self.assertRaises(UsageError):
      _ = object.__new__(Instant) == Instant(0)


class TestInstantCopy(parameterized.TestCase):

  @parameterized.parameters(copy.copy, copy.deepcopy, lambda instant: pickle.loads(pickle.dumps(instant)))
  def test_copy_remainsUsable(self, duplicate):
    instant = Instant(5)
    duplicated = duplicate(instant)

    self.assertEqual(duplicated.epoch_nanoseconds, 5)
    self.assertEqual(duplicated, instant)
    self.assertEqual(duplicated.add({'nanoseconds': 1}), Instant(6))
    self.assertEqual(duplicated.until(instant), Duration())

  def test_copy_ofForgedInstant_raises(self):
    with self.assertRaises(UsageError):
      pickle.dumps(_forged_instant(5))

  def test_pickle_preservesBounds(self):
    for instant in (Instant.MIN, Instant.EPOCH, Instant.MAX):
      self.assertEqual(pickle.loads(pickle.dumps(instant)), instant)


class TestInstantNumericCoercion(parameterized.TestCase):

  @parameterized.parameters(int, float, operator.index)
  def test_coercion_raises(self, coerce):
    with self.assertRaises(UsageError):
      coerce(Instant(1))

  def test_asConstructorArgument_raises(self):
    with self.assertRaises(UsageError):
      Instant(Instant(1))  # type: ignore[arg-type]


class TestInstantArithmetic(parameterized.TestCase):

  @parameterized.parameters(
      (Instant(0), {'hours': 1}, Instant(3_600_000_000_000)),
      (Instant(0), Duration(minutes=-1), Instant(-60_000_000_000)),
      (Instant(10), Duration(nanoseconds=5), Instant(15)),
      (Instant(0), {'hours': 1, 'minutes': 1, 'seconds': 1, 'milliseconds': 1, 'microseconds': 1, 'nanoseconds': 1},
       Instant(3_661_001_001_001)),
      (Instant(NS_MAX - 1), {'nanoseconds': 1}, Instant(NS_MAX)),
      (Instant(0), {'hours': 2_400_000_000}, Instant(NS_MAX)),
  )
  def test_add(self, instant: Instant, duration_like, expected: Instant):
    self.assertEqual(instant.add(duration_like), expected)

  @parameterized.parameters(
      (Instant(0), {'hours': 1}, Instant(-3_600_000_000_000)),
      (Instant(0), Duration(minutes=-1), Instant(60_000_000_000)),
      (Instant(NS_MIN + 1), {'nanoseconds': 1}, Instant(NS_MIN)),
  )
  def test_subtract(self, instant: Instant, duration_like, expected: Instant):
    self.assertEqual(instant.subtract(duration_like), expected)

  def test_operators(self):
    self.assertEqual(Instant(0) + Duration(seconds=1), Instant(10**9))
    self.assertEqual(Instant(0) - Duration(seconds=1), Instant(-10**9))
    self.assertEqual(Instant(3_000_000_000) - Instant(0), Duration(seconds=3))
    self.assertEqual(Instant(0) - Instant(3_000_000_001), Duration(seconds=-3, nanoseconds=-1))

  def test_operators_unsupported_raise(self):
    with self.assertRaises(TypeError):
      Instant(0) + 1  # type: ignore[operator]
    with self.assertRaises(TypeError):
      Instant(0) - 1  # type: ignore[operator]

  def test_doesNotMutate(self):
    instant = Instant(0)
    instant.add({'seconds': 1})
    self.assertEqual(instant, Instant(0))

  @parameterized.parameters(
      ({'days': 1},),
      ({'weeks': 1},),
      ({'months': 1},),
      (Duration(years=1, hours=1),),
  )
  def test_calendarUnits_raise(self, duration_like):
    with self.assertRaises(RangeError):
      Instant(0).add(duration_like)
    with self.assertRaises(RangeError):
      Instant(0).subtract(duration_like)

  @parameterized.parameters(
      (Instant(NS_MAX), {'nanoseconds': 1}),
      (Instant(NS_MIN), {'nanoseconds': -1}),
      (Instant(0), {'hours': 2_400_000_001}),
  )
  def test_add_outOfRange_raises(self, instant: Instant, duration_like):
    with self.assertRaises(RangeError):
      instant.add(duration_like)

  @parameterized.parameters(({},), ({'hour': 1},), ({'hours': 1.5},))
  def test_add_invalidDurationLike_raisesRangeError(self, duration_like):
    with self.assertRaises(RangeError):
      Instant(0).add(duration_like)

  @parameterized.parameters(5, 'PT1H', None)
  def test_add_notDurationLike_raisesUsageError(self, duration_like):
    with self.assertRaises(UsageError):
      Instant(0).add(duration_like)


class TestInstantRound(parameterized.TestCase):

  @parameterized.parameters(
      (90_000_000_000, {'smallest_unit': 'hour'}, 0),
      (90_000_000_000, {'smallest_unit': 'minute'}, 120_000_000_000),
      (90_000_000_000, {'smallest_unit': 'minute', 'rounding_mode': 'trunc'}, 60_000_000_000),
      (1_500_000_000, 'second', 2_000_000_000),
      (1_500_000_000, 'seconds', 2_000_000_000),
      (1500, {'smallest_unit': 'microsecond', 'rounding_mode': 'halfExpand'}, 2000),
      (1500, {'smallest_unit': 'microsecond', 'rounding_mode': 'trunc'}, 1000),
      (-1500, {'smallest_unit': 'microsecond', 'rounding_mode': 'floor'}, -2000),
      (-1500, {'smallest_unit': 'microsecond', 'rounding_mode': 'halfExpand'}, -1000),
      (-1500, {'smallest_unit': 'microsecond', 'rounding_mode': 'ceil'}, -1000),
      (23 * 60 * 10**9, {'smallest_unit': 'minute', 'rounding_increment': 15}, 30 * 60 * 10**9),
      (13 * 3_600 * 10**9, {'smallest_unit': 'hour', 'rounding_increment': 24}, 86_400 * 10**9),
      (11 * 3_600 * 10**9, {'smallest_unit': 'hour', 'rounding_increment': 24}, 0),
      (NS_MAX - 1, {'smallest_unit': 'second', 'rounding_mode': 'ceil'}, NS_MAX),
      (NS_MIN + 1, {'smallest_unit': 'hour', 'rounding_mode': 'floor'}, NS_MIN),
  )
  def test_round(self, epoch_ns: int, options, expected_ns: int):
    self.assertEqual(Instant(epoch_ns).round(options), Instant(expected_ns))

  @parameterized.product(
      epoch_ns=[-1_234_567_890_123, -1, 0, 1_499_999_999, 987_654_321_987],
      smallest_unit=['hour', 'minute', 'second', 'millisecond', 'microsecond'],
      rounding_mode=[mode.value for mode in RoundingMode],
  )
  def test_round_idempotent(self, epoch_ns: int, smallest_unit: str, rounding_mode: str):
    options = {'smallest_unit': smallest_unit, 'rounding_mode': rounding_mode}
    rounded = Instant(epoch_ns).round(options)
    self.assertEqual(rounded.round(options), rounded)

  def test_round_missingOptions_raises(self):
    with self.assertRaises(UsageError):
      Instant(0).round(None)  # type: ignore[arg-type]
    with self.assertRaises(UsageError):
      Instant(0).round({})

  @parameterized.parameters(
      ({'smallest_unit': 'day'},),
      ({'smallest_unit': 'month'},),
      ({'smallest_unit': 'second', 'rounding_mode': 'sideways'},),
      ({'smallest_unit': 'hour', 'rounding_increment': 5},),
      ({'smallest_unit': 'hour', 'rounding_increment': 25},),
      ({'smallest_unit': 'millisecond', 'rounding_increment': 86_400_001},),
  )
  def test_round_invalidOptions_raises(self, options):
    with self.assertRaises(RangeError):
      Instant(0).round(options)


class TestInstantToString(parameterized.TestCase):

  @parameterized.parameters(
      (0, None, '1970-01-01T00:00:00Z'),
      (1, None, '1970-01-01T00:00:00.000000001Z'),
      (-1, None, '1969-12-31T23:59:59.999999999Z'),
      (1_500_000_000, {'fractional_second_digits': 0}, '1970-01-01T00:00:01Z'),
      (1_500_000_000, {'fractional_second_digits': 3}, '1970-01-01T00:00:01.500Z'),
      (1_560_000_000, {'fractional_second_digits': 1}, '1970-01-01T00:00:01.5Z'),
      (1_560_000_000, {'fractional_second_digits': 1, 'rounding_mode': 'halfExpand'}, '1970-01-01T00:00:01.6Z'),
      (0, {'fractional_second_digits': 9}, '1970-01-01T00:00:00.000000000Z'),
      (1_500_000_000, {'smallest_unit': 'minute'}, '1970-01-01T00:00Z'),
      (1_500_000_000, {'smallest_unit': 'second'}, '1970-01-01T00:00:01Z'),
      (1_500_000_000, {'smallest_unit': 'millisecond'}, '1970-01-01T00:00:01.500Z'),
      (-1, {'smallest_unit': 'second'}, '1969-12-31T23:59:59Z'),
      (59_999_999_999, {'smallest_unit': 'minute', 'rounding_mode': 'halfExpand'}, '1970-01-01T00:01Z'),
      (10**18, None, '2001-09-09T01:46:40Z'),
      (NS_MAX, None, '+275760-09-13T00:00:00Z'),
      (NS_MIN, None, '-271821-04-20T00:00:00Z'),
  )
  def test_toString(self, epoch_ns: int, options, expected: str):
    self.assertEqual(Instant(epoch_ns).to_string(options), expected)

  @parameterized.parameters(
      ({'smallest_unit': 'hour'},),
      ({'smallest_unit': 'day'},),
      ({'fractional_second_digits': 10},),
      ({'fractional_second_digits': 'x'},),
      ({'rounding_mode': 'nearest'},),
  )
  def test_toString_invalidOptions_raises(self, options):
    with self.assertRaises(RangeError):
      Instant(0).to_string(options)

  def test_str(self):
    self.assertEqual(str(Instant(1_500_000_000)), '1970-01-01T00:00:01.5Z')

  def test_toJson(self):
    self.assertEqual(Instant(1_500_000_000).to_json(), '1970-01-01T00:00:01.5Z')
    self.assertEqual(Instant(0).to_json(), '1970-01-01T00:00:00Z')
