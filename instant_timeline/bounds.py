from absl import logging

from .bigintmath import DAY_NANOS
from .errors import RangeError

# 10**8 days either side of 1970-01-01T00:00Z.
# -271821-04-20T00:00:00Z through +275760-09-13T00:00:00Z.
NS_MAX = DAY_NANOS * 10**8
NS_MIN = -NS_MAX


def is_valid_epoch_nanoseconds(epoch_ns: int) -> bool:
  return NS_MIN <= epoch_ns <= NS_MAX


def validate_epoch_nanoseconds(epoch_ns: int) -> int:
  if not is_valid_epoch_nanoseconds(epoch_ns):
    logging.debug(f'Rejected epoch nanoseconds. {epoch_ns=}')
    raise RangeError(f'value {epoch_ns} out of range, expected to be in range [{NS_MIN}, {NS_MAX}]')
  return epoch_ns
