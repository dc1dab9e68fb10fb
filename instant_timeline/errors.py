class UsageError(TypeError):
  """A required argument is missing, or an argument or receiver has the wrong type."""


class RangeError(ValueError):
  """A value lies outside the range an operation accepts.

  Raised for epoch nanoseconds beyond the timeline radius, rounding increments that do not fit the unit, unknown
  unit or rounding mode names, and fractional second digits outside 0..9.
  """
