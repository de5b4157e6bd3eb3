"""
Error taxonomy. Everything raised on purpose by the package derives from
`StatisticsError`, and each class also subclasses the builtin a caller
would naturally catch for that kind of failure.
"""


class StatisticsError(Exception):
    """Base class for all winstats errors."""


class InvalidSize(StatisticsError, ValueError):
    """A window size below 1 was requested."""

    def __init__(self, size):
        self.size = size
        super().__init__(f"strange size: {size!r} (must be >= 1)")


class LengthMismatch(StatisticsError, ValueError):
    """Two vectors that must be paired have different lengths."""

    def __init__(self, kind: str, size1: int, size2: int):
        self.size1 = size1
        self.size2 = size2
        super().__init__(
            f"the two vectors in a {kind} object must be the same length ({size1} != {size2})"
        )


class DegenerateStatistic(StatisticsError, ArithmeticError):
    """An undefined statistic was read as a number."""


class NotScalar(StatisticsError, TypeError):
    """A result that has no single-number form was used as one."""


class DivideByZero(StatisticsError, ZeroDivisionError):
    """Raised by `LeastSquareFit.x_given_y` when the fitted slope is zero."""
