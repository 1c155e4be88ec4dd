"""Exceptions raised by :mod:`bigrational`."""


class RationalError(Exception):
    """Base class for every error raised by this package."""


class InvalidArgumentError(RationalError, ValueError):
    """An argument violates the invariants of :class:`~bigrational.Rational`."""


class ZeroDenominatorError(InvalidArgumentError, ZeroDivisionError):
    """A fraction was built with a zero denominator.

    Also raised when dividing by a zero :class:`~bigrational.Rational`, since
    division is built on the same constructor check.
    """

    def __init__(self, message: str = "denominator must be non-zero") -> None:
        super().__init__(message)


class RationalFormatError(RationalError, ValueError):
    """Text could not be parsed as ``"<numerator> / <denominator>"``."""


class NullArgumentError(RationalError, TypeError):
    """A required operand was ``None``."""

    def __init__(self, name: str) -> None:
        super().__init__(f"{name} must not be None")
        self.name = name
