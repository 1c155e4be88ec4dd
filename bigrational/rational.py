"""Exact rational numbers on top of Python's arbitrary-precision integers."""
from __future__ import annotations

import logging
import numbers
import operator
import re
from decimal import Decimal, localcontext
from fractions import Fraction
from typing import Any, Callable, Optional, Tuple, Union

import numpy as np

from .exceptions import NullArgumentError, RationalFormatError, ZeroDenominatorError

logger = logging.getLogger(__name__)

RationalLike = Union["Rational", numbers.Integral, Fraction]

DEFAULT_DECIMALS = 100
FRACTION_SEPARATOR = " / "

_INTEGER_FORMAT = re.compile(r"[-+]?[0-9]+")


def gcd(a: int, b: int) -> int:
    """Return the greatest common divisor of *a* and *b* using Euclid's algorithm."""
    while b != 0:
        a, b = b, a % b
    return abs(a)


def _sign_of(value: int) -> int:
    return (value > 0) - (value < 0)


def _ensure_int(value: Any, *, name: str) -> int:
    """Convert *value* to ``int`` when it represents an integer."""
    if isinstance(value, numbers.Integral):
        return int(value)
    raise TypeError(f"{name} must be an integer, got {type(value)!r}")


class Rational:
    """A fraction of two integers, always stored in lowest terms.

    The sign is kept apart from the magnitudes: ``numerator`` is never
    negative and ``denominator`` is always positive. Zero is ``0/1`` with a
    sign of ``0``. Instances are immutable; every operation returns a new
    value built through the normalizing constructor.
    """

    __slots__ = ("_sign", "_numerator", "_denominator")
    __array_priority__ = 1000.0  # Prefer Rational semantics in NumPy expressions.

    def __init__(
        self,
        numerator: Union[int, numbers.Integral] = 0,
        denominator: Union[int, numbers.Integral] = 1,
    ) -> None:
        num = _ensure_int(numerator, name="numerator")
        den = _ensure_int(denominator, name="denominator")
        if den == 0:
            raise ZeroDenominatorError()

        self._sign, self._numerator, self._denominator = self._normalize(num, den)

    # ------------------------------------------------------------------
    # Constructors
    @classmethod
    def from_int(cls, value: numbers.Integral) -> "Rational":
        """Return ``value / 1`` for any integral *value*, NumPy integers included."""
        return cls(_ensure_int(value, name="value"), 1)

    @classmethod
    def from_bigint(cls, value: int) -> "Rational":
        """Return ``value / 1`` for a built-in ``int``."""
        if not isinstance(value, int):
            raise TypeError(f"value must be an int, got {type(value)!r}")
        return cls(value, 1)

    @classmethod
    def from_fraction(cls, value: Fraction) -> "Rational":
        """Create a :class:`Rational` from :class:`fractions.Fraction`."""
        return cls(value.numerator, value.denominator)

    @classmethod
    def parse(cls, text: str) -> "Rational":
        """Parse ``"<numerator> / <denominator>"``; see :func:`parse`."""
        return parse(text)

    # ------------------------------------------------------------------
    # Properties and helpers
    @property
    def sign(self) -> int:
        return self._sign

    @property
    def numerator(self) -> int:
        """Reduced magnitude of the numerator; see :attr:`sign`."""
        return self._numerator

    @property
    def denominator(self) -> int:
        return self._denominator

    @property
    def signed_numerator(self) -> int:
        return self._sign * self._numerator

    def is_integer(self) -> bool:
        return self._denominator == 1

    def as_fraction(self) -> Fraction:
        """Return a :class:`Fraction` with the same value."""
        return Fraction(self.signed_numerator, self._denominator)

    def to_bigint(self) -> int:
        """Return the integer part, truncated toward zero."""
        return self._sign * (self._numerator // self._denominator)

    # ------------------------------------------------------------------
    # Named operations
    def add(self, other: RationalLike) -> "Rational":
        return add(self, other)

    def subtract(self, other: RationalLike) -> "Rational":
        return subtract(self, other)

    def multiply(self, other: RationalLike) -> "Rational":
        return multiply(self, other)

    def divide(self, other: RationalLike) -> "Rational":
        return divide(self, other)

    def absolute(self) -> "Rational":
        return absolute(self)

    def increment(self) -> "Rational":
        return increment(self)

    def decrement(self) -> "Rational":
        return decrement(self)

    def compare_to(self, other: Optional[RationalLike]) -> int:
        return compare_to(self, other)

    def equals(self, other: Any) -> bool:
        return equals(self, other)

    # ------------------------------------------------------------------
    # Numeric protocol
    def __float__(self) -> float:
        return self.signed_numerator / self._denominator

    def __int__(self) -> int:
        return self.to_bigint()

    def __bool__(self) -> bool:
        return self._sign != 0

    # ------------------------------------------------------------------
    # Representation
    def to_rational_string(self) -> str:
        """Render as ``"<numerator> / <denominator>"``, the inverse of :func:`parse`."""
        return f"{self.signed_numerator}{FRACTION_SEPARATOR}{self._denominator}"

    def to_string(self, decimals: int = DEFAULT_DECIMALS) -> str:
        """Render a decimal expansion with at most *decimals* fractional digits.

        Digits past *decimals* are truncated, not rounded. Expansions that
        terminate earlier are rendered exactly, without trailing zeros, and an
        integral value gets no decimal point at all.
        """
        decimals = _ensure_int(decimals, name="decimals")
        if decimals < 0:
            raise ValueError("decimals must be >= 0")

        parts = ["-"] if self._sign < 0 else []
        whole, remainder = divmod(self._numerator, self._denominator)
        parts.append(str(whole))
        if remainder == 0:
            return "".join(parts)

        parts.append(".")
        for _ in range(decimals):
            digit, remainder = divmod(remainder * 10, self._denominator)
            parts.append(str(digit))
            if remainder == 0:
                break
        return "".join(parts)

    def __repr__(self) -> str:
        return f"Rational({self.signed_numerator}, {self._denominator})"

    def __str__(self) -> str:
        return self.to_string()

    def __format__(self, format_spec: str) -> str:
        if format_spec == "":
            return str(self)
        if format_spec in ("r", "R"):
            return self.to_rational_string()
        precision = re.fullmatch(r"\.([0-9]+)", format_spec)
        if precision is not None:
            return self.to_string(int(precision.group(1)))
        try:
            value = float(self)
        except OverflowError:
            return format(self._as_decimal(), format_spec)
        try:
            return format(value, format_spec)
        except (ValueError, TypeError):
            return format(str(self), format_spec)

    def _as_decimal(self) -> Decimal:
        # Enough significant digits for both magnitudes plus the default expansion.
        with localcontext() as ctx:
            ctx.prec = len(str(self._numerator)) + len(str(self._denominator)) + DEFAULT_DECIMALS
            return Decimal(self.signed_numerator) / Decimal(self._denominator)

    # ------------------------------------------------------------------
    # Internal helpers
    @staticmethod
    def _normalize(num: int, den: int) -> Tuple[int, int, int]:
        sign = _sign_of(num) * _sign_of(den)
        num, den = abs(num), abs(den)
        divisor = gcd(num, den)
        return sign, num // divisor, den // divisor

    def _binary_operation(self, other: Any, op: Callable, *, reflected: bool = False):
        def apply(value: Any) -> Any:
            value = rationalize(value)
            return op(value, self) if reflected else op(self, value)

        if isinstance(other, np.ndarray):
            return np.vectorize(apply, otypes=[object])(other)
        if isinstance(other, (list, tuple)):
            return np.array([apply(item) for item in other], dtype=object)
        if _coerce_scalar(other) is None:
            return NotImplemented
        return apply(other)

    def _coerce_power(self, value: Any) -> int:
        if isinstance(value, numbers.Integral):
            return int(value)
        if isinstance(value, Rational):
            if not value.is_integer():
                raise ValueError("Exponent must be an integer")
            return value.signed_numerator
        if isinstance(value, np.generic):
            return self._coerce_power(value.item())
        if isinstance(value, numbers.Real):
            if not float(value).is_integer():
                raise ValueError("Exponent must be an integer")
            return int(value)
        raise TypeError("Unsupported exponent type")

    # ------------------------------------------------------------------
    # Arithmetic operators
    def __add__(self, other: Any) -> Any:
        return self._binary_operation(other, add)

    def __radd__(self, other: Any) -> Any:
        return self._binary_operation(other, add, reflected=True)

    def __sub__(self, other: Any) -> Any:
        return self._binary_operation(other, subtract)

    def __rsub__(self, other: Any) -> Any:
        return self._binary_operation(other, subtract, reflected=True)

    def __mul__(self, other: Any) -> Any:
        return self._binary_operation(other, multiply)

    def __rmul__(self, other: Any) -> Any:
        return self._binary_operation(other, multiply, reflected=True)

    def __truediv__(self, other: Any) -> Any:
        return self._binary_operation(other, divide)

    def __rtruediv__(self, other: Any) -> Any:
        return self._binary_operation(other, divide, reflected=True)

    def __pow__(self, exponent: Any) -> Any:
        if isinstance(exponent, np.ndarray):
            return np.vectorize(lambda x: self.__pow__(x), otypes=[object])(exponent)
        power = self._coerce_power(exponent)
        if power >= 0:
            return Rational(self.signed_numerator ** power, self._denominator ** power)
        # A zero base lands a zero denominator and fails in the constructor.
        return Rational(self._denominator ** -power, self.signed_numerator ** -power)

    def __neg__(self) -> "Rational":
        return Rational(-self.signed_numerator, self._denominator)

    def __pos__(self) -> "Rational":
        return self

    def __abs__(self) -> "Rational":
        return absolute(self)

    # ------------------------------------------------------------------
    # Comparisons
    def _compare(self, other: Any, op: Callable[[int, int], bool]) -> Any:
        if _coerce_scalar(other) is None:
            return NotImplemented
        return op(compare_to(self, other), 0)

    def __eq__(self, other: Any) -> Any:
        if isinstance(other, np.ndarray):
            return NotImplemented
        return equals(self, other)

    def __lt__(self, other: Any) -> Any:
        return self._compare(other, operator.lt)

    def __le__(self, other: Any) -> Any:
        return self._compare(other, operator.le)

    def __gt__(self, other: Any) -> Any:
        return self._compare(other, operator.gt)

    def __ge__(self, other: Any) -> Any:
        return self._compare(other, operator.ge)

    def __hash__(self) -> int:
        # Matches int and Fraction, both of which compare equal to Rational.
        return hash(self.as_fraction())

    # ------------------------------------------------------------------
    # NumPy interoperability
    _UFUNC_DISPATCH = {
        np.add: operator.add,
        np.subtract: operator.sub,
        np.multiply: operator.mul,
        np.divide: operator.truediv,
        np.true_divide: operator.truediv,
        np.negative: operator.neg,
        np.positive: operator.pos,
        np.absolute: abs,
        np.power: operator.pow,
        np.equal: lambda a, b: _equal_operands(a, b),
        np.not_equal: lambda a, b: not _equal_operands(a, b),
        np.less: operator.lt,
        np.less_equal: operator.le,
        np.greater: operator.gt,
        np.greater_equal: operator.ge,
    }

    def __array_ufunc__(self, ufunc, method, *inputs, **kwargs):
        if method != "__call__":
            return NotImplemented
        if kwargs.get("out") is not None:
            raise NotImplementedError("`out` argument is not supported for Rational ufuncs")
        op = self._UFUNC_DISPATCH.get(ufunc)
        if op is None:
            return NotImplemented
        if ufunc in (np.equal, np.not_equal):
            # No coercion: operands that are not rational compare unequal.
            if any(isinstance(value, np.ndarray) for value in inputs):
                return np.vectorize(op, otypes=[object])(*inputs)
            return op(*inputs)

        coerced = []
        has_array = False
        for value in inputs:
            if isinstance(value, np.ndarray):
                coerced.append(np.vectorize(rationalize, otypes=[object])(value))
                has_array = True
            else:
                coerced.append(rationalize(value))
        if has_array:
            return np.vectorize(op, otypes=[object])(*coerced)
        return op(*coerced)


def _coerce_scalar(value: Any) -> Optional[Rational]:
    if isinstance(value, Rational):
        return value
    if isinstance(value, numbers.Integral):
        return Rational.from_int(value)
    if isinstance(value, Fraction):
        return Rational.from_fraction(value)
    return None


def rationalize(value: RationalLike) -> Rational:
    """Coerce an integer, :class:`Fraction` or :class:`Rational` to :class:`Rational`.

    Floats are rejected rather than approximated.
    """
    if value is None:
        raise NullArgumentError("value")
    rational = _coerce_scalar(value)
    if rational is None:
        raise TypeError(f"Cannot interpret {type(value)!r} as Rational")
    return rational


# ----------------------------------------------------------------------
# Arithmetic
def add(a: RationalLike, b: RationalLike) -> Rational:
    a, b = rationalize(a), rationalize(b)
    return Rational(
        a.signed_numerator * b.denominator + b.signed_numerator * a.denominator,
        a.denominator * b.denominator,
    )


def subtract(a: RationalLike, b: RationalLike) -> Rational:
    a, b = rationalize(a), rationalize(b)
    return Rational(
        a.signed_numerator * b.denominator - b.signed_numerator * a.denominator,
        a.denominator * b.denominator,
    )


def multiply(a: RationalLike, b: RationalLike) -> Rational:
    a, b = rationalize(a), rationalize(b)
    return Rational(
        a.signed_numerator * b.signed_numerator,
        a.denominator * b.denominator,
    )


def divide(a: RationalLike, b: RationalLike) -> Rational:
    """Return ``a / b``; raises :class:`ZeroDenominatorError` when *b* is zero."""
    a, b = rationalize(a), rationalize(b)
    return Rational(
        a.signed_numerator * b.denominator,
        b.signed_numerator * a.denominator,
    )


def absolute(a: RationalLike) -> Rational:
    a = rationalize(a)
    return Rational(a.numerator, a.denominator)


def increment(a: RationalLike) -> Rational:
    return add(a, 1)


def decrement(a: RationalLike) -> Rational:
    return subtract(a, 1)


# ----------------------------------------------------------------------
# Comparison
def compare_to(a: RationalLike, b: Optional[RationalLike]) -> int:
    """Return ``-1``, ``0`` or ``1`` as *a* is less than, equal to or greater than *b*.

    Whole parts are compared first. ``divmod`` floors, so both remainders lie
    in ``[0, denominator)`` and the fractional parts are compared by
    cross-multiplying them.
    """
    if b is None:
        raise NullArgumentError("other")
    a, b = rationalize(a), rationalize(b)

    whole_a, rem_a = divmod(a.signed_numerator, a.denominator)
    whole_b, rem_b = divmod(b.signed_numerator, b.denominator)
    if whole_a != whole_b:
        return 1 if whole_a > whole_b else -1

    left = rem_a * b.denominator
    right = rem_b * a.denominator
    return _sign_of(left - right)


def equals(a: RationalLike, b: Any) -> bool:
    """Return whether *a* and *b* denote the same value; never raises.

    ``None`` and values that are not integers, fractions or rationals compare
    unequal.
    """
    if a is None or b is None:
        return False
    a = _coerce_scalar(a)
    if a is None:
        return False
    if isinstance(b, numbers.Integral):
        return a.denominator == 1 and a.signed_numerator == int(b)
    other = _coerce_scalar(b)
    if other is None:
        return False
    return (
        a.sign == other.sign
        and a.numerator == other.numerator
        and a.denominator == other.denominator
    )


def _equal_operands(a: Any, b: Any) -> bool:
    if isinstance(a, Rational):
        return equals(a, b)
    if isinstance(b, Rational):
        return equals(b, a)
    return bool(a == b)


# ----------------------------------------------------------------------
# Text conversion
def _parse_integer(segment: str, text: str) -> int:
    if _INTEGER_FORMAT.fullmatch(segment) is None:
        logger.debug("rejecting %r: %r is not an integer", text, segment)
        raise RationalFormatError(f"{segment!r} is not a valid integer in {text!r}")
    return int(segment)


def parse(text: str) -> Rational:
    """Parse ``"<numerator> / <denominator>"`` into a :class:`Rational`.

    The separator is exactly one space, a slash and one space, and each side
    is an optionally signed decimal integer. A zero denominator raises
    :class:`ZeroDenominatorError`.
    """
    if text is None:
        raise NullArgumentError("text")
    if not isinstance(text, str):
        raise TypeError(f"text must be a str, got {type(text)!r}")

    segments = text.split(FRACTION_SEPARATOR)
    if len(segments) != 2:
        logger.debug("rejecting %r: expected exactly one %r", text, FRACTION_SEPARATOR)
        raise RationalFormatError(f"{text!r} is not a valid fraction")

    numerator, denominator = (_parse_integer(segment, text) for segment in segments)
    return Rational(numerator, denominator)


__all__ = [
    "Rational",
    "RationalLike",
    "DEFAULT_DECIMALS",
    "FRACTION_SEPARATOR",
    "gcd",
    "rationalize",
    "add",
    "subtract",
    "multiply",
    "divide",
    "absolute",
    "increment",
    "decrement",
    "compare_to",
    "equals",
    "parse",
]
