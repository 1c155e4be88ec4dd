"""Exact arbitrary-precision rational numbers."""

from .arrays import as_rational_array, parse_array, zeros, zeros_like
from .exceptions import (
    InvalidArgumentError,
    NullArgumentError,
    RationalError,
    RationalFormatError,
    ZeroDenominatorError,
)
from .rational import (
    DEFAULT_DECIMALS,
    FRACTION_SEPARATOR,
    Rational,
    absolute,
    add,
    compare_to,
    decrement,
    divide,
    equals,
    gcd,
    increment,
    multiply,
    parse,
    rationalize,
    subtract,
)

__all__ = [
    "Rational",
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
    "as_rational_array",
    "parse_array",
    "zeros",
    "zeros_like",
    "RationalError",
    "InvalidArgumentError",
    "ZeroDenominatorError",
    "RationalFormatError",
    "NullArgumentError",
]
