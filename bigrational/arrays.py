"""NumPy object-array helpers for :class:`~bigrational.rational.Rational`."""
from __future__ import annotations

import logging
from typing import Any, Iterable

import numpy as np

from .rational import Rational, parse, rationalize

logger = logging.getLogger(__name__)


def as_rational_array(values: Any, *, copy: bool = True) -> np.ndarray:
    """Return a ``numpy.ndarray`` of :class:`Rational` values.

    ``values`` can be any iterable of integers, fractions or rationals, or an
    existing NumPy array. When ``copy`` is ``False`` and ``values`` is already
    an object array holding only :class:`Rational` entries, it is returned
    unchanged. Floating-point entries raise ``TypeError``.
    """

    if isinstance(values, np.ndarray):
        array = values.copy() if copy else values
        if array.dtype == object and all(isinstance(item, Rational) for item in array.flat):
            return array
        logger.debug("converting %s array of shape %s to Rational", array.dtype, array.shape)
        return np.vectorize(rationalize, otypes=[object])(array)

    if isinstance(values, (list, tuple)):
        return np.array([rationalize(item) for item in values], dtype=object)

    return as_rational_array(list(values), copy=copy)


def zeros(length: int) -> np.ndarray:
    """Return a one-dimensional array of length ``length`` filled with zeros."""

    if length < 0:
        raise ValueError("length must be non-negative")
    return np.array([Rational() for _ in range(length)], dtype=object)


def zeros_like(values: Any) -> np.ndarray:
    """Return a zero-filled array that matches the shape of ``values``."""

    shape = np.shape(values)
    size = int(np.prod(shape, dtype=np.int64))
    return np.array([Rational() for _ in range(size)], dtype=object).reshape(shape)


def parse_array(strings: Iterable[str]) -> np.ndarray:
    """Parse ``"<numerator> / <denominator>"`` strings into an object array.

    An array input keeps its shape.
    """

    if isinstance(strings, np.ndarray):
        return np.vectorize(parse, otypes=[object])(strings)
    return np.array([parse(text) for text in strings], dtype=object)


__all__ = ["as_rational_array", "zeros", "zeros_like", "parse_array"]
