# -*- coding: utf-8 -*-
"""
Fuzzy Number Base Classes
=========================

Triangular fuzzy number type and the arithmetic used by Fuzzy VIKOR.

Mathematical Foundation:
    A Triangular Fuzzy Number (TFN) is denoted as Ã = (l, m, u) where:
    - l: lower bound (minimum possible value)
    - m: modal value (most likely value)
    - u: upper bound (maximum possible value)

    Operations used by the method:
        Ã + B̃ = (l1 + l2, m1 + m2, u1 + u2)
        Ã - B̃ = (l1 - u2, m1 - m2, u1 - l2)
        Ã × B̃ ≈ (l1 × l2, m1 × m2, u1 × u2)
        Ã × k = (l × k, m × k, u × k)
        Ã / k = (l / k, m / k, u / k),  Ã / 0 = (0, 0, 0)
        defuzzify(Ã) = (l + 2m + u) / 4

Components are never reordered: values with l > m or m > u are carried
through arithmetic as-is.
"""

import numpy as np
from typing import Iterable, Sequence, Union
from dataclasses import dataclass


@dataclass(frozen=True)
class TriangularFuzzyNumber:
    """
    Triangular fuzzy number (l, m, u).

    Attributes:
        l: Lower bound (minimum possible value)
        m: Modal value (most likely value)
        u: Upper bound (maximum possible value)

    Example:
        >>> a = TriangularFuzzyNumber(0.1, 0.3, 0.5)
        >>> b = TriangularFuzzyNumber(0.5, 0.7, 0.9)
        >>> a + b
        TFN(0.6000, 1.0000, 1.4000)
        >>> b - a
        TFN(0.0000, 0.4000, 0.8000)
    """
    l: float  # Lower bound
    m: float  # Modal value (most likely)
    u: float  # Upper bound

    def defuzzify(self) -> float:
        """Crisp value (l + 2m + u) / 4."""
        return defuzzify(self)

    def __add__(self, other: 'TriangularFuzzyNumber') -> 'TriangularFuzzyNumber':
        if not isinstance(other, TriangularFuzzyNumber):
            return NotImplemented
        return add(self, other)

    def __sub__(self, other: 'TriangularFuzzyNumber') -> 'TriangularFuzzyNumber':
        if not isinstance(other, TriangularFuzzyNumber):
            return NotImplemented
        return subtract(self, other)

    def __mul__(self, other: Union['TriangularFuzzyNumber', float]) -> 'TriangularFuzzyNumber':
        if isinstance(other, TriangularFuzzyNumber):
            return multiply(self, other)
        return scalar_multiply(self, float(other))

    def __rmul__(self, scalar: float) -> 'TriangularFuzzyNumber':
        return scalar_multiply(self, float(scalar))

    def __truediv__(self, scalar: float) -> 'TriangularFuzzyNumber':
        return scalar_divide(self, float(scalar))

    def as_tuple(self) -> tuple:
        return (self.l, self.m, self.u)

    def as_array(self) -> np.ndarray:
        """Components as a float array of shape (3,)."""
        return np.array([self.l, self.m, self.u], dtype=float)

    @staticmethod
    def from_array(values: Sequence[float]) -> 'TriangularFuzzyNumber':
        """Create TFN from any length-3 sequence (l, m, u)."""
        l, m, u = (float(v) for v in values)
        return TriangularFuzzyNumber(l, m, u)

    def __repr__(self) -> str:
        return f"TFN({self.l:.4f}, {self.m:.4f}, {self.u:.4f})"


FUZZY_ZERO = TriangularFuzzyNumber(0.0, 0.0, 0.0)

# Fold seeds for component_min / component_max
POSITIVE_INFINITY = TriangularFuzzyNumber(np.inf, np.inf, np.inf)
NEGATIVE_INFINITY = TriangularFuzzyNumber(-np.inf, -np.inf, -np.inf)


def add(a: TriangularFuzzyNumber, b: TriangularFuzzyNumber) -> TriangularFuzzyNumber:
    return TriangularFuzzyNumber(a.l + b.l, a.m + b.m, a.u + b.u)


def subtract(a: TriangularFuzzyNumber, b: TriangularFuzzyNumber) -> TriangularFuzzyNumber:
    """Fuzzy subtraction (a.l - b.u, a.m - b.m, a.u - b.l)."""
    return TriangularFuzzyNumber(a.l - b.u, a.m - b.m, a.u - b.l)


def multiply(a: TriangularFuzzyNumber, b: TriangularFuzzyNumber) -> TriangularFuzzyNumber:
    """Approximate fuzzy product, componentwise."""
    return TriangularFuzzyNumber(a.l * b.l, a.m * b.m, a.u * b.u)


def scalar_multiply(a: TriangularFuzzyNumber, k: float) -> TriangularFuzzyNumber:
    return TriangularFuzzyNumber(a.l * k, a.m * k, a.u * k)


def scalar_divide(a: TriangularFuzzyNumber, k: float) -> TriangularFuzzyNumber:
    """
    Divide every component by a crisp scalar.

    Division by zero yields FUZZY_ZERO instead of inf/nan, so a criterion
    on which every alternative ties contributes nothing downstream.
    """
    if k == 0:
        return FUZZY_ZERO
    return TriangularFuzzyNumber(a.l / k, a.m / k, a.u / k)


def component_max(a: TriangularFuzzyNumber, b: TriangularFuzzyNumber) -> TriangularFuzzyNumber:
    return TriangularFuzzyNumber(max(a.l, b.l), max(a.m, b.m), max(a.u, b.u))


def component_min(a: TriangularFuzzyNumber, b: TriangularFuzzyNumber) -> TriangularFuzzyNumber:
    return TriangularFuzzyNumber(min(a.l, b.l), min(a.m, b.m), min(a.u, b.u))


def defuzzify(a: TriangularFuzzyNumber) -> float:
    return (a.l + 2 * a.m + a.u) / 4


def fuzzy_sum(values: Iterable[TriangularFuzzyNumber]) -> TriangularFuzzyNumber:
    """Fold with add, starting from FUZZY_ZERO."""
    total = FUZZY_ZERO
    for value in values:
        total = add(total, value)
    return total


def fuzzy_max(values: Iterable[TriangularFuzzyNumber]) -> TriangularFuzzyNumber:
    """Fold with component_max seeded by the first element; FUZZY_ZERO when empty."""
    iterator = iter(values)
    result = next(iterator, None)
    if result is None:
        return FUZZY_ZERO
    for value in iterator:
        result = component_max(result, value)
    return result


def fuzzy_min(values: Iterable[TriangularFuzzyNumber]) -> TriangularFuzzyNumber:
    """Fold with component_min seeded by +inf."""
    result = POSITIVE_INFINITY
    for value in values:
        result = component_min(result, value)
    return result


def fuzzy_upper_envelope(values: Iterable[TriangularFuzzyNumber]) -> TriangularFuzzyNumber:
    """Fold with component_max seeded by -inf."""
    result = NEGATIVE_INFINITY
    for value in values:
        result = component_max(result, value)
    return result
