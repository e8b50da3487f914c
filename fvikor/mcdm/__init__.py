# -*- coding: utf-8 -*-
"""
Multi-Criteria Decision Making Module
=====================================

Fuzzy VIKOR with triangular fuzzy numbers and linguistic group judgments.

Submodules
----------
fuzzy_base
    Triangular fuzzy numbers and their arithmetic
linguistic
    Linguistic term sets, validation and dictionaries
fuzzy_vikor
    The nine-step Fuzzy VIKOR calculation

Usage
-----
>>> from fvikor.mcdm import FuzzyVIKOR, TermDictionaries, CRITERIA_TERMS, ALTERNATIVE_TERMS
"""

from .fuzzy_base import (
    TriangularFuzzyNumber, FUZZY_ZERO,
    add, subtract, multiply, scalar_multiply, scalar_divide,
    component_max, component_min, defuzzify,
)
from .linguistic import (
    LinguisticTerm, TermSet, TermDictionaries,
    TermValidationResult, TermValidationError,
    validate_terms, normalize_terms, save_terms, build_dictionary, lookup,
    CRITERIA_TERMS, ALTERNATIVE_TERMS, CRITERIA_SCALE, ALTERNATIVE_SCALE,
)
from .fuzzy_vikor import (
    FuzzyVIKOR, FuzzyVIKORResult, RankedAlternative, CompromiseDecision,
    resolve_judgments, aggregate_judgments, aggregate_fuzzy,
    fuzzy_ideal_values, normalized_differences, fuzzy_s_r, fuzzy_q,
    rank_alternatives, check_conditions,
)


__all__ = [
    # Fuzzy base
    'TriangularFuzzyNumber',
    'FUZZY_ZERO',
    'add', 'subtract', 'multiply', 'scalar_multiply', 'scalar_divide',
    'component_max', 'component_min', 'defuzzify',

    # Linguistic terms
    'LinguisticTerm', 'TermSet', 'TermDictionaries',
    'TermValidationResult', 'TermValidationError',
    'validate_terms', 'normalize_terms', 'save_terms', 'build_dictionary', 'lookup',
    'CRITERIA_TERMS', 'ALTERNATIVE_TERMS', 'CRITERIA_SCALE', 'ALTERNATIVE_SCALE',

    # Fuzzy VIKOR
    'FuzzyVIKOR', 'FuzzyVIKORResult', 'RankedAlternative', 'CompromiseDecision',
    'resolve_judgments', 'aggregate_judgments', 'aggregate_fuzzy',
    'fuzzy_ideal_values', 'normalized_differences', 'fuzzy_s_r', 'fuzzy_q',
    'rank_alternatives', 'check_conditions',
]
