# -*- coding: utf-8 -*-
"""
Linguistic Term Sets
====================

Mappings from short linguistic codes (e.g. "VH", "G") to triangular fuzzy
numbers, for criteria importance and for alternative ratings.

A term set is edited as a whole: ``save_terms`` validates the collection
and, when any upper bound exceeds 1, rescales every term by the largest
upper bound so the set lies in [0, 1] again.
"""

import uuid
from dataclasses import dataclass, field, replace
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from .fuzzy_base import TriangularFuzzyNumber, FUZZY_ZERO
from ..logger import get_module_logger

logger = get_module_logger('mcdm.linguistic')

MIN_TERMS = 2


@dataclass(frozen=True)
class LinguisticTerm:
    """Named linguistic term; ``short_name`` is the lookup key."""
    name: str
    short_name: str
    tri: TriangularFuzzyNumber
    id: str = field(default_factory=lambda: uuid.uuid4().hex)


class TermValidationError(ValueError):
    """Raised when a term collection fails validation."""

    def __init__(self, result: 'TermValidationResult'):
        self.result = result
        super().__init__(result.describe())


@dataclass
class TermValidationResult:
    """
    Outcome of ``validate_terms``.

    ``errors`` maps term id -> field -> message; ``global_errors`` holds
    collection-level problems (too few terms).
    """
    valid: bool
    errors: Dict[str, Dict[str, str]] = field(default_factory=dict)
    global_errors: List[str] = field(default_factory=list)

    def describe(self) -> str:
        parts = list(self.global_errors)
        for term_id, fields in self.errors.items():
            details = ", ".join(f"{name}: {msg}" for name, msg in fields.items())
            parts.append(f"term {term_id} ({details})")
        return "; ".join(parts) if parts else "valid"


def validate_terms(terms: Sequence[LinguisticTerm]) -> TermValidationResult:
    """
    Validate a term collection.

    Rules: non-empty name; non-empty, unique short name; l <= m; m <= u;
    l != u; at least two terms.
    """
    errors: Dict[str, Dict[str, str]] = {}
    global_errors: List[str] = []

    if len(terms) < MIN_TERMS:
        global_errors.append(f"at least {MIN_TERMS} terms are required")

    seen = set()
    for term in terms:
        term_errors: Dict[str, str] = {}
        l, m, u = term.tri.l, term.tri.m, term.tri.u

        if not term.name:
            term_errors['name'] = "required"
        if not term.short_name:
            term_errors['short_name'] = "required"
        elif term.short_name in seen:
            term_errors['short_name'] = "duplicate"
        seen.add(term.short_name)

        if l > m:
            term_errors['l'] = "l <= m"
        if m > u:
            term_errors['m'] = "m <= u"
        if l == u:
            term_errors['l'] = "l != u"
            term_errors['u'] = "l != u"

        if term_errors:
            errors[term.id] = term_errors

    return TermValidationResult(
        valid=not errors and not global_errors,
        errors=errors,
        global_errors=global_errors,
    )


def normalize_terms(terms: Sequence[LinguisticTerm]) -> Tuple[LinguisticTerm, ...]:
    """Rescale all terms by the largest upper bound when it exceeds 1."""
    terms = tuple(terms)
    if not terms:
        return terms
    max_u = max(t.tri.u for t in terms)
    if max_u <= 1:
        return terms

    logger.info(f"Rescaling {len(terms)} terms by max upper bound {max_u:.4f}")
    return tuple(
        replace(t, tri=TriangularFuzzyNumber(t.tri.l / max_u, t.tri.m / max_u, t.tri.u / max_u))
        for t in terms
    )


def save_terms(terms: Sequence[LinguisticTerm]) -> Tuple[LinguisticTerm, ...]:
    """
    Validate and normalize a term collection.

    Raises
    ------
    TermValidationError
        If the collection is invalid; nothing is rescaled in that case.
    """
    result = validate_terms(terms)
    if not result.valid:
        raise TermValidationError(result)
    return normalize_terms(terms)


def build_dictionary(terms: Iterable[LinguisticTerm]) -> Dict[str, TriangularFuzzyNumber]:
    """short_name -> triangular number; later duplicates win."""
    return {t.short_name: t.tri for t in terms}


def lookup(dictionary: Mapping[str, TriangularFuzzyNumber], key: str) -> TriangularFuzzyNumber:
    """
    Resolve a short name. Unknown names resolve to FUZZY_ZERO.

    The fallback is part of the method's input contract, not an error path.
    """
    tri = dictionary.get(key)
    if tri is None:
        logger.debug(f"Unknown term {key!r}, using fuzzy zero")
        return FUZZY_ZERO
    return tri


@dataclass(frozen=True)
class TermDictionaries:
    """Criteria-importance and alternative-rating dictionaries."""
    criteria: Mapping[str, TriangularFuzzyNumber]
    alternatives: Mapping[str, TriangularFuzzyNumber]

    @classmethod
    def from_terms(cls,
                   criteria_terms: Iterable[LinguisticTerm],
                   alternative_terms: Iterable[LinguisticTerm]) -> 'TermDictionaries':
        return cls(
            criteria=build_dictionary(criteria_terms),
            alternatives=build_dictionary(alternative_terms),
        )


class TermSet:
    """
    Editable in-memory term collection.

    Single edits are applied immediately; ``replace`` runs the full
    validate-and-rescale step used when an edited set is saved as a whole.
    The collection never drops below two terms.
    """

    def __init__(self, terms: Iterable[LinguisticTerm], fallback_short_name: str = ""):
        self._terms: Tuple[LinguisticTerm, ...] = save_terms(tuple(terms))
        self.fallback_short_name = fallback_short_name
        self._dictionary = build_dictionary(self._terms)

    @property
    def terms(self) -> Tuple[LinguisticTerm, ...]:
        return self._terms

    @property
    def dictionary(self) -> Dict[str, TriangularFuzzyNumber]:
        return dict(self._dictionary)

    @property
    def default_short_name(self) -> str:
        """Fill value for new judgment cells: the first term's short name."""
        return self._terms[0].short_name if self._terms else self.fallback_short_name

    def __len__(self) -> int:
        return len(self._terms)

    def __iter__(self):
        return iter(self._terms)

    def get(self, term_id: str) -> LinguisticTerm:
        for term in self._terms:
            if term.id == term_id:
                return term
        raise KeyError(term_id)

    def replace(self, terms: Iterable[LinguisticTerm]) -> Tuple[LinguisticTerm, ...]:
        self._set(save_terms(tuple(terms)))
        return self._terms

    def add_term(self, name: str, short_name: str, tri: TriangularFuzzyNumber,
                 term_id: Optional[str] = None) -> LinguisticTerm:
        term = LinguisticTerm(name=name, short_name=short_name, tri=tri)
        if term_id is not None:
            term = replace(term, id=term_id)
        self.replace(self._terms + (term,))
        return self.get(term.id)

    def update_term(self, term_id: str, **changes) -> LinguisticTerm:
        current = self.get(term_id)
        updated = replace(current, **changes)
        self.replace(tuple(updated if t.id == term_id else t for t in self._terms))
        return self.get(term_id)

    def remove_term(self, term_id: str) -> None:
        self.get(term_id)
        self.replace(tuple(t for t in self._terms if t.id != term_id))

    def _set(self, terms: Tuple[LinguisticTerm, ...]) -> None:
        self._terms = terms
        self._dictionary = build_dictionary(terms)


def _term(term_id: str, name: str, short_name: str, l: float, m: float, u: float) -> LinguisticTerm:
    return LinguisticTerm(name=name, short_name=short_name,
                          tri=TriangularFuzzyNumber(l, m, u), id=term_id)


# Linguistic scale for criteria importance weights
CRITERIA_TERMS: Tuple[LinguisticTerm, ...] = (
    _term("c1", "Very Low (VL)", "VL", 0.0, 0.1, 0.3),
    _term("c2", "Low (L)", "L", 0.1, 0.3, 0.5),
    _term("c3", "Medium (M)", "M", 0.3, 0.5, 0.7),
    _term("c4", "High (H)", "H", 0.5, 0.7, 0.9),
    _term("c5", "Very High (VH)", "VH", 0.7, 0.9, 1.0),
)

# Linguistic scale for alternative ratings
ALTERNATIVE_TERMS: Tuple[LinguisticTerm, ...] = (
    _term("a1", "Very Poor (VP)", "VP", 0.0, 0.0, 0.2),
    _term("a2", "Poor (P)", "P", 0.0, 0.2, 0.4),
    _term("a3", "Fair (F)", "F", 0.2, 0.4, 0.6),
    _term("a4", "Good (G)", "G", 0.4, 0.6, 0.8),
    _term("a5", "Very Good (VG)", "VG", 0.6, 0.8, 1.0),
    _term("a6", "Excellent (E)", "E", 0.8, 0.9, 1.0),
)

CRITERIA_SCALE = build_dictionary(CRITERIA_TERMS)
ALTERNATIVE_SCALE = build_dictionary(ALTERNATIVE_TERMS)
