# -*- coding: utf-8 -*-
"""Judgment matrices, resize routines and the bundled example problem."""

from dataclasses import dataclass, replace
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, TypeVar

from .config import Config, ProblemConfig, get_config
from .mcdm.fuzzy_base import TriangularFuzzyNumber
from .mcdm.linguistic import (
    LinguisticTerm, TermDictionaries, TermSet, CRITERIA_TERMS, ALTERNATIVE_TERMS,
)
from .logger import get_module_logger, log_exceptions

logger = get_module_logger('data_loader')

T = TypeVar('T')


# =========================================================================
# Resize routines
# =========================================================================

def resize_labels(prev: Sequence[str], count: int, prefix: str) -> Tuple[str, ...]:
    """Keep existing labels, synthesize "<prefix> <n>" for new slots."""
    return tuple(prev[i] if i < len(prev) else f"{prefix} {i + 1}" for i in range(count))


def resize_flags(prev: Sequence[bool], count: int, fill: bool = True) -> Tuple[bool, ...]:
    return tuple(prev[i] if i < len(prev) else fill for i in range(count))


def resize_2d(prev: Sequence[Sequence[T]], rows: int, cols: int, fill: T) -> Tuple[Tuple[T, ...], ...]:
    """
    New rows x cols grid filled with ``fill``, overlapping prefix copied.

    The column count of the previous grid is taken from its first row.
    """
    prev_cols = len(prev[0]) if len(prev) > 0 else 0
    rows_to_copy = min(rows, len(prev))
    cols_to_copy = min(cols, prev_cols)
    return tuple(
        tuple(prev[r][c] if r < rows_to_copy and c < cols_to_copy else fill for c in range(cols))
        for r in range(rows)
    )


def resize_3d(prev: Sequence[Sequence[Sequence[T]]], d1: int, d2: int, d3: int,
              fill: T) -> Tuple[Tuple[Tuple[T, ...], ...], ...]:
    """Three-dimensional ``resize_2d``; extents are read from the first element."""
    prev_d2 = len(prev[0]) if len(prev) > 0 else 0
    prev_d3 = len(prev[0][0]) if prev_d2 > 0 else 0
    d1_copy, d2_copy, d3_copy = min(d1, len(prev)), min(d2, prev_d2), min(d3, prev_d3)
    return tuple(
        tuple(
            tuple(prev[i][j][k] if i < d1_copy and j < d2_copy and k < d3_copy else fill
                  for k in range(d3))
            for j in range(d2)
        )
        for i in range(d1)
    )


# =========================================================================
# Judgment matrices
# =========================================================================

@dataclass(frozen=True)
class JudgmentMatrices:
    """
    Expert judgments as linguistic short names.

    criteria_inputs[expert][criterion] : importance of each criterion
    alternative_inputs[expert][alternative][criterion] : rating of each alternative
    """
    criteria_inputs: Tuple[Tuple[str, ...], ...]
    alternative_inputs: Tuple[Tuple[Tuple[str, ...], ...], ...]

    @classmethod
    def filled(cls, n_experts: int, n_alternatives: int, n_criteria: int,
               criteria_fill: str, alternative_fill: str) -> 'JudgmentMatrices':
        return cls(
            criteria_inputs=resize_2d((), n_experts, n_criteria, criteria_fill),
            alternative_inputs=resize_3d((), n_experts, n_alternatives, n_criteria, alternative_fill),
        )

    @classmethod
    def from_lists(cls, criteria_inputs: Sequence[Sequence[str]],
                   alternative_inputs: Sequence[Sequence[Sequence[str]]]) -> 'JudgmentMatrices':
        return cls(
            criteria_inputs=tuple(tuple(row) for row in criteria_inputs),
            alternative_inputs=tuple(tuple(tuple(row) for row in m) for m in alternative_inputs),
        )

    @property
    def shape(self) -> Tuple[int, int, int]:
        """(experts, alternatives, criteria) as read from the first entries."""
        n_experts = len(self.criteria_inputs)
        n_criteria = len(self.criteria_inputs[0]) if n_experts else 0
        n_alternatives = len(self.alternative_inputs[0]) if self.alternative_inputs else 0
        return n_experts, n_alternatives, n_criteria

    def check_shape(self, n_experts: int, n_alternatives: int, n_criteria: int) -> None:
        """
        Raise ValueError unless every row matches the given dimensions.
        """
        if len(self.criteria_inputs) != n_experts:
            raise ValueError(f"criteria judgments have {len(self.criteria_inputs)} experts, expected {n_experts}")
        if len(self.alternative_inputs) != n_experts:
            raise ValueError(f"alternative judgments have {len(self.alternative_inputs)} experts, expected {n_experts}")
        for e, row in enumerate(self.criteria_inputs):
            if len(row) != n_criteria:
                raise ValueError(f"expert {e + 1}: {len(row)} criteria weights, expected {n_criteria}")
        for e, matrix in enumerate(self.alternative_inputs):
            if len(matrix) != n_alternatives:
                raise ValueError(f"expert {e + 1}: {len(matrix)} alternatives rated, expected {n_alternatives}")
            for a, row in enumerate(matrix):
                if len(row) != n_criteria:
                    raise ValueError(f"expert {e + 1}, alternative {a + 1}: "
                                     f"{len(row)} ratings, expected {n_criteria}")

    def with_criteria_judgment(self, expert: int, criterion: int, term: str) -> 'JudgmentMatrices':
        rows = [list(r) for r in self.criteria_inputs]
        rows[expert][criterion] = term
        return replace(self, criteria_inputs=tuple(tuple(r) for r in rows))

    def with_alternative_judgment(self, expert: int, alternative: int, criterion: int,
                                  term: str) -> 'JudgmentMatrices':
        matrices = [[list(r) for r in m] for m in self.alternative_inputs]
        matrices[expert][alternative][criterion] = term
        return replace(self, alternative_inputs=tuple(tuple(tuple(r) for r in m) for m in matrices))

    def resize(self, n_experts: int, n_alternatives: int, n_criteria: int,
               criteria_fill: str, alternative_fill: str) -> 'JudgmentMatrices':
        return JudgmentMatrices(
            criteria_inputs=resize_2d(self.criteria_inputs, n_experts, n_criteria, criteria_fill),
            alternative_inputs=resize_3d(self.alternative_inputs, n_experts, n_alternatives,
                                         n_criteria, alternative_fill),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'criteria_inputs': [list(r) for r in self.criteria_inputs],
            'alternative_inputs': [[list(r) for r in m] for m in self.alternative_inputs],
        }


# =========================================================================
# Input bundle
# =========================================================================

@dataclass(frozen=True)
class DecisionInputs:
    """Everything one calculation consumes."""
    problem: ProblemConfig
    criteria_terms: Tuple[LinguisticTerm, ...]
    alternative_terms: Tuple[LinguisticTerm, ...]
    judgments: JudgmentMatrices

    @property
    def dictionaries(self) -> TermDictionaries:
        return TermDictionaries.from_terms(self.criteria_terms, self.alternative_terms)


def resize_inputs(inputs: DecisionInputs,
                  n_alternatives: Optional[int] = None,
                  n_criteria: Optional[int] = None,
                  n_experts: Optional[int] = None,
                  config: Optional[Config] = None) -> DecisionInputs:
    """
    Resize labels, benefit/cost flags and both judgment containers together.

    Existing entries inside the new bounds are preserved; new cells get the
    first term of the matching term set.
    """
    vikor = (config or get_config()).vikor
    problem = inputs.problem
    n_alternatives = problem.n_alternatives if n_alternatives is None else n_alternatives
    n_criteria = problem.n_criteria if n_criteria is None else n_criteria
    n_experts = problem.n_experts if n_experts is None else n_experts

    criteria_fill = (inputs.criteria_terms[0].short_name if inputs.criteria_terms
                     else vikor.fallback_criteria_term)
    alternative_fill = (inputs.alternative_terms[0].short_name if inputs.alternative_terms
                        else vikor.fallback_alternative_term)

    new_problem = problem.with_changes(
        n_alternatives=n_alternatives,
        n_criteria=n_criteria,
        n_experts=n_experts,
        benefit_cost=resize_flags(problem.benefit_cost, n_criteria),
        alternative_labels=resize_labels(problem.alternative_labels, n_alternatives, vikor.alternative_prefix),
        criteria_labels=resize_labels(problem.criteria_labels, n_criteria, vikor.criterion_prefix),
        expert_labels=resize_labels(problem.expert_labels, n_experts, vikor.expert_prefix),
    )
    logger.debug(f"Resized inputs to {n_alternatives} alternatives, {n_criteria} criteria, {n_experts} experts")

    return replace(
        inputs,
        problem=new_problem,
        judgments=inputs.judgments.resize(n_experts, n_alternatives, n_criteria,
                                          criteria_fill, alternative_fill),
    )


def _transpose(matrix: Sequence[Sequence[T]]) -> Tuple[Tuple[T, ...], ...]:
    if not matrix or not matrix[0]:
        return ()
    return tuple(zip(*matrix))


def _parse_terms(raw: Sequence[Mapping[str, Any]]) -> Tuple[LinguisticTerm, ...]:
    terms = []
    for item in raw:
        tri = item['tri']
        if isinstance(tri, Mapping):
            tri = TriangularFuzzyNumber(float(tri['l']), float(tri['m']), float(tri['u']))
        else:
            tri = TriangularFuzzyNumber.from_array(tri)
        kwargs = {'name': item['name'], 'short_name': item['short_name'], 'tri': tri}
        if 'id' in item:
            kwargs['id'] = str(item['id'])
        terms.append(LinguisticTerm(**kwargs))
    return tuple(terms)


@log_exceptions(logger)
def load_inputs(data: Mapping[str, Any], config: Optional[Config] = None) -> DecisionInputs:
    """
    Build ``DecisionInputs`` from a plain mapping.

    Expected keys: ``criteria_inputs``, ``alternative_inputs`` (required);
    ``v``, ``benefit_cost``, ``alternative_labels``, ``criteria_labels``,
    ``expert_labels``, ``criteria_terms``, ``alternative_terms`` (optional).
    Counts are taken from the judgment matrices; missing labels and flags
    are synthesized.
    """
    config = config or get_config()
    judgments = JudgmentMatrices.from_lists(data['criteria_inputs'], data['alternative_inputs'])
    n_experts, n_alternatives, n_criteria = judgments.shape

    problem = ProblemConfig.default(n_alternatives, n_criteria, n_experts,
                                    v=data.get('v'), config=config)
    vikor = config.vikor
    problem = problem.with_changes(
        benefit_cost=resize_flags(tuple(bool(b) for b in data.get('benefit_cost', ())), n_criteria),
        alternative_labels=resize_labels(tuple(data.get('alternative_labels', ())), n_alternatives,
                                         vikor.alternative_prefix),
        criteria_labels=resize_labels(tuple(data.get('criteria_labels', ())), n_criteria,
                                      vikor.criterion_prefix),
        expert_labels=resize_labels(tuple(data.get('expert_labels', ())), n_experts,
                                    vikor.expert_prefix),
    )

    criteria_terms = _parse_terms(data['criteria_terms']) if 'criteria_terms' in data else CRITERIA_TERMS
    alternative_terms = (_parse_terms(data['alternative_terms']) if 'alternative_terms' in data
                         else ALTERNATIVE_TERMS)

    logger.info(f"Loaded inputs: {n_alternatives} alternatives, {n_criteria} criteria, {n_experts} experts")
    return DecisionInputs(
        problem=problem,
        criteria_terms=TermSet(criteria_terms).terms,
        alternative_terms=TermSet(alternative_terms).terms,
        judgments=judgments,
    )


def example_inputs() -> DecisionInputs:
    """
    Worked example: 5 alternatives, 4 criteria (C1 and C4 cost), 3 experts.
    """
    # [criterion][expert]
    criteria_by_criterion = [
        ["VL", "H", "L"],
        ["VL", "M", "L"],
        ["L", "VH", "M"],
        ["VH", "VL", "VH"],
    ]
    # [expert][criterion][alternative]
    ratings_by_criterion = [
        [
            ["F", "P", "VG", "F", "E"],
            ["P", "E", "VP", "E", "G"],
            ["VG", "F", "VP", "VP", "G"],
            ["P", "VG", "F", "E", "VG"],
        ],
        [
            ["E", "VP", "VP", "VP", "E"],
            ["VG", "VP", "E", "VG", "E"],
            ["VG", "VP", "E", "G", "VG"],
            ["P", "VP", "VP", "VG", "E"],
        ],
        [
            ["E", "F", "F", "F", "E"],
            ["VG", "E", "F", "VG", "E"],
            ["VP", "VP", "E", "F", "E"],
            ["F", "VP", "G", "F", "VP"],
        ],
    ]

    return DecisionInputs(
        problem=ProblemConfig(
            n_alternatives=5,
            n_criteria=4,
            n_experts=3,
            v=0.5,
            benefit_cost=(False, True, True, False),
            alternative_labels=("A1", "A2", "A3", "A4", "A5"),
            criteria_labels=("C1", "C2", "C3", "C4"),
            expert_labels=("D1", "D2", "D3"),
        ),
        criteria_terms=CRITERIA_TERMS,
        alternative_terms=ALTERNATIVE_TERMS,
        judgments=JudgmentMatrices(
            criteria_inputs=_transpose(criteria_by_criterion),
            alternative_inputs=tuple(_transpose(m) for m in ratings_by_criterion),
        ),
    )
