# -*- coding: utf-8 -*-
"""
Fuzzy VIKOR with triangular fuzzy numbers and linguistic group judgments.

Mathematical Steps:
1. Resolve linguistic judgments to triangular fuzzy numbers
2. Aggregate experts: (min l, mean m, max u)
3. Determine fuzzy best (f*) and worst (f°) values per criterion
4. Normalized fuzzy differences d_ij = (f* - f_ij) / (u* - l°)  (benefit)
                                  d_ij = (f_ij - f*) / (u° - l*)  (cost)
5. S_i = Σ_j w_j ⊗ d_ij,  R_i = max_j w_j ⊗ d_ij
6. Q_i = v (S_i - S*) / (S°u - S*l) + (1 - v) (R_i - R*) / (R°u - R*l)
7. Defuzzify S, R, Q with (l + 2m + u) / 4
8. Rank by S, R and Q (ascending, lower is better)
9. Check acceptable advantage (C1) and acceptable stability (C2)

References
----------
Opricovic, S. (2011). Fuzzy VIKOR with an application to water resources
planning. Expert Systems with Applications, 38(10).
"""

import numpy as np
import pandas as pd
from typing import Dict, List, Mapping, Optional, Sequence, Tuple
from dataclasses import dataclass, field

from .fuzzy_base import (
    TriangularFuzzyNumber, FUZZY_ZERO,
    subtract, multiply, scalar_multiply, scalar_divide, add, defuzzify,
    fuzzy_sum, fuzzy_max, fuzzy_min, fuzzy_upper_envelope,
)
from .linguistic import TermDictionaries, lookup
from ..logger import get_module_logger

logger = get_module_logger('mcdm.fuzzy_vikor')

FuzzyVector = Tuple[TriangularFuzzyNumber, ...]
FuzzyMatrix = Tuple[FuzzyVector, ...]


@dataclass(frozen=True)
class RankedAlternative:
    """One alternative's crisp S, R and Q; shared by all three rankings."""
    alt_index: int
    alt_label: str
    s: float
    r: float
    q: float


@dataclass(frozen=True)
class CompromiseDecision:
    """Acceptance conditions and the resulting compromise set."""
    advantage: float                # Adv = Q(A2) - Q(A1)
    dq: float                       # DQ = 1 / (m - 1)
    advantage_condition: bool       # C1: Adv >= DQ
    stability_condition: bool       # C2: A1 also best by S or R
    compromise_set: Tuple[str, ...]


@dataclass(frozen=True)
class FuzzyVIKORResult:
    """Complete per-step snapshot of one Fuzzy VIKOR run."""
    alternative_labels: Tuple[str, ...]
    criteria_labels: Tuple[str, ...]
    benefit_cost: Tuple[bool, ...]
    v: float
    criteria_weights: FuzzyVector           # Step 2: aggregated importance
    alternative_ratings: FuzzyMatrix        # Step 2: aggregated ratings [alt][crit]
    f_best: FuzzyVector                     # Step 3: f*
    f_worst: FuzzyVector                    # Step 3: f°
    normalized_diff: FuzzyMatrix            # Step 4: d_ij
    fuzzy_S: FuzzyVector                    # Step 5
    fuzzy_R: FuzzyVector                    # Step 5
    fuzzy_Q: FuzzyVector                    # Step 6
    S: Tuple[float, ...]                    # Step 7
    R: Tuple[float, ...]
    Q: Tuple[float, ...]
    ranked_S: Tuple[RankedAlternative, ...]  # Step 8
    ranked_R: Tuple[RankedAlternative, ...]
    ranked_Q: Tuple[RankedAlternative, ...]
    advantage: float                        # Step 9
    dq: float
    advantage_condition: bool
    stability_condition: bool
    compromise_set: Tuple[str, ...]
    diagnostics: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def compromise_solution(self) -> str:
        """Best alternative by Q."""
        return self.ranked_Q[0].alt_label

    @property
    def n_alternatives(self) -> int:
        return len(self.alternative_labels)

    def to_frame(self) -> pd.DataFrame:
        """Crisp S, R, Q and their ranks, indexed by alternative label."""
        frame = pd.DataFrame({'S': self.S, 'R': self.R, 'Q': self.Q},
                             index=pd.Index(self.alternative_labels, name='Alternative'))
        for key, ranked in (('S', self.ranked_S), ('R', self.ranked_R), ('Q', self.ranked_Q)):
            positions = {item.alt_index: pos for pos, item in enumerate(ranked, 1)}
            frame[f'Rank_{key}'] = [positions[i] for i in range(self.n_alternatives)]
        frame['In_Compromise'] = [label in self.compromise_set for label in self.alternative_labels]
        return frame

    def ranking_frame(self, by: str = 'Q') -> pd.DataFrame:
        """One ranking list as a DataFrame, best first."""
        ranked = {'S': self.ranked_S, 'R': self.ranked_R, 'Q': self.ranked_Q}[by.upper()]
        return pd.DataFrame(
            [{'Rank': pos, 'Alternative': item.alt_label, 'S': item.s, 'R': item.r, 'Q': item.q}
             for pos, item in enumerate(ranked, 1)]
        ).set_index('Rank')

    def fuzzy_frame(self) -> pd.DataFrame:
        """Fuzzy S, R, Q components, indexed by alternative label."""
        rows = []
        for i in range(self.n_alternatives):
            row = {}
            for key, values in (('S', self.fuzzy_S), ('R', self.fuzzy_R), ('Q', self.fuzzy_Q)):
                tri = values[i]
                row.update({f'{key}_l': tri.l, f'{key}_m': tri.m, f'{key}_u': tri.u})
            rows.append(row)
        return pd.DataFrame(rows, index=pd.Index(self.alternative_labels, name='Alternative'))

    def top_n(self, n: int = 10) -> pd.DataFrame:
        return self.to_frame().nsmallest(n, 'Rank_Q')

    def summary(self) -> str:
        lines = [
            f"{'='*60}",
            "FUZZY VIKOR RESULTS",
            f"{'='*60}",
            f"v = {self.v:.2f}",
            "",
            self.to_frame().round(4).to_string(),
            "",
            f"Adv = {self.advantage:.4f}, DQ = {self.dq:.4f}",
            f"C1 (acceptable advantage): {'met' if self.advantage_condition else 'not met'}",
            f"C2 (acceptable stability): {'met' if self.stability_condition else 'not met'}",
            f"Compromise set: {', '.join(self.compromise_set)}",
        ]
        if self.diagnostics:
            lines.append("")
            lines.append("Diagnostics:")
            lines.extend(f"  - {d}" for d in self.diagnostics)
        lines.append("=" * 60)
        return "\n".join(lines)


# =========================================================================
# Step 1-2: Resolution and aggregation
# =========================================================================

def resolve_judgments(judgments: Sequence,
                      dictionary: Mapping[str, TriangularFuzzyNumber]) -> np.ndarray:
    """
    Map nested short names to an array with a trailing (l, m, u) axis.

    ``judgments`` is any nested sequence of short names; unknown names
    resolve to fuzzy zero.
    """
    names = np.asarray(judgments, dtype=object)
    resolved = np.zeros(names.shape + (3,), dtype=float)
    for index, name in np.ndenumerate(names):
        resolved[index] = lookup(dictionary, name).as_tuple()
    return resolved


def aggregate_judgments(resolved: np.ndarray) -> np.ndarray:
    """Aggregate over the leading expert axis: (min l, mean m, max u)."""
    if resolved.shape[0] == 0:
        raise ValueError("at least one expert judgment is required")
    aggregated = np.empty(resolved.shape[1:], dtype=float)
    aggregated[..., 0] = resolved[..., 0].min(axis=0)
    aggregated[..., 1] = resolved[..., 1].mean(axis=0)
    aggregated[..., 2] = resolved[..., 2].max(axis=0)
    return aggregated


def aggregate_fuzzy(values: Sequence[TriangularFuzzyNumber]) -> TriangularFuzzyNumber:
    """Group consensus of individual expert values."""
    array = np.array([v.as_tuple() for v in values], dtype=float)
    return TriangularFuzzyNumber.from_array(aggregate_judgments(array))


def _to_vector(array: np.ndarray) -> FuzzyVector:
    return tuple(TriangularFuzzyNumber.from_array(row) for row in array.reshape(-1, 3))


def _to_matrix(array: np.ndarray) -> FuzzyMatrix:
    return tuple(_to_vector(row) for row in array)


# =========================================================================
# Step 3: Ideal and nadir values
# =========================================================================

def fuzzy_ideal_values(ratings: Sequence[Sequence[TriangularFuzzyNumber]],
                       benefit_cost: Sequence[bool]
                       ) -> Tuple[FuzzyVector, FuzzyVector]:
    """
    Fuzzy best (f*) and worst (f°) per criterion.

    Parameters
    ----------
    ratings : [alternative][criterion] aggregated ratings
    benefit_cost : True for benefit criteria, False for cost criteria
    """
    f_best: List[TriangularFuzzyNumber] = []
    f_worst: List[TriangularFuzzyNumber] = []

    for j, is_benefit in enumerate(benefit_cost):
        column = [row[j] for row in ratings]
        f_min = fuzzy_min(column)
        f_max = fuzzy_upper_envelope(column)

        if is_benefit:
            f_best.append(f_max)
            f_worst.append(f_min)
        else:
            f_best.append(f_min)
            f_worst.append(f_max)

    return tuple(f_best), tuple(f_worst)


# =========================================================================
# Step 4: Normalized fuzzy differences
# =========================================================================

def normalized_differences(ratings: Sequence[Sequence[TriangularFuzzyNumber]],
                           f_best: Sequence[TriangularFuzzyNumber],
                           f_worst: Sequence[TriangularFuzzyNumber],
                           benefit_cost: Sequence[bool],
                           diagnostics: Optional[List[str]] = None,
                           criteria_labels: Optional[Sequence[str]] = None
                           ) -> FuzzyMatrix:
    """Fuzzy distance of each rating from the ideal, scaled by the crisp spread."""
    denominators = []
    for j, is_benefit in enumerate(benefit_cost):
        if is_benefit:
            denominator = f_best[j].u - f_worst[j].l
        else:
            denominator = f_worst[j].u - f_best[j].l
        denominators.append(denominator)

        if denominator == 0 and diagnostics is not None:
            label = criteria_labels[j] if criteria_labels else f"#{j + 1}"
            message = (f"Criterion {label}: ideal and nadir spread is zero, "
                       f"normalized differences set to fuzzy zero")
            logger.warning(message)
            diagnostics.append(message)

    result = []
    for row in ratings:
        normalized_row = []
        for j, is_benefit in enumerate(benefit_cost):
            if is_benefit:
                numerator = subtract(f_best[j], row[j])
            else:
                numerator = subtract(row[j], f_best[j])
            normalized_row.append(scalar_divide(numerator, denominators[j]))
        result.append(tuple(normalized_row))

    return tuple(result)


# =========================================================================
# Step 5-6: S, R and Q
# =========================================================================

def fuzzy_s_r(normalized: Sequence[Sequence[TriangularFuzzyNumber]],
              weights: Sequence[TriangularFuzzyNumber]
              ) -> Tuple[FuzzyVector, FuzzyVector]:
    """Fuzzy S (weighted sum) and R (weighted max) per alternative."""
    fuzzy_S = []
    fuzzy_R = []

    for row in normalized:
        weighted = [multiply(weights[j], d) for j, d in enumerate(row)]
        fuzzy_S.append(fuzzy_sum(weighted))
        fuzzy_R.append(fuzzy_max(weighted))

    return tuple(fuzzy_S), tuple(fuzzy_R)


def fuzzy_q(fuzzy_S: Sequence[TriangularFuzzyNumber],
            fuzzy_R: Sequence[TriangularFuzzyNumber],
            v: float,
            diagnostics: Optional[List[str]] = None
            ) -> FuzzyVector:
    """Fuzzy compromise index Q per alternative."""
    if not fuzzy_S:
        return ()

    S_star = fuzzy_min(fuzzy_S)
    R_star = fuzzy_min(fuzzy_R)

    S_range = max(s.u for s in fuzzy_S) - min(s.l for s in fuzzy_S)
    R_range = max(r.u for r in fuzzy_R) - min(r.l for r in fuzzy_R)

    if diagnostics is not None:
        for name, spread in (('S', S_range), ('R', R_range)):
            if spread == 0:
                message = f"{name} spread is zero, its contribution to Q set to fuzzy zero"
                logger.warning(message)
                diagnostics.append(message)

    fuzzy_Q = []
    for S_i, R_i in zip(fuzzy_S, fuzzy_R):
        S_term = scalar_multiply(scalar_divide(subtract(S_i, S_star), S_range), v)
        R_term = scalar_multiply(scalar_divide(subtract(R_i, R_star), R_range), 1 - v)
        fuzzy_Q.append(add(S_term, R_term))

    return tuple(fuzzy_Q)


# =========================================================================
# Step 7-8: Defuzzification and ranking
# =========================================================================

def rank_alternatives(S: Sequence[float],
                      R: Sequence[float],
                      Q: Sequence[float],
                      labels: Sequence[str]
                      ) -> Tuple[Tuple[RankedAlternative, ...], ...]:
    """
    Ascending rankings by S, R and Q.

    Sorting is stable: ties keep the input alternative order.
    """
    items = [
        RankedAlternative(alt_index=i, alt_label=labels[i], s=float(S[i]), r=float(R[i]), q=float(Q[i]))
        for i in range(len(labels))
    ]
    scores = pd.DataFrame({'s': S, 'r': R, 'q': Q}, index=range(len(labels)), dtype=float)

    rankings = []
    for key in ('s', 'r', 'q'):
        order = scores[key].sort_values(kind='mergesort').index
        rankings.append(tuple(items[i] for i in order))

    ranked_S, ranked_R, ranked_Q = rankings
    return ranked_S, ranked_R, ranked_Q


# =========================================================================
# Step 9: Acceptance conditions
# =========================================================================

def check_conditions(ranked_Q: Sequence[RankedAlternative],
                     ranked_S: Sequence[RankedAlternative],
                     ranked_R: Sequence[RankedAlternative]
                     ) -> CompromiseDecision:
    """Apply acceptable advantage (C1) and acceptable stability (C2)."""
    m = len(ranked_Q)
    if m == 0:
        raise ValueError("cannot select a compromise among zero alternatives")

    a1 = ranked_Q[0]
    a2 = ranked_Q[1] if m > 1 else None

    # A single alternative has no threshold to beat
    dq = 1 / (m - 1) if m > 1 else float('inf')
    advantage = a2.q - a1.q if a2 is not None else 0.0

    c1 = advantage >= dq
    c2 = ranked_S[0].alt_index == a1.alt_index or ranked_R[0].alt_index == a1.alt_index

    if c1 and c2:
        compromise_set = (a1.alt_label,)
    elif c1:
        compromise_set = (a1.alt_label, a2.alt_label)
    else:
        compromise_set = tuple(alt.alt_label for alt in ranked_Q if alt.q - a1.q < dq)

    return CompromiseDecision(
        advantage=advantage,
        dq=dq,
        advantage_condition=c1,
        stability_condition=c2,
        compromise_set=compromise_set,
    )


# =========================================================================
# Calculator
# =========================================================================

class FuzzyVIKOR:
    """
    Fuzzy VIKOR for group decisions expressed with linguistic terms.

    Parameters
    ----------
    v : float
        Weight of the maximum group utility (0-1)
        - v=0.5: consensus by majority (recommended)
        - v>0.5: emphasizes group utility
        - v<0.5: emphasizes individual regret

    Examples
    --------
    >>> from fvikor.mcdm import FuzzyVIKOR, TermDictionaries, CRITERIA_TERMS, ALTERNATIVE_TERMS
    >>> dictionaries = TermDictionaries.from_terms(CRITERIA_TERMS, ALTERNATIVE_TERMS)
    >>> calc = FuzzyVIKOR(v=0.5)
    >>> result = calc.calculate(
    ...     criteria_inputs=[['H', 'M']],
    ...     alternative_inputs=[[['G', 'F'], ['F', 'VG']]],
    ...     dictionaries=dictionaries,
    ...     benefit_cost=[True, False],
    ... )
    >>> result.compromise_solution in result.compromise_set
    True
    """

    def __init__(self, v: float = 0.5):
        if not 0 <= v <= 1:
            raise ValueError("v must be between 0 and 1")
        self.v = v

    def calculate(self,
                  criteria_inputs: Sequence[Sequence[str]],
                  alternative_inputs: Sequence[Sequence[Sequence[str]]],
                  dictionaries: TermDictionaries,
                  benefit_cost: Sequence[bool],
                  alternative_labels: Optional[Sequence[str]] = None,
                  criteria_labels: Optional[Sequence[str]] = None
                  ) -> FuzzyVIKORResult:
        """
        Run all nine steps.

        Parameters
        ----------
        criteria_inputs : [expert][criterion] importance short names
        alternative_inputs : [expert][alternative][criterion] rating short names
        dictionaries : criteria and alternative term dictionaries
        benefit_cost : one flag per criterion (True = benefit)
        alternative_labels, criteria_labels : display labels
        """
        criteria_tri = resolve_judgments(criteria_inputs, dictionaries.criteria)
        alternative_tri = resolve_judgments(alternative_inputs, dictionaries.alternatives)

        if criteria_tri.ndim != 3 or alternative_tri.ndim != 4:
            raise ValueError("judgment matrices must be [expert][criterion] and "
                             "[expert][alternative][criterion]")

        n_experts, n_criteria = criteria_tri.shape[:2]
        n_alternatives = alternative_tri.shape[1]
        if alternative_tri.shape[0] != n_experts:
            raise ValueError(f"criteria judgments cover {n_experts} experts, "
                             f"alternative judgments cover {alternative_tri.shape[0]}")
        if alternative_tri.shape[2] != n_criteria or len(benefit_cost) != n_criteria:
            raise ValueError("criterion count differs between weights, ratings and benefit/cost flags")

        if alternative_labels is None:
            alternative_labels = [f"A{i + 1}" for i in range(n_alternatives)]
        if criteria_labels is None:
            criteria_labels = [f"C{j + 1}" for j in range(n_criteria)]
        if len(alternative_labels) != n_alternatives:
            raise ValueError("alternative label count differs from the rating matrix")

        diagnostics: List[str] = []

        # Step 2: Aggregate experts
        criteria_weights = _to_vector(aggregate_judgments(criteria_tri))
        ratings = _to_matrix(aggregate_judgments(alternative_tri))

        # Step 3: Fuzzy best and worst values
        f_best, f_worst = fuzzy_ideal_values(ratings, benefit_cost)

        # Step 4: Normalized fuzzy differences
        normalized = normalized_differences(
            ratings, f_best, f_worst, benefit_cost, diagnostics, criteria_labels
        )

        # Step 5: Fuzzy S and R
        fuzzy_S, fuzzy_R = fuzzy_s_r(normalized, criteria_weights)

        # Step 6: Fuzzy Q
        fuzzy_Q = fuzzy_q(fuzzy_S, fuzzy_R, self.v, diagnostics)

        # Step 7: Defuzzify
        S = tuple(defuzzify(t) for t in fuzzy_S)
        R = tuple(defuzzify(t) for t in fuzzy_R)
        Q = tuple(defuzzify(t) for t in fuzzy_Q)

        # Step 8: Rank
        ranked_S, ranked_R, ranked_Q = rank_alternatives(S, R, Q, alternative_labels)

        # Step 9: Acceptance conditions
        decision = check_conditions(ranked_Q, ranked_S, ranked_R)

        logger.debug(f"Fuzzy VIKOR: {n_alternatives} alternatives, {n_criteria} criteria, "
                     f"{n_experts} experts, compromise set {list(decision.compromise_set)}")

        return FuzzyVIKORResult(
            alternative_labels=tuple(alternative_labels),
            criteria_labels=tuple(criteria_labels),
            benefit_cost=tuple(bool(b) for b in benefit_cost),
            v=self.v,
            criteria_weights=criteria_weights,
            alternative_ratings=ratings,
            f_best=f_best,
            f_worst=f_worst,
            normalized_diff=normalized,
            fuzzy_S=fuzzy_S,
            fuzzy_R=fuzzy_R,
            fuzzy_Q=fuzzy_Q,
            S=S,
            R=R,
            Q=Q,
            ranked_S=ranked_S,
            ranked_R=ranked_R,
            ranked_Q=ranked_Q,
            advantage=decision.advantage,
            dq=decision.dq,
            advantage_condition=decision.advantage_condition,
            stability_condition=decision.stability_condition,
            compromise_set=decision.compromise_set,
            diagnostics=tuple(diagnostics),
        )
