# -*- coding: utf-8 -*-
"""
Sensitivity Analysis
====================

Strategy-weight (v) sensitivity of the Fuzzy VIKOR ranking.
"""

import numpy as np
import pandas as pd
from typing import Dict, List, Optional, Sequence, Tuple
from dataclasses import dataclass
from scipy.stats import spearmanr

from ..config import Config, get_config
from ..data_loader import DecisionInputs
from ..logger import get_module_logger
from ..pipeline import calculate_inputs
from ..mcdm.fuzzy_vikor import FuzzyVIKORResult

logger = get_module_logger('analysis.sensitivity')


@dataclass
class VSensitivityResult:
    """Result container for v sensitivity analysis."""
    Q: pd.DataFrame                          # alternatives x v, crisp Q
    ranks: pd.DataFrame                      # alternatives x v, position in Q ranking
    compromise_sets: Dict[float, Tuple[str, ...]]
    rank_correlation: pd.Series              # Spearman rho vs. baseline v
    baseline_v: float
    results: Dict[float, FuzzyVIKORResult]

    @property
    def leaders(self) -> pd.Series:
        """Best alternative by Q for each v."""
        return self.ranks.idxmin(axis=0)

    @property
    def stable_leader(self) -> bool:
        """True when every v puts the same alternative first."""
        return self.leaders.nunique() == 1

    def summary(self) -> str:
        lines = [
            f"\n{'='*60}",
            "v SENSITIVITY ANALYSIS",
            f"{'='*60}",
            f"Baseline v: {self.baseline_v:.2f}",
            f"Stable leader: {'yes' if self.stable_leader else 'no'}",
            f"\n{'─'*30}",
            "Q RANK POSITIONS",
            f"{'─'*30}",
            self.ranks.to_string(),
            f"\n{'─'*30}",
            "COMPROMISE SETS",
            f"{'─'*30}",
        ]
        for v, members in self.compromise_sets.items():
            rho = self.rank_correlation[v]
            lines.append(f"  v={v:.2f}: {', '.join(members)} (rho={rho:.3f})")
        lines.append("=" * 60)
        return "\n".join(lines)


class VSensitivityAnalysis:
    """
    Re-run Fuzzy VIKOR over a grid of strategy weights.

    Parameters
    ----------
    v_values : sequence of float, optional
        Grid of v values; defaults to ``VIKORConfig.v_sensitivity``
    """

    def __init__(self, v_values: Optional[Sequence[float]] = None, config: Optional[Config] = None):
        self.config = config or get_config()
        if v_values is None:
            v_values = self.config.vikor.v_sensitivity
        v_values = sorted({float(v) for v in v_values})
        if not v_values:
            raise ValueError("at least one v value is required")
        if any(not 0 <= v <= 1 for v in v_values):
            raise ValueError("v values must be between 0 and 1")
        self.v_values = v_values

    def analyze(self, inputs: DecisionInputs, baseline_v: Optional[float] = None) -> VSensitivityResult:
        """
        Calculate every v in the grid (plus the baseline) on the same inputs.

        Parameters
        ----------
        inputs : DecisionInputs
            Inputs; their own v is the default baseline
        baseline_v : float, optional
            v whose Q ranking the others are correlated against
        """
        baseline_v = inputs.problem.v if baseline_v is None else float(baseline_v)
        grid = sorted(set(self.v_values) | {baseline_v})
        labels = list(inputs.problem.alternative_labels)

        results: Dict[float, FuzzyVIKORResult] = {}
        for v in grid:
            variant = DecisionInputs(
                problem=inputs.problem.with_changes(v=v),
                criteria_terms=inputs.criteria_terms,
                alternative_terms=inputs.alternative_terms,
                judgments=inputs.judgments,
            )
            results[v] = calculate_inputs(variant, self.config)

        Q = pd.DataFrame({v: list(r.Q) for v, r in results.items()},
                         index=pd.Index(labels, name='Alternative'))
        ranks = pd.DataFrame({v: self._positions(r) for v, r in results.items()},
                             index=pd.Index(labels, name='Alternative'))

        base_ranks = ranks[baseline_v].to_numpy()
        correlation = pd.Series(
            {v: self._spearman(base_ranks, ranks[v].to_numpy()) for v in grid},
            name='spearman_rho'
        )

        compromise_sets = {v: r.compromise_set for v, r in results.items()}

        logger.info(f"v sensitivity: {len(grid)} runs, "
                    f"min rank correlation {correlation.min():.3f}")

        return VSensitivityResult(
            Q=Q,
            ranks=ranks,
            compromise_sets=compromise_sets,
            rank_correlation=correlation,
            baseline_v=baseline_v,
            results=results,
        )

    @staticmethod
    def _positions(result: FuzzyVIKORResult) -> List[int]:
        positions = {item.alt_index: pos for pos, item in enumerate(result.ranked_Q, 1)}
        return [positions[i] for i in range(result.n_alternatives)]

    @staticmethod
    def _spearman(a: np.ndarray, b: np.ndarray) -> float:
        if len(a) < 2:
            return 1.0
        rho, _ = spearmanr(a, b)
        return float(rho)
