# -*- coding: utf-8 -*-
"""Fuzzy VIKOR calculation boundary and in-memory decision session."""

import time
from dataclasses import replace
from typing import Iterable, Optional

from .config import Config, ConfigurationError, ProblemConfig, get_config
from .logger import get_module_logger, timed_operation, PipelineLogger
from .data_loader import DecisionInputs, JudgmentMatrices, resize_inputs, example_inputs
from .mcdm.fuzzy_vikor import FuzzyVIKOR, FuzzyVIKORResult
from .mcdm.linguistic import (
    LinguisticTerm, TermDictionaries, TermSet, CRITERIA_TERMS, ALTERNATIVE_TERMS,
)

logger = get_module_logger('pipeline')


class CalculationError(RuntimeError):
    """A calculation run failed; no result was produced."""


def calculate(problem: ProblemConfig,
              dictionaries: TermDictionaries,
              judgments: JudgmentMatrices,
              config: Optional[Config] = None) -> FuzzyVIKORResult:
    """
    Run the full Fuzzy VIKOR pipeline on one input snapshot.

    Parameters
    ----------
    problem : ProblemConfig
        Counts, v, benefit/cost flags and labels
    dictionaries : TermDictionaries
        Criteria-importance and alternative-rating term dictionaries
    judgments : JudgmentMatrices
        Expert judgments as term short names

    Returns
    -------
    FuzzyVIKORResult
        Complete per-step result

    Raises
    ------
    ConfigurationError
        Invalid configuration, detected before the pipeline starts
    CalculationError
        Any failure inside the pipeline (malformed shapes, bad values)
    """
    config = config or get_config()
    problem.validate(config.vikor.max_count)

    try:
        with timed_operation(logger, "fuzzy VIKOR calculation"):
            judgments.check_shape(problem.n_experts, problem.n_alternatives, problem.n_criteria)
            calc = FuzzyVIKOR(v=problem.v)
            return calc.calculate(
                criteria_inputs=judgments.criteria_inputs,
                alternative_inputs=judgments.alternative_inputs,
                dictionaries=dictionaries,
                benefit_cost=problem.benefit_cost,
                alternative_labels=problem.alternative_labels,
                criteria_labels=problem.criteria_labels,
            )
    except Exception as e:
        logger.error(f"Calculation failed: {e}", exc_info=True)
        raise CalculationError(f"Fuzzy VIKOR calculation failed: {e}") from e


def calculate_inputs(inputs: DecisionInputs, config: Optional[Config] = None) -> FuzzyVIKORResult:
    """``calculate`` on a ``DecisionInputs`` bundle."""
    return calculate(inputs.problem, inputs.dictionaries, inputs.judgments, config)


class DecisionSession:
    """
    Mutable working state of one decision problem.

    Holds the current problem configuration, both term sets, the judgment
    matrices and the last successful result. Every edit produces new
    immutable input objects; ``run`` calculates on a snapshot and replaces
    ``result`` only when the run succeeds.

    Parameters
    ----------
    inputs : DecisionInputs, optional
        Initial inputs; defaults to a 1x1x1 problem with default terms
    config : Config, optional
        Package configuration
    """

    def __init__(self, inputs: Optional[DecisionInputs] = None, config: Optional[Config] = None):
        self.config = config or get_config()
        vikor = self.config.vikor

        if inputs is None:
            problem = ProblemConfig.default(1, 1, 1, config=self.config)
            inputs = DecisionInputs(
                problem=problem,
                criteria_terms=CRITERIA_TERMS,
                alternative_terms=ALTERNATIVE_TERMS,
                judgments=JudgmentMatrices.filled(1, 1, 1, CRITERIA_TERMS[0].short_name,
                                                  ALTERNATIVE_TERMS[0].short_name),
            )

        self.criteria_terms = TermSet(inputs.criteria_terms, vikor.fallback_criteria_term)
        self.alternative_terms = TermSet(inputs.alternative_terms, vikor.fallback_alternative_term)
        self._inputs = replace(inputs,
                               criteria_terms=self.criteria_terms.terms,
                               alternative_terms=self.alternative_terms.terms)
        self.result: Optional[FuzzyVIKORResult] = None
        self.last_error: Optional[CalculationError] = None
        self.reporter = PipelineLogger(logger)

    # -----------------------------------------------------------------
    # State access
    # -----------------------------------------------------------------

    @property
    def inputs(self) -> DecisionInputs:
        return self._inputs

    @property
    def problem(self) -> ProblemConfig:
        return self._inputs.problem

    @property
    def judgments(self) -> JudgmentMatrices:
        return self._inputs.judgments

    # -----------------------------------------------------------------
    # Edits
    # -----------------------------------------------------------------

    def set_counts(self,
                   n_alternatives: Optional[int] = None,
                   n_criteria: Optional[int] = None,
                   n_experts: Optional[int] = None) -> None:
        """Change problem dimensions, preserving overlapping inputs."""
        max_count = self.config.vikor.max_count
        for name, value in (('n_alternatives', n_alternatives),
                            ('n_criteria', n_criteria),
                            ('n_experts', n_experts)):
            if value is None:
                continue
            if isinstance(value, bool) or not isinstance(value, int) or not 1 <= value <= max_count:
                raise ConfigurationError(f"{name} must be an integer between 1 and {max_count}, got {value!r}")

        self._inputs = resize_inputs(self._inputs, n_alternatives, n_criteria, n_experts, self.config)

    def set_v(self, v: float) -> None:
        problem = self.problem.with_changes(v=v).validate(self.config.vikor.max_count)
        self._inputs = replace(self._inputs, problem=problem)

    def set_benefit(self, criterion: int, is_benefit: bool) -> None:
        flags = list(self.problem.benefit_cost)
        flags[criterion] = bool(is_benefit)
        self._set_problem(benefit_cost=tuple(flags))

    def toggle_benefit_cost(self, criterion: int) -> None:
        self.set_benefit(criterion, not self.problem.benefit_cost[criterion])

    def set_label(self, kind: str, index: int, label: str) -> None:
        """Rename an alternative, criterion or expert."""
        field_name = {
            'alternative': 'alternative_labels',
            'criterion': 'criteria_labels',
            'expert': 'expert_labels',
        }[kind]
        labels = list(getattr(self.problem, field_name))
        labels[index] = label
        self._set_problem(**{field_name: tuple(labels)})

    def set_criteria_judgment(self, expert: int, criterion: int, term: str) -> None:
        self._inputs = replace(self._inputs,
                               judgments=self.judgments.with_criteria_judgment(expert, criterion, term))

    def set_alternative_judgment(self, expert: int, alternative: int, criterion: int, term: str) -> None:
        self._inputs = replace(
            self._inputs,
            judgments=self.judgments.with_alternative_judgment(expert, alternative, criterion, term),
        )

    def update_criteria_terms(self, terms: Iterable[LinguisticTerm]) -> None:
        """Validate, rescale and install a new criteria term set."""
        self.criteria_terms.replace(terms)
        self._inputs = replace(self._inputs, criteria_terms=self.criteria_terms.terms)

    def update_alternative_terms(self, terms: Iterable[LinguisticTerm]) -> None:
        """Validate, rescale and install a new alternative term set."""
        self.alternative_terms.replace(terms)
        self._inputs = replace(self._inputs, alternative_terms=self.alternative_terms.terms)

    def reset_inputs(self) -> None:
        """
        Refill every judgment with the first term, reset labels, flags and v.

        Counts and term sets are kept.
        """
        problem = self.problem
        fresh = ProblemConfig.default(problem.n_alternatives, problem.n_criteria, problem.n_experts,
                                      config=self.config)
        self._inputs = replace(
            self._inputs,
            problem=fresh,
            judgments=JudgmentMatrices.filled(
                problem.n_experts, problem.n_alternatives, problem.n_criteria,
                self.criteria_terms.default_short_name,
                self.alternative_terms.default_short_name,
            ),
        )

    def _set_problem(self, **changes) -> None:
        self._inputs = replace(self._inputs, problem=self.problem.with_changes(**changes))

    # -----------------------------------------------------------------
    # Calculation
    # -----------------------------------------------------------------

    def run(self) -> FuzzyVIKORResult:
        """
        Calculate on the current inputs.

        On failure the previous ``result`` is kept and the error re-raised.
        """
        snapshot = self._inputs
        start = time.perf_counter()
        try:
            result = calculate_inputs(snapshot, self.config)
        except CalculationError as e:
            self.last_error = e
            self.reporter.step(f"Calculation failed: {e}", status="error")
            raise

        self.result = result
        self.last_error = None
        self._report(result, time.perf_counter() - start)
        return result

    def _report(self, result: FuzzyVIKORResult, elapsed: float) -> None:
        self.reporter.banner("FUZZY VIKOR")
        self.reporter.metrics({
            'Alternatives': result.n_alternatives,
            'Criteria': len(result.criteria_labels),
            'v': result.v,
            'Adv': result.advantage,
            'DQ': result.dq,
        })
        self.reporter.ranking([(item.alt_label, item.q) for item in result.ranked_Q],
                              title="Ranking by Q", top_n=len(result.ranked_Q))
        self.reporter.step(f"C1 acceptable advantage: {'met' if result.advantage_condition else 'not met'}")
        self.reporter.step(f"C2 acceptable stability: {'met' if result.stability_condition else 'not met'}")
        for message in result.diagnostics:
            self.reporter.step(message, status="warn")
        self.reporter.step(f"Compromise set: {', '.join(result.compromise_set)} ({elapsed:.4f}s)",
                           status="done")


def example_session(config: Optional[Config] = None) -> DecisionSession:
    """Session preloaded with the worked example."""
    return DecisionSession(example_inputs(), config)
