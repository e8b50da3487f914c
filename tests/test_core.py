# -*- coding: utf-8 -*-
"""
Core unit tests for Fuzzy VIKOR.

Tests cover:
- Configuration management
- Triangular fuzzy number algebra
- Linguistic term validation, rescaling and lookup
- Aggregation, ideal/nadir values, ranking and compromise selection
- Resize routines and input loading
- End-to-end calculations and the decision session
- v sensitivity analysis
- Logging setup
"""

import json
import pytest
import numpy as np
import pandas as pd
from dataclasses import replace
from pathlib import Path
import sys

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))


def tfn(l, m, u):
    from fvikor.mcdm.fuzzy_base import TriangularFuzzyNumber
    return TriangularFuzzyNumber(l, m, u)


class TestConfig:
    """Test configuration module."""

    def test_default_config_creation(self):
        from fvikor.config import get_default_config
        config = get_default_config()
        assert config.vikor.v == 0.5
        assert config.vikor.max_count == 20
        assert config.vikor.v_sensitivity == [0.0, 0.25, 0.5, 0.75, 1.0]

    def test_config_to_dict(self):
        from fvikor.config import get_default_config
        data = get_default_config().to_dict()
        assert data['vikor']['v'] == 0.5
        assert data['logging']['level'] == "INFO"

    def test_set_and_reset_config(self):
        from fvikor.config import get_config, get_default_config, set_config, reset_config
        config = get_default_config()
        config.vikor.max_count = 3
        set_config(config)
        assert get_config().vikor.max_count == 3
        reset_config()
        assert get_config().vikor.max_count == 20

    def test_problem_default_labels(self):
        from fvikor.config import ProblemConfig
        problem = ProblemConfig.default(2, 3, 1)
        assert problem.alternative_labels == ("Alternative 1", "Alternative 2")
        assert problem.criteria_labels == ("Criterion 1", "Criterion 2", "Criterion 3")
        assert problem.expert_labels == ("Expert 1",)
        assert problem.benefit_cost == (True, True, True)
        assert problem.validate() is problem

    @pytest.mark.parametrize("changes", [
        {'n_alternatives': 0},
        {'n_experts': 21},
        {'n_criteria': True},
        {'v': 1.5},
        {'v': -0.1},
        {'v': "0.5"},
        {'v': None},
        {'alternative_labels': ("only one",)},
        {'benefit_cost': (True,)},
    ])
    def test_problem_validation_rejects(self, changes):
        from fvikor.config import ProblemConfig, ConfigurationError
        problem = ProblemConfig.default(2, 2, 2).with_changes(**changes)
        with pytest.raises(ConfigurationError):
            problem.validate()


class TestFuzzyAlgebra:
    """Test triangular fuzzy number arithmetic."""

    def test_add(self):
        from fvikor.mcdm.fuzzy_base import add
        result = add(tfn(0.1, 0.3, 0.5), tfn(0.5, 0.7, 0.9))
        assert result.as_tuple() == pytest.approx((0.6, 1.0, 1.4))

    def test_subtract_is_asymmetric(self):
        from fvikor.mcdm.fuzzy_base import subtract
        a = tfn(0.1, 0.3, 0.5)
        result = subtract(a, a)
        assert result.as_tuple() == pytest.approx((a.l - a.u, 0.0, a.u - a.l))
        assert result.as_tuple() == pytest.approx((-0.4, 0.0, 0.4))

    def test_subtract_formula(self):
        result = tfn(0.5, 0.7, 0.9) - tfn(0.1, 0.3, 0.5)
        assert result.as_tuple() == pytest.approx((0.0, 0.4, 0.8))

    def test_commutative_and_associative(self):
        from fvikor.mcdm.fuzzy_base import add, multiply, component_max, component_min
        a, b, c = tfn(0.1, 0.3, 0.5), tfn(0.2, 0.5, 0.6), tfn(0.0, 0.4, 0.9)
        for op in (add, multiply, component_max, component_min):
            assert op(a, b).as_tuple() == pytest.approx(op(b, a).as_tuple())
            assert op(op(a, b), c).as_tuple() == pytest.approx(op(a, op(b, c)).as_tuple())

    def test_component_max_min(self):
        from fvikor.mcdm.fuzzy_base import component_max, component_min
        a, b = tfn(0.1, 0.6, 0.7), tfn(0.2, 0.5, 0.9)
        assert component_max(a, b) == tfn(0.2, 0.6, 0.9)
        assert component_min(a, b) == tfn(0.1, 0.5, 0.7)

    def test_scalar_operations(self):
        from fvikor.mcdm.fuzzy_base import scalar_multiply, scalar_divide
        a = tfn(0.2, 0.4, 0.8)
        assert scalar_multiply(a, 0.5).as_tuple() == pytest.approx((0.1, 0.2, 0.4))
        assert scalar_divide(a, 2).as_tuple() == pytest.approx((0.1, 0.2, 0.4))
        assert (2 * a).as_tuple() == pytest.approx((0.4, 0.8, 1.6))

    def test_divide_by_zero_returns_fuzzy_zero(self):
        from fvikor.mcdm.fuzzy_base import scalar_divide, FUZZY_ZERO
        assert scalar_divide(tfn(0.3, 0.5, 0.7), 0) == FUZZY_ZERO
        assert tfn(-1.0, 2.0, 5.0) / 0 == FUZZY_ZERO

    def test_defuzzify(self):
        from fvikor.mcdm.fuzzy_base import defuzzify
        assert defuzzify(tfn(2, 2, 2)) == pytest.approx(2.0)
        assert defuzzify(tfn(0, 4, 8)) == pytest.approx(4.0)
        assert tfn(0.1, 0.3, 0.5).defuzzify() == pytest.approx(0.3)

    def test_folds(self):
        from fvikor.mcdm.fuzzy_base import fuzzy_sum, fuzzy_max, fuzzy_min, FUZZY_ZERO
        values = [tfn(0.1, 0.5, 0.6), tfn(0.2, 0.3, 0.9)]
        assert fuzzy_sum(values).as_tuple() == pytest.approx((0.3, 0.8, 1.5))
        assert fuzzy_max(values) == tfn(0.2, 0.5, 0.9)
        assert fuzzy_min(values) == tfn(0.1, 0.3, 0.6)
        assert fuzzy_sum([]) == FUZZY_ZERO
        assert fuzzy_max([]) == FUZZY_ZERO

    def test_array_conversion(self):
        from fvikor.mcdm.fuzzy_base import TriangularFuzzyNumber
        a = tfn(0.1, 0.2, 0.3)
        assert TriangularFuzzyNumber.from_array(a.as_array()) == a
        assert a.as_array().shape == (3,)


class TestLinguisticTerms:
    """Test term validation, rescaling and dictionaries."""

    @staticmethod
    def _term(name, short_name, l, m, u, term_id=None):
        from fvikor.mcdm.linguistic import LinguisticTerm
        kwargs = {'id': term_id} if term_id else {}
        return LinguisticTerm(name=name, short_name=short_name, tri=tfn(l, m, u), **kwargs)

    def test_default_terms_are_valid(self):
        from fvikor.mcdm.linguistic import validate_terms, CRITERIA_TERMS, ALTERNATIVE_TERMS
        assert validate_terms(CRITERIA_TERMS).valid
        assert validate_terms(ALTERNATIVE_TERMS).valid

    def test_field_errors(self):
        from fvikor.mcdm.linguistic import validate_terms
        terms = [
            self._term("", "A", 0.1, 0.2, 0.3, term_id="t1"),
            self._term("Bad order", "B", 0.5, 0.2, 0.3, term_id="t2"),
            self._term("Point", "C", 0.4, 0.4, 0.4, term_id="t3"),
            self._term("Dup", "A", 0.1, 0.5, 0.3, term_id="t4"),
        ]
        result = validate_terms(terms)
        assert not result.valid
        assert result.errors["t1"] == {'name': "required"}
        assert result.errors["t2"] == {'l': "l <= m"}
        assert result.errors["t3"] == {'l': "l != u", 'u': "l != u"}
        assert result.errors["t4"] == {'short_name': "duplicate", 'm': "m <= u"}
        assert result.global_errors == []

    def test_minimum_term_count(self):
        from fvikor.mcdm.linguistic import validate_terms
        result = validate_terms([self._term("Only", "O", 0.0, 0.5, 1.0)])
        assert not result.valid
        assert result.global_errors

    def test_save_rescales_when_above_one(self):
        from fvikor.mcdm.linguistic import save_terms
        saved = save_terms([
            self._term("Low", "L", 0.0, 1.0, 2.0),
            self._term("High", "H", 1.0, 1.5, 4.0),
        ])
        assert saved[0].tri.as_tuple() == pytest.approx((0.0, 0.25, 0.5))
        assert saved[1].tri.as_tuple() == pytest.approx((0.25, 0.375, 1.0))

    def test_save_leaves_unit_scale_untouched(self):
        from fvikor.mcdm.linguistic import save_terms, CRITERIA_TERMS
        assert save_terms(CRITERIA_TERMS) == CRITERIA_TERMS

    def test_save_rejects_invalid(self):
        from fvikor.mcdm.linguistic import save_terms, TermValidationError
        with pytest.raises(TermValidationError) as exc_info:
            save_terms([self._term("X", "X", 0.0, 0.5, 1.0), self._term("Y", "X", 0.0, 0.5, 1.0)])
        assert not exc_info.value.result.valid

    def test_lookup_miss_is_fuzzy_zero(self):
        from fvikor.mcdm.linguistic import lookup, CRITERIA_SCALE
        from fvikor.mcdm.fuzzy_base import FUZZY_ZERO
        assert lookup(CRITERIA_SCALE, "H") == tfn(0.5, 0.7, 0.9)
        assert lookup(CRITERIA_SCALE, "nope") == FUZZY_ZERO

    def test_term_set_floor(self):
        from fvikor.mcdm.linguistic import TermSet, TermValidationError
        terms = TermSet([self._term("Low", "L", 0.0, 0.2, 0.4, term_id="lo"),
                         self._term("High", "H", 0.6, 0.8, 1.0, term_id="hi")])
        with pytest.raises(TermValidationError):
            terms.remove_term("lo")
        assert len(terms) == 2

    def test_term_set_edits(self):
        from fvikor.mcdm.linguistic import TermSet, ALTERNATIVE_TERMS
        terms = TermSet(ALTERNATIVE_TERMS)
        added = terms.add_term("Outstanding", "O", tfn(0.9, 1.5, 2.0))
        # Whole set rescaled by the new maximum upper bound
        assert added.tri.as_tuple() == pytest.approx((0.45, 0.75, 1.0))
        assert terms.get("a6").tri.as_tuple() == pytest.approx((0.4, 0.45, 0.5))

        terms.update_term(added.id, short_name="OUT")
        assert "OUT" in terms.dictionary

        terms.remove_term(added.id)
        assert len(terms) == len(ALTERNATIVE_TERMS)
        assert terms.default_short_name == "VP"

        with pytest.raises(KeyError):
            terms.get("missing")


class TestAggregation:
    """Test expert aggregation and ideal/nadir values."""

    def test_aggregate_fuzzy(self):
        from fvikor.mcdm.fuzzy_vikor import aggregate_fuzzy
        result = aggregate_fuzzy([tfn(0, 0.5, 1), tfn(0.2, 0.5, 0.8), tfn(0.1, 0.5, 0.9)])
        assert result.as_tuple() == pytest.approx((0.0, 0.5, 1.0))

    def test_resolve_and_aggregate_matrix(self):
        from fvikor.mcdm.fuzzy_vikor import resolve_judgments, aggregate_judgments
        from fvikor.mcdm.linguistic import CRITERIA_SCALE
        resolved = resolve_judgments([["L", "H"], ["M", "unknown"]], CRITERIA_SCALE)
        assert resolved.shape == (2, 2, 3)
        np.testing.assert_allclose(resolved[1, 1], [0.0, 0.0, 0.0])

        aggregated = aggregate_judgments(resolved)
        np.testing.assert_allclose(aggregated[0], [0.1, 0.4, 0.7])
        np.testing.assert_allclose(aggregated[1], [0.0, 0.35, 0.9])

    def test_aggregate_requires_experts(self):
        from fvikor.mcdm.fuzzy_vikor import aggregate_judgments
        with pytest.raises(ValueError):
            aggregate_judgments(np.zeros((0, 2, 3)))

    def test_ideal_values_benefit_and_cost(self):
        from fvikor.mcdm.fuzzy_vikor import fuzzy_ideal_values
        ratings = [[tfn(0, 0.2, 0.4)], [tfn(0.4, 0.6, 0.8)]]

        f_best, f_worst = fuzzy_ideal_values(ratings, [True])
        assert f_best[0] == tfn(0.4, 0.6, 0.8)
        assert f_worst[0] == tfn(0, 0.2, 0.4)

        f_best, f_worst = fuzzy_ideal_values(ratings, [False])
        assert f_best[0] == tfn(0, 0.2, 0.4)
        assert f_worst[0] == tfn(0.4, 0.6, 0.8)

    def test_ideal_values_are_componentwise(self):
        from fvikor.mcdm.fuzzy_vikor import fuzzy_ideal_values
        ratings = [[tfn(0.1, 0.7, 0.8)], [tfn(0.3, 0.4, 0.9)]]
        f_best, f_worst = fuzzy_ideal_values(ratings, [True])
        assert f_best[0] == tfn(0.3, 0.7, 0.9)
        assert f_worst[0] == tfn(0.1, 0.4, 0.8)

    def test_empty_criteria_regret_is_zero(self):
        from fvikor.mcdm.fuzzy_vikor import fuzzy_s_r
        from fvikor.mcdm.fuzzy_base import FUZZY_ZERO
        fuzzy_S, fuzzy_R = fuzzy_s_r([()], ())
        assert fuzzy_S == (FUZZY_ZERO,)
        assert fuzzy_R == (FUZZY_ZERO,)


class TestRankingAndCompromise:
    """Test ranking order and the acceptance conditions."""

    @staticmethod
    def _alt(index, q, s=0.0, r=0.0):
        from fvikor.mcdm.fuzzy_vikor import RankedAlternative
        return RankedAlternative(alt_index=index, alt_label=f"A{index + 1}", s=s, r=r, q=q)

    def test_rankings_are_ascending_and_stable(self):
        from fvikor.mcdm.fuzzy_vikor import rank_alternatives
        ranked_S, ranked_R, ranked_Q = rank_alternatives(
            S=[0.2, 0.1, 0.2], R=[0.3, 0.3, 0.1], Q=[0.5, 0.5, 0.5], labels=["A", "B", "C"]
        )
        assert [a.alt_label for a in ranked_S] == ["B", "A", "C"]
        assert [a.alt_label for a in ranked_R] == ["C", "A", "B"]
        assert [a.alt_label for a in ranked_Q] == ["A", "B", "C"]
        assert ranked_S[0].q == 0.5 and ranked_S[0].r == 0.3

    def test_compromise_set_when_advantage_fails(self):
        from fvikor.mcdm.fuzzy_vikor import check_conditions
        a1, a2, a3 = self._alt(0, 0.10), self._alt(1, 0.30), self._alt(2, 0.50)
        decision = check_conditions(ranked_Q=[a1, a2, a3], ranked_S=[a1, a3, a2], ranked_R=[a2, a1, a3])

        assert decision.dq == pytest.approx(0.5)
        assert decision.advantage == pytest.approx(0.2)
        assert not decision.advantage_condition
        assert decision.stability_condition
        assert decision.compromise_set == ("A1", "A2", "A3")

    def test_compromise_set_excludes_distant_alternatives(self):
        from fvikor.mcdm.fuzzy_vikor import check_conditions
        a1, a2, a3 = self._alt(0, 0.0), self._alt(1, 0.3), self._alt(2, 0.8)
        decision = check_conditions([a1, a2, a3], [a1, a2, a3], [a1, a2, a3])
        assert decision.compromise_set == ("A1", "A2")

    def test_both_conditions_met(self):
        from fvikor.mcdm.fuzzy_vikor import check_conditions
        a1, a2, a3 = self._alt(0, 0.0), self._alt(1, 0.6), self._alt(2, 0.9)
        decision = check_conditions([a1, a2, a3], [a1, a2, a3], [a3, a1, a2])
        assert decision.advantage_condition and decision.stability_condition
        assert decision.compromise_set == ("A1",)

    def test_advantage_without_stability(self):
        from fvikor.mcdm.fuzzy_vikor import check_conditions
        a1, a2, a3 = self._alt(0, 0.0), self._alt(1, 0.6), self._alt(2, 0.9)
        decision = check_conditions([a1, a2, a3], [a2, a1, a3], [a3, a2, a1])
        assert decision.advantage_condition
        assert not decision.stability_condition
        assert decision.compromise_set == ("A1", "A2")

    def test_single_alternative(self):
        from fvikor.mcdm.fuzzy_vikor import check_conditions
        only = self._alt(0, 0.0)
        decision = check_conditions([only], [only], [only])
        assert decision.dq == float('inf')
        assert decision.advantage == 0.0
        assert not decision.advantage_condition
        assert decision.stability_condition
        assert decision.compromise_set == ("A1",)

    def test_no_alternatives(self):
        from fvikor.mcdm.fuzzy_vikor import check_conditions
        with pytest.raises(ValueError):
            check_conditions([], [], [])


class TestResize:
    """Test resize routines and input loading."""

    def test_resize_2d_round_trip(self):
        from fvikor.data_loader import resize_2d
        grid = (("a", "b", "c"), ("d", "e", "f"))
        grown = resize_2d(grid, 4, 5, "x")
        assert grown[0] == ("a", "b", "c", "x", "x")
        assert grown[3] == ("x",) * 5
        assert resize_2d(grown, 2, 3, "x") == grid

    def test_resize_3d_round_trip(self):
        from fvikor.data_loader import resize_3d
        cube = ((("a", "b"), ("c", "d")),)
        grown = resize_3d(cube, 2, 3, 4, "x")
        assert grown[0][1] == ("c", "d", "x", "x")
        assert grown[1][0] == ("x",) * 4
        assert resize_3d(grown, 1, 2, 2, "x") == cube

    def test_resize_shrinks(self):
        from fvikor.data_loader import resize_2d
        assert resize_2d((("a", "b"), ("c", "d")), 1, 1, "x") == (("a",),)

    def test_resize_labels_and_flags(self):
        from fvikor.data_loader import resize_labels, resize_flags
        assert resize_labels(("Cost",), 3, "Criterion") == ("Cost", "Criterion 2", "Criterion 3")
        assert resize_labels(("a", "b", "c"), 1, "X") == ("a",)
        assert resize_flags((False,), 2) == (False, True)

    def test_resize_inputs(self, example_inputs):
        from fvikor.data_loader import resize_inputs
        resized = resize_inputs(example_inputs, n_criteria=5, n_experts=2)
        problem = resized.problem

        assert problem.n_criteria == 5 and problem.n_experts == 2 and problem.n_alternatives == 5
        assert problem.benefit_cost == (False, True, True, False, True)
        assert problem.criteria_labels[-1] == "Criterion 5"
        assert problem.expert_labels == ("D1", "D2")
        assert resized.judgments.shape == (2, 5, 5)
        assert resized.judgments.criteria_inputs[0][4] == "VL"
        assert resized.judgments.alternative_inputs[1][2][4] == "VP"
        resized.problem.validate()

        restored = resize_inputs(resized, n_criteria=4, n_experts=2)
        assert restored.judgments.criteria_inputs == example_inputs.judgments.criteria_inputs[:2]

    def test_load_inputs(self):
        from fvikor.data_loader import load_inputs
        inputs = load_inputs({
            'criteria_inputs': [["H", "L"]],
            'alternative_inputs': [[["G", "F"], ["F", "VG"]]],
            'benefit_cost': [True, False],
            'alternative_labels': ["North site"],
            'v': 0.3,
        })
        assert inputs.problem.n_alternatives == 2
        assert inputs.problem.n_criteria == 2
        assert inputs.problem.n_experts == 1
        assert inputs.problem.v == 0.3
        assert inputs.problem.alternative_labels == ("North site", "Alternative 2")
        assert inputs.problem.benefit_cost == (True, False)
        assert inputs.dictionaries.criteria["H"] == tfn(0.5, 0.7, 0.9)

    def test_load_inputs_with_custom_terms(self):
        from fvikor.data_loader import load_inputs
        inputs = load_inputs({
            'criteria_inputs': [["A"]],
            'alternative_inputs': [[["A"]]],
            'criteria_terms': [
                {'name': "Lo", 'short_name': "A", 'tri': [0, 5, 10]},
                {'name': "Hi", 'short_name': "B", 'tri': {'l': 5, 'm': 10, 'u': 20}},
            ],
        })
        assert inputs.dictionaries.criteria["A"].as_tuple() == pytest.approx((0.0, 0.25, 0.5))

    def test_load_inputs_missing_key(self):
        from fvikor.data_loader import load_inputs
        with pytest.raises(KeyError):
            load_inputs({'criteria_inputs': [["H"]]})

    def test_check_shape(self):
        from fvikor.data_loader import JudgmentMatrices
        judgments = JudgmentMatrices.filled(2, 3, 4, "M", "F")
        assert judgments.shape == (2, 3, 4)
        judgments.check_shape(2, 3, 4)
        with pytest.raises(ValueError):
            judgments.check_shape(2, 4, 4)

    def test_resize_order_independent(self, example_inputs):
        from fvikor.data_loader import resize_inputs
        alternatives_first = resize_inputs(resize_inputs(example_inputs, n_alternatives=3), n_criteria=6)
        criteria_first = resize_inputs(resize_inputs(example_inputs, n_criteria=6), n_alternatives=3)
        assert alternatives_first == criteria_first

        combined = resize_inputs(example_inputs, n_alternatives=3, n_criteria=6)
        assert combined == alternatives_first

    def test_resize_idempotent(self, example_inputs):
        from fvikor.data_loader import resize_inputs
        once = resize_inputs(example_inputs, n_alternatives=7, n_criteria=2, n_experts=4)
        twice = resize_inputs(once, n_alternatives=7, n_criteria=2, n_experts=4)
        assert twice == once
        assert resize_inputs(example_inputs) == example_inputs


class TestFuzzyVIKOR:
    """Test full Fuzzy VIKOR calculations."""

    def test_invalid_v(self):
        from fvikor.mcdm.fuzzy_vikor import FuzzyVIKOR
        with pytest.raises(ValueError):
            FuzzyVIKOR(v=1.5)

    def test_benefit_and_cost_scenario(self, low_high_dictionaries):
        from fvikor.mcdm.fuzzy_vikor import FuzzyVIKOR
        result = FuzzyVIKOR(v=0.5).calculate(
            criteria_inputs=[["H", "H"]],
            alternative_inputs=[[["H", "L"], ["L", "H"]]],
            dictionaries=low_high_dictionaries,
            benefit_cost=[True, False],
        )

        # A1 is rated high on the benefit criterion and low on the cost one
        assert result.S == pytest.approx((0.1, 0.8))
        assert result.R == pytest.approx((0.05, 0.4))
        assert result.Q == pytest.approx((0.0, 7 / 23))
        assert result.fuzzy_S[0].as_tuple() == pytest.approx((-0.5, 0.0, 0.9))
        assert result.fuzzy_R[1].as_tuple() == pytest.approx((0.0, 0.35, 0.9))

        assert result.dq == pytest.approx(1.0)
        assert result.advantage == pytest.approx(7 / 23)
        assert not result.advantage_condition
        assert result.stability_condition
        assert result.compromise_set == ("A1", "A2")
        assert result.compromise_solution == "A1"
        assert result.diagnostics == ()

    def test_symmetric_scenario(self, low_high_dictionaries):
        from fvikor.mcdm.fuzzy_vikor import FuzzyVIKOR
        result = FuzzyVIKOR(v=0.5).calculate(
            criteria_inputs=[["H", "H"]],
            alternative_inputs=[[["H", "L"], ["L", "H"]]],
            dictionaries=low_high_dictionaries,
            benefit_cost=[True, True],
        )

        assert result.S[0] == pytest.approx(result.S[1])
        assert result.R[0] == pytest.approx(result.R[1])
        assert result.Q[0] == pytest.approx(result.Q[1])
        assert result.S[0] == pytest.approx(0.45)
        assert result.R[0] == pytest.approx(0.4)
        assert [a.alt_label for a in result.ranked_Q] == ["A1", "A2"]
        assert result.compromise_set == ("A1", "A2")

    def test_zero_spread_is_diagnosed(self, low_high_dictionaries):
        from fvikor.mcdm.fuzzy_vikor import FuzzyVIKOR
        from fvikor.mcdm.fuzzy_base import FUZZY_ZERO
        result = FuzzyVIKOR().calculate(
            criteria_inputs=[["H", "H"]],
            alternative_inputs=[[["missing", "L"], ["missing", "H"]]],
            dictionaries=low_high_dictionaries,
            benefit_cost=[True, True],
            criteria_labels=["Cost", "Quality"],
        )
        assert result.normalized_diff[0][0] == FUZZY_ZERO
        assert result.normalized_diff[1][0] == FUZZY_ZERO
        assert len(result.diagnostics) == 1
        assert "Cost" in result.diagnostics[0]
        assert result.compromise_solution == "A2"

    def test_all_spreads_zero_are_diagnosed(self, low_high_dictionaries):
        from fvikor.mcdm.fuzzy_vikor import FuzzyVIKOR
        from fvikor.mcdm.fuzzy_base import FUZZY_ZERO
        result = FuzzyVIKOR().calculate(
            criteria_inputs=[["H", "H"]],
            alternative_inputs=[[["x", "x"], ["x", "x"]]],
            dictionaries=low_high_dictionaries,
            benefit_cost=[True, False],
        )

        assert len(result.diagnostics) == 4
        assert result.diagnostics[0].startswith("Criterion C1")
        assert result.diagnostics[1].startswith("Criterion C2")
        assert result.diagnostics[2].startswith("S spread is zero")
        assert result.diagnostics[3].startswith("R spread is zero")

        assert result.fuzzy_Q == (FUZZY_ZERO, FUZZY_ZERO)
        assert result.Q == (0.0, 0.0)
        assert result.compromise_set == ("A1", "A2")

    def test_fuzzy_frame_keeps_duplicate_labels(self, low_high_dictionaries):
        from fvikor.mcdm.fuzzy_vikor import FuzzyVIKOR
        result = FuzzyVIKOR().calculate(
            criteria_inputs=[["H", "H"]],
            alternative_inputs=[[["H", "L"], ["L", "H"]]],
            dictionaries=low_high_dictionaries,
            benefit_cost=[True, False],
            alternative_labels=["Site", "Site"],
        )
        frame = result.fuzzy_frame()
        assert len(frame) == 2
        assert list(frame['Q_m']) == pytest.approx([q.m for q in result.fuzzy_Q])

    def test_single_alternative(self, low_high_dictionaries):
        from fvikor.mcdm.fuzzy_vikor import FuzzyVIKOR
        result = FuzzyVIKOR().calculate(
            criteria_inputs=[["H", "L"]],
            alternative_inputs=[[["H", "L"]]],
            dictionaries=low_high_dictionaries,
            benefit_cost=[True, False],
        )
        assert result.compromise_set == ("A1",)
        assert result.dq == float('inf')

    def test_shape_mismatch(self, low_high_dictionaries):
        from fvikor.mcdm.fuzzy_vikor import FuzzyVIKOR
        with pytest.raises(ValueError):
            FuzzyVIKOR().calculate(
                criteria_inputs=[["H", "H"]],
                alternative_inputs=[[["H", "L"], ["L", "H"]]],
                dictionaries=low_high_dictionaries,
                benefit_cost=[True],
            )

    def test_result_views(self, low_high_dictionaries):
        from fvikor.mcdm.fuzzy_vikor import FuzzyVIKOR
        result = FuzzyVIKOR().calculate(
            criteria_inputs=[["H", "H"]],
            alternative_inputs=[[["H", "L"], ["L", "H"]]],
            dictionaries=low_high_dictionaries,
            benefit_cost=[True, False],
            alternative_labels=["North", "South"],
        )
        frame = result.to_frame()
        assert isinstance(frame, pd.DataFrame)
        assert list(frame.columns) == ['S', 'R', 'Q', 'Rank_S', 'Rank_R', 'Rank_Q', 'In_Compromise']
        assert frame.loc['North', 'Rank_Q'] == 1
        assert frame['In_Compromise'].all()

        ranking = result.ranking_frame('r')
        assert list(ranking['Alternative']) == ["North", "South"]
        assert result.fuzzy_frame().shape == (2, 9)
        assert list(result.fuzzy_frame().index) == ["North", "South"]
        assert len(result.top_n(1)) == 1
        assert "Compromise set: North, South" in result.summary()


class TestPipeline:
    """Test the calculation boundary and the decision session."""

    def test_calculate(self, low_high_dictionaries):
        from fvikor.config import ProblemConfig
        from fvikor.data_loader import JudgmentMatrices
        from fvikor.pipeline import calculate
        problem = ProblemConfig.default(2, 2, 1).with_changes(benefit_cost=(True, False))
        judgments = JudgmentMatrices.from_lists([["H", "H"]], [[["H", "L"], ["L", "H"]]])
        result = calculate(problem, low_high_dictionaries, judgments)
        assert result.alternative_labels == ("Alternative 1", "Alternative 2")
        assert result.Q == pytest.approx((0.0, 7 / 23))

    def test_loaded_benefit_cost_scenario(self):
        from fvikor.data_loader import load_inputs
        from fvikor.pipeline import calculate_inputs, DecisionSession
        inputs = load_inputs({
            'criteria_inputs': [["H", "H"]],
            'alternative_inputs': [[["H", "L"], ["L", "H"]]],
            'benefit_cost': [True, False],
            'alternative_labels': ["A1", "A2"],
            'alternative_terms': [
                {'name': "Low", 'short_name': "L", 'tri': [0.1, 0.3, 0.5]},
                {'name': "High", 'short_name': "H", 'tri': [0.5, 0.7, 0.9]},
            ],
        })
        # Criteria weights resolve through the default criteria scale
        assert inputs.dictionaries.criteria["H"] == tfn(0.5, 0.7, 0.9)

        result = calculate_inputs(inputs)
        assert result.S == pytest.approx((0.1, 0.8))
        assert result.R == pytest.approx((0.05, 0.4))
        assert result.Q == pytest.approx((0.0, 7 / 23))
        assert result.compromise_set == ("A1", "A2")
        assert result.diagnostics == ()

        session_result = DecisionSession(inputs).run()
        assert session_result.compromise_set == ("A1", "A2")
        assert session_result.Q == pytest.approx(result.Q)

    def test_configuration_error_before_pipeline(self, low_high_dictionaries):
        from fvikor.config import ProblemConfig, ConfigurationError
        from fvikor.data_loader import JudgmentMatrices
        from fvikor.pipeline import calculate
        problem = ProblemConfig.default(1, 1, 1).with_changes(v=2.0)
        judgments = JudgmentMatrices.filled(1, 1, 1, "H", "H")
        with pytest.raises(ConfigurationError):
            calculate(problem, low_high_dictionaries, judgments)

    def test_malformed_shape_is_calculation_error(self, low_high_dictionaries):
        from fvikor.config import ProblemConfig
        from fvikor.data_loader import JudgmentMatrices
        from fvikor.pipeline import calculate, CalculationError
        problem = ProblemConfig.default(2, 2, 1)
        judgments = JudgmentMatrices.filled(1, 1, 2, "H", "H")
        with pytest.raises(CalculationError) as exc_info:
            calculate(problem, low_high_dictionaries, judgments)
        assert isinstance(exc_info.value.__cause__, ValueError)

    def test_example_session_runs(self):
        from fvikor.pipeline import example_session
        session = example_session()
        result = session.run()

        assert session.result is result
        assert result.n_alternatives == 5
        assert result.benefit_cost == (False, True, True, False)
        q_values = [a.q for a in result.ranked_Q]
        assert q_values == sorted(q_values)
        assert result.compromise_set[0] == result.compromise_solution
        assert set(result.compromise_set) <= set(result.alternative_labels)

    def test_failed_run_keeps_previous_result(self):
        from fvikor.data_loader import JudgmentMatrices
        from fvikor.pipeline import example_session, CalculationError
        session = example_session()
        first = session.run()

        session._inputs = replace(session.inputs, judgments=JudgmentMatrices.filled(3, 2, 4, "M", "F"))
        with pytest.raises(CalculationError):
            session.run()

        assert session.result is first
        assert isinstance(session.last_error, CalculationError)

    def test_session_edits(self):
        from fvikor.config import ConfigurationError
        from fvikor.pipeline import example_session
        session = example_session()

        session.set_counts(n_alternatives=7)
        assert session.problem.alternative_labels[5] == "Alternative 6"
        assert session.judgments.shape == (3, 7, 4)
        assert session.judgments.alternative_inputs[0][6][0] == "VP"

        session.toggle_benefit_cost(0)
        assert session.problem.benefit_cost[0] is True

        session.set_label('criterion', 1, "Price")
        session.set_v(0.25)
        session.set_criteria_judgment(0, 1, "VH")
        session.set_alternative_judgment(2, 6, 3, "E")
        assert session.problem.criteria_labels[1] == "Price"
        assert session.judgments.criteria_inputs[0][1] == "VH"
        assert session.judgments.alternative_inputs[2][6][3] == "E"

        result = session.run()
        assert result.v == 0.25
        assert result.n_alternatives == 7

        with pytest.raises(ConfigurationError):
            session.set_counts(n_alternatives=21)
        with pytest.raises(ConfigurationError):
            session.set_v(1.5)
        with pytest.raises(ConfigurationError):
            session.set_v("high")
        assert session.problem.v == 0.25

    def test_reset_inputs(self):
        from fvikor.pipeline import example_session
        session = example_session()
        session.reset_inputs()

        problem = session.problem
        assert (problem.n_alternatives, problem.n_criteria, problem.n_experts) == (5, 4, 3)
        assert problem.v == 0.5
        assert problem.benefit_cost == (True,) * 4
        assert problem.alternative_labels[0] == "Alternative 1"
        assert {c for row in session.judgments.criteria_inputs for c in row} == {"VL"}
        assert {a for m in session.judgments.alternative_inputs for row in m for a in row} == {"VP"}

    def test_update_terms(self):
        from fvikor.mcdm.linguistic import LinguisticTerm, TermValidationError
        from fvikor.pipeline import DecisionSession
        session = DecisionSession()
        assert session.judgments.shape == (1, 1, 1)

        session.update_criteria_terms([
            LinguisticTerm("Low", "L", tfn(0, 2, 4)),
            LinguisticTerm("High", "H", tfn(4, 6, 8)),
        ])
        assert session.inputs.dictionaries.criteria["H"].as_tuple() == pytest.approx((0.5, 0.75, 1.0))

        with pytest.raises(TermValidationError):
            session.update_alternative_terms([LinguisticTerm("Only", "O", tfn(0, 0.5, 1))])


class TestSensitivity:
    """Test v sensitivity analysis."""

    def test_v_grid(self, example_inputs):
        from fvikor.analysis import VSensitivityAnalysis
        result = VSensitivityAnalysis(v_values=[1.0, 0.0, 0.5]).analyze(example_inputs)

        assert result.Q.shape == (5, 3)
        assert list(result.ranks.columns) == [0.0, 0.5, 1.0]
        assert result.rank_correlation[0.5] == pytest.approx(1.0)
        assert set(result.compromise_sets) == {0.0, 0.5, 1.0}
        assert result.results[0.5].v == 0.5
        assert len(result.leaders) == 3
        assert "v SENSITIVITY ANALYSIS" in result.summary()

    def test_baseline_added_to_grid(self, example_inputs):
        from fvikor.analysis import VSensitivityAnalysis
        result = VSensitivityAnalysis(v_values=[0.0, 1.0]).analyze(example_inputs, baseline_v=0.3)
        assert list(result.Q.columns) == [0.0, 0.3, 1.0]
        assert result.baseline_v == 0.3

    def test_default_grid_from_config(self):
        from fvikor.analysis import VSensitivityAnalysis
        assert VSensitivityAnalysis().v_values == [0.0, 0.25, 0.5, 0.75, 1.0]

    @pytest.mark.parametrize("values", [[], [1.5], [-0.2, 0.5]])
    def test_invalid_grid(self, values):
        from fvikor.analysis import VSensitivityAnalysis
        with pytest.raises(ValueError):
            VSensitivityAnalysis(v_values=values)


class TestLogger:
    """Test logging setup and helpers."""

    def test_json_log_file(self, tmp_path):
        from fvikor.logger import setup_logger, LoggerFactory
        json_file = tmp_path / "logs" / "run.jsonl"
        logger = setup_logger(name="fvikor_test", level="INFO", json_file=json_file, console=False)
        try:
            logger.info("calculation finished")
            logger.debug("not written")
            for handler in logger.handlers:
                handler.flush()

            lines = json_file.read_text(encoding='utf-8').splitlines()
            assert len(lines) == 1
            record = json.loads(lines[0])
            assert record['message'] == "calculation finished"
            assert record['level'] == "INFO"
            assert record['logger'] == "fvikor_test"
        finally:
            for handler in list(logger.handlers):
                logger.removeHandler(handler)
                handler.close()
            LoggerFactory.reset()

    def test_log_exceptions(self):
        import logging
        from fvikor.logger import log_exceptions
        logger = logging.getLogger("fvikor_test.exceptions")

        @log_exceptions(logger)
        def failing():
            raise ValueError("boom")

        @log_exceptions(logger, reraise=False)
        def swallowed():
            raise ValueError("boom")

        with pytest.raises(ValueError):
            failing()
        assert swallowed() is None

    def test_module_logger_namespace(self):
        from fvikor.logger import get_module_logger, LOG_NAME
        assert get_module_logger('mcdm.fuzzy_vikor').name == f"{LOG_NAME}.mcdm.fuzzy_vikor"
