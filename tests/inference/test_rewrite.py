"""
Unit and property tests for equational rewriting.

Core claims:
    - A ground equation replaces every occurrence of its left side
    - Schematic rules fire by matching
    - Unfolding reaches a fixpoint and is idempotent
    - Looping rule sets are reported, not run forever
"""

import pytest
from hypothesis import given
from hypothesis import strategies as st

from hkproof.inference.rewrite import (
    equation_sides, rewrite_literal, literal_mentions, unfold_term, unfold_literal,
)
from hkproof.theory.axioms import AXIOMS
from hkproof.theory.vocabulary import (
    density_of, integral, kinetic_interaction, energy_expectation,
    ground_state, ground_energy, plus, gt,
)


def rules_of(*names):
    return [equation_sides(next(iter(AXIOMS[n].literals))) for n in names]


UNFOLD = rules_of("ground_energy_def", "energy_def")


class TestEquationSides:
    def test_forward_and_reverse(self):
        lit = (True, "eq", "a", "b")
        assert equation_sides(lit) == ("a", "b")
        assert equation_sides(lit, reverse=True) == ("b", "a")

    def test_rejects_non_equation(self):
        with pytest.raises(ValueError):
            equation_sides((False, "eq", "a", "b"))
        with pytest.raises(ValueError):
            equation_sides((True, "gt", "a", "b"))


class TestGroundRewrite:
    def test_replaces_all_occurrences(self):
        rho = density_of(ground_state("v2"))
        lit = (True, "eq", integral("v1", rho), integral("v2", rho))
        assert rewrite_literal(lit, rho, "n") == (True, "eq", integral("v1", "n"), integral("v2", "n"))

    def test_mentions(self):
        lit = gt(kinetic_interaction(ground_state("v1")), 0)
        assert literal_mentions(lit, ground_state("v1"))
        assert not literal_mentions(lit, ground_state("v2"))


class TestUnfold:
    def test_energy_def_fires_by_matching(self):
        psi = ground_state("v2")
        out, fired = unfold_term(energy_expectation(psi, "v1"), rules_of("energy_def"))
        assert out == plus(kinetic_interaction(psi), integral("v1", density_of(psi)))
        assert fired == [0]

    def test_ground_energy_unfolds_through_energy(self):
        out, _ = unfold_term(ground_energy("v1"), UNFOLD)
        psi = ground_state("v1")
        assert out == plus(kinetic_interaction(psi), integral("v1", density_of(psi)))

    def test_normal_form_is_left_alone(self):
        term = plus(kinetic_interaction("p"), integral("v1", "n"))
        assert unfold_term(term, UNFOLD) == (term, [])

    def test_unfolds_inside_literals(self):
        lit = gt(energy_expectation(ground_state("v2"), "v1"), ground_energy("v1"))
        out, fired = unfold_literal(lit, UNFOLD)
        psi1, psi2 = ground_state("v1"), ground_state("v2")
        assert out == gt(plus(kinetic_interaction(psi2), integral("v1", density_of(psi2))),
                         plus(kinetic_interaction(psi1), integral("v1", density_of(psi1))))
        assert fired

    def test_looping_rules_raise(self):
        with pytest.raises(ValueError):
            unfold_term("a", [("a", ("f", "a"))])


potentials = st.sampled_from(["v1", "v2", "v3"])


@st.composite
def energy_terms(draw, depth=2):
    v = draw(potentials)
    choice = draw(st.integers(min_value=0, max_value=3 if depth else 1))
    if choice == 0:
        return ground_energy(v)
    if choice == 1:
        return energy_expectation(ground_state(draw(potentials)), v)
    return plus(draw(energy_terms(depth=depth - 1)), draw(energy_terms(depth=depth - 1)))


class TestUnfoldProperties:
    @given(energy_terms())
    def test_idempotent(self, term):
        once, _ = unfold_term(term, UNFOLD)
        twice, fired = unfold_term(once, UNFOLD)
        assert twice == once
        assert fired == []

    @given(energy_terms())
    def test_no_energy_symbols_remain(self, term):
        out, _ = unfold_term(term, UNFOLD)
        text = repr(out)
        assert "energy_expectation" not in text
        assert "ground_energy" not in text
