"""
Unit tests for the proof kernel.

Core claims:
    - Only established facts and registered axioms can be premises
    - A rejected step raises ProofError and adds nothing
    - modus_ponens refuses to fire with an open precondition
    - Stages advance strictly in order
    - linarith closes a derivation only on a genuine contradiction
"""

import pytest

from hkproof.core.state import Clause, Derivation, ProofError
from hkproof.core import rules
from hkproof.theory.axioms import AXIOMS
from hkproof.theory.vocabulary import (
    density_of, integral, kinetic_interaction, energy_expectation,
    ground_state, ground_energy, plus, eq, ne, gt, not_equiv,
)

PSI1, PSI2 = ground_state("v1"), ground_state("v2")


@pytest.fixture
def state():
    return Derivation(axioms=dict(AXIOMS))


class TestPremises:
    def test_foreign_fact_rejected(self, state):
        forged = Clause(literals=frozenset({ne(PSI1, PSI2)}))
        with pytest.raises(ProofError):
            rules.symmetry(state, forged)
        assert state.facts == []

    def test_unregistered_axiom_rejected(self, state):
        fake = Clause(literals=frozenset({gt("X", "Y")}), label="anything_goes")
        with pytest.raises(ProofError):
            rules.instantiate(state, fake, {"X": 1, "Y": 0})

    def test_hypothesis_must_be_ground(self, state):
        with pytest.raises(ProofError):
            rules.hypothesis(state, ne("Psi", PSI1), "open")

    def test_duplicate_fact_returns_existing(self, state):
        a = rules.hypothesis(state, ne(PSI1, PSI2), "h")
        b = rules.hypothesis(state, ne(PSI1, PSI2), "h again")
        assert a is b
        assert len(state.facts) == 1


class TestModusPonens:
    def test_rayleigh_ritz_with_precondition(self, state):
        h = rules.hypothesis(state, ne(PSI2, PSI1), "h")
        fact = rules.modus_ponens(state, AXIOMS["rayleigh_ritz_strict"],
                                  {"Psi": PSI2, "V": "v1"}, [h])
        assert fact.literal == gt(energy_expectation(PSI2, "v1"), ground_energy("v1"))

    def test_rayleigh_ritz_without_precondition_rejected(self, state):
        with pytest.raises(ProofError, match="unmet precondition"):
            rules.modus_ponens(state, AXIOMS["rayleigh_ritz_strict"],
                               {"Psi": PSI2, "V": "v1"}, [])
        assert state.facts == []
        assert state.step == 0

    def test_wrong_premise_rejected(self, state):
        h = rules.hypothesis(state, ne(PSI1, PSI2), "h")
        with pytest.raises(ProofError, match="does not discharge"):
            # the precondition here is psi2 != ground_state(v1), not psi1 != psi2
            rules.modus_ponens(state, AXIOMS["rayleigh_ritz_strict"],
                               {"Psi": PSI2, "V": "v1"}, [h])

    def test_partial_instantiation_rejected(self, state):
        with pytest.raises(ProofError, match="not ground"):
            rules.instantiate(state, AXIOMS["energy_def"], {"Psi": PSI1})

    def test_distinct_states(self, state):
        h = rules.hypothesis(state, not_equiv("v1", "v2"), "h_distinct")
        fact = rules.modus_ponens(state, AXIOMS["distinct_potentials_distinct_states"],
                                  {"V1": "v1", "V2": "v2"}, [h])
        assert fact.literal == ne(PSI1, PSI2)


class TestEquality:
    def test_symmetry(self, state):
        h = rules.hypothesis(state, ne(PSI1, PSI2), "h")
        assert rules.symmetry(state, h).literal == ne(PSI2, PSI1)

    def test_symmetry_needs_equation(self, state):
        h = rules.hypothesis(state, gt(1, 0), "h")
        with pytest.raises(ProofError):
            rules.symmetry(state, h)

    def test_rewrite(self, state):
        e = rules.instantiate(state, AXIOMS["energy_def"], {"Psi": PSI2, "V": "v1"})
        g = rules.hypothesis(state, gt(energy_expectation(PSI2, "v1"), 0), "g")
        out = rules.rewrite(state, g, e)
        assert out.literal == gt(plus(kinetic_interaction(PSI2),
                                      integral("v1", density_of(PSI2))), 0)
        assert out.source == (g.name, e.name)

    def test_rewrite_absent_subterm_rejected(self, state):
        e = rules.instantiate(state, AXIOMS["energy_def"], {"Psi": PSI2, "V": "v1"})
        g = rules.hypothesis(state, gt(ground_energy("v2"), 0), "g")
        with pytest.raises(ProofError, match="does not occur"):
            rules.rewrite(state, g, e)

    def test_unfold_with_axioms_is_idempotent(self, state):
        g = rules.hypothesis(state, gt(energy_expectation(PSI2, "v1"), ground_energy("v1")), "g")
        unfolding = [AXIOMS["ground_energy_def"], AXIOMS["energy_def"]]
        once = rules.unfold(state, g, unfolding)
        twice = rules.unfold(state, once, unfolding)
        assert twice is once
        assert once.literal == gt(
            plus(kinetic_interaction(PSI2), integral("v1", density_of(PSI2))),
            plus(kinetic_interaction(PSI1), integral("v1", density_of(PSI1))),
        )


class TestLet:
    def test_introduces_definition(self, state):
        fact = rules.let(state, "n", density_of(PSI1))
        assert fact.literal == eq(density_of(PSI1), "n")
        assert "n" in state.constants

    def test_name_reuse_rejected(self, state):
        rules.let(state, "n", density_of(PSI1))
        with pytest.raises(ProofError):
            rules.let(state, "n", density_of(PSI2))

    @pytest.mark.parametrize("name", ["0", "1", "-2"])
    def test_numeral_name_rejected(self, state, name):
        with pytest.raises(ProofError, match="numeral"):
            rules.let(state, name, ground_energy("v1"))
        assert state.facts == []

    def test_numerals_cannot_close_without_hypotheses(self, state):
        with pytest.raises(ProofError):
            rules.let(state, "0", ground_energy("v1"))
        with pytest.raises(ProofError):
            rules.let(state, "1", ground_energy("v1"))
        assert not state.closed
        assert state.contradiction() is None

    def test_name_in_established_fact_rejected(self, state):
        rules.hypothesis(state, gt("m", 0), "m positive")
        with pytest.raises(ProofError, match="already in use"):
            rules.let(state, "m", density_of(PSI1))

    def test_variable_name_rejected(self, state):
        with pytest.raises(ProofError):
            rules.let(state, "N", density_of(PSI1))


class TestArithmetic:
    def test_add_strict(self, state):
        a = rules.hypothesis(state, gt("a", "b"), "a>b")
        c = rules.hypothesis(state, gt("c", "d"), "c>d")
        assert rules.add_strict(state, a, c).literal == gt(plus("a", "c"), plus("b", "d"))

    def test_add_strict_needs_strict(self, state):
        a = rules.hypothesis(state, gt("a", "b"), "a>b")
        c = rules.hypothesis(state, (True, "ge", "c", "d"), "c>=d")
        with pytest.raises(ProofError):
            rules.add_strict(state, a, c)

    def test_linarith_closes(self, state):
        a = rules.hypothesis(state, gt("a", "b"), "a>b")
        b = rules.hypothesis(state, gt("b", "a"), "b>a")
        falsum = rules.linarith(state, [a, b])
        assert falsum.is_empty
        assert state.closed
        assert set(falsum.source) == {a.name, b.name}
        assert falsum.detail

    def test_linarith_refuses_consistent_facts(self, state):
        a = rules.hypothesis(state, gt("a", "b"), "a>b")
        with pytest.raises(ProofError, match="linarith failed"):
            rules.linarith(state, [a])
        assert not state.closed


class TestStages:
    STAGES = ("one", "two", "three")

    def test_in_order(self, state):
        for stage in self.STAGES:
            rules.advance(state, stage, self.STAGES)
        assert state.stage == "three"

    def test_skip_rejected(self, state):
        rules.advance(state, "one", self.STAGES)
        with pytest.raises(ProofError):
            rules.advance(state, "three", self.STAGES)

    def test_must_start_at_first(self, state):
        with pytest.raises(ProofError):
            rules.advance(state, "two", self.STAGES)

    def test_no_going_back(self, state):
        rules.advance(state, "one", self.STAGES)
        rules.advance(state, "two", self.STAGES)
        with pytest.raises(ProofError):
            rules.advance(state, "one", self.STAGES)
