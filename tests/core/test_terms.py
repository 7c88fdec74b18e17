"""
Property-based and unit tests for the term language.

The core claims:
    - Unification is symmetric and correct: apply(σ, A) == apply(σ, B)
    - Occurs check: unify(V, f(V)) always fails
    - Matching binds pattern variables only
    - canonicalize identifies clauses that differ only by variable names
    - replace_subterm removes every occurrence of its target
"""

import pytest
from hypothesis import given, assume
from hypothesis import strategies as st

from hkproof.core.terms import (
    is_variable, is_function, is_ground, occurs_in,
    apply_substitution, unify_terms, unify_literals, match_term,
    complement, standardize_apart, canonicalize,
    contains_subterm, replace_subterm, render_term, render_literal,
)


# ── Generators ──────────────────────────────────────────────────────────────

constants = st.sampled_from(["v1", "v2", "n", "psi", "0"])
variables = st.sampled_from(["V", "W", "Psi", "N"])
functors = st.sampled_from(["density_of", "ground_state", "integral", "plus"])


@st.composite
def ground_terms(draw, max_depth=3):
    if max_depth == 0 or draw(st.booleans()):
        return draw(constants)
    name = draw(functors)
    arity = draw(st.integers(min_value=1, max_value=2))
    return (name,) + tuple(draw(ground_terms(max_depth=max_depth - 1)) for _ in range(arity))


@st.composite
def terms(draw, max_depth=2):
    if max_depth == 0:
        return draw(st.one_of(constants, variables))
    choice = draw(st.integers(min_value=0, max_value=3))
    if choice == 0:
        return draw(constants)
    if choice == 1:
        return draw(variables)
    name = draw(functors)
    arity = draw(st.integers(min_value=1, max_value=2))
    return (name,) + tuple(draw(terms(max_depth=max_depth - 1)) for _ in range(arity))


@st.composite
def literals(draw):
    sign = draw(st.booleans())
    pred = draw(st.sampled_from(["eq", "gt", "equiv"]))
    return (sign, pred, draw(terms()), draw(terms()))


# ── Unit tests ───────────────────────────────────────────────────────────────

class TestClassification:
    def test_uppercase_is_variable(self):
        assert is_variable("V")
        assert is_variable("Psi")

    def test_potential_names_are_constants(self):
        assert not is_variable("v1")
        assert not is_variable("n")
        assert not is_variable("")

    def test_numbers_are_constants(self):
        assert not is_variable(0)
        assert is_ground(0)

    def test_tuple_is_function(self):
        assert is_function(("ground_state", "v1"))
        assert not is_function("v1")

    def test_groundness(self):
        assert is_ground(("integral", "v1", ("density_of", ("ground_state", "v2"))))
        assert not is_ground(("integral", "V", "n"))


class TestOccursIn:
    def test_variable_occurs_in_itself(self):
        assert occurs_in("V", "V")

    def test_nested_occurrence(self):
        assert occurs_in("Psi", ("density_of", ("ground_state", "Psi")))

    def test_absent(self):
        assert not occurs_in("V", ("ground_state", "v1"))


class TestSubstitution:
    def test_binds_inside_functions(self):
        term = ("energy_expectation", "Psi", "V")
        sub = {"Psi": ("ground_state", "v2"), "V": "v1"}
        assert apply_substitution(sub, term) == (
            "energy_expectation", ("ground_state", "v2"), "v1")

    def test_follows_chains(self):
        assert apply_substitution({"V": "W", "W": "v1"}, "V") == "v1"

    def test_unbound_variable_unchanged(self):
        assert apply_substitution({"W": "v2"}, "V") == "V"


class TestUnification:
    def test_variable_binds_to_term(self):
        sub = unify_terms(("ground_state", "V"), ("ground_state", "v1"))
        assert sub == {"V": "v1"}

    def test_functor_mismatch_fails(self):
        assert unify_terms(("ground_state", "V"), ("density_of", "v1")) is None

    def test_arity_mismatch_fails(self):
        assert unify_terms(("integral", "V"), ("integral", "v1", "n")) is None

    def test_occurs_check(self):
        assert unify_terms("V", ("ground_state", "V")) is None

    def test_literals_need_same_predicate(self):
        assert unify_literals((True, "eq", "V", "v1"), (True, "gt", "v2", "v1")) is None
        assert unify_literals((True, "eq", "V", "v1"), (False, "eq", "v2", "v1")) == {"V": "v2"}


class TestMatching:
    def test_binds_pattern_variables(self):
        sub = match_term(("energy_expectation", "Psi", "V"),
                         ("energy_expectation", ("ground_state", "v1"), "v2"))
        assert sub == {"Psi": ("ground_state", "v1"), "V": "v2"}

    def test_never_binds_term_variables(self):
        assert match_term("v1", "V") is None

    def test_repeated_variable_must_agree(self):
        pattern = ("energy_expectation", ("ground_state", "V"), "V")
        assert match_term(pattern, ("energy_expectation", ("ground_state", "v1"), "v1")) == {"V": "v1"}
        assert match_term(pattern, ("energy_expectation", ("ground_state", "v1"), "v2")) is None


class TestStandardizeAndCanonicalize:
    def test_standardize_apart_renames(self):
        renamed = standardize_apart(frozenset({(True, "eq", "X", "Y")}), "_L")
        assert renamed == frozenset({(True, "eq", "X_L", "Y_L")})

    def test_variants_canonicalize_equal(self):
        a = frozenset({(False, "eq", "X", "Y"), (True, "eq", "Y", "X")})
        b = frozenset({(False, "eq", "A", "B"), (True, "eq", "B", "A")})
        assert canonicalize(a) == canonicalize(b)

    def test_ground_clause_unchanged(self):
        clause = frozenset({(True, "gt", ("ground_energy", "v1"), 0)})
        assert canonicalize(clause) == clause


class TestReplacement:
    def test_replaces_every_occurrence(self):
        rho = ("density_of", ("ground_state", "v2"))
        term = ("plus", ("integral", "v1", rho), ("integral", "v2", rho))
        out = replace_subterm(term, rho, "n")
        assert not contains_subterm(out, rho)
        assert out == ("plus", ("integral", "v1", "n"), ("integral", "v2", "n"))

    def test_absent_target_is_identity(self):
        term = ("kinetic_interaction", ("ground_state", "v1"))
        assert replace_subterm(term, "n", "m") == term


class TestRendering:
    def test_infix_plus(self):
        term = ("plus", ("kinetic_interaction", "p"), ("integral", "v1", "n"))
        assert render_term(term) == "kinetic_interaction(p) + integral(v1, n)"

    def test_aliases(self):
        aliases = {("ground_state", "v1"): "ψ1"}
        assert render_term(("density_of", ("ground_state", "v1")), aliases) == "density_of(ψ1)"

    def test_literals(self):
        assert render_literal((False, "eq", "a", "b")) == "a ≠ b"
        assert render_literal((True, "gt", "a", "b")) == "a > b"
        assert render_literal((False, "equiv", "v1", "v2")) == "~equiv(v1, v2)"

    def test_complement_flips_sign(self):
        assert complement((True, "gt", "a", "b")) == (False, "gt", "a", "b")


# ── Property-based tests ─────────────────────────────────────────────────────

class TestUnificationProperties:

    @given(terms(), terms())
    def test_symmetry(self, t1, t2):
        assert (unify_terms(t1, t2) is None) == (unify_terms(t2, t1) is None)

    @given(terms(), terms())
    def test_correctness(self, t1, t2):
        sub = unify_terms(t1, t2)
        if sub is not None:
            assert apply_substitution(sub, t1) == apply_substitution(sub, t2)

    @given(ground_terms(), ground_terms())
    def test_ground_terms_unify_iff_equal(self, t1, t2):
        assert (unify_terms(t1, t2) is not None) == (t1 == t2)

    @given(variables, terms())
    def test_variable_unifies_with_non_occurring_term(self, v, t):
        assume(not occurs_in(v, t))
        sub = unify_terms(v, t)
        assert sub is not None
        assert apply_substitution(sub, v) == t

    @given(terms(), ground_terms())
    def test_match_instance_equals_term(self, pattern, term):
        sub = match_term(pattern, term)
        if sub is not None:
            assert apply_substitution(sub, pattern) == term

    @given(st.lists(literals(), min_size=1, max_size=4))
    def test_canonicalize_is_idempotent(self, lits):
        once = canonicalize(frozenset(lits))
        assert canonicalize(once) == once

    @given(ground_terms(), ground_terms())
    def test_replace_removes_target(self, term, target):
        assume(not contains_subterm(target, "n"))
        out = replace_subterm(term, target, "n")
        assert not contains_subterm(out, target)
