"""
The uniqueness theorem: non-equivalent potentials cannot share a
ground-state density.

derive_contradiction builds the refutation as a fixed chain:

    1. ψ1 = ground_state(v1), ψ2 = ground_state(v2)
    2. h_distinct + distinct_potentials_distinct_states  ->  ψ1 ≠ ψ2
    3. rayleigh_ritz_strict(v1, ψ2)  ->  E(ψ2, v1) > ground_energy(v1)
    4. rayleigh_ritz_strict(v2, ψ1)  ->  E(ψ1, v2) > ground_energy(v2)
    5. unfold with energy_def / ground_energy_def
    6. n := density_of(ψ1); h_density gives density_of(ψ2) = n
    7. T(ψ2) + ∫v1·n > T(ψ1) + ∫v1·n   and   T(ψ1) + ∫v2·n > T(ψ2) + ∫v2·n
    8. add them: both sides are equal, 0 > 0, linarith closes

The stages it passes through are recorded on the Derivation and must
come in order: Hypotheses -> DistinctStates -> StrictInequality ->
ExpandedForm -> SubstitutedForm -> NumericContradiction -> False.

prove_uniqueness wraps this as the contrapositive: a shared ground-state
density forces the potentials to be equivalent up to a constant.
"""

from dataclasses import dataclass
from typing import Optional

from ..core.state import Clause, Derivation, SearchState, ProofError
from ..core.terms import canonicalize, is_function, render_literal
from ..core.engine import run_search
from ..core.proof import found_clause
from ..core import rules
from ..inference.resolve import resolve, clause_subsumes, is_tautology
from .axioms import AXIOMS, axiom
from .vocabulary import (
    Potential, POTENTIAL, DENSITY,
    density_of, energy_expectation, ground_state, ground_energy,
    eq, ne, gt, equiv, not_equiv,
    check_literal, constant_offset,
)

STAGES = (
    "Hypotheses",
    "DistinctStates",
    "StrictInequality",
    "ExpandedForm",
    "SubstitutedForm",
    "NumericContradiction",
    "False",
)

SHARED_DENSITY = "n"


@dataclass
class Theorem:
    """A proved statement about a pair of potentials."""
    statement: str
    conclusion: tuple
    method: str
    derivation: Optional[Derivation] = None

    def __repr__(self):
        return f"Theorem({self.statement} [{self.method}])"


def new_derivation(v1: Potential, v2: Potential) -> Derivation:
    """An empty derivation over the registered axioms, with ψ1/ψ2 aliases."""
    if v1.term == v2.term:
        raise ProofError(f"the two potentials must be distinct symbols, got {v1.name} twice")
    state = Derivation(axioms=dict(AXIOMS))
    state.constants.update({str(v1.term), str(v2.term)})
    state.aliases = {ground_state(v1.term): "ψ1", ground_state(v2.term): "ψ2"}
    return state


def _sorts(v1: Potential, v2: Potential) -> dict:
    return {v1.term: POTENTIAL, v2.term: POTENTIAL, SHARED_DENSITY: DENSITY}


def assume_inequivalent(state: Derivation, v1: Potential, v2: Potential,
                        verbose=False) -> Clause:
    """
    Introduce h_distinct: v1 and v2 do not differ by a constant.

    The hypothesis is checked against the potentials themselves; for an
    equivalent pair it is false and the derivation cannot start.
    """
    offset = constant_offset(v1, v2)
    if offset is not None:
        raise ProofError(
            f"{v1.name}(x) = {v2.name}(x) + {offset} for all x: "
            f"h_distinct does not hold, the potentials are equivalent"
        )
    literal = not_equiv(v1.term, v2.term)
    check_literal(literal, _sorts(v1, v2))
    return rules.hypothesis(state, literal, "h_distinct", verbose=verbose)


def assume_shared_density(state: Derivation, v1: Potential, v2: Potential,
                          verbose=False) -> Clause:
    """Introduce h_density: both ground states have the same density."""
    literal = eq(density_of(ground_state(v1.term)), density_of(ground_state(v2.term)))
    check_literal(literal, _sorts(v1, v2))
    return rules.hypothesis(state, literal, "h_density", verbose=verbose)


def distinct_ground_states(state: Derivation, v1: Potential, v2: Potential,
                           h_distinct: Clause, verbose=False) -> Clause:
    """ψ1 ≠ ψ2, from h_distinct."""
    return rules.modus_ponens(
        state, axiom("distinct_potentials_distinct_states"),
        {"V1": v1.term, "V2": v2.term}, [h_distinct], verbose=verbose,
    )


def strict_variational_gap(state: Derivation, v: Potential, psi, h_ne: Clause,
                           verbose=False) -> Clause:
    """
    energy_expectation(psi, v) > ground_energy(v), given h_ne: psi ≠ ground_state(v).

    Steps 3 and 4 are this lemma with the roles of v1 and v2 swapped.
    """
    return rules.modus_ponens(
        state, axiom("rayleigh_ritz_strict"),
        {"Psi": psi, "V": v.term}, [h_ne], verbose=verbose,
    )


def expanded_energy(state: Derivation, psi, v: Potential, verbose=False) -> Clause:
    """energy_expectation(psi, v) = kinetic_interaction(psi) + integral(v, density_of(psi))."""
    return rules.instantiate(state, axiom("energy_def"), {"Psi": psi, "V": v.term},
                             verbose=verbose)


def expanded_ground_energy(state: Derivation, v: Potential, verbose=False) -> Clause:
    """ground_energy(v) = kinetic_interaction(ψ) + integral(v, density_of(ψ)), ψ its ground state."""
    definition = rules.instantiate(state, axiom("ground_energy_def"), {"V": v.term},
                                   verbose=verbose)
    energy = expanded_energy(state, ground_state(v.term), v, verbose=verbose)
    return rules.rewrite(state, definition, energy, verbose=verbose)


def derive_contradiction(v1: Potential, v2: Potential, verbose=False) -> Derivation:
    """
    Refute "v1, v2 inequivalent and their ground states share a density".

    Returns the closed Derivation. Raises ProofError if the chain cannot
    be built, in particular when v1 and v2 are equivalent.
    """
    state = new_derivation(v1, v2)
    m = state.milestones
    psi1, psi2 = ground_state(v1.term), ground_state(v2.term)

    if verbose:
        print(f"\nUniqueness: {v1!r} vs {v2!r}")

    # 1. hypotheses
    rules.advance(state, "Hypotheses", STAGES, verbose=verbose)
    m["h_distinct"] = assume_inequivalent(state, v1, v2, verbose=verbose)
    m["h_density"] = assume_shared_density(state, v1, v2, verbose=verbose)

    # 2. ψ1 ≠ ψ2
    rules.advance(state, "DistinctStates", STAGES, verbose=verbose)
    m["distinct_states"] = distinct_ground_states(state, v1, v2, m["h_distinct"],
                                                  verbose=verbose)

    # 3-4. the two strict variational gaps
    rules.advance(state, "StrictInequality", STAGES, verbose=verbose)
    m["psi2_ne_psi1"] = rules.symmetry(state, m["distinct_states"], verbose=verbose)
    m["strict_v1"] = strict_variational_gap(state, v1, psi2, m["psi2_ne_psi1"],
                                            verbose=verbose)
    m["strict_v2"] = strict_variational_gap(state, v2, psi1, m["distinct_states"],
                                            verbose=verbose)

    # 5. unfold energies and ground energies
    rules.advance(state, "ExpandedForm", STAGES, verbose=verbose)
    m["energy_psi2_v1"] = expanded_energy(state, psi2, v1, verbose=verbose)
    m["energy_psi1_v2"] = expanded_energy(state, psi1, v2, verbose=verbose)
    m["ground_energy_v1"] = expanded_ground_energy(state, v1, verbose=verbose)
    m["ground_energy_v2"] = expanded_ground_energy(state, v2, verbose=verbose)

    # 6. substitute the shared density n
    rules.advance(state, "SubstitutedForm", STAGES, verbose=verbose)
    m["n_def"] = rules.let(state, SHARED_DENSITY, density_of(psi1), verbose=verbose)
    n_psi2 = rules.rewrite(state, m["h_density"], m["n_def"], verbose=verbose)
    m["density_psi2"] = rules.symmetry(state, n_psi2, verbose=verbose)
    density_rules = [m["n_def"], m["density_psi2"]]
    for key in ("energy_psi2_v1", "energy_psi1_v2", "ground_energy_v1", "ground_energy_v2"):
        m[f"{key}_n"] = rules.unfold(state, m[key], density_rules, verbose=verbose)

    # 7. the substituted strict inequalities
    m["substituted_v1"] = rules.unfold(
        state, m["strict_v1"], [m["energy_psi2_v1_n"], m["ground_energy_v1_n"]],
        verbose=verbose,
    )
    m["substituted_v2"] = rules.unfold(
        state, m["strict_v2"], [m["energy_psi1_v2_n"], m["ground_energy_v2_n"]],
        verbose=verbose,
    )

    # 8. add termwise; linear arithmetic sees 0 > 0
    rules.advance(state, "NumericContradiction", STAGES, verbose=verbose)
    m["sum"] = rules.add_strict(state, m["substituted_v1"], m["substituted_v2"],
                                verbose=verbose)
    m["false"] = rules.linarith(state, [m["sum"]], verbose=verbose)
    rules.advance(state, "False", STAGES, verbose=verbose)

    if verbose:
        print(f"  closed in {state.step} steps")
    return state


def prove_uniqueness(v1: Potential, v2: Potential, verbose=False) -> Theorem:
    """
    density_of(ground_state(v1)) = density_of(ground_state(v2)) -> equiv(v1, v2).

    Equivalent potentials satisfy the conclusion outright. Otherwise the
    refutation shows the premise is impossible, so the implication holds
    vacuously and the densities are provably different.
    """
    premise = eq(density_of(ground_state(v1.term)), density_of(ground_state(v2.term)))
    statement = f"{render_literal(premise)} -> {render_literal(equiv(v1.term, v2.term))}"

    offset = constant_offset(v1, v2)
    if offset is not None:
        if verbose:
            print(f"\n{v1.name} and {v2.name} differ by the constant {offset}: equivalent.")
        return Theorem(statement, equiv(v1.term, v2.term), f"constant offset {offset}")

    state = derive_contradiction(v1, v2, verbose=verbose)
    conclusion = ne(premise[2], premise[3])
    return Theorem(statement, conclusion, "refutation", derivation=state)


# ── Search mode ──────────────────────────────────────────────────────────────

EQ_SYMMETRY = Clause(
    literals=canonicalize({(False, "eq", "X", "Y"), (True, "eq", "Y", "X")}),
    label="eq_symmetry",
    rule="axiom",
)


def strict_goals(v1: Potential, v2: Potential) -> tuple:
    """The unit clauses steps 3 and 4 establish."""
    psi1, psi2 = ground_state(v1.term), ground_state(v2.term)
    return (
        frozenset({gt(energy_expectation(psi2, v1.term), ground_energy(v1.term))}),
        frozenset({gt(energy_expectation(psi1, v2.term), ground_energy(v2.term))}),
    )


def make_search_state(v1: Potential, v2: Potential) -> SearchState:
    """h_distinct plus the two rule axioms and symmetry of eq, ready to saturate."""
    if constant_offset(v1, v2) is not None:
        raise ProofError(f"{v1.name} and {v2.name} are equivalent: h_distinct does not hold")
    state = SearchState()
    state.set_of_support.append(Clause(
        literals=frozenset({not_equiv(v1.term, v2.term)}), label="h_distinct",
        rule="hypothesis",
    ))
    for name in ("distinct_potentials_distinct_states", "rayleigh_ritz_strict"):
        rule = AXIOMS[name]
        state.set_of_support.append(Clause(
            literals=canonicalize(rule.literals), label=rule.label, rule="axiom",
        ))
    state.set_of_support.append(EQ_SYMMETRY)
    return state


def _depth(term) -> int:
    if is_function(term):
        return 1 + max((_depth(a) for a in term[1:]), default=0)
    return 0


def search_prune(clause: Clause, state: SearchState) -> bool:
    """Drop tautologies, long clauses and deep terms; the goals need neither."""
    if is_tautology(clause) or len(clause.literals) > 3:
        return True
    return any(_depth(arg) > 3 for lit in clause.literals for arg in lit[2:])


def search_strict_inequalities(v1: Potential, v2: Potential, max_steps: int = 40,
                               verbose=False) -> SearchState:
    """
    Find steps 2-4 without a script: saturate by resolution until both
    strict inequalities appear as unit clauses, or max_steps runs out.
    """
    goals = strict_goals(v1, v2)

    def both_found(s):
        return all(found_clause(s, g) for g in goals)

    state = make_search_state(v1, v2)
    return run_search(
        state, resolve,
        max_steps=max_steps,
        stop_fn=both_found,
        subsumes_fn=clause_subsumes,
        prune_fn=search_prune,
        verbose=verbose,
    )
