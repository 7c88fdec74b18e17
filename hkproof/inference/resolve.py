"""
Binary resolution and unit discharge.

Resolution drives the search loop: two clauses with a complementary pair
of unifiable literals yield a resolvent holding everything else.

Discharge is the kernel's modus ponens. An axiom such as

    eq(Psi, ground_state(V)) | gt(energy_expectation(Psi, V), ground_energy(V))

reads "Psi != ground_state(V) implies ...". Resolving it against the unit
fact ~eq(psi, ground_state(v)) removes the precondition and leaves the
conclusion. If the resolvent is empty, a contradiction has been found.
"""

from ..core.state import Clause
from ..core.terms import (
    standardize_apart, unify_literals, apply_sub_to_clause, canonicalize,
)


def resolve(c1: Clause, c2: Clause) -> list:
    """
    All binary resolvents of c1 and c2.

    Resolvents are canonicalized so variants of one clause compare equal.
    """
    lits1 = standardize_apart(c1.literals, "_L")
    lits2 = standardize_apart(c2.literals, "_R")

    results = []
    for lit1 in lits1:
        for lit2 in lits2:
            if lit1[0] == lit2[0] or lit1[1] != lit2[1]:
                continue
            sub = unify_literals(lit1, lit2)
            if sub is None:
                continue
            resolvent = apply_sub_to_clause(sub, (lits1 - {lit1}) | (lits2 - {lit2}))
            results.append(Clause(
                literals=canonicalize(resolvent),
                source=(c1.name, c2.name),
                rule="resolve",
            ))
    return results


def discharge(clause: Clause, premise: Clause) -> list:
    """
    Resolve a unit premise against clause, keeping the clause's own variables.

    Unlike resolve(), only the premise's literal is removed from play and
    the result is not canonicalized, so bindings stay readable.
    Returns a list of (resolvent literals, removed literal) pairs.
    """
    if not premise.is_unit:
        return []
    fact = standardize_apart(premise.literals, "_P")
    (fact_lit,) = tuple(fact)

    results = []
    for lit in clause.literals:
        if lit[0] == fact_lit[0] or lit[1] != fact_lit[1]:
            continue
        sub = unify_literals(lit, fact_lit)
        if sub is None:
            continue
        results.append((apply_sub_to_clause(sub, clause.literals - {lit}), lit))
    return results


def clause_subsumes(c1: Clause, c2: Clause) -> bool:
    """
    c1 subsumes c2 if c1's literals are a proper subset of c2's.

    Literal-set subsumption only; subsumption modulo unification is not tried.
    """
    if len(c1.literals) >= len(c2.literals):
        return False
    return c1.literals.issubset(c2.literals)


def is_tautology(clause: Clause) -> bool:
    """A clause holding a literal and its complement says nothing."""
    return any((not lit[0],) + lit[1:] in clause.literals for lit in clause.literals)
