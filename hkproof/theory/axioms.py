"""
The axiom registry: the fixed trust boundary of the theory.

Each axiom is a Clause. Negative literals are preconditions, the positive
literal is the conclusion:

    rayleigh_ritz_strict
        Psi != ground_state(V)  ->  energy_expectation(Psi, V) > ground_energy(V)
        clause: eq(Psi, ground_state(V)) | gt(energy_expectation(Psi, V), ground_energy(V))

    distinct_potentials_distinct_states
        ~equiv(V1, V2)  ->  ground_state(V1) != ground_state(V2)
        clause: equiv(V1, V2) | ~eq(ground_state(V1), ground_state(V2))

The three definitional axioms are plain equations, usable as rewrite
rules in either direction:

    energy_def         energy_expectation(Psi, V) = kinetic_interaction(Psi) + integral(V, density_of(Psi))
    ground_energy_def  ground_energy(V) = energy_expectation(ground_state(V), V)
    integral_linear    integral(V1, N) - integral(V2, N) = integral(sub(V1, V2), N)

Nothing here is proved. The registry is never extended at runtime; a
derivation that needs something else must derive it.
"""

from types import MappingProxyType

from ..core.state import Clause, ProofError
from .vocabulary import (
    density_of, integral, kinetic_interaction, energy_expectation,
    ground_state, ground_energy, sub, plus, minus,
    eq, ne, gt, equiv,
)


def _axiom(label: str, *literals) -> Clause:
    return Clause(literals=frozenset(literals), label=label, rule="axiom")


ENERGY_DEF = _axiom(
    "energy_def",
    eq(energy_expectation("Psi", "V"),
       plus(kinetic_interaction("Psi"), integral("V", density_of("Psi")))),
)

GROUND_ENERGY_DEF = _axiom(
    "ground_energy_def",
    eq(ground_energy("V"), energy_expectation(ground_state("V"), "V")),
)

INTEGRAL_LINEAR = _axiom(
    "integral_linear",
    eq(minus(integral("V1", "N"), integral("V2", "N")),
       integral(sub("V1", "V2"), "N")),
)

RAYLEIGH_RITZ_STRICT = _axiom(
    "rayleigh_ritz_strict",
    eq("Psi", ground_state("V")),
    gt(energy_expectation("Psi", "V"), ground_energy("V")),
)

DISTINCT_POTENTIALS_DISTINCT_STATES = _axiom(
    "distinct_potentials_distinct_states",
    equiv("V1", "V2"),
    ne(ground_state("V1"), ground_state("V2")),
)

AXIOMS = MappingProxyType({
    a.label: a for a in (
        ENERGY_DEF,
        GROUND_ENERGY_DEF,
        INTEGRAL_LINEAR,
        RAYLEIGH_RITZ_STRICT,
        DISTINCT_POTENTIALS_DISTINCT_STATES,
    )
})

# Definitional axioms that unfold energy terms, in the order they should fire.
UNFOLDING = ("ground_energy_def", "energy_def")


def axiom(name: str) -> Clause:
    if name not in AXIOMS:
        raise ProofError(f"no axiom named {name!r}; known: {', '.join(AXIOMS)}")
    return AXIOMS[name]


def preconditions(clause: Clause) -> list:
    """
    The preconditions of an axiom, stated positively.

    For the two-literal rule axioms this is the complement of the literal
    that is not the conclusion; definitional axioms have none.
    """
    if len(clause.literals) < 2:
        return []
    conclusion = conclusion_of(clause)
    return [(not lit[0],) + lit[1:] for lit in clause.literals if lit != conclusion]


def conclusion_of(clause: Clause) -> tuple:
    if len(clause.literals) == 1:
        return next(iter(clause.literals))
    # rule axioms conclude gt or a disequation
    for lit in clause.literals:
        if lit[1] == "gt" or (lit[1] == "eq" and not lit[0]):
            return lit
    raise ProofError(f"{clause.label}: no conclusion literal")
