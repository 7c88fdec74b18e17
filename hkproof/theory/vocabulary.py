"""
The uninterpreted vocabulary of ground-state energetics.

Wavefunctions and densities are opaque: the theory only threads them
through the operations below and compares them for equality. Potentials
are the one entity with visible structure, a total function x -> v(x),
because constant-shift equivalence has to be decided on them.

    density_of(psi)             wavefunction -> density
    integral(v, n)              potential, density -> real
    kinetic_interaction(psi)    wavefunction -> real
    energy_expectation(psi, v)  wavefunction, potential -> real
    ground_state(v)             potential -> wavefunction
    ground_energy(v)            potential -> real
    sub(v1, v2)                 pointwise difference potential
    F(n)                        universal functional, density -> real
"""

from dataclasses import dataclass, field
from typing import Optional

import sympy

from ..core.state import ProofError
from ..core.terms import is_variable, is_function

X = sympy.Symbol("x", real=True)

WAVEFUNCTION = "wavefunction"
DENSITY = "density"
POTENTIAL = "potential"
REAL = "real"

SIGNATURE = {
    "density_of":          ((WAVEFUNCTION,), DENSITY),
    "integral":            ((POTENTIAL, DENSITY), REAL),
    "kinetic_interaction": ((WAVEFUNCTION,), REAL),
    "energy_expectation":  ((WAVEFUNCTION, POTENTIAL), REAL),
    "ground_state":        ((POTENTIAL,), WAVEFUNCTION),
    "ground_energy":       ((POTENTIAL,), REAL),
    "sub":                 ((POTENTIAL, POTENTIAL), POTENTIAL),
    "F":                   ((DENSITY,), REAL),
    "plus":                ((REAL, REAL), REAL),
    "minus":               ((REAL, REAL), REAL),
}

PREDICATES = {
    "gt":    (REAL, REAL),
    "ge":    (REAL, REAL),
    "equiv": (POTENTIAL, POTENTIAL),
}


# ── Term constructors ────────────────────────────────────────────────────────

def density_of(psi):
    return ("density_of", psi)


def integral(v, n):
    return ("integral", v, n)


def kinetic_interaction(psi):
    return ("kinetic_interaction", psi)


def energy_expectation(psi, v):
    return ("energy_expectation", psi, v)


def ground_state(v):
    return ("ground_state", v)


def ground_energy(v):
    return ("ground_energy", v)


def sub(v1, v2):
    return ("sub", v1, v2)


def F(n):
    return ("F", n)


def plus(a, b):
    return ("plus", a, b)


def minus(a, b):
    return ("minus", a, b)


def eq(a, b):
    return (True, "eq", a, b)


def ne(a, b):
    return (False, "eq", a, b)


def gt(a, b):
    return (True, "gt", a, b)


def equiv(v1, v2):
    return (True, "equiv", v1, v2)


def not_equiv(v1, v2):
    return (False, "equiv", v1, v2)


# ── Sorts ────────────────────────────────────────────────────────────────────

def sort_of(term, constants: dict):
    """
    The sort of term, given the sorts of its constants.

    Variables and unknown constants have no fixed sort (None) and fit
    anywhere. Numbers are real. Raises ProofError on an ill-sorted
    application, which is how an ill-typed statement is rejected.
    """
    if isinstance(term, (int, float)) and not isinstance(term, bool):
        return REAL
    if is_variable(term):
        return None
    if is_function(term):
        if term[0] not in SIGNATURE:
            raise ProofError(f"unknown function symbol {term[0]!r}")
        arg_sorts, result = SIGNATURE[term[0]]
        if len(arg_sorts) != len(term) - 1:
            raise ProofError(f"{term[0]} takes {len(arg_sorts)} arguments: {term!r}")
        for expected, arg in zip(arg_sorts, term[1:]):
            actual = sort_of(arg, constants)
            if actual is not None and actual != expected:
                raise ProofError(f"{term[0]} expects a {expected} but got {actual}: {arg!r}")
        return result
    return constants.get(term)


def check_literal(literal: tuple, constants: dict):
    """Raise ProofError unless literal is well-sorted."""
    pred, args = literal[1], literal[2:]
    sorts = [sort_of(a, constants) for a in args]
    if pred == "eq":
        if len(args) != 2:
            raise ProofError(f"eq is binary: {literal!r}")
        if None not in sorts and sorts[0] != sorts[1]:
            raise ProofError(f"cannot equate a {sorts[0]} with a {sorts[1]}")
        return
    if pred not in PREDICATES:
        raise ProofError(f"unknown predicate {pred!r}")
    expected = PREDICATES[pred]
    if len(args) != len(expected):
        raise ProofError(f"{pred} takes {len(expected)} arguments")
    for want, got, arg in zip(expected, sorts, args):
        if got is not None and got != want:
            raise ProofError(f"{pred} expects a {want} but got {got}: {arg!r}")


# ── Potentials ───────────────────────────────────────────────────────────────

@dataclass
class Potential:
    """
    A real potential v(x), named by the constant that stands for it in terms.

    expr is a sympy expression in X; term is the constant (or, for a
    pointwise difference, the sub(...) application) used in literals.
    """
    name: str
    expr: sympy.Expr
    term: object = field(default=None)

    def __post_init__(self):
        expr = sympy.sympify(self.expr, locals={"x": X})
        # a plain Symbol("x") from the caller is the same coordinate
        self.expr = expr.subs({s: X for s in expr.free_symbols if s.name == "x"})
        if self.term is None:
            if is_variable(self.name):
                raise ValueError(f"potential names must not start uppercase: {self.name!r}")
            self.term = self.name

    def __call__(self, value):
        return self.expr.subs(X, value)

    def __hash__(self):
        return hash(self.name)

    def __eq__(self, other):
        return isinstance(other, Potential) and self.name == other.name

    def __repr__(self):
        return f"Potential({self.name}: {self.expr})"


def potential(name: str, expr) -> Potential:
    """Build a Potential from a sympy expression or a string such as 'x**2 + 1'."""
    return Potential(name=name, expr=expr)


def potential_difference(p: Potential, q: Potential) -> Potential:
    """The pointwise difference x -> p(x) - q(x)."""
    return Potential(name=f"{p.name}-{q.name}", expr=p.expr - q.expr,
                     term=sub(p.term, q.term))


def constant_offset(p: Potential, q: Potential) -> Optional[sympy.Expr]:
    """
    The constant c with p(x) = q(x) + c for every x, or None if there is none.
    """
    diff = sympy.simplify(p.expr - q.expr)
    if X in diff.free_symbols:
        if sympy.simplify(sympy.diff(diff, X)) != 0:
            return None
        diff = sympy.simplify(diff.subs(X, 0))
    return diff


def equivalent_up_to_constant(p: Potential, q: Potential) -> bool:
    return constant_offset(p, q) is not None
