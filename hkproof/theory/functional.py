"""
The universal density functional.

    F(n) = inf { kinetic_interaction(psi) : density_of(psi) = n }

Over the open theory F is a specification, not a computation: the fiber
{psi : density_of(psi) = n} cannot be enumerated, so F(n) only appears
as the term ("F", n). It becomes computable once a finite interpretation
fixes the wavefunctions, and then the infimum is sympy's Min over the
fiber.

Empty fiber: sympy.Min() with no arguments is +oo (the identity of Min),
so F(n) = +oo when no wavefunction maps to n. F is total under this
convention, and +oo is an upper bound that never wins a minimisation.
"""

import sympy

from .model import FiniteModel
from .vocabulary import F

F_DEFINITION = "F(n) = inf { kinetic_interaction(psi) : density_of(psi) = n }"

EMPTY_FIBER_VALUE = sympy.oo


def universal_functional_term(n):
    """The uninterpreted term F(n), for use inside literals."""
    return F(n)


def universal_functional(model: FiniteModel, n) -> sympy.Expr:
    """F(n) in a finite model; +oo when the fiber of n is empty."""
    return sympy.Min(*(model.kinetic_interaction(psi) for psi in model.fiber(n)))


def is_universal_functional_value(model: FiniteModel, n, value) -> bool:
    """
    Does value satisfy the defining property of F(n) in model?

    It must bound every fiber value from below and be attained, except on
    an empty fiber where only +oo qualifies.
    """
    values = [model.kinetic_interaction(psi) for psi in model.fiber(n)]
    if not values:
        return value == EMPTY_FIBER_VALUE
    return all(bool(value <= v) for v in values) and any(
        sympy.simplify(value - v) == 0 for v in values
    )
