from .vocabulary import (
    X, SIGNATURE, Potential, potential, potential_difference,
    constant_offset, equivalent_up_to_constant, sort_of, check_literal,
    density_of, integral, kinetic_interaction, energy_expectation,
    ground_state, ground_energy, sub, F, plus, minus,
    eq, ne, gt, equiv, not_equiv,
)
from .axioms import AXIOMS, axiom, preconditions, conclusion_of
from .model import FiniteModel
from .functional import (
    F_DEFINITION, universal_functional, universal_functional_term,
    is_universal_functional_value,
)
from .uniqueness import (
    STAGES, Theorem, derive_contradiction, prove_uniqueness,
    search_strict_inequalities, strict_goals,
)

__all__ = [
    "X", "SIGNATURE", "Potential", "potential", "potential_difference",
    "constant_offset", "equivalent_up_to_constant", "sort_of", "check_literal",
    "density_of", "integral", "kinetic_interaction", "energy_expectation",
    "ground_state", "ground_energy", "sub", "F", "plus", "minus",
    "eq", "ne", "gt", "equiv", "not_equiv",
    "AXIOMS", "axiom", "preconditions", "conclusion_of",
    "FiniteModel",
    "F_DEFINITION", "universal_functional", "universal_functional_term",
    "is_universal_functional_value",
    "STAGES", "Theorem", "derive_contradiction", "prove_uniqueness",
    "search_strict_inequalities", "strict_goals",
]
