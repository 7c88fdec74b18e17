"""
hkproof: an axiomatic checker for the Hohenberg–Kohn uniqueness theorem.

Ground-state energetics is stated as a fixed set of axioms over opaque
wavefunctions, densities and potentials. A small proof kernel derives,
for two potentials that are not equal up to a constant, a contradiction
from the hypothesis that their ground states share a density.

Usage:
    python -m hkproof --scenario contradiction
    python -m hkproof --scenario shifted          (equivalent pair: rejected)
    python -m hkproof --v1 "x**2" --v2 "x**4" --search
    python -m hkproof --axioms
"""

from .core.state import Clause, Derivation, SearchState, ProofError
from .core.engine import search_step, run_search
from .core.proof import found_contradiction, extract_proof, axioms_used, print_proof
from .inference.resolve import resolve, clause_subsumes
from .inference.linarith import find_contradiction, check_certificate
from .theory.vocabulary import (
    Potential, potential, potential_difference,
    constant_offset, equivalent_up_to_constant,
)
from .theory.axioms import AXIOMS, axiom
from .theory.model import FiniteModel
from .theory.functional import universal_functional, is_universal_functional_value
from .theory.uniqueness import (
    STAGES, Theorem, derive_contradiction, prove_uniqueness,
    search_strict_inequalities,
)

__all__ = [
    "Clause", "Derivation", "SearchState", "ProofError",
    "search_step", "run_search",
    "found_contradiction", "extract_proof", "axioms_used", "print_proof",
    "resolve", "clause_subsumes",
    "find_contradiction", "check_certificate",
    "Potential", "potential", "potential_difference",
    "constant_offset", "equivalent_up_to_constant",
    "AXIOMS", "axiom",
    "FiniteModel",
    "universal_functional", "is_universal_functional_value",
    "STAGES", "Theorem", "derive_contradiction", "prove_uniqueness",
    "search_strict_inequalities",
]
