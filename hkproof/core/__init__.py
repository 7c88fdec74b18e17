from .state import Clause, Derivation, SearchState, ProofError
from .engine import search_step, run_search
from .terms import (
    is_variable, is_function, is_ground, occurs_in,
    apply_substitution, apply_sub_to_literal, apply_sub_to_clause,
    unify_terms, unify_literals, match_term, complement,
    standardize_apart, canonicalize,
    contains_subterm, replace_subterm, render_term, render_literal,
)
from .proof import found_contradiction, found_clause, extract_proof, axioms_used, print_proof

__all__ = [
    "Clause", "Derivation", "SearchState", "ProofError",
    "search_step", "run_search",
    "is_variable", "is_function", "is_ground", "occurs_in",
    "apply_substitution", "apply_sub_to_literal", "apply_sub_to_clause",
    "unify_terms", "unify_literals", "match_term", "complement",
    "standardize_apart", "canonicalize",
    "contains_subterm", "replace_subterm", "render_term", "render_literal",
    "found_contradiction", "found_clause", "extract_proof", "axioms_used", "print_proof",
]
