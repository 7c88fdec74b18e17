from .resolve import resolve, discharge, clause_subsumes, is_tautology
from .rewrite import rewrite_literal, unfold_term, unfold_literal
from .linarith import find_contradiction, check_certificate

__all__ = [
    "resolve", "discharge", "clause_subsumes", "is_tautology",
    "rewrite_literal", "unfold_term", "unfold_literal",
    "find_contradiction", "check_certificate",
]
