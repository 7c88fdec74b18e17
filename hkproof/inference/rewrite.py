"""
Equational rewriting, paramodulation-style.

An equation eq(s, t) licenses replacing s by t anywhere inside another
literal. Equations with variables act as schematic rules: the left side
is matched (one way) against subterms, and the bound right side is put
in its place.

rewrite_literal applies one ground equation once, everywhere it occurs.
unfold_term applies a list of rules to a fixpoint, innermost first; it
is idempotent: unfolding an already unfolded term returns it unchanged.
"""

from ..core.terms import (
    is_function, match_term, apply_substitution,
    contains_subterm, replace_subterm,
)

MAX_UNFOLD_ROUNDS = 64


def equation_sides(literal: tuple, reverse: bool = False) -> tuple:
    """(lhs, rhs) of a positive eq literal, swapped when reverse is set."""
    if not literal[0] or literal[1] != "eq" or len(literal) != 4:
        raise ValueError(f"not an equation: {literal!r}")
    lhs, rhs = literal[2], literal[3]
    return (rhs, lhs) if reverse else (lhs, rhs)


def rewrite_literal(literal: tuple, lhs, rhs) -> tuple:
    """Replace every occurrence of the ground term lhs in literal's arguments."""
    return literal[:2] + tuple(replace_subterm(arg, lhs, rhs) for arg in literal[2:])


def literal_mentions(literal: tuple, term) -> bool:
    return any(contains_subterm(arg, term) for arg in literal[2:])


def _rewrite_once(term, rules):
    """One innermost rewrite pass. Returns (new_term, rules fired)."""
    fired = []
    if is_function(term):
        args = []
        for arg in term[1:]:
            new_arg, used = _rewrite_once(arg, rules)
            args.append(new_arg)
            fired.extend(used)
        term = (term[0],) + tuple(args)

    for index, (lhs, rhs) in enumerate(rules):
        sub = match_term(lhs, term)
        if sub is not None:
            new_term = apply_substitution(sub, rhs)
            if new_term != term:
                return new_term, fired + [index]
    return term, fired


def unfold_term(term, rules) -> tuple:
    """
    Rewrite term with rules until nothing changes.

    Returns (normal_form, indices of the rules that fired). Raises
    ValueError if the rules do not reach a fixpoint, which means they loop.
    """
    fired = []
    for _ in range(MAX_UNFOLD_ROUNDS):
        new_term, used = _rewrite_once(term, rules)
        if new_term == term:
            return term, fired
        fired.extend(used)
        term = new_term
    raise ValueError(f"rewriting did not terminate after {MAX_UNFOLD_ROUNDS} rounds")


def unfold_literal(literal: tuple, rules) -> tuple:
    fired = []
    args = []
    for arg in literal[2:]:
        new_arg, used = unfold_term(arg, rules)
        args.append(new_arg)
        fired.extend(used)
    return literal[:2] + tuple(args), fired
