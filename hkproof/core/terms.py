"""
Terms, literals, substitution and unification.

Everything the kernel reasons about is built from three kinds of term:

    str starting with uppercase -> variable:  "V", "Psi"
    other str, int, Fraction    -> constant:  "v1", "n", 0
    tuple                       -> function:  ("density_of", "Psi")

Literals are tuples (sign, predicate, arg1, arg2, ...):

    (True,  "gt", a, b)   ->  a > b
    (False, "eq", a, b)   ->  a != b

Substitutions are plain dicts: {"V": "v1", "Psi": ("ground_state", "v2")}
"""

from itertools import permutations

INFIX = {"plus": "+", "minus": "-"}
CANONICAL_PERMUTATION_LIMIT = 5


def is_variable(term) -> bool:
    """Variables start with uppercase. Everything else is a constant or function."""
    return isinstance(term, str) and len(term) > 0 and term[0].isupper()


def is_function(term) -> bool:
    return isinstance(term, tuple)


def occurs_in(var, term) -> bool:
    """Does var occur anywhere in term? Blocks cyclic bindings."""
    if var == term:
        return True
    if is_function(term):
        return any(occurs_in(var, arg) for arg in term[1:])
    return False


def is_ground(term) -> bool:
    if is_variable(term):
        return False
    if is_function(term):
        return all(is_ground(arg) for arg in term[1:])
    return True


def apply_substitution(sub: dict, term):
    """Apply a substitution to a single term, following binding chains."""
    if is_variable(term):
        if term in sub:
            return apply_substitution(sub, sub[term])
        return term
    if is_function(term):
        return (term[0],) + tuple(apply_substitution(sub, arg) for arg in term[1:])
    return term


def apply_sub_to_literal(sub: dict, literal: tuple) -> tuple:
    return literal[:2] + tuple(apply_substitution(sub, arg) for arg in literal[2:])


def apply_sub_to_clause(sub: dict, literals) -> frozenset:
    return frozenset(apply_sub_to_literal(sub, lit) for lit in literals)


def unify_terms(t1, t2, sub=None):
    """
    Robinson unification with occurs check.

    Returns the extended substitution, or None if t1 and t2 cannot be
    made identical.
    """
    if sub is None:
        sub = {}

    t1 = apply_substitution(sub, t1)
    t2 = apply_substitution(sub, t2)

    if t1 == t2:
        return sub

    if is_variable(t1):
        if occurs_in(t1, t2):
            return None
        return {**sub, t1: t2}

    if is_variable(t2):
        if occurs_in(t2, t1):
            return None
        return {**sub, t2: t1}

    if is_function(t1) and is_function(t2):
        if t1[0] != t2[0] or len(t1) != len(t2):
            return None
        for a1, a2 in zip(t1[1:], t2[1:]):
            sub = unify_terms(a1, a2, sub)
            if sub is None:
                return None
        return sub

    return None


def unify_literals(lit1: tuple, lit2: tuple, sub=None):
    """Unify two literals ignoring sign. Same predicate and arity required."""
    if lit1[1] != lit2[1] or len(lit1) != len(lit2):
        return None
    if sub is None:
        sub = {}
    for a1, a2 in zip(lit1[2:], lit2[2:]):
        sub = unify_terms(a1, a2, sub)
        if sub is None:
            return None
    return sub


def match_term(pattern, term, sub=None):
    """
    One-way matching: bind variables of pattern only, never of term.

    Used to fire schematic rewrite rules against ground expressions.
    """
    if sub is None:
        sub = {}

    if is_variable(pattern):
        if pattern in sub:
            return sub if sub[pattern] == term else None
        return {**sub, pattern: term}

    if is_function(pattern):
        if not is_function(term) or pattern[0] != term[0] or len(pattern) != len(term):
            return None
        for p, t in zip(pattern[1:], term[1:]):
            sub = match_term(p, t, sub)
            if sub is None:
                return None
        return sub

    return sub if pattern == term else None


def complement(literal: tuple) -> tuple:
    return (not literal[0],) + literal[1:]


def _rename_term(term, rename):
    if is_variable(term):
        return rename(term)
    if is_function(term):
        return (term[0],) + tuple(_rename_term(arg, rename) for arg in term[1:])
    return term


def standardize_apart(literals, suffix: str) -> frozenset:
    """Rename every variable by appending suffix, so two clauses share none."""
    return frozenset(
        lit[:2] + tuple(_rename_term(arg, lambda v: v + suffix) for arg in lit[2:])
        for lit in literals
    )


def canonicalize(literals) -> frozenset:
    """
    Rename variables to X1, X2, ... in a fixed traversal order.

    Two clauses that differ only by variable names canonicalize to the
    same frozenset, which keeps the search loop from collecting variants.
    """
    def shape(term):
        # variable names erased so the traversal order ignores them
        if is_variable(term):
            return "?"
        if is_function(term):
            return (term[0],) + tuple(shape(a) for a in term[1:])
        return repr(term)

    def renamed(ordered):
        var_map = {}

        def rename(var):
            if var not in var_map:
                var_map[var] = f"X{len(var_map) + 1}"
            return var_map[var]

        return frozenset(
            lit[:2] + tuple(_rename_term(arg, rename) for arg in lit[2:])
            for lit in ordered
        )

    ordered = sorted(literals, key=lambda lit: repr(lit[:2] + tuple(shape(a) for a in lit[2:])))
    if len(ordered) > CANONICAL_PERMUTATION_LIMIT:
        return renamed(ordered)
    # small clauses: the least renaming over all literal orders is a true normal form
    return min((renamed(p) for p in permutations(ordered)),
               key=lambda c: sorted(repr(lit) for lit in c))


def contains_subterm(term, target) -> bool:
    if term == target:
        return True
    if is_function(term):
        return any(contains_subterm(arg, target) for arg in term[1:])
    return False


def replace_subterm(term, target, replacement):
    """Replace every occurrence of target inside term (outermost first)."""
    if term == target:
        return replacement
    if is_function(term):
        return (term[0],) + tuple(replace_subterm(arg, target, replacement) for arg in term[1:])
    return term


def render_term(term, aliases=None) -> str:
    """Human-readable form. `plus`/`minus` print infix; aliases abbreviate subterms."""
    if aliases and term in aliases:
        return aliases[term]
    if is_function(term):
        args = [render_term(arg, aliases) for arg in term[1:]]
        if term[0] in INFIX and len(args) == 2:
            return f"{args[0]} {INFIX[term[0]]} {args[1]}"
        return f"{term[0]}({', '.join(args)})"
    return str(term)


def render_literal(literal: tuple, aliases=None) -> str:
    sign, pred, args = literal[0], literal[1], literal[2:]
    shown = [render_term(a, aliases) for a in args]
    if pred in ("eq", "gt", "ge") and len(shown) == 2:
        op = {"eq": ("=", "≠"), "gt": (">", "≤"), "ge": ("≥", "<")}[pred][0 if sign else 1]
        return f"{shown[0]} {op} {shown[1]}"
    text = f"{pred}({', '.join(shown)})"
    return text if sign else f"~{text}"
