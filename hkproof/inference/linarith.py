"""
Linear arithmetic over the reals, by Fourier–Motzkin elimination.

Given literals over real-valued terms, decide whether they are jointly
unsatisfiable. Arithmetic functors (plus, minus, neg, times by a number)
are read as sympy arithmetic; every other subterm is opaque and becomes a
fresh sympy symbol, so kinetic_interaction(psi1) and integral(v1, n) are
just unknowns.

Each usable literal becomes a row  e > 0  or  e >= 0 :

    gt(a, b)    ->  a - b > 0          ~gt(a, b)  ->  b - a >= 0
    ge(a, b)    ->  a - b >= 0         ~ge(a, b)  ->  b - a > 0
    eq(a, b)    ->  a - b >= 0  and  b - a >= 0

Disequalities are disjunctions and are ignored. Elimination keeps, for
every row, the non-negative multipliers of the input literals that produced
it. A row that reduces to a constant c with c < 0, or c == 0 while strict,
is a contradiction; its multipliers are the certificate.
"""

from fractions import Fraction
from typing import Optional

import sympy

from ..core.terms import is_function, is_variable

MAX_ROWS = 4096


class NonlinearError(ValueError):
    """A literal is not linear in its opaque atoms."""


class AtomTable:
    """Opaque terms <-> sympy symbols, numbered in order of first appearance."""

    def __init__(self):
        self.symbols = {}
        self.terms = {}

    def symbol(self, term):
        if term not in self.symbols:
            sym = sympy.Symbol(f"a{len(self.symbols)}", real=True)
            self.symbols[term] = sym
            self.terms[sym] = term
        return self.symbols[term]


def numeral_value(term):
    """The exact sympy number a term denotes, or None if it is not a numeral."""
    if isinstance(term, bool):
        return None
    if isinstance(term, int):
        return sympy.Integer(term)
    if isinstance(term, Fraction):
        return sympy.Rational(term.numerator, term.denominator)
    if isinstance(term, float):
        return sympy.nsimplify(term)
    if isinstance(term, str) and term.lstrip("-").isdigit():
        return sympy.Integer(int(term))
    return None


def to_sympy(term, atoms: AtomTable) -> sympy.Expr:
    """Translate a term to a sympy expression, atomizing non-arithmetic parts."""
    value = numeral_value(term)
    if value is not None:
        return value
    if is_variable(term):
        raise ValueError(f"linarith needs ground terms, got variable {term!r}")
    if is_function(term):
        head, args = term[0], term[1:]
        if head == "plus":
            return sympy.Add(*(to_sympy(a, atoms) for a in args))
        if head == "minus" and len(args) == 2:
            return to_sympy(args[0], atoms) - to_sympy(args[1], atoms)
        if head == "neg" and len(args) == 1:
            return -to_sympy(args[0], atoms)
        if head == "times" and len(args) == 2:
            left, right = to_sympy(args[0], atoms), to_sympy(args[1], atoms)
            if not (left.is_number or right.is_number):
                raise NonlinearError(f"product of two unknowns: {term!r}")
            return left * right
    return atoms.symbol(term)


def _check_linear(expr, literal):
    syms = sorted(expr.free_symbols, key=str)
    if syms and sympy.Poly(expr, *syms).total_degree() > 1:
        raise NonlinearError(f"not linear: {literal!r}")


def constraints_from(literals, atoms: AtomTable) -> list:
    """Rows (expr, strict, index) meaning expr > 0 (strict) or expr >= 0."""
    rows = []
    for index, lit in enumerate(literals):
        sign, pred = lit[0], lit[1]
        if pred not in ("gt", "ge", "eq") or len(lit) != 4:
            continue
        if pred == "eq" and not sign:
            continue
        diff = sympy.expand(to_sympy(lit[2], atoms) - to_sympy(lit[3], atoms))
        _check_linear(diff, lit)
        if pred == "eq":
            rows.append((diff, False, index))
            rows.append((-diff, False, index))
        elif sign:
            rows.append((diff, pred == "gt", index))
        else:
            rows.append((-diff, pred == "ge", index))
    return rows


def _contradicts(expr, strict) -> bool:
    if not expr.is_number:
        return False
    return bool(expr < 0) or (strict and expr == 0)


def fourier_motzkin(rows) -> Optional[dict]:
    """
    Eliminate atoms one at a time. Returns {literal index: multiplier}
    for a contradictory combination, or None if the rows are satisfiable
    (or elimination grew past MAX_ROWS).
    """
    table = [(expr, strict, {index: sympy.Integer(1)}) for expr, strict, index in rows]

    while True:
        for expr, strict, cert in table:
            if _contradicts(expr, strict):
                return cert

        table = [row for row in table if not row[0].is_number]
        syms = set().union(*(row[0].free_symbols for row in table)) if table else set()
        if not syms:
            return None

        # eliminate the atom producing the fewest new rows
        def cost(s):
            pos = sum(1 for row in table if row[0].coeff(s) > 0)
            neg = sum(1 for row in table if row[0].coeff(s) < 0)
            return (pos * neg - pos - neg, str(s))
        target = min(syms, key=cost)

        pos, neg, rest = [], [], []
        for row in table:
            c = row[0].coeff(target)
            if c > 0:
                pos.append(row)
            elif c < 0:
                neg.append(row)
            else:
                rest.append(row)

        for p_expr, p_strict, p_cert in pos:
            a = p_expr.coeff(target)
            for q_expr, q_strict, q_cert in neg:
                b = -q_expr.coeff(target)
                combined = sympy.expand(b * p_expr + a * q_expr)
                cert = {k: b * p_cert.get(k, 0) + a * q_cert.get(k, 0)
                        for k in set(p_cert) | set(q_cert)}
                rest.append((combined, p_strict or q_strict, cert))

        if len(rest) > MAX_ROWS:
            return None
        table = rest


def find_contradiction(literals) -> Optional[dict]:
    """
    Decide whether literals entail 0 > 0 by linear arithmetic.

    Returns a certificate {position in literals: positive multiplier}
    or None if no contradiction is found.
    """
    literals = list(literals)
    atoms = AtomTable()
    rows = constraints_from(literals, atoms)
    cert = fourier_motzkin(rows)
    if cert is None:
        return None
    return {k: v for k, v in cert.items() if v != 0}


def check_certificate(literals, certificate: dict) -> bool:
    """
    Re-check a certificate independently of the elimination that found it.

    The weighted sum of the used rows must be a constant that is negative,
    or zero with at least one strict row among them.
    """
    literals = list(literals)
    if not certificate or any(v < 0 for v in certificate.values()):
        return False
    atoms = AtomTable()
    total = sympy.Integer(0)
    strict = False
    for index, weight in certificate.items():
        lit = literals[index]
        diff = sympy.expand(to_sympy(lit[2], atoms) - to_sympy(lit[3], atoms))
        if lit[1] == "eq":
            return _check_with_equalities(literals, certificate)
        row = diff if lit[0] else -diff
        total += weight * row
        strict = strict or (lit[1] == "gt") == bool(lit[0])
    total = sympy.expand(total)
    return _contradicts(total, strict)


def _check_with_equalities(literals, certificate) -> bool:
    # an equality may enter with either sign, so re-run elimination on the support
    support = [literals[i] for i in sorted(certificate)]
    return find_contradiction(support) is not None


def explain_certificate(literals, certificate: dict, render) -> str:
    """Short text like '1·(h1) + 1·(h2) ⊢ 0 > 0'."""
    parts = [f"{certificate[i]}·({render(literals[i])})" for i in sorted(certificate)]
    return " + ".join(parts)
