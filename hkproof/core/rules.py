"""
The proof kernel: the only way facts enter a Derivation.

Every rule checks that its premises are already established (a fact of
this derivation or one of its axioms), computes the conclusion, and
appends it. A rule whose premises do not license it raises ProofError
and leaves the derivation untouched, so a derivation is either built
step by step from valid inferences or not at all.

Rules:
    hypothesis   assume a ground literal
    instantiate  specialise an axiom by a substitution
    discharge    remove one precondition of a clause with a unit fact
    modus_ponens instantiate + discharge every precondition
    symmetry     a = b  /  a != b   ->  b = a  /  b != a
    rewrite      replace a subterm using an established equation
    unfold       rewrite to a fixpoint with several equations
    let          name a term with a fresh constant
    add_strict   a > b, c > d  ->  a + c > b + d
    linarith     close the derivation by linear arithmetic
    advance      move the stage machine forward
"""

from typing import Optional

from .state import Clause, Derivation, ProofError
from .terms import (
    apply_sub_to_clause, is_ground, is_variable, render_literal, render_term,
)
from ..inference.resolve import discharge as resolve_unit
from ..inference.rewrite import (
    equation_sides, rewrite_literal, literal_mentions, unfold_literal,
)
from ..inference.linarith import (
    find_contradiction, check_certificate, explain_certificate, numeral_value,
    NonlinearError,
)


def _require(state: Derivation, *premises: Clause):
    for premise in premises:
        if not isinstance(premise, Clause) or not state.established(premise):
            raise ProofError(f"not established in this derivation: {premise!r}")


def _add(state: Derivation, literals, source, rule, label="", detail="",
         verbose=False) -> Clause:
    """Append a conclusion, or return the existing fact with the same literals."""
    clause = Clause(literals=frozenset(literals), source=tuple(source),
                    label=label, rule=rule, detail=detail)
    for existing in state.facts:
        if existing == clause:
            return existing
    state.step += 1
    clause.step = state.step
    state.facts.append(clause)
    state.history.append({
        "step": state.step,
        "rule": rule,
        "fact": clause.render(state.aliases),
        "from": list(clause.source),
        "stage": state.stage,
    })
    if verbose:
        src = f"  [{rule}: {', '.join(clause.source)}]" if clause.source else f"  [{rule}]"
        print(f"  {state.step:>3}. {clause.render(state.aliases)}{src}")
    if clause.is_empty:
        state.closed = True
    return clause


def _unit_literal(clause: Clause) -> tuple:
    if not clause.is_unit:
        raise ProofError(f"expected a single fact, got {clause.name}")
    return clause.literal


# ── Rules ────────────────────────────────────────────────────────────────────

def hypothesis(state: Derivation, literal: tuple, label: str, verbose=False) -> Clause:
    """Assume a ground literal. Hypotheses are the inputs of a theorem."""
    if not all(is_ground(arg) for arg in literal[2:]):
        raise ProofError(f"hypotheses must be ground: {render_literal(literal)}")
    return _add(state, {literal}, (), "hypothesis", label=label, verbose=verbose)


def instantiate(state: Derivation, axiom: Clause, sub: dict, verbose=False) -> Clause:
    """Specialise an axiom. Every variable of the axiom must be bound."""
    _require(state, axiom)
    literals = apply_sub_to_clause(sub, axiom.literals)
    if not all(is_ground(arg) for lit in literals for arg in lit[2:]):
        raise ProofError(f"instance of {axiom.label or axiom.name} is not ground: {sub!r}")
    return _add(state, literals, (axiom.name,), "instantiate",
                label=axiom.label, verbose=verbose)


def discharge(state: Derivation, clause: Clause, premise: Clause, verbose=False) -> Clause:
    """Remove the precondition of clause that premise refutes."""
    _require(state, clause, premise)
    results = resolve_unit(clause, premise)
    if not results:
        raise ProofError(
            f"{premise.render(state.aliases)} does not discharge any "
            f"precondition of {clause.render(state.aliases)}"
        )
    literals, _ = results[0]
    return _add(state, literals, (clause.name, premise.name), "discharge", verbose=verbose)


def modus_ponens(state: Derivation, axiom: Clause, sub: dict, premises=(),
                 verbose=False) -> Clause:
    """
    Instantiate an axiom and discharge all of its preconditions.

    Raises ProofError if a precondition is left open: the axiom's
    conclusion is only available once every precondition is established.
    On failure the intermediate instance and discharges are removed again.
    """
    for premise in premises:
        _require(state, premise)
    mark = (len(state.facts), len(state.history), state.step)
    try:
        current = instantiate(state, axiom, sub, verbose=verbose)
        for premise in premises:
            current = discharge(state, current, premise, verbose=verbose)
        if not current.is_unit:
            raise ProofError(
                f"{axiom.label or axiom.name}: unmet precondition in "
                f"{current.render(state.aliases)}"
            )
    except ProofError:
        del state.facts[mark[0]:]
        del state.history[mark[1]:]
        state.step = mark[2]
        raise
    return current


def symmetry(state: Derivation, fact: Clause, verbose=False) -> Clause:
    _require(state, fact)
    lit = _unit_literal(fact)
    if lit[1] != "eq" or len(lit) != 4:
        raise ProofError(f"symmetry needs an equation or disequation: {fact.name}")
    return _add(state, {(lit[0], "eq", lit[3], lit[2])}, (fact.name,), "symmetry",
                verbose=verbose)


def rewrite(state: Derivation, target: Clause, equation: Clause, reverse=False,
            verbose=False) -> Clause:
    """Replace every occurrence of the equation's left side in target."""
    _require(state, target, equation)
    lhs, rhs = equation_sides(_unit_literal(equation), reverse=reverse)
    if not is_ground(lhs):
        raise ProofError(f"rewrite needs a ground equation: {equation.name}")
    lit = _unit_literal(target)
    if not literal_mentions(lit, lhs):
        raise ProofError(
            f"{render_term(lhs, state.aliases)} does not occur in "
            f"{target.render(state.aliases)}"
        )
    return _add(state, {rewrite_literal(lit, lhs, rhs)}, (target.name, equation.name),
                "rewrite", verbose=verbose)


def unfold(state: Derivation, target: Clause, equations, reverse=False,
           verbose=False) -> Clause:
    """
    Rewrite target with the given equations until none applies.

    Equations may be established facts or axioms; schematic ones fire by
    matching. When nothing applies, target itself is returned.
    """
    _require(state, target, *equations)
    rules = []
    for eq in equations:
        try:
            rules.append(equation_sides(_unit_literal(eq), reverse=reverse))
        except ValueError as e:
            raise ProofError(str(e)) from e
    try:
        literal, fired = unfold_literal(_unit_literal(target), rules)
    except ValueError as e:
        raise ProofError(str(e)) from e
    if not fired:
        return target
    used = []
    for index in fired:
        if equations[index].name not in used:
            used.append(equations[index].name)
    return _add(state, {literal}, [target.name] + used, "unfold", verbose=verbose)


def let(state: Derivation, name: str, term, verbose=False) -> Clause:
    """Introduce a fresh constant standing for term:  term = name."""
    if is_variable(name) or not isinstance(name, str) or not name:
        raise ProofError(f"not a constant name: {name!r}")
    if numeral_value(name) is not None:
        raise ProofError(f"a numeral cannot name a term: {name!r}")
    if name in state.constants or any(
        literal_mentions(lit, name) for fact in state.facts for lit in fact.literals
    ):
        raise ProofError(f"constant {name!r} is already in use")
    if not is_ground(term):
        raise ProofError(f"let needs a ground term, got {term!r}")
    state.constants.add(name)
    return _add(state, {(True, "eq", term, name)}, (), "let",
                label=f"let {name}", verbose=verbose)


def add_strict(state: Derivation, first: Clause, second: Clause, verbose=False) -> Clause:
    """Add two strict inequalities termwise."""
    _require(state, first, second)
    a = _unit_literal(first)
    b = _unit_literal(second)
    for lit, fact in ((a, first), (b, second)):
        if not lit[0] or lit[1] != "gt":
            raise ProofError(f"add_strict needs strict inequalities: {fact.name}")
    return _add(state, {(True, "gt", ("plus", a[2], b[2]), ("plus", a[3], b[3]))},
                (first.name, second.name), "add_strict", verbose=verbose)


def linarith(state: Derivation, facts, verbose=False) -> Clause:
    """
    Close the derivation if the facts are contradictory by linear arithmetic.

    The contradiction is the empty clause; its detail records the
    certificate (which facts, with which multipliers, sum to 0 > 0).
    """
    facts = list(facts)
    _require(state, *facts)
    literals = [_unit_literal(f) for f in facts]
    try:
        cert = find_contradiction(literals)
    except (NonlinearError, ValueError) as e:
        raise ProofError(f"linarith: {e}") from e
    if cert is None or not check_certificate(literals, cert):
        raise ProofError("linarith failed: the facts are linearly consistent")
    detail = explain_certificate(literals, cert, lambda lit: render_literal(lit, state.aliases))
    used = [facts[i].name for i in sorted(cert)]
    return _add(state, (), used, "linarith", detail=detail, verbose=verbose)


def advance(state: Derivation, stage: str, stages: tuple, verbose=False):
    """
    Move to the next stage of a linear stage machine.

    Stages must be entered in order with none skipped; anything else is
    a malformed derivation.
    """
    if stage not in stages:
        raise ProofError(f"unknown stage {stage!r}")
    expected: Optional[str]
    if not state.stage:
        expected = stages[0]
    else:
        position = stages.index(state.stage)
        expected = stages[position + 1] if position + 1 < len(stages) else None
    if stage != expected:
        raise ProofError(f"stage {stage!r} cannot follow {state.stage or 'the start'!r}")
    state.stage = stage
    state.history.append({"step": state.step, "stage": stage})
    if verbose:
        print(f"  -- {stage}")
