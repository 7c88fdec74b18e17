"""
Proof extraction and display.

A closed Derivation holds the empty clause. Walking back through source
links recovers exactly the facts and axioms the contradiction rests on.
"""

from .state import Derivation, SearchState, Clause


def found_contradiction(state: Derivation) -> bool:
    return state.contradiction() is not None


def found_clause(state: SearchState, literals: frozenset) -> bool:
    """Has the search produced a clause with exactly these literals?"""
    return any(c.literals == literals for c in state.all_clauses())


def extract_proof(state: Derivation, goal: Clause = None) -> list:
    """
    Walk back from goal (default: the contradiction) through source links.

    Returns (clause, depth) pairs ordered so every clause comes after the
    clauses it was derived from.
    """
    goal = goal if goal is not None else state.contradiction()
    if goal is None:
        return []

    by_name = {c.name: c for c in state.axioms.values()}
    by_name.update({c.name: c for c in state.facts})

    proof = []
    visited = set()

    def walk(clause, depth):
        if clause.name in visited:
            return
        visited.add(clause.name)
        for parent in clause.source:
            if parent in by_name:
                walk(by_name[parent], depth + 1)
        proof.append((clause, depth))

    walk(goal, 0)
    return proof


def axioms_used(state: Derivation, goal: Clause = None) -> list:
    """Labels of the axioms the proof of goal rests on, in registry order."""
    names = {clause.name for clause, _ in extract_proof(state, goal)}
    return [label for label, axiom in state.axioms.items() if axiom.name in names]


def print_proof(state: Derivation, goal: Clause = None):
    proof = extract_proof(state, goal)
    if not proof:
        print("No proof found.")
        return
    numbers = {}
    print(f"\n{'='*72}")
    print("PROOF")
    print(f"{'='*72}")
    for i, (clause, _) in enumerate(proof, start=1):
        numbers[clause.name] = i
        refs = ", ".join(str(numbers[p]) for p in clause.source if p in numbers)
        how = clause.rule or "axiom"
        tag = f"{how} {refs}".strip()
        if clause.label and clause.rule in ("", "hypothesis", "let", "instantiate"):
            tag = f"{tag} ({clause.label})"
        print(f"  {i:>3}. {clause.render(state.aliases):<56} [{tag}]")
        if clause.detail:
            print(f"       {clause.detail}")
    print(f"{'='*72}")
    if found_contradiction(state):
        print("  QED: the hypotheses are contradictory.")
