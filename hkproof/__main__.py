"""
CLI entry point. Run as: python -m hkproof --scenario <name>
"""

import argparse
import sys

import sympy

from .core.state import Derivation, ProofError
from .core.proof import print_proof
from .core.terms import render_literal
from .scenarios import SCENARIOS, scenario_potentials
from .theory.axioms import AXIOMS
from .theory.uniqueness import prove_uniqueness, search_strict_inequalities, strict_goals
from .visualization import print_axioms, print_history, print_search, export_dot


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Check the ground-state uniqueness theorem for a pair of potentials",
    )
    parser.add_argument("--scenario", choices=list(SCENARIOS.keys()), default="contradiction",
                        help="Which potential pair to check")
    parser.add_argument("--v1", type=str, default=None, help="Override v1(x), e.g. 'x**2'")
    parser.add_argument("--v2", type=str, default=None, help="Override v2(x)")
    parser.add_argument("--search", action="store_true",
                        help="Also find the strict inequalities by resolution search")
    parser.add_argument("--steps", type=int, default=40, help="Max search steps")
    parser.add_argument("--axioms", action="store_true", help="List the axioms and exit")
    parser.add_argument("--save", type=str, default=None, help="Save the derivation to file")
    parser.add_argument("--load", type=str, default=None, help="Print a saved derivation")
    parser.add_argument("--dot", type=str, default=None, help="Export DOT graph to file")
    parser.add_argument("--quiet", action="store_true", help="Less output")
    args = parser.parse_args(argv)

    if args.axioms:
        print_axioms(dict(AXIOMS))
        return 0

    if args.load:
        state = Derivation.load(args.load)
        print(f"Loaded derivation from {args.load} ({len(state.facts)} facts)")
        print_proof(state)
        return 0

    try:
        v1, v2 = scenario_potentials(args.scenario, args.v1, args.v2)
    except (sympy.SympifyError, TypeError) as e:
        print(f"Cannot parse potential: {e}")
        return 2

    print(f"Scenario: {args.scenario}  ({SCENARIOS[args.scenario]['description']})")
    print(f"  v1(x) = {v1.expr}\n  v2(x) = {v2.expr}")

    if args.search:
        try:
            search = search_strict_inequalities(v1, v2, max_steps=args.steps,
                                                verbose=not args.quiet)
        except ProofError as e:
            print(f"\nSearch not started: {e}")
        else:
            print_search(search)
            for goal in strict_goals(v1, v2):
                found = any(c.literals == goal for c in search.all_clauses())
                mark = "found" if found else "missing"
                print(f"  [{mark}] {render_literal(next(iter(goal)))}")

    try:
        theorem = prove_uniqueness(v1, v2, verbose=not args.quiet)
    except ProofError as e:
        print(f"\nDerivation rejected: {e}")
        return 1

    print(f"\nTheorem: {theorem.statement}")
    print(f"  holds by {theorem.method}: {render_literal(theorem.conclusion)}")

    state = theorem.derivation
    if state is None:
        return 0

    if not args.quiet:
        print_history(state)
    print_proof(state)

    if args.dot:
        export_dot(state, args.dot)
    if args.save:
        state.save(args.save)
        print(f"Derivation saved to {args.save}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
