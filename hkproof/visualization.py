"""
Reporting: axiom listings, derivation histories, search summaries, DOT export.
"""

from .core.state import Derivation, SearchState
from .core.terms import render_literal
from .theory.axioms import preconditions, conclusion_of


def print_axioms(axioms: dict):
    """List the trust boundary: every axiom with its preconditions."""
    print(f"\n{'='*72}")
    print(f"Axioms ({len(axioms)}), accepted without proof:")
    print(f"{'='*72}")
    for label, clause in axioms.items():
        pre = preconditions(clause)
        post = render_literal(conclusion_of(clause))
        if pre:
            print(f"  {label}:\n      {', '.join(render_literal(p) for p in pre)}  ->  {post}")
        else:
            print(f"  {label}:\n      {post}")


def print_history(state: Derivation):
    """Stage by stage, the facts each stage established."""
    print(f"\n{'='*72}")
    print("Derivation history:")
    print(f"{'='*72}")
    for entry in state.history:
        if "rule" not in entry:
            print(f"  [{entry['stage']}]")
            continue
        print(f"    {entry['step']:>3}. {entry['fact']}  ({entry['rule']})")
    status = "closed" if state.closed else "open"
    print(f"  {len(state.facts)} facts, {status}, stage {state.stage or '-'}")


def print_search(state: SearchState):
    print(f"\n{'='*72}")
    print(f"Search step {state.step}: {state.halt_reason or 'running'}")
    print(f"Set of support ({len(state.set_of_support)}):")
    for clause in state.set_of_support:
        print(f"  {clause.name}")
    print(f"Usable ({len(state.usable)}):")
    for clause in state.usable:
        print(f"  {clause.name}")
    print(f"{'='*72}")


def export_dot(state: Derivation, path="derivation.dot"):
    """Write the derivation graph as Graphviz DOT: axioms and hypotheses at the bottom."""
    def node(name):
        return name.replace('"', '\\"')

    with open(path, "w") as f:
        f.write("digraph derivation {\n")
        f.write("  rankdir=BT;\n")
        f.write("  node [shape=box, style=\"rounded,filled\"];\n")
        for clause in state.axioms.values():
            f.write(f'  "{node(clause.name)}" [fillcolor=lightyellow];\n')
        for clause in state.facts:
            color = {"hypothesis": "lightblue", "linarith": "salmon"}.get(clause.rule, "lightgray")
            label = node(clause.render(state.aliases))
            f.write(f'  "{node(clause.name)}" [label="{label}", fillcolor={color}];\n')
            for parent in clause.source:
                f.write(f'  "{node(parent)}" -> "{node(clause.name)}";\n')
        f.write("}\n")
    print(f"Graph exported to {path}")
