"""
Core data structures: Clause, Derivation, SearchState.

Nothing in here depends on inference rules or on the ground-state theory.

    A Clause is a frozenset of literals (a disjunction).
    Axioms are clauses whose negative literals are their preconditions.
    A fact is a unit clause.
    The empty clause [] is False: a derivation that reaches it is closed.
"""

from dataclasses import dataclass, field
from collections import deque
from fractions import Fraction
import json

from .terms import render_literal


class ProofError(ValueError):
    """An inference step was rejected: its premises do not license it."""


@dataclass
class Clause:
    """
    A disjunction of literals, with the provenance needed to replay it.

    source: names of the clauses this one was derived from
    rule:   the inference rule that produced it ("axiom", "rewrite", ...)
    detail: free-form note from the rule, e.g. a linarith certificate
    """
    literals: frozenset
    source: tuple = ()
    step: int = 0
    label: str = ""
    rule: str = ""
    detail: str = ""

    @property
    def name(self):
        body = self.render()
        if self.label:
            return f"[{self.label}] {body}"
        return body

    def render(self, aliases=None) -> str:
        if not self.literals:
            return "False"
        return " | ".join(sorted(render_literal(lit, aliases) for lit in self.literals))

    @property
    def is_empty(self):
        return len(self.literals) == 0

    @property
    def is_unit(self):
        return len(self.literals) == 1

    @property
    def literal(self):
        """The single literal of a unit clause."""
        if not self.is_unit:
            raise ProofError(f"{self.name} is not a single fact")
        return next(iter(self.literals))

    def __hash__(self):
        return hash(self.literals)

    def __eq__(self, other):
        return isinstance(other, Clause) and self.literals == other.literals

    def __repr__(self):
        return f"Clause({self.name})"


# ── JSON encoding of terms ───────────────────────────────────────────────────

def serialize_term(t):
    if isinstance(t, tuple):
        return {"_fn": [serialize_term(x) for x in t]}
    if isinstance(t, bool):
        return {"_bool": t}
    if isinstance(t, Fraction):
        return {"_frac": [t.numerator, t.denominator]}
    return t


def deserialize_term(t):
    if isinstance(t, dict):
        if "_fn" in t:
            return tuple(deserialize_term(x) for x in t["_fn"])
        if "_bool" in t:
            return t["_bool"]
        if "_frac" in t:
            return Fraction(*t["_frac"])
    return t


def serialize_clause(clause: Clause) -> dict:
    return {
        "literals": [[serialize_term(t) for t in lit]
                     for lit in sorted(clause.literals, key=repr)],
        "source": list(clause.source),
        "step": clause.step,
        "label": clause.label,
        "rule": clause.rule,
        "detail": clause.detail,
    }


def deserialize_clause(data: dict) -> Clause:
    lits = frozenset(tuple(deserialize_term(t) for t in lit) for lit in data["literals"])
    return Clause(lits, tuple(data.get("source", ())), data.get("step", 0),
                  data.get("label", ""), data.get("rule", ""), data.get("detail", ""))


@dataclass
class Derivation:
    """
    A checked, linear proof under construction.

    axioms:     the trust boundary: named clauses accepted without proof
    facts:      everything established so far, in order
    aliases:    display abbreviations, term -> short name (e.g. ψ1)
    milestones: named facts a caller wants to inspect afterwards
    stage:      position in the caller's stage machine, "" before the first
    """
    axioms: dict = field(default_factory=dict)
    facts: list = field(default_factory=list)
    history: list = field(default_factory=list)
    aliases: dict = field(default_factory=dict)
    milestones: dict = field(default_factory=dict)
    constants: set = field(default_factory=set)
    step: int = 0
    stage: str = ""
    closed: bool = False

    def established(self, clause: Clause) -> bool:
        return clause in self.facts or clause in self.axioms.values()

    def contradiction(self):
        return next((c for c in self.facts if c.is_empty), None)

    def to_dict(self):
        return {
            "axioms": {k: serialize_clause(c) for k, c in self.axioms.items()},
            "facts": [serialize_clause(c) for c in self.facts],
            "history": self.history,
            "aliases": [[serialize_term(t), a] for t, a in self.aliases.items()],
            "milestones": {k: self.facts.index(c) for k, c in self.milestones.items()},
            "constants": sorted(self.constants, key=str),
            "step": self.step,
            "stage": self.stage,
            "closed": self.closed,
        }

    @classmethod
    def from_dict(cls, d):
        state = cls()
        state.axioms = {k: deserialize_clause(c) for k, c in d["axioms"].items()}
        state.facts = [deserialize_clause(c) for c in d["facts"]]
        state.history = d["history"]
        state.aliases = {deserialize_term(t): a for t, a in d.get("aliases", [])}
        state.milestones = {k: state.facts[i] for k, i in d.get("milestones", {}).items()}
        state.constants = set(d.get("constants", []))
        state.step = d["step"]
        state.stage = d.get("stage", "")
        state.closed = d.get("closed", False)
        return state

    def save(self, path="derivation.json"):
        with open(path, "w") as f:
            json.dump(self.to_dict(), f, indent=2)

    @classmethod
    def load(cls, path="derivation.json"):
        with open(path) as f:
            return cls.from_dict(json.load(f))


@dataclass
class SearchState:
    """
    State of the given-clause search loop, serializable for continuity.

    set_of_support: clauses not yet chosen as focus (the frontier)
    usable:         clauses already used as focus
    """
    set_of_support: deque = field(default_factory=deque)
    usable: list = field(default_factory=list)
    history: list = field(default_factory=list)
    step: int = 0
    halted: bool = False
    halt_reason: str = ""

    def all_clauses(self) -> list:
        return list(self.set_of_support) + self.usable

    def to_dict(self):
        return {
            "set_of_support": [serialize_clause(c) for c in self.set_of_support],
            "usable": [serialize_clause(c) for c in self.usable],
            "history": self.history,
            "step": self.step,
            "halted": self.halted,
            "halt_reason": self.halt_reason,
        }

    @classmethod
    def from_dict(cls, d):
        state = cls()
        state.set_of_support = deque(deserialize_clause(c) for c in d["set_of_support"])
        state.usable = [deserialize_clause(c) for c in d["usable"]]
        state.history = d["history"]
        state.step = d["step"]
        state.halted = d.get("halted", False)
        state.halt_reason = d.get("halt_reason", "")
        return state

    def save(self, path="search_state.json"):
        with open(path, "w") as f:
            json.dump(self.to_dict(), f, indent=2)

    @classmethod
    def load(cls, path="search_state.json"):
        with open(path) as f:
            return cls.from_dict(json.load(f))
