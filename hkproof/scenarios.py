"""
Scenario registry.

Each scenario names a pair of potentials to run the uniqueness theorem on:
    v1, v2:       sympy-parsable expressions in x
    description:  str
"""

from .theory.vocabulary import potential


SCENARIOS = {
    "contradiction": {
        "v1": "x**2",
        "v2": "2*x**2",
        "description": "Inequivalent harmonic wells: a shared density is refuted",
    },
    "shifted": {
        "v1": "x**2",
        "v2": "x**2 + 1",
        "description": "Constant shift: equivalent, the refutation must not start",
    },
    "anharmonic": {
        "v1": "x**2",
        "v2": "x**4 - x**2",
        "description": "Harmonic vs double well: a shared density is refuted",
    },
    "linear-field": {
        "v1": "x**2 + 3*x",
        "v2": "x**2",
        "description": "A well in a uniform field vs the bare well",
    },
}


def scenario_potentials(name: str, v1=None, v2=None) -> tuple:
    """The (v1, v2) Potentials of a scenario, with optional expression overrides."""
    entry = SCENARIOS[name]
    return (potential("v1", v1 if v1 is not None else entry["v1"]),
            potential("v2", v2 if v2 is not None else entry["v2"]))
