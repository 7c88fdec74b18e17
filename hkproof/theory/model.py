"""
A finite symbolic interpretation of the vocabulary.

The theory itself never computes anything. A FiniteModel gives the
opaque symbols concrete meaning over a finite set of named wavefunctions,
each carrying a density profile n(x) (a sympy expression) and a kinetic
interaction value. With that:

    integral(v, n)             = ∫ v(x) n(x) dx over the real line
    energy_expectation(psi, v) = kinetic_interaction(psi) + integral(v, density_of(psi))
    ground_state(v)            = the unique minimiser of energy_expectation(., v)
    ground_energy(v)           = energy_expectation(ground_state(v), v)

so energy_def and ground_energy_def hold by construction, and
rayleigh_ritz_strict holds whenever the minimiser is unique. Models are
how the axioms are exercised on examples; they play no part in proofs.
"""

from dataclasses import dataclass, field
import math

import sympy

from .vocabulary import X, Potential


@dataclass
class FiniteModel:
    densities: dict = field(default_factory=dict)   # name -> sympy expr in X
    kinetic: dict = field(default_factory=dict)     # name -> real number

    def add(self, name: str, density, kinetic_value):
        """Register a wavefunction by its density profile and kinetic value."""
        self.densities[name] = sympy.sympify(density, locals={"x": X})
        self.kinetic[name] = sympy.sympify(kinetic_value)
        return name

    @property
    def wavefunctions(self) -> list:
        return list(self.densities)

    def density_of(self, psi: str) -> sympy.Expr:
        return self.densities[psi]

    def kinetic_interaction(self, psi: str) -> sympy.Expr:
        return self.kinetic[psi]

    def integral(self, v: Potential, n) -> sympy.Expr:
        return sympy.integrate(v.expr * n, (X, -sympy.oo, sympy.oo))

    def energy_expectation(self, psi: str, v: Potential) -> sympy.Expr:
        return sympy.simplify(self.kinetic_interaction(psi) + self.integral(v, self.density_of(psi)))

    def ground_state(self, v: Potential) -> str:
        """
        The wavefunction of lowest energy under v.

        Raises ValueError for an empty model, for an energy that does not
        evaluate to a number, for a minimum that is not finite, or for a
        tie: with two minimisers the strict variational principle cannot hold.
        """
        if not self.densities:
            raise ValueError("empty model has no ground state")
        energies = {psi: self.energy_expectation(psi, v) for psi in self.densities}
        values = {}
        for psi, e in energies.items():
            try:
                values[psi] = float(e)
            except TypeError as err:
                raise ValueError(f"energy of {psi} under {v.name} does not evaluate: {e}") from err
        lowest = min(values, key=values.get)
        if not math.isfinite(values[lowest]):
            raise ValueError(f"no finite energy under {v.name}: minimum is {energies[lowest]}")
        best = energies[lowest]
        winners = [psi for psi, e in energies.items() if sympy.simplify(e - best) == 0]
        if len(winners) > 1:
            raise ValueError(f"degenerate ground state under {v.name}: {winners}")
        return winners[0]

    def ground_energy(self, v: Potential) -> sympy.Expr:
        return self.energy_expectation(self.ground_state(v), v)

    def same_density(self, n1, n2) -> bool:
        return sympy.simplify(n1 - n2) == 0

    def fiber(self, n) -> list:
        """All wavefunctions whose density is n."""
        return [psi for psi, d in self.densities.items() if self.same_density(d, n)]
