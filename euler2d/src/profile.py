"""
Prescribed far-field state along the inlet/outlet boundary.
"""

import numpy as np
from dataclasses import dataclass, field
from typing import Callable

from .gas import GasProperties
from . import eos


def _constant(value: float) -> Callable:
    def profile(y):
        return value * np.ones_like(y, dtype=float)
    profile.value = value
    return profile


@dataclass(frozen=True)
class FarFieldProfile:
    """
    Conserved far-field variables as functions of the boundary coordinate y.

    The default is a uniform stream: rho = 1, rho_vx = 200, rho_vy = 0, E = 1e5.
    """
    density: Callable = field(default_factory=lambda: _constant(1.0))
    density_vel_x: Callable = field(default_factory=lambda: _constant(200.0))
    density_vel_y: Callable = field(default_factory=lambda: _constant(0.0))
    energy: Callable = field(default_factory=lambda: _constant(1e5))

    @classmethod
    def constant(cls, rho: float, rho_vx: float, rho_vy: float,
                 energy: float) -> 'FarFieldProfile':
        """Uniform far-field state."""
        return cls(_constant(rho), _constant(rho_vx), _constant(rho_vy), _constant(energy))

    @classmethod
    def from_primitives(cls, rho: float, vx: float, vy: float, p: float,
                        gas: GasProperties) -> 'FarFieldProfile':
        """Uniform far-field state given density, velocity and pressure."""
        energy = eos.energy_from_pressure(rho, rho * vx, rho * vy, p, gas)
        return cls.constant(rho, rho * vx, rho * vy, float(energy))

    def state(self, y) -> np.ndarray:
        """Conserved far-field vector at y."""
        return np.array([self.density(y), self.density_vel_x(y),
                         self.density_vel_y(y), self.energy(y)])

    def velocity(self, y):
        """(vx, vy) of the far-field stream at y."""
        rho = self.density(y)
        return self.density_vel_x(y) / rho, self.density_vel_y(y) / rho

    def pressure(self, y, gas: GasProperties):
        """Far-field pressure at y."""
        return eos.pressure(self.density(y), self.density_vel_x(y),
                            self.density_vel_y(y), self.energy(y), gas)

    def to_dict(self) -> dict:
        """Values of a uniform profile; raises for non-constant profiles."""
        values = {}
        for name in ('density', 'density_vel_x', 'density_vel_y', 'energy'):
            func = getattr(self, name)
            if not hasattr(func, 'value'):
                raise ValueError(f"Profile component '{name}' is not a constant")
            values[name] = func.value
        return values
