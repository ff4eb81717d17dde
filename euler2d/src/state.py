"""
Flow state representation using conservative variables.

State is defined by:
    rho     - density [kg/m³]
    rho_vx  - x-momentum per volume [kg/(m²·s)]
    rho_vy  - y-momentum per volume [kg/(m²·s)]
    energy  - total energy per volume [J/m³]

Components may be scalars (one quadrature point) or arrays (a batch of points).
"""

import numpy as np
from dataclasses import dataclass

from .gas import GasProperties
from . import eos


N_EQUATIONS = 4


@dataclass
class FlowState:
    """
    Conserved state w = (rho, rho_vx, rho_vy, energy) at one or more points.

    Primitive variables (computed as properties):
        vx, vy, p, a, T, M
    """
    rho: np.ndarray
    rho_vx: np.ndarray
    rho_vy: np.ndarray
    energy: np.ndarray
    gas: GasProperties

    # --- Primitive variables as properties ---

    @property
    def vx(self) -> np.ndarray:
        """x-velocity [m/s]."""
        return self.rho_vx / self.rho

    @property
    def vy(self) -> np.ndarray:
        """y-velocity [m/s]."""
        return self.rho_vy / self.rho

    @property
    def p(self) -> np.ndarray:
        """Pressure [Pa]."""
        return eos.pressure(self.rho, self.rho_vx, self.rho_vy, self.energy, self.gas)

    @property
    def a(self) -> np.ndarray:
        """Speed of sound [m/s]."""
        return eos.sound_speed(self.rho, self.rho_vx, self.rho_vy, self.energy, self.gas)

    @property
    def T(self) -> np.ndarray:
        """Temperature from ideal gas law [K]."""
        return self.p / (self.rho * self.gas.R)

    @property
    def M(self) -> np.ndarray:
        """Mach number based on |v|."""
        return np.hypot(self.vx, self.vy) / self.a

    # --- Array conversion methods ---

    def to_array(self) -> np.ndarray:
        """
        Convert to conservative variable array.

        Returns:
            U: Array of shape (4,) or (4, n_points)
        """
        return np.array(np.broadcast_arrays(self.rho, self.rho_vx,
                                            self.rho_vy, self.energy), dtype=float)

    @classmethod
    def from_array(cls, U: np.ndarray, gas: GasProperties) -> 'FlowState':
        """
        Create FlowState from conservative variable array.

        Args:
            U: Conservative variables [rho, rho_vx, rho_vy, energy] along axis 0
            gas: Gas properties
        """
        U = np.asarray(U, dtype=float)
        if U.shape[0] != N_EQUATIONS:
            raise ValueError(f"Expected {N_EQUATIONS} conserved components, got {U.shape[0]}")
        return cls(rho=U[0], rho_vx=U[1], rho_vy=U[2], energy=U[3], gas=gas)

    @classmethod
    def from_primitives(cls, rho, vx, vy, p, gas: GasProperties) -> 'FlowState':
        """
        Create FlowState from primitive variables.

        Args:
            rho: Density [kg/m³]
            vx, vy: Velocity components [m/s]
            p: Pressure [Pa]
            gas: Gas properties
        """
        rho_vx = rho * vx
        rho_vy = rho * vy
        energy = eos.energy_from_pressure(rho, rho_vx, rho_vy, p, gas)
        return cls(rho=rho, rho_vx=rho_vx, rho_vy=rho_vy, energy=energy, gas=gas)
