"""
Boundary fluxes for the solid wall and the far-field (inlet/outlet) boundary.

Both solvers work from the interior trace of the previous time level and the
outward unit normal (nx, ny), build a boundary state from characteristic
(Riemann invariant) relations and return the 4-component flux in the global
frame. Inputs may be single points or arrays of quadrature points.
"""

import logging
import numpy as np
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum

from .gas import GasProperties
from .state import N_EQUATIONS
from . import eos
from .jacobian import flux as directional_flux
from .rotation import to_local, to_global
from .profile import FarFieldProfile
from .interface_flux import NumericalFlux
from .config import SolverConfig

logger = logging.getLogger(__name__)


class BoundaryKind(Enum):
    SOLID_WALL = 'solid_wall'
    INLET = 'inlet'
    OUTLET = 'outlet'


def classify_boundary(marker: int, nx, config: SolverConfig):
    """
    Boundary kind at a point from its marker and the sign of nx.

    The far-field boundary is an inlet where the normal points against the x
    axis (nx < 0) and an outlet otherwise.
    """
    if marker == config.solid_wall_marker:
        return BoundaryKind.SOLID_WALL
    if marker == config.inlet_outlet_marker:
        return BoundaryKind.INLET if nx < 0 else BoundaryKind.OUTLET
    raise ValueError(f"Unknown boundary marker: {marker}")


@dataclass
class BoundaryState:
    """Primitive boundary state selected by a boundary solver."""
    rho: np.ndarray
    vx: np.ndarray
    vy: np.ndarray
    p: np.ndarray
    energy: np.ndarray
    subsonic: np.ndarray    # False where the star state was taken

    def to_array(self) -> np.ndarray:
        """Conserved vector [rho, rho_vx, rho_vy, energy]."""
        return np.array(np.broadcast_arrays(self.rho, self.rho * self.vx,
                                            self.rho * self.vy, self.energy), dtype=float)


class BoundaryCondition(ABC):
    """Abstract base class for boundary fluxes."""

    def __init__(self, gas: GasProperties):
        self.gas = gas

    @abstractmethod
    def flux(self, U: np.ndarray, nx, ny, y=0.0) -> np.ndarray:
        """
        Boundary flux in the global frame.

        Args:
            U: Interior conserved state (4,) or (4, n_points)
            nx, ny: Outward unit normal
            y: Boundary coordinate, used by prescribed profiles

        Returns:
            Flux vector (4,) or (4, n_points)
        """
        pass

    def flux_component(self, i: int, U: np.ndarray, nx, ny, y=0.0):
        """Component i of :meth:`flux`."""
        if not 0 <= i < N_EQUATIONS:
            raise ValueError(f"Equation index must be in 0..{N_EQUATIONS - 1}, got {i}")
        return self.flux(U, nx, ny, y)[i]


class SolidWallBC(BoundaryCondition):
    """
    Impermeable wall. The only transferred quantity is the wall pressure,
    acting along the normal: the local flux is (0, p_b, 0, 0).
    """

    def boundary_pressure(self, U: np.ndarray, nx, ny):
        """Wall pressure from the outgoing Riemann invariant along the normal."""
        gas = self.gas
        U = np.asarray(U, dtype=float)
        rho_l = U[0]
        p_l = eos.pressure(U[0], U[1], U[2], U[3], gas)
        a_l = eos.sound_speed(U[0], U[1], U[2], U[3], gas)
        vn_l = to_local(U, nx, ny)[1] / rho_l

        a_b = a_l + 0.5 * gas.gamma_minus_one * vn_l
        rho_b = np.power(a_b * a_b * rho_l / (gas.kappa * p_l), 1.0 / gas.gamma_minus_one) * rho_l
        return rho_b * a_b * a_b / gas.kappa

    def flux(self, U: np.ndarray, nx, ny, y=0.0) -> np.ndarray:
        p_b = self.boundary_pressure(U, nx, ny)
        zero = np.zeros_like(p_b)
        flux_local = np.array([zero, p_b, zero, zero])
        return to_global(flux_local, nx, ny)


class ReflectedWallBC(BoundaryCondition):
    """
    Wall flux from the interface numerical flux between the interior state
    and its mirror image (normal momentum reversed).
    """

    def __init__(self, gas: GasProperties, numerical_flux: NumericalFlux):
        super().__init__(gas)
        if numerical_flux is None:
            raise ValueError("ReflectedWallBC requires a numerical flux")
        self.numerical_flux = numerical_flux

    def mirror_state(self, U: np.ndarray, nx, ny) -> np.ndarray:
        """Interior state with its normal momentum reversed."""
        U_local = to_local(U, nx, ny)
        U_local[1] = -U_local[1]
        return to_global(U_local, nx, ny)

    def flux(self, U: np.ndarray, nx, ny, y=0.0) -> np.ndarray:
        U = np.asarray(U, dtype=float)
        U_mirror = self.mirror_state(U, nx, ny)
        U = np.broadcast_to(U, U_mirror.shape)
        return self.numerical_flux.compute_flux(U, U_mirror, nx, ny, self.gas)


class FarFieldBC(BoundaryCondition):
    """
    Characteristic far-field boundary.

    Inlet (nx < 0): the prescribed far-field velocity is combined with the
    interior sound speed through the Riemann invariant to give an
    intersection state. Outlet (nx >= 0): the prescribed far-field pressure
    is combined with the interior entropy and Riemann invariant. Where the
    resulting normal velocity reaches the sound speed, the star state driven
    only by the interior data is used instead.
    """

    def __init__(self, gas: GasProperties, profile: FarFieldProfile = None):
        super().__init__(gas)
        self.profile = profile if profile is not None else FarFieldProfile()

    def star_state(self, U: np.ndarray) -> BoundaryState:
        """Sonic state reached from the interior along the outgoing invariant."""
        gas = self.gas
        U = np.asarray(U, dtype=float)
        g = gas.gamma_minus_one
        rho_l = U[0]
        vx_l = U[1] / rho_l
        vy_l = U[2] / rho_l
        a_l = eos.sound_speed(U[0], U[1], U[2], U[3], gas)

        a_star = g / (2 + g) * vx_l + 2 * a_l / (2 + g)
        rho_star = eos.isentropic_density(rho_l, a_star, a_l, gas)
        vx_star = a_star
        p_star = rho_star * a_star * a_star / gas.kappa
        energy_star = eos.energy_from_pressure(rho_star, vx_star * rho_star,
                                               vy_l * rho_star, p_star, gas)
        return BoundaryState(rho_star, vx_star, vy_l, p_star, energy_star,
                             np.zeros(np.shape(rho_star), dtype=bool))

    def inlet_state(self, U: np.ndarray, y=0.0) -> BoundaryState:
        """Boundary state on the inflow part (nx < 0)."""
        gas = self.gas
        U = np.asarray(U, dtype=float)
        rho_l = U[0]
        vx_l = U[1] / rho_l
        vy_l = U[2] / rho_l
        a_l = eos.sound_speed(U[0], U[1], U[2], U[3], gas)
        vx_far, _ = self.profile.velocity(y)

        # Intersection of the outgoing invariant with the prescribed velocity
        a_1 = a_l + 0.5 * gas.gamma_minus_one * (vx_l - vx_far)
        rho_1 = eos.isentropic_density(rho_l, a_1, a_l, gas)
        p_1 = rho_1 * a_1 * a_1 / gas.kappa
        vx_1 = vx_far * np.ones_like(rho_1)
        energy_1 = eos.energy_from_pressure(rho_1, vx_1 * rho_1, vy_l * rho_1, p_1, gas)

        subsonic = vx_far < a_1
        return self._select(BoundaryState(rho_1, vx_1, vy_l, p_1, energy_1, subsonic),
                            self.star_state(U), subsonic)

    def outlet_state(self, U: np.ndarray, y=0.0) -> BoundaryState:
        """Boundary state on the outflow part (nx >= 0)."""
        gas = self.gas
        U = np.asarray(U, dtype=float)
        rho_l = U[0]
        vx_l = U[1] / rho_l
        vy_l = U[2] / rho_l
        p_l = eos.pressure(U[0], U[1], U[2], U[3], gas)
        a_l = eos.sound_speed(U[0], U[1], U[2], U[3], gas)
        p_b = self.profile.pressure(y, gas)

        rho_b = rho_l * np.power(p_b / p_l, 1.0 / gas.kappa)
        vx_b = vx_l + 2 / gas.gamma_minus_one * (a_l - np.sqrt(gas.kappa * p_b / rho_b))
        energy_b = eos.energy_from_pressure(rho_b, vx_b * rho_b, vy_l * rho_b, p_b, gas)
        a_b = eos.sound_speed(rho_b, vx_b * rho_b, vy_l * rho_b, energy_b, gas)

        subsonic = vx_b < a_b
        p_b = p_b * np.ones_like(rho_b)
        return self._select(BoundaryState(rho_b, vx_b, vy_l, p_b, energy_b, subsonic),
                            self.star_state(U), subsonic)

    def _select(self, state: BoundaryState, star: BoundaryState, subsonic) -> BoundaryState:
        if logger.isEnabledFor(logging.DEBUG):
            n_star = np.size(subsonic) - np.count_nonzero(subsonic)
            logger.debug("Far-field star state used at %d of %d points", n_star, np.size(subsonic))
        return BoundaryState(
            rho=np.where(subsonic, state.rho, star.rho),
            vx=np.where(subsonic, state.vx, star.vx),
            vy=np.where(subsonic, state.vy, star.vy),
            p=np.where(subsonic, state.p, star.p),
            energy=np.where(subsonic, state.energy, star.energy),
            subsonic=np.asarray(subsonic),
        )

    def boundary_state(self, U: np.ndarray, nx, y=0.0) -> BoundaryState:
        """Inlet or outlet state depending on the sign of nx."""
        inlet = np.asarray(nx) < 0
        if np.all(inlet):
            return self.inlet_state(U, y)
        if not np.any(inlet):
            return self.outlet_state(U, y)
        s_in = self.inlet_state(U, y)
        s_out = self.outlet_state(U, y)
        return BoundaryState(
            rho=np.where(inlet, s_in.rho, s_out.rho),
            vx=np.where(inlet, s_in.vx, s_out.vx),
            vy=np.where(inlet, s_in.vy, s_out.vy),
            p=np.where(inlet, s_in.p, s_out.p),
            energy=np.where(inlet, s_in.energy, s_out.energy),
            subsonic=np.where(inlet, s_in.subsonic, s_out.subsonic),
        )

    def flux(self, U: np.ndarray, nx, ny, y=0.0) -> np.ndarray:
        state = self.boundary_state(U, nx, y)
        U_local = to_local(state.to_array(), nx, ny)
        return to_global(directional_flux('x', U_local, self.gas), nx, ny)


def make_solid_wall(policy: str, gas: GasProperties,
                    numerical_flux: NumericalFlux = None) -> BoundaryCondition:
    """Solid-wall boundary for the configured policy ('pressure' or 'mirror')."""
    if policy == 'pressure':
        return SolidWallBC(gas)
    if policy == 'mirror':
        return ReflectedWallBC(gas, numerical_flux)
    raise ValueError(f"Unknown solid wall policy: {policy}. Options: 'pressure', 'mirror'")
