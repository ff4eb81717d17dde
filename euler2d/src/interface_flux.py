"""
Interface numerical fluxes for the discontinuous Galerkin jump term.

Each scheme rotates both traces into the frame of the edge normal, solves a
1D Riemann problem along the normal with the tangential momentum carried
across, and rotates the result back. Inputs are conserved states of shape
(4,) or (4, n_points); normals broadcast against the trailing axis.
"""

import numpy as np
from abc import ABC, abstractmethod

from .gas import GasProperties
from .state import N_EQUATIONS
from . import eos
from .jacobian import flux as directional_flux
from .rotation import to_local, to_global


class NumericalFlux(ABC):
    """Abstract base class for numerical flux schemes."""

    @abstractmethod
    def compute_flux_local(self, UL: np.ndarray, UR: np.ndarray,
                           gas: GasProperties) -> np.ndarray:
        """
        Numerical flux along the first axis of an already rotated frame.

        Args:
            UL: Inner trace in local variables (4, n_points)
            UR: Outer trace in local variables (4, n_points)
            gas: Gas properties

        Returns:
            Local normal flux (4, n_points)
        """
        pass

    def compute_flux(self, UL: np.ndarray, UR: np.ndarray, nx, ny,
                     gas: GasProperties) -> np.ndarray:
        """
        Normal numerical flux across an edge with unit normal (nx, ny).

        Args:
            UL: Inner (central) state (4,) or (4, n_points)
            UR: Outer (neighbour) state, same shape as UL
            nx, ny: Unit normal pointing from UL to UR
            gas: Gas properties

        Returns:
            Flux in the global frame, same shape as UL
        """
        UL = np.asarray(UL, dtype=float)
        UR = np.asarray(UR, dtype=float)
        single = UL.ndim == 1 and np.ndim(nx) == 0
        UL_loc = np.atleast_2d(to_local(UL, nx, ny).T).T
        UR_loc = np.atleast_2d(to_local(UR, nx, ny).T).T
        F_loc = self.compute_flux_local(UL_loc, UR_loc, gas)
        F = to_global(F_loc, nx, ny)
        return F[:, 0] if single else F

    def flux_component(self, i: int, UL: np.ndarray, UR: np.ndarray, nx, ny,
                       gas: GasProperties):
        """Component i of :meth:`compute_flux`."""
        if not 0 <= i < N_EQUATIONS:
            raise ValueError(f"Equation index must be in 0..{N_EQUATIONS - 1}, got {i}")
        return self.compute_flux(UL, UR, nx, ny, gas)[i]


def _primitives(U, gas):
    rho = U[0]
    u = U[1] / rho
    v = U[2] / rho
    p = eos.pressure(U[0], U[1], U[2], U[3], gas)
    a = eos.sound_speed(U[0], U[1], U[2], U[3], gas)
    H = (U[3] + p) / rho
    return rho, u, v, p, a, H


class HLLCFlux(NumericalFlux):
    """
    HLLC approximate Riemann solver.

    Resolves the contact and carries the tangential momentum with it.
    """

    def compute_flux_local(self, UL: np.ndarray, UR: np.ndarray,
                           gas: GasProperties) -> np.ndarray:
        gm1 = gas.gamma_minus_one

        rhoL, uL, vL, pL, aL, HL = _primitives(UL, gas)
        rhoR, uR, vR, pR, aR, HR = _primitives(UR, gas)

        # Roe averages for wave speed estimates
        sqrt_rhoL = np.sqrt(rhoL)
        sqrt_rhoR = np.sqrt(rhoR)
        denom_inv = 1.0 / (sqrt_rhoL + sqrt_rhoR)

        u_roe = (sqrt_rhoL * uL + sqrt_rhoR * uR) * denom_inv
        v_roe = (sqrt_rhoL * vL + sqrt_rhoR * vR) * denom_inv
        H_roe = (sqrt_rhoL * HL + sqrt_rhoR * HR) * denom_inv
        a_roe = np.sqrt(gm1 * (H_roe - 0.5 * (u_roe**2 + v_roe**2)))

        SL = np.minimum(uL - aL, u_roe - a_roe)
        SR = np.maximum(uR + aR, u_roe + a_roe)

        # Contact wave speed
        SM = (pR - pL + rhoL * uL * (SL - uL) - rhoR * uR * (SR - uR)) / \
             (rhoL * (SL - uL) - rhoR * (SR - uR))

        FL = directional_flux('x', UL, gas)
        FR = directional_flux('x', UR, gas)

        def star_flux(F, U, S, rho, u, v, p):
            coeff = rho * (S - u) / (S - SM)
            U_star = np.array([
                coeff,
                coeff * SM,
                coeff * v,
                coeff * (U[3] / rho + (SM - u) * (SM + p / (rho * (S - u)))),
            ])
            return F + S * (U_star - U)

        with np.errstate(divide='ignore', invalid='ignore'):
            FL_star = star_flux(FL, UL, SL, rhoL, uL, vL, pL)
            FR_star = star_flux(FR, UR, SR, rhoR, uR, vR, pR)

        return np.where(SL >= 0, FL,
                        np.where(SR <= 0, FR,
                                 np.where(SM >= 0, FL_star, FR_star)))


class RusanovFlux(NumericalFlux):
    """
    Rusanov (Local Lax-Friedrichs) flux.

    Less accurate for contact discontinuities but very robust.
    """

    def compute_flux_local(self, UL: np.ndarray, UR: np.ndarray,
                           gas: GasProperties) -> np.ndarray:
        _, uL, _, _, aL, _ = _primitives(UL, gas)
        _, uR, _, _, aR, _ = _primitives(UR, gas)

        smax = np.maximum(np.abs(uL) + aL, np.abs(uR) + aR)

        FL = directional_flux('x', UL, gas)
        FR = directional_flux('x', UR, gas)

        # F = 0.5 * (FL + FR) - 0.5 * smax * (UR - UL)
        return 0.5 * (FL + FR) - 0.5 * smax * (UR - UL)


NUMERICAL_FLUXES = {
    'hllc': HLLCFlux,
    'rusanov': RusanovFlux,
}


def make_numerical_flux(name: str) -> NumericalFlux:
    """Instantiate a numerical flux scheme by name."""
    try:
        return NUMERICAL_FLUXES[name]()
    except KeyError:
        raise ValueError(f"Unknown numerical flux: {name}. "
                         f"Options: {', '.join(sorted(NUMERICAL_FLUXES))}") from None
