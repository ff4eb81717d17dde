"""
Ideal-gas equation of state on the conserved variables.

    p = (R/cv) * (E - (rho_vx² + rho_vy²) / (2 rho))
    a = sqrt(kappa * p / rho)
    E = (cv/R) * p + (rho_vx² + rho_vy²) / (2 rho)

Every boundary solver and flux routine goes through these three functions so
that interior, boundary and star states see the same pressure.

Arguments broadcast like numpy arrays. Unphysical states are not clamped: a
negative argument to the square root gives nan.
"""

import numpy as np

from .gas import GasProperties


def kinetic_energy(rho, rho_vx, rho_vy):
    """Kinetic energy per volume, |rho v|² / (2 rho)."""
    return (rho_vx * rho_vx + rho_vy * rho_vy) / (2 * rho)


def pressure(rho, rho_vx, rho_vy, energy, gas: GasProperties):
    """Static pressure [Pa] from conserved variables."""
    return gas.gamma_minus_one * (energy - kinetic_energy(rho, rho_vx, rho_vy))


def sound_speed(rho, rho_vx, rho_vy, energy, gas: GasProperties):
    """Speed of sound [m/s] from conserved variables."""
    return np.sqrt(gas.kappa * pressure(rho, rho_vx, rho_vy, energy, gas) / rho)


def energy_from_pressure(rho, rho_vx, rho_vy, p, gas: GasProperties):
    """Total energy per volume [J/m³] from density, momenta and pressure."""
    return p / gas.gamma_minus_one + kinetic_energy(rho, rho_vx, rho_vy)


def isentropic_density(rho_ref, a, a_ref, gas: GasProperties):
    """
    Density reached from (rho_ref, a_ref) along an isentrope with sound speed a.

    rho = rho_ref * (a² / a_ref²)^(cv/R). A negative base gives nan.
    """
    return np.power(a * a / (a_ref * a_ref), 1.0 / gas.gamma_minus_one) * rho_ref
