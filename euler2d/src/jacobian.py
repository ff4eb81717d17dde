"""
Closed-form Euler flux Jacobians and the quasi-linear fluxes built from them.

For direction d in {x, y} the Jacobian A_d(w) = dF_d/dw is a 4x4 table of
algebraic expressions in (rho, rho_vx, rho_vy, energy) and R/cv. The flux is
formed by contracting the Jacobian with the same state, F_d(w) = A_d(w) @ w;
no separate analytic flux formula is used.

Entries broadcast over numpy arrays of quadrature-point values.
"""

import numpy as np

from .gas import GasProperties
from .state import N_EQUATIONS


def _zero(r, mx, my, e, g):
    return 0.0


def _one(r, mx, my, e, g):
    return 1.0


def _q2(r, mx, my):
    return (mx * mx + my * my) / (r * r)


def _pressure_over_rho(r, mx, my, e, g):
    return g * (e - (mx * mx + my * my) / (2 * r)) / r


# Row-major table of A_x entries, each f(rho, rho_vx, rho_vy, energy, R/cv).
_JACOBIAN_X = (
    (
        _zero,
        _one,
        _zero,
        _zero,
    ),
    (
        lambda r, mx, my, e, g: -(mx * mx) / (r * r) + 0.5 * g * _q2(r, mx, my),
        lambda r, mx, my, e, g: 2 * (mx / r) - g * (mx / r),
        lambda r, mx, my, e, g: -g * (my / r),
        lambda r, mx, my, e, g: g,
    ),
    (
        lambda r, mx, my, e, g: -mx * my / (r * r),
        lambda r, mx, my, e, g: my / r,
        lambda r, mx, my, e, g: mx / r,
        _zero,
    ),
    (
        lambda r, mx, my, e, g: (-(mx * e) / (r * r)
                                 - (mx / r) * _pressure_over_rho(r, mx, my, e, g)
                                 + (mx / r) * g * _q2(r, mx, my) / 2),
        lambda r, mx, my, e, g: (e / r + _pressure_over_rho(r, mx, my, e, g)
                                 - g * (mx * mx) / (r * r)),
        lambda r, mx, my, e, g: -g * (mx * my) / (r * r),
        lambda r, mx, my, e, g: mx / r + g * (mx / r),
    ),
)

# A_y is A_x with the roles of the two momentum components exchanged.
_SWAP_MOMENTA = (0, 2, 1, 3)


def direction_index(direction) -> int:
    """Map 0/1 or 'x'/'y' to a direction index."""
    if direction in (0, 'x'):
        return 0
    if direction in (1, 'y'):
        return 1
    raise ValueError(f"Unknown flux direction: {direction!r}. Options: 'x', 'y'")


def _check_index(i: int, name: str):
    if not 0 <= i < N_EQUATIONS:
        raise ValueError(f"{name} must be in 0..{N_EQUATIONS - 1}, got {i}")


def jacobian_entry(direction, m: int, n: int, U, gas: GasProperties):
    """
    Entry (m, n) of the flux Jacobian A_d evaluated at U.

    Args:
        direction: 'x'/'y' or 0/1
        m: Equation (row) index
        n: Conserved component (column) index
        U: Conserved state [rho, rho_vx, rho_vy, energy], axis 0 of length 4
        gas: Gas properties

    Returns:
        Scalar or array matching the trailing shape of U
    """
    d = direction_index(direction)
    _check_index(m, "Equation index")
    _check_index(n, "Component index")
    rho, rho_vx, rho_vy, energy = U[0], U[1], U[2], U[3]
    g = gas.gamma_minus_one
    if d == 0:
        return _JACOBIAN_X[m][n](rho, rho_vx, rho_vy, energy, g)
    return _JACOBIAN_X[_SWAP_MOMENTA[m]][_SWAP_MOMENTA[n]](rho, rho_vy, rho_vx, energy, g)


def flux_jacobian(direction, U, gas: GasProperties) -> np.ndarray:
    """
    Full 4x4 flux Jacobian A_d(U).

    Returns:
        Array of shape (4, 4) + U.shape[1:]
    """
    U = np.asarray(U, dtype=float)
    A = np.zeros((N_EQUATIONS, N_EQUATIONS) + U.shape[1:])
    for m in range(N_EQUATIONS):
        for n in range(N_EQUATIONS):
            A[m, n] = jacobian_entry(direction, m, n, U, gas)
    return A


def flux(direction, U, gas: GasProperties) -> np.ndarray:
    """
    Directional flux F_d(U) = A_d(U) @ U.

    Returns:
        Array with the shape of U
    """
    U = np.asarray(U, dtype=float)
    return np.array([flux_component(direction, m, U, gas) for m in range(N_EQUATIONS)])


def flux_component(direction, m: int, U, gas: GasProperties):
    """Component m of F_d(U), summing the m-th Jacobian row against U."""
    _check_index(m, "Equation index")
    return sum(jacobian_entry(direction, m, n, U, gas) * U[n] for n in range(N_EQUATIONS))


def nonzero_entries(direction):
    """(m, n) pairs whose Jacobian entry is not identically zero."""
    d = direction_index(direction)
    perm = _SWAP_MOMENTA if d == 1 else (0, 1, 2, 3)
    return [(m, n) for m in range(N_EQUATIONS) for n in range(N_EQUATIONS)
            if _JACOBIAN_X[perm[m]][perm[n]] is not _zero]
