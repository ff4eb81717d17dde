"""
2D Compressible Euler Flux and Boundary Kernels
===============================================

Per-quadrature-point physics for a discontinuous Galerkin discretization of
the 2D Euler equations, time-linearized around the previous time level.

Features:
- Ideal-gas equation of state on conserved variables
- Closed-form x/y flux Jacobians, fluxes by Jacobian contraction
- Normal/tangential frame rotation
- Solid-wall and characteristic far-field (inlet/outlet) boundary fluxes
- HLLC and Rusanov interface fluxes
- Weak-form callbacks and registry for an external assembly framework

State representation (conservative variables):
    rho     - density [kg/m³]
    rho_vx  - x-momentum per volume [kg/(m²·s)]
    rho_vy  - y-momentum per volume [kg/(m²·s)]
    energy  - total energy per volume [J/m³]

Example:
    gas = GasProperties()
    state = FlowState.from_primitives(rho=1.0, vx=200.0, vy=0.0, p=8e4, gas=gas)
    U = state.to_array()
    F = flux('x', U, gas)              # equals flux_jacobian('x', U, gas) @ U

    bc = FarFieldBC(gas, FarFieldProfile())
    F_b = bc.flux(U, nx=-1.0, ny=0.0)  # inlet flux
"""

from .gas import GasProperties
from .state import FlowState, N_EQUATIONS
from .eos import pressure, sound_speed, energy_from_pressure
from .jacobian import flux, flux_jacobian, jacobian_entry
from .rotation import rotation_matrix, rotate, to_local, to_global
from .profile import FarFieldProfile
from .interface_flux import NumericalFlux, HLLCFlux, RusanovFlux
from .boundary import (BoundaryCondition, BoundaryKind, BoundaryState, SolidWallBC,
                       ReflectedWallBC, FarFieldBC, classify_boundary)
from .config import SolverConfig, load_config
from .forms import Func, Geom, ExtData, EulerForms, WeakForm, build_euler_weak_form

__all__ = [
    # Gas properties and state
    'GasProperties',
    'FlowState',
    'N_EQUATIONS',

    # Equation of state
    'pressure',
    'sound_speed',
    'energy_from_pressure',

    # Fluxes and Jacobians
    'flux',
    'flux_jacobian',
    'jacobian_entry',

    # Frame rotation
    'rotation_matrix',
    'rotate',
    'to_local',
    'to_global',

    # Interface fluxes
    'NumericalFlux',
    'HLLCFlux',
    'RusanovFlux',

    # Boundary conditions
    'FarFieldProfile',
    'BoundaryCondition',
    'BoundaryKind',
    'BoundaryState',
    'SolidWallBC',
    'ReflectedWallBC',
    'FarFieldBC',
    'classify_boundary',

    # Configuration
    'SolverConfig',
    'load_config',

    # Weak forms
    'Func',
    'Geom',
    'ExtData',
    'EulerForms',
    'WeakForm',
    'build_euler_weak_form',
]

__version__ = '1.0.0'
