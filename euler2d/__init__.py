"""
euler2d - 2D Compressible Euler Kernels
=======================================

Re-exports all public components from euler2d.src
"""

from euler2d.src import (
    # Gas properties and state
    GasProperties,
    FlowState,
    # Equation of state
    pressure,
    sound_speed,
    energy_from_pressure,
    # Fluxes and Jacobians
    flux,
    flux_jacobian,
    jacobian_entry,
    # Frame rotation
    rotation_matrix,
    rotate,
    # Interface fluxes
    NumericalFlux,
    HLLCFlux,
    RusanovFlux,
    # Boundary conditions
    FarFieldProfile,
    BoundaryKind,
    SolidWallBC,
    ReflectedWallBC,
    FarFieldBC,
    # Configuration
    SolverConfig,
    load_config,
    # Weak forms
    EulerForms,
    WeakForm,
    build_euler_weak_form,
)

__all__ = [
    'GasProperties',
    'FlowState',
    'pressure',
    'sound_speed',
    'energy_from_pressure',
    'flux',
    'flux_jacobian',
    'jacobian_entry',
    'rotation_matrix',
    'rotate',
    'NumericalFlux',
    'HLLCFlux',
    'RusanovFlux',
    'FarFieldProfile',
    'BoundaryKind',
    'SolidWallBC',
    'ReflectedWallBC',
    'FarFieldBC',
    'SolverConfig',
    'load_config',
    'EulerForms',
    'WeakForm',
    'build_euler_weak_form',
]
