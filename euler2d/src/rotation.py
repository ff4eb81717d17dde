"""
Rotation between the global (x, y) frame and the local frame of a boundary
point, whose first axis is the outward normal and second the tangent.

The 4x4 matrix leaves rho and energy untouched and rotates the momentum pair:

    T(alpha) = [[1,  0,     0,     0],
                [0,  cos a, sin a, 0],
                [0, -sin a, cos a, 0],
                [0,  0,     0,     1]]

T(alpha) maps global to local with alpha = atan2(ny, nx); T(-alpha) maps back.
"""

import numpy as np


def normal_angle(nx, ny):
    """Angle alpha of the outward normal (nx, ny)."""
    return np.arctan2(ny, nx)


def rotation_matrix(angle) -> np.ndarray:
    """
    Frame rotation T(angle).

    Returns:
        Array of shape (4, 4) + np.shape(angle)
    """
    c = np.cos(angle)
    s = np.sin(angle)
    T = np.zeros((4, 4) + np.shape(angle))
    T[0, 0] = 1.0
    T[1, 1] = c
    T[1, 2] = s
    T[2, 1] = -s
    T[2, 2] = c
    T[3, 3] = 1.0
    return T


def rotate(U, angle) -> np.ndarray:
    """
    Apply T(angle) to a state or flux vector.

    Args:
        U: Vector of shape (4,) or (4, n_points)
        angle: Scalar or array of shape (n_points,)
    """
    U = np.asarray(U, dtype=float)
    c = np.cos(angle)
    s = np.sin(angle)
    return np.array(np.broadcast_arrays(U[0], c * U[1] + s * U[2],
                                        -s * U[1] + c * U[2], U[3]))


def to_local(U, nx, ny) -> np.ndarray:
    """Rotate a global vector into the (normal, tangential) frame."""
    return rotate(U, normal_angle(nx, ny))


def to_global(U_local, nx, ny) -> np.ndarray:
    """Rotate a local (normal, tangential) vector back to the global frame."""
    return rotate(U_local, -normal_angle(nx, ny))
