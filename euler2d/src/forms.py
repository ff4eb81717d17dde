"""
Weak forms of the time-linearized Euler system for the assembly framework.

Every form is called once per element or edge with a batch of n quadrature
points:

    bilinear form:  form(n, wt, u, v, e, ext) -> float
    linear form:    form(n, wt, v, e, ext) -> float

where u and v are :class:`Func` values of the basis and test functions, e
is the :class:`Geom` of the points and ext holds the four conserved
components of the previous time level. Forms only read their arguments and
return the accumulated integral for the batch.

Notation:
    m   - equation (test space) index
    k   - conserved component index of the previous-level state
    d   - flux direction, 0 for x and 1 for y
"""

import logging
import numpy as np
from dataclasses import dataclass, field
from functools import partial
from typing import Callable, List, Optional, Sequence

from .state import N_EQUATIONS
from .config import SolverConfig
from .jacobian import jacobian_entry, direction_index, nonzero_entries, flux_component
from .boundary import FarFieldBC, make_solid_wall
from .interface_flux import NumericalFlux, make_numerical_flux

logger = logging.getLogger(__name__)

ANY = 'ANY'
DG_INNER_EDGE = 'DG_INNER_EDGE'


@dataclass
class Func:
    """Values and first derivatives of one function at the quadrature points."""
    val: np.ndarray
    dx: Optional[np.ndarray] = None
    dy: Optional[np.ndarray] = None
    val_neighbor: Optional[np.ndarray] = None   # Outer trace on inner edges

    def grad(self, d: int) -> np.ndarray:
        if d == 0:
            return self.dx
        return self.dy


@dataclass
class Geom:
    """Geometry of the quadrature points; normals are set on edges only."""
    x: Optional[np.ndarray] = None
    y: Optional[np.ndarray] = None
    nx: Optional[np.ndarray] = None
    ny: Optional[np.ndarray] = None


@dataclass
class ExtData:
    """Previous time level fields handed to the forms."""
    fn: Sequence[Func] = ()


def _check_equation(m: int):
    if not 0 <= m < N_EQUATIONS:
        raise ValueError(f"Equation index must be in 0..{N_EQUATIONS - 1}, got {m}")


def _check_weights(n: int, wt):
    if len(wt) != n:
        raise ValueError(f"Expected {n} quadrature weights, got {len(wt)}")


def _previous_state(n: int, wt, ext: ExtData, neighbor: bool = False) -> np.ndarray:
    """Stack the previous-level components into a (4, n) array, checking shapes first."""
    if ext is None or len(ext.fn) != N_EQUATIONS:
        got = 0 if ext is None else len(ext.fn)
        raise ValueError(f"Expected {N_EQUATIONS} previous-level fields, got {got}")
    _check_weights(n, wt)
    values = []
    for k, fn in enumerate(ext.fn):
        val = fn.val_neighbor if neighbor else fn.val
        if val is None or len(val) != n:
            side = "neighbour " if neighbor else ""
            raise ValueError(f"Field {k} has no {side}values at the {n} quadrature points")
        values.append(val[:n])
    return np.array(values, dtype=float)


class EulerForms:
    """
    Form callbacks for the four Euler equations.

    Holds only read-only configuration; every callback is a pure function of
    its arguments.
    """

    def __init__(self, config: SolverConfig = None,
                 numerical_flux: NumericalFlux = None):
        self.config = config if config is not None else SolverConfig()
        self.gas = self.config.gas
        self.tau = self.config.tau
        if numerical_flux is None:
            numerical_flux = make_numerical_flux(self.config.numerical_flux)
        self.numerical_flux = numerical_flux
        self.solid_wall = make_solid_wall(self.config.solid_wall_policy, self.gas,
                                          self.numerical_flux)
        self.far_field = FarFieldBC(self.gas, self.config.far_field)

    def order(self, *args) -> int:
        """Integration order used for every form."""
        return self.config.integration_order

    # --- Volume forms ---

    def time_bilinear_form(self, n, wt, u: Func, v: Func, e: Geom, ext: ExtData = None):
        """Mass matrix term: integral of u * v / tau."""
        _check_weights(n, wt)
        return np.sum(wt[:n] * u.val[:n] * v.val[:n]) / self.tau

    def time_linear_form(self, m: int, n, wt, v: Func, e: Geom, ext: ExtData):
        """Previous time level: integral of w_m * v / tau."""
        W = _previous_state(n, wt, ext)
        return np.sum(wt[:n] * W[m] * v.val[:n]) / self.tau

    def flux_linear_form(self, m: int, k: int, d: int, n, wt, v: Func, e: Geom,
                         ext: ExtData):
        """
        Linearized flux term of equation m for component k in direction d:
        integral of w_k * A_d[m, k](w) * dv/dx_d, with A_d taken at the
        previous time level.
        """
        W = _previous_state(n, wt, ext)
        A = jacobian_entry(d, m, k, W, self.gas)
        return np.sum(wt[:n] * W[k] * A * v.grad(d)[:n])

    def convective_linear_form(self, m: int, n, wt, v: Func, e: Geom, ext: ExtData):
        """All linearized flux terms of equation m, integral of F(w)_m . grad v."""
        W = _previous_state(n, wt, ext)
        result = 0.0
        for d in (0, 1):
            result += np.sum(wt[:n] * flux_component(d, m, W, self.gas) * v.grad(d)[:n])
        return result

    # --- Edge forms ---

    def interface_linear_form(self, m: int, n, wt, v: Func, e: Geom, ext: ExtData):
        """Inner-edge jump term: integral of v * Phi_m(w_central, w_neighbor, n)."""
        W_l = _previous_state(n, wt, ext)
        W_r = _previous_state(n, wt, ext, neighbor=True)
        flux = self.numerical_flux.compute_flux(W_l, W_r, e.nx[:n], e.ny[:n], self.gas)
        return np.sum(wt[:n] * v.val[:n] * flux[m])

    def solid_wall_linear_form(self, m: int, n, wt, v: Func, e: Geom, ext: ExtData):
        """Solid-wall term: integral of v * (wall flux)_m."""
        W = _previous_state(n, wt, ext)
        flux = self.solid_wall.flux(W, e.nx[:n], e.ny[:n])
        return np.sum(wt[:n] * v.val[:n] * flux[m])

    def inlet_outlet_linear_form(self, m: int, n, wt, v: Func, e: Geom, ext: ExtData):
        """Far-field term: integral of v * (characteristic boundary flux)_m."""
        W = _previous_state(n, wt, ext)
        y = e.y[:n] if e.y is not None else 0.0
        flux = self.far_field.flux(W, e.nx[:n], e.ny[:n], y)
        return np.sum(wt[:n] * v.val[:n] * flux[m])

    # --- Bound callbacks ---

    def time_form(self, m: int) -> Callable:
        _check_equation(m)
        return partial(self.time_linear_form, m)

    def flux_form(self, m: int, k: int, direction) -> Callable:
        _check_equation(m)
        _check_equation(k)
        return partial(self.flux_linear_form, m, k, direction_index(direction))

    def interface_form(self, m: int) -> Callable:
        _check_equation(m)
        return partial(self.interface_linear_form, m)

    def solid_wall_form(self, m: int) -> Callable:
        _check_equation(m)
        return partial(self.solid_wall_linear_form, m)

    def inlet_outlet_form(self, m: int) -> Callable:
        _check_equation(m)
        return partial(self.inlet_outlet_linear_form, m)


@dataclass
class FormEntry:
    """One registered form: test space i, basis space j (matrix forms only)."""
    i: int
    form: Callable
    area: object = ANY
    j: Optional[int] = None
    ext: Optional[Sequence] = None


@dataclass
class WeakForm:
    """Registry of the forms that the assembly framework integrates."""
    neq: int = N_EQUATIONS
    matrix_forms: List[FormEntry] = field(default_factory=list)
    vector_forms: List[FormEntry] = field(default_factory=list)
    vector_forms_surf: List[FormEntry] = field(default_factory=list)

    def _check(self, i: int):
        if not 0 <= i < self.neq:
            raise ValueError(f"Form index must be in 0..{self.neq - 1}, got {i}")

    def add_matrix_form(self, i: int, j: int, form: Callable, area=ANY, ext=None):
        self._check(i)
        self._check(j)
        self.matrix_forms.append(FormEntry(i=i, j=j, form=form, area=area, ext=ext))

    def add_vector_form(self, i: int, form: Callable, area=ANY, ext=None):
        self._check(i)
        self.vector_forms.append(FormEntry(i=i, form=form, area=area, ext=ext))

    def add_vector_form_surf(self, i: int, form: Callable, marker, ext=None):
        self._check(i)
        self.vector_forms_surf.append(FormEntry(i=i, form=form, area=marker, ext=ext))

    def surface_forms(self, marker) -> List[FormEntry]:
        """Surface vector forms registered on a boundary marker."""
        return [entry for entry in self.vector_forms_surf if entry.area == marker]


def build_euler_weak_form(config: SolverConfig = None, previous=None,
                          numerical_flux: NumericalFlux = None) -> WeakForm:
    """
    Register every Euler form.

    Args:
        config: Solver configuration
        previous: The four previous time level fields, passed through as ext
        numerical_flux: Interface flux, defaults to the configured scheme

    Returns:
        WeakForm with time, linearized-flux, interface and boundary forms
    """
    forms = EulerForms(config, numerical_flux)
    config = forms.config
    wf = WeakForm()

    for m in range(N_EQUATIONS):
        wf.add_matrix_form(m, m, forms.time_bilinear_form)
        wf.add_vector_form(m, forms.time_form(m), ext=previous)

    for d in (0, 1):
        for m, k in nonzero_entries(d):
            wf.add_vector_form(m, forms.flux_form(m, k, d), ext=previous)

    for m in range(N_EQUATIONS):
        wf.add_vector_form_surf(m, forms.interface_form(m), DG_INNER_EDGE, ext=previous)
        wf.add_vector_form_surf(m, forms.solid_wall_form(m), config.solid_wall_marker,
                                ext=previous)
        wf.add_vector_form_surf(m, forms.inlet_outlet_form(m), config.inlet_outlet_marker,
                                ext=previous)

    logger.info("Registered %d matrix forms, %d vector forms and %d surface forms",
                len(wf.matrix_forms), len(wf.vector_forms), len(wf.vector_forms_surf))
    return wf
