"""
Pytest tests for the weak-form callbacks and their registration.

Tests verify:
1. Every expected form is registered on the right space and marker
2. Volume forms integrate the time and linearized flux terms
3. Edge forms integrate the interface and boundary fluxes
4. Mismatched inputs are rejected before any computation
5. Forms do not modify their inputs
"""

import numpy as np
import pytest

from euler2d.src import (SolverConfig, EulerForms, Func, Geom, ExtData, ReflectedWallBC,
                         SolidWallBC, build_euler_weak_form, flux)
from euler2d.src.forms import DG_INNER_EDGE
from euler2d.src.jacobian import nonzero_entries


N_POINTS = 5


@pytest.fixture
def config():
    return SolverConfig(tau=1e-3)


@pytest.fixture
def forms(config):
    return EulerForms(config)


@pytest.fixture
def weights():
    return np.array([0.1, 0.25, 0.3, 0.25, 0.1])


@pytest.fixture
def test_function():
    x = np.linspace(-1.0, 1.0, N_POINTS)
    return Func(val=1.0 + 0.5 * x, dx=np.full(N_POINTS, 0.5), dy=np.cos(x))


@pytest.fixture
def previous_state(gas):
    """Slightly varying previous-level state at the quadrature points."""
    x = np.linspace(0.0, 1.0, N_POINTS)
    rho = 1.0 + 0.1 * x
    rho_vx = 200.0 * rho
    rho_vy = 20.0 * x
    energy = 1e5 + 1e3 * x
    return np.array([rho, rho_vx, rho_vy, energy])


def make_ext(W, neighbor=None):
    if neighbor is None:
        return ExtData(fn=[Func(val=W[k].copy()) for k in range(4)])
    return ExtData(fn=[Func(val=W[k].copy(), val_neighbor=neighbor[k].copy()) for k in range(4)])


def edge(nx, ny):
    return Geom(x=np.zeros(N_POINTS), y=np.linspace(0.0, 1.0, N_POINTS),
                nx=np.full(N_POINTS, nx), ny=np.full(N_POINTS, ny))


class TestRegistration:

    def test_form_counts(self, config):
        wf = build_euler_weak_form(config)
        n_flux = len(nonzero_entries('x')) + len(nonzero_entries('y'))
        assert len(wf.matrix_forms) == 4
        assert len(wf.vector_forms) == 4 + n_flux
        assert len(wf.vector_forms_surf) == 12

    def test_surface_markers(self, config):
        wf = build_euler_weak_form(config)
        assert sorted(e.i for e in wf.surface_forms(DG_INNER_EDGE)) == [0, 1, 2, 3]
        assert sorted(e.i for e in wf.surface_forms(config.solid_wall_marker)) == [0, 1, 2, 3]
        assert sorted(e.i for e in wf.surface_forms(config.inlet_outlet_marker)) == [0, 1, 2, 3]

    def test_time_matrix_forms_are_diagonal(self, config):
        wf = build_euler_weak_form(config)
        assert all(entry.i == entry.j for entry in wf.matrix_forms)

    def test_previous_fields_are_passed_through(self, config):
        fields = ('rho', 'rho_vx', 'rho_vy', 'energy')
        wf = build_euler_weak_form(config, previous=fields)
        assert all(entry.ext is fields for entry in wf.vector_forms)

    def test_wall_policy(self):
        assert isinstance(EulerForms(SolverConfig()).solid_wall, SolidWallBC)
        mirror = EulerForms(SolverConfig(solid_wall_policy='mirror'))
        assert isinstance(mirror.solid_wall, ReflectedWallBC)

    def test_index_checks(self, forms):
        with pytest.raises(ValueError):
            forms.time_form(4)
        with pytest.raises(ValueError):
            forms.flux_form(0, 1, 'z')
        with pytest.raises(ValueError):
            build_euler_weak_form().add_vector_form(5, forms.time_form(0))

    def test_integration_order(self, forms):
        assert forms.order() == 20


class TestVolumeForms:

    def test_time_bilinear_form(self, forms, weights, test_function):
        u = Func(val=np.linspace(2.0, 3.0, N_POINTS))
        result = forms.time_bilinear_form(N_POINTS, weights, u, test_function, Geom())
        expected = np.sum(weights * u.val * test_function.val) / 1e-3
        assert result == pytest.approx(expected)

    @pytest.mark.parametrize("m", range(4))
    def test_time_linear_form(self, forms, weights, test_function, previous_state, m):
        ext = make_ext(previous_state)
        result = forms.time_form(m)(N_POINTS, weights, test_function, Geom(), ext)
        expected = np.sum(weights * previous_state[m] * test_function.val) / 1e-3
        assert result == pytest.approx(expected)

    @pytest.mark.parametrize("m", range(4))
    def test_flux_forms_sum_to_convective_term(self, gas, forms, weights, test_function,
                                               previous_state, m):
        ext = make_ext(previous_state)
        total = 0.0
        for d in (0, 1):
            for row, k in nonzero_entries(d):
                if row == m:
                    total += forms.flux_form(m, k, d)(N_POINTS, weights, test_function,
                                                      Geom(), ext)
        expected = np.sum(weights * (flux('x', previous_state, gas)[m] * test_function.dx
                                     + flux('y', previous_state, gas)[m] * test_function.dy))
        assert total == pytest.approx(expected, rel=1e-10)
        assert forms.convective_linear_form(m, N_POINTS, weights, test_function,
                                            Geom(), ext) == pytest.approx(expected, rel=1e-10)

    def test_mass_flux_form(self, forms, weights, test_function, previous_state):
        """Equation 0, component 1, direction x: integral of rho_vx dv/dx."""
        ext = make_ext(previous_state)
        result = forms.flux_form(0, 1, 'x')(N_POINTS, weights, test_function, Geom(), ext)
        assert result == pytest.approx(np.sum(weights * previous_state[1] * test_function.dx))


class TestEdgeForms:

    @pytest.mark.parametrize("m", range(4))
    def test_interface_with_continuous_traces(self, gas, forms, weights, test_function,
                                              previous_state, m):
        ext = make_ext(previous_state, neighbor=previous_state)
        e = edge(0.6, 0.8)
        result = forms.interface_form(m)(N_POINTS, weights, test_function, e, ext)
        F_n = 0.6 * flux('x', previous_state, gas) + 0.8 * flux('y', previous_state, gas)
        assert result == pytest.approx(np.sum(weights * test_function.val * F_n[m]), rel=1e-9)

    def test_solid_wall_has_no_mass_flux(self, forms, weights, test_function, previous_state):
        ext = make_ext(previous_state)
        result = forms.solid_wall_form(0)(N_POINTS, weights, test_function, edge(0.0, 1.0), ext)
        assert result == 0.0

    @pytest.mark.parametrize("scheme", ["hllc", "rusanov"])
    def test_mirror_wall_has_no_mass_flux(self, weights, test_function, previous_state, scheme):
        forms = EulerForms(SolverConfig(solid_wall_policy='mirror', numerical_flux=scheme))
        ext = make_ext(previous_state)
        e = edge(0.6, 0.8)
        mass = forms.solid_wall_form(0)(N_POINTS, weights, test_function, e, ext)
        momentum = forms.solid_wall_form(1)(N_POINTS, weights, test_function, e, ext)
        assert mass == pytest.approx(0.0, abs=1e-8)
        assert momentum > 0.0

    def test_solid_wall_momentum(self, forms, weights, test_function, previous_state):
        ext = make_ext(previous_state)
        e = edge(0.0, 1.0)
        p_b = forms.solid_wall.boundary_pressure(previous_state, e.nx, e.ny)
        result = forms.solid_wall_form(2)(N_POINTS, weights, test_function, e, ext)
        assert result == pytest.approx(np.sum(weights * test_function.val * p_b))

    @pytest.mark.parametrize("m", range(4))
    def test_outlet_of_free_stream(self, gas, forms, weights, test_function, m):
        W = np.tile(np.array([[1.0], [200.0], [0.0], [1e5]]), (1, N_POINTS))
        ext = make_ext(W)
        result = forms.inlet_outlet_form(m)(N_POINTS, weights, test_function, edge(1.0, 0.0), ext)
        expected = np.sum(weights * test_function.val * flux('x', W, gas)[m])
        assert result == pytest.approx(expected, rel=1e-10, abs=1e-8)

    def test_inlet_mass_flux_enters(self, forms, weights, test_function):
        W = np.tile(np.array([[1.0], [200.0], [0.0], [1e5]]), (1, N_POINTS))
        ext = make_ext(W)
        result = forms.inlet_outlet_form(0)(N_POINTS, weights, test_function, edge(-1.0, 0.0), ext)
        assert result == pytest.approx(-200.0 * np.sum(weights * test_function.val))


class TestMismatchedInputs:

    def test_time_bilinear_form_wrong_weight_count(self, forms, test_function):
        u = Func(val=np.ones(N_POINTS))
        with pytest.raises(ValueError):
            forms.time_bilinear_form(N_POINTS, np.ones(3), u, test_function, Geom())

    def test_missing_field(self, forms, weights, test_function, previous_state):
        ext = ExtData(fn=[Func(val=previous_state[k]) for k in range(3)])
        with pytest.raises(ValueError):
            forms.time_form(0)(N_POINTS, weights, test_function, Geom(), ext)

    def test_missing_ext(self, forms, weights, test_function):
        with pytest.raises(ValueError):
            forms.flux_form(1, 1, 'x')(N_POINTS, weights, test_function, Geom(), None)

    def test_wrong_weight_count(self, forms, test_function, previous_state):
        ext = make_ext(previous_state)
        with pytest.raises(ValueError):
            forms.time_form(0)(N_POINTS, np.ones(3), test_function, Geom(), ext)

    def test_short_field(self, forms, weights, test_function, previous_state):
        ext = make_ext(previous_state)
        ext.fn[2] = Func(val=previous_state[2][:2])
        with pytest.raises(ValueError):
            forms.solid_wall_form(1)(N_POINTS, weights, test_function, edge(1.0, 0.0), ext)

    def test_interface_without_neighbour(self, forms, weights, test_function, previous_state):
        ext = make_ext(previous_state)
        with pytest.raises(ValueError):
            forms.interface_form(0)(N_POINTS, weights, test_function, edge(1.0, 0.0), ext)


class TestPurity:

    def test_inputs_unchanged_and_results_repeatable(self, forms, weights, test_function,
                                                     previous_state):
        ext = make_ext(previous_state, neighbor=previous_state[:, ::-1])
        e = edge(-1.0, 0.0)
        callbacks = [forms.time_form(3), forms.flux_form(3, 0, 'y'), forms.interface_form(1),
                     forms.solid_wall_form(1), forms.inlet_outlet_form(3)]
        for form in callbacks:
            first = form(N_POINTS, weights, test_function, e, ext)
            second = form(N_POINTS, weights, test_function, e, ext)
            assert first == second
        for k in range(4):
            np.testing.assert_array_equal(ext.fn[k].val, previous_state[k])
            np.testing.assert_array_equal(ext.fn[k].val_neighbor, previous_state[k, ::-1])
