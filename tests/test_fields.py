import numpy as np
import pytest

from edgecle.atomic import fields
from edgecle.atomic.aniso import voigt_to_full
from edgecle.exceptions import NonRealDisplacement, ElasticSymmetryViolation, \
                               ElasticStabilityViolation

# isotropic elastic constants (C66 = (C11 - C12)/2), exactly representable
ISO_CV = np.array([[1.0, 0.5, 0.5, 0., 0., 0.],
                   [0.5, 1.0, 0.5, 0., 0., 0.],
                   [0.5, 0.5, 1.0, 0., 0., 0.],
                   [0., 0., 0., 0.25, 0., 0.],
                   [0., 0., 0., 0., 0.25, 0.],
                   [0., 0., 0., 0., 0., 0.25]])


def grid_points():
    x, y = np.meshgrid(np.linspace(-7.3, 7.1, 17), np.linspace(-6.9, 7.7, 15))
    return x.ravel(), y.ravel()


### ISOTROPIC FIELD ###

def test_isotropic_volterra_cut():
    b, nu = 2.0, 0.25
    x = np.array([-10., -10.])
    y = np.array([0.001, -0.001])
    ux, uy = fields.u_edge_isotropic(x, y, b, nu)
    assert abs((ux[1] - ux[0]) - b) < 1e-3


def test_isotropic_no_cut_ahead_of_core():
    b, nu = 2.0, 0.25
    x = np.array([10., 10.])
    y = np.array([0.001, -0.001])
    ux, uy = fields.u_edge_isotropic(x, y, b, nu)
    assert abs(ux[1] - ux[0]) < 1e-3


def test_isotropic_upper_half_plane():
    b, nu = 2.5, 0.3
    x, y = grid_points()
    above = y > 0
    x, y = x[above], y[above]
    r2 = x**2 + y**2
    ux_ref = b/(2*np.pi)*(np.arctan(x/y) + x*y/(2*(1-nu)*r2))
    uy_ref = -b/(2*np.pi)*((1-2*nu)/(4*(1-nu))*np.log(r2) +
                           (y**2 - x**2)/(4*(1-nu)*r2))

    ux, uy = fields.u_edge_isotropic(x, y, b, nu)
    assert np.allclose(ux, ux_ref)
    assert np.allclose(uy, uy_ref)


def test_isotropic_lower_half_plane_shifted():
    b, nu = 2.5, 0.3
    x = np.array([-3., 0.4, 2.2])
    y = np.array([-1., -2., -0.5])
    xs = x + b/2
    r2 = xs**2 + y**2
    ux_ref = b/2 + b/(2*np.pi)*(np.arctan(xs/y) + xs*y/(2*(1-nu)*r2))

    ux, uy = fields.u_edge_isotropic(x, y, b, nu)
    assert np.allclose(ux, ux_ref)


def test_isotropic_does_not_modify_input():
    x, y = grid_points()
    x0, y0 = x.copy(), y.copy()
    fields.u_edge_isotropic(x, y, 2.0, 0.25)
    assert np.array_equal(x, x0)
    assert np.array_equal(y, y0)


def test_isotropic_on_glide_plane():
    ux, uy = fields.u_edge_isotropic(np.array([1.5, -2.]), np.zeros(2), 2.0, 0.25)
    assert np.all(np.isfinite(ux))
    assert np.all(np.isfinite(uy))


### ANISOTROPIC FIELD ###

def test_edge_parameters(cu_cv):
    cbar11, lam, phi = fields.edge_parameters(cu_cv)
    assert np.isclose(cbar11, 1.05)
    assert np.isclose(lam, 1.)
    c12, c66 = 0.755, 0.47
    assert np.isclose(np.cos(2*phi),
                      (c12**2 + 2*c12*c66 - 1.05**2)/(2*1.05*c66))


def test_anisotropic_real(cu_cv):
    x, y = grid_points()
    ux, uy = fields.u_edge(x, y, 1.8, cu_cv)
    assert ux.dtype == float
    assert uy.dtype == float
    assert np.all(np.isfinite(ux))
    assert np.all(np.isfinite(uy))


def test_anisotropic_volterra_cut(cu_cv):
    b = 1.8
    x = np.array([-5., -5., 5., 5.])
    y = np.array([1e-7, -1e-7, 1e-7, -1e-7])
    ux, uy = fields.u_edge(x, y, b, cu_cv)
    assert abs((ux[1] - ux[0]) - b) < 1e-5
    assert abs(ux[3] - ux[2]) < 1e-5
    assert abs(uy[1] - uy[0]) < 1e-5


def test_anisotropic_continuous_across_singular_lines(cu_cv):
    cv = cu_cv.copy()
    cv[1, 1] = 1.3
    cbar11, lam, phi = fields.edge_parameters(cv)
    y = 2.
    for xl in (lam*y, -lam*y):
        x = np.array([xl - 1e-8, xl + 1e-8])
        ux, uy = fields.u_edge(x, np.array([y, y]), 1.0, cv)
        assert abs(ux[1] - ux[0]) < 1e-6
        assert abs(uy[1] - uy[0]) < 1e-6


def test_anisotropic_isotropic_limit():
    b = 1.0
    x, y = grid_points()
    ux, uy = fields.u_edge(x, y, b, ISO_CV)

    nu = fields.poisson_ratio(ISO_CV)
    r2 = x**2 + y**2
    theta = np.arctan2(y, x)
    ux_ref = -b/(2*np.pi)*(theta + x*y/(2*(1-nu)*r2))
    uy_ref = b/(8*np.pi)*(0.5*np.log(r2) - 3*y**2/r2)

    assert np.allclose(ux, ux_ref, atol=1e-8)
    assert np.allclose(uy, uy_ref, atol=1e-8)


def test_anisotropic_near_isotropic_stable():
    x, y = grid_points()
    ux0, uy0 = fields.u_edge(x, y, 1.0, ISO_CV)

    cv = ISO_CV.copy()
    cv[5, 5] *= (1 + 1e-9)
    ux1, uy1 = fields.u_edge(x, y, 1.0, cv)

    assert np.allclose(ux0, ux1, atol=1e-6)
    assert np.allclose(uy0, uy1, atol=1e-6)


def test_anisotropic_finite_at_core(cu_cv):
    # squared distances far below the log floor, and the core itself
    x = np.array([1e-160, 1e-100, 0.])
    y = np.array([1e-160, 1e-100, 0.])
    with np.errstate(divide='raise', invalid='raise'):
        ux, uy = fields.u_edge(x, y, 1.0, cu_cv)
    assert np.all(np.isfinite(ux))
    assert np.all(np.isfinite(uy))

    ux_iso, uy_iso = fields.u_edge_isotropic(x, y, 1.0, 0.3)
    assert np.all(np.isfinite(ux_iso))
    assert np.all(np.isfinite(uy_iso))


def test_anisotropic_full_tensor(cu_cv):
    x, y = grid_points()
    ux_v, uy_v = fields.u_edge(x, y, 1.8, cu_cv)
    ux_f, uy_f = fields.u_edge_full(x, y, 1.8, voigt_to_full(cu_cv))
    assert np.allclose(ux_v, ux_f)
    assert np.allclose(uy_v, uy_f)


def test_anisotropic_bad_shape(cu_cv):
    with pytest.raises(ValueError):
        fields.u_edge(np.ones(2), np.ones(2), 1.0, cu_cv[:3, :3])
    with pytest.raises(ValueError):
        fields.u_edge_full(np.ones(2), np.ones(2), 1.0, cu_cv)


def test_anisotropic_non_real():
    cv = ISO_CV.copy()
    cv[5, 5] = 0.01
    with pytest.raises(NonRealDisplacement):
        fields.u_edge(np.ones(3), np.ones(3), 1.0, cv)

    cv = ISO_CV.copy()
    cv[1, 1] = -1.0
    with pytest.raises(NonRealDisplacement):
        fields.u_edge(np.ones(3), np.ones(3), 1.0, cv)


### ELASTIC CONSTANT CHECKS ###

def test_check_edge_moduli(cu_cv):
    fields.check_edge_moduli(cu_cv)


def test_check_edge_moduli_isotropic_boundary():
    # isotropy lies on the boundary of the stability conditions (13-108)
    with pytest.raises(ElasticStabilityViolation):
        fields.check_edge_moduli(ISO_CV)


def test_check_edge_moduli_symmetry(cu_cv):
    cv = cu_cv.copy()
    cv[0, 1] += 0.1
    with pytest.raises(ElasticSymmetryViolation):
        fields.check_edge_moduli(cv)

    cv = cu_cv.copy()
    cv[0, 5] = cv[5, 0] = 0.1
    with pytest.raises(ElasticSymmetryViolation):
        fields.check_edge_moduli(cv)


def test_check_edge_moduli_stability(cu_cv):
    cv = cu_cv.copy()
    cv[0, 1] = cv[1, 0] = -0.2
    with pytest.raises(ElasticStabilityViolation):
        fields.check_edge_moduli(cv)


def test_strict_mode(cu_cv):
    cv = cu_cv.copy()
    cv[0, 5] = cv[5, 0] = 0.1
    x, y = grid_points()
    # the coupling is ignored unless strict checking is requested
    fields.u_edge(x, y, 1.0, cv)
    with pytest.raises(ElasticSymmetryViolation):
        fields.u_edge(x, y, 1.0, cv, strict=True)


def test_poisson_ratio(cu_cv):
    assert np.isclose(fields.poisson_ratio(ISO_CV), 1./3)
    assert np.isclose(fields.poisson_ratio(cu_cv), 0.755/1.805)
