#!/usr/bin/env python
'''Continuum linear elasticity displacement fields for a straight edge
dislocation lying along z, with Burgers vector b*[1, 0, 0] and core at the
origin. Coordinates <x> and <y> are arrays of positions relative to the core.
'''

import logging

import numpy as np
import numpy.linalg as L

from edgecle.atomic import aniso
from edgecle.exceptions import NonRealDisplacement, ElasticSymmetryViolation, \
                               ElasticStabilityViolation

logger = logging.getLogger(__name__)

# smallest argument passed to a logarithm
LOG_FLOOR = 1e-300

# Voigt elements (zero-based) that must vanish for the in-plane edge solution
# to decouple, see Hirth and Lothe (13-97) and (13-99)
COUPLING_ELEMENTS = ((0, 3), (0, 4), (1, 3), (1, 4),
                     (2, 3), (2, 4), (3, 5), (4, 5),
                     (0, 5), (1, 5))


def branch_cut(x, y, b):
    '''Shifts points below the glide plane by b/2 along x. Returns a new array.
    '''

    return np.where(y < 0, x + b/2., x)


def u_edge_isotropic(x, y, b, nu):
    '''Compute the displacement field <ux>, <uy> for an edge dislocation in an
    isotropic linearly elastic medium, with core at (0, 0), Burgers vector
    b*[1, 0] and Poisson ratio <nu>.

    Points below the glide plane are first shifted by b/2 along x, and this
    shift is included in <ux>, so that x + ux is the displaced coordinate.
    Neither <x> nor <y> is modified.

    This is to be used primarily for comparison, since the exact solution will
    not be the isotropic elasticity solution.
    '''

    x = np.asarray(x, dtype=float)
    y = np.asarray(y, dtype=float)

    xs = branch_cut(x, y, b)
    r2 = np.maximum(xs**2 + y**2, LOG_FLOOR)

    # atan(xs/y), evaluated without dividing by y
    s = np.where(y < 0, -1., 1.)
    theta = np.arctan2(s*xs, s*y)

    ux = b/(2*np.pi) * (theta + xs*y/(2*(1-nu)*r2))
    uy = -b/(2*np.pi) * ((1-2*nu)/(4*(1-nu))*np.log(r2) +
                         (y**2 - xs**2)/(4*(1-nu)*r2))

    return (xs - x) + ux, uy


def poisson_ratio(Cv):
    '''Plane strain Poisson ratio for the Voigt elastic constants <Cv>.
    '''

    Cv = np.asarray(Cv)
    return Cv[0, 1]/(Cv[0, 0] + Cv[0, 1])


def check_edge_moduli(Cv, TOL=1e-4):
    '''Ensure that <Cv> has the symmetries needed by the simplified edge
    solution of Hirth and Lothe (p. 449) and that it satisfies the stability
    conditions (13-108).
    '''

    Cv = np.asarray(Cv)

    if L.norm(Cv - Cv.T) >= TOL:
        raise ElasticSymmetryViolation("Elastic constants are not symmetric.")

    for i, j in COUPLING_ELEMENTS:
        if abs(Cv[i, j]) >= TOL:
            raise ElasticSymmetryViolation(("Elastic constant C{}{} = {:.6f} " +
                          "should vanish.").format(i+1, j+1, Cv[i, j]))

    cbar11 = np.sqrt(abs(Cv[0, 0]*Cv[1, 1]))
    stable = (Cv[0, 0] > 0 and Cv[1, 1] > 0 and Cv[5, 5] > 0 and Cv[0, 1] > 0
              and 2*Cv[5, 5] + Cv[0, 1] - cbar11 > 0)

    if not stable:
        raise ElasticStabilityViolation("Elastic constants do not satisfy the " +
                                        "stability conditions for an edge dislocation.")


def edge_parameters(Cv, TOL=1e-4):
    '''Calculates the auxiliary parameters cbar11, lambda and phi (13-106)
    for the anisotropic edge solution. Raises <NonRealDisplacement> if any of
    them is complex to more than <TOL>.
    '''

    Cv = np.asarray(Cv, dtype=float)
    c11, c22, c12, c66 = Cv[0, 0], Cv[1, 1], Cv[0, 1], Cv[5, 5]

    cbar11 = np.emath.sqrt(c11*c22)
    lam = np.emath.power(c11/c22, 0.25)
    phi = 0.5*np.emath.arccos((c12**2 + 2*c12*c66 - cbar11**2)/(2.*cbar11*c66))

    for name, value in (('cbar11', cbar11), ('lambda', lam), ('phi', phi)):
        if abs(np.imag(value)) > TOL:
            raise NonRealDisplacement(("Parameter {} = {} is not real; check " +
                                       "the elastic constants.").format(name, value))

    return float(np.real(cbar11)), float(np.real(lam)), float(np.real(phi))


def _log1p_ratio(d):
    '''log(1+d)/d, which tends to 1 as d -> 0.
    '''

    small = np.abs(d) < 1e-8
    safe_d = np.where(small, 1., d)
    return np.where(small, 1. - d/2., np.log1p(safe_d)/safe_d)


def u_edge(x, y, b, Cv, TOL=1e-4, strict=False):
    '''Computes the anisotropic CLE solution for an in-plane edge dislocation
    from the 6x6 Voigt elastic constants <Cv>, following Hirth and Lothe
    (13-105) to (13-107).

    Arctangents are evaluated as sums and differences of complex arguments,
    so that the field is continuous across the lines x = +/-lambda*y and has a
    single branch cut (jump b in <ux>) along the negative x axis. If <strict>
    is True, the symmetry and stability of <Cv> are checked first.
    '''

    Cv = np.asarray(Cv, dtype=float)
    if Cv.shape != (6, 6):
        raise ValueError("Voigt matrix must be 6x6, not {}.".format(Cv.shape))

    if strict:
        check_edge_moduli(Cv, TOL)

    x = np.asarray(x, dtype=float)
    y = np.asarray(y, dtype=float)

    cbar11, lam, phi = edge_parameters(Cv, TOL)
    logger.debug("lambda = %.6f, phi = %.6f", lam, phi)

    c12, c66 = Cv[0, 1], Cv[5, 5]
    sinphi, cosphi = np.sin(phi), np.cos(phi)
    sin2phi, cos2phi = np.sin(2*phi), np.cos(2*phi)

    # only log(q/t) and log(q*t) occur, which we rewrite as
    # 0.5*log(q**2/t**2) and 0.5*log(q**2*t**2)
    q2 = np.maximum(x**2 + 2*x*y*lam*cosphi + y**2*lam**2, LOG_FLOOR)
    t2 = np.maximum(x**2 - 2*x*y*lam*cosphi + y**2*lam**2, LOG_FLOOR)

    # arg(x + lam*y*e^{i*phi}) + arg(x - lam*y*e^{-i*phi})
    atan_x = (np.arctan2(lam*y*sinphi, x + lam*y*cosphi) +
              np.arctan2(lam*y*sinphi, x - lam*y*cosphi))

    # 0.5*log(q**2/t**2)/sin(2*phi), with cos(phi) cancelled
    d = 4*x*y*lam*cosphi/t2
    log_qt = _log1p_ratio(d)*x*y*lam/(t2*sinphi)

    ux = -(b/(4*np.pi)) * (atan_x + (cbar11**2 - c12**2)/(2*cbar11*c66)*log_qt)

    atan_y = np.arctan2(y**2*lam**2*sin2phi, x**2 - lam**2*y**2*cos2phi)
    uy = (lam*b/(4*np.pi*cbar11)) * (
            (cbar11 - c12)*0.5*(np.log(q2) + np.log(t2))/(2*sinphi) -
            (cbar11 + c12)*sinphi*atan_y/sin2phi
         )

    # check that the solution is really real
    if not (np.all(np.isfinite(ux)) and np.all(np.isfinite(uy))):
        raise NonRealDisplacement("Anisotropic displacement field is not finite.")

    return ux, uy


def u_edge_full(x, y, b, C, TOL=1e-4, strict=False):
    '''As for <u_edge>, but with the elastic constants given as the full
    3x3x3x3 tensor <C>.
    '''

    return u_edge(x, y, b, aniso.full_to_voigt(C), TOL=TOL, strict=strict)
