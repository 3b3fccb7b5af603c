#!/usr/bin/env python
'''Functions to construct a linear elasticity predictor for a straight edge
dislocation in an FCC crystal: a cluster, periodic along the dislocation line,
whose atoms are displaced by the continuum field of the dislocation.
'''

import logging

import numpy as np
import numpy.linalg as L

from edgecle.atomic import crystal as cry
from edgecle.atomic import aniso
from edgecle.atomic import fields
from edgecle.exceptions import InvalidSolverMode, MalformedBurgersVector

logger = logging.getLogger(__name__)

supported_cle = ('isotropic', 'anisotropic')


def replica_counts(R, margin=3):
    '''Number of unit cells along x, y and z needed to fit a disk of radius
    a/sqrt(2) * <R> inside the replicated cell.
    '''

    if not R > 0:
        raise ValueError("Cluster radius must be positive, not {}.".format(R))

    L1 = int(np.ceil(2*R)) + margin
    L2 = int(np.ceil(2*R/np.sqrt(2))) + margin
    return L1, L2, 1


def project12(X):
    '''Project positions onto the xy plane.
    '''

    return np.asarray(X)[:, :2].copy()


def locate_core(X12, core_offset):
    '''Dislocation core: the (first) atom nearest to the centroid of the
    in-plane positions <X12>, plus the in-plane part of <core_offset>.
    '''

    xc = X12.mean(axis=0)
    r2 = ((X12 - xc)**2).sum(axis=1)
    I0 = np.argmin(r2)
    return X12[I0] + np.asarray(core_offset)[:2]


def truncate_to_disk(atoms, xcore, radius):
    '''Returns a new cluster containing only those atoms whose distance from
    the axis through <xcore> is at most <radius>. The cell of <atoms> is kept.
    '''

    X = atoms.get_positions()
    rxy = L.norm(X[:, :2] - xcore, axis=1)
    IR = np.flatnonzero(rxy <= radius)

    # indexing returns a new Atoms object with the same cell
    return atoms[IR]


def fcc_edge_geom(s, R, truncate=True, cle='isotropic', nu=0.25, calc=None,
                  TOL=1e-4, strict=False):
    '''Generates a linear elasticity predictor configuration for an edge
    dislocation in FCC species <s>, with Burgers vector along x and the
    dislocation line along z. The cluster covers a disk of radius
    a/sqrt(2) * <R> and, if <truncate> is True, is cut down to that disk.

    <cle> selects the isotropic (Poisson ratio <nu>) or anisotropic solution.
    The anisotropic solution uses elastic constants computed from the
    calculator <calc> on the unit cell. If <nu> is None, the Poisson ratio is
    derived from the same elastic constants.

    Returns the displaced atoms and the position of the dislocation core.
    '''

    if cle not in supported_cle:
        raise InvalidSolverMode("{} is not a supported CLE solution.".format(cle))
    if calc is None and (cle == 'anisotropic' or nu is None):
        raise ValueError("Elastic constants required, but no calculator given.")

    # compute the correct unit cell
    unit = cry.fcc_edge_plane(s)
    a = unit.lattice_constant
    L1, L2, L3 = replica_counts(R)
    logger.info("Building %d x %d x %d cluster of %s", L1, L2, L3, s)
    at = unit.atoms.repeat((L1, L2, L3))
    at.info['lattice_constant'] = a

    # turn the Burgers vector into a scalar
    if unit.burgers[1] != 0. or unit.burgers[2] != 0.:
        raise MalformedBurgersVector("Burgers vector {} not parallel to x.".format(
                                                                 unit.burgers))
    b = unit.burgers[0]

    # compute a dislocation core and x, y coordinates relative to it
    X12 = project12(at.get_positions())
    xcore = locate_core(X12, unit.core_offset)
    logger.info("Dislocation core at (%.4f, %.4f)", xcore[0], xcore[1])
    x = X12[:, 0] - xcore[0]
    y = X12[:, 1] - xcore[1]

    # elastic constants are computed from the periodic unit cell
    Cv = None
    if cle == 'anisotropic' or nu is None:
        Cv = aniso.voigt_moduli(calc, unit.atoms)
        if nu is None:
            nu = fields.poisson_ratio(Cv)

    # compute the dislocation predictor
    if cle == 'isotropic':
        ux, uy = fields.u_edge_isotropic(x, y, b, nu)
    else:
        ux, uy = fields.u_edge(x, y, b, Cv, TOL=TOL, strict=strict)

    # apply the linear elasticity displacement
    X = at.get_positions()
    X[:, 0] = x + ux + xcore[0]
    X[:, 1] = y + uy + xcore[1]
    disloc = at.copy()
    disloc.set_positions(X)

    # if we want a circular cluster, then truncate to a disk
    if truncate:
        disloc = truncate_to_disk(disloc, xcore, R*a/np.sqrt(2))
        logger.info("Kept %d of %d atoms within the cluster radius", len(disloc),
                                                                     len(at))

    disloc.set_pbc((False, False, True))
    return disloc, xcore
