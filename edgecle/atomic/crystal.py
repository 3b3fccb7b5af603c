#!/usr/bin/env python
'''Checks on the bulk crystal structure of a species, and construction of the
oriented unit cell used to build an edge dislocation in an FCC crystal.
'''

import logging
from collections import namedtuple

import numpy as np
import numpy.linalg as L

from ase import Atoms
from ase.build import bulk

from edgecle.exceptions import StructureMismatch

logger = logging.getLogger(__name__)

# primitive cell shapes, normalised by their (1, 2) element
AFCC = np.array([[0., 1., 1.],
                 [1., 0., 1.],
                 [1., 1., 0.]])

ABCC = np.array([[-1., 1., 1.],
                 [1., -1., 1.],
                 [1., 1., -1.]])

SHAPE_TOL = 1e-12

EdgeUnitCell = namedtuple('EdgeUnitCell', ['atoms', 'burgers', 'core_offset',
                                           'lattice_constant'])


def ei(i):
    '''Cartesian unit vector along axis <i> (1, 2 or 3).
    '''

    if i not in (1, 2, 3):
        raise ValueError("Axis must be 1, 2 or 3, not {}.".format(i))

    return np.eye(3)[i-1]


def shape_matrix(s):
    '''Cell matrix of the primitive bulk cell of species <s>, normalised so
    that the (1, 2) element is 1. Raises <StructureMismatch> if ASE has no
    reference crystal structure for <s>.
    '''

    try:
        F = np.array(bulk(s).get_cell())
    except (KeyError, ValueError) as error:
        raise StructureMismatch("No reference structure for {}: {}".format(s,
                                                                   error))
    # a zero (1, 2) element (eg. hcp) gives a non-finite shape, which never
    # matches a reference shape
    with np.errstate(divide='ignore', invalid='ignore'):
        return F/F[0, 1]


def check_fcc(s):
    '''Ensure that species <s> actually crystallises to FCC.
    '''

    F = shape_matrix(s)
    if not L.norm(F - AFCC) < SHAPE_TOL:
        raise StructureMismatch("{} does not crystallise to FCC.".format(s))


def check_bcc(s):
    '''Returns True if species <s> crystallises to BCC.
    '''

    F = shape_matrix(s)
    return bool(L.norm(F - ABCC) < SHAPE_TOL)


def lattice_constant(s):
    '''Cubic lattice constant of species <s>.
    '''

    a = float(bulk(s, cubic=True).get_cell()[0, 0])
    if not a > 0.:
        raise ValueError("Lattice constant of {} must be positive.".format(s))

    return a


def fcc_edge_plane(s):
    '''Generates a unit cell for an FCC crystal with orthogonal cell vectors
    chosen such that the x direction is the Burgers vector and the y direction
    the normal to the glide plane of the standard edge dislocation. The
    dislocation line lies along z. The cell contains three atoms.

    Returns an <EdgeUnitCell> holding the atoms, the Burgers vector, a
    core offset (to add to any lattice position) and the lattice constant.
    '''

    check_fcc(s)
    a = lattice_constant(s)
    d = a/np.sqrt(2)
    logger.debug("a/sqrt(2) = %.6f", d)

    F = np.diag([d, a, d])
    X = d*np.array([[0., 0., 0.],
                    [0.5, np.sqrt(3)/2., 0.],
                    [0.5, 1./(2*np.sqrt(3)), 1./12]])

    atu = Atoms(s + '3', positions=X, cell=F, pbc=False)

    b = d*ei(1)

    # core offset lies strictly between lattice planes, off every atom
    xcore = d*np.array([0.5, 1./3, 0.])

    return EdgeUnitCell(atu, b, xcore, a)
