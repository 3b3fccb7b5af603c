#!/usr/bin/env python
'''Elastic constants in Voigt and full tensor form, and their measurement
from an ASE calculator by finite differences of the stress. All moduli are
in eV/ang**3.
'''

import logging

import numpy as np
from scipy.stats import linregress

logger = logging.getLogger(__name__)

CONV_EV_TO_GPA = 160.2176487

# Voigt index pairs, in the order used by ASE for stresses
VOIGT_PAIRS = ((0, 0), (1, 1), (2, 2), (1, 2), (0, 2), (0, 1))


def voigt_index(i, j):
    '''Given a pair of indices ij, work out the corresponding single index I
    in the Voigt notation. Note that i and j run from 0 to 2, while I runs
    from 0 to 5 (inclusive). Recall that ij and ji map to the same value.
    '''

    if not (0 <= i < 3 and 0 <= j < 3):
        raise ValueError("Index pair ({}, {}) out of bounds.".format(i, j))

    if i == j:
        return i
    # (23, 32) -> 4, (13, 31) -> 5, (12, 21) -> 6
    return 6 - i - j


def full_to_voigt(C):
    '''Converts a 3x3x3x3 elastic tensor <C> to its 6x6 Voigt matrix.
    '''

    C = np.asarray(C, dtype=float)
    if C.shape != (3, 3, 3, 3):
        raise ValueError("Elastic tensor must be 3x3x3x3, not {}.".format(C.shape))

    Cv = np.zeros((6, 6))
    for I, (i, j) in enumerate(VOIGT_PAIRS):
        for J, (k, l) in enumerate(VOIGT_PAIRS):
            Cv[I, J] = C[i, j, k, l]

    return Cv


def voigt_to_full(Cv):
    '''Expands the 6x6 Voigt matrix <Cv> into the 3x3x3x3 elastic tensor.
    '''

    Cv = np.asarray(Cv, dtype=float)
    if Cv.shape != (6, 6):
        raise ValueError("Voigt matrix must be 6x6, not {}.".format(Cv.shape))

    C = np.zeros((3, 3, 3, 3))
    for i in range(3):
        for j in range(3):
            for k in range(3):
                for l in range(3):
                    C[i, j, k, l] = Cv[voigt_index(i, j), voigt_index(k, l)]

    return C


def strain_matrix(I, eps):
    '''Symmetric strain tensor with engineering strain <eps> in Voigt
    component <I>.
    '''

    i, j = VOIGT_PAIRS[I]
    e = np.zeros((3, 3))
    if i == j:
        e[i, i] = eps
    else:
        e[i, j] = e[j, i] = eps/2.

    return e


def voigt_moduli(calc, atoms, delta=1e-3, npoints=5):
    '''Calculates the Voigt elastic constants of <atoms> using the calculator
    <calc>. Each of the six strain components is varied over <npoints> values
    in [-<delta>, <delta>] and the elastic constants are the slopes of the
    resulting stresses. Atoms are not relaxed at each strain, so this gives
    the clamped-ion moduli.
    '''

    if calc is None:
        raise ValueError("A calculator is required to compute elastic moduli.")
    if npoints < 2:
        raise ValueError("Need at least two strains to fit elastic moduli.")

    base = atoms.copy()
    base.set_pbc(True)
    cell0 = np.array(base.get_cell())

    strains = np.linspace(-delta, delta, npoints)
    Cv = np.zeros((6, 6))
    for J in range(6):
        stresses = []
        for eps in strains:
            strained = base.copy()
            F = np.eye(3) + strain_matrix(J, eps)
            strained.set_cell(np.dot(cell0, F.T), scale_atoms=True)
            strained.calc = calc
            stresses.append(strained.get_stress(voigt=True))

        stresses = np.array(stresses)
        for I in range(6):
            Cv[I, J] = linregress(strains, stresses[:, I]).slope

    logger.debug("Voigt moduli (GPa):\n%s", Cv*CONV_EV_TO_GPA)
    return Cv


def full_moduli(calc, atoms, delta=1e-3, npoints=5):
    '''As for <voigt_moduli>, but returns the full 3x3x3x3 elastic tensor.
    '''

    return voigt_to_full(voigt_moduli(calc, atoms, delta=delta, npoints=npoints))
