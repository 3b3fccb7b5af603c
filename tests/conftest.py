import numpy as np
import pytest

from ase.calculators.calculator import Calculator, all_changes

from edgecle.atomic.crystal import fcc_edge_plane

# cubic elastic constants of roughly the magnitude of Cu, in eV/ang**3
CU_CV = np.array([[1.05, 0.755, 0.755, 0., 0., 0.],
                  [0.755, 1.05, 0.755, 0., 0., 0.],
                  [0.755, 0.755, 1.05, 0., 0., 0.],
                  [0., 0., 0., 0.47, 0., 0.],
                  [0., 0., 0., 0., 0.47, 0.],
                  [0., 0., 0., 0., 0., 0.47]])


class LinearElasticCalculator(Calculator):
    '''Stress is exactly Cv : strain, measured against <reference_cell>.'''

    implemented_properties = ['energy', 'stress']

    def __init__(self, Cv, reference_cell, **kwargs):
        Calculator.__init__(self, **kwargs)
        self.Cv = np.asarray(Cv, dtype=float)
        self.cell0 = np.array(reference_cell, dtype=float)

    def calculate(self, atoms=None, properties=['energy'],
                  system_changes=all_changes):
        Calculator.calculate(self, atoms, properties, system_changes)
        # cell = cell0 . F^T
        F = np.linalg.solve(self.cell0, np.array(self.atoms.get_cell())).T
        eps = 0.5*(F + F.T) - np.eye(3)
        e = np.array([eps[0, 0], eps[1, 1], eps[2, 2],
                      2*eps[1, 2], 2*eps[0, 2], 2*eps[0, 1]])
        stress = np.dot(self.Cv, e)
        self.results['stress'] = stress
        self.results['energy'] = 0.5*self.atoms.get_volume()*np.dot(e, stress)


@pytest.fixture
def cu_calc():
    unit = fcc_edge_plane('Cu')
    return LinearElasticCalculator(CU_CV, unit.atoms.get_cell())


@pytest.fixture
def cu_cv():
    return CU_CV.copy()
