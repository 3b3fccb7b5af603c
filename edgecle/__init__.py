#!/usr/bin/env python
'''
edgecle
=======

edgecle builds linear elasticity predictor configurations for straight edge
dislocations in FCC crystals. A unit cell oriented with the Burgers vector
along x and the dislocation line along z is tiled into a cluster, and atoms
are displaced by the continuum linear elasticity (CLE) field of the
dislocation, using either the isotropic solution or the anisotropic solution
of Hirth and Lothe. The resulting cluster is intended as the starting point
for an atomistic relaxation.

subpackages:
atomic
    Unit cell construction, displacement fields, elastic constants and
    cluster setup
utilities
    Control file handling
'''

import logging

logging.getLogger(__name__).addHandler(logging.NullHandler())
