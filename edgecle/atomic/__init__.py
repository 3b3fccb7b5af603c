'''Atomistic setup of edge dislocation clusters.
'''

from edgecle.atomic.rodSetup import fcc_edge_geom
from edgecle.atomic.crystal import fcc_edge_plane, check_fcc, check_bcc
