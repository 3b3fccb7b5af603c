#!/usr/bin/env python
'''Handles the control file for setting up an edge dislocation cluster. All
cards are read from the &edge namelist, eg.

&edge {
    species = Cu;
    radius = 10.0;
    cle = anisotropic;
    calculator = emt;
};;
'''

import logging

from ase.calculators.emt import EMT

from edgecle.atomic import rodSetup as rs
from edgecle.utilities.control_functions import control_file, control_lines, \
                                                change_type, to_bool, format_control

logger = logging.getLogger(__name__)

# calculators that can be used to compute elastic constants
supported_calculators = {'none': None,
                         'emt': EMT}


def to_calculator(in_str):
    '''Converts the name of a calculator to an ASE calculator (or None).
    '''

    try:
        calc_type = supported_calculators[in_str.lower()]
    except KeyError:
        raise ValueError("{} is not a supported calculator.".format(in_str))

    return calc_type() if calc_type is not None else None


def to_poisson(in_str):
    '''Poisson's ratio, or None if it is to be derived from the elastic
    constants.
    '''

    if in_str.lower() == 'none':
        return None

    return float(in_str)


# cards for the <&edge> namelist. If the default value of a card is <None>,
# the card is deemed "mission critical" and the program will abort if the
# user does not provide a value.
edge_cards = (('species', {'default': None, 'type': str}),
              ('radius', {'default': None, 'type': float}),
              ('truncate', {'default': True, 'type': to_bool}),
              ('cle', {'default': 'isotropic', 'type': str}),
              ('poisson', {'default': 0.25, 'type': to_poisson}),
              ('tol', {'default': 1e-4, 'type': float}),
              ('strict', {'default': False, 'type': to_bool}),
              ('calculator', {'default': None, 'type': to_calculator})
             )

# cards that may legitimately be <None> after processing
optional_cards = ('calculator',)


def handle_edge_control(param_dict):
    '''Handle each possible card in the &edge namelist, converting values to
    the correct type and filling in defaults.
    '''

    if 'edge' not in param_dict:
        raise ValueError("Control file has no &edge namelist.")

    for card, card_info in edge_cards:
        if card in param_dict['edge']:
            change_type(param_dict, 'edge', card, card_info['type'])
        elif card_info['default'] is None and card not in optional_cards:
            raise ValueError("No value supplied for mission-critical " +
                                         "variable {}.".format(card))
        else:
            param_dict['edge'][card] = card_info['default']

    unknown = set(param_dict['edge']) - set(card for card, _ in edge_cards)
    if unknown:
        logger.warning("Ignoring unknown cards in &edge: %s", sorted(unknown))


class EdgeSim(object):
    '''Sets up an edge dislocation cluster from a control file.
    '''

    def __init__(self, filename=None, lines=None):
        if filename is not None:
            self.sim = control_file(filename)
        elif lines is not None:
            self.sim = control_lines(lines)
        else:
            raise ValueError("Either <filename> or <lines> must be given.")

        handle_edge_control(self.sim)
        self.edge = lambda card: self.sim['edge'][card]
        logger.debug("Control parameters:\n%s", format_control(self.sim))

    def run(self):
        '''Builds the cluster. Returns the atoms and the core position.
        '''

        logger.info("Setting up %s edge dislocation in %s (R = %.2f)",
                    self.edge('cle'), self.edge('species'), self.edge('radius'))

        return rs.fcc_edge_geom(self.edge('species'), self.edge('radius'),
                                truncate=self.edge('truncate'),
                                cle=self.edge('cle'),
                                nu=self.edge('poisson'),
                                calc=self.edge('calculator'),
                                TOL=self.edge('tol'),
                                strict=self.edge('strict'))
