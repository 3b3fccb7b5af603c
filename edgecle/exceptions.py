#!/usr/bin/env python
'''Errors raised while setting up an edge dislocation cluster. None of them
are recoverable inside the pipeline; the caller must try again with corrected
input.
'''


class EdgeCLEError(Exception):
    '''Base class for all <edgecle> errors.'''


class StructureMismatch(EdgeCLEError, ValueError):
    '''The bulk structure of a species does not have the assumed lattice.'''


class InvalidSolverMode(EdgeCLEError, ValueError):
    '''Unknown choice of linear elasticity solution.'''


class NonRealDisplacement(EdgeCLEError, ArithmeticError):
    '''The anisotropic displacement field is not real (or not finite). Almost
    always caused by bad elastic moduli.
    '''


class MalformedBurgersVector(EdgeCLEError, ValueError):
    '''Burgers vector has components normal to the glide direction.'''


class ElasticSymmetryViolation(EdgeCLEError, ValueError):
    '''Elastic constants lack the symmetry required by the edge solution.'''


class ElasticStabilityViolation(EdgeCLEError, ValueError):
    '''Elastic constants violate the stability inequalities.'''
