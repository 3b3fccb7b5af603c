#!/usr/bin/env python

from setuptools import setup, find_packages

setup(name='edgecle',
      version='0.1',
      description='Linear elasticity predictors for edge dislocations in FCC crystals',
      packages=find_packages(exclude=["docs", "tests"]),
      install_requires=['numpy>1.7',
                        'scipy',
                        'ase'],
      extras_require={
            'test': ['pytest'],
      }
     )
