#  ___________________________________________________________________________
#
#  GenLP: Generator-based Linear Programming models
#  Copyright (c) 2025 The GenLP Developers
#  Portions derived from Pyomo, Copyright (c) 2008-2025 National Technology
#  and Engineering Solutions of Sandia, LLC.
#  This software is distributed under the 3-clause BSD License.
#  ___________________________________________________________________________

"""
Script to generate the installer for genlp.
"""

import os
from setuptools import setup, find_packages


def import_genlp_module(*path):
    _module_globals = dict(globals())
    _module_globals['__name__'] = None
    _source = os.path.join(os.path.dirname(__file__), *path)
    with open(_source) as _FILE:
        exec(_FILE.read(), _module_globals)
    return _module_globals


def get_version():
    # Source genlp/version/info.py to get the version number
    return import_genlp_module('genlp', 'version', 'info.py')['__version__']


setup_kwargs = dict(
    name='genlp',
    description='Generator-based linear programming models compiled to LP files',
    license='BSD',
    python_requires='>=3.9',
    version=get_version(),
    install_requires=['ply'],
    extras_require={'tests': ['coverage', 'parameterized', 'pytest']},
    packages=find_packages(include=('genlp', 'genlp.*')),
)

setup(**setup_kwargs)
