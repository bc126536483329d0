#  ___________________________________________________________________________
#
#  GenLP: Generator-based Linear Programming models
#  Copyright (c) 2025 The GenLP Developers
#  Portions derived from Pyomo, Copyright (c) 2008-2025 National Technology
#  and Engineering Solutions of Sandia, LLC.
#  This software is distributed under the 3-clause BSD License.
#  ___________________________________________________________________________

"""
GenLP compiles generator-based declarations of variables, constraints
and objectives into sparse linear models.

genlp.version provides a mechanism for managing stuff that is related to
releases of the entire GenLP software.
"""

from genlp.version.info import version, version_info, __version__
