#  ___________________________________________________________________________
#
#  GenLP: Generator-based Linear Programming models
#  Copyright (c) 2025 The GenLP Developers
#  Portions derived from Pyomo, Copyright (c) 2008-2025 National Technology
#  and Engineering Solutions of Sandia, LLC.
#  This software is distributed under the 3-clause BSD License.
#  ___________________________________________________________________________

from . import log
from . import config, timing
from .errors import DeveloperError
