#  ___________________________________________________________________________
#
#  GenLP: Generator-based Linear Programming models
#  Copyright (c) 2025 The GenLP Developers
#  Portions derived from Pyomo, Copyright (c) 2008-2025 National Technology
#  and Engineering Solutions of Sandia, LLC.
#  This software is distributed under the 3-clause BSD License.
#  ___________________________________________________________________________

from genlp.core.base.var import VarData, process_bounds
from genlp.core.base.constraint import Constraint
from genlp.core.base.model import ModelStore
from genlp.core.base.builder import ModelBuilder
from genlp.core.base.label import NumericLabeler, TextLabeler, cpxlp_label_from_name
