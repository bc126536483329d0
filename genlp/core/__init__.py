#  ___________________________________________________________________________
#
#  GenLP: Generator-based Linear Programming models
#  Copyright (c) 2025 The GenLP Developers
#  Portions derived from Pyomo, Copyright (c) 2008-2025 National Technology
#  and Engineering Solutions of Sandia, LLC.
#  This software is distributed under the 3-clause BSD License.
#  ___________________________________________________________________________

from genlp.common.enums import (
    ObjectiveSense,
    VarType,
    ConstraintOperator,
    minimize,
    maximize,
)

from genlp.core.expr import (
    Range,
    ListExpr,
    Generator,
    WILDCARD,
    Polynomial,
    BindingEnvironment,
    infinity,
    neg_infinity,
    symbols,
    var_family,
    sum_over,
    to_string,
)

from genlp.core.base import ModelBuilder, ModelStore, Constraint, VarData
