#  ___________________________________________________________________________
#
#  GenLP: Generator-based Linear Programming models
#  Copyright (c) 2025 The GenLP Developers
#  Portions derived from Pyomo, Copyright (c) 2008-2025 National Technology
#  and Engineering Solutions of Sandia, LLC.
#  This software is distributed under the 3-clause BSD License.
#  ___________________________________________________________________________

from genlp.core.expr.nodes import (
    ExpressionNode,
    Literal,
    Identifier,
    BinaryOp,
    UnaryOp,
    IndexAccess,
    FieldAccess,
    BracketAccess,
    VarRef,
    Wildcard,
    WILDCARD,
    Sum,
    Range,
    ListExpr,
    Relation,
    Generator,
    as_node,
    as_generators,
    symbols,
    var_family,
    sum_over,
    walk,
    transform,
    to_string,
)
from genlp.core.expr.numvalue import infinity, neg_infinity, is_unbounded, as_bound
from genlp.core.expr.polynomial import Polynomial
from genlp.core.expr.environment import BindingEnvironment
from genlp.core.expr.constants import ConstantEvaluator, NOT_CONSTANT
from genlp.core.expr.generators import GeneratorExpander
from genlp.core.expr.wildcard import WildcardResolver, contains_wildcard
from genlp.core.expr.reducer import ExpressionReducer
from genlp.core.expr.template import interpolate, template_symbols
