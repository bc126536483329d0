#  ___________________________________________________________________________
#
#  GenLP: Generator-based Linear Programming models
#  Copyright (c) 2025 The GenLP Developers
#  Portions derived from Pyomo, Copyright (c) 2008-2025 National Technology
#  and Engineering Solutions of Sandia, LLC.
#  This software is distributed under the 3-clause BSD License.
#  ___________________________________________________________________________

import logging

from genlp.common.errors import (
    DeveloperError,
    DivisionByNonConstant,
    DivisionByZero,
    InvalidIndex,
    NonlinearExpression,
    NonNumericConstant,
    UndeclaredVariable,
)
from genlp.common.numeric_types import is_numeric
from genlp.core.expr.constants import ConstantEvaluator, is_constant_shape
from genlp.core.expr.generators import GeneratorExpander
from genlp.core.expr.nodes import (
    BinaryOp,
    BracketAccess,
    ExpressionNode,
    FieldAccess,
    Identifier,
    IndexAccess,
    ListExpr,
    Literal,
    Range,
    Relation,
    Sum,
    UnaryOp,
    VarRef,
    to_string,
)
from genlp.core.expr.numvalue import as_bound, is_unbounded
from genlp.core.expr.polynomial import Polynomial
from genlp.core.expr.wildcard import WildcardResolver, contains_wildcard

logger = logging.getLogger(__name__)


def _numeric_polynomial(value, expr):
    if value.__class__ is bool:
        value = int(value)
    elif not is_numeric(value) or is_unbounded(value):
        raise NonNumericConstant(value, expr)
    return Polynomial.const(value)


class ExpressionReducer(object):
    """Reduce expression trees to :py:class:`Polynomial` objects.

    Dispatch is structural and follows a fixed precedence:

    1. numeric / boolean literals become constants;
    2. variable references without wildcards are looked up in the
       model store (:py:class:`UndeclaredVariable` if the instance is
       missing);
    3. any expression with a free wildcard is expanded by the
       :py:class:`WildcardResolver`;
    4. ``+ - * /`` combine the reduced operands (division only by a
       nonzero constant, multiplication only when one side is
       constant);
    5. unary negation scales by -1;
    6. generator sums are expanded and added;
    7. everything else (symbols, container access, ranges) is handed
       to the :py:class:`ConstantEvaluator` and must be numeric.

    Parameters
    ----------
    store: ModelStore
        The model whose variables are referenced.  The reducer only
        reads from it.

    evaluator: ConstantEvaluator, optional

    expander: GeneratorExpander, optional

    """

    def __init__(self, store, evaluator=None, expander=None):
        self.store = store
        if evaluator is None:
            evaluator = ConstantEvaluator()
        self.evaluator = evaluator
        if expander is None:
            expander = GeneratorExpander(evaluator)
        self.expander = expander
        self.wildcards = WildcardResolver(self)

    def reduce(self, expr, env):
        """Return the polynomial represented by ``expr`` under ``env``"""
        if not isinstance(expr, ExpressionNode):
            raise TypeError(
                "Cannot reduce object of type %s to a polynomial"
                % (type(expr).__name__,)
            )
        cls = expr.__class__
        if cls is not Literal and contains_wildcard(expr, free_only=True):
            return self.wildcards.reduce(expr, env)
        try:
            handler = _reduce_dispatcher[cls]
        except KeyError:
            raise DeveloperError(
                "Unexpected expression node type '%s' found while reducing "
                "'%s'" % (cls.__name__, to_string(expr))
            ) from None
        return handler(self, expr, env)

    def reduce_rhs(self, expr, env):
        """Reduce the right-hand side of a constraint.

        Returns the unbounded sentinel (see
        :py:mod:`genlp.core.expr.numvalue`) when ``expr`` is constant
        and evaluates to an infinite value; otherwise returns a
        Polynomial.  The sentinel is recognized before any arithmetic
        is attempted.
        """
        if is_constant_shape(expr):
            value = self.evaluator.evaluate(expr, env)
            if is_unbounded(value):
                return as_bound(value)
            return _numeric_polynomial(value, expr)
        return self.reduce(expr, env)

    def resolve_index(self, ref, env):
        """Evaluate the indices of a wildcard-free variable reference"""
        ans = []
        for idx in ref.indices:
            if not is_constant_shape(idx):
                raise InvalidIndex(ref.family, idx)
            ans.append(self.evaluator.evaluate(idx, env))
        return tuple(ans)


#
# Handlers, keyed by node class
#


def _reduce_literal(reducer, node, env):
    return _numeric_polynomial(node.value, node)


def _reduce_var_ref(reducer, node, env):
    index = reducer.resolve_index(node, env)
    ans = reducer.store.get_variable(node.family, index)
    if ans is None:
        raise UndeclaredVariable(node.family, index)
    return ans


def _reduce_binary(reducer, node, env):
    left = reducer.reduce(node.left, env)
    right = reducer.reduce(node.right, env)
    op = node.op
    if op == '+':
        return left.add(right)
    if op == '-':
        return left.subtract(right)
    if op == '*':
        if left.is_constant():
            return right.scale(left.constant)
        if right.is_constant():
            return left.scale(right.constant)
        raise NonlinearExpression(node)
    if not right.is_constant():
        raise DivisionByNonConstant(node)
    if not right.constant:
        raise DivisionByZero(node)
    return left.divide(right.constant)


def _reduce_unary(reducer, node, env):
    ans = reducer.reduce(node.operand, env)
    if node.op == '-':
        return ans.scale(-1)
    return ans


def _reduce_sum(reducer, node, env):
    if not node.generators:
        return reducer.reduce(node.body, env)
    ans = Polynomial()
    for sub_env in reducer.expander.iter_expand(node.generators, env):
        ans.append(reducer.reduce(node.body, sub_env))
    return ans


def _reduce_constant(reducer, node, env):
    return _numeric_polynomial(reducer.evaluator.evaluate(node, env), node)


def _reduce_relation(reducer, node, env):
    raise TypeError(
        "The relation '%s' cannot be reduced to a polynomial; reduce each "
        "side separately" % (to_string(node),)
    )


_reduce_dispatcher = {
    Literal: _reduce_literal,
    VarRef: _reduce_var_ref,
    BinaryOp: _reduce_binary,
    UnaryOp: _reduce_unary,
    Sum: _reduce_sum,
    Identifier: _reduce_constant,
    BracketAccess: _reduce_constant,
    FieldAccess: _reduce_constant,
    IndexAccess: _reduce_constant,
    Range: _reduce_constant,
    ListExpr: _reduce_constant,
    Relation: _reduce_relation,
}
