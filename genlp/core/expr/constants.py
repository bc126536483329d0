#  ___________________________________________________________________________
#
#  GenLP: Generator-based Linear Programming models
#  Copyright (c) 2025 The GenLP Developers
#  Portions derived from Pyomo, Copyright (c) 2008-2025 National Technology
#  and Engineering Solutions of Sandia, LLC.
#  This software is distributed under the 3-clause BSD License.
#  ___________________________________________________________________________

"""Evaluation of expressions that do not reference variables.

The :py:class:`ConstantEvaluator` collapses literals, symbols, nested
container access and arithmetic on constants into concrete Python
values.  Whether an expression *can* be constant is decided purely
from its structure (:py:func:`is_constant_shape`): expressions that
contain a variable reference, a wildcard or a generator sum are never
evaluated here.

"""

import enum
from collections.abc import Mapping, Sequence

from genlp.common.errors import (
    DivisionByZero,
    MissingKey,
    NonNumericConstant,
)
from genlp.common.flags import FlagType
from genlp.common.numeric_types import is_numeric, value_is_integral
from genlp.core.expr.nodes import (
    BinaryOp,
    BracketAccess,
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
    Wildcard,
    to_string,
    walk,
)
from genlp.core.expr.numvalue import Unbounded


class NOT_CONSTANT(object, metaclass=FlagType):
    """Returned by :py:meth:`ConstantEvaluator.try_evaluate_constant`
    for expressions that reference variables"""

    pass


_non_constant_node_types = {VarRef, Wildcard, Sum}


def is_constant_shape(expr):
    """Return True if no node of ``expr`` can reference a variable"""
    return not any(node.__class__ in _non_constant_node_types for node in walk(expr))


#
# Key normalization
#


def _key_text(key):
    if isinstance(key, enum.Enum):
        return key.name
    return str(key)


def _exact_key(container, key):
    yield key


def _textual_key(container, key):
    if not isinstance(key, str):
        yield _key_text(key)


def _symbolic_key(container, key):
    if isinstance(key, str):
        for k in container.keys():
            if not isinstance(k, str) and _key_text(k) == key:
                yield k


#: Strategies tried, in order, to find a key in a mapping.  Each
#: strategy yields candidate keys; the first candidate present in the
#: container wins.
KEY_NORMALIZERS = (_exact_key, _textual_key, _symbolic_key)


def is_mapping(obj):
    return isinstance(obj, Mapping)


def is_sequence(obj):
    return isinstance(obj, Sequence) and not isinstance(obj, (str, bytes))


def enumerate_keys(container):
    """Return the keys of a mapping, or the positions of a sequence.

    Returns None if ``container`` is neither.
    """
    if is_mapping(container):
        return list(container.keys())
    if is_sequence(container):
        return list(range(len(container)))
    return None


class ConstantEvaluator(object):
    """Evaluate constant-shaped expressions against a BindingEnvironment.

    Parameters
    ----------
    alternate_keys: bool
        If True (the default), mapping lookups that miss on the exact
        key retry with the alternate textual / symbolic forms in
        :py:data:`KEY_NORMALIZERS`.

    """

    def __init__(self, alternate_keys=True):
        if alternate_keys:
            self.key_normalizers = KEY_NORMALIZERS
        else:
            self.key_normalizers = KEY_NORMALIZERS[:1]

    def try_evaluate_constant(self, expr, env):
        """Evaluate ``expr``, or return :py:class:`NOT_CONSTANT` if it
        references variables.

        Errors raised while evaluating a constant-shaped expression
        (unknown symbols, missing keys, ...) propagate to the caller.
        """
        if not is_constant_shape(expr):
            return NOT_CONSTANT
        return self.evaluate(expr, env)

    def evaluate(self, expr, env):
        try:
            handler = _eval_dispatcher[expr.__class__]
        except KeyError:
            raise TypeError(
                "Cannot evaluate object of type %s as a constant expression"
                % (type(expr).__name__,)
            ) from None
        return handler(self, expr, env)

    def evaluate_numeric(self, expr, env):
        """Evaluate ``expr`` and require a numeric result"""
        ans = self.evaluate(expr, env)
        if not is_numeric(ans):
            raise NonNumericConstant(ans, expr)
        return ans

    #
    # Container access
    #

    def access(self, expr, env):
        """Evaluate an access chain, returning ``(value, path)``

        ``path`` is the name of the outermost container followed by the
        keys traversed so far.
        """
        cls = expr.__class__
        if cls is BracketAccess:
            container, path = self.access(expr.container, env)
            key = self.evaluate(expr.key, env)
            path += (key,)
            return self.lookup(container, key, path), path
        if cls is FieldAccess:
            container, path = self.access(expr.container, env)
            path += (expr.name,)
            return self.lookup_field(container, expr.name, path), path
        if cls is IndexAccess:
            container, path = self.access(expr.container, env)
            position = self.evaluate(expr.position, env)
            path += (position,)
            return self.lookup_position(container, position, path), path
        if cls is Identifier:
            return env.resolve(expr.name), (expr.name,)
        return self.evaluate(expr, env), (to_string(expr),)

    def lookup(self, container, key, path):
        if is_mapping(container):
            for normalizer in self.key_normalizers:
                for candidate in normalizer(container, key):
                    try:
                        if candidate in container:
                            return container[candidate]
                    except TypeError:
                        raise MissingKey(path, reason="unhashable key") from None
            raise MissingKey(path)
        if is_sequence(container):
            return self.lookup_position(container, key, path)
        raise MissingKey(
            path,
            reason="container of type %s does not support key access"
            % (type(container).__name__,),
        )

    def lookup_field(self, container, name, path):
        if is_mapping(container):
            return self.lookup(container, name, path)
        try:
            return getattr(container, name)
        except AttributeError:
            raise MissingKey(
                path,
                reason="%s object has no field '%s'" % (type(container).__name__, name),
            ) from None

    def lookup_position(self, container, position, path):
        if not is_sequence(container):
            raise MissingKey(
                path,
                reason="container of type %s is not a sequence"
                % (type(container).__name__,),
            )
        if position.__class__ is bool or not value_is_integral(position):
            raise MissingKey(path, reason="sequence positions must be integers")
        position = int(position)
        if not 0 <= position < len(container):
            raise MissingKey(
                path,
                reason="position out of range for a sequence of length %s"
                % (len(container),),
            )
        return container[position]


#
# Handlers, keyed by node class
#


def _eval_literal(visitor, node, env):
    return node.value


def _eval_identifier(visitor, node, env):
    return env.resolve(node.name)


def _eval_access(visitor, node, env):
    return visitor.access(node, env)[0]


def _eval_binary(visitor, node, env):
    left = visitor.evaluate(node.left, env)
    if not is_numeric(left):
        raise NonNumericConstant(left, node)
    right = visitor.evaluate(node.right, env)
    if not is_numeric(right):
        raise NonNumericConstant(right, node)
    op = node.op
    if op == '+':
        return left + right
    if op == '-':
        return left - right
    if op == '*':
        return left * right
    if not right:
        raise DivisionByZero(node)
    return left / right


def _eval_unary(visitor, node, env):
    val = visitor.evaluate(node.operand, env)
    if val.__class__ is not Unbounded and not is_numeric(val):
        raise NonNumericConstant(val, node)
    if node.op == '-':
        return -val
    return val


def _eval_range(visitor, node, env):
    start = visitor.evaluate(node.start, env)
    stop = visitor.evaluate(node.stop, env)
    for val in (start, stop):
        if val.__class__ is bool or not value_is_integral(val):
            raise NonNumericConstant(val, node)
    return range(int(start), int(stop) + 1)


def _eval_list(visitor, node, env):
    return tuple(visitor.evaluate(item, env) for item in node.items)


def _eval_not_constant(visitor, node, env):
    raise TypeError(
        "The expression '%s' references variables and has no constant value"
        % (to_string(node),)
    )


def _eval_relation(visitor, node, env):
    raise TypeError(
        "The relation '%s' cannot be used as a value" % (to_string(node),)
    )


_eval_dispatcher = {
    Literal: _eval_literal,
    Identifier: _eval_identifier,
    BracketAccess: _eval_access,
    FieldAccess: _eval_access,
    IndexAccess: _eval_access,
    BinaryOp: _eval_binary,
    UnaryOp: _eval_unary,
    Range: _eval_range,
    ListExpr: _eval_list,
    VarRef: _eval_not_constant,
    Wildcard: _eval_not_constant,
    Sum: _eval_not_constant,
    Relation: _eval_relation,
}
