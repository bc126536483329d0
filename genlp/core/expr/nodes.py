#  ___________________________________________________________________________
#
#  GenLP: Generator-based Linear Programming models
#  Copyright (c) 2025 The GenLP Developers
#  Portions derived from Pyomo, Copyright (c) 2008-2025 National Technology
#  and Engineering Solutions of Sandia, LLC.
#  This software is distributed under the 3-clause BSD License.
#  ___________________________________________________________________________

"""Expression tree nodes for model statements.

The node set is closed: every expression handed to the reducer is built
from the classes in this module.  Nodes support Python operators so
that statements read naturally::

    x, i, limit = symbols('x i limit')
    body = sum_over(x(i), ('i', Range(1, 4))) <= limit['calories']

"""

import collections

from genlp.common.enums import ConstraintOperator

__all__ = (
    'ExpressionNode',
    'Literal',
    'Identifier',
    'BinaryOp',
    'UnaryOp',
    'IndexAccess',
    'FieldAccess',
    'BracketAccess',
    'VarRef',
    'Wildcard',
    'WILDCARD',
    '_',
    'Sum',
    'Range',
    'ListExpr',
    'Relation',
    'Generator',
    'as_node',
    'as_generators',
    'symbols',
    'var_family',
    'sum_over',
    'walk',
    'transform',
    'to_string',
)


class ExpressionNode(object):
    """Base class for all expression nodes.

    Derived classes implement :py:meth:`args` (the child nodes, in a
    fixed order) and :py:meth:`create_node` (rebuild the node from a
    new tuple of children).

    """

    __slots__ = ()

    # Nodes overload __eq__ to build relations; keep identity hashing
    __hash__ = object.__hash__

    def args(self):
        return ()

    def create_node(self, args):
        return self

    def is_leaf(self):
        return not self.args()

    def __repr__(self):
        return '%s(%s)' % (self.__class__.__name__, to_string(self))

    def __str__(self):
        return to_string(self)

    def __iter__(self):
        raise TypeError(
            "'%s' object is not iterable (expression nodes are symbolic)"
            % (self.__class__.__name__,)
        )

    #
    # Arithmetic
    #

    def __add__(self, other):
        return BinaryOp('+', self, other)

    def __radd__(self, other):
        return BinaryOp('+', other, self)

    def __sub__(self, other):
        return BinaryOp('-', self, other)

    def __rsub__(self, other):
        return BinaryOp('-', other, self)

    def __mul__(self, other):
        return BinaryOp('*', self, other)

    def __rmul__(self, other):
        return BinaryOp('*', other, self)

    def __truediv__(self, other):
        return BinaryOp('/', self, other)

    def __rtruediv__(self, other):
        return BinaryOp('/', other, self)

    def __neg__(self):
        return UnaryOp('-', self)

    def __pos__(self):
        return UnaryOp('+', self)

    #
    # Relations
    #

    def __eq__(self, other):
        return Relation(ConstraintOperator.eq, self, other)

    def __le__(self, other):
        return Relation(ConstraintOperator.le, self, other)

    def __ge__(self, other):
        return Relation(ConstraintOperator.ge, self, other)

    def __lt__(self, other):
        raise TypeError("Strict inequalities are not supported in linear constraints")

    __gt__ = __lt__

    #
    # Access
    #

    def __getitem__(self, key):
        if key.__class__ is tuple:
            ans = self
            for k in key:
                ans = BracketAccess(ans, k)
            return ans
        return BracketAccess(self, key)

    def at(self, position):
        return IndexAccess(self, position)

    def field(self, name):
        return FieldAccess(self, name)


class Literal(ExpressionNode):
    """A concrete Python value"""

    __slots__ = ('value',)

    def __init__(self, value):
        self.value = value


class Identifier(ExpressionNode):
    """A symbol resolved through the binding environment.

    Calling an Identifier builds a reference to the variable family of
    the same name.
    """

    __slots__ = ('name',)

    def __init__(self, name):
        self.name = name

    def __call__(self, *indices):
        return VarRef(self.name, indices)


class BinaryOp(ExpressionNode):
    __slots__ = ('op', 'left', 'right')

    OPERATORS = ('+', '-', '*', '/')

    def __init__(self, op, left, right):
        if op not in self.OPERATORS:
            raise ValueError("Unsupported binary operator '%s'" % (op,))
        self.op = op
        self.left = as_node(left)
        self.right = as_node(right)

    def args(self):
        return (self.left, self.right)

    def create_node(self, args):
        return self.__class__(self.op, *args)


class UnaryOp(ExpressionNode):
    __slots__ = ('op', 'operand')

    OPERATORS = ('-', '+')

    def __init__(self, op, operand):
        if op not in self.OPERATORS:
            raise ValueError("Unsupported unary operator '%s'" % (op,))
        self.op = op
        self.operand = as_node(operand)

    def args(self):
        return (self.operand,)

    def create_node(self, args):
        return self.__class__(self.op, args[0])


class IndexAccess(ExpressionNode):
    """Positional access into a sequence (``seq.at(k)``)"""

    __slots__ = ('container', 'position')

    def __init__(self, container, position):
        self.container = as_node(container)
        self.position = as_node(position)

    def args(self):
        return (self.container, self.position)

    def create_node(self, args):
        return self.__class__(*args)


class FieldAccess(ExpressionNode):
    """Attribute or textual-key access (``obj.field``)"""

    __slots__ = ('container', 'name')

    def __init__(self, container, name):
        if not isinstance(name, str):
            raise TypeError("Field names must be strings (received %r)" % (name,))
        self.container = as_node(container)
        self.name = name

    def args(self):
        return (self.container,)

    def create_node(self, args):
        return self.__class__(args[0], self.name)


class BracketAccess(ExpressionNode):
    """Key access into a mapping, or integer index into a sequence"""

    __slots__ = ('container', 'key')

    def __init__(self, container, key):
        self.container = as_node(container)
        self.key = as_node(key)

    def args(self):
        return (self.container, self.key)

    def create_node(self, args):
        return self.__class__(*args)


class VarRef(ExpressionNode):
    """Reference to one (or, with wildcards, many) instances of a
    variable family"""

    __slots__ = ('family', 'indices')

    def __init__(self, family, indices=()):
        if isinstance(family, Identifier):
            family = family.name
        self.family = family
        if indices.__class__ is not tuple:
            indices = tuple(indices)
        self.indices = tuple(as_node(i) for i in indices)

    def args(self):
        return self.indices

    def create_node(self, args):
        return self.__class__(self.family, args)


class Wildcard(ExpressionNode):
    """The wildcard marker: "every matching value".  A singleton."""

    __slots__ = ()
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __reduce__(self):
        return (Wildcard, ())


WILDCARD = _ = Wildcard()


Generator = collections.namedtuple('Generator', ('symbol', 'domain'))
Generator.__doc__ = """One dimension of a Cartesian-product expansion.

``symbol`` is the name bound to each value of ``domain`` (an expression
that evaluates to an enumerable value).
"""


class Sum(ExpressionNode):
    """A generator comprehension: the sum of ``body`` over every
    combination of the generators.

    A Sum without generators scopes the wildcards in its body: they are
    resolved and expanded inside the Sum and are not visible to any
    enclosing expression.
    """

    __slots__ = ('body', 'generators')

    def __init__(self, body, generators=()):
        self.body = as_node(body)
        self.generators = as_generators(generators)

    def args(self):
        return (self.body,) + tuple(g.domain for g in self.generators)

    def create_node(self, args):
        return self.__class__(
            args[0],
            tuple(
                Generator(g.symbol, dom) for g, dom in zip(self.generators, args[1:])
            ),
        )


class Range(ExpressionNode):
    """Inclusive integer range ``start..stop``"""

    __slots__ = ('start', 'stop')

    def __init__(self, start, stop):
        self.start = as_node(start)
        self.stop = as_node(stop)

    def args(self):
        return (self.start, self.stop)

    def create_node(self, args):
        return self.__class__(*args)


class ListExpr(ExpressionNode):
    """A literal sequence whose items are expressions.

    Evaluates to a tuple, so it can serve both as a generator domain
    and as a (hashable) composite key.
    """

    __slots__ = ('items',)

    def __init__(self, items):
        self.items = tuple(as_node(i) for i in items)

    def args(self):
        return self.items

    def create_node(self, args):
        return self.__class__(args)


class Relation(ExpressionNode):
    """``lhs <op> rhs`` for constraint statements.  Not reducible."""

    __slots__ = ('op', 'lhs', 'rhs')

    def __init__(self, op, lhs, rhs):
        self.op = ConstraintOperator(op)
        self.lhs = as_node(lhs)
        self.rhs = as_node(rhs)

    def args(self):
        return (self.lhs, self.rhs)

    def create_node(self, args):
        return self.__class__(self.op, *args)

    def __bool__(self):
        raise TypeError(
            "Cannot convert the relation '%s' to bool.  Relations only "
            "describe constraints; compare nodes with 'is'." % (to_string(self),)
        )


def as_node(value):
    """Wrap a plain Python value in a :py:class:`Literal`"""
    if isinstance(value, ExpressionNode):
        return value
    return Literal(value)


def as_generators(generators):
    """Convert a sequence of ``(symbol, domain)`` pairs to Generators"""
    ans = []
    for gen in generators:
        symbol, domain = gen
        if isinstance(symbol, Identifier):
            symbol = symbol.name
        if not isinstance(symbol, str):
            raise TypeError("Generator symbols must be strings (received %r)" % (symbol,))
        ans.append(Generator(symbol, as_node(domain)))
    return tuple(ans)


def symbols(names):
    """Create Identifiers from a whitespace- or comma-separated string.

    Returns a single Identifier when only one name is given.
    """
    ans = tuple(Identifier(n) for n in names.replace(',', ' ').split())
    if len(ans) == 1:
        return ans[0]
    return ans


def var_family(name):
    """Return a handle for building references to a variable family"""
    return Identifier(name)


def sum_over(body, *generators):
    return Sum(body, generators)


def walk(expr, descend=None):
    """Iterate over the nodes of an expression, depth first (pre-order).

    If ``descend`` is given, the children of a node are only visited
    when ``descend(node)`` returns True.
    """
    stack = [expr]
    while stack:
        node = stack.pop()
        yield node
        if descend is not None and not descend(node):
            continue
        stack.extend(reversed(node.args()))


def transform(expr, fcn):
    """Rebuild an expression, replacing nodes.

    ``fcn(node)`` is called for every node before its children are
    visited and returns either a replacement node or None.  Children of
    the (possibly replaced) node are then transformed, and the node is
    only rebuilt when a child changed.
    """
    new = fcn(expr)
    node = expr if new is None else new
    args = node.args()
    if not args:
        return node
    new_args = tuple(transform(arg, fcn) for arg in args)
    if all(a is b for a, b in zip(new_args, args)):
        return node
    return node.create_node(new_args)


#
# String representation
#

_PRECEDENCE = {'+': 1, '-': 1, '*': 2, '/': 2}


def _literal_to_string(value):
    if isinstance(value, str):
        return repr(value)
    return str(value)


def _child_to_string(child, parent_prec, right=False, parent_op=None):
    ans = to_string(child)
    if child.__class__ is BinaryOp:
        prec = _PRECEDENCE[child.op]
        if prec < parent_prec or (right and prec == parent_prec and parent_op in '-/'):
            return '(' + ans + ')'
    return ans


def to_string(expr):
    """Render an expression in a compact, readable form"""
    cls = expr.__class__
    if cls is Literal:
        return _literal_to_string(expr.value)
    if cls is Identifier:
        return expr.name
    if cls is Wildcard:
        return '_'
    if cls is VarRef:
        return '%s(%s)' % (expr.family, ', '.join(to_string(i) for i in expr.indices))
    if cls is BinaryOp:
        prec = _PRECEDENCE[expr.op]
        return '%s %s %s' % (
            _child_to_string(expr.left, prec),
            expr.op,
            _child_to_string(expr.right, prec, True, expr.op),
        )
    if cls is UnaryOp:
        return expr.op + _child_to_string(expr.operand, 3)
    if cls is BracketAccess:
        return '%s[%s]' % (to_string(expr.container), to_string(expr.key))
    if cls is IndexAccess:
        return '%s.at(%s)' % (to_string(expr.container), to_string(expr.position))
    if cls is FieldAccess:
        return '%s.%s' % (to_string(expr.container), expr.name)
    if cls is Range:
        return '%s..%s' % (to_string(expr.start), to_string(expr.stop))
    if cls is ListExpr:
        return '[%s]' % (', '.join(to_string(i) for i in expr.items),)
    if cls is Sum:
        body = to_string(expr.body)
        if not expr.generators:
            return 'SUM(%s)' % (body,)
        return 'SUM(%s %s)' % (
            body,
            ' '.join(
                'for %s in %s' % (g.symbol, to_string(g.domain))
                for g in expr.generators
            ),
        )
    if cls is Relation:
        return '%s %s %s' % (to_string(expr.lhs), expr.op, to_string(expr.rhs))
    return "<%s>" % (cls.__name__,)
