#  ___________________________________________________________________________
#
#  GenLP: Generator-based Linear Programming models
#  Copyright (c) 2025 The GenLP Developers
#  Portions derived from Pyomo, Copyright (c) 2008-2025 National Technology
#  and Engineering Solutions of Sandia, LLC.
#  This software is distributed under the 3-clause BSD License.
#  ___________________________________________________________________________

__all__ = ['VarData', 'process_bounds', 'index_name']

import enum

from genlp.common.enums import VarType
from genlp.common.numeric_types import value_is_integral
from genlp.core.expr.numvalue import Unbounded, as_bound, infinity, neg_infinity


def _index_text(val):
    if isinstance(val, enum.Enum):
        return val.name
    return str(val)


def index_name(family, index):
    """Return the display name of one variable instance

    ``x`` for a scalar variable, otherwise ``x[1,2]``.
    """
    if not index:
        return family
    return '%s[%s]' % (family, ','.join(_index_text(i) for i in index))


def process_bounds(vtype, lb=None, ub=None):
    """Validate and normalize the bounds of a variable

    Returns ``(lb, ub)`` where missing or infinite bounds are replaced
    by :py:data:`neg_infinity` / :py:data:`infinity`.

    """
    vtype = VarType(vtype)
    if vtype is VarType.binary:
        lb = as_bound(lb, 0)
        ub = as_bound(ub, 1)
        if lb.__class__ is Unbounded or ub.__class__ is Unbounded or lb < 0 or ub > 1:
            raise ValueError(
                "Bounds (%s, %s) of a binary variable must lie within [0, 1]"
                % (lb, ub)
            )
    else:
        lb = as_bound(lb, neg_infinity)
        ub = as_bound(ub, infinity)
    if lb is infinity:
        raise ValueError("The lower bound of a variable cannot be +inf")
    if ub is neg_infinity:
        raise ValueError("The upper bound of a variable cannot be -inf")
    if vtype is not VarType.continuous:
        for bnd in (lb, ub):
            if bnd.__class__ is not Unbounded and not value_is_integral(bnd):
                raise ValueError(
                    "Bound %s of a %s variable is not integral" % (bnd, vtype)
                )
    if float(lb) > float(ub):
        raise ValueError(
            "The lower bound (%s) is greater than the upper bound (%s)" % (lb, ub)
        )
    return lb, ub


class VarData(object):
    """One decision variable: the instance ``index`` of ``family``.

    VarData objects are created by the model store and are not modified
    afterwards.  ``origin`` optionally records the generator bindings
    that produced the instance.

    """

    __slots__ = (
        'name',
        'family',
        'index',
        'vtype',
        'lb',
        'ub',
        'description',
        'origin',
    )

    def __init__(
        self,
        family,
        index=(),
        vtype=VarType.continuous,
        lb=None,
        ub=None,
        description=None,
        origin=None,
    ):
        self.family = family
        self.index = tuple(index)
        self.name = index_name(family, self.index)
        self.vtype = VarType(vtype)
        self.lb, self.ub = process_bounds(self.vtype, lb, ub)
        self.description = description
        self.origin = origin

    def __repr__(self):
        return 'VarData(%s, %s, lb=%s, ub=%s)' % (self.name, self.vtype, self.lb, self.ub)

    @property
    def bounds(self):
        return self.lb, self.ub

    def has_lb(self):
        return self.lb.__class__ is not Unbounded

    def has_ub(self):
        return self.ub.__class__ is not Unbounded

    def is_continuous(self):
        return self.vtype is VarType.continuous

    def is_integer(self):
        """Returns True when the domain is a contiguous integer range
        (binary variables included)."""
        return self.vtype is not VarType.continuous

    def is_binary(self):
        return self.vtype is VarType.binary
