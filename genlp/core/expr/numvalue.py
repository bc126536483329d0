#  ___________________________________________________________________________
#
#  GenLP: Generator-based Linear Programming models
#  Copyright (c) 2025 The GenLP Developers
#  Portions derived from Pyomo, Copyright (c) 2008-2025 National Technology
#  and Engineering Solutions of Sandia, LLC.
#  This software is distributed under the 3-clause BSD License.
#  ___________________________________________________________________________

__all__ = ('Unbounded', 'infinity', 'neg_infinity', 'is_unbounded', 'as_bound')

import math

from genlp.common.errors import NonNumericConstant
from genlp.common.numeric_types import is_numeric


class Unbounded(object):
    """Sentinel for an infinite bound or an unbounded right-hand side.

    There are exactly two instances, :py:data:`infinity` and
    :py:data:`neg_infinity`.  They never participate in polynomial
    arithmetic; serializers test for them explicitly.

    """

    __slots__ = ('_sign',)

    def __new__(cls, sign=1):
        sign = 1 if sign > 0 else -1
        if sign > 0:
            inst = globals().get('infinity')
        else:
            inst = globals().get('neg_infinity')
        if inst is not None:
            return inst
        inst = super().__new__(cls)
        inst._sign = sign
        return inst

    @property
    def sign(self):
        return self._sign

    def __neg__(self):
        return neg_infinity if self._sign > 0 else infinity

    def __pos__(self):
        return self

    def __float__(self):
        return math.inf if self._sign > 0 else -math.inf

    def __eq__(self, other):
        return other.__class__ is Unbounded and other._sign == self._sign

    def __hash__(self):
        return hash((Unbounded, self._sign))

    def __reduce__(self):
        return (Unbounded, (self._sign,))

    def __repr__(self):
        return 'infinity' if self._sign > 0 else '-infinity'

    __str__ = __repr__


infinity = Unbounded(1)
neg_infinity = Unbounded(-1)


def is_unbounded(value):
    """Return True for the sentinels and for float infinities"""
    if value.__class__ is Unbounded:
        return True
    return value.__class__ is float and math.isinf(value)


def as_bound(value, default=None):
    """Normalize a bound: infinities become sentinels, None becomes `default`.

    Numbers are returned unchanged; anything else raises
    :py:class:`NonNumericConstant`.
    """
    if value is None:
        return default
    if value.__class__ is Unbounded:
        return value
    if not is_numeric(value):
        raise NonNumericConstant(value)
    if math.isinf(value):
        return infinity if value > 0 else neg_infinity
    if math.isnan(value):
        raise NonNumericConstant(value)
    return value
