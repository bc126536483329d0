#  ___________________________________________________________________________
#
#  GenLP: Generator-based Linear Programming models
#  Copyright (c) 2025 The GenLP Developers
#  Portions derived from Pyomo, Copyright (c) 2008-2025 National Technology
#  and Engineering Solutions of Sandia, LLC.
#  This software is distributed under the 3-clause BSD License.
#  ___________________________________________________________________________

"""This module provides standard :py:class:`enum.Enum` definitions used in
GenLP, along with additional utilities for working with custom Enums

Utilities:

.. autosummary::

   NamedIntEnum

Standard Enums:

.. autosummary::

   ObjectiveSense
   VarType
   ConstraintOperator

"""

import enum


class NamedIntEnum(enum.IntEnum):
    """An extended version of :py:class:`enum.IntEnum` that supports
    creating members by name as well as value.

    """

    @classmethod
    def _missing_(cls, value):
        for member in cls:
            if member.name == value:
                return member
        return None

    def __str__(self):
        return self.name


class ObjectiveSense(NamedIntEnum):
    """Flag indicating if an objective is minimizing (1) or maximizing (-1).

    While the numeric values are arbitrary, the LP writer relies on
    this particular choice of value.  These values are also consistent
    with some solvers (notably Gurobi).

    """

    minimize = 1
    maximize = -1


class VarType(NamedIntEnum):
    """The domain of a decision variable"""

    continuous = 0
    integer = 1
    binary = 2


class ConstraintOperator(enum.Enum):
    """Comparison operator of a linear constraint

    Members can be created from the operator text (``'<='``) or from
    the member name (``'le'``).

    """

    eq = '=='
    le = '<='
    ge = '>='

    @classmethod
    def _missing_(cls, value):
        if value == '=':
            return cls.eq
        for member in cls:
            if member.name == value:
                return member
        return None

    def __str__(self):
        return self.value


minimize = ObjectiveSense.minimize
maximize = ObjectiveSense.maximize
