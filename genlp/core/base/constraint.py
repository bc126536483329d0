#  ___________________________________________________________________________
#
#  GenLP: Generator-based Linear Programming models
#  Copyright (c) 2025 The GenLP Developers
#  Portions derived from Pyomo, Copyright (c) 2008-2025 National Technology
#  and Engineering Solutions of Sandia, LLC.
#  This software is distributed under the 3-clause BSD License.
#  ___________________________________________________________________________

__all__ = ['Constraint']

from genlp.common.enums import ConstraintOperator
from genlp.common.errors import InfeasibleConstraintException
from genlp.core.expr.numvalue import Unbounded, infinity
from genlp.core.expr.polynomial import Polynomial


class Constraint(object):
    """A named linear constraint ``lhs <operator> rhs``.

    ``lhs`` is a :py:class:`Polynomial` with no constant term and
    ``rhs`` is a number or one of the unbounded sentinels.  Instances
    are normally created with :py:meth:`from_relation`.

    """

    __slots__ = ('name', 'lhs', 'operator', 'rhs', 'description')

    def __init__(self, name, lhs, operator, rhs, description=None):
        self.name = name
        self.lhs = lhs
        self.operator = ConstraintOperator(operator)
        self.rhs = rhs
        self.description = description

    @classmethod
    def from_relation(cls, name, lhs, operator, rhs, description=None):
        """Build a normalized constraint from the reduced sides of a relation

        Variable terms of ``rhs`` are moved to the left and the constant
        of ``lhs`` is moved to the right.  ``rhs`` may also be an
        unbounded sentinel, in which case the constant of ``lhs`` is
        dropped.

        Raises
        ------
        InfeasibleConstraintException
            if ``rhs`` is unbounded in a direction that cannot be
            satisfied (``== inf``, ``<= -inf``, ``>= inf``)

        """
        operator = ConstraintOperator(operator)
        if rhs.__class__ is Unbounded:
            if operator is ConstraintOperator.eq or (
                (operator is ConstraintOperator.le) ^ (rhs is infinity)
            ):
                raise InfeasibleConstraintException(
                    "Constraint '%s' can never be satisfied: '%s %s %s'"
                    % (name, lhs.to_string(), operator, rhs)
                )
            return cls(name, Polynomial(lhs.linear), operator, rhs, description)
        body = lhs.subtract(rhs)
        value = -body.constant
        body.constant = 0
        return cls(name, body, operator, value, description)

    def __repr__(self):
        return 'Constraint(%s: %s %s %s)' % (
            self.name,
            self.lhs.to_string(),
            self.operator,
            self.rhs,
        )

    def is_trivial(self):
        """True for ``<= inf`` and ``>= -inf``, which always hold"""
        return self.rhs.__class__ is Unbounded

    def bounds(self):
        """Return ``(lower, upper)`` with None for an absent bound"""
        if self.rhs.__class__ is Unbounded:
            return None, None
        if self.operator is ConstraintOperator.eq:
            return self.rhs, self.rhs
        if self.operator is ConstraintOperator.le:
            return None, self.rhs
        return self.rhs, None
