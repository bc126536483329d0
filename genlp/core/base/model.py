#  ___________________________________________________________________________
#
#  GenLP: Generator-based Linear Programming models
#  Copyright (c) 2025 The GenLP Developers
#  Portions derived from Pyomo, Copyright (c) 2008-2025 National Technology
#  and Engineering Solutions of Sandia, LLC.
#  This software is distributed under the 3-clause BSD License.
#  ___________________________________________________________________________

__all__ = ['ModelStore']

import logging
from types import MappingProxyType

from genlp.common.enums import ObjectiveSense, VarType
from genlp.common.errors import DuplicateConstraintName, DuplicateVariable
from genlp.core.base.constraint import Constraint
from genlp.core.base.var import VarData
from genlp.core.expr.polynomial import Polynomial

logger = logging.getLogger('genlp.core')


class ModelStore(object):
    """The optimization problem under construction.

    The store owns the variable families, the constraints, and the
    objective.  It is a plain mutable object: statements add to it one
    at a time and the reduction pipeline only reads from it.

    Parameters
    ----------
    name: str, optional
        Name written in serialized output

    constraint_prefix: str
        Prefix of the automatically generated constraint names

    """

    def __init__(self, name=None, constraint_prefix='c'):
        self.name = name
        self.constraint_prefix = constraint_prefix
        # family name -> {index tuple: Polynomial}
        self._families = {}
        # display name -> VarData
        self._vars = {}
        self._constraints = {}
        self._var_counter = 0
        self._constraint_counter = 0
        self._objective = Polynomial()
        self._sense = ObjectiveSense.minimize

    def __str__(self):
        return 'ModelStore(%s: %s variables, %s constraints)' % (
            self.name,
            self.num_variables,
            self.num_constraints,
        )

    #
    # Variables
    #

    def new_variable(
        self,
        family,
        index=(),
        vtype=VarType.continuous,
        lb=None,
        ub=None,
        description=None,
        origin=None,
    ):
        """Register one instance of a variable family.

        Returns the :py:class:`Polynomial` referencing the new variable.

        Raises
        ------
        DuplicateVariable
            if ``(family, index)`` is already registered, or if another
            variable already uses the same display name

        """
        index = tuple(index)
        members = self._families.get(family)
        if members is not None and index in members:
            raise DuplicateVariable(family, index)
        data = VarData(family, index, vtype, lb, ub, description, origin)
        if data.name in self._vars:
            raise DuplicateVariable(family, index, data.name)
        if members is None:
            members = self._families[family] = {}
        ans = Polynomial.variable(data.name)
        members[index] = ans
        self._vars[data.name] = data
        self._var_counter += 1
        return ans

    def get_variable_family(self, name):
        """Return a read-only mapping from index to Polynomial, or None"""
        members = self._families.get(name)
        if members is None:
            return None
        return MappingProxyType(members)

    def get_variable(self, family, index=()):
        """Return the Polynomial for one variable instance, or None"""
        members = self._families.get(family)
        if members is None:
            return None
        try:
            return members.get(tuple(index))
        except TypeError:
            # unhashable index values can never have been registered
            return None

    def variable_data(self, name):
        return self._vars[name]

    def iter_variables(self):
        """Iterate over the :py:class:`VarData` in creation order"""
        return iter(self._vars.values())

    def variable_families(self):
        return list(self._families)

    @property
    def num_variables(self):
        return self._var_counter

    #
    # Constraints
    #

    def _next_constraint_name(self):
        while True:
            name = '%s%08d' % (self.constraint_prefix, self._constraint_counter)
            self._constraint_counter += 1
            if name not in self._constraints:
                return name

    def add_constraint(self, constraint, name=None):
        """Add a constraint to the model and return its name.

        ``constraint`` is either a :py:class:`Constraint` or a
        ``(lhs, operator, rhs)`` tuple of reduced sides.  When neither
        ``name`` nor the constraint carries a name, a name is generated
        from the constraint counter.

        """
        if not isinstance(constraint, Constraint):
            constraint = Constraint.from_relation(name, *constraint)
        if name is None:
            name = constraint.name
        if name is None:
            name = self._next_constraint_name()
        elif name in self._constraints:
            raise DuplicateConstraintName(name)
        if name != constraint.name:
            constraint = Constraint(
                name,
                constraint.lhs,
                constraint.operator,
                constraint.rhs,
                constraint.description,
            )
        self._constraints[name] = constraint
        return name

    def get_constraint(self, name):
        return self._constraints[name]

    def iter_constraints(self):
        return iter(self._constraints.values())

    @property
    def num_constraints(self):
        return len(self._constraints)

    #
    # Objective
    #

    @property
    def objective(self):
        return self._objective

    @property
    def sense(self):
        return self._sense

    def set_objective(self, poly, sense=None):
        if not self._objective.is_zero():
            logger.debug(
                "Replacing the objective of model '%s' (%s)",
                self.name,
                self._objective.to_string(),
            )
        self._objective = poly
        if sense is not None:
            self.set_sense(sense)

    def increment_objective(self, poly):
        self._objective = self._objective.add(poly)

    def set_sense(self, sense):
        try:
            self._sense = ObjectiveSense(sense)
        except ValueError:
            raise ValueError(
                "Invalid objective sense %r: expected one of %s"
                % (sense, ', '.join(str(s) for s in ObjectiveSense))
            ) from None
