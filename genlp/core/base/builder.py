#  ___________________________________________________________________________
#
#  GenLP: Generator-based Linear Programming models
#  Copyright (c) 2025 The GenLP Developers
#  Portions derived from Pyomo, Copyright (c) 2008-2025 National Technology
#  and Engineering Solutions of Sandia, LLC.
#  This software is distributed under the 3-clause BSD License.
#  ___________________________________________________________________________

"""Top-level model statements: variable, constraint and objective
declarations driven by generator lists."""

__all__ = ['ModelBuilder']

import logging

from genlp.common.config import (
    Bool,
    ConfigDict,
    ConfigValue,
    document_kwargs_from_configdict,
)
from genlp.common.errors import NonNumericConstant
from genlp.common.log import is_debug_set
from genlp.common.timing import TicTocTimer
from genlp.core.base.constraint import Constraint
from genlp.core.base.model import ModelStore
from genlp.core.expr.constants import ConstantEvaluator
from genlp.core.expr.environment import BindingEnvironment
from genlp.core.expr.generators import GeneratorExpander
from genlp.core.expr.nodes import ExpressionNode, Identifier, Relation, as_generators
from genlp.core.expr.numvalue import Unbounded
from genlp.core.expr.reducer import ExpressionReducer
from genlp.core.expr.template import interpolate

logger = logging.getLogger('genlp.core')


def _family_name(family):
    if isinstance(family, Identifier):
        return family.name
    if not isinstance(family, str):
        raise TypeError(
            "Variable family names must be strings (received %s)"
            % (type(family).__name__,)
        )
    return family


class ModelBuilder(object):
    """Build a :py:class:`ModelStore` from generator-driven statements.

    Every statement takes a (possibly empty) list of generators.  The
    generators are expanded into one binding environment per point of
    their Cartesian product and the statement body is reduced once for
    each of them.  Statements are processed to completion before
    returning.  The model is not transactional: if a statement raises,
    the variables or constraints it created before the error remain in
    the model.

    Parameters
    ----------
    parameters: dict, optional
        The model parameters (constant data) visible to every statement

    name: str, optional
        The model name

    """

    CONFIG = ConfigDict('model builder')
    CONFIG.declare(
        'alternate_keys',
        ConfigValue(
            default=True,
            domain=Bool,
            description='Match mapping keys by their textual form',
            doc="""
            If True, a key that is not found verbatim is retried using
            its textual form (str() or the Enum member name), and a
            text key is matched against container keys with the same
            textual form.""",
        ),
    )
    CONFIG.declare(
        'sort_set_domains',
        ConfigValue(
            default=True,
            domain=Bool,
            description='Sort set and frozenset generator domains',
        ),
    )
    CONFIG.declare(
        'record_origin',
        ConfigValue(
            default=True,
            domain=Bool,
            description='Record the generator bindings of each variable',
        ),
    )
    CONFIG.declare(
        'constraint_prefix',
        ConfigValue(
            default='c',
            domain=str,
            description='Prefix of generated constraint names',
        ),
    )
    CONFIG.declare(
        'warn_constant_constraints',
        ConfigValue(
            default=True,
            domain=Bool,
            description='Log a warning for constraints without variables',
        ),
    )

    @document_kwargs_from_configdict(CONFIG)
    def __init__(self, parameters=None, name=None, **options):
        self.config = config = self.CONFIG(options)
        self.model = ModelStore(name, config.constraint_prefix)
        self.env = BindingEnvironment(parameters)
        self.evaluator = ConstantEvaluator(alternate_keys=config.alternate_keys)
        self.expander = GeneratorExpander(
            self.evaluator, sort_set_domains=config.sort_set_domains
        )
        self.reducer = ExpressionReducer(self.model, self.evaluator, self.expander)

    def _bound(self, bound, env):
        if not isinstance(bound, ExpressionNode):
            return bound
        ans = self.reducer.reduce_rhs(bound, env)
        if ans.__class__ is Unbounded:
            return ans
        if not ans.is_constant():
            raise NonNumericConstant(ans, bound)
        return ans.constant

    def variables(
        self,
        family,
        generators=(),
        vtype='continuous',
        lb=None,
        ub=None,
        description=None,
    ):
        """Declare one variable for every combination of ``generators``

        The index of each instance is the tuple of generator values, in
        generator order.  ``lb``, ``ub`` and ``description`` are
        evaluated (interpolated) under each combination.

        Returns
        -------
        mapping
            The read-only index-to-Polynomial mapping of the family, or
            None if no instance was ever declared

        """
        family = _family_name(family)
        generators = as_generators(generators)
        symbols = [gen.symbol for gen in generators]
        record_origin = self.config.record_origin
        timer = TicTocTimer(logger=logger)
        count = 0
        for env in self.expander.iter_expand(generators, self.env):
            bindings = env.bindings
            self.model.new_variable(
                family,
                tuple(bindings[s] for s in symbols),
                vtype,
                self._bound(lb, env),
                self._bound(ub, env),
                interpolate(description, env),
                dict(bindings) if record_origin else None,
            )
            count += 1
        if is_debug_set(logger):
            timer.toc(
                "Declared %s instance(s) of variable '%s'",
                count,
                family,
                level=logging.DEBUG,
            )
        return self.model.get_variable_family(family)

    def constraints(self, relation, generators=(), name=None, description=None):
        """Declare one constraint for every combination of ``generators``

        ``relation`` is a :py:class:`Relation` (built with ``==``,
        ``<=`` or ``>=`` on expression nodes).  ``name`` and
        ``description`` are templates interpolated under each
        combination; without a name, constraints are named from the
        model's constraint counter.

        Returns
        -------
        list
            The names of the new constraints, in generation order

        """
        if not isinstance(relation, Relation):
            raise TypeError(
                "Constraints must be declared with a relation (==, <=, >=); "
                "received %s" % (type(relation).__name__,)
            )
        generators = as_generators(generators)
        reducer = self.reducer
        warn_constant = self.config.warn_constant_constraints
        timer = TicTocTimer(logger=logger)
        names = []
        for env in self.expander.iter_expand(generators, self.env):
            con = Constraint.from_relation(
                interpolate(name, env),
                reducer.reduce(relation.lhs, env),
                relation.op,
                reducer.reduce_rhs(relation.rhs, env),
                interpolate(description, env),
            )
            cname = self.model.add_constraint(con)
            if warn_constant and not con.is_trivial() and con.lhs.is_constant():
                logger.warning(
                    "Constraint '%s' contains no variables (0 %s %s)",
                    cname,
                    con.operator,
                    con.rhs,
                )
            names.append(cname)
        if is_debug_set(logger):
            timer.toc(
                "Generated %s constraint(s)", len(names), level=logging.DEBUG
            )
        return names

    def constraint(self, relation, name=None, description=None):
        """Declare a single constraint and return its name"""
        return self.constraints(relation, (), name, description)[0]

    def objective(self, expr, sense='minimize'):
        """Replace the objective with ``expr``"""
        self.model.set_objective(self.reducer.reduce(expr, self.env), sense)
        return self.model.objective

    def increment_objective(self, expr):
        self.model.increment_objective(self.reducer.reduce(expr, self.env))
        return self.model.objective

    def set_sense(self, sense):
        self.model.set_sense(sense)
