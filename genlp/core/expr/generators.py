#  ___________________________________________________________________________
#
#  GenLP: Generator-based Linear Programming models
#  Copyright (c) 2025 The GenLP Developers
#  Portions derived from Pyomo, Copyright (c) 2008-2025 National Technology
#  and Engineering Solutions of Sandia, LLC.
#  This software is distributed under the 3-clause BSD License.
#  ___________________________________________________________________________

import logging
from collections.abc import Iterable, Mapping, Set

from genlp.common.errors import InvalidGeneratorDomain
from genlp.core.expr.constants import ConstantEvaluator, is_constant_shape
from genlp.core.expr.nodes import as_generators
from genlp.core.expr.numvalue import Unbounded

logger = logging.getLogger(__name__)


class GeneratorExpander(object):
    """Expand a list of generators into binding environments.

    The expansion is the Cartesian product of the generator domains in
    declaration order, with the rightmost generator varying fastest::

        [('i', Range(1, 2)), ('j', ['a', 'b'])]

    produces the bindings ``(1, 'a'), (1, 'b'), (2, 'a'), (2, 'b')``.
    Each domain is evaluated under the bindings of the generators to
    its left, so later domains may depend on earlier symbols.

    Parameters
    ----------
    evaluator: ConstantEvaluator, optional
        The evaluator used to resolve domain expressions

    sort_set_domains: bool
        If True (the default), unordered domains (sets) are enumerated
        in sorted order when their elements are mutually comparable.

    """

    def __init__(self, evaluator=None, sort_set_domains=True):
        if evaluator is None:
            evaluator = ConstantEvaluator()
        self.evaluator = evaluator
        self.sort_set_domains = sort_set_domains

    def expand(self, generators, env):
        """Return the list of environments, one per combination"""
        return list(self.iter_expand(generators, env))

    def iter_expand(self, generators, env):
        generators = as_generators(generators)
        if not generators:
            yield env
            return
        yield from self._expand(generators, 0, env)

    def _expand(self, generators, level, env):
        symbol, domain = generators[level]
        values = self.domain_values(symbol, domain, env)
        last = level + 1 == len(generators)
        for val in values:
            sub_env = env.overlay(symbol, val)
            if last:
                yield sub_env
            else:
                yield from self._expand(generators, level + 1, sub_env)

    def domain_values(self, symbol, domain, env):
        """Evaluate a generator domain into an ordered list of values"""
        if not is_constant_shape(domain):
            # variables, wildcards and sums never have a constant value
            raise InvalidGeneratorDomain(symbol, domain)
        value = self.evaluator.evaluate(domain, env)
        values = self.enumerate_domain(symbol, value)
        if not values:
            logger.debug("Generator '%s' has an empty domain", symbol)
        return values

    def enumerate_domain(self, symbol, value):
        if isinstance(value, (str, bytes)) or value.__class__ is Unbounded:
            raise InvalidGeneratorDomain(symbol, value)
        if isinstance(value, Mapping):
            return list(value.keys())
        if isinstance(value, Set):
            values = list(value)
            if self.sort_set_domains:
                try:
                    values = sorted(values)
                except TypeError:
                    pass
            return values
        if isinstance(value, Iterable):
            return list(value)
        raise InvalidGeneratorDomain(symbol, value)
