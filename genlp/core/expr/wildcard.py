#  ___________________________________________________________________________
#
#  GenLP: Generator-based Linear Programming models
#  Copyright (c) 2025 The GenLP Developers
#  Portions derived from Pyomo, Copyright (c) 2008-2025 National Technology
#  and Engineering Solutions of Sandia, LLC.
#  This software is distributed under the 3-clause BSD License.
#  ___________________________________________________________________________

"""Resolution and expansion of wildcard patterns.

A *pattern* is either a variable-family reference (``x(i, _, _)``) or a
chain of container accesses (``cost[_][_]``).  The k-th free wildcard
of every pattern in an expression belongs to *slot* k, so in
``qty(_) * price[_]['cal']`` both wildcards denote the same food.

Only the leading slot is resolved at a time: its domain is inferred
from every pattern, each value is substituted for the first wildcard of
every pattern, and the substituted expression is reduced again.  Any
remaining wildcards are resolved by that nested reduction (filtered by
the values already chosen), which yields the Cartesian product over
all slots.

"""

import logging

from genlp.common.errors import (
    EmptyWildcardDomain,
    InvalidIndex,
    UnresolvableWildcard,
)
from genlp.common.log import is_debug_set
from genlp.core.expr.constants import (
    _key_text,
    enumerate_keys,
    is_constant_shape,
    is_sequence,
)
from genlp.core.expr.nodes import (
    BracketAccess,
    FieldAccess,
    IndexAccess,
    Literal,
    Sum,
    VarRef,
    Wildcard,
    to_string,
    transform,
    walk,
)
from genlp.core.expr.polynomial import Polynomial

logger = logging.getLogger(__name__)

_access_node_types = {BracketAccess, FieldAccess, IndexAccess}


def _not_a_sum(node):
    return node.__class__ is not Sum


def contains_wildcard(expr, free_only=False):
    """Return True if the wildcard marker appears in ``expr``.

    With ``free_only``, wildcards enclosed by a :py:class:`Sum` node
    (which scopes them) are ignored.
    """
    descend = _not_a_sum if free_only else None
    return any(node.__class__ is Wildcard for node in walk(expr, descend))


class _Site(object):
    """The first free wildcard of one pattern"""

    __slots__ = ('node', 'position')

    def __init__(self, node, position=None):
        # node: VarRef (position is the index position), or the
        # BracketAccess / IndexAccess whose key is the wildcard, or the
        # bare Wildcard itself
        self.node = node
        self.position = position

    def describe(self):
        node = self.node
        if node.__class__ is VarRef:
            return 'index %s of %s' % (self.position, to_string(node))
        return 'keys of %s' % (to_string(node.container),)

    def substitute(self, value):
        node = self.node
        if node.__class__ is VarRef:
            indices = list(node.indices)
            indices[self.position] = Literal(value)
            return VarRef(node.family, indices)
        return node.__class__(node.container, Literal(value))


def _collect_sites(node, sites):
    cls = node.__class__
    if cls is Sum:
        return
    if cls is Wildcard:
        sites.append(_Site(node))
        return
    if cls is VarRef:
        first = None
        for pos, idx in enumerate(node.indices):
            if idx.__class__ is Wildcard:
                if first is None:
                    first = pos
            else:
                _collect_sites(idx, sites)
        if first is not None:
            sites.append(_Site(node, first))
        return
    if cls in _access_node_types:
        chain = []
        while node.__class__ in _access_node_types:
            chain.append(node)
            node = node.container
        _collect_sites(node, sites)
        found = False
        # Walk the chain from the innermost access outward
        for acc in reversed(chain):
            if acc.__class__ is FieldAccess:
                continue
            key = acc.key if acc.__class__ is BracketAccess else acc.position
            if key.__class__ is Wildcard:
                if not found:
                    sites.append(_Site(acc))
                    found = True
            else:
                _collect_sites(key, sites)
        return
    for arg in node.args():
        _collect_sites(arg, sites)


def leading_sites(expr):
    """Return the sites making up the leading wildcard slot of ``expr``"""
    sites = []
    _collect_sites(expr, sites)
    return sites


class WildcardResolver(object):
    """Infer wildcard domains and expand wildcard expressions into sums.

    Parameters
    ----------
    reducer: ExpressionReducer
        Used to reduce each substituted expression; also provides the
        model store and the constant evaluator.

    """

    def __init__(self, reducer):
        self.reducer = reducer

    def reduce(self, expr, env):
        """Sum ``expr`` over every value of its leading wildcard slot"""
        sites, members, domain = self._resolve(expr, env, self.reducer.store)
        return self._expand(expr, sites, members, domain, env)

    def resolve_domain(self, expr, env, store=None):
        """Return the ordered values of the leading wildcard slot.

        Raises
        ------
        UnresolvableWildcard
            if a wildcard appears outside of a pattern, or a pattern
            does not provide a domain
        EmptyWildcardDomain
            if the domains inferred from different patterns do not
            share any value
        """
        if store is None:
            store = self.reducer.store
        return self._resolve(expr, env, store)[2]

    def expand(self, expr, domain_values, env):
        """Substitute each value for the leading slot and sum the
        reduced results.

        The substitution is structural: the environment is passed on
        unchanged, and every site of the slot receives the same value.
        """
        return self._expand(expr, leading_sites(expr), None, domain_values, env)

    def _resolve(self, expr, env, store):
        sites = leading_sites(expr)
        if not sites:
            raise UnresolvableWildcard(expr, "no free wildcard")
        for site in sites:
            if site.node.__class__ is Wildcard:
                raise UnresolvableWildcard(
                    expr,
                    "wildcards may only appear as a variable index or a container key",
                )

        sources = [
            (site.describe(), self._site_domain(site, expr, env, store))
            for site in sites
        ]
        domain, members = self._intersect(expr, sources)
        if is_debug_set(logger):
            logger.debug(
                "Wildcard domain for '%s': %s", to_string(expr), list(domain)
            )
        return sites, members, domain

    def _expand(self, expr, sites, members, domain_values, env):
        # members[k] maps a domain value to the equivalent key of site k
        # (the same value, or the key with the same textual form)
        ans = Polynomial()
        for value in domain_values:
            if members is None:
                replacements = {id(site.node): site.substitute(value) for site in sites}
            else:
                replacements = {
                    id(site.node): site.substitute(member.match(value))
                    for site, member in zip(sites, members)
                }
            ans.append(
                self.reducer.reduce(
                    transform(expr, lambda node: replacements.get(id(node))), env
                )
            )
        return ans

    #
    # Domain inference
    #

    def _site_domain(self, site, expr, env, store):
        node = site.node
        if node.__class__ is VarRef:
            return self._family_domain(node, site.position, env, store)
        if not is_constant_shape(node.container):
            raise UnresolvableWildcard(
                expr,
                "the container '%s' references variables" % (to_string(node.container),),
            )
        container = self.reducer.evaluator.evaluate(node.container, env)
        if node.__class__ is IndexAccess:
            keys = list(range(len(container))) if is_sequence(container) else None
        else:
            keys = enumerate_keys(container)
        if keys is None:
            raise UnresolvableWildcard(
                expr,
                "'%s' is a %s, not a mapping or sequence"
                % (to_string(node.container), type(container).__name__),
            )
        return keys

    def _family_domain(self, ref, position, env, store):
        family = store.get_variable_family(ref.family)
        if not family:
            # A wholly absent family contributes an empty domain
            return []
        arity = len(ref.indices)
        fixed = []
        evaluator = self.reducer.evaluator
        for pos, idx in enumerate(ref.indices):
            if pos == position or contains_wildcard(idx, free_only=True):
                continue
            if not is_constant_shape(idx):
                raise InvalidIndex(ref.family, idx)
            fixed.append((pos, evaluator.evaluate(idx, env)))
        values = {}
        for index in family:
            if len(index) != arity:
                continue
            if all(index[pos] == val for pos, val in fixed):
                values[index[position]] = None
        return list(values)

    def _intersect(self, expr, sources):
        """Return ``(domain, members)``: the values shared by every
        source, in the order of the first source, and one membership
        map per source"""
        if all(not values for _, values in sources):
            # Sum over nothing
            return [], None
        if any(not values for _, values in sources):
            raise EmptyWildcardDomain(expr, sources)
        alternate = len(self.reducer.evaluator.key_normalizers) > 1
        members = [_Membership(values, alternate) for _, values in sources]
        domain = sources[0][1]
        for member in members[1:]:
            domain = [v for v in domain if v in member]
        if not domain:
            raise EmptyWildcardDomain(expr, sources)
        if any(len(values) != len(domain) for _, values in sources):
            logger.debug(
                "Wildcard sources for '%s' disagree; using their "
                "intersection %s (from %s)",
                to_string(expr),
                domain,
                '; '.join('%s -> %s' % (src, list(vals)) for src, vals in sources),
            )
        return domain, members


class _Membership(object):
    """The domain values of one wildcard site, optionally matched by
    the textual form of keys"""

    __slots__ = ('values', 'texts')

    def __init__(self, values, alternate):
        try:
            self.values = set(values)
        except TypeError:
            self.values = list(values)
        self.texts = {}
        if alternate:
            for v in reversed(values):
                self.texts[_key_text(v)] = v

    def _exact(self, value):
        try:
            return value in self.values
        except TypeError:
            return False

    def __contains__(self, value):
        return self._exact(value) or _key_text(value) in self.texts

    def match(self, value):
        """Return this site's value equivalent to ``value``"""
        if self._exact(value):
            return value
        return self.texts[_key_text(value)]
