#  ___________________________________________________________________________
#
#  GenLP: Generator-based Linear Programming models
#  Copyright (c) 2025 The GenLP Developers
#  Portions derived from Pyomo, Copyright (c) 2008-2025 National Technology
#  and Engineering Solutions of Sandia, LLC.
#  This software is distributed under the 3-clause BSD License.
#  ___________________________________________________________________________

import logging

from parameterized import parameterized

import genlp.common.unittest as unittest
from genlp.common.errors import (
    EmptyWildcardDomain,
    InvalidIndex,
    UnresolvableWildcard,
)
from genlp.common.log import LoggingIntercept
from genlp.core.base.model import ModelStore
from genlp.core.expr.constants import ConstantEvaluator
from genlp.core.expr.environment import BindingEnvironment
from genlp.core.expr.nodes import Identifier, Literal, _, sum_over, symbols
from genlp.core.expr.reducer import ExpressionReducer
from genlp.core.expr.wildcard import contains_wildcard, leading_sites


class TestContainsWildcard(unittest.TestCase):
    def test_contains(self):
        x, price = symbols('x price')
        self.assertTrue(contains_wildcard(x(1, _)))
        self.assertTrue(contains_wildcard(price[_]['cal'] * 2))
        self.assertFalse(contains_wildcard(x(1) + price['a']))

    def test_free_only(self):
        x = Identifier('x')
        e = sum_over(x(_)) + 1
        self.assertTrue(contains_wildcard(e))
        self.assertFalse(contains_wildcard(e, free_only=True))

    def test_leading_sites(self):
        x, cost = symbols('x cost')
        sites = leading_sites(x(_, _) + cost[_][_])
        self.assertEqual(len(sites), 2)
        self.assertEqual(sites[0].describe(), 'index 0 of x(_, _)')
        self.assertEqual(sites[1].describe(), 'keys of cost')


class TestWildcardResolver(unittest.TestCase):
    def setUp(self):
        self.model = ModelStore()
        for i in (1, 2):
            for j in ('a', 'b', 'c'):
                self.model.new_variable('y', (i, j))
        for food in ('bread', 'milk', 'cheese'):
            self.model.new_variable('qty', (food,))
        self.env = BindingEnvironment(
            {
                'price': {
                    'bread': {'cal': 100},
                    'milk': {'cal': 50},
                    'fish': {'cal': 200},
                },
                'cost': [[1, 2], [3, 4]],
                'empty': {},
                'n': 3,
            }
        )
        self.reducer = ExpressionReducer(self.model)
        self.resolver = self.reducer.wildcards

    def test_family_domain(self):
        y = Identifier('y')
        self.assertEqual(self.resolver.resolve_domain(y(_, 'a'), self.env), [1, 2])
        self.assertEqual(
            self.resolver.resolve_domain(y(2, _), self.env), ['a', 'b', 'c']
        )

    def test_fixed_index_resolved_through_environment(self):
        y, i = symbols('y i')
        env = self.env.overlay('i', 1)
        self.assertEqual(self.resolver.resolve_domain(y(i, _), env), ['a', 'b', 'c'])
        # indices with no matching instance give an empty domain
        env = self.env.overlay('i', 5)
        self.assertEqual(self.resolver.resolve_domain(y(i, _), env), [])

    def test_container_domain(self):
        price, cost = symbols('price cost')
        self.assertEqual(
            self.resolver.resolve_domain(price[_]['cal'], self.env),
            ['bread', 'milk', 'fish'],
        )
        self.assertEqual(self.resolver.resolve_domain(cost[_], self.env), [0, 1])
        self.assertEqual(self.resolver.resolve_domain(cost.at(_), self.env), [0, 1])

    def test_intersection(self):
        qty, price = symbols('qty price')
        with LoggingIntercept(
            module='genlp.core.expr.wildcard', level=logging.DEBUG
        ) as LOG:
            domain = self.resolver.resolve_domain(
                qty(_) * price[_]['cal'], self.env
            )
        self.assertEqual(domain, ['bread', 'milk'])
        self.assertIn("disagree; using their intersection ['bread', 'milk']", LOG.getvalue())

    def test_empty_intersection(self):
        y, price = symbols('y price')
        with self.assertRaisesRegex(
            EmptyWildcardDomain, "have an empty intersection", normalize_whitespace=True
        ) as cm:
            self.resolver.resolve_domain(y(1, _) + price[_]['cal'], self.env)
        self.assertEqual(len(cm.exception.domains), 2)

    def test_one_empty_source(self):
        qty, empty = symbols('qty empty')
        with self.assertRaises(EmptyWildcardDomain):
            self.resolver.resolve_domain(qty(_) + empty[_], self.env)

    def test_all_sources_empty(self):
        z, empty = symbols('z empty')
        self.assertEqual(self.resolver.resolve_domain(z(_) + empty[_], self.env), [])
        self.assertTrue(self.reducer.reduce(z(_) + empty[_], self.env).is_zero())

    def test_bare_wildcard(self):
        with self.assertRaisesRegex(
            UnresolvableWildcard,
            "may only appear as a variable index or a container key",
            normalize_whitespace=True,
        ):
            self.resolver.resolve_domain(Literal(2) * _, self.env)

    def test_no_free_wildcard(self):
        x = Identifier('x')
        with self.assertRaisesRegex(
            UnresolvableWildcard, "no free wildcard", normalize_whitespace=True
        ):
            self.resolver.resolve_domain(sum_over(x(_)), self.env)

    def test_container_not_enumerable(self):
        n = Identifier('n')
        with self.assertRaisesRegex(
            UnresolvableWildcard, "is a int, not a mapping or sequence",
            normalize_whitespace=True,
        ):
            self.resolver.resolve_domain(n[_], self.env)

    def test_container_with_variables(self):
        y, price = symbols('y price')
        with self.assertRaisesRegex(
            UnresolvableWildcard, "references variables", normalize_whitespace=True
        ):
            self.resolver.resolve_domain(price[y(1, 'a')][_], self.env)

    def test_non_constant_fixed_index(self):
        y = Identifier('y')
        with self.assertRaises(InvalidIndex):
            self.resolver.resolve_domain(y(y(1, 'a'), _), self.env)

    def test_expand_substitutes_structurally(self):
        y = Identifier('y')
        ans = self.resolver.expand(y(1, _), ['a', 'c'], self.env)
        self.assertPolynomialEqual(ans, {'y[1,a]': 1, 'y[1,c]': 1})
        self.assertTrue(self.resolver.expand(y(1, _), [], self.env).is_zero())

    @parameterized.expand(
        [
            ('variable_first', lambda x, price: x(_) * price[_]),
            ('container_first', lambda x, price: price[_] * x(_)),
        ]
    )
    def test_textual_keys_in_either_order(self, name, build):
        model = ModelStore()
        for i in (1, 2):
            model.new_variable('x', (i,))
        env = BindingEnvironment({'price': {'1': 3, '2': 4}})
        x, price = symbols('x price')
        ans = ExpressionReducer(model).reduce(sum_over(build(x, price)), env)
        self.assertPolynomialEqual(ans, {'x[1]': 3, 'x[2]': 4})

        strict = ExpressionReducer(model, ConstantEvaluator(alternate_keys=False))
        with self.assertRaises(EmptyWildcardDomain):
            strict.reduce(sum_over(build(x, price)), env)

    def test_cartesian_product(self):
        y = Identifier('y')
        ans = self.reducer.reduce(y(_, _), self.env)
        self.assertEqual(
            ans.variables(),
            ['y[1,a]', 'y[1,b]', 'y[1,c]', 'y[2,a]', 'y[2,b]', 'y[2,c]'],
        )

    def test_nested_container_wildcards(self):
        cost = Identifier('cost')
        ans = self.reducer.reduce(cost[_][_], self.env)
        self.assertPolynomialEqual(ans, {}, 10)


if __name__ == '__main__':
    unittest.main()
