#  ___________________________________________________________________________
#
#  GenLP: Generator-based Linear Programming models
#  Copyright (c) 2025 The GenLP Developers
#  Portions derived from Pyomo, Copyright (c) 2008-2025 National Technology
#  and Engineering Solutions of Sandia, LLC.
#  This software is distributed under the 3-clause BSD License.
#  ___________________________________________________________________________

import enum

import genlp.common.unittest as unittest
from genlp.common.errors import UnknownSymbol
from genlp.core.expr.environment import BindingEnvironment
import genlp.core.expr.template as template_module
from genlp.core.expr.template import interpolate, template_symbols


class Color(enum.Enum):
    red = 1
    blue = 2


class TestTemplate(unittest.TestCase):
    def setUp(self):
        self.env = BindingEnvironment({'food': 'bread'}, {'i': 3, 'c': Color.blue})

    def test_interpolate(self):
        self.assertEqual(interpolate('row_{i}_{food}', self.env), 'row_3_bread')
        self.assertEqual(interpolate('{ i }', self.env), '3')
        self.assertEqual(interpolate('plain', self.env), 'plain')
        self.assertEqual(interpolate('', self.env), '')
        self.assertIsNone(interpolate(None, self.env))

    def test_enum_values_use_member_name(self):
        self.assertEqual(interpolate('paint_{c}', self.env), 'paint_blue')

    def test_escaped_braces(self):
        self.assertEqual(interpolate('{{i}}={i}', self.env), '{i}=3')
        self.assertEqual(template_symbols('{{i}}'), [])

    def test_unknown_symbol(self):
        with self.assertRaises(UnknownSymbol) as cm:
            interpolate('row_{j}', self.env)
        self.assertEqual(cm.exception.symbol, 'j')

    def test_unmatched_brace(self):
        with self.assertRaisesRegex(ValueError, "unmatched brace at column 5"):
            interpolate('row_{i', self.env)
        with self.assertRaisesRegex(ValueError, "unmatched brace at column 2"):
            interpolate('a}b', self.env)
        with self.assertRaisesRegex(ValueError, "unmatched brace"):
            interpolate('{1}', self.env)

    def test_template_symbols(self):
        self.assertEqual(
            template_symbols('x_{i}_{ j }_{i}{{k}}'), ['i', 'j', 'i']
        )

    def test_lexer_is_reused(self):
        interpolate('{i}', self.env)
        lexer = template_module._tokenize._lex
        self.assertIsNotNone(lexer)
        interpolate('{food}', self.env)
        self.assertIs(template_module._tokenize._lex, lexer)


if __name__ == '__main__':
    unittest.main()
