#  ___________________________________________________________________________
#
#  GenLP: Generator-based Linear Programming models
#  Copyright (c) 2025 The GenLP Developers
#  Portions derived from Pyomo, Copyright (c) 2008-2025 National Technology
#  and Engineering Solutions of Sandia, LLC.
#  This software is distributed under the 3-clause BSD License.
#  ___________________________________________________________________________

from parameterized import parameterized

import genlp.common.unittest as unittest
from genlp.common.errors import (
    format_exception,
    GenLPException,
    DeveloperError,
    InfeasibleConstraintException,
    ModelingError,
    UnknownSymbol,
    InvalidGeneratorDomain,
    UndeclaredVariable,
    DuplicateVariable,
    DuplicateConstraintName,
    EmptyWildcardDomain,
    UnresolvableWildcard,
    NonNumericConstant,
    MissingKey,
    DivisionByNonConstant,
    DivisionByZero,
    NonlinearExpression,
    InvalidIndex,
)
from genlp.core.expr.nodes import BinaryOp, Identifier, WILDCARD


class LocalException(Exception):
    pass


class CustomLocalException(GenLPException):
    default_message = 'Default message.'


class TestFormatException(unittest.TestCase):
    def test_basic_message(self):
        self.assertEqual(format_exception("Hello world"), "Hello world")

    def test_formatted_message(self):
        self.assertEqual(format_exception("Hello\nworld"), "Hello\nworld")

    def test_long_basic_message(self):
        self.assertEqual(
            format_exception(
                "Hello world, this is a very long message that will "
                "inevitably wrap onto another line."
            ),
            "Hello world, this is a very long message that will\n"
            "    inevitably wrap onto another line.",
        )

    def test_long_basic_message_builtin_exception(self):
        self.assertEqual(
            format_exception(
                "Hello world, this is a very long message that will "
                "inevitably wrap onto another line.",
                exception=RuntimeError,
            ),
            "Hello world, this is a very long message that will inevitably\n"
            "    wrap onto another line.",
        )

    def test_basic_message_prolog(self):
        self.assertEqual(
            format_exception("This is the message", prolog="Hello world:"),
            "Hello world:\n    This is the message",
        )

    def test_basic_message_epilog(self):
        self.assertEqual(
            format_exception("This is the message", epilog="Hello world:"),
            "This is the message\n    Hello world:",
        )


class TestExceptionClasses(unittest.TestCase):
    def test_default_message(self):
        self.assertEqual(str(CustomLocalException()), 'Default message.')
        self.assertEqual(str(CustomLocalException('Non-default')), 'Non-default')

    def test_developer_error(self):
        with self.assertRaisesRegex(
            NotImplementedError,
            "Internal GenLP implementation error:.*'bad node'.*"
            "Please report this to the GenLP Developers.",
            normalize_whitespace=True,
        ):
            raise DeveloperError('bad node')

    def test_infeasible(self):
        self.assertTrue(issubclass(InfeasibleConstraintException, GenLPException))

    @parameterized.expand(
        [
            ('unknown_symbol', UnknownSymbol('n'), NameError, {'symbol': 'n'}),
            (
                'invalid_domain',
                InvalidGeneratorDomain('i', 5),
                TypeError,
                {'symbol': 'i', 'domain': 5},
            ),
            (
                'undeclared',
                UndeclaredVariable('x', (1, 2)),
                KeyError,
                {'family': 'x', 'index': (1, 2)},
            ),
            (
                'duplicate_var',
                DuplicateVariable('x', (1,)),
                ValueError,
                {'family': 'x', 'index': (1,)},
            ),
            (
                'duplicate_con',
                DuplicateConstraintName('c1'),
                ValueError,
                {'name': 'c1'},
            ),
            (
                'non_numeric',
                NonNumericConstant('abc'),
                TypeError,
                {'value': 'abc', 'expr': None},
            ),
            (
                'missing_key',
                MissingKey(('data', 'worker', 'taskX')),
                KeyError,
                {'path': ('data', 'worker', 'taskX'), 'key': 'taskX'},
            ),
            (
                'division_by_zero',
                DivisionByZero(None),
                ZeroDivisionError,
                {'expr': None},
            ),
        ]
    )
    def test_structured_context(self, name, err, builtin, context):
        self.assertIsInstance(err, ModelingError)
        self.assertIsInstance(err, GenLPException)
        self.assertIsInstance(err, builtin)
        for key, val in context.items():
            self.assertEqual(getattr(err, key), val)

    def test_unknown_symbol_message(self):
        self.assertEqual(
            ' '.join(str(UnknownSymbol('limit')).split()),
            "Symbol 'limit' is not bound by any generator and is not a model "
            "parameter.",
        )

    def test_key_error_messages_are_not_quoted(self):
        msg = str(UndeclaredVariable('x', (1, 'a')))
        self.assertFalse(msg.startswith('"'))
        self.assertIn(
            "Variable 'x' has no declared instance with index (1, 'a')",
            ' '.join(msg.split()),
        )

    def test_missing_key_message(self):
        err = MissingKey(('data', 'worker', 'taskX'))
        self.assertIn(
            "Key 'taskX' not found when evaluating data['worker']['taskX']",
            ' '.join(str(err).split()),
        )

    def test_missing_key_reason(self):
        err = MissingKey(('seq', 5), reason='position out of range')
        self.assertEqual(err.key, 5)
        self.assertIn(': position out of range.', ' '.join(str(err).split()))

    def test_duplicate_variable_name_clash(self):
        msg = ' '.join(str(DuplicateVariable('x', ('1',), 'x[1]')).split())
        self.assertIn("an instance named 'x[1]' already exists", msg)

    def test_expression_messages(self):
        x, y = Identifier('x'), Identifier('y')
        expr = BinaryOp('/', x(1), y(2))
        self.assertIn(
            "'x(1) / y(2)'", ' '.join(str(DivisionByNonConstant(expr)).split())
        )
        self.assertIn(
            "'x(1) * y(2)' is not linear",
            ' '.join(str(NonlinearExpression(x(1) * y(2))).split()),
        )
        self.assertIn(
            "Index 'y(2)' of variable 'x'",
            ' '.join(str(InvalidIndex('x', y(2))).split()),
        )

    def test_wildcard_messages(self):
        x = Identifier('x')
        err = UnresolvableWildcard(x(WILDCARD), 'no free wildcard')
        self.assertEqual(err.reason, 'no free wildcard')
        self.assertIn(
            "Cannot infer a domain for the wildcard in 'x(_)': no free wildcard.",
            ' '.join(str(err).split()),
        )
        err = EmptyWildcardDomain(x(WILDCARD), [('index 0 of x(_)', [1, 2])])
        self.assertIn(
            "index 0 of x(_) -> [1, 2]", ' '.join(str(err).split())
        )


if __name__ == '__main__':
    unittest.main()
