#  ___________________________________________________________________________
#
#  GenLP: Generator-based Linear Programming models
#  Copyright (c) 2025 The GenLP Developers
#  Portions derived from Pyomo, Copyright (c) 2008-2025 National Technology
#  and Engineering Solutions of Sandia, LLC.
#  This software is distributed under the 3-clause BSD License.
#  ___________________________________________________________________________

import logging
import os
import tempfile
from io import StringIO

import genlp.common.unittest as unittest
from genlp.common.log import LoggingIntercept
from genlp.core.base.label import NumericLabeler, TextLabeler, cpxlp_label_from_name
from genlp.core.base.model import ModelStore
from genlp.core.expr.numvalue import infinity
from genlp.core.expr.polynomial import Polynomial
from genlp.repn.plugins.lp_writer import ONE_VAR_CONSTANT, LPWriter


def _demo_model():
    m = ModelStore('demo')
    m.new_variable('x', (1,), lb=0)
    m.new_variable('x', (2,), vtype='integer', lb=0, ub=10)
    m.new_variable('b', vtype='binary')
    m.new_variable('unused')
    m.set_objective(Polynomial({'x[1]': 2, 'x[2]': 3, 'b': -1}), 'maximize')
    m.add_constraint(
        (Polynomial({'x[2]': 1, 'x[1]': 1}), '<=', Polynomial.const(4)), name='cap'
    )
    m.add_constraint(
        (Polynomial({'x[2]': 1, 'b': -5}), '>=', Polynomial.const(0)), name='link'
    )
    m.add_constraint((Polynomial({'x[1]': 1}), '==', Polynomial.const(1.5)))
    return m


class TestLabelers(unittest.TestCase):
    def test_cpxlp_label(self):
        self.assertEqual(cpxlp_label_from_name('qty[bread, 2]'), 'qty(bread__2)')
        self.assertEqual(cpxlp_label_from_name('a{b}.c'), 'a(b)_c')
        with self.assertRaisesRegex(RuntimeError, "Illegal name=None"):
            cpxlp_label_from_name(None)

    def test_labelers(self):
        labeler = NumericLabeler('x')
        self.assertEqual([labeler('a'), labeler('b')], ['x1', 'x2'])
        self.assertEqual(TextLabeler()('y[1,2]'), 'y(1_2)')


class TestLPWriter(unittest.TestCase):
    def test_numeric_labels(self):
        OUT = StringIO()
        info = LPWriter().write(_demo_model(), OUT)
        self.assertEqual(
            OUT.getvalue(),
            r"""\* Source GenLP model name=demo *\

max 
obj:
+2 x1
+3 x2
-1 x3

s.t.

c_u_c1_:
+1 x1
+1 x2
<= 4

c_l_c2_:
+1 x2
-5 x3
>= 0

c_e_c3_:
+1 x1
= 1.5

bounds
   0 <= x1 <= +inf
   0 <= x2 <= 10
general
  x2
binary
  x3
end
""",
        )
        self.assertEqual(
            info.symbol_map,
            {
                'x1': 'x[1]',
                'x2': 'x[2]',
                'x3': 'b',
                'c_u_c1_': 'cap',
                'c_l_c2_': 'link',
                'c_e_c3_': 'c00000000',
            },
        )

    def test_symbolic_labels(self):
        OUT = StringIO()
        info = LPWriter().write(_demo_model(), OUT, symbolic_solver_labels=True)
        self.assertEqual(
            OUT.getvalue(),
            r"""\* Source GenLP model name=demo *\

max 
obj:
+2 x(1)
+3 x(2)
-1 b

s.t.

c_u_cap_:
+1 x(1)
+1 x(2)
<= 4

c_l_link_:
+1 x(2)
-5 b
>= 0

c_e_c00000000_:
+1 x(1)
= 1.5

bounds
   0 <= x(1) <= +inf
   0 <= x(2) <= 10
general
  x(2)
binary
  b
end
""",
        )
        self.assertEqual(info.symbol_map['x(2)'], 'x[2]')
        self.assertEqual(info.symbol_map['c_e_c00000000_'], 'c00000000')

    def test_empty_model(self):
        OUT = StringIO()
        info = LPWriter().write(ModelStore('empty'), OUT)
        self.assertEqual(
            OUT.getvalue(),
            r"""\* Source GenLP model name=empty *\

min 
obj:
+0 ONE_VAR_CONSTANT

s.t.

c_e_ONE_VAR_CONSTANT:
+1 ONE_VAR_CONSTANT
= 1

bounds
   1 <= ONE_VAR_CONSTANT <= 1
end
""",
        )
        self.assertEqual(info.symbol_map, {ONE_VAR_CONSTANT: ONE_VAR_CONSTANT})

    def _constant_rows_model(self):
        m = ModelStore('t')
        x = m.new_variable('x')
        m.set_objective(x.add(Polynomial.const(2)))
        # always satisfied: not written
        m.add_constraint((x, '<=', infinity))
        m.add_constraint((Polynomial(), '<=', Polynomial.const(3)), name='k')
        return m

    def test_constant_objective_and_rows(self):
        OUT = StringIO()
        LPWriter().write(self._constant_rows_model(), OUT)
        self.assertEqual(
            OUT.getvalue(),
            r"""\* Source GenLP model name=t *\

min 
obj:
+2 ONE_VAR_CONSTANT
+1 x1

s.t.

c_u_c1_:
+0 ONE_VAR_CONSTANT
<= 3

c_e_ONE_VAR_CONSTANT:
+1 ONE_VAR_CONSTANT
= 1

bounds
   1 <= ONE_VAR_CONSTANT <= 1
   -inf <= x1 <= +inf
end
""",
        )

    def test_skip_trivial_constraints(self):
        OUT = StringIO()
        info = LPWriter().write(
            self._constant_rows_model(), OUT, skip_trivial_constraints=True
        )
        self.assertEqual(
            OUT.getvalue(),
            r"""\* Source GenLP model name=t *\

min 
obj:
+2 ONE_VAR_CONSTANT
+1 x1

s.t.

c_e_ONE_VAR_CONSTANT:
+1 ONE_VAR_CONSTANT
= 1

bounds
   1 <= ONE_VAR_CONSTANT <= 1
   -inf <= x1 <= +inf
end
""",
        )
        self.assertNotIn('k', info.symbol_map.values())

    def test_row_and_column_order(self):
        m = ModelStore('order')
        m.new_variable('b', ub=1.0)
        m.new_variable('a', lb=-2.5)
        m.set_objective(Polynomial({'b': 1, 'a': 1}))
        m.add_constraint((Polynomial({'a': 1}), '>=', Polynomial.const(0)), name='z')
        m.add_constraint((Polynomial({'b': 1}), '<=', Polynomial.const(2)), name='y')

        OUT = StringIO()
        LPWriter().write(m, OUT)
        self.assertEqual(
            OUT.getvalue(),
            r"""\* Source GenLP model name=order *\

min 
obj:
+1 x1
+1 x2

s.t.

c_l_c1_:
+1 x2
>= 0

c_u_c2_:
+1 x1
<= 2

bounds
   -inf <= x1 <= 1
   -2.5 <= x2 <= +inf
end
""",
        )

        OUT = StringIO()
        LPWriter().write(m, OUT, row_order=True, column_order=True)
        self.assertEqual(
            OUT.getvalue(),
            r"""\* Source GenLP model name=order *\

min 
obj:
+1 x1
+1 x2

s.t.

c_u_c1_:
+1 x2
<= 2

c_l_c2_:
+1 x1
>= 0

bounds
   -2.5 <= x1 <= +inf
   -inf <= x2 <= 1
end
""",
        )

    def test_duplicate_labels(self):
        m = ModelStore()
        m.new_variable('x', (1,))
        m.new_variable('x(1)')
        m.set_objective(Polynomial({'x[1]': 1, 'x(1)': 1}))
        with self.assertRaisesRegex(
            ValueError, r"Duplicate LP label 'x\(1\)': generated for both"
        ):
            LPWriter().write(m, StringIO(), symbolic_solver_labels=True)
        # numeric labels are always unique
        LPWriter().write(m, StringIO())

    def test_reserved_name(self):
        m = ModelStore('r')
        m.new_variable(ONE_VAR_CONSTANT)
        with self.assertRaisesRegex(ValueError, "reserved by the LP writer"):
            LPWriter().write(m, StringIO())

    def test_section_timing(self):
        with LoggingIntercept(module='genlp.repn', level=logging.INFO) as LOG:
            LPWriter().write(_demo_model(), StringIO(), show_section_timing=True)
        lines = LOG.getvalue().splitlines()
        self.assertEqual(len(lines), 5)
        self.assertIn('Initialized column order', lines[0])
        self.assertIn('Generated LP representation', lines[-1])

        with LoggingIntercept(module='genlp.repn', level=logging.INFO) as LOG:
            LPWriter().write(_demo_model(), StringIO())
        self.assertEqual(LOG.getvalue(), '')

    def test_invalid_option(self):
        with self.assertRaises(ValueError):
            LPWriter().write(_demo_model(), StringIO(), symbolic_solver_labels='maybe')

    def test_call_writes_file(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            fname = os.path.join(tmpdir, 'demo.lp')
            ans, symbol_map = LPWriter()(_demo_model(), fname)
            self.assertEqual(ans, fname)
            self.assertEqual(symbol_map['c_u_c1_'], 'cap')
            with open(fname) as FILE:
                text = FILE.read()
        OUT = StringIO()
        LPWriter().write(_demo_model(), OUT)
        self.assertEqual(text, OUT.getvalue())


if __name__ == '__main__':
    unittest.main()
