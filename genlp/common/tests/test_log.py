#  ___________________________________________________________________________
#
#  GenLP: Generator-based Linear Programming models
#  Copyright (c) 2025 The GenLP Developers
#  Portions derived from Pyomo, Copyright (c) 2008-2025 National Technology
#  and Engineering Solutions of Sandia, LLC.
#  This software is distributed under the 3-clause BSD License.
#  ___________________________________________________________________________

import logging
from io import StringIO

import genlp.common.unittest as unittest
from genlp.common.log import (
    GenLPFormatter,
    LoggingIntercept,
    WrappingFormatter,
    is_debug_set,
)
from genlp.common.timing import TicTocTimer


def _record(msg, *args, level=logging.WARNING):
    return logging.LogRecord('genlp.test', level, __file__, 10, msg, args, None)


class TestWrappingFormatter(unittest.TestCase):
    def test_wrap(self):
        fmt = WrappingFormatter(wrap=20)
        self.assertEqual(
            fmt.format(_record("one two three four %s six", 'five')),
            "WARNING: one two\n    three four five\n    six",
        )

    def test_short_message(self):
        fmt = WrappingFormatter()
        self.assertEqual(fmt.format(_record("hello")), "WARNING: hello")

    def test_style(self):
        fmt = WrappingFormatter(style='{')
        self.assertEqual(fmt.format(_record("hello")), "WARNING: hello")
        with self.assertRaisesRegex(ValueError, 'unrecognized style flag "!"'):
            WrappingFormatter(style='!')

    def test_verbose(self):
        fmt = GenLPFormatter(verbosity=lambda: True)
        ans = fmt.format(_record("hello"))
        self.assertTrue(ans.startswith('WARNING: "'))
        self.assertTrue(ans.endswith('\n    hello'))
        fmt = GenLPFormatter(verbosity=lambda: False)
        self.assertEqual(fmt.format(_record("hello")), "WARNING: hello")


class TestLoggingIntercept(unittest.TestCase):
    def test_intercept(self):
        logger = logging.getLogger('genlp.test.intercept')
        with LoggingIntercept(module='genlp.test.intercept') as OUT:
            logger.warning("captured")
            logger.info("ignored")
        self.assertEqual(OUT.getvalue(), "captured\n")

    def test_module_and_level(self):
        OUT = StringIO()
        logger = logging.getLogger('genlp.test.intercept')
        with LoggingIntercept(OUT, 'genlp.test', logging.DEBUG):
            self.assertTrue(is_debug_set(logger))
            logger.debug("detail")
        self.assertEqual(OUT.getvalue(), "detail\n")

    def test_logger_and_module_are_exclusive(self):
        with self.assertRaisesRegex(ValueError, "only one of 'module' and 'logger'"):
            LoggingIntercept(module='genlp', logger=logging.getLogger('genlp'))

    def test_is_debug_set(self):
        logger = logging.getLogger('genlp.test.debug')
        logger.setLevel(logging.WARNING)
        try:
            self.assertFalse(is_debug_set(logger))
            logger.setLevel(logging.DEBUG)
            self.assertTrue(is_debug_set(logger))
        finally:
            logger.setLevel(logging.NOTSET)


class TestTicTocTimer(unittest.TestCase):
    def test_ostream(self):
        OUT = StringIO()
        timer = TicTocTimer(ostream=OUT)
        timer.tic('start')
        ans = timer.toc('task %s', 1)
        self.assertGreaterEqual(ans, 0)
        self.assertRegex(
            OUT.getvalue(), r"^\[ +\d+\.\d\d\] start\n\[\+ +\d+\.\d\d\] task 1\n$"
        )

    def test_logger(self):
        logger = logging.getLogger('genlp.test.timing')
        timer = TicTocTimer(logger=logger)
        with LoggingIntercept(module='genlp.test.timing', level=logging.DEBUG) as OUT:
            timer.toc('quiet', level=logging.DEBUG)
            timer.toc(None)
        self.assertRegex(OUT.getvalue(), r"^\[\+ +\d+\.\d\d\] quiet\n$")


if __name__ == '__main__':
    unittest.main()
