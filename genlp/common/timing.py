#  ___________________________________________________________________________
#
#  GenLP: Generator-based Linear Programming models
#  Copyright (c) 2025 The GenLP Developers
#  Portions derived from Pyomo, Copyright (c) 2008-2025 National Technology
#  and Engineering Solutions of Sandia, LLC.
#  This software is distributed under the 3-clause BSD License.
#  ___________________________________________________________________________
#
# Utilities for reporting elapsed time
#

import logging
import sys
from timeit import default_timer

from genlp.common.flags import NOTSET


class TicTocTimer(object):
    """A class to calculate and report elapsed time.

    Examples:
       >>> from genlp.common.timing import TicTocTimer
       >>> timer = TicTocTimer()
       >>> timer.tic('starting timer') # starts the elapsed time timer (from 0)
       [    0.00] starting timer
       >>> # ... do task 1
       >>> dT = timer.toc('task 1')
       [+   0.00] task 1

    If no ostream or logger is provided, then output is printed to sys.stdout

    Args:
        ostream (FILE): an optional output stream to print the timing
            information
        logger (Logger): an optional output stream using the python
           logging package. Note: the timing logged using ``logger.info()``
    """

    def __init__(self, ostream=NOTSET, logger=None):
        if ostream is NOTSET and logger is not None:
            ostream = None
        self._lastTime = self._loadTime = default_timer()
        self.ostream = ostream
        self.logger = logger
        self.level = logging.INFO

    def tic(self, msg=NOTSET, *args, ostream=NOTSET, logger=NOTSET, level=NOTSET):
        """Reset the tic/toc delta timer.

        If `msg` is None, then no message is printed.
        """
        self._lastTime = self._loadTime = default_timer()
        if msg is NOTSET:
            msg = "Resetting the tic/toc delta timer"
        if msg is not None:
            self.toc(
                msg, *args, delta=False, ostream=ostream, logger=logger, level=level
            )

    def toc(
        self, msg=NOTSET, *args, delta=True, ostream=NOTSET, logger=NOTSET, level=NOTSET
    ):
        """Report the elapsed time.

        With ``delta=True`` (default) the time since the last call to
        either :meth:`tic` or :meth:`toc` is reported, otherwise the
        time since the last call to :meth:`tic`.  The reference time
        for the next delta is reset to now.
        """
        now = default_timer()

        if msg is NOTSET:
            msg = 'elapsed time'
        if delta:
            ans = now - self._lastTime
            fmt = "[+%7.2f] %s"
        else:
            ans = now - self._loadTime
            fmt = "[%8.2f] %s"
        self._lastTime = now

        if msg is not None:
            msg = fmt % (ans, msg)
            if args:
                msg = msg % args
            if logger is NOTSET:
                logger = self.logger
            if logger is not None:
                if level is NOTSET:
                    level = self.level
                logger.log(level, msg)

            if ostream is NOTSET:
                ostream = self.ostream
                if ostream is NOTSET:
                    ostream = sys.stdout if logger is None else None
            if ostream is not None:
                ostream.write(msg + '\n')

        return ans
