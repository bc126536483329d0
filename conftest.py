#  ___________________________________________________________________________
#
#  GenLP: Generator-based Linear Programming models
#  Copyright (c) 2025 The GenLP Developers
#  Portions derived from Pyomo, Copyright (c) 2008-2025 National Technology
#  and Engineering Solutions of Sandia, LLC.
#  This software is distributed under the 3-clause BSD License.
#  ___________________________________________________________________________

import pytest

_implicit_markers = {'default'}


def pytest_collection_modifyitems(items):
    """
    This method will mark any unmarked tests with the implicit marker ('default')

    """
    for item in items:
        try:
            next(item.iter_markers())
        except StopIteration:
            for marker in _implicit_markers:
                item.add_marker(getattr(pytest.mark, marker))


def pytest_runtest_setup(item):
    """
    This method overrides pytest's default behavior for marked tests.

    If the user asked for a specific marker using the '-m' flag, return
    to pytest's default behavior.  Otherwise only unmarked tests and
    tests carrying the implicit markers are run; tests marked with an
    explicit category (e.g., "expensive") are skipped.
    """
    markeroption = item.config.getoption("-m")
    item_markers = set(mark.name for mark in item.iter_markers())
    if markeroption:
        return
    elif item_markers:
        if not _implicit_markers.issubset(item_markers):
            pytest.skip('SKIPPED: Only running default and unmarked tests.')


def pytest_configure(config):
    """
    Register the implicit and explicit markers.
    This stops pytest from printing a warning about unregistered markers.
    """
    config.addinivalue_line("markers", "default: tests run by default")
    config.addinivalue_line("markers", "expensive: tests skipped by default")
