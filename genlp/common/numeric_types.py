#  ___________________________________________________________________________
#
#  GenLP: Generator-based Linear Programming models
#  Copyright (c) 2025 The GenLP Developers
#  Portions derived from Pyomo, Copyright (c) 2008-2025 National Technology
#  and Engineering Solutions of Sandia, LLC.
#  This software is distributed under the 3-clause BSD License.
#  ___________________________________________________________________________

import math
import numbers

#: Python set used to identify native numeric constants.
native_numeric_types = {int, float}

#: Python set used to identify integer constants.
native_integer_types = {int}


def is_numeric(value):
    """Return True if ``value`` is a number (bool included)"""
    if value.__class__ in native_numeric_types or value.__class__ is bool:
        return True
    # Catch non-native numeric types (e.g. numpy scalars)
    return isinstance(value, numbers.Real)


def value_is_integral(value):
    """Return True if ``value`` is a finite number with no fractional part"""
    if value.__class__ in native_integer_types or value.__class__ is bool:
        return True
    if not is_numeric(value):
        return False
    try:
        value = float(value)
    except (TypeError, ValueError):
        return False
    return math.isfinite(value) and value.is_integer()
