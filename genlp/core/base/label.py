#  ___________________________________________________________________________
#
#  GenLP: Generator-based Linear Programming models
#  Copyright (c) 2025 The GenLP Developers
#  Portions derived from Pyomo, Copyright (c) 2008-2025 National Technology
#  and Engineering Solutions of Sandia, LLC.
#  This software is distributed under the 3-clause BSD License.
#  ___________________________________________________________________________

__all__ = ['cpxlp_label_from_name', 'NumericLabeler', 'TextLabeler']

# This module provides some basic functionality for generating labels
# from GenLP names, which often contain characters such as "[" and "]"
# (e.g., in my_var[1]).  These characters generally cause issues with
# optimization input file formats, e.g., CPLEX LP files.


class _CharMapper(object):
    def __init__(self, preserve, translate, other):
        """
        Arguments::
           preserve: a string of characters to preserve
           translate: a dict or key/value list of characters to translate
           other: the character to return for all characters not in
                  preserve or translate
        """
        self.table = {
            k if isinstance(k, int) else ord(k): v for k, v in dict(translate).items()
        }
        for c in preserve:
            _c = ord(c)
            if _c in self.table and self.table[_c] != c:
                raise RuntimeError(
                    "Duplicate character '%s' appears in both "
                    "translate table and preserve list" % (c,)
                )
            self.table[_c] = c
        self.other = other

    def __getitem__(self, c):
        # Remember characters we have not seen before
        try:
            return self.table[c]
        except KeyError:
            self.table[c] = self.other
            return self.other


_alpha = 'abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ'
_digit = '1234567890'
_cpxlp_translation_table = _CharMapper(
    preserve=_alpha + _digit + '()_', translate=zip('[]{}', '()()'), other='_'
)


def cpxlp_label_from_name(name):
    if name is None:
        raise RuntimeError(
            "Illegal name=None supplied to cpxlp_label_from_name function"
        )
    return name.translate(_cpxlp_translation_table)


class NumericLabeler(object):
    def __init__(self, prefix, start=0):
        self.id = start
        self.prefix = prefix

    def __call__(self, name=None):
        self.id += 1
        return self.prefix + str(self.id)


class TextLabeler(object):
    """Generate CPLEX-LP compliant labels from names"""

    def __call__(self, name):
        return cpxlp_label_from_name(name)
