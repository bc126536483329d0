#  ___________________________________________________________________________
#
#  GenLP: Generator-based Linear Programming models
#  Copyright (c) 2025 The GenLP Developers
#  Portions derived from Pyomo, Copyright (c) 2008-2025 National Technology
#  and Engineering Solutions of Sandia, LLC.
#  This software is distributed under the 3-clause BSD License.
#  ___________________________________________________________________________

from genlp.common.errors import NonNumericConstant
from genlp.common.numeric_types import is_numeric


def _val2str(val):
    if val.__class__ is float and val.is_integer():
        return str(int(val)) if abs(val) < 1e15 else repr(val)
    return str(val)


class Polynomial(object):
    """A sparse linear combination of named variables plus a constant.

    ``linear`` maps variable names to (nonzero) coefficients, in the
    order the variables were first introduced.  Polynomials are values:
    every operation returns a new object and never modifies its
    operands.

    """

    __slots__ = ("constant", "linear")

    def __init__(self, linear=None, constant=0):
        if not is_numeric(constant):
            raise NonNumericConstant(constant)
        self.constant = constant
        self.linear = {}
        if linear:
            items = linear.items() if hasattr(linear, 'items') else linear
            for name, coef in items:
                if not is_numeric(coef):
                    raise NonNumericConstant(coef)
                self._accumulate(name, coef)

    @classmethod
    def const(cls, value):
        """Return a polynomial with only a constant term"""
        return cls(constant=value)

    @classmethod
    def variable(cls, name, coef=1):
        """Return a polynomial with a single variable term"""
        return cls(((name, coef),))

    def _accumulate(self, name, coef):
        linear = self.linear
        if name in linear:
            coef += linear[name]
            if coef:
                linear[name] = coef
            else:
                del linear[name]
        elif coef:
            linear[name] = coef

    def duplicate(self):
        ans = self.__class__.__new__(self.__class__)
        ans.constant = self.constant
        ans.linear = dict(self.linear)
        return ans

    def __str__(self):
        linear = (
            "{"
            + ", ".join(f"{k}: {_val2str(v)}" for k, v in self.linear.items())
            + "}"
        )
        return (
            f"{self.__class__.__name__}(const={_val2str(self.constant)}, "
            f"linear={linear})"
        )

    def __repr__(self):
        return str(self)

    def to_string(self):
        """Return the polynomial as ``2*x[1] - x[2] + 3``"""
        ans = ''
        for name, coef in self.linear.items():
            if coef < 0:
                ans += ' - ' if ans else '-'
                coef = -coef
            elif ans:
                ans += ' + '
            if coef != 1:
                ans += _val2str(coef) + '*'
            ans += name
        if self.constant or not ans:
            if not ans:
                return _val2str(self.constant)
            if self.constant < 0:
                ans += ' - ' + _val2str(-self.constant)
            else:
                ans += ' + ' + _val2str(self.constant)
        return ans

    #
    # Queries
    #

    def variables(self):
        """Names of the variables with a nonzero coefficient, in
        first-insertion order"""
        return list(self.linear)

    def terms(self):
        return iter(self.linear.items())

    def coefficient(self, name):
        return self.linear.get(name, 0)

    def is_constant(self):
        return not self.linear

    def is_zero(self):
        return not self.linear and not self.constant

    def __eq__(self, other):
        if other.__class__ is not self.__class__:
            if is_numeric(other):
                return not self.linear and self.constant == other
            return NotImplemented
        return self.constant == other.constant and self.linear == other.linear

    #
    # Algebra
    #

    def add(self, other):
        """Return ``self + other``"""
        ans = self.duplicate()
        ans.constant += other.constant
        for name, coef in other.linear.items():
            ans._accumulate(name, coef)
        return ans

    def subtract(self, other):
        """Return ``self - other``"""
        ans = self.duplicate()
        ans.constant -= other.constant
        for name, coef in other.linear.items():
            ans._accumulate(name, -coef)
        return ans

    def scale(self, factor):
        """Return ``factor * self``"""
        if not is_numeric(factor):
            raise NonNumericConstant(factor)
        ans = self.__class__.__new__(self.__class__)
        ans.constant = self.constant * factor
        if factor:
            ans.linear = {name: coef * factor for name, coef in self.linear.items()}
            # Products can underflow to zero
            for name in [n for n, c in ans.linear.items() if not c]:
                del ans.linear[name]
        else:
            ans.linear = {}
        return ans

    def divide(self, divisor):
        """Return ``self / divisor`` for a nonzero number ``divisor``"""
        if not is_numeric(divisor):
            raise NonNumericConstant(divisor)
        ans = self.__class__.__new__(self.__class__)
        ans.constant = self.constant / divisor
        ans.linear = {name: coef / divisor for name, coef in self.linear.items()}
        for name in [n for n, c in ans.linear.items() if not c]:
            del ans.linear[name]
        return ans

    def append(self, other):
        """Add ``other`` to this polynomial in place.

        Only used on freshly created accumulators; every other
        operation returns a new polynomial.
        """
        self.constant += other.constant
        for name, coef in other.linear.items():
            self._accumulate(name, coef)

    def _coerce(self, other):
        if other.__class__ is self.__class__:
            return other
        if is_numeric(other):
            return self.__class__.const(other)
        return None

    def __add__(self, other):
        other = self._coerce(other)
        if other is None:
            return NotImplemented
        return self.add(other)

    __radd__ = __add__

    def __sub__(self, other):
        other = self._coerce(other)
        if other is None:
            return NotImplemented
        return self.subtract(other)

    def __rsub__(self, other):
        other = self._coerce(other)
        if other is None:
            return NotImplemented
        return other.subtract(self)

    def __mul__(self, other):
        if not is_numeric(other):
            return NotImplemented
        return self.scale(other)

    __rmul__ = __mul__

    def __truediv__(self, other):
        if not is_numeric(other):
            return NotImplemented
        return self.divide(other)

    def __neg__(self):
        return self.scale(-1)
