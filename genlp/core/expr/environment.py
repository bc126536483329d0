#  ___________________________________________________________________________
#
#  GenLP: Generator-based Linear Programming models
#  Copyright (c) 2025 The GenLP Developers
#  Portions derived from Pyomo, Copyright (c) 2008-2025 National Technology
#  and Engineering Solutions of Sandia, LLC.
#  This software is distributed under the 3-clause BSD License.
#  ___________________________________________________________________________

from types import MappingProxyType

from genlp.common.errors import UnknownSymbol

_EMPTY = MappingProxyType({})


class BindingEnvironment(object):
    """Layered, immutable symbol table used to evaluate expressions.

    Symbols are looked up first in the generator bindings (innermost
    layer) and then in the model parameters (outermost layer).  An
    environment is never modified: :py:meth:`overlay` returns a new
    environment that shares the parameter layer with this one.

    Parameters
    ----------
    parameters: Mapping, optional
        User-supplied model data, keyed by symbol name.  The values
        are opaque (nested mappings, sequences, scalars or objects).

    bindings: Mapping, optional
        Initial generator bindings.

    """

    __slots__ = ('_parameters', '_bindings')

    def __init__(self, parameters=None, bindings=None):
        if parameters is None:
            parameters = _EMPTY
        elif not hasattr(parameters, '__getitem__') or not hasattr(parameters, 'keys'):
            raise TypeError(
                "Model parameters must be a mapping of symbol names to "
                "values (received %s)" % (type(parameters).__name__,)
            )
        self._parameters = parameters
        self._bindings = MappingProxyType(dict(bindings) if bindings else {})

    @property
    def parameters(self):
        return self._parameters

    @property
    def bindings(self):
        """The generator bindings, in the order they were added"""
        return self._bindings

    def resolve(self, symbol):
        """Return the value bound to ``symbol``

        Raises
        ------
        UnknownSymbol
            if ``symbol`` is neither a generator binding nor a model
            parameter
        """
        if symbol in self._bindings:
            return self._bindings[symbol]
        if symbol in self._parameters:
            return self._parameters[symbol]
        raise UnknownSymbol(symbol)

    def overlay(self, symbol, value):
        """Return a new environment with ``symbol`` bound to ``value``"""
        ans = self.__class__.__new__(self.__class__)
        ans._parameters = self._parameters
        bindings = dict(self._bindings)
        bindings[symbol] = value
        ans._bindings = MappingProxyType(bindings)
        return ans

    def __contains__(self, symbol):
        return symbol in self._bindings or symbol in self._parameters

    def __repr__(self):
        return '%s(bindings=%r, parameters=[%s])' % (
            self.__class__.__name__,
            dict(self._bindings),
            ', '.join(map(str, self._parameters.keys())),
        )
