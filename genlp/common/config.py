#  ___________________________________________________________________________
#
#  GenLP: Generator-based Linear Programming models
#  Copyright (c) 2025 The GenLP Developers
#  Portions derived from Pyomo, Copyright (c) 2008-2025 National Technology
#  and Engineering Solutions of Sandia, LLC.
#  This software is distributed under the 3-clause BSD License.
#  ___________________________________________________________________________

import inspect
import textwrap

from genlp.common.flags import NOTSET

__all__ = (
    'ConfigDict',
    'ConfigBlock',
    'ConfigValue',
    'Bool',
    'document_kwargs_from_configdict',
)


def Bool(val):
    """Domain validator for bool-like objects.

    This is a more strict domain than ``bool``, as it will error on
    values that do not "look" like a Boolean value (i.e., it accepts
    ``True``, ``False``, 0, 1, and the case insensitive strings
    ``'true'``, ``'false'``, ``'yes'``, ``'no'``, ``'t'``, ``'f'``,
    ``'y'``, and ``'n'``)

    """
    if type(val) is bool:
        return val
    if isinstance(val, str):
        v = val.upper()
        if v in {'TRUE', 'YES', 'T', 'Y', '1'}:
            return True
        if v in {'FALSE', 'NO', 'F', 'N', '0'}:
            return False
    elif int(val) == float(val):
        v = int(val)
        if v in {0, 1}:
            return bool(v)
    raise ValueError("Expected Boolean, but received %s" % (val,))


def _domain_name(domain):
    if domain is None:
        return ''
    if hasattr(domain, 'domain_name'):
        return domain.domain_name()
    return getattr(domain, '__name__', str(domain))


class ConfigValue(object):
    """Store and manipulate a single configuration value.

    Parameters
    ----------
    default: optional
        The default value that this ConfigValue will take if no value is
        provided.

    domain: Callable, optional
        The domain can be any callable that accepts a candidate value
        and returns the value converted to the desired type, optionally
        performing any data validation.  The result will be stored /
        returned by the ConfigValue.

    description: str, optional
        The short description of this value

    doc: str, optional
        The long documentation string for this value

    """

    __slots__ = ('_name', '_value', '_default', '_domain', '_description', '_doc')

    def __init__(self, default=None, domain=None, description=None, doc=None):
        self._name = None
        self._default = default
        self._domain = domain
        self._description = description
        self._doc = doc
        self.reset()

    def name(self):
        return self._name

    def domain_name(self):
        return _domain_name(self._domain)

    def value(self):
        return self._value

    def set_value(self, value):
        if self._domain is not None and value is not None:
            try:
                value = self._domain(value)
            except (TypeError, ValueError) as e:
                raise ValueError(
                    "invalid value for configuration '%s':\n\t%s: %s"
                    % (self._name, type(e).__name__, e)
                ) from e
        self._value = value

    def reset(self):
        self._value = self._default
        if self._domain is not None and self._default is not None:
            self._value = self._domain(self._default)

    def duplicate(self):
        ans = ConfigValue(self._default, self._domain, self._description, self._doc)
        ans._name = self._name
        ans._value = self._value
        return ans

    def documentation(self):
        return self._doc or self._description or ''


class ConfigDict(object):
    """Store and manipulate a dictionary of configuration values.

    Values are declared with :py:meth:`declare` and then read and set
    either as attributes or as items.  Calling a ConfigDict returns an
    independent copy, optionally updated from a dict of new values::

        CONFIG = ConfigDict()
        CONFIG.declare('tee', ConfigValue(default=False, domain=Bool))
        config = CONFIG({'tee': True})

    Parameters
    ----------
    description: str, optional
        The short description of this dict

    doc: str, optional
        The long documentation string for this dict

    implicit: bool, optional
        If True, undeclared keys are accepted and stored as
        unvalidated values.

    """

    def __init__(self, description=None, doc=None, implicit=False):
        object.__setattr__(self, '_description', description)
        object.__setattr__(self, '_doc', doc)
        object.__setattr__(self, '_implicit', implicit)
        object.__setattr__(self, '_data', {})

    def declare(self, name, config):
        if name in self._data:
            raise ValueError(
                "duplicate config '%s' defined for ConfigDict '%s'"
                % (name, self._description or '')
            )
        config._name = name
        self._data[name] = config
        return config

    def get(self, name, default=None):
        if name in self._data:
            return self._data[name].value()
        return default

    def __contains__(self, name):
        return name in self._data

    def __iter__(self):
        return iter(self._data)

    def __len__(self):
        return len(self._data)

    def keys(self):
        return self._data.keys()

    def items(self):
        for name, cfg in self._data.items():
            yield name, cfg.value()

    def __getitem__(self, name):
        if name not in self._data:
            raise KeyError(name)
        return self._data[name].value()

    def __setitem__(self, name, value):
        if name not in self._data:
            if not self._implicit:
                raise ValueError(
                    "key '%s' not defined for ConfigDict '%s' and implicit "
                    "(undefined) keys are not allowed"
                    % (name, self._description or '')
                )
            self.declare(name, ConfigValue(value))
            return
        self._data[name].set_value(value)

    def __getattr__(self, name):
        # Only called when normal attribute lookup fails
        data = self.__dict__.get('_data', {})
        if name in data:
            return data[name].value()
        raise AttributeError("Unknown attribute '%s'" % (name,))

    def __setattr__(self, name, value):
        self[name] = value

    def set_value(self, value):
        if value is None:
            return self
        if not hasattr(value, 'items'):
            raise ValueError(
                "Expected dict value for ConfigDict '%s', but received %r"
                % (self._description or '', value)
            )
        for key, val in value.items():
            self[key] = val
        return self

    def value(self):
        return {name: cfg.value() for name, cfg in self._data.items()}

    def reset(self):
        for cfg in self._data.values():
            cfg.reset()

    def __call__(self, value=NOTSET):
        ans = ConfigDict(self._description, self._doc, self._implicit)
        for name, cfg in self._data.items():
            ans._data[name] = cfg.duplicate()
        if value is not NOTSET:
            ans.set_value(value)
        return ans

    def generate_documentation(self, indent_spacing=4, width=78):
        lines = []
        indent = ' ' * indent_spacing
        for name, cfg in self._data.items():
            header = name
            dn = cfg.domain_name()
            if dn:
                header += ': ' + dn
            if cfg._default is not None:
                header += ', default=%r' % (cfg._default,)
            else:
                header += ', optional'
            lines.append(header)
            doc = cfg.documentation()
            if doc:
                lines.extend(
                    textwrap.wrap(
                        doc,
                        width=width,
                        initial_indent=indent,
                        subsequent_indent=indent,
                    )
                )
            lines.append('')
        return '\n'.join(lines).rstrip() + '\n'


ConfigBlock = ConfigDict


class document_kwargs_from_configdict(object):
    """Decorator to append the documentation of a ConfigDict to the docstring

    Parameters
    ----------
    config : ConfigDict or str
        the :py:class:`ConfigDict` to document.  If a ``str``, then the
        :py:class:`ConfigDict` is obtained by retrieving the named
        attribute from the decorated object

    section : str
        the section header to preface config documentation with

    """

    def __init__(self, config, section='Keyword Arguments', indent_spacing=4):
        self.config = config
        self.section = section
        self.indent_spacing = indent_spacing

    def __call__(self, fcn):
        config = self.config
        if isinstance(config, str):
            config = getattr(fcn, config)
        doc = inspect.cleandoc(fcn.__doc__ or '')
        if doc:
            doc += '\n\n'
        doc += self.section + '\n' + '-' * len(self.section) + '\n'
        doc += config.generate_documentation(self.indent_spacing)
        fcn.__doc__ = doc
        return fcn
