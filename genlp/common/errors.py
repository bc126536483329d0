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


def format_exception(msg, prolog=None, epilog=None, exception=None, width=76):
    """Generate a formatted exception message

    This returns a formatted exception message, line wrapped for display
    on the console and with optional prolog and epilog messages.

    Parameters
    ----------
    msg: str
        The raw exception message

    prolog: str, optional
        A message to output before the exception message, ``msg``.  If
        this message is long enough to line wrap, the ``msg`` will be
        indented a level below the ``prolog`` message.

    epilog: str, optional
        A message to output after the exception message, ``msg``.  If
        provided, the ``msg`` will be indented a level below the
        ``prolog`` / ``epilog`` messages.

    exception: Exception, optional
        The raw exception being raised (used to improve initial line wrapping).

    width: int, optional
        The line length to wrap the exception message to.

    Returns
    -------
    str
    """
    fields = []

    if epilog:
        indent = ' ' * 8
    else:
        indent = ' ' * 4

    if exception is None:
        # default to the length of 'NotImplementedError: ', the longest
        # built-in name that we commonly raise
        initial_indent = ' ' * 21
    else:
        if not inspect.isclass(exception):
            exception = exception.__class__
        initial_indent = ' ' * (len(exception.__name__) + 2)
        if exception.__module__ != 'builtins':
            initial_indent += ' ' * (len(exception.__module__) + 1)

    if prolog is not None:
        if '\n' not in prolog:
            prolog = textwrap.fill(
                prolog,
                width=width,
                initial_indent=initial_indent,
                subsequent_indent=' ' * 4,
                break_long_words=False,
                break_on_hyphens=False,
            ).lstrip()
        # If the prolog line-wrapped, ensure that the message is
        # indented an additional level.
        if '\n' in prolog:
            indent = ' ' * 8
        fields.append(prolog)
        initial_indent = indent

    if '\n' not in msg:
        msg = textwrap.fill(
            msg,
            width=width,
            initial_indent=initial_indent,
            subsequent_indent=indent,
            break_long_words=False,
            break_on_hyphens=False,
        )
        if not fields:
            msg = msg.lstrip()
    fields.append(msg)

    if epilog is not None:
        if '\n' not in epilog:
            epilog = textwrap.fill(
                epilog,
                width=width,
                initial_indent=' ' * 4,
                subsequent_indent=' ' * 4,
                break_long_words=False,
                break_on_hyphens=False,
            )
        fields.append(epilog)

    return '\n'.join(fields)


def _fmt_index(index):
    if isinstance(index, tuple):
        return '(' + ', '.join(repr(i) for i in index) + ')'
    return repr(index)


def _fmt_expr(expr):
    # Local import: the node module imports this one
    from genlp.core.expr.nodes import to_string

    try:
        return to_string(expr)
    except Exception:
        return repr(expr)


class GenLPException(Exception):
    """
    Exception class for other GenLP exceptions to inherit from,
    allowing GenLP exceptions to be caught in a general way
    (e.g., in other applications that use GenLP).
    Subclasses can define a class-level `default_message` attribute.
    """

    def __init__(self, *args):
        if not args and getattr(self, 'default_message', None):
            args = (self.default_message,)
        return super().__init__(*args)


class DeveloperError(GenLPException, NotImplementedError):
    """
    Exception class used to throw errors that result from GenLP
    programming errors, rather than user modeling errors (e.g., a
    component not declaring a 'ctype').
    """

    def __str__(self):
        return format_exception(
            repr(super().__str__()),
            prolog="Internal GenLP implementation error:",
            epilog="Please report this to the GenLP Developers.",
            exception=self,
        )


class InfeasibleConstraintException(GenLPException):
    """
    Exception class used by GenLP if it detects a constraint that can
    never be satisfied (e.g., ``x <= -inf``).
    """


class ModelingError(GenLPException):
    """Base class for errors detected while compiling model statements.

    Every subclass stores the structured context it was raised with
    (symbol names, index tuples, access paths or the offending
    expression) as attributes, and renders a complete message from
    them.

    """

    def __init__(self, *args, **context):
        for key, val in context.items():
            setattr(self, key, val)
        if not args:
            args = (self._build_message(),)
        super().__init__(*args)

    def _build_message(self):
        return getattr(self, 'default_message', self.__class__.__name__)


class _KeyErrorMessage(object):
    # KeyError.__str__ returns the repr() of the message
    def __str__(self):
        return Exception.__str__(self)


class UnknownSymbol(ModelingError, NameError):
    """A referenced symbol is bound neither by a generator nor by the
    model parameters."""

    def __init__(self, symbol):
        super().__init__(symbol=symbol)

    def _build_message(self):
        return format_exception(
            "Symbol '%s' is not bound by any generator and is not a model "
            "parameter." % (self.symbol,),
            exception=self,
        )


class InvalidGeneratorDomain(ModelingError, TypeError):
    """A generator domain did not evaluate to an enumerable value."""

    def __init__(self, symbol, domain):
        super().__init__(symbol=symbol, domain=domain)

    def _build_message(self):
        return format_exception(
            "The domain for generator '%s' is not enumerable: %r (type %s)."
            % (self.symbol, self.domain, type(self.domain).__name__),
            exception=self,
        )


class UndeclaredVariable(_KeyErrorMessage, ModelingError, KeyError):
    def __init__(self, family, index):
        super().__init__(family=family, index=index)

    def _build_message(self):
        return format_exception(
            "Variable '%s' has no declared instance with index %s."
            % (self.family, _fmt_index(self.index)),
            exception=self,
        )


class DuplicateVariable(ModelingError, ValueError):
    def __init__(self, family, index, name=None):
        super().__init__(family=family, index=index, name=name)

    def _build_message(self):
        msg = "Variable '%s' with index %s is already declared" % (
            self.family,
            _fmt_index(self.index),
        )
        if self.name is not None:
            msg += " (an instance named '%s' already exists)" % (self.name,)
        return format_exception(msg + ".", exception=self)


class DuplicateConstraintName(ModelingError, ValueError):
    def __init__(self, name):
        super().__init__(name=name)

    def _build_message(self):
        return format_exception(
            "A constraint named '%s' already exists in the model." % (self.name,),
            exception=self,
        )


class EmptyWildcardDomain(ModelingError, ValueError):
    """The domains inferred for one wildcard slot have no common value."""

    def __init__(self, expr, domains):
        super().__init__(expr=expr, domains=domains)

    def _build_message(self):
        return format_exception(
            "The wildcard domains inferred for '%s' have an empty "
            "intersection: %s."
            % (
                _fmt_expr(self.expr),
                '; '.join(
                    '%s -> %s' % (src, list(vals)) for src, vals in self.domains
                ),
            ),
            exception=self,
        )


class UnresolvableWildcard(ModelingError, ValueError):
    def __init__(self, expr, reason=None):
        super().__init__(expr=expr, reason=reason)

    def _build_message(self):
        msg = "Cannot infer a domain for the wildcard in '%s'" % (
            _fmt_expr(self.expr),
        )
        if self.reason:
            msg += ": " + self.reason
        return format_exception(msg + ".", exception=self)


class NonNumericConstant(ModelingError, TypeError):
    """A constant value was used where a number is required."""

    def __init__(self, value, expr=None):
        super().__init__(value=value, expr=expr)

    def _build_message(self):
        msg = "Expected a numeric value but found %r (type %s)" % (
            self.value,
            type(self.value).__name__,
        )
        if self.expr is not None:
            msg += " when evaluating '%s'" % (_fmt_expr(self.expr),)
        return format_exception(msg + ".", exception=self)


class MissingKey(_KeyErrorMessage, ModelingError, KeyError):
    """Nested constant access failed.

    ``path`` holds the name of the outermost container followed by every
    key traversed, up to and including the key that could not be found.

    """

    def __init__(self, path, key=None, reason=None):
        path = tuple(path)
        if key is None and path:
            key = path[-1]
        super().__init__(path=path, key=key, reason=reason)

    def _build_message(self):
        if self.path:
            where = str(self.path[0]) + ''.join(
                '[%r]' % (k,) for k in self.path[1:]
            )
        else:
            where = '<unknown>'
        msg = "Key %r not found when evaluating %s" % (self.key, where)
        if self.reason:
            msg += ": " + self.reason
        return format_exception(msg + ".", exception=self)


class DivisionByNonConstant(ModelingError, ValueError):
    def __init__(self, expr):
        super().__init__(expr=expr)

    def _build_message(self):
        return format_exception(
            "Division by an expression containing variables is not "
            "linear: '%s'." % (_fmt_expr(self.expr),),
            exception=self,
        )


class DivisionByZero(ModelingError, ZeroDivisionError):
    def __init__(self, expr):
        super().__init__(expr=expr)

    def _build_message(self):
        return format_exception(
            "Division by zero in '%s'." % (_fmt_expr(self.expr),), exception=self
        )


class NonlinearExpression(ModelingError, ValueError):
    """The product of two expressions that both contain variables."""

    def __init__(self, expr):
        super().__init__(expr=expr)

    def _build_message(self):
        return format_exception(
            "The expression '%s' is not linear: both factors of the product "
            "contain variables." % (_fmt_expr(self.expr),),
            exception=self,
        )


class InvalidIndex(ModelingError, TypeError):
    def __init__(self, family, expr):
        super().__init__(family=family, expr=expr)

    def _build_message(self):
        return format_exception(
            "Index '%s' of variable '%s' does not evaluate to a constant."
            % (_fmt_expr(self.expr), self.family),
            exception=self,
        )
