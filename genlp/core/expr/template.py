#  ___________________________________________________________________________
#
#  GenLP: Generator-based Linear Programming models
#  Copyright (c) 2025 The GenLP Developers
#  Portions derived from Pyomo, Copyright (c) 2008-2025 National Technology
#  and Engineering Solutions of Sandia, LLC.
#  This software is distributed under the 3-clause BSD License.
#  ___________________________________________________________________________

"""Interpolation of symbol references into name and description
templates.

A template is plain text with ``{symbol}`` references, for example
``"row_{i}_{food}"``.  Doubled braces (``{{`` and ``}}``) produce
literal braces.
"""

import enum

import ply.lex


def _build_lexer():
    tokens = ["LBRACE", "RBRACE", "REFERENCE", "TEXT"]

    def t_LBRACE(t):
        r'\{\{'
        t.value = '{'
        return t

    def t_RBRACE(t):
        r'\}\}'
        t.value = '}'
        return t

    def t_REFERENCE(t):
        r'\{[ \t]*[A-Za-z_][A-Za-z0-9_]*[ \t]*\}'
        t.value = t.value[1:-1].strip()
        return t

    def t_TEXT(t):
        r'[^{}]+'
        return t

    # Error handling rule
    def t_error(t):
        raise ValueError(
            "Invalid template: unmatched brace at column %s in %r"
            % (t.lexpos + 1, t.lexer.lexdata)
        )

    return ply.lex.lex()


def _tokenize(template):
    _lex = _tokenize._lex
    if _lex is None:
        _tokenize._lex = _lex = _build_lexer()
    _lex.input(template)
    while True:
        tok = _lex.token()
        if not tok:
            break
        yield tok


_tokenize._lex = None


def _value_text(value):
    if isinstance(value, enum.Enum):
        return value.name
    return str(value)


def template_symbols(template):
    """Return the symbols referenced by ``template``, in order"""
    return [tok.value for tok in _tokenize(template) if tok.type == 'REFERENCE']


def interpolate(template, env):
    """Substitute every ``{symbol}`` in ``template`` with its bound value

    Raises
    ------
    UnknownSymbol
        if a referenced symbol is not bound in ``env``
    ValueError
        if the template contains an unmatched brace
    """
    if template is None:
        return None
    # The lexer is a generator over shared state; materialize the
    # tokens before resolving symbols.
    return ''.join(
        _value_text(env.resolve(tok.value)) if tok.type == 'REFERENCE' else tok.value
        for tok in list(_tokenize(template))
    )
