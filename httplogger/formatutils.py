# -*- coding: utf-8 -*-
"""Tokenizing support for httplogger templates.

A template is plain text with token references embedded in it. A
reference is a colon followed by a name of two or more word characters
or hyphens, optionally followed by a single bracketed argument::

    :method :url :status[clr] :response-time[1] ms

:func:`tokenize_template` splits a template into a list of literal
strings and :class:`TokenRef` objects, in source order.
"""

from collections import namedtuple


__all__ = ['TokenRef', 'tokenize_template', 'escape_literal', 'is_token_name']


TOKEN_START = ':'
ARG_OPEN, ARG_CLOSE = '[', ']'
MIN_NAME_LEN = 2
NAME_CHARS = frozenset('abcdefghijklmnopqrstuvwxyz'
                       'ABCDEFGHIJKLMNOPQRSTUVWXYZ'
                       '0123456789_-')


class TokenRef(namedtuple('TokenRef', 'name arg')):
    """A single token reference. *arg* is ``None`` when the reference
    carries no bracketed argument.
    """
    __slots__ = ()

    def __str__(self):
        if self.arg is None:
            return TOKEN_START + self.name
        return '%s%s%s%s%s' % (TOKEN_START, self.name,
                               ARG_OPEN, self.arg, ARG_CLOSE)


def is_token_name(name):
    try:
        return len(name) >= MIN_NAME_LEN and all([c in NAME_CHARS
                                                  for c in name])
    except TypeError:
        return False


def _scan_name(template, start):
    end, size = start, len(template)
    while end < size and template[end] in NAME_CHARS:
        end += 1
    return end


def _scan_arg(template, start):
    # returns (arg, end) or (None, start) if no well-formed [arg] follows
    if not template.startswith(ARG_OPEN, start):
        return None, start
    close = template.find(ARG_CLOSE, start + 1)
    if close <= start + 1:
        # unterminated, or empty brackets
        return None, start
    return template[start + 1:close], close + 1


def tokenize_template(template):
    """Split *template* into literal text segments and
    :class:`TokenRef` instances. Adjacent literal text is merged into
    a single string, so literals and refs need not alternate, but no
    two strings are ever adjacent.

    >>> tokenize_template('[:date[clf]] :method')
    ['[', TokenRef(name='date', arg='clf'), '] ', TokenRef(name='method', arg=None)]

    Scanning is permissive: a colon not followed by a valid name, and
    brackets not forming a valid argument, are kept as literal text.
    """
    ret, literal = [], ''
    pos, size = 0, len(template)
    while pos < size:
        colon = template.find(TOKEN_START, pos)
        if colon < 0:
            literal += template[pos:]
            break
        literal += template[pos:colon]
        name_end = _scan_name(template, colon + 1)
        if name_end - (colon + 1) < MIN_NAME_LEN:
            literal += TOKEN_START
            pos = colon + 1
            continue
        name = template[colon + 1:name_end]
        arg, pos = _scan_arg(template, name_end)
        if literal:
            ret.append(literal)
            literal = ''
        ret.append(TokenRef(name, arg))
    if literal:
        ret.append(literal)
    return ret


def escape_literal(text):
    "Escape *text* for use in a %-style skeleton."
    return text.replace('%', '%%')
