# -*- coding: utf-8 -*-
"""Implements compiling httplogger templates into reusable
formatters, which turn a finished request into an access-log line.
"""

from httplogger.context import note
from httplogger.common import get_log_format
from httplogger.tokens import DEFAULT_REGISTRY
from httplogger.formatutils import TokenRef, tokenize_template, escape_literal


__all__ = ['CompiledFormatter', 'compile_format']


PLACEHOLDER = '%s'
EMPTY_VALUE = '-'


class CompiledFormatter(object):
    """The ``CompiledFormatter`` is the product of compiling a
    template. Compilation resolves named formats, scans the template
    for token references, and looks each token up in a
    :class:`~httplogger.tokens.TokenRegistry`, once. After that, the
    formatter is never modified, and can be shared freely between
    concurrently-handled requests.

    Args:
        template (str): A template such as ``":method :url :status"``,
            or the name of a predefined format, such as ``"combined"``.
        registry (TokenRegistry): Where token extractors are looked
            up. Defaults to the shared default registry.

    Calling the formatter produces a *skeleton*, the template's
    literal text with a ``%s`` standing in for each token, and the
    list of values for those placeholders, in template order:

    >>> fmtr = CompiledFormatter(':method :url')
    >>> fmtr.skeleton
    '%s %s'

    Empty token values are rendered as ``-``.
    """
    def __init__(self, template, registry=None):
        if registry is None:
            registry = DEFAULT_REGISTRY
        self.registry = registry
        self.raw_template = template
        self.template = get_log_format(template)

        skeleton, bindings = [], []
        for token in tokenize_template(self.template):
            if isinstance(token, TokenRef):
                skeleton.append(PLACEHOLDER)
                bindings.append((token.name,
                                 self.registry.lookup(token.name),
                                 token.arg))
            else:
                skeleton.append(escape_literal(token))
        self.skeleton = ''.join(skeleton)
        self.bindings = tuple(bindings)

    @property
    def token_names(self):
        return [name for name, _, _ in self.bindings]

    def format(self, res, req, ts, dur):
        """Returns a tuple of the skeleton string and the list of
        extracted values to substitute into it. Exceptions raised by
        extractors are noted and the value rendered as ``-``.
        """
        vals = []
        for name, func, arg in self.bindings:
            try:
                val = func(res, req, ts, dur, arg)
            except Exception as e:
                note('token_error', 'token %r raised %r', name, e)
                val = None
            if val is None or val == '':
                val = EMPTY_VALUE
            elif not isinstance(val, str):
                val = str(val)
            vals.append(val)
        return self.skeleton, vals

    def render(self, res, req, ts, dur):
        skeleton, vals = self.format(res, req, ts, dur)
        return skeleton % tuple(vals)

    def __repr__(self):
        return '%s(%r)' % (self.__class__.__name__, self.raw_template)

    __call__ = format


def compile_format(template, registry=None):
    return CompiledFormatter(template, registry=registry)
