# -*- coding: utf-8 -*-

from httplogger.context import (HTTPLoggerContext,
                                get_context,
                                set_context,
                                note)


def test_default_context():
    ctx = get_context()
    assert isinstance(ctx, HTTPLoggerContext)
    assert get_context() is ctx


def test_note_handlers():
    notes = []
    ctx = HTTPLoggerContext()
    ctx.note('ignored', 'no handlers, %r', 'nothing happens')

    ctx.note_handlers.append(lambda name, msg: notes.append((name, msg)))
    ctx.note('fmt', 'got %r on %s', ValueError('x'), 'emit')
    ctx.note('plain', 'no args, 100%')
    ctx.note('badfmt', 'too few %s %s', 'args')
    assert notes == [('fmt', "got ValueError('x') on emit"),
                     ('plain', 'no args, 100%'),
                     ('badfmt', 'too few %s %s')]
    assert 'note_handlers' in repr(ctx)


def test_module_note():
    notes = []
    prev_ctx = get_context()
    set_context(HTTPLoggerContext([lambda name, msg: notes.append(name)]))
    try:
        note('module_level', 'hello')
    finally:
        set_context(prev_ctx)
    assert notes == ['module_level']
