# -*- coding: utf-8 -*-
"""The context is where httplogger keeps the few bits of process-wide
state it needs, chiefly the *note handlers* used to report internal
problems. httplogger can't log through itself, so conditions that
have to be robustly ignored, such as an extractor raising mid-request,
are passed along as notes instead.
"""

HTTPLOGGER_CONTEXT = None


def get_context():
    if not HTTPLOGGER_CONTEXT:
        set_context(HTTPLoggerContext())

    return HTTPLOGGER_CONTEXT


def set_context(context):
    global HTTPLOGGER_CONTEXT

    HTTPLOGGER_CONTEXT = context

    return context


def note(name, message, *a, **kw):
    return get_context().note(name, message, *a, **kw)


class HTTPLoggerContext(object):
    def __init__(self, note_handlers=None):
        self.note_handlers = list(note_handlers or [])

    def note(self, name, message, *a, **kw):
        """Hook for recording error conditions that are not allowed to
        interrupt request handling. Each handler in *note_handlers* is
        called with the note *name* and the formatted *message*.
        """
        if not self.note_handlers:
            return
        if a:
            try:
                message = message % a
            except Exception:
                pass
        for nh in self.note_handlers:
            nh(name, message)
        return

    def __repr__(self):
        cn = self.__class__.__name__
        return '<%s note_handlers=%r>' % (cn, self.note_handlers)
