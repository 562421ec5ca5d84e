# -*- coding: utf-8 -*-
"""The :class:`RequestLogger` is the application developer's primary
interface to httplogger. It wraps a WSGI application and writes one
access-log line per request to an :mod:`emitter <httplogger.emitters>`::

    app = RequestLogger(app, 'combined', emitter=FileEmitter('access.log'))

"""

import time

from httplogger.context import note
from httplogger.common import DEFAULT_LOG_FORMAT
from httplogger.emitters import StreamEmitter
from httplogger.formatters import compile_format
from httplogger.response import Headers, ResponseObserver
from httplogger.wsgi import WSGIRequest, WSGIResponseWriter, parse_status_line


__all__ = ['RequestLogger', 'new_logger']


class RequestLogger(object):
    """WSGI middleware which times each request to the wrapped
    application and emits a line rendered from *format_str*.

    Args:
        app: The downstream WSGI application.
        format_str (str): A template or the name of a predefined format
            (``combined``, ``common``, ``dev``, ``short``, ``tiny``,
            ``default``). Defaults to ``dev``.
        registry (TokenRegistry): Where the template's tokens are
            looked up. Defaults to the shared default registry.
        emitter: Any object with an ``emit_entry(line)`` method.
            Defaults to a :class:`~httplogger.emitters.StreamEmitter`
            on stderr.
        clock (callable): Returns the request timestamp, used by the
            ``date`` token. Defaults to :func:`time.time`.
        timer (callable): Monotonic seconds for measuring the response
            time. Defaults to :func:`time.perf_counter`.

    The template is compiled once, here. The line is emitted after the
    application is done with the request, meaning after its response
    iterable is exhausted and closed, or after it raises. Exceptions
    from the application propagate unchanged.
    """
    def __init__(self, app, format_str=DEFAULT_LOG_FORMAT, **kwargs):
        registry = kwargs.pop('registry', None)
        emitter = kwargs.pop('emitter', None)
        self.clock = kwargs.pop('clock', time.time)
        self.timer = kwargs.pop('timer', time.perf_counter)
        if kwargs:
            raise TypeError('unexpected keyword arguments: %r' % list(kwargs))
        if emitter is None:
            emitter = StreamEmitter('stderr')
        self.app = app
        self.emitter = emitter
        self.formatter = compile_format(format_str, registry=registry)

    def __call__(self, environ, start_response):
        start_ts, start = self.clock(), self.timer()
        req = WSGIRequest(environ)
        writer = WSGIResponseWriter(start_response)
        res = ResponseObserver(writer)

        def observed_start_response(status, headers, exc_info=None):
            writer.headers = Headers(headers)
            res.write_header(parse_status_line(status), status, exc_info)
            return res.write

        def on_close():
            self.log_request(res, req, start_ts, self.timer() - start)

        try:
            app_iter = self.app(environ, observed_start_response)
        except Exception:
            log_noting_errors(on_close)
            raise
        return ObservedBody(app_iter, res, on_close)

    def log_request(self, res, req, ts, dur):
        line = self.formatter.render(res, req, ts, dur)
        self.emitter.emit_entry(line)

    def __repr__(self):
        cn = self.__class__.__name__
        return ('<%s app=%r formatter=%r emitter=%r>'
                % (cn, self.app, self.formatter, self.emitter))


class ObservedBody(object):
    """Wraps a WSGI response iterable, counting body bytes as the server
    consumes them. *on_close* is called exactly once, when the server
    closes the body, after the wrapped iterable's own ``close()``.

    If the application failed, while iterating or while closing, errors
    raised by *on_close* are noted rather than raised, so that the
    application's exception is the one the server sees.
    """
    def __init__(self, app_iter, res, on_close):
        self.app_iter = app_iter
        self.res = res
        self.on_close = on_close
        self.closed = False
        self.failed = False

    def __iter__(self):
        try:
            for chunk in self.app_iter:
                self.res.tally(chunk)
                yield chunk
        except Exception:
            self.failed = True
            raise

    def close(self):
        if self.closed:
            return
        self.closed = True
        app_close = getattr(self.app_iter, 'close', None)
        if callable(app_close):
            try:
                app_close()
            except Exception:
                log_noting_errors(self.on_close)
                raise
        if self.failed:
            log_noting_errors(self.on_close)
        else:
            self.on_close()


def log_noting_errors(on_close):
    "For logging requests whose application raised."
    try:
        on_close()
    except Exception as e:
        note('log_error', 'got %r logging a failed request', e)


def new_logger(app, format_str=DEFAULT_LOG_FORMAT, **kwargs):
    return RequestLogger(app, format_str, **kwargs)
