# -*- coding: utf-8 -*-
"""httplogger comes with the usual access-log *tokens* built in. A
token is a named extractor: a function called at request time with the
response, the request, the request's start timestamp, its duration,
and the token's bracketed argument (or ``None``), and returning text.

Tokens are looked up in a :class:`TokenRegistry` when a template is
compiled. Custom tokens are added with :meth:`TokenRegistry.register`,
or with :func:`register_token` for the default registry::

    register_token('request-id', lambda res, req, ts, dur, arg:
                   req.headers.get('X-Request-Id'))

Registration is meant to happen at configuration time, before any
request traffic. Formatters bind their extractors when they are
compiled, so registering a token does not change formatters that
already exist.
"""

import datetime

from boltons.timeutils import UTC

from httplogger.common import (RESET, RED, YELLOW, CYAN, GREEN,
                               DEFAULT_TIME_FORMAT,
                               DEFAULT_RESPONSE_TIME_DIGITS)
from httplogger.formatutils import is_token_name


__all__ = ['TokenRegistry', 'DEFAULT_REGISTRY', 'register_token',
           'missing_token', 'color_status']


BUILTIN_TOKEN_MAP = {}  # populated below


class TokenRegistry(object):
    """A mapping of token names to extractor functions.

    Args:
        tokens (dict): Optional initial map of names to extractors.

    Lookups of unregistered names return :func:`missing_token`
    rather than raising, so templates referencing unknown tokens
    still compile and simply render ``-`` in that position.
    """
    def __init__(self, tokens=None):
        self._token_map = {}
        for name, func in dict(tokens or {}).items():
            self.register(name, func)

    def register(self, name, func):
        if not is_token_name(name):
            raise ValueError('expected token name of two or more word'
                             ' characters or hyphens, not: %r' % (name,))
        if not callable(func):
            raise TypeError('expected callable extractor for token %r, not %r'
                            % (name, func))
        self._token_map[name] = func

    def lookup(self, name):
        return self._token_map.get(name, missing_token)

    def names(self):
        return sorted(self._token_map)

    def copy(self):
        return self.__class__(self._token_map)

    def __contains__(self, name):
        return name in self._token_map

    def __len__(self):
        return len(self._token_map)

    def __repr__(self):
        return '<%s tokens=%r>' % (self.__class__.__name__, self.names())


def missing_token(res, req, ts, dur, arg):
    "The extractor bound to token names nobody registered."
    return ''


def register_builtin_token(name, func):
    BUILTIN_TOKEN_MAP[name] = func
    DEFAULT_REGISTRY.register(name, func)


def register_token(name, func):
    DEFAULT_REGISTRY.register(name, func)


# English names, independent of the process locale
_WEEKDAYS = ('Mon', 'Tue', 'Wed', 'Thu', 'Fri', 'Sat', 'Sun')
_MONTHS = ('Jan', 'Feb', 'Mar', 'Apr', 'May', 'Jun',
           'Jul', 'Aug', 'Sep', 'Oct', 'Nov', 'Dec')


def to_utc_datetime(timestamp):
    """Accepts a POSIX timestamp or a datetime. Naive datetimes are
    assumed to already be in UTC.
    """
    if isinstance(timestamp, datetime.datetime):
        if timestamp.tzinfo is None:
            return timestamp.replace(tzinfo=UTC)
        return timestamp.astimezone(UTC)
    return datetime.datetime.fromtimestamp(timestamp, tz=UTC)


def format_clf(dt):
    return ('%02d/%s/%04d:%02d:%02d:%02d +0000'
            % (dt.day, _MONTHS[dt.month - 1], dt.year,
               dt.hour, dt.minute, dt.second))


def format_iso(dt):
    return ('%04d-%02d-%02dT%02d:%02d:%02d.%03dZ'
            % (dt.year, dt.month, dt.day, dt.hour, dt.minute, dt.second,
               dt.microsecond // 1000))


def format_web(dt):
    return ('%s, %02d %s %04d %02d:%02d:%02d GMT'
            % (_WEEKDAYS[dt.weekday()], dt.day, _MONTHS[dt.month - 1],
               dt.year, dt.hour, dt.minute, dt.second))


TIME_FORMATTERS = {'clf': format_clf,
                   'iso': format_iso,
                   'web': format_web}


def color_status(status, text):
    if status >= 500:
        color = RED  # server error
    elif status >= 400:
        color = YELLOW  # client error
    elif status >= 300:
        color = CYAN  # redirect
    elif status >= 200:
        color = GREEN  # success
    else:
        return text
    return color + text + RESET


def duration_micros(duration):
    if isinstance(duration, datetime.timedelta):
        return duration // datetime.timedelta(microseconds=1)
    return int(round(duration * 1e6))


def _date(res, req, ts, dur, arg):
    time_formatter = TIME_FORMATTERS.get(arg)
    if time_formatter is None:
        time_formatter = TIME_FORMATTERS[DEFAULT_TIME_FORMAT]
    return time_formatter(to_utc_datetime(ts))


def _remote_user(res, req, ts, dur, arg):
    credentials = req.basic_auth()
    if credentials:
        return credentials[0]
    return ''


def _http_version(res, req, ts, dur, arg):
    proto = req.proto or ''
    if proto.startswith('HTTP/'):
        return proto[5:]
    return proto


def _status(res, req, ts, dur, arg):
    status_code = res.status_code
    val = '-'
    if status_code:
        val = str(status_code)
    if arg == 'clr':
        val = color_status(status_code, val)
    return val


def _req_header(res, req, ts, dur, arg):
    if not arg:
        return ''
    return ', '.join(req.headers.get_all(arg))


def _res_header(res, req, ts, dur, arg):
    if not arg:
        return ''
    return ', '.join(res.headers.get_all(arg))


def _response_time(res, req, ts, dur, arg):
    try:
        digits = int(arg)
    except (TypeError, ValueError):
        digits = DEFAULT_RESPONSE_TIME_DIGITS
    micros = duration_micros(dur)
    if digits > 0:
        return '%.*f' % (digits, micros / 1000.0)
    return str(micros // 1000)


BASIC_TOKENS = [('remote-addr', lambda res, req, ts, dur, arg: req.remote_addr),
                ('remote-user', _remote_user),
                ('date', _date),
                ('method', lambda res, req, ts, dur, arg: req.method),
                ('url', lambda res, req, ts, dur, arg: req.path),
                ('http-version', _http_version),
                ('status', _status),
                ('req', _req_header),
                ('res', _res_header),
                ('referrer', lambda res, req, ts, dur, arg: req.referrer),
                ('user-agent', lambda res, req, ts, dur, arg: req.user_agent),
                ('response-time', _response_time)]


DEFAULT_REGISTRY = TokenRegistry()

for name, func in BASIC_TOKENS:
    register_builtin_token(name, func)

del name, func
