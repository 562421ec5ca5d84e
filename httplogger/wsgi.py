# -*- coding: utf-8 -*-
"""Adapters between WSGI (PEP 3333) and the request and response
views that httplogger's tokens read from.
"""

import base64
import binascii
from http import HTTPStatus

from boltons.cacheutils import cachedproperty

from httplogger.response import Headers


__all__ = ['WSGIRequest', 'WSGIResponseWriter',
           'parse_basic_auth', 'parse_status_line']


# CGI-style keys which carry request headers but lack the HTTP_ prefix
_UNPREFIXED_HEADERS = {'CONTENT_TYPE': 'Content-Type',
                       'CONTENT_LENGTH': 'Content-Length'}


def parse_basic_auth(value):
    """Returns a ``(username, password)`` tuple from the value of an
    Authorization header using the Basic scheme, or ``None`` if the
    value is missing or malformed.
    """
    prefix = 'basic '
    if not value or value[:len(prefix)].lower() != prefix:
        return None
    try:
        decoded = base64.b64decode(value[len(prefix):], validate=True)
    except (binascii.Error, ValueError):
        return None
    username, sep, password = decoded.decode('utf-8', 'replace').partition(':')
    if not sep:
        return None
    return username, password


def parse_status_line(status):
    "Returns the integer code of a WSGI status line, or 0."
    try:
        return int(status.split(None, 1)[0])
    except (AttributeError, IndexError, ValueError):
        return 0


class WSGIRequest(object):
    "A read-only view of a WSGI environ."
    def __init__(self, environ):
        self.environ = environ

    @property
    def remote_addr(self):
        return self.environ.get('REMOTE_ADDR', '')

    @property
    def method(self):
        return self.environ.get('REQUEST_METHOD', '')

    @property
    def path(self):
        return (self.environ.get('SCRIPT_NAME', '')
                + self.environ.get('PATH_INFO', ''))

    @property
    def proto(self):
        return self.environ.get('SERVER_PROTOCOL', '')

    @cachedproperty
    def headers(self):
        ret = Headers()
        for key, value in self.environ.items():
            if key.startswith('HTTP_'):
                ret.add(key[5:].replace('_', '-'), value)
            elif key in _UNPREFIXED_HEADERS and value:
                ret.add(_UNPREFIXED_HEADERS[key], value)
        return ret

    @property
    def referrer(self):
        return self.headers.get('Referer', '')

    @property
    def user_agent(self):
        return self.headers.get('User-Agent', '')

    def basic_auth(self):
        return parse_basic_auth(self.headers.get('Authorization'))

    def __repr__(self):
        cn = self.__class__.__name__
        return '<%s %s %r>' % (cn, self.method, self.path)


class WSGIResponseWriter(object):
    """A response sink in front of a WSGI server's ``start_response``.
    Headers accumulate in *headers* until :meth:`write_header` starts
    the response, which returns the server's ``write`` callable.
    """
    def __init__(self, start_response):
        self.headers = Headers()
        self.status_line = None
        self._start_response = start_response
        self._write = None

    def write_header(self, status_code, status_line=None, exc_info=None):
        if status_line is None:
            try:
                reason = HTTPStatus(status_code).phrase
            except ValueError:
                reason = 'Unknown'
            status_line = '%d %s' % (status_code, reason)
        self.status_line = status_line
        self._write = self._start_response(status_line, self.headers.items(),
                                           exc_info)
        return self._write

    def write(self, data):
        if self._write is None:
            self.write_header(200)
        return self._write(data)

    def __repr__(self):
        cn = self.__class__.__name__
        return '<%s status_line=%r>' % (cn, self.status_line)
