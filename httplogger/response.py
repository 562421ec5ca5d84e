# -*- coding: utf-8 -*-
"""Types for observing a response as the downstream application
produces it, without changing how it is produced.
"""

from boltons.dictutils import OrderedMultiDict


__all__ = ['Headers', 'ResponseObserver', 'canonical_header_key']


def canonical_header_key(name):
    """Returns the canonical form of header *name*, with the first letter
    and any letter following a hyphen uppercased, and the rest
    lowercased.

    >>> canonical_header_key('content-length')
    'Content-Length'
    """
    return '-'.join([part[:1].upper() + part[1:].lower()
                     for part in name.split('-')])


class Headers(object):
    """An ordered, case-insensitive multimap of HTTP headers. Accepts an
    iterable of ``(name, value)`` pairs, such as a WSGI header list,
    or a mapping.
    """
    def __init__(self, items=None):
        self._omd = OrderedMultiDict()
        if items:
            self.extend(items)

    def add(self, name, value):
        self._omd.add(canonical_header_key(name), value)

    def set(self, name, value):
        self._omd[canonical_header_key(name)] = value

    def get(self, name, default=None):
        vals = self.get_all(name)
        return vals[0] if vals else default

    def get_all(self, name):
        return self._omd.getlist(canonical_header_key(name))

    def extend(self, items):
        if hasattr(items, 'items'):
            items = items.items()
        for name, value in items:
            self.add(name, value)

    def items(self):
        return self._omd.items(multi=True)

    def __contains__(self, name):
        return canonical_header_key(name) in self._omd

    def __len__(self):
        return len(self._omd)

    def __repr__(self):
        return '%s(%r)' % (self.__class__.__name__, self.items())


def _get_capability(target, name):
    func = getattr(target, name, None)
    if callable(func):
        return func
    return None


class ResponseObserver(object):
    """Wraps a response sink, recording the status code and the number
    of body bytes written, and otherwise passing everything through.

    Args:
        wrapped: The response sink. It must have a ``headers``
            attribute (a :class:`Headers`), and ``write_header()`` and
            ``write()`` methods. ``flush()`` and ``close_notify()`` are
            passed through when the sink has them, and are no-ops
            otherwise.

    The observer is owned by the single request that created it.
    """
    def __init__(self, wrapped):
        self.wrapped = wrapped
        self._status_code = 0
        self._bytes_written = 0
        self._flush = _get_capability(wrapped, 'flush')
        self._close_notify = _get_capability(wrapped, 'close_notify')

    @property
    def headers(self):
        return self.wrapped.headers

    @property
    def status_code(self):
        "The explicitly-set status code, 200 after an implicit set, or 0."
        return self._status_code

    @property
    def content_length(self):
        """The value of the Content-Length header, if set to an integer,
        otherwise the count of body bytes written so far.
        """
        clh = self.headers.get('Content-Length')
        # plain ascii digits only, no whitespace, signs or underscores
        if clh and clh.isascii() and clh.isdigit():
            return int(clh)
        return self._bytes_written

    def write_header(self, status_code, *a, **kw):
        self._status_code = status_code
        return self.wrapped.write_header(status_code, *a, **kw)

    def tally(self, data):
        """Account for body bytes sent on by other means than
        :meth:`write`, such as a WSGI application's return iterable.
        """
        if not self._status_code:
            self._status_code = 200
        self._bytes_written += len(data)

    def write(self, data):
        self.tally(data)
        return self.wrapped.write(data)

    def flush(self):
        if self._flush is not None:
            self._flush()

    def close_notify(self):
        if self._close_notify is not None:
            return self._close_notify()
        return None

    def __repr__(self):
        cn = self.__class__.__name__
        return ('<%s status_code=%r bytes_written=%r wrapped=%r>'
                % (cn, self._status_code, self._bytes_written, self.wrapped))
