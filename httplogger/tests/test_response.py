# -*- coding: utf-8 -*-

from httplogger.response import Headers, ResponseObserver, canonical_header_key


class BareWriter(object):
    def __init__(self):
        self.headers = Headers()
        self.status_codes = []
        self.written = []

    def write_header(self, status_code, *a, **kw):
        self.status_codes.append(status_code)

    def write(self, data):
        self.written.append(data)
        return len(data)


class CapableWriter(BareWriter):
    def __init__(self):
        super(CapableWriter, self).__init__()
        self.flushes = 0

    def flush(self):
        self.flushes += 1

    def close_notify(self):
        return 'closed-channel'


def test_canonical_header_key():
    assert canonical_header_key('content-length') == 'Content-Length'
    assert canonical_header_key('CONTENT-TYPE') == 'Content-Type'
    assert canonical_header_key('x-forwarded-for') == 'X-Forwarded-For'
    assert canonical_header_key('referer') == 'Referer'


def test_headers():
    headers = Headers([('Set-Cookie', 'a=1'), ('content-type', 'text/html')])
    headers.add('set-cookie', 'b=2')
    assert headers.get_all('SET-COOKIE') == ['a=1', 'b=2']
    assert headers.get('set-cookie') == 'a=1'
    assert headers.get('x-missing') is None
    assert headers.get('x-missing', '') == ''
    assert headers.get_all('x-missing') == []
    assert 'Content-Type' in headers
    assert 'content-type' in headers
    assert len(headers) == 2

    headers.set('Set-Cookie', 'c=3')
    assert headers.get_all('set-cookie') == ['c=3']
    assert headers.items() == [('Content-Type', 'text/html'),
                               ('Set-Cookie', 'c=3')]

    from_map = Headers({'x-one': '1'})
    assert from_map.items() == [('X-One', '1')]
    assert 'X-One' in repr(from_map)


def test_status_unset():
    res = ResponseObserver(BareWriter())
    assert res.status_code == 0
    assert res.content_length == 0


def test_implicit_status():
    writer = BareWriter()
    res = ResponseObserver(writer)
    assert res.write(b'hello') == 5
    assert res.status_code == 200
    assert writer.written == [b'hello']
    # the implicit status is recorded, not sent on
    assert writer.status_codes == []


def test_explicit_status():
    writer = BareWriter()
    res = ResponseObserver(writer)
    res.write_header(404)
    res.write(b'not found')
    assert res.status_code == 404
    assert writer.status_codes == [404]


def test_tally():
    writer = BareWriter()
    res = ResponseObserver(writer)
    res.tally(b'abc')
    res.tally(b'de')
    assert res.status_code == 200
    assert res.content_length == 5
    assert writer.written == []


def test_content_length():
    res = ResponseObserver(BareWriter())
    res.write(b'12345')
    res.write(b'678')
    assert res.content_length == 8

    res.headers.set('Content-Length', '1024')
    assert res.content_length == 1024

    res.headers.set('content-length', 'lots')
    assert res.content_length == 8


def test_malformed_content_length():
    res = ResponseObserver(BareWriter())
    res.write(b'abc')
    for bad_value in ('1_0', ' 7 ', '+5', '-5', '١٢', '', '1.5'):
        res.headers.set('Content-Length', bad_value)
        assert res.content_length == 3, bad_value

    res.headers.set('Content-Length', '0')
    assert res.content_length == 0


def test_capabilities():
    capable = CapableWriter()
    res = ResponseObserver(capable)
    res.flush()
    res.flush()
    assert capable.flushes == 2
    assert res.close_notify() == 'closed-channel'

    bare = ResponseObserver(BareWriter())
    assert bare.flush() is None
    assert bare.close_notify() is None


def test_repr():
    res = ResponseObserver(BareWriter())
    res.write_header(201)
    assert 'status_code=201' in repr(res)
