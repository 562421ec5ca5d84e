# -*- coding: utf-8 -*-

from httplogger.formatutils import (TokenRef,
                                    tokenize_template,
                                    escape_literal,
                                    is_token_name)


TR = TokenRef

TOKENIZE_CASES = [('', []),
                  ('no tokens here', ['no tokens here']),
                  (':method', [TR('method', None)]),
                  (':method :url', [TR('method', None), ' ', TR('url', None)]),
                  ('[:date[clf]]', ['[', TR('date', 'clf'), ']']),
                  (':res[content-length]', [TR('res', 'content-length')]),
                  (':response-time[0] ms', [TR('response-time', '0'), ' ms']),
                  # names need at least two characters
                  (':a :bc', [':a ', TR('bc', None)]),
                  ('::method', [':', TR('method', None)]),
                  ('trailing:', ['trailing:']),
                  # empty and unterminated brackets stay literal
                  (':date[]', [TR('date', None), '[]']),
                  (':date[clf', [TR('date', None), '[clf']),
                  # arguments may contain anything but a closing bracket
                  (':req[x:y [z]', [TR('req', 'x:y [z')]),
                  # names are ascii word chars and hyphens, greedily
                  (':user-agent"', [TR('user-agent', None), '"']),
                  (':method.:url', [TR('method', None), '.', TR('url', None)]),
                  (':métho', [':métho'])]


def test_tokenize():
    for template, expected in TOKENIZE_CASES:
        assert tokenize_template(template) == expected, template


def test_token_ref_str():
    for template in (':method', ':date[clf]', ':req[x-forwarded-for]'):
        tokens = tokenize_template(template)
        assert len(tokens) == 1
        assert str(tokens[0]) == template


def test_escape_literal():
    assert escape_literal('100%') == '100%%'
    assert escape_literal('%s') == '%%s'
    assert escape_literal('plain') == 'plain'


def test_is_token_name():
    assert is_token_name('method')
    assert is_token_name('response-time')
    assert is_token_name('x_1')
    assert not is_token_name('x')
    assert not is_token_name('has space')
    assert not is_token_name('')
    assert not is_token_name(None)
