# -*- coding: utf-8 -*-

# ANSI SGR sequences used by the :status[clr] token
RESET = '\x1b[0m'
RED = '\x1b[31m'
YELLOW = '\x1b[33m'
GREEN = '\x1b[32m'
CYAN = '\x1b[36m'

DEFAULT_TIME_FORMAT = 'web'

DEFAULT_RESPONSE_TIME_DIGITS = 3

LOG_FORMATS = {
    'combined': (':remote-addr - :remote-user [:date[clf]]'
                 ' ":method :url HTTP/:http-version" :status'
                 ' :res[content-length] ":referrer" ":user-agent"'),
    'common': (':remote-addr - :remote-user [:date[clf]]'
               ' ":method :url HTTP/:http-version" :status'
               ' :res[content-length]'),
    'dev': (RESET + ':method :url :status[clr] :response-time ms'
            ' - :res[content-length]'),
    'short': (':remote-addr :remote-user :method :url HTTP/:http-version'
              ' :status :res[content-length] - :response-time ms'),
    'tiny': ':method :url :status :res[content-length] - :response-time ms',
    'default': (':remote-addr - :remote-user [:date]'
                ' ":method :url HTTP/:http-version" :status'
                ' :res[content-length] ":referrer" ":user-agent"'),
}
DEFAULT_LOG_FORMAT = 'dev'


def get_log_format(template):
    "Returns the named format for *template*, or *template* itself."
    return LOG_FORMATS.get(template, template)
