# -*- coding: utf-8 -*-

from httplogger.context import get_context, set_context

from httplogger.common import LOG_FORMATS, DEFAULT_LOG_FORMAT
from httplogger.tokens import TokenRegistry, DEFAULT_REGISTRY, register_token
from httplogger.formatters import CompiledFormatter, compile_format
from httplogger.response import Headers, ResponseObserver
from httplogger.middleware import RequestLogger, new_logger
from httplogger.emitters import StreamEmitter, FileEmitter, AggregateEmitter
