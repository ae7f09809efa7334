#!/usr/bin/env python
# -*- coding: utf-8 -*-

import logging
import sys

import pytest

from http_promise.common import log
from http_promise.common.log import ColoredFormatter, Context, \
    set_debug_mode, set_logs_level

colorFormater = ColoredFormatter()


@pytest.fixture(autouse=True)
def restore_levels():
    names = ['', 'http_promise', 'http_promise.http', 'http_promise.promise']
    levels = dict((n, logging.getLogger(n).level) for n in names)
    yield
    for name, level in levels.items():
        logging.getLogger(name).setLevel(level)


class TestLogFormating(object):

    @pytest.mark.parametrize('level', ['DEBUG', 'INFO', 'WARNING', 'ERROR'])
    def test_colorize(self, level):
        assert colorFormater._colorize("plop", level) == \
            ColoredFormatter._colors[level] + "plop" + \
            ColoredFormatter._colors['RESET']

    def test_colorize_unknown(self):
        assert colorFormater._colorize("plop", "UNKNOWN") == \
            "plop" + ColoredFormatter._colors['RESET']

    def test_format_exception(self):
        try:
            raise ValueError('bad value')
        except ValueError:
            ei = sys.exc_info()

        result = colorFormater.formatException(ei)
        assert ColoredFormatter._colors['EXCEPTION_NAME'] + 'ValueError' \
            in result
        assert "ValueError('bad value')" in result

    def test_format_keeps_record_intact(self):
        record = logging.makeLogRecord({'name': 'http_promise',
                                        'levelname': 'INFO',
                                        'msg': 'message'})
        output = colorFormater.format(record)
        assert 'message' in output
        assert record.name == 'http_promise'
        assert record.levelname == 'INFO'


class TestLogLevels(object):

    def test_set_debug_mode_true(self):
        set_debug_mode(True)
        assert logging.getLogger().level == logging.INFO
        assert logging.getLogger('http_promise').level == logging.DEBUG

    def test_set_debug_mode_false(self):
        set_debug_mode(False)
        assert logging.getLogger().level == logging.WARNING
        assert logging.getLogger('http_promise').level == logging.INFO

    def test_set_logs_level(self):
        set_logs_level({'http_promise.http': 'debug',
                        'http_promise.promise': 40})
        assert logging.getLogger('http_promise.http').level == logging.DEBUG
        assert logging.getLogger('http_promise.promise').level == \
            logging.ERROR

    def test_set_invalid_logs_level(self, caplog):
        set_logs_level({'http_promise.http': 'plop'})
        assert 'Invalid log level' in caplog.text


class TestContext(object):

    def test_context_add_and_remove_handlers(self):
        root_logger = logging.getLogger()
        handlers = list(root_logger.handlers)

        with Context() as context:
            assert len(root_logger.handlers) == len(handlers) + 1
            assert logging.getLevelName(log.HIDEBUG) == 'HIDEBUG'
            assert context is not None

        assert root_logger.handlers == handlers

    def test_context_with_log_file(self, tmpdir, monkeypatch):
        monkeypatch.setattr(log.http_promise_path, 'get_log_dir',
                            lambda: str(tmpdir))

        with Context('test.log'):
            logging.getLogger('http_promise.test').info('written in file')

        assert 'written in file' in tmpdir.join('test.log').read()

    def test_context_applies_the_config(self, monkeypatch):
        settings = {'debug_mode': False,
                    'log_levels': {'http_promise.http': 'hidebug',
                                   'http_promise.promise': 'error'}}
        monkeypatch.setattr(log.config, 'get', settings.get)

        with Context():
            assert logging.getLogger().level == logging.WARNING
            assert logging.getLogger('http_promise').level == logging.INFO
            assert logging.getLogger('http_promise.http').level == \
                log.HIDEBUG
            assert logging.getLogger('http_promise.promise').level == \
                logging.ERROR

    def test_context_in_debug_mode(self, monkeypatch):
        settings = {'debug_mode': True, 'log_levels': {}}
        monkeypatch.setattr(log.config, 'get', settings.get)

        with Context():
            assert logging.getLogger('http_promise').level == logging.DEBUG
