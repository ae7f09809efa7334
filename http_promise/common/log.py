# -*- coding: utf-8 -*-

"""Configuration module of the logs.

This module configure the python ``logging`` module, in order to have useful
and easy to activate logs.

Log entries are displayed to the output console, and optionally written in a
file. On console output, if the system supports it, logs entries will be
colorized.

Exceptions are formatted to display a lot of details, easily readable.

The library itself never configures the logs: it's up to the application to
use the ``Context``.
"""

import logging
import os.path
import sys

from . import config
from . import path as http_promise_path

# Very verbose level, used to trace each request sent.
HIDEBUG = 5


def _support_color_output():
    """Try to guess if the standard output supports color term code.

    Returns:
        boolean: True if we are sure the output supports color; False otherwise
    """
    if hasattr(sys.stdout, 'isatty') and sys.stdout.isatty():
        if not sys.platform.startswith('win'):
            return True
    return False


class ColoredFormatter(logging.Formatter):
    """Formatter who display colored messages using ANSI escape codes."""

    _colors = {
        'RESET': '\033[0m',
        'HIDEBUG': '\033[34m',
        'DEBUG': '\033[34m',
        'INFO': '\033[32m',
        'WARNING': '\033[33m',
        'ERROR': '\033[31m',
        'CRITICAL': '\033[31m',
        'NAME': '\033[36m',
        'DATE': '\033[30;1m',
        'EXCEPTION_NAME': '\033[31;1m',
        'EXCEPTION_STR': '\033[37;1m'
    }

    def _colorize(self, msg, color):
        return self._colors.get(color, '') + msg + self._colors.get('RESET')

    def formatTime(self, record, datefmt=None):
        result = logging.Formatter.formatTime(self, record, datefmt)
        return self._colorize(result, 'DATE')

    def formatException(self, ei):
        msg = logging.Formatter.formatException(self, ei)
        msg_lines = msg.split('\n')
        last_line = msg_lines[-1]
        result = '\n'.join(msg_lines[:-1]) + '\n'
        result += self._colorize(last_line.split(':')[0], 'EXCEPTION_NAME')
        result += ':' + self._colorize(':'.join(last_line.split(':')[1:]),
                                       'EXCEPTION_STR')
        result += '\n' + repr(ei[1]) + '\n----'
        return result

    def format(self, record):
        # The record is shared by all handlers: work on a copy.
        record = logging.makeLogRecord(record.__dict__)
        record.name = self._colorize(record.name, 'NAME')
        record.levelname = self._colorize(record.levelname, record.levelname)
        return logging.Formatter.format(self, record)


class Context(object):
    """Context class used to open and close log handlers."""

    date_format = '%Y-%m-%d %H:%M:%S'
    string_format = '%(asctime)s %(levelname)-7s %(name)s - %(message)s'

    def __init__(self, filename=None):
        """Prepare a new log context.

        Args:
            filename (str, optional): name of the log file, in the log
                directory. If not set, logs are only displayed on the console.
        """
        self._filename = filename
        self._handlers = []

    def __enter__(self):
        """Open the log file and prepare the logging module."""

        logging.captureWarnings(True)
        logging.addLevelName(HIDEBUG, 'HIDEBUG')

        root_logger = logging.getLogger()
        formatter = logging.Formatter(fmt=self.string_format,
                                      datefmt=self.date_format)

        stdout_handler = logging.StreamHandler()
        if _support_color_output():
            stdout_handler.setFormatter(
                ColoredFormatter(fmt=self.string_format,
                                 datefmt=self.date_format))
        else:
            stdout_handler.setFormatter(formatter)
        self._handlers.append(stdout_handler)

        if self._filename:
            log_path = os.path.join(http_promise_path.get_log_dir(),
                                    self._filename)
            try:
                file_handler = logging.FileHandler(log_path)
            except (IOError, OSError):
                logging.getLogger(__name__).warning(
                    'Unable to create the log file', exc_info=True)
            else:
                file_handler.setFormatter(formatter)
                self._handlers.append(file_handler)

        for handler in self._handlers:
            root_logger.addHandler(handler)

        # Before any configuration, all messages should be displayed.
        set_debug_mode(True)

        set_debug_mode(config.get('debug_mode'))
        set_logs_level(config.get('log_levels'))
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Release resources (log files, ...)"""
        logging.getLogger(__name__).debug('Stop logger ...')
        root_logger = logging.getLogger()
        for handler in self._handlers:
            root_logger.removeHandler(handler)
            handler.close()
        self._handlers = []
        logging.captureWarnings(False)


def set_logs_level(levels):
    """Configure a fine-grained log levels for the different modules.

    Args:
        levels (dict): A dict associating a module name and a log
            level. A log level can be a number or a str representing one of the
            logging levels (DEBUG, WARNING, ...). The level name will be
            converted to uppercase.
            Invalids values will be ignored.

    Example:

        >>> # Accept DEBUG logs only for the http module
        >>> set_logs_level({'http_promise':'info',
        ...                 'http_promise.http': 'debug'})

        >>> # Accept DEBUG log in general, but only ERROR logs (and above) for
        >>> # the promises.
        >>> set_logs_level({'http_promise': 10, 'http_promise.promise': 40})
    """
    for (module, level) in levels.items():
        try:
            if isinstance(level, str):
                level = int(level) if level.isdigit() else level.upper()
            logging.getLogger(module).setLevel(level)
        except (TypeError, ValueError):
            logger = logging.getLogger(__name__)
            logger.warning('Invalid log level "%s" for logger "%s". '
                           'Will be ignored.',
                           level, module)


def set_debug_mode(debug):
    """Set, or unset the debug log level.

    Note: modules others than http_promise.* usually gives too much
    information generally useless (urllib3 in particular). They are not set to
    DEBUG, even in DEBUG mode. If needed, the level log of these modules can be
    set by ``set_logs_level()``.

    Args:
        debug (boolean): if True, the http_promise log level will be set to
            DEBUG. If False, it will be set to INFO.
    """
    if debug:
        logging.getLogger().setLevel(logging.INFO)
        logging.getLogger('http_promise').setLevel(logging.DEBUG)
    else:
        logging.getLogger().setLevel(logging.WARNING)
        logging.getLogger('http_promise').setLevel(logging.INFO)


def reset():
    """Reset the root logger (remove handlers and filters)."""
    logger = logging.getLogger()

    for h in logger.handlers[:]:
        logger.removeHandler(h)
    for f in logger.filters[:]:
        logger.removeFilter(f)
