# -*- coding: utf-8 -*-


class PromiseError(Exception):
    """Base class for errors raised by the promise module itself."""
    pass


class TimeoutError(PromiseError):
    """An operation could not be executed within the time allowed."""
    pass


class RejectionError(PromiseError):
    """A Promise has been rejected with a value which is not an exception.

    Attributes:
        reason: the value used to reject the Promise.
    """

    def __init__(self, reason):
        PromiseError.__init__(self, 'Promise rejected with non-exception '
                                    'value: %r' % (reason,))
        self.reason = reason
