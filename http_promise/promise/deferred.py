# -*- coding: utf-8 -*-

from .promise import Promise


class Deferred(object):
    """

    A Deferred is the "creator" side of an async task, whereas a Promise
    represents the asynchronous value from the "consumer" side.

    Only the producer holding the Deferred can settle the Promise.

    Attributes:
        promise (Promise): the Promise associated to the Deferred.
        resolve (function): fulfill the Promise with a value.
        reject (function): reject the Promise with an exception.
    """

    def __init__(self, *args, **kwargs):
        """
        Args:
            *args, **kwargs: passed to the Promise constructor (`wait_fn`,
                `_name`).
        """
        self.promise = Promise(self._executor, *args, **kwargs)

    def _executor(self, resolve, reject):
        self.resolve = resolve
        self.reject = reject
