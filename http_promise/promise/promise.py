# -*- coding: utf-8 -*-

import logging
from functools import partial
from threading import Condition, Lock, get_ident

from .abstract_promise import AbstractPromise
from .errors import RejectionError, TimeoutError
from .util import is_thenable

_logger = logging.getLogger(__name__)


class Promise(AbstractPromise):
    """It represents an operation expected to be completed in the future.

    A Promise is used for asynchronous computation. It contains a value not yet
    known when the Promise is created. It allows to set callbacks who will be
    called as soon as the result is known. It's a "promise" of a future value.

    Callbacks are called synchronously: by the thread who settles the
    Promise, or directly by `then()` if the Promise is already settled.

    All calls to the methods are thread-safe.
    """

    def __init__(self, executor, wait_fn=None, _name=None, _previous=None):
        """Constructor of the Promise.

        Generate the two callbacks for the executor, then call the `executor`.
        It means the executor will be fully executed before the the constructor
        returns.
        If the executor raises an exception, it's caught and the Promise is
        rejected with this exception.

        Args:
            executor (callable): Takes 2 callable arguments:
                The first one, `on_filled()` should be called when the Promise
                is fulfilled (ie the tasks is done) and must accept the
                result's value as its only argument.
                The second, `on_rejected()`, should be called when an error
                occurs. Its argument must be an instance of `Exception`.
            wait_fn (callable, optional): called without argument by the
                first call to `wait()`, when the Promise is still pending. It
                should drive the operation to completion (for example by
                running an event loop). If it raises an exception, the Promise
                is rejected with it.
            _name (str): if set, name used when converted to text.
        """

        self._state = self.PENDING
        self._result = None
        self._error = None
        self._traceback = None
        self._condition = Condition()

        # Set when the callbacks of the settlement have all been executed.
        self._reactions_done = False
        self._settling_thread = None
        self._name = _name or getattr(executor, '__name__', '???')
        self._previous = _previous
        self._wait_fn = wait_fn

        # Promise this one depends on. Used by wait() to drive the chain.
        self._upstream = _previous

        self._callbacks = []
        self._errbacks = []

        try:
            executor(self._fulfill, self._reject)
        except Exception as error:
            self._reject(error)

    def _fulfill(self, result):
        with self._condition:
            if self._state != self.PENDING:
                _logger.warning('Try to fulfill Promise %r already settled. '
                                'New result will be ignored: %r',
                                self, result)
                return
            self._result = result
            self._state = self.FULFILLED
            self._settling_thread = get_ident()
            callbacks = self._callbacks

            # Free the references
            self._callbacks = None
            self._errbacks = None
            self._wait_fn = None
            self._upstream = None

            self._condition.notify_all()

        try:
            for callback in callbacks:
                self._exec_callback(callback, result)
        finally:
            self._end_reactions()

    def _reject(self, error):
        with self._condition:
            if self._state != self.PENDING:
                _logger.warning('Try to reject Promise %r already settled. '
                                'New error will be ignored: %r', self, error)
                return
            if not isinstance(error, BaseException):
                # The non-exception value can be chained like any value. In
                # case of wait(), a RejectionError is raised instead.
                _logger.warning('Promise %r rejected with non-exception '
                                'value: %r', self, error)
            self._error = error
            self._traceback = getattr(error, '__traceback__', None)
            self._state = self.REJECTED
            self._settling_thread = get_ident()
            errbacks = self._errbacks

            self._callbacks = None
            self._errbacks = None
            self._wait_fn = None
            self._upstream = None

            self._condition.notify_all()

        try:
            for errback in errbacks:
                self._exec_callback(errback, error, is_errback=True)
        finally:
            self._end_reactions()

    def _end_reactions(self):
        with self._condition:
            self._reactions_done = True
            self._settling_thread = None
            self._condition.notify_all()

    def _is_done(self):
        """True when settled and all the settlement callbacks have returned.

        A callback waiting on its own promise, from the settling thread, sees
        the promise as done.
        """
        if self._state == self.PENDING:
            return False
        return (self._reactions_done or
                self._settling_thread == get_ident())

    def _adopt(self, thenable):
        """Settle this promise with the outcome of another thenable."""
        if thenable is self:
            return self._reject(TypeError('A Promise cannot be resolved with '
                                          'itself.'))
        if isinstance(thenable, Promise):
            with self._condition:
                if self._state == self.PENDING:
                    self._upstream = thenable
        try:
            thenable.then(self._fulfill, self._reject)
        except Exception as error:
            self._reject(error)

    def get_state(self):
        with self._condition:
            return self._state

    def wait(self, unwrap=True):
        """Block until the Promise is settled.

        If a wait function has been set, on this promise or on the promises
        it depends on, it's executed first.

        Args:
            unwrap (boolean): if True, returns the value of the fulfilled
                Promise, or raises the rejection cause. If False, always
                returns None.
        Returns:
            *: value encapsulated, if `unwrap` is True.
        Raises:
            *: If `unwrap` is True and the promise is rejected, the rejection
                cause is raised.
            RejectionError: if `unwrap` is True and the promise is rejected
                with a value which is not an exception.
        """
        self._run_wait_fn()
        with self._condition:
            self._condition.wait_for(self._is_done)

        if unwrap:
            return self._unwrap()

    def _run_wait_fn(self):
        """Drive the pending operations this promise depends on.

        A wait function is consumed by its first caller. Concurrent callers
        don't run it again: they block on the condition instead.
        """
        pumped = None
        while True:
            with self._condition:
                if self._state != self.PENDING:
                    return
                wait_fn, self._wait_fn = self._wait_fn, None
                upstream = self._upstream

            if wait_fn is not None:
                try:
                    wait_fn()
                except Exception as error:
                    self._reject(error)
            elif upstream is not None and upstream is not pumped:
                pumped = upstream
                upstream._run_wait_fn()
            else:
                return

    def _unwrap(self):
        if self._state == self.REJECTED:
            if isinstance(self._error, BaseException):
                raise self._error.with_traceback(self._traceback)
            raise RejectionError(self._error)
        return self._result

    def result(self, timeout=None):
        """Wait for the result and returns it as soon as it's available.

        Contrary to `wait()`, the wait function is never executed.

        Args:
            timeout (int, optional): if set, maximum time to wait the promise
                to be fulfilled. By default, it can wait indefinitely.
        Returns:
            *: value encapsulated, defined by the operation.
        Raises:
            TimeoutError: if the promise is not settled within the delay.
            *: If the promise is rejected, the rejection cause is raised.
        """
        with self._condition:
            if not self._condition.wait_for(self._is_done, timeout):
                raise TimeoutError()
            return self._unwrap()

    def exception(self, timeout=None):
        """Wait for the promise rejection and returns it's error.

        Args:
            timeout (int, optional): if set, maximum time to wait the promise
                to be rejected. By default, it can wait indefinitely.
        Returns:
            Exception: the error causing the rejection of the Promise.
            None: if the promise is fulfilled.
        Raises:
            TimeoutError: if the promise is not settled within the delay.
        """

        with self._condition:
            if not self._condition.wait_for(self._is_done, timeout):
                raise TimeoutError()
            return self._error

    def then(self, on_fulfilled=None, on_rejected=None):
        """Create a new promise from callbacks called when this one is settled.

        If the promise is fulfilled, the `on_fulfilled` callback will be
        called. Otherwise (the promise has been rejected), the `on_rejected`
        callback is called.
        In any case, the callback will define the state of the returned
        Promise. If the callback raises an exception, the new Promise is
        rejected. The callback can returns:
        - A value: the new promise will be fulfilled with this value.
        - Another Promise, or any object with a `then` method: when fulfilled
            or rejected, will transfer its status (state and result/error) to
            the Promise returned by this method.

        If a callback is not defined, the state of the self promise is
        transferred at the new promise (the state and the value/error).

        Args:
            on_fulfilled (callable, optional):  This callback will receive the
                result of the original promise as argument.
            on_rejected (callable, optional): This callback will receive the
                exception raised by the original promise as argument.
        Returns:
            Promise<*>: new promise depending of self.
        """

        if not on_rejected:
            name = '%s' % getattr(on_fulfilled, '__name__', '???')
        elif not on_fulfilled:
            name = '<None, %s>' % getattr(on_rejected, '__name__', '???')
        else:
            name = '<%s, %s>' % (getattr(on_fulfilled, '__name__', '???'),
                                 getattr(on_rejected, '__name__', '???'))

        chained = Promise(lambda fulfilled, rejected: None, _name=name,
                          _previous=self)

        def settle_with(handler, value):
            try:
                new_result = handler(value)
            except Exception as error:
                return chained._reject(error)

            if is_thenable(new_result):
                chained._adopt(new_result)
            else:
                chained._fulfill(new_result)

        def callback(result):
            if on_fulfilled is None:
                return chained._fulfill(result)
            settle_with(on_fulfilled, result)

        def errback(error):
            if on_rejected is None:
                return chained._reject(error)
            settle_with(on_rejected, error)

        self._add_reaction(callback, errback)
        return chained

    def catch(self, on_rejected):
        """Create a new promise with a callback called when an error occurs.

        Alias of `self.then(None, on_rejected)`

        Args:
            on_rejected (callable): Must take an argument instance of Exception
                (or one of its subclass). Will be called if `self` is rejected.
        returns:
            Promise<*>: new Promise chained to `self`. If `self` is fulfilled,
                the promised value will be the same as `self`. Otherwise, the
                value returned by the `on_rejected()` callback.
        """
        return self.then(None, on_rejected)

    def safeguard(self):
        """Catch all errors and log them with the most details possible.

        This method is aimed to protect the program from uncaught rejected
        Promise. If no error handler has been set (via then() or catch()), the
        default behavior is to do nothing, and thus, errors are silently
        ignored.
        Calling `safeguard()` after all chains are set will catch these errors,
        and log them as ERROR with the maximum of details possible.
        """
        def guard(error):
            if isinstance(error, BaseException):
                _logger.error('[SAFEGUARD] %s', self,
                              exc_info=(type(error), error,
                                        error.__traceback__))
            else:
                _logger.error('[SAFEGUARD] %s: %r', self, error)

        self._add_reaction(None, guard)

    def __repr__(self):
        return 'Promise(%s)' % self._inner_print()

    def _inner_print(self):
        with self._condition:
            if self._state == self.REJECTED:
                state = 'R'
            elif self._state == self.FULFILLED:
                state = 'F'
            else:
                state = 'P'

        if self._previous:
            return '%s -> %s %s' % (self._previous._inner_print(), self._name,
                                    state)
        return '%s %s' % (self._name, state)

    @classmethod
    def resolve(cls, value):
        """Create a promise who resolves the selected value.

        Args:
            value: result of the promise. If it's a promise, it's returned as
                is.
        Returns:
            Promise: new Promise already fulfilled, containing the value
                passed in parameter.
        """
        if is_thenable(value):
            return value
        else:
            return cls(lambda ok, error: ok(value), _name='RESOLVE')

    @classmethod
    def reject(cls, reason):
        """Create a Promise rejected for the reason specified.

        Args:
            reason: Exception set to the Promise
        Returns:
            Promise: new Promise already rejected.
        """
        return cls(lambda ok, error: error(reason), _name='REJECT')

    @classmethod
    def all(cls, promises):
        """Create a Promise who wait a list of promises to be all fulfilled.

        The resulting Promise resolve when all of the promises in the list are
        resolved, and returns a list of all the resulting values, keeping the
        order of the promise list.
        If a promise is rejected, then the resulting promise is rejected with
        the same reason, and all results from other promises are ignored.

        Args:
            promises (list of Promise)
        Returns:
            Promise<list>: resulting promise, fulfilled when all promises are
                fulfilled, or rejected when one of the promises is rejected.
        """
        promises = list(promises)
        lock = Lock()
        has_error = [False]

        _remaining_tasks = [len(promises)]
        results = [None] * len(promises)

        if _remaining_tasks[0] == 0:
            return cls.resolve([])

        def executor(resolve, reject):
            def resolve_one_promise(index, value):
                with lock:
                    if has_error[0]:
                        return
                    results[index] = value
                    _remaining_tasks[0] -= 1
                    if _remaining_tasks[0] != 0:
                        return
                resolve(results)

            def reject_one_promise(reason):
                with lock:
                    if has_error[0]:
                        return
                    has_error[0] = True
                reject(reason)

            for index, p in enumerate(promises):
                p.then(partial(resolve_one_promise, index), reject_one_promise)

        return cls(executor, _name='ALL')

    @classmethod
    def race(cls, promises):
        """Run all promises, then resolve or reject with the fastest Promise.

        Run all promises given in argument, and returns a new Promise. The
        resulting Promise will be settled as soon as the one the running
        Promises is done. Result value or rejection reason of the finished
        promise are transmitted.
        All other Promise result's will be ignored.

        Args:
            promises (list): list of promises to run at the same time.
        Returns:
            Promise: a promise
        Raises:
            ValueError: If the promise list is empty.
        """
        promises = list(promises)
        if not promises:
            raise ValueError('Empty promise list in Promise.race()')

        lock = Lock()
        is_resolved = [False]

        def executor(resolve, reject):
            def settle_once(settle, value):
                with lock:
                    if is_resolved[0]:
                        return
                    is_resolved[0] = True
                settle(value)

            for p in promises:
                p.then(partial(settle_once, resolve),
                       partial(settle_once, reject))

        return cls(executor, _name='RACE')

    @staticmethod
    def _exec_callback(callback, value, is_errback=False):
        try:
            callback(value)
        except Exception:
            if is_errback:
                _logger.exception("Promise errback raise an exception!")
            else:
                _logger.exception("Promise callback raise an exception!")

    def _add_reaction(self, callback, errback):
        """Register a pair of internal callbacks.

        If the Promise is already settled, the matching callback is executed
        immediately, in the calling thread.
        """
        with self._condition:
            if self._state == self.PENDING:
                if callback is not None:
                    self._callbacks.append(callback)
                if errback is not None:
                    self._errbacks.append(errback)
                return
            state = self._state
            result = self._result
            error = self._error

        if state == self.FULFILLED:
            if callback is not None:
                self._exec_callback(callback, result)
        elif errback is not None:
            self._exec_callback(errback, error, is_errback=True)
