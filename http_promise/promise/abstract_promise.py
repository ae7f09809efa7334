# -*- coding: utf-8 -*-

import abc

from .state import PromiseState


class AbstractPromise(metaclass=abc.ABCMeta):
    """A response which may not be available yet.

    An AbstractPromise acts as a proxy to the result of an asynchronous HTTP
    operation, following the promises/a+ model: the value of a fulfilled
    promise is the HTTP response, and the reason of a rejected promise is the
    exception raised by the HTTP client.

    The producer (usually an HTTP client) creates the promise in the PENDING
    state, then settles it exactly once. Consumers either chain callbacks with
    `then()` or block with `wait()`.

    Whatever the scheduling model of the implementation (worker threads,
    cooperative event loop, or eager resolution), the following holds:
    - the settlement is atomic: no reader sees a state that later changes.
    - only `wait()` may block. `then()` and `get_state()` never block.
    - a callback registered after settlement is still called.
    - all concurrent callers of `wait()` observe the same outcome.
    """

    PENDING = PromiseState.PENDING
    FULFILLED = PromiseState.FULFILLED
    REJECTED = PromiseState.REJECTED

    @abc.abstractmethod
    def then(self, on_fulfilled=None, on_rejected=None):
        """Add callbacks called when the response or the error is available.

        Only one of the two callbacks is called, matching the settled state,
        and never more than once. A callback set to None forwards the outcome
        unchanged to the returned promise.

        A callback must either return a value, which fulfills the returned
        promise (even when returned by `on_rejected`), or raise an exception,
        which rejects it.

        Args:
            on_fulfilled (callable, optional): receives the response.
            on_rejected (callable, optional): receives the exception.
        Returns:
            AbstractPromise: new promise, settled with the outcome of the
                callback actually called.
        """

    @abc.abstractmethod
    def get_state(self):
        """Returns the state of the promise.

        Returns:
            PromiseState: one of PENDING, FULFILLED or REJECTED.
        """

    @abc.abstractmethod
    def wait(self, unwrap=True):
        """Wait for the promise to be fulfilled or rejected.

        When this method returns, the operation is done and the callbacks
        registered so far have been called.

        Args:
            unwrap (boolean): if True, returns the value of a fulfilled
                promise, or raises the reason of a rejected one. If False,
                never raises: the caller must check `get_state()`.
        Returns:
            *: the response if `unwrap` is True, None otherwise.
        """
