# -*- coding: utf-8 -*-

from concurrent.futures import ThreadPoolExecutor as Executor
from .deferred import Deferred


class ThreadPoolExecutor(object):
    """Execute callables asynchronously on demand, in another threads."""

    def __init__(self, max_workers, thread_name_prefix=''):
        """Initialize the thread pool

        Args:
            max_workers: The maximum number of threads that can be used to
                execute the given calls.
            thread_name_prefix (str, optional): prefix of the worker thread
                names.
        """
        self._executor = Executor(max_workers,
                                  thread_name_prefix=thread_name_prefix)

    def submit(self, callback, *args, **kwargs):
        """Schedule the callable to be executed and return a Promise.

        Args:
            callback (callable): callback who will run in another thread.
            *args: argument passed to callback.
            **kwargs: keywords arguments passed to callback.
        Returns:
            Promise: Promise who resolve after the callback has been executed.
                It's fulfilled with the value returned by the callback.
                If the callback raise an exception, the promise is rejected
                with this exception.
        Raises:
            RuntimeError: if the executor has been shut down.
        """
        df = Deferred(_name=getattr(callback, '__name__', None))

        def on_future_done(f):
            error = f.exception()
            if error is None:
                df.resolve(f.result())
            else:
                df.reject(error)

        f = self._executor.submit(callback, *args, **kwargs)
        f.add_done_callback(on_future_done)

        return df.promise

    def shutdown(self, wait=True):
        """Stop accepting new tasks, and release the worker threads.

        Args:
            wait (boolean): if True, wait for the pending tasks to finish.
        """
        self._executor.shutdown(wait=wait)
