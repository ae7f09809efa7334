# -*- coding: utf-8 -*-
"""Asynchronous HTTP responses, following the promises/a+ model.

A Promise represents an HTTP response which may not be available yet. It's
fulfilled with the response, or rejected with the exception raised by the
HTTP client.
"""

from .__version__ import __version__  # noqa

from .promise import (AbstractPromise, Deferred, Promise, PromiseState,
                      is_thenable, wrap_promise)
from .http import AsyncClient, Request

__all__ = ['AbstractPromise', 'AsyncClient', 'Deferred', 'Promise',
           'PromiseState', 'Request', 'is_thenable', 'wrap_promise']
