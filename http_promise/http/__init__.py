# -*- coding: utf-8 -*-
"""HTTP module

This module performs HTTP requests using the requests library. All requests
are asynchronous, executed in separate threads. Each request returns a
Promise, fulfilled with the response, or rejected with an error of the
``errors`` module.

The settings (number of workers, retry, timeout, proxies) are read from the
`config` module, unless given to the ``AsyncClient`` constructor.

Example:

    >>> with AsyncClient() as client:
    ...     promise = client.request('GET', 'https://example.com/')
    ...     status = promise.then(lambda response: response.status_code)
    ...     print(status.wait())
    200
"""

from . import errors  # noqa
from .client import AsyncClient
from .request import Request

__all__ = ['AsyncClient', 'Request', 'errors']
