# -*- coding: utf-8 -*-

import logging

from ..common.log import HIDEBUG
from . import errors

_logger = logging.getLogger(__name__)


@errors.handler
def send(request, session, proxy_settings=None, timeout=None,
         raise_for_status=True):
    """Performs an HTTP request, then returns the response.

    This function blocks until the response is received. It's executed in the
    worker threads of the ``AsyncClient``.

    Args:
        request (Request):
        session (requests.Session)
        proxy_settings (dict, optional): proxy settings to pass to the requests
            library.
        timeout (int, optional): default timeout, in seconds, used if the
            request doesn't set one.
        raise_for_status (boolean): if True, a response with an error status
            (4XX and 5XX) is converted into an ``HTTPError``.
    Returns:
        requests.Response: the response received. Its content is fully
            loaded.
    Raises:
        ClientError: if the request fails.
    """
    params = dict(request.params)
    if proxy_settings:
        params.setdefault('proxies', proxy_settings)
    if timeout:
        params.setdefault('timeout', timeout)

    response = session.request(method=request.verb, url=request.url,
                               **params)

    _logger.log(HIDEBUG, 'request %s -> %s', request, response.status_code)

    if raise_for_status:
        response.raise_for_status()

    return response
