# -*- coding: utf-8 -*-

import logging
from threading import Lock

import requests
from requests import __version__ as requests_version

from .. import __version__ as http_promise_version
from ..common import config
from ..common.log import HIDEBUG
from ..promise import ThreadPoolExecutor
from .request import Request
from . import send_request

_logger = logging.getLogger(__name__)


class AsyncClient(object):
    """HTTP client sending the requests asynchronously, in worker threads.

    Each request returns a Promise, fulfilled with the ``requests.Response``
    when it's received, or rejected with a ``ClientError``.

    The client must be started before use, either by calling ``start()`` or
    by using it as a context manager:

        >>> with AsyncClient() as client:
        ...     promise = client.request('GET', 'https://example.com/')
        ...     promise.then(lambda response: response.status_code).wait()
        200

    Unless set explicitly, the settings come from the ``config`` module.
    """

    def __init__(self, max_workers=None, max_retry=None, timeout=None,
                 raise_for_status=None, proxy_settings=None):
        """
        Args:
            max_workers (int, optional): number of requests sent in parallel.
            max_retry (int, optional): maximum number of automatic retry in
                case of connection error. HTTP errors (4XX and 5XX) are not
                retried.
            timeout (int, optional): default timeout of requests, in seconds.
            raise_for_status (boolean, optional): if True, responses with an
                error status reject the promise with an ``HTTPError``.
            proxy_settings (dict, optional): proxy settings to pass to the
                requests library.
        """
        self._max_workers = self._setting(max_workers, 'max_workers')
        self._max_retry = self._setting(max_retry, 'max_retry')
        self._timeout = self._setting(timeout, 'timeout')
        self._raise_for_status = self._setting(raise_for_status,
                                               'raise_for_status')
        self._proxy_settings = self._setting(proxy_settings, 'proxies') or None

        self._lock = Lock()
        self._session = None
        self._executor = None

    @staticmethod
    def _setting(value, key):
        if value is None:
            return config.get(key)
        return value

    def _prepare_session(self):
        """Prepare a session to send an HTTP(S) request, with auto retry.

        Returns:
            requests.Session: new HTTP(s) session
        """
        session = requests.Session()
        adapter = requests.adapters.HTTPAdapter(
            max_retries=self._max_retry, pool_maxsize=self._max_workers)
        session.mount('http://', adapter)
        session.mount('https://', adapter)
        session.headers.update({
            'User-Agent': 'http-promise/%s python-requests/%s' % (
                http_promise_version, requests_version)
        })
        return session

    def start(self):
        with self._lock:
            if self._executor is not None:
                return
            _logger.debug('Start HTTP client with %s workers',
                          self._max_workers)
            self._session = self._prepare_session()
            self._executor = ThreadPoolExecutor(
                self._max_workers, thread_name_prefix='http_promise')

    def stop(self):
        """Stop the client.

        Requests already sent are completed before the method returns, and
        their promises are settled.
        """
        with self._lock:
            executor, self._executor = self._executor, None
            session, self._session = self._session, None

        if executor is None:
            return
        _logger.debug('Stop HTTP client ...')
        executor.shutdown(wait=True)
        session.close()

    def __enter__(self):
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.stop()

    def set_proxy(self, proxy_settings):
        """Set the proxy settings used by the next requests.

        Args:
            proxy_settings (dict): proxy settings to pass to the requests
                library. Ex: {'https': 'socks5://localhost:1080'}
        """
        with self._lock:
            self._proxy_settings = proxy_settings or None

    def send_async(self, request):
        """Add a request to send.

        Args:
            request (Request)
        Returns:
            Promise<requests.Response>: settled when the request is done.
        Raises:
            RuntimeError: if the client is not started.
        """
        with self._lock:
            if self._executor is None:
                raise RuntimeError('The HTTP client is not started.')
            _logger.log(HIDEBUG, 'Add request %s', request)
            return self._executor.submit(
                send_request.send, request, self._session,
                proxy_settings=self._proxy_settings, timeout=self._timeout,
                raise_for_status=self._raise_for_status)

    def request(self, verb, url, **params):
        """Create a request and send it.

        Args:
            verb (str): HTTP verb.
            url (str): HTTP URL.
            **params: keywords arguments passed to
                ``requests.Session.request()``.
        Returns:
            Promise<requests.Response>
        """
        return self.send_async(Request(verb, url, params))
