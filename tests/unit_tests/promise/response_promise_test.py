# -*- coding: utf-8 -*-

import pytest

from http_promise.promise import Deferred, PromiseState


class FakeResponse(object):
    def __init__(self, status_code, content=b''):
        self.status_code = status_code
        self.headers = {}
        self.content = content


class FakeClientError(Exception):
    def __init__(self, message, request=None):
        Exception.__init__(self, message)
        self.request = request


class TestResponsePromise(object):
    """Promises of HTTP responses, settled by a producer."""

    def test_chain_on_response_status(self):
        df = Deferred()
        response = FakeResponse(200)

        status = df.promise.then(lambda r: r.status_code)
        assert status.get_state() is PromiseState.PENDING

        df.resolve(response)
        assert status.wait() == 200
        assert df.promise.wait() is response

    def test_wait_on_rejected_request(self):
        df = Deferred()
        error = FakeClientError('Unable to connect')
        df.reject(error)

        with pytest.raises(FakeClientError) as exc_info:
            df.promise.wait(unwrap=True)
        assert exc_info.value is error

        assert df.promise.wait(unwrap=False) is None
        assert df.promise.get_state() is PromiseState.REJECTED

    def test_error_callback_not_called_on_response(self):
        df = Deferred()
        response = FakeResponse(200)
        calls = []

        p = df.promise.then(None, calls.append)
        df.resolve(response)

        assert p.wait() is response
        assert calls == []

    def test_response_callback_raising(self):
        df = Deferred()
        error = FakeClientError('Unexpected content')

        def on_response(response):
            raise error

        p = df.promise.then(on_response)
        df.resolve(FakeResponse(200, b'garbage'))

        assert p.get_state() is PromiseState.REJECTED
        assert p.exception(0) is error

    def test_recover_from_error_with_a_response(self):
        df = Deferred()
        fallback = FakeResponse(204)

        p = df.promise.then(None, lambda error: fallback)
        df.reject(FakeClientError('Timeout'))

        assert p.wait() is fallback
        assert p.get_state() is PromiseState.FULFILLED

    def test_chain_on_another_request(self):
        first = Deferred()
        second = Deferred()

        p = first.promise.then(lambda r: second.promise)
        first.resolve(FakeResponse(302))
        assert p.get_state() is PromiseState.PENDING

        second.resolve(FakeResponse(200))
        assert p.wait().status_code == 200
