# -*- coding: utf-8 -*-
"""This module defines all errors which can occur in the http module.

These errors are the rejection reasons of the promises returned by the
``AsyncClient``. requests exceptions can be converted to http_promise errors
using the ``handler`` decorator.

Errors have a human-readable message, ready to be displayed.
They are also more verbose when displayed using 'repr()`.
"""

import functools

import requests.exceptions


class ClientError(Exception):
    """Base class for http_promise.http errors.

    Attributes:
        message (str): Human readable message, describing the error.
        reason (Exception): internal exception which've produced this error.
            Can be None.
        request (requests.PreparedRequest): the request at the origin of the
            error, if any.
        response (requests.Response): the response received, if any.
    """

    default_message = "An HTTP client error has occurred."

    def __init__(self, reason=None, message=None, msg_args=None):
        """
        Args:
            reason (Exception, optional): base error
            message (str, optional): User-friendly message.
            msg_args (any, optional): Optional arguments used when formatting
                the message with the '%' operator.
        """
        self.reason = reason
        self._message = message or self.default_message
        self._msg_args = msg_args
        self.request = getattr(reason, 'request', None)
        self.response = getattr(reason, 'response', None)
        Exception.__init__(self, self.message)

    @property
    def message(self):
        if self._msg_args is not None:
            return self._message % self._msg_args
        else:
            return self._message

    def __repr__(self):
        return '%s("%s")' % (self.__class__.__name__, self.message)

    def __str__(self):
        return self.message


class RequestError(ClientError):
    """The request is invalid, or could not be sent."""

    default_message = "The HTTP request could not be sent."


class NetworkError(RequestError):
    """The request has been sent, but no response has been received."""

    default_message = "A network error has occurred."


class ConnectionError(NetworkError):
    default_message = "Unable to connect to the server."


class TimeoutError(NetworkError):
    default_message = "The server did not respond on time."


class ProxyError(NetworkError):
    default_message = "Proxy error"


class HTTPError(RequestError):
    """Base class for HTTP errors.

    The class can be displayed for debug, using ``repr(error)``.

    Attributes:
        code (int): HTTP status code
        status_text (str): HTTP status text
        method (str): HTTP verb of the request.
        url (str): URL of the request.
        content (dict or text): If the response content was in json, the
            corresponding dict, else the content as text.
    """

    def __init__(self, error, message=None, msg_args=None):
        """
        Args:
            error (requests.exceptions.HTTPError): base error.
        """
        if not message:
            message = ("The server has returned an HTTP error: "
                       "%(code)s %(reason)s")
            msg_args = {"code": error.response.status_code,
                        "reason": error.response.reason}

        ClientError.__init__(self, error, message, msg_args)

        self.code = error.response.status_code
        self.status_text = error.response.reason
        request = error.request or error.response.request
        self.method = getattr(request, 'method', None)
        self.url = getattr(request, 'url', None)

        try:
            self.content = error.response.json()
        except ValueError:
            self.content = error.response.text

    def __repr__(self):
        return '\n'.join(("HTTP Error: %s %s" % (self.code, self.status_text),
                          "\tRequest: %s %s" % (self.method, self.url),
                          "\tResponse: %s" % (self.content,)))


class HTTPBadRequestError(HTTPError):
    def __init__(self, error):
        HTTPError.__init__(self, error, "The HTTP request is invalid.")


class HTTPUnauthorizedError(HTTPError):
    def __init__(self, error):
        HTTPError.__init__(self, error, "Authentication is required.")


class HTTPForbiddenError(HTTPError):
    def __init__(self, error):
        HTTPError.__init__(self, error, "You don't have the permission to do "
                                        "this operation.")


class HTTPNotFoundError(HTTPError):
    def __init__(self, error):
        HTTPError.__init__(self, error, "The element you're looking for has "
                                        "not been found.")


class HTTPEntityTooLargeError(HTTPError):
    def __init__(self, error):
        HTTPError.__init__(self, error, "The request entity is too large.")


class HTTPInternalServerError(HTTPError):
    def __init__(self, error):
        HTTPError.__init__(self, error, "The server has encountered an "
                                        "unexpected error.")


class HTTPNotImplementedError(HTTPError):
    def __init__(self, error):
        HTTPError.__init__(self, error, "The server does not support this "
                                        "function.")


class HTTPServiceUnavailableError(HTTPError):
    def __init__(self, error):
        HTTPError.__init__(self, error, "The server is temporarily "
                                        "unavailable. Please try again "
                                        "later.")


_code2error = {
    400: HTTPBadRequestError,
    401: HTTPUnauthorizedError,
    403: HTTPForbiddenError,
    404: HTTPNotFoundError,
    413: HTTPEntityTooLargeError,
    500: HTTPInternalServerError,
    501: HTTPNotImplementedError,
    503: HTTPServiceUnavailableError
}


def handler(func):
    """Decorator who handles errors of the requests.

    Converts requests.exceptions.* into http_promise.http.errors.
    """

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except requests.exceptions.ProxyError as error:
            raise ProxyError(error)
        except requests.exceptions.ConnectionError as error:
            raise ConnectionError(error)
        except requests.exceptions.Timeout as error:
            raise TimeoutError(error)
        except requests.exceptions.HTTPError as error:
            err_class = _code2error.get(error.response.status_code, HTTPError)
            raise err_class(error)
        except requests.exceptions.RequestException as error:
            raise RequestError(error)

    return wrapper
