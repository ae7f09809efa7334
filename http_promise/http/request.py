# -*- coding: utf-8 -*-


class Request(object):
    """Represents a request waiting to be executed.

    Attributes:
        verb (str): HTTP verb
        url (str): HTTP URL
        params (dict, optional): keywords arguments passed to
            ``requests.Session.request()`` (headers, data, json, timeout ...).
    """

    def __init__(self, verb, url, params=None):
        self.verb = verb.upper()
        self.url = url
        self.params = dict(params or {})

    def __str__(self):
        return '%s %s' % (self.verb, self.url)

    def __repr__(self):
        return 'Request(%s)' % self
