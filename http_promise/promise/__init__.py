# -*- coding: utf-8 -*-

from .abstract_promise import AbstractPromise
from .decorators import wrap_promise
from .deferred import Deferred
from .errors import PromiseError, RejectionError, TimeoutError
from .promise import Promise
from .state import PromiseState
from .thread_pool import ThreadPoolExecutor
from .util import is_thenable

__all__ = ['AbstractPromise', 'Deferred', 'Promise', 'PromiseError',
           'PromiseState', 'RejectionError', 'ThreadPoolExecutor',
           'TimeoutError', 'is_thenable', 'wrap_promise']
