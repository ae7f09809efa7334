# -*- coding: utf-8 -*-

from enum import Enum


class PromiseState(Enum):
    """States of a Promise.

    A Promise starts PENDING, then moves once, and only once, to one of the
    two terminal states.
    """
    PENDING = 'pending'
    FULFILLED = 'fulfilled'
    REJECTED = 'rejected'

    def __str__(self):
        return self.value
