import logging
from collections import namedtuple

from lightpromise.promise import PENDING, Promise

logger = logging.getLogger(__name__)

Deferred = namedtuple('Deferred', ['promise', 'resolve', 'reject'])


def when(value):
    """Wrap `value` in a resolved promise unless it already is a promise."""
    if isinstance(value, Promise):
        return value
    return Promise(value)


def when_all(items):
    """Wait on `items` one after another.

    Resolves with the list of their values in order, or rejects with the
    first rejection reason, after which no further item is waited on.
    """
    items = list(items)
    aggregate = Promise()
    values = []
    looping = False

    def on_value(value):
        values.append(value)
        if not looping:
            proceed()

    def proceed():
        nonlocal looping
        while len(values) < len(items):
            if aggregate.status != PENDING:
                return
            index = len(values)
            looping = True
            try:
                when(items[index]).then(on_value, aggregate.reject)
            finally:
                looping = False
            if len(values) == index:
                # still waiting; on_value picks up from here
                return
        logger.debug('all %d items of %r resolved', len(items), aggregate)
        aggregate.resolve(values)

    proceed()
    return aggregate


whenAll = when_all


def deferred():
    promise = Promise()
    return Deferred(promise, promise.resolve, promise.reject)


def spawn(func, *args, **kwargs):
    """Call `func` with a fresh promise appended to `args` and return it."""
    promise = Promise()
    func(*args, promise, **kwargs)
    return promise


def rejected(reason):
    promise = Promise()
    promise.reject(reason)
    return promise
