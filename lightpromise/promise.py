import logging
from collections import deque

from lightpromise.config import default_timeout, get_config
from lightpromise.errors import CyclicSettlement, InvalidCallback, PromiseTimeout

logger = logging.getLogger(__name__)

PENDING = -1
RESOLVED = 0
REJECTED = 1
CANCELLED = 2

STATUS_NAMES = {
    PENDING: 'pending',
    RESOLVED: 'resolved',
    REJECTED: 'rejected',
    CANCELLED: 'cancelled',
}


class _Absent:
    def __repr__(self):
        return 'ABSENT'


# Marks an omitted argument, so that None stays an ordinary value.
ABSENT = _Absent()


def is_skip(callback):
    return callback is None or callback is False


def check_callback(callback):
    if not is_skip(callback) and not callable(callback):
        raise InvalidCallback(callback)


def clear_timer(promise):
    if promise._timer is not None:
        promise._timer.cancel()
        promise._timer = None


def resolve(promise, value):
    transition(promise, RESOLVED, value)


def reject(promise, reason):
    transition(promise, REJECTED, reason)


def transition(promise, status, result):
    if promise.status != PENDING:
        logger.debug('ignoring %s of %r', STATUS_NAMES[status], promise)
        return
    if promise._source is not None:
        logger.debug('ignoring %s of %r while it adopts %r',
                     STATUS_NAMES[status], promise, promise._source)
        return
    settle(promise, status, result)
    clear_timer(promise)


def settle(promise, status, result):
    if promise.status != PENDING:
        return
    if isinstance(result, Promise):
        adopt(promise, result)
        return
    clear_timer(promise)
    promise._source = None
    promise.status = status
    promise.result = result
    logger.debug('%r settled', promise)
    if status == REJECTED and all(is_skip(pair[1]) for pair in promise.reactions):
        logger.debug('%r rejected with no rejection handler', promise)
    execute(promise)


def adopt(promise, source):
    node = source
    while node is not None:
        if node is promise:
            raise CyclicSettlement(promise)
        node = node._source

    promise._source = source
    logger.debug('%r adopts %r', promise, source)
    source.then(
        lambda value: follow(promise, RESOLVED, value),
        lambda reason: follow(promise, REJECTED, reason),
    )


# Adopters waiting to settle. Only the outermost follow() drains it, so a
# chain of adoptions settles in a loop instead of nesting a call per level.
_followers = deque()
_following = False


def follow(promise, status, result):
    global _following
    _followers.append((promise, status, result))
    if _following:
        return

    _following = True
    errors = []
    try:
        while _followers:
            try:
                settle(*_followers.popleft())
            except Exception as e:
                errors.append(e)
    finally:
        _following = False

    if not errors:
        return
    for error in errors[1:]:
        logger.error('reaction of an adopting promise failed', exc_info=error)
    raise errors[0]


def execute(promise):
    errors = []
    while promise.reactions and promise.status in (RESOLVED, REJECTED):
        on_resolve, on_reject = promise.reactions.popleft()
        callback = on_resolve if promise.status == RESOLVED else on_reject
        if is_skip(callback):
            continue
        try:
            callback(promise.result)
        except Exception as e:
            errors.append(e)

    if not errors:
        return
    for error in errors[1:]:
        logger.error('reaction of %r failed', promise, exc_info=error)
    raise errors[0]


class Promise:
    STATUS_PENDING = PENDING
    STATUS_RESOLVED = RESOLVED
    STATUS_REJECTED = REJECTED
    STATUS_CANCELLED = CANCELLED

    def __init__(self, value=ABSENT, scheduler=None):
        self.status = PENDING
        self.result = None
        self.reactions = deque()
        self.scheduler = scheduler
        self._timer = None
        self._source = None

        if value is not ABSENT:
            resolve(self, value)

    def then(self, on_resolve=None, on_reject=None):
        """Register a reaction pair and return this promise.

        Either side may be skipped with None or False. Reactions added to a
        resolved or rejected promise run immediately; on a cancelled one
        they never run.
        """
        check_callback(on_resolve)
        check_callback(on_reject)

        if self.status == CANCELLED:
            return self

        self.reactions.append((on_resolve, on_reject))
        if self.status != PENDING:
            execute(self)
        return self

    def catch(self, on_reject):
        return self.then(False, on_reject)

    def resolve(self, value=None):
        resolve(self, value)

    def reject(self, reason=None):
        reject(self, reason)

    def cancel(self):
        clear_timer(self)
        self.status = CANCELLED
        self.reactions.clear()
        self._source = None
        logger.debug('%r cancelled', self)

    def timeout(self, duration_ms=None, reason=ABSENT):
        """Reject with `reason` after `duration_ms` unless settled first.

        A later call replaces the earlier timer. Without a reason the
        promise rejects with PromiseTimeout.
        """
        if self.status != PENDING:
            return self
        if duration_ms is None:
            duration_ms = default_timeout()
            if duration_ms is None:
                raise ValueError('timeout() needs a duration when no default is configured')
        if reason is ABSENT:
            reason = PromiseTimeout(duration_ms)

        clear_timer(self)
        scheduler = self.scheduler if self.scheduler is not None else get_config().scheduler
        self._timer = scheduler.call_later(duration_ms / 1000.0, self._expire, reason)
        logger.debug('%r times out in %s ms', self, duration_ms)
        return self

    def _expire(self, reason):
        self._timer = None
        if self.status != PENDING:
            return
        logger.debug('%r timed out', self)
        settle(self, REJECTED, reason)

    @property
    def pending(self):
        return self.status == PENDING

    @property
    def resolved(self):
        return self.status == RESOLVED

    @property
    def rejected(self):
        return self.status == REJECTED

    @property
    def cancelled(self):
        return self.status == CANCELLED

    def __repr__(self):
        if self.status in (RESOLVED, REJECTED):
            return '<Promise %s: %r>' % (STATUS_NAMES[self.status], self.result)
        return '<Promise %s at %#x>' % (STATUS_NAMES[self.status], id(self))
