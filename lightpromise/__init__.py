from lightpromise.combinators import Deferred, deferred, rejected, spawn, when, when_all, whenAll
from lightpromise.config import configure, get_config, reset_config
from lightpromise.errors import CyclicSettlement, InvalidCallback, PromiseError, PromiseTimeout
from lightpromise.promise import ABSENT, CANCELLED, PENDING, REJECTED, RESOLVED, Promise
from lightpromise.scheduling import AsyncioScheduler, Scheduler

__all__ = [
    'ABSENT', 'AsyncioScheduler', 'CANCELLED', 'CyclicSettlement', 'Deferred',
    'InvalidCallback', 'PENDING', 'Promise', 'PromiseError', 'PromiseTimeout',
    'REJECTED', 'RESOLVED', 'Scheduler', 'configure', 'deferred', 'get_config',
    'rejected', 'reset_config', 'spawn', 'when', 'when_all', 'whenAll',
]
