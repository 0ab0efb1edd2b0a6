class PromiseError(Exception):
    def __init__(self, value=None):
        super().__init__(value)
        self.value = value

    def __str__(self):
        return repr(self.value)


class InvalidCallback(PromiseError, TypeError):
    """A reaction passed to ``then`` is neither callable nor a skip marker."""

    def __str__(self):
        return 'expected a callable, None or False, got %r' % (self.value,)


class CyclicSettlement(PromiseError, ValueError):
    """A promise was resolved with itself, directly or through adoption."""

    def __str__(self):
        return 'promise would adopt itself: %r' % (self.value,)


class PromiseTimeout(PromiseError, TimeoutError):
    """Default rejection reason used by ``Promise.timeout``."""

    def __str__(self):
        return 'timed out after %s ms' % (self.value,)
