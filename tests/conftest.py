import pytest

from lightpromise import reset_config


class FakeHandle:
    def __init__(self, when, callback, args):
        self._when = when
        self._callback = callback
        self._args = args
        self._cancelled = False

    def cancel(self):
        self._cancelled = True

    def cancelled(self):
        return self._cancelled

    def when(self):
        return self._when

    def run(self):
        self._callback(*self._args)


class FakeScheduler:
    """Records delayed calls and runs them when the clock is advanced."""

    def __init__(self):
        self.now = 0.0
        self.handles = []

    def call_later(self, delay, callback, *args):
        handle = FakeHandle(self.now + delay, callback, args)
        self.handles.append(handle)
        return handle

    def advance(self, seconds):
        self.now += seconds
        due = sorted(
            (h for h in self.handles if h.when() <= self.now and not h.cancelled()),
            key=lambda h: h.when(),
        )
        for handle in due:
            self.handles.remove(handle)
            handle.run()

    @property
    def scheduled(self):
        return [h for h in self.handles if not h.cancelled()]


@pytest.fixture(autouse=True)
def _fresh_config():
    reset_config()
    yield
    reset_config()


@pytest.fixture
def scheduler():
    return FakeScheduler()
