# A single-threaded callback queue standing in for the UI run loop.

from collections import deque


class MainLoop:
    """
    Queues completion callbacks and runs them one at a time, to completion.
    Callbacks posted while the loop is draining run after the current batch.
    """

    def __init__(self):
        self._queue = deque()

    def post(self, callback, *args):
        self._queue.append((callback, args))

    @property
    def pending(self) -> int:
        return len(self._queue)

    def run_pending(self) -> int:
        """Runs the callbacks queued so far. Returns how many ran."""
        count = len(self._queue)
        for _ in range(count):
            callback, args = self._queue.popleft()
            callback(*args)
        return count

    def run_until_idle(self) -> int:
        total = 0
        while self._queue:
            total += self.run_pending()
        return total
