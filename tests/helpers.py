"""Shared test helpers for the workout timer."""

from workouttimer.timer.alarm import AlarmScheduleError


class SignalCollector:
    """Utility to capture pyqtSignal emissions into a list."""

    def __init__(self):
        self.items: list = []

    def slot(self, *args):
        self.items.append(args if len(args) > 1 else args[0] if args else None)

    def __call__(self, *args):
        self.slot(*args)

    def __len__(self):
        return len(self.items)

    def __getitem__(self, idx):
        return self.items[idx]

    @property
    def last(self):
        return self.items[-1] if self.items else None

    def clear(self):
        self.items.clear()


class FakeClock:
    """Wall clock that only moves when told to."""

    def __init__(self, start: int = 1_700_000_000_000):
        self.now = start

    def __call__(self) -> int:
        return self.now

    def advance(self, millis: int) -> int:
        self.now += millis
        return self.now


class FakeAlarm:
    """Stands in for WakeAlarm: remembers the armed callback, fires on demand."""

    def __init__(self, fail: bool = False):
        self.fail = fail
        self.callback = None
        self.trigger_at = None
        self.scheduled: list = []
        self.cancel_count = 0

    @property
    def is_armed(self) -> bool:
        return self.callback is not None

    def schedule(self, trigger_at_millis, callback):
        if self.fail:
            raise AlarmScheduleError("scheduling denied")
        self.trigger_at = trigger_at_millis
        self.callback = callback
        self.scheduled.append((trigger_at_millis, callback))

    def cancel(self):
        self.callback = None
        self.trigger_at = None
        self.cancel_count += 1

    def fire(self):
        callback, self.callback, self.trigger_at = self.callback, None, None
        assert callback is not None, "alarm was not armed"
        callback()
