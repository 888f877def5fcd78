import time
from typing import List, Optional, Any


class NetObserver:
    """
    Lifecycle hook attached to a net. `start` fires before the first operator
    of a run, `stop` after the last one succeeded.

    `operator_start` and `operator_done` bracket every operator `run()` call.
    `operator_done` fires for a failing operator too, before the run stops.
    """

    def __init__(self, subject: Any = None):
        self.subject = subject

    def start(self):
        pass

    def stop(self):
        pass

    def operator_start(self, net, op):
        pass

    def operator_done(self, net, op):
        pass


class Observable:
    """Mixin holding an ordered chain of observers."""

    def __init__(self):
        self._observers: List[NetObserver] = []

    def attach_observer(self, observer: NetObserver) -> NetObserver:
        if observer not in self._observers:
            if observer.subject is None:
                observer.subject = self
            self._observers.append(observer)
        return observer

    def detach_observer(self, observer: NetObserver) -> Optional[NetObserver]:
        if observer in self._observers:
            self._observers.remove(observer)
            return observer
        return None

    @property
    def num_observers(self) -> int:
        return len(self._observers)

    def start_all_observers(self):
        for observer in self._observers:
            observer.start()

    def stop_all_observers(self):
        for observer in self._observers:
            observer.stop()

    def operator_start_all_observers(self, op):
        for observer in self._observers:
            observer.operator_start(self, op)

    def operator_done_all_observers(self, op):
        for observer in self._observers:
            observer.operator_done(self, op)


class TimeObserver(NetObserver):
    """Wall-clock time of each completed run (a start followed by a stop)."""

    def __init__(self, subject: Any = None):
        super().__init__(subject)
        self.run_count = 0
        self.total_ms = 0.0
        self.last_ms = 0.0
        self._start: Optional[float] = None

    def start(self):
        self._start = time.perf_counter()

    def stop(self):
        if self._start is None:
            return
        self.last_ms = (time.perf_counter() - self._start) * 1000
        self.total_ms += self.last_ms
        self.run_count += 1
        self._start = None

    @property
    def average_ms(self) -> float:
        if self.run_count == 0:
            return 0.0
        return self.total_ms / self.run_count
