import time


class Timer:
    def __init__(self, name="Elapsed"):
        self.name = name
        self.start()

    def start(self):
        self._start = time.perf_counter()

    def seconds(self) -> float:
        return time.perf_counter() - self._start

    def milliseconds(self) -> float:
        return self.seconds() * 1000

    def __enter__(self):
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.elapsed = self.seconds()
