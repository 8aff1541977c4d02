import time
from contextlib import contextmanager
from typing import Dict, Iterator, Optional


class StepTimer:
    """Collects named timing measurements in seconds.

    Use with the time_step() context manager to record durations.
    """

    def __init__(self, durations: Optional[Dict[str, float]] = None) -> None:
        self._durations: Dict[str, float] = durations if durations is not None else {}

    @contextmanager
    def time_step(self, name: str, echo: bool = True) -> Iterator[None]:
        start = time.perf_counter()
        try:
            yield
        finally:
            duration = time.perf_counter() - start
            self._durations[name] = self._durations.get(name, 0.0) + duration
            if echo:
                print(f"[TIME] {name}: {duration:.3f}s")

    def get(self, name: str) -> Optional[float]:
        return self._durations.get(name)

    def to_lines(self) -> list[str]:
        return [f"{key}: {seconds:.3f}s" for key, seconds in self._durations.items()]

    def write_to_file(self, path: str) -> None:
        with open(path, "w", encoding="utf-8") as f:
            for line in self.to_lines():
                f.write(line + "\n")
