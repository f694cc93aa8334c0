"""Test doubles: fake clock, controllable fetchers, polling helper."""

import asyncio

T0 = 1_700_000_000.0

CLASSES = [
    {"id": "c1", "name": "5A", "studentIds": ["s1", "s2"]},
    {"id": "c2", "name": "5B", "studentIds": ["s3"]},
]
STUDENTS = [
    {"id": "s1", "name": "Asha", "classId": "c1"},
    {"id": "s2", "name": "Ravi", "classId": "c1"},
    {"id": "s3", "name": "Meena", "classId": "c2"},
]


class FakeClock:
    def __init__(self, now: float = T0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeFetcher:
    """Counts calls; returns ``value`` or raises ``error``.

    With ``gated=True`` each call waits for its own event in ``gates``.
    A callable ``value`` is called with the call index.
    """

    def __init__(self, value=None, error: Exception | None = None, gated: bool = False):
        self.value = value
        self.error = error
        self.gated = gated
        self.calls = 0
        self.gates: list[asyncio.Event] = []

    async def __call__(self):
        index = self.calls
        self.calls += 1
        if self.gated:
            gate = asyncio.Event()
            self.gates.append(gate)
            await gate.wait()
        if self.error is not None:
            raise self.error
        if callable(self.value):
            return self.value(index)
        return self.value


async def wait_until(predicate, timeout: float = 2.0) -> None:
    """Poll ``predicate`` while letting worker threads and tasks progress."""
    loop = asyncio.get_running_loop()
    deadline = loop.time() + timeout
    while not predicate():
        if loop.time() > deadline:
            raise AssertionError("condition not reached in time")
        await asyncio.sleep(0.005)
