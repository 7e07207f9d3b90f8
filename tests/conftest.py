"""Shared fixtures: a scripted upstream and a controllable clock."""

import pytest

from errors import FetchError

SAMPLE_DATASET = [
    {"country": "Germany", "country_code": "DE", "carbon_intensity": 300},
    {"country": "France", "country_code": "FR", "carbon_intensity": 60},
    {"country": "Germany", "country_code": "DE", "carbon_intensity": 280},
]


class FakeSource:
    """Returns (or raises) the queued results in order, one per fetch."""

    def __init__(self, *results):
        self.results = list(results)
        self.calls = 0

    async def fetch(self) -> list[dict]:
        self.calls += 1
        result = self.results.pop(0)
        if isinstance(result, Exception):
            raise result
        return result


class FakeClock:
    def __init__(self, now: float = 1_700_000_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def sample_dataset():
    return [dict(r) for r in SAMPLE_DATASET]


@pytest.fixture
def fetch_error():
    return FetchError("connection refused")
