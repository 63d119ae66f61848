"""Pytest configuration for redoscope tests."""

import asyncio
import signal
import sys

import pytest


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "timeout(seconds): set custom timeout for test")


def timeout_handler(signum, frame):
    """Handle timeout signal."""
    pytest.fail("Test timed out")


@pytest.fixture(autouse=True)
def test_timeout(request):
    """Apply a timeout to all tests.

    Default is 10 seconds; a test stuck on a never-settling analyzer fails
    instead of hanging the run.
    """
    if sys.platform != "win32":
        marker = request.node.get_closest_marker("timeout")
        timeout_seconds = marker.args[0] if marker else 10

        old_handler = signal.signal(signal.SIGALRM, timeout_handler)
        signal.alarm(timeout_seconds)
        yield
        signal.alarm(0)
        signal.signal(signal.SIGALRM, old_handler)
    else:
        yield


class FakeAnalyzer:
    """Analyzer double that returns a fixed payload or raises."""

    def __init__(self, payload=None, error=None, delay=0.0):
        self.payload = payload
        self.error = error
        self.delay = delay
        self.calls = []

    async def __call__(self, source, flags):
        self.calls.append((source, flags))
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return self.payload


async def never_settles(source, flags):
    await asyncio.Event().wait()


SAFE_PAYLOAD = {"status": "safe", "source": "^(pineapple|pizza)$", "complexity": {"type": "safe"}}

VULNERABLE_PAYLOAD = {
    "status": "vulnerable",
    "source": "^(a|a)*$",
    "complexity": {"type": "exponential"},
    "attack": {"pattern": "'a'.repeat(31) + '\\x00'"},
    "hotspot": [
        {"start": 2, "end": 3, "temperature": "heat"},
        {"start": 4, "end": 5, "temperature": "heat"},
    ],
}


@pytest.fixture
def safe_analyzer():
    return FakeAnalyzer(payload=dict(SAFE_PAYLOAD))


@pytest.fixture
def vulnerable_analyzer():
    return FakeAnalyzer(payload=dict(VULNERABLE_PAYLOAD))
