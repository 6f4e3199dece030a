"""Pytest configuration and fixtures."""

import sys
from pathlib import Path

import pytest
import pytest_asyncio

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))


class FakeClock:
    """Deterministic clock: every reading advances time by step ns."""

    def __init__(self, step: int = 1_000_000):
        self.step = step
        self.now = 0
        self.resets = 0

    def now_ns(self) -> int:
        self.now += self.step
        return self.now

    def reset(self) -> None:
        self.now = 0
        self.resets += 1


@pytest.fixture
def fake_clock():
    """Clock advancing 1 ms per reading."""
    return FakeClock()


@pytest.fixture
def recorder(fake_clock):
    """Create a Recorder driven by the fake clock."""
    from flamespan.recorder import Recorder

    return Recorder(clock=fake_clock)


@pytest.fixture
def registry():
    """Create an empty Registry with a short lock timeout."""
    from flamespan.registry import Registry

    return Registry(lock_timeout=0.05)


@pytest.fixture
def profiler(registry):
    """Create a Profiler whose threads each get their own fake clock."""
    from flamespan.profiler import Profiler

    return Profiler(registry=registry, clock_factory=FakeClock)


@pytest.fixture
def default_profiler():
    """The process-wide profiler, cleared before and after the test."""
    from flamespan.profiler import get_profiler

    prof = get_profiler()
    prof.clear()
    yield prof
    prof.clear()


@pytest.fixture
def api_app(profiler):
    """Create FastAPI app serving the test profiler."""
    from flamespan.api import create_fastapi_app
    from flamespan.api.routes import control

    control.set_sim_instance(None)
    yield create_fastapi_app(profiler)
    control.set_sim_instance(None)


@pytest_asyncio.fixture
async def client(api_app):
    """HTTP client bound to the app without a network socket."""
    import httpx

    transport = httpx.ASGITransport(app=api_app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest.fixture
def run_in_thread():
    """Run a callable on a fresh named thread and wait for it."""
    import threading

    def _run(fn, name: str = "worker"):
        errors = []

        def target():
            try:
                fn()
            except Exception as e:  # surfaced in the test thread below
                errors.append(e)

        thread = threading.Thread(target=target, name=name)
        thread.start()
        thread.join()
        if errors:
            raise errors[0]
        return thread

    return _run
