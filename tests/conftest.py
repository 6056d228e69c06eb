"""Pytest fixtures for all tests."""

import pytest
from httpx import AsyncClient, ASGITransport

from config import Config, GeneratorConfig, ServerConfig
from idgen.generator import IdGenerator
from ui.app import create_app


class FakeClock:
    """Injectable clock returning a settable wall time in seconds."""

    def __init__(self, now):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


def zero_seed(size):
    return bytes(size)


@pytest.fixture
def clock():
    """Fixed clock at 2019-04-28T18:06:53Z."""
    return FakeClock(1556474813.0)


@pytest.fixture
def generator(clock):
    """Deterministic generator: all-zero key, one transform block per cycle."""
    return IdGenerator(clock=clock, seed_source=zero_seed, pool_blocks=1)


@pytest.fixture
def app_config():
    """Create test app config."""
    return Config(generator=GeneratorConfig(pool_blocks=2), server=ServerConfig(max_batch=10))


@pytest.fixture
def app(app_config, monkeypatch):
    """Create test FastAPI app with default admin credentials."""
    monkeypatch.delenv("TIMEID_ADMIN_USERNAME", raising=False)
    monkeypatch.delenv("TIMEID_ADMIN_PASSWORD", raising=False)
    return create_app(app_config)


@pytest.fixture
async def client(app):
    """Create async test client."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
