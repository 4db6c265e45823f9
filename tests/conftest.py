"""Shared fixtures for furever tests."""

import random
from dataclasses import replace
from datetime import UTC, datetime, timedelta

import pytest

from furever.app import App
from furever.config import AppConfig


class FakeClock:
    """Settable clock for session expiry tests."""

    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or datetime(2024, 1, 1, tzinfo=UTC)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, delta: timedelta) -> None:
        self.now += delta


class PlainHasher:
    """Stands in for argon2 so HTTP tests don't pay for real hashing."""

    async def hash(self, password: str) -> str:
        return f"plain${password}"

    async def verify(self, password: str, phc_hash: str) -> bool:
        return phc_hash == f"plain${password}"


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def config(tmp_path) -> AppConfig:
    return AppConfig(
        database_url=f"sqlite:///{tmp_path / 'test.db'}",
        out_log=None,
        err_log=None,
    )


@pytest.fixture
def make_app(config, clock):
    """Build an App on the test database; keyword arguments override config fields."""

    def factory(*, rng=random.random, **overrides) -> App:
        return App(replace(config, **overrides), hasher=PlainHasher(), clock=clock, rng=rng)

    return factory


@pytest.fixture
def app(make_app) -> App:
    return make_app()
