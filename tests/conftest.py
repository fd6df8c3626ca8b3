"""Shared test fixtures."""

from __future__ import annotations

import io

import pytest
from rich.console import Console

from stack_bootstrap.config import StackSettings

STACK_ENV_VARS = (
    "ES_PORT", "KIBANA_PORT", "FLEET_PORT", "ELASTIC_USERNAME", "ELASTIC_PASSWORD",
    "STACK_HOST", "PROBE_TIMEOUT_SECONDS", "DOCKER_CLI_PATH", "LOG_LEVEL",
)


class FakeClock:
    """Monotonic clock that only moves when ``sleep`` (or ``advance``) is called."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start
        self.sleeps: list[float] = []

    def __call__(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def console() -> Console:
    """A rich console writing to an in-memory buffer (read via ``console.file.getvalue()``)."""
    return Console(file=io.StringIO(), width=200, color_system=None)


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    """Strip stack variables from the process environment."""
    for var in STACK_ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    return monkeypatch


@pytest.fixture
def stack_settings(clean_env: pytest.MonkeyPatch) -> StackSettings:
    """Settings with built-in defaults only (no .env, no process env)."""
    return StackSettings(_env_file=None)


@pytest.fixture(autouse=True)
def no_proxy_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """httpx mounts env proxies ahead of an explicit transport; keep mocks in charge."""
    for var in ("HTTP_PROXY", "HTTPS_PROXY", "ALL_PROXY", "http_proxy", "https_proxy", "all_proxy"):
        monkeypatch.delenv(var, raising=False)
