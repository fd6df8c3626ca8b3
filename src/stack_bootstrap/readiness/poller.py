"""Readiness poller — waits for a single probe against a shared deadline.

Every check of a run measures elapsed time from the same ``PollConfig.started_at``,
so checks that run later inherit whatever budget the earlier ones left over.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum

from rich.console import Console
from rich.markup import escape

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 1800
DEFAULT_INTERVAL_SECONDS = 5

Probe = Callable[[], bool]
Clock = Callable[[], float]
Sleeper = Callable[[float], None]

_console = Console()


# ── Models ───────────────────────────────────────────────────────────────────


class ReadyStatus(str, Enum):
    READY = "ready"
    TIMEOUT = "timeout"


@dataclass(frozen=True)
class PollConfig:
    """Shared polling budget for a whole run."""

    total_timeout_seconds: int = DEFAULT_TIMEOUT_SECONDS
    interval_seconds: int = DEFAULT_INTERVAL_SECONDS
    started_at: float = field(default_factory=time.monotonic)

    def __post_init__(self) -> None:
        if self.total_timeout_seconds <= 0:
            raise ValueError(f"total_timeout_seconds must be > 0, got {self.total_timeout_seconds}")
        if self.interval_seconds <= 0:
            raise ValueError(f"interval_seconds must be > 0, got {self.interval_seconds}")

    @classmethod
    def start(
        cls,
        timeout: int = DEFAULT_TIMEOUT_SECONDS,
        interval: int = DEFAULT_INTERVAL_SECONDS,
        clock: Clock = time.monotonic,
    ) -> PollConfig:
        """Capture the run's origin timestamp."""
        return cls(total_timeout_seconds=timeout, interval_seconds=interval, started_at=clock())

    def elapsed(self, now: float) -> float:
        return now - self.started_at

    def remaining(self, now: float) -> float:
        return max(0.0, self.total_timeout_seconds - self.elapsed(now))

    def expired(self, now: float) -> bool:
        return self.elapsed(now) >= self.total_timeout_seconds


@dataclass
class PollResult:
    """Outcome of waiting for one check."""

    name: str
    status: ReadyStatus
    attempts: int
    sleeps: int
    elapsed_seconds: float

    @property
    def ok(self) -> bool:
        return self.status == ReadyStatus.READY


# ── Poll loop ────────────────────────────────────────────────────────────────


def _probe_once(name: str, probe: Probe) -> bool:
    try:
        return bool(probe())
    except Exception:
        logger.exception("Probe for %s raised; treating as not ready", name)
        return False


def await_ready(
    name: str,
    probe: Probe,
    config: PollConfig,
    *,
    clock: Clock = time.monotonic,
    sleep: Sleeper = time.sleep,
    console: Console | None = None,
) -> PollResult:
    """Call ``probe`` every ``interval_seconds`` until it succeeds or the deadline passes.

    Returns a READY result as soon as the probe succeeds (no trailing sleep),
    or a TIMEOUT result once elapsed time since ``config.started_at`` reaches
    ``config.total_timeout_seconds``. Never raises for probe failures.
    """
    out = console or _console
    label = escape(name)
    attempts = 0
    sleeps = 0

    while True:
        attempts += 1
        if _probe_once(name, probe):
            elapsed = config.elapsed(clock())
            out.print(f"[bold green]\\[READY][/bold green] {label}")
            logger.debug("%s ready after %d attempt(s), %.1fs elapsed", name, attempts, elapsed)
            return PollResult(name, ReadyStatus.READY, attempts, sleeps, elapsed)

        now = clock()
        if config.expired(now):
            elapsed = config.elapsed(now)
            out.print(
                f"[bold red]\\[TIMEOUT][/bold red] {label} did not become ready "
                f"in {config.total_timeout_seconds}s"
            )
            logger.warning("%s timed out after %d attempt(s)", name, attempts)
            return PollResult(name, ReadyStatus.TIMEOUT, attempts, sleeps, elapsed)

        out.print(
            f"[yellow]\\[WAIT ][/yellow] {label} ... retrying in {config.interval_seconds}s "
            f"({config.remaining(now):.0f}s left)"
        )
        sleep(config.interval_seconds)
        sleeps += 1
