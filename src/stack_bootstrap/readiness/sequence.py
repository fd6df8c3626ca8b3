"""Run readiness checks strictly in order, stopping at the first timeout."""

from __future__ import annotations

import logging
import time
from collections.abc import Sequence
from dataclasses import dataclass, field

from rich.console import Console
from rich.markup import escape

from stack_bootstrap.readiness.poller import Clock, PollConfig, PollResult, Sleeper, await_ready
from stack_bootstrap.readiness.probes import HealthCheck

logger = logging.getLogger(__name__)

_console = Console()


@dataclass
class ReadinessReport:
    """Results of a run, in execution order."""

    results: list[PollResult] = field(default_factory=list)
    pending: list[str] = field(default_factory=list)  # never attempted

    @property
    def ok(self) -> bool:
        return not self.pending and all(r.ok for r in self.results)

    @property
    def failed(self) -> PollResult | None:
        return next((r for r in self.results if not r.ok), None)


def run_checks(
    checks: Sequence[HealthCheck],
    config: PollConfig,
    *,
    clock: Clock = time.monotonic,
    sleep: Sleeper = time.sleep,
    console: Console | None = None,
) -> ReadinessReport:
    """Wait for each check in turn against the shared deadline in ``config``."""
    out = console or _console
    report = ReadinessReport()

    for i, check in enumerate(checks):
        out.print(escape(check.announce))
        result = await_ready(check.name, check.probe, config, clock=clock, sleep=sleep, console=out)
        report.results.append(result)
        if not result.ok:
            report.pending = [c.name for c in checks[i + 1:]]
            logger.info("Aborting run at %s; skipped: %s", check.name, report.pending or "none")
            break

    return report
