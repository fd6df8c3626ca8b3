"""Readiness subsystem — shared-deadline poller, stack probes, ordered runner."""

from .poller import PollConfig, PollResult, ReadyStatus, await_ready
from .probes import EndpointTarget, HealthCheck, body_contains_probe, stack_checks
from .sequence import ReadinessReport, run_checks
