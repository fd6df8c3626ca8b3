"""Probe definitions for the ELK + Fleet stack.

Each probe issues one HTTPS GET (self-signed certs, so no verification) and
succeeds iff the response body contains a literal marker. Connection errors
and timeouts map to "not ready"; they never propagate to the poller.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import httpx

from stack_bootstrap.config import StackSettings
from stack_bootstrap.readiness.poller import Probe

logger = logging.getLogger(__name__)

# Response markers
ES_UNAUTHENTICATED_MARKER = "missing authentication credentials"
KIBANA_AVAILABLE_MARKER = '"overall":{"level":"available"'
FLEET_INITIALIZED_MARKER = '"isInitialized":true'
FLEET_SERVER_HEALTHY_MARKER = "HEALTHY"


@dataclass(frozen=True)
class EndpointTarget:
    """HTTPS endpoint of one stack service."""

    host: str
    port: int
    username: str | None = None
    password: str | None = None

    def url(self, path: str = "/") -> str:
        if not path.startswith("/"):
            path = "/" + path
        return f"https://{self.host}:{self.port}{path}"

    @property
    def auth(self) -> tuple[str, str] | None:
        if self.username is None:
            return None
        return (self.username, self.password or "")


@dataclass(frozen=True)
class HealthCheck:
    """A named readiness check, executed in a fixed position of the run."""

    name: str
    announce: str
    probe: Probe


def body_contains_probe(
    target: EndpointTarget,
    path: str,
    needle: str,
    timeout: float = 10.0,
    transport: httpx.BaseTransport | None = None,
) -> Probe:
    """Build a probe that GETs ``target``/``path`` and looks for ``needle`` in the body.

    The status code is ignored: Elasticsearch answers 401 with exactly the
    body we are looking for.
    """
    url = target.url(path)

    def probe() -> bool:
        try:
            with httpx.Client(timeout=timeout, verify=False, transport=transport) as client:
                resp = client.get(url, auth=target.auth)
        except httpx.HTTPError as e:
            logger.debug("GET %s failed: %s: %s", url, type(e).__name__, e)
            return False
        found = needle in resp.text
        if not found:
            logger.debug("GET %s -> %d, marker %r not found", url, resp.status_code, needle)
        return found

    return probe


def stack_checks(
    settings: StackSettings,
    transport: httpx.BaseTransport | None = None,
) -> list[HealthCheck]:
    """The four stack checks, in dependency order (ES → Kibana → Fleet → Fleet Server)."""
    host = settings.stack_host
    timeout = settings.probe_timeout_seconds

    es = EndpointTarget(host, settings.es_port)
    kibana = EndpointTarget(
        host, settings.kibana_port,
        username=settings.elastic_username, password=settings.elastic_password,
    )
    fleet_server = EndpointTarget(host, settings.fleet_port)

    return [
        HealthCheck(
            name="Elasticsearch HTTPS up",
            announce="Checking Elasticsearch readiness...",
            probe=body_contains_probe(es, "/", ES_UNAUTHENTICATED_MARKER, timeout, transport),
        ),
        HealthCheck(
            name="Kibana overall status available",
            announce="Checking Kibana status (requires elastic credentials)...",
            probe=body_contains_probe(kibana, "/api/status", KIBANA_AVAILABLE_MARKER, timeout, transport),
        ),
        HealthCheck(
            name="Fleet initialized in Kibana",
            announce="Checking Fleet setup (Kibana Fleet initialization)...",
            probe=body_contains_probe(kibana, "/api/fleet/setup", FLEET_INITIALIZED_MARKER, timeout, transport),
        ),
        HealthCheck(
            name="Fleet Server HEALTHY",
            announce="Checking Fleet Server health...",
            probe=body_contains_probe(fleet_server, "/api/status", FLEET_SERVER_HEALTHY_MARKER, timeout, transport),
        ),
    ]
