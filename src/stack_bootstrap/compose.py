"""Docker compose call-out — locate the docker CLI and bring the stack up."""

from __future__ import annotations

import logging
import shutil
import subprocess

logger = logging.getLogger(__name__)

COMPOSE_UP_ARGS = ("compose", "up", "-d")
LOG_SERVICES = ("es01", "kibana", "fleet-server")


class MissingDependencyError(Exception):
    """Raised when a required external command is not on PATH."""


class ComposeError(Exception):
    """Raised when `docker compose up` could not be run or exited non-zero."""

    def __init__(self, returncode: int, detail: str = "") -> None:
        self.returncode = returncode
        self.detail = detail
        super().__init__(f"docker compose up failed ({returncode}){': ' + detail if detail else ''}")


def require_docker(docker: str = "docker") -> str:
    """Resolve the docker CLI on PATH. Raises MissingDependencyError if absent."""
    path = shutil.which(docker)
    if path is None:
        raise MissingDependencyError(f"Docker is required but '{docker}' was not found in PATH.")
    return path


def compose_command(docker: str = "docker") -> list[str]:
    return [docker, *COMPOSE_UP_ARGS]


def logs_hint(docker: str = "docker") -> str:
    return f"{docker} compose logs -f {' '.join(LOG_SERVICES)}"


def compose_up(docker: str = "docker") -> None:
    """Run `docker compose up -d` in the current directory.

    Only the exit status is inspected; containers that start but never get
    healthy show up later as probe timeouts.
    """
    cmd = compose_command(docker)
    logger.info("Running: %s", " ".join(cmd))
    try:
        subprocess.run(cmd, check=True)
    except subprocess.CalledProcessError as e:
        raise ComposeError(e.returncode) from e
    except FileNotFoundError as e:
        raise ComposeError(127, str(e)) from e
