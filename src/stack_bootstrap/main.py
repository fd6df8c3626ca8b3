"""Entry point for the stack bootstrap — `stack-bootstrap` console script."""

from __future__ import annotations

import argparse
import logging
import sys
import time

import httpx
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from stack_bootstrap.compose import (
    ComposeError,
    MissingDependencyError,
    compose_command,
    compose_up,
    logs_hint,
    require_docker,
)
from stack_bootstrap.config import settings
from stack_bootstrap.readiness.poller import (
    DEFAULT_INTERVAL_SECONDS,
    DEFAULT_TIMEOUT_SECONDS,
    Clock,
    PollConfig,
    Sleeper,
)
from stack_bootstrap.readiness.probes import stack_checks
from stack_bootstrap.readiness.sequence import run_checks

console = Console()
err_console = Console(stderr=True)

EPILOG = """\
This script prints status for:
  - Elasticsearch HTTPS endpoint
  - Kibana status API (requires elastic superuser)
  - Kibana Fleet setup API
  - Fleet Server status API

It uses the ports and credentials from your .env. TLS is self-signed;
certificates are not verified.
"""


def _positive_int(value: str) -> int:
    try:
        n = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected an integer, got {value!r}")
    if n <= 0:
        raise argparse.ArgumentTypeError(f"must be > 0, got {n}")
    return n


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="stack-bootstrap",
        description="Start the ELK + Fleet compose stack and wait until it is healthy.",
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--no-up", action="store_true",
        help="Do not run 'docker compose up -d' (just monitor)",
    )
    parser.add_argument(
        "--timeout", type=_positive_int, default=DEFAULT_TIMEOUT_SECONDS, metavar="SECONDS",
        help=f"Overall timeout for readiness (default: {DEFAULT_TIMEOUT_SECONDS})",
    )
    parser.add_argument(
        "--interval", type=_positive_int, default=DEFAULT_INTERVAL_SECONDS, metavar="SECONDS",
        help=f"Poll interval in seconds (default: {DEFAULT_INTERVAL_SECONDS})",
    )
    return parser


def run(
    args: argparse.Namespace,
    *,
    clock: Clock = time.monotonic,
    sleep: Sleeper = time.sleep,
    transport: httpx.BaseTransport | None = None,
) -> int:
    """Bring up the stack (unless --no-up) and wait for every service. Returns the exit code."""
    docker = settings.docker_cli_path
    try:
        require_docker(docker)
    except MissingDependencyError as e:
        err_console.print(f"[red]{escape(str(e))}[/red]")
        return 1

    console.print(
        Panel.fit(
            f"bootstrap: ES {settings.es_port}, Kibana {settings.kibana_port}, Fleet {settings.fleet_port}\n"
            f"Timeout: {args.timeout}s  Interval: {args.interval}s",
            title="stack-bootstrap",
            border_style="green",
        )
    )

    if args.no_up:
        console.print("--no-up set; not starting containers (monitoring only)")
    else:
        console.print(f"Starting stack with: {escape(' '.join(compose_command(docker)))}")
        try:
            compose_up(docker)
        except ComposeError as e:
            err_console.print(f"[red]{escape(str(e))}[/red]")
            return 1

    # Deadline starts once containers are requested, shared by all four checks
    config = PollConfig.start(timeout=args.timeout, interval=args.interval, clock=clock)
    report = run_checks(
        stack_checks(settings, transport=transport), config,
        clock=clock, sleep=sleep, console=console,
    )

    if not report.ok:
        failed = report.failed
        name = failed.name if failed else "unknown check"
        err_console.print(f"[bold red]Stack not ready:[/bold red] {escape(name)} timed out after {args.timeout}s")
        if report.pending:
            err_console.print(f"[dim]Not checked: {escape(', '.join(report.pending))}[/dim]")
        err_console.print(f"[dim]Tip: inspect logs with '{escape(logs_hint(docker))}'[/dim]")
        return 1

    console.print(
        "[bold green]All components are healthy.[/bold green] "
        f"You can now open Kibana at: https://{escape(settings.stack_host)}:{settings.kibana_port}"
    )
    console.print(f"[dim]Tip: tail logs with '{escape(logs_hint(docker))}'[/dim]")
    return 0


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
    )
    return run(args)


if __name__ == "__main__":
    sys.exit(main())
