"""
speedo entry point.

Usage:
    speedo demo                                   Counter demo, Rich panel
    speedo demo --mode progress --total 200       Progress demo
    speedo demo --server http://localhost:9100    Also push to a collector
    speedo collector --port 9100                  Local fake collector
"""

from __future__ import annotations

import logging

import click

from speedo import __version__
from speedo.dashboard.terminal import run_dashboard, run_jsonl, run_quiet
from speedo.errors import ConfigurationError
from speedo.metrics import Mode
from speedo.mock.fake_collector import run_fake_collector
from speedo.mock.producer import SimulatedProducer
from speedo.reporter.protocol import PROTOCOLS
from speedo.speedometer import Config, Speedometer


log = logging.getLogger("speedo")

_RUNNERS = {"tui": run_dashboard, "jsonl": run_jsonl, "log": run_quiet}


@click.group()
@click.version_option(version=__version__, prog_name="speedo")
@click.option("--verbose", is_flag=True, default=False, help="Enable debug logging")
def cli(verbose: bool):
    """speedo - rate and progress speedometers."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
        datefmt="%H:%M:%S",
    )


@cli.command()
@click.option("--mode", type=click.Choice([m.name.lower() for m in Mode]),
              default="accumulation", help="What the simulated number behaves like")
@click.option("--total", default=100, help="Target for --mode progress")
@click.option("--name", default="", help="Display name (defaults to the generated id)")
@click.option("--server", default="", help="Collector URL; empty disables reporting")
@click.option("--protocol", type=click.Choice(sorted(PROTOCOLS)), default="path",
              help="Push layout: id in the path or in the body")
@click.option("--sample-interval", default=1.0, help="Sampling tick in seconds")
@click.option("--print-interval", default=5.0, help="Status line interval in seconds")
@click.option("--report-interval", default=60.0, help="Stat push interval in seconds")
@click.option("--refresh", default=0.5, help="Simulated producer step in seconds")
@click.option("--duration", default=None, type=float, help="Stop after this many seconds")
@click.option("--seed", default=42, help="Random seed for the simulated producer")
@click.option("--output", type=click.Choice(sorted(_RUNNERS)), default="tui",
              help="tui (Rich panel), jsonl (one JSON line per step) or log (status lines)")
def demo(mode: str, total: int, name: str, server: str, protocol: str,
         sample_interval: float, print_interval: float, report_interval: float,
         refresh: float, duration: float, seed: int, output: str):
    """Run a speedometer against a simulated workload."""
    config = Config(
        name=name,
        log=output == "log",
        server=server,
        protocol=protocol,
        report_interval_sec=report_interval,
        print_interval_sec=print_interval,
        sample_interval_sec=sample_interval,
    )
    try:
        meter = Speedometer(config, Mode.parse(mode), total=total if mode == "progress" else 0)
    except ConfigurationError as e:
        raise click.BadParameter(str(e))

    producer = SimulatedProducer(meter, seed=seed)
    runner = _RUNNERS[output]

    with meter:
        runner(meter, producer, refresh_interval=refresh, duration=duration)

    click.echo(meter.status_string())


@cli.command()
@click.option("--host", default="127.0.0.1", help="Interface to bind")
@click.option("--port", default=9100, help="Port to listen on")
def collector(host: str, port: int):
    """Run a local fake collector that logs every push it receives."""
    run_fake_collector(host=host, port=port)


if __name__ == "__main__":
    cli()
