from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import typer

from cli.client import ApiClient
from cli.config import CLIConfig, load_config
from cli.render import render_published
from logging_config import configure_logging
from models.records import SensorReading, SensorStatus
from services.publisher import PAYLOAD_ENCODING, ReadingPublisher, TransmitError
from transport.udp import build_default_transmitter


@dataclass
class CLIState:
    config: CLIConfig


app = typer.Typer(
    help="Push sensor readings to the local panel.",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def _get_state(ctx: typer.Context) -> CLIState:
    state = ctx.obj
    if not isinstance(state, CLIState):
        typer.secho("CLI state is uninitialized.", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)
    return state


@app.callback()
def main(
    ctx: typer.Context,
    base_url: Optional[str] = typer.Option(
        None,
        "--base-url",
        "-b",
        help="Relay API base URL (defaults to API_BASE_URL env or http://localhost:8000).",
    ),
    timeout: Optional[float] = typer.Option(
        None,
        "--timeout",
        help="Seconds to wait for the relay to answer.",
    ),
    log_level: Optional[str] = typer.Option(
        None,
        "--log-level",
        help="Logging level (defaults to LOG_LEVEL env or INFO).",
    ),
) -> None:
    """Entry point for the CLI."""
    configure_logging(log_level.upper() if log_level else None)
    ctx.obj = CLIState(config=load_config(base_url=base_url, timeout=timeout))


@app.command("send")
def send_command(
    channel: int = typer.Argument(..., help="Sensor channel number."),
    temperature: Optional[float] = typer.Option(
        None,
        "--temperature",
        "-t",
        help="Temperature in degrees Celsius; omit to send an empty value.",
    ),
    status: SensorStatus = typer.Option(
        SensorStatus.available,
        "--status",
        case_sensitive=False,
        help="Channel status. Recorded locally only, never transmitted.",
    ),
    host: Optional[str] = typer.Option(None, "--host", help="Panel host (defaults to PANEL_HOST)."),
    port: Optional[int] = typer.Option(None, "--port", help="Panel UDP port (defaults to PANEL_PORT)."),
) -> None:
    """Send one reading straight to the panel over UDP."""
    publisher = ReadingPublisher(transmitter=build_default_transmitter(host, port))
    reading = SensorReading(channel=channel, status=status, temperature=temperature)
    try:
        payload = publisher.publish(reading)
    except TransmitError as exc:
        typer.secho(str(exc), fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    host_name, port_number = publisher.destination
    typer.secho(
        f"Sent {payload.decode(PAYLOAD_ENCODING)!r} to {host_name}:{port_number}",
        fg=typer.colors.GREEN,
    )


@app.command("submit")
def submit_command(
    ctx: typer.Context,
    channel: int = typer.Argument(..., help="Sensor channel number."),
    temperature: Optional[float] = typer.Option(
        None,
        "--temperature",
        "-t",
        help="Temperature in degrees Celsius; omit to send an empty value.",
    ),
    status: SensorStatus = typer.Option(
        SensorStatus.available,
        "--status",
        case_sensitive=False,
        help="Channel status reported to the relay.",
    ),
) -> None:
    """Hand one reading to the HTTP relay service."""
    state = _get_state(ctx)
    client = ApiClient(state.config)
    ctx.call_on_close(client.close)
    typer.echo(f"Submitting channel {channel} to {state.config.base_url} ...")
    payload = client.submit_reading(channel, status.value, temperature)
    typer.echo()
    render_published(payload)
