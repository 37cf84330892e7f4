from __future__ import annotations

from typing import Any, Dict, Iterable

import typer


def echo_heading(text: str) -> None:
    typer.secho(text, bold=True)


def echo_key_values(pairs: Iterable[tuple[str, Any]]) -> None:
    for key, value in pairs:
        typer.echo(f"{key}: {'' if value is None else value}")


def render_published(payload: Dict[str, Any]) -> None:
    echo_heading("Reading Published")
    echo_key_values(
        [
            ("channel", payload.get("channel")),
            ("status", payload.get("status")),
            ("temperature", payload.get("temperature")),
            ("destination", payload.get("destination")),
            ("payload", repr(payload.get("payload", ""))),
        ]
    )
