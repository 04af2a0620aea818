"""Typer CLI entrypoint."""

from __future__ import annotations

import dataclasses
import sys

import typer

from btbridge.core.config import load_config
from btbridge.core.errors import BtbridgeError
from btbridge.core.model import Failure, NotImplementedReply, Success
from btbridge.core.service import BridgeService

app = typer.Typer(help="Bluetooth radio enable bridge over a method channel")


@app.callback()
def main(
    ctx: typer.Context,
    backend: str | None = typer.Option(None, "--backend", help="Platform backend: bluez or android"),
) -> None:
    ctx.obj = {"backend": backend}


def _build_service(ctx: typer.Context) -> BridgeService:
    config = load_config()
    backend = (ctx.obj or {}).get("backend")
    if backend:
        config = dataclasses.replace(config, backend=backend)
    return BridgeService(config=config)


@app.command("enable")
def enable(ctx: typer.Context) -> None:
    """Enable the Bluetooth radio, or open system settings where required."""
    try:
        service = _build_service(ctx)
        reply = service.enable_bluetooth()
    except BtbridgeError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from None

    if isinstance(reply, Success):
        typer.echo(reply.value)
        return
    if isinstance(reply, Failure):
        typer.echo(f"Error [{reply.code}]: {reply.message}", err=True)
    elif isinstance(reply, NotImplementedReply):
        typer.echo("Error: method not implemented", err=True)
    raise typer.Exit(code=1)


@app.command("status")
def status(ctx: typer.Context) -> None:
    """Show adapter capability and platform tier."""
    try:
        service = _build_service(ctx)
        radio = service.status()
        typer.echo(f"Channel: {service.channel.name}")
        typer.echo(f"Bluetooth: {radio.capability.value}")
        typer.echo(f"Tier: {radio.tier.value}")
    except BtbridgeError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from None


@app.command("serve")
def serve(ctx: typer.Context) -> None:
    """Answer JSON-lines method calls on stdin until EOF."""
    try:
        service = _build_service(ctx)
        service.serve(sys.stdin, sys.stdout)
    except BtbridgeError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from None


def run() -> None:
    app()


if __name__ == "__main__":
    run()
