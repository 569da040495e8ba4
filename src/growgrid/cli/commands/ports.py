"""Serial port listing command."""

import click

from growgrid.devices import list_serial_ports


@click.group(name="serial")
def serial_group():
    """Serial port commands."""
    pass


@serial_group.command(name="list")
def list_ports():
    """List available serial ports."""
    ports = list_serial_ports()

    click.echo("Serial Ports:\n")
    if not ports:
        click.echo("  No serial ports found.")
        return

    for i, (device, description) in enumerate(ports):
        click.echo(f"  [{i}] {device}  {description}")
