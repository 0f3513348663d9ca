from dataclasses import asdict

import typer

from monosplit.app import MigrateRunner
from monosplit.common import MonosplitError, bus
from monosplit.needle import L, needle
from monosplit.cli.factories import get_workspace_root


def plan_command(
    name: str = typer.Argument(..., help=needle.get(L.cli.argument.name.help)),
):
    runner = MigrateRunner(get_workspace_root())
    try:
        identity, footprints = runner.describe(name)
    except MonosplitError as e:
        bus.error(L.migrate.run.failed, error=str(e))
        raise typer.Exit(code=1)

    bus.info(L.plan.identity_header, name=name)
    for field_name, value in asdict(identity).items():
        typer.echo(f"  {field_name:<22} {value}")

    bus.info(L.plan.stages_header, count=len(footprints))
    for index, (stage_name, footprint) in enumerate(footprints, start=1):
        typer.echo(f"  {index}. {stage_name}")
        for path in footprint.reads:
            typer.echo(f"       read  {path}")
        for path in footprint.writes:
            typer.echo(f"       write {path}")
