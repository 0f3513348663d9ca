import typer

from monosplit.app import MigrateRunner, make_hooks
from monosplit.common import MonosplitError, bus
from monosplit.needle import L, needle
from monosplit.cli.factories import get_workspace_root


def migrate_command(
    name: str = typer.Argument(..., help=needle.get(L.cli.argument.name.help)),
    dry_run: bool = typer.Option(
        False, "--dry-run", help=needle.get(L.cli.option.dry_run.help)
    ),
    yes: bool = typer.Option(
        False, "-y", "--yes", help=needle.get(L.cli.option.yes.help)
    ),
    skip_format: bool = typer.Option(
        False, "--skip-format", help=needle.get(L.cli.option.skip_format.help)
    ),
    skip_install: bool = typer.Option(
        False, "--skip-install", help=needle.get(L.cli.option.skip_install.help)
    ),
):
    runner = MigrateRunner(get_workspace_root())
    try:
        hooks = make_hooks(
            runner.config, format_files=not skip_format, install=not skip_install
        )
    except MonosplitError as e:
        bus.error(L.migrate.run.failed, error=str(e))
        raise typer.Exit(code=1)

    def confirm(count: int) -> bool:
        return yes or typer.confirm(
            needle.get(L.migrate.run.confirm).format(count=count), default=False
        )

    if not runner.run(name, dry_run=dry_run, confirm_callback=confirm, hooks=hooks):
        raise typer.Exit(code=1)
