import logging

import typer

from monosplit.common import bus
from monosplit.needle import L, needle
from .rendering import CliRenderer

from .commands.migrate import migrate_command
from .commands.plan import plan_command

app = typer.Typer(
    name="monosplit",
    help=needle.get(L.cli.app.description),
    no_args_is_help=True,
)


@app.callback()
def main(
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help=needle.get(L.cli.option.verbose.help)
    ),
):
    # The CLI is the composition root: it picks the renderer and log level.
    bus.set_renderer(CliRenderer(verbose=verbose))
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


app.command(name="migrate", help=needle.get(L.cli.command.migrate.help))(
    migrate_command
)
app.command(name="plan", help=needle.get(L.cli.command.plan.help))(plan_command)


if __name__ == "__main__":
    app()
