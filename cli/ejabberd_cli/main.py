from __future__ import annotations

import typer

from .commands import call_cmd, catalog_cmd, config_cmd
from .logging_ import setup_logging


def _build_app() -> typer.Typer:
    app = typer.Typer(
        name="ejabberd-admin",
        help="ejabberd admin API client",
        no_args_is_help=True,
    )

    app.command("commands")(catalog_cmd.list_commands)
    app.command("describe")(catalog_cmd.describe_command)
    app.command("call")(call_cmd.call_command)
    app.add_typer(config_cmd.app, name="config")

    @app.callback()
    def _main(
            verbose: bool = typer.Option(False, "-v", "--verbose", help="Verbose logs."),
    ):
        setup_logging(verbose)

    return app


app = _build_app()


def main() -> None:
    app()


if __name__ == "__main__":
    main()
