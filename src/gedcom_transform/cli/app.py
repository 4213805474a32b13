
from __future__ import annotations

import typer

from gedcom_transform.cli.commands.generate import generate_command
from gedcom_transform.cli.commands.parse import parse_command
from gedcom_transform.cli.commands.stats import stats_command
from gedcom_transform.logging import configure_logging

app = typer.Typer(
    name="gedcom",
    help="GEDCOM 5.5.1 / 7.0 parser and generator",
    add_completion=False,
)


@app.callback()
def startup() -> None:
    """GEDCOM 5.5.1 / 7.0 parser and generator"""
    configure_logging()


app.command("parse")(parse_command)
app.command("generate")(generate_command)
app.command("stats")(stats_command)


def main():
    app()


if __name__ == "__main__":
    main()
