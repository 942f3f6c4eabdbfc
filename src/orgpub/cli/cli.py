"""CLI entrypoint: Typer app definition and command registration"""

import typer

from orgpub.cli.commands import inspect_cmd, render_cmd


app = typer.Typer(name="orgpub", no_args_is_help=True, help="Org document to HTML fragment renderer")

app.command(name="render")(render_cmd)
app.command(name="inspect")(inspect_cmd)
