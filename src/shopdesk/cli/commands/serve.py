"""Web server command."""

import click


@click.command("serve")
@click.option("--host", default="127.0.0.1", show_default=True, help="Interface to bind")
@click.option("--port", default=5000, show_default=True, type=int, help="Port to listen on")
@click.option("--debug", is_flag=True, help="Run Flask in debug mode")
@click.pass_context
def serve(ctx, host: str, port: int, debug: bool):
    """Run the web interface."""
    from shopdesk.web import create_app

    overrides = {}
    if ctx.obj.get("db_path"):
        overrides = {"DATABASE_URL": None, "DATABASE_PATH": ctx.obj["db_path"]}
    app = create_app(overrides)
    click.echo(f"Serving shopdesk on http://{host}:{port}/")
    app.run(host=host, port=port, debug=debug)


def register_commands(cli):
    """Register serve command with main CLI."""
    cli.add_command(serve)
