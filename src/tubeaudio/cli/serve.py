"""Command-line entry point that runs the tubeaudio web service under uvicorn."""

import click
import uvicorn


@click.command()
@click.option("--host", default="127.0.0.1", show_default=True, help="Interface to bind.")
@click.option("--port", default=3000, show_default=True, type=int, help="Port to listen on.")
@click.option("--reload", is_flag=True, help="Restart on code changes (development only).")
def main(host: str, port: int, reload: bool) -> None:
    """Serve the conversion, catalog and streaming API."""
    click.echo(f"tubeaudio listening on http://{host}:{port}/api")
    uvicorn.run("tubeaudio.web.main:app", host=host, port=port, reload=reload, access_log=False)


if __name__ == "__main__":
    main()
