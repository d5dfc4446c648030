"""Command-line check that the external conversion tools are installed."""

import sys

import click

from tubeaudio.config import ConfigManager
from tubeaudio.system.path_resolver import PathResolver
from tubeaudio.system.tool_probe import (
    EXTRACTOR_INSTALL_HINT,
    TRANSCODER_INSTALL_HINT,
    ToolProbe,
)


@click.command()
def main() -> None:
    """Report which extractor and transcoder were found; exit 1 if either is missing."""
    path_resolver = PathResolver()
    config = ConfigManager(path_resolver).load()
    probe = ToolProbe(
        extractor_candidates=config.conversion.extractor_candidates,
        transcoder_candidates=config.conversion.transcoder_candidates,
    )
    tools = probe.status()

    if tools.extractor_present:
        click.echo(f"extractor:  {tools.extractor}")
    else:
        click.echo(f"extractor:  missing ({EXTRACTOR_INSTALL_HINT})", err=True)
    if tools.transcoder_present:
        click.echo(f"transcoder: {tools.transcoder}")
    else:
        click.echo(f"transcoder: missing ({TRANSCODER_INSTALL_HINT})", err=True)
    click.echo(f"audio dir:  {path_resolver.get_audio_dir()}")

    sys.exit(0 if tools.ready else 1)


if __name__ == "__main__":
    main()
