"""Serve the judge endpoint."""

from pathlib import Path

import click

from judge.config import JudgeConfig


@click.command()
@click.option(
    "--data",
    "data_file",
    required=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="YAML table of taken values: {Klass: {attribute: [values]}}.",
)
@click.option("--host", default=None, help="Bind address (default: JUDGE_HOST or 127.0.0.1).")
@click.option("--port", default=None, type=int, help="Bind port (default: JUDGE_PORT or 8000).")
def serve(data_file: Path, host: str | None, port: int | None):
    """Start the uniqueness endpoint backed by a static table."""
    import uvicorn

    from judge.api import StaticUniquenessLookup, create_app

    config = JudgeConfig.from_env()
    app = create_app(StaticUniquenessLookup.from_yaml(data_file), config=config)
    uvicorn.run(app, host=host or config.host, port=port or config.port)
