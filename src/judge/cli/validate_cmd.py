"""Validate a form description from the command line."""

import asyncio
import functools
from pathlib import Path

import click
import httpx

from judge import network
from judge.config import JudgeConfig
from judge.elements import Form
from judge.errors import JudgeError
from judge.services import ElementOutcome, ValidationService
from judge.validation import Status
from judge.validators import register_builtin_validators


async def _run(form: Form, config: JudgeConfig) -> dict[str, ElementOutcome]:
    client_args = {"base_url": config.base_url} if config.base_url else {}
    async with httpx.AsyncClient(**client_args) as client:
        # Requests go through the client so relative URLs resolve against base_url
        relative = JudgeConfig(engine_path=config.engine_path)
        register_builtin_validators(relative, get=functools.partial(network.get, client=client))
        return await ValidationService().validate_form(form)


@click.command()
@click.argument("form_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--base-url", default=None, help="Server hosting the judge endpoint.")
@click.option("--engine-path", default=None, help="Mount path of the judge endpoint.")
def validate(form_file: Path, base_url: str | None, engine_path: str | None):
    """Validate every element of FORM_FILE (YAML) against its rules."""
    config = JudgeConfig.from_env(base_url=base_url, engine_path=engine_path)
    form = Form.from_yaml(form_file)

    try:
        outcomes = asyncio.run(_run(form, config))
    except JudgeError as e:
        click.echo(click.style(f"Configuration error: {e}", fg="red"), err=True)
        raise SystemExit(1)

    invalid = 0
    for element_id, outcome in outcomes.items():
        if outcome.delivered is Status.INVALID:
            invalid += 1
            click.echo(click.style(f"  ✗ {element_id}: {'; '.join(outcome.messages)}", fg="red"))
        else:
            click.echo(click.style(f"  ✓ {element_id}", fg="green"))

    if invalid:
        click.echo(click.style(f"\n{invalid} invalid element(s).", fg="red", bold=True))
        raise SystemExit(1)

    click.echo(click.style(f"\nAll {len(outcomes)} element(s) are valid.", fg="green", bold=True))
