"""Check a rule-set file against the registered validators."""

from pathlib import Path

import click
import yaml

from judge.errors import MalformedRuleSetError
from judge.registry import ValidatorRegistry
from judge.rules import decode
from judge.validators import register_builtin_validators


@click.command("check-rules")
@click.argument("rules_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def check_rules(rules_file: Path):
    """Decode RULES_FILE (JSON or YAML) and check every kind is registered."""
    register_builtin_validators()

    try:
        with rules_file.open() as fh:
            raw = yaml.safe_load(fh)
        rule_set = decode(raw)
    except (yaml.YAMLError, MalformedRuleSetError) as e:
        click.echo(click.style(f"Error: {e}", fg="red"), err=True)
        raise SystemExit(1)

    unknown = 0
    for rule in rule_set:
        if ValidatorRegistry.is_registered(rule.kind):
            click.echo(f"  ✓ {rule.kind}")
        else:
            unknown += 1
            click.echo(click.style(f"  ✗ {rule.kind} (no validator registered)", fg="red"))

    if unknown:
        click.echo(click.style(f"\n{unknown} unknown kind(s).", fg="red", bold=True))
        raise SystemExit(1)

    click.echo(click.style(f"\n{len(rule_set)} rule(s) OK.", fg="green", bold=True))
