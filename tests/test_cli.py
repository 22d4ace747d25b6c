"""Tests for Judge CLI commands."""

import json

import pytest
from click.testing import CliRunner

from judge.cli.main import cli


@pytest.fixture
def runner():
    return CliRunner()


def write(tmp_path, name, text):
    path = tmp_path / name
    path.write_text(text)
    return path


VALID_FORM = """\
elements:
  - id: user_name
    value: Ada
    rules:
      - kind: presence
        messages: {blank: "can't be blank"}
  - id: user_age
    value: "36"
    rules:
      - kind: numericality
        options: {only_integer: true, greater_than: 17}
  - id: user_note
    value: ""
"""

INVALID_FORM = """\
elements:
  - id: user_name
    value: ""
    rules:
      - kind: presence
        messages: {blank: "can't be blank"}
  - id: user_age
    value: "12"
    rules:
      - kind: numericality
        options: {greater_than: 17}
        messages: {greater_than: "must be an adult"}
"""


class TestValidate:
    def test_valid_form(self, runner, tmp_path):
        form = write(tmp_path, "form.yaml", VALID_FORM)
        result = runner.invoke(cli, ["validate", str(form)])
        assert result.exit_code == 0
        assert "✓ user_name" in result.output
        assert "✓ user_age" in result.output
        assert "user_note" not in result.output
        assert "All 2 element(s) are valid." in result.output

    def test_invalid_form(self, runner, tmp_path):
        form = write(tmp_path, "form.yaml", INVALID_FORM)
        result = runner.invoke(cli, ["validate", str(form)])
        assert result.exit_code == 1
        assert "✗ user_name: can't be blank" in result.output
        assert "✗ user_age: must be an adult" in result.output
        assert "2 invalid element(s)." in result.output

    def test_unknown_kind_is_configuration_error(self, runner, tmp_path):
        form = write(
            tmp_path,
            "form.yaml",
            "elements:\n  - id: user_zip\n    value: '1'\n    rules:\n      - kind: postcode\n",
        )
        result = runner.invoke(cli, ["validate", str(form)])
        assert result.exit_code == 1
        assert "Configuration error" in result.output
        assert "postcode" in result.output

    def test_missing_file(self, runner, tmp_path):
        result = runner.invoke(cli, ["validate", str(tmp_path / "missing.yaml")])
        assert result.exit_code == 2


class TestCheckRules:
    def test_json_rules(self, runner, tmp_path):
        rules = write(
            tmp_path,
            "rules.json",
            json.dumps([{"kind": "presence"}, {"kind": "length", "options": {"maximum": 5}}]),
        )
        result = runner.invoke(cli, ["check-rules", str(rules)])
        assert result.exit_code == 0
        assert "✓ presence" in result.output
        assert "✓ length" in result.output
        assert "2 rule(s) OK." in result.output

    def test_yaml_rules(self, runner, tmp_path):
        rules = write(tmp_path, "rules.yaml", "- kind: uniqueness\n- kind: confirmation\n")
        result = runner.invoke(cli, ["check-rules", str(rules)])
        assert result.exit_code == 0

    def test_unknown_kind(self, runner, tmp_path):
        rules = write(tmp_path, "rules.yaml", "- kind: presence\n- kind: postcode\n")
        result = runner.invoke(cli, ["check-rules", str(rules)])
        assert result.exit_code == 1
        assert "postcode (no validator registered)" in result.output
        assert "1 unknown kind(s)." in result.output

    def test_rule_without_kind(self, runner, tmp_path):
        rules = write(tmp_path, "rules.yaml", "- kind: presence\n- options: {maximum: 3}\n")
        result = runner.invoke(cli, ["check-rules", str(rules)])
        assert result.exit_code == 1
        assert "[1]" in result.output

    def test_unparseable_file(self, runner, tmp_path):
        rules = write(tmp_path, "rules.yaml", "- kind: [unclosed\n")
        result = runner.invoke(cli, ["check-rules", str(rules)])
        assert result.exit_code == 1
        assert "Error" in result.output
