"""Shared fixtures for Judge tests."""

import json
from dataclasses import dataclass, field
from typing import Any

import pytest

from judge.config import JudgeConfig
from judge.elements import Element, Form
from judge.registry import ValidatorRegistry
from judge.validators import register_builtin_validators


@dataclass
class FakeGetter:
    """Stands in for judge.network.get; completions are triggered by the test."""

    calls: list[tuple[str, Any, Any]] = field(default_factory=list)

    def __call__(self, url, on_success, on_error):
        self.calls.append((url, on_success, on_error))

    def succeed(self, body: str, index: int = -1, status: int = 200) -> None:
        _, on_success, _ = self.calls[index]
        on_success(status, {"content-type": "application/json"}, body)

    def fail(self, status: int, index: int = -1, body: str = "") -> None:
        _, _, on_error = self.calls[index]
        on_error(status, {}, body)


@pytest.fixture
def fake_get():
    return FakeGetter()


@pytest.fixture(autouse=True)
def setup_registry(fake_get):
    """Register built-ins (with a fake network) around each test."""
    ValidatorRegistry.clear()
    register_builtin_validators(JudgeConfig(base_url="http://test"), get=fake_get)
    yield
    ValidatorRegistry.clear()


def make_element(
    rules: list[dict[str, Any]] | str | None,
    value: Any = "",
    element_id: str = "user_name",
    **kwargs: Any,
) -> Element:
    """Helper to create an element carrying a rule-set."""
    attributes = dict(kwargs.pop("attributes", {}))
    if rules is not None:
        attributes["data-validate"] = rules if isinstance(rules, str) else json.dumps(rules)
    element = Element(id=element_id, value=value, attributes=attributes, **kwargs)
    Form([element])
    return element
