"""Rule-set codec.

Decodes the serialized rule description attached to an element (its
``data-validate`` attribute) into immutable Rule records, and encodes them
back to the wire format.

Wire format:

    [
      {"kind": "presence", "options": {}, "messages": {"blank": "can't be blank"}},
      {"kind": "length", "options": {"minimum": 3}, "messages": {"too_short": "too short"}}
    ]

Only the presence of ``kind`` and the shapes of ``options``/``messages`` are
checked here. Unknown extra fields on a rule are ignored so newer servers can
add them without breaking older clients.
"""

import json
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Any

from jsonschema import Draft202012Validator
from jsonschema.exceptions import ValidationError as SchemaError

from judge.errors import MalformedRuleSetError

_SCHEMA_PATH = Path(__file__).parent / "schemas" / "ruleset.schema.json"


@dataclass(frozen=True)
class Rule:
    """One declarative validation check.

    Attributes:
        kind: Registered validator name (case-sensitive)
        options: Validator options (allow_blank, in, minimum, with, ...)
        messages: Message key -> already-localized message
    """

    kind: str
    options: Mapping[str, Any] = field(default_factory=dict)
    messages: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "options", MappingProxyType(dict(self.options)))
        object.__setattr__(self, "messages", MappingProxyType(dict(self.messages)))

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Rule":
        """Create a Rule from one decoded wire entry."""
        return cls(
            kind=data["kind"],
            options=data.get("options") or {},
            messages=data.get("messages") or {},
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind,
            "options": dict(self.options),
            "messages": dict(self.messages),
        }


@dataclass(frozen=True)
class RuleSet:
    """Ordered, immutable collection of Rules for one element."""

    rules: tuple[Rule, ...] = ()

    def __iter__(self) -> Iterator[Rule]:
        return iter(self.rules)

    def __len__(self) -> int:
        return len(self.rules)

    def __getitem__(self, index: int) -> Rule:
        return self.rules[index]

    @property
    def kinds(self) -> list[str]:
        return [rule.kind for rule in self.rules]


@lru_cache(maxsize=1)
def _schema_validator() -> Draft202012Validator:
    with _SCHEMA_PATH.open() as fh:
        schema = json.load(fh)
    return Draft202012Validator(schema)


def _json_path(error: SchemaError) -> str:
    """Convert a jsonschema error path to a readable string, e.g. ``[1]/options``."""
    parts = []
    for p in error.absolute_path:
        if isinstance(p, int):
            parts.append(f"[{p}]")
        else:
            parts.append(str(p))
    return "/".join(parts).replace("/[", "[")


def decode(raw: str | bytes | list[Any] | None) -> RuleSet:
    """Decode an element's attached rule-set.

    Args:
        raw: JSON text, or an already-parsed list of rule objects. ``None``
            and the empty string decode to an empty RuleSet.

    Returns:
        The RuleSet, in wire order

    Raises:
        MalformedRuleSetError: If the input is not JSON, not a list of
            objects, a rule lacks ``kind``, or options/messages are not
            mappings
    """
    if raw is None:
        return RuleSet()

    if isinstance(raw, (str, bytes)):
        if not raw.strip():
            return RuleSet()
        try:
            doc = json.loads(raw)
        except ValueError as exc:  # JSONDecodeError, or UnicodeDecodeError for bytes
            raise MalformedRuleSetError(f"not valid JSON ({exc})") from exc
    else:
        doc = raw

    errors = sorted(_schema_validator().iter_errors(doc), key=lambda e: list(e.absolute_path))
    if errors:
        first = errors[0]
        raise MalformedRuleSetError(first.message, path=_json_path(first))

    return RuleSet(rules=tuple(Rule.from_dict(entry) for entry in doc))


def encode(rule_set: RuleSet | list[Rule]) -> str:
    """Serialize rules to the wire format understood by :func:`decode`."""
    return json.dumps([rule.to_dict() for rule in rule_set])
