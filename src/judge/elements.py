"""Form element model.

Validators see an input element the way a browser exposes it: an id, a
current value, an input type, a checked flag for checkboxes, and ``data-*``
attributes. A Form is the document that owns elements and resolves
cross-element references such as confirmation targets.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

RULES_ATTRIBUTE = "data-validate"


def is_blank(value: Any) -> bool:
    """Check if a value is considered blank (None, whitespace-only, or empty)."""
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip() == ""
    if isinstance(value, (list, tuple, dict)):
        return len(value) == 0
    return False


@dataclass(eq=False)
class Element:
    """An input element carrying a serialized rule-set.

    Attributes:
        id: Element id, unique within its form
        value: Current value as entered by the user
        type: Input type ("text", "checkbox", "password", ...)
        checked: Checked state for checkboxes and radio buttons
        name: Form field name (e.g. "user[email]")
        attributes: ``data-*`` attributes, including ``data-validate``
        form: Owning form, set when the element is added to one
    """

    id: str | None = None
    value: Any = ""
    type: str = "text"
    checked: bool = False
    name: str | None = None
    attributes: dict[str, Any] = field(default_factory=dict)
    form: "Form | None" = field(default=None, repr=False)

    @property
    def rules_data(self) -> Any:
        """Raw rule-set attached to the element, or None."""
        return self.attributes.get(RULES_ATTRIBUTE)

    def data(self, key: str, default: Any = None) -> Any:
        """Read a ``data-<key>`` attribute."""
        return self.attributes.get(f"data-{key}", default)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Element":
        """Create an Element from a YAML/JSON dict.

        A top-level ``rules`` list is stored as the ``data-validate`` attribute.
        """
        attributes = dict(data.get("attributes", {}))
        if "rules" in data:
            attributes[RULES_ATTRIBUTE] = data["rules"]
        return cls(
            id=data.get("id"),
            value=data.get("value", ""),
            type=data.get("type", "text"),
            checked=bool(data.get("checked", False)),
            name=data.get("name"),
            attributes=attributes,
        )


class Form:
    """Container of elements, addressable by id."""

    def __init__(self, elements: list[Element] | None = None):
        self._elements: list[Element] = []
        for element in elements or []:
            self.add(element)

    def add(self, element: Element) -> Element:
        element.form = self
        self._elements.append(element)
        return element

    def get_element_by_id(self, element_id: str) -> Element | None:
        for element in self._elements:
            if element.id == element_id:
                return element
        return None

    @property
    def elements(self) -> list[Element]:
        return list(self._elements)

    def validated_elements(self) -> list[Element]:
        """Elements that carry a rule-set."""
        return [e for e in self._elements if e.rules_data is not None]

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Form":
        """Create a Form from ``{"elements": [...]}``."""
        return cls([Element.from_dict(item) for item in data.get("elements", [])])

    @classmethod
    def from_yaml(cls, path: Path) -> "Form":
        with path.open() as fh:
            data = yaml.safe_load(fh) or {}
        return cls.from_dict(data)
