"""Record lookups backing the uniqueness endpoint."""

from pathlib import Path
from typing import Any, Protocol

import yaml


class UniquenessLookup(Protocol):
    """Protocol for answering uniqueness questions from server state."""

    async def exists(
        self,
        klass: str,
        attribute: str,
        value: str,
        original_value: str | None = None,
    ) -> bool:
        """Check if another record already holds ``value``.

        Args:
            klass: Model name (e.g. "User")
            attribute: Attribute name (e.g. "email")
            value: Candidate value from the form
            original_value: Current value of the record being edited; that
                record is excluded from the check

        Returns:
            True if the value is taken by some other record
        """
        ...


class StaticUniquenessLookup:
    """Answers from an in-memory table of taken values.

    Table shape:
        {"User": {"email": ["ada@example.com", "grace@example.com"]}}
    """

    def __init__(self, taken: dict[str, dict[str, list[Any]]] | None = None):
        self.taken: dict[str, dict[str, set[str]]] = {
            klass: {attribute: {str(v) for v in values} for attribute, values in attributes.items()}
            for klass, attributes in (taken or {}).items()
        }

    @classmethod
    def from_yaml(cls, path: Path) -> "StaticUniquenessLookup":
        with path.open() as fh:
            return cls(yaml.safe_load(fh) or {})

    def exposed(self) -> set[tuple[str, str]]:
        """All (klass, attribute) pairs present in the table."""
        return {
            (klass, attribute)
            for klass, attributes in self.taken.items()
            for attribute in attributes
        }

    async def exists(
        self,
        klass: str,
        attribute: str,
        value: str,
        original_value: str | None = None,
    ) -> bool:
        if original_value is not None and value == original_value:
            return False
        return value in self.taken.get(klass, {}).get(attribute, set())
