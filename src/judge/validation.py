"""The Validation outcome primitive.

A Validation is a single-assignment result for one rule evaluation:

    pending --close([])--------> valid
    pending --close([msg, ...])-> invalid

Synchronous validators build it already closed; asynchronous validators
return it open and close it from their completion callback. Subscribers
registered with ``on_close`` are notified exactly once.
"""

import json
from collections.abc import Callable, Sequence
from enum import Enum
from typing import Any

from judge.errors import AlreadyClosedError, MalformedMessagesError, ValidationPendingError


class Status(Enum):
    """Lifecycle state of a Validation or an ElementOutcome."""

    PENDING = "pending"
    VALID = "valid"
    INVALID = "invalid"


CloseCallback = Callable[["Validation"], None]


def _parse_messages(messages: Sequence[str] | str | bytes) -> list[str]:
    """Normalize a close payload into a list of message strings."""
    if isinstance(messages, (str, bytes)):
        try:
            messages = json.loads(messages)
        except ValueError as exc:  # JSONDecodeError, or UnicodeDecodeError for bytes
            raise MalformedMessagesError(f"Messages are not valid JSON: {exc}") from exc

    if isinstance(messages, (dict, str)) or not isinstance(messages, Sequence):
        raise MalformedMessagesError(
            f"Messages must be a list of strings, got {type(messages).__name__}"
        )
    if not all(isinstance(m, str) for m in messages):
        raise MalformedMessagesError("Messages must be a list of strings")
    return list(messages)


class Validation:
    """Three-state outcome of one rule evaluation.

    Example:
        Validation([])               # closed, valid
        Validation(["can't be blank"])  # closed, invalid

        pending = Validation()
        pending.on_close(lambda v: print(v.status))
        pending.close('["has already been taken"]')
    """

    def __init__(self, messages: Sequence[str] | None = None):
        self._messages: list[str] | None = None
        self._subscribers: list[CloseCallback] = []
        if messages is not None:
            self.close(messages)

    @property
    def status(self) -> Status:
        if self._messages is None:
            return Status.PENDING
        return Status.INVALID if self._messages else Status.VALID

    @property
    def is_pending(self) -> bool:
        return self._messages is None

    @property
    def is_valid(self) -> bool:
        return self.status is Status.VALID

    @property
    def is_invalid(self) -> bool:
        return self.status is Status.INVALID

    @property
    def messages(self) -> list[str]:
        """Messages of a closed Validation (empty when valid).

        Raises:
            ValidationPendingError: If the Validation has not closed yet
        """
        if self._messages is None:
            raise ValidationPendingError("Validation is still pending")
        return list(self._messages)

    def close(self, messages: Sequence[str] | str | bytes) -> "Validation":
        """Finalize the Validation.

        Args:
            messages: A list of message strings, or its JSON encoding

        Returns:
            self, for chaining

        Raises:
            AlreadyClosedError: If the Validation is not pending
            MalformedMessagesError: If the payload is not a list of strings;
                the Validation stays pending
        """
        if self._messages is not None:
            raise AlreadyClosedError(f"Validation already closed as {self.status.value}")

        self._messages = _parse_messages(messages)

        subscribers, self._subscribers = self._subscribers, []
        for callback in subscribers:
            callback(self)
        return self

    def on_close(self, callback: CloseCallback) -> None:
        """Call ``callback(self)`` once when the Validation closes.

        If it is already closed the callback runs immediately.
        """
        if self._messages is not None:
            callback(self)
        else:
            self._subscribers.append(callback)

    def to_dict(self) -> dict[str, Any]:
        return {
            "status": self.status.value,
            "messages": list(self._messages) if self._messages is not None else None,
        }

    def __repr__(self) -> str:
        if self._messages is None:
            return "Validation(pending)"
        return f"Validation({self.status.value}, {self._messages!r})"


def closed(messages: Sequence[str]) -> Validation:
    """Build an already-closed Validation."""
    return Validation(messages)


def pending() -> Validation:
    """Build an open Validation."""
    return Validation()
