"""Validation orchestration for Judge.

ValidationService runs every rule attached to an element and reports one
outcome per element:

1. Decode the element's rule-set
2. Resolve and invoke a validator per rule, collecting Validations
3. If any closed Validation is invalid, report it immediately
4. Otherwise wait for pending Validations (uniqueness) to close

The first report is final. When a synchronous rule has already failed,
server-backed rules that close later are not reported for that call.
"""

import asyncio
import logging
from collections.abc import Callable
from typing import Any

from judge.elements import Element, Form
from judge.errors import ConfigurationError
from judge.registry import ValidatorRegistry
from judge.rules import decode
from judge.validation import Status, Validation

logger = logging.getLogger(__name__)

OnValid = Callable[[Element], None]
OnInvalid = Callable[[Element, list[str]], None]


class ElementOutcome:
    """Merged outcome of all rule Validations for one element.

    Attributes:
        element: The validated element
        validations: One Validation per rule, in rule order
        delivered: Status reported to the caller, or None until reported
    """

    def __init__(self, element: Element, validations: list[Validation]):
        self.element = element
        self.validations = validations
        self.delivered: Status | None = None

    @property
    def status(self) -> Status:
        if any(v.is_invalid for v in self.validations):
            return Status.INVALID
        if any(v.is_pending for v in self.validations):
            return Status.PENDING
        return Status.VALID

    @property
    def pending(self) -> list[Validation]:
        return [v for v in self.validations if v.is_pending]

    @property
    def messages(self) -> list[str]:
        """Messages of all invalid Validations closed so far, in rule order."""
        messages: list[str] = []
        for validation in self.validations:
            if validation.is_invalid:
                messages.extend(validation.messages)
        return messages

    def to_dict(self) -> dict[str, Any]:
        return {
            "element": self.element.id,
            "status": self.status.value,
            "messages": self.messages,
        }


class ValidationService:
    """Runs rule-sets against elements.

    Args:
        registry: Validator registry to dispatch through. Defaults to the
            process-wide ValidatorRegistry.
    """

    def __init__(self, registry: type[ValidatorRegistry] = ValidatorRegistry):
        self.registry = registry

    def validate(
        self,
        element: Element,
        on_valid: OnValid,
        on_invalid: OnInvalid,
    ) -> ElementOutcome:
        """Validate an element and report through exactly one callback.

        Synchronous outcomes are reported before this method returns. When
        server-backed rules are pending, the callback fires once the last of
        them closes.

        Args:
            element: Element carrying a ``data-validate`` rule-set
            on_valid: Called as ``on_valid(element)``
            on_invalid: Called as ``on_invalid(element, messages)``

        Returns:
            The ElementOutcome for this run

        Raises:
            MalformedRuleSetError: If the rule-set cannot be decoded
            UnknownValidatorError: If a rule kind is not registered
            MissingConfirmationTargetError: If a confirmation target is missing
        """
        rule_set = decode(element.rules_data)

        validations: list[Validation] = []
        for rule in rule_set:
            fn = self.registry.resolve(rule.kind)
            logger.debug("Running '%s' on element '%s'", rule.kind, element.id)
            validations.append(fn(element, rule.options, rule.messages))

        outcome = ElementOutcome(element, validations)

        def deliver() -> None:
            status = outcome.status
            outcome.delivered = status
            if status is Status.INVALID:
                on_invalid(element, outcome.messages)
            else:
                on_valid(element)

        if outcome.status is not Status.PENDING:
            deliver()
            return outcome

        def on_close(validation: Validation) -> None:
            if outcome.delivered is not None:
                # fire-and-forget after an earlier report
                return
            if not outcome.pending:
                deliver()

        for validation in outcome.pending:
            validation.on_close(on_close)

        return outcome

    async def validate_async(self, element: Element) -> ElementOutcome:
        """Validate an element and wait until its outcome is reported."""
        reported: asyncio.Future[None] = asyncio.get_running_loop().create_future()

        def settle(*_: Any) -> None:
            if not reported.done():
                reported.set_result(None)

        outcome = self.validate(element, settle, settle)
        await reported
        return outcome

    async def validate_form(self, form: Form) -> dict[str, ElementOutcome]:
        """Validate every element of a form that carries a rule-set.

        Returns:
            Outcomes keyed by element id, or ``#<index>`` for elements without one

        Raises:
            ConfigurationError: If two validated elements share an id
        """
        elements = form.validated_elements()
        seen: set[str] = set()
        for element in elements:
            if not element.id:
                continue
            if element.id in seen:
                raise ConfigurationError(f"Duplicate element id '{element.id}' in form")
            seen.add(element.id)

        outcomes = await asyncio.gather(*(self.validate_async(e) for e in elements))
        return {
            element.id or f"#{index}": outcome
            for index, (element, outcome) in enumerate(zip(elements, outcomes))
        }


_default_service = ValidationService()


def validate(element: Element, on_valid: OnValid, on_invalid: OnInvalid) -> ElementOutcome:
    """Validate ``element`` with the process-wide registry."""
    return _default_service.validate(element, on_valid, on_invalid)
