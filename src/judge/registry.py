"""Validator registry for Judge.

Maps rule kinds to validator functions. Built-in kinds are registered at
startup via register_builtin_validators(); applications add custom kinds with
ValidatorRegistry.register() or the @validator decorator.

Registration is expected to finish before the first validate() call. The
registry is not safe to mutate while validations are running.
"""

import logging
from collections.abc import Callable, Mapping
from typing import Any

from judge.elements import Element
from judge.errors import UnknownValidatorError
from judge.validation import Validation

logger = logging.getLogger(__name__)

# Validator function signature: (element, options, messages) -> Validation
ValidatorFn = Callable[[Element, Mapping[str, Any], Mapping[str, str]], Validation]


class ValidatorRegistry:
    """Registry of validator functions keyed by rule kind.

    Unlike most registries, registering an existing kind replaces it. This is
    how applications override a built-in validator.

    Example:
        @validator("postcode")
        def validate_postcode(element, options, messages):
            ...

        fn = ValidatorRegistry.resolve("postcode")
    """

    _validators: dict[str, ValidatorFn] = {}

    def __init_subclass__(cls, **kwargs: Any) -> None:
        # Each subclass is a separate registry
        super().__init_subclass__(**kwargs)
        cls._validators = {}

    @classmethod
    def register(cls, kind: str, fn: ValidatorFn) -> None:
        """Register a validator function for a rule kind.

        Args:
            kind: Rule kind as it appears in the rule-set (case-sensitive)
            fn: Function implementing the check
        """
        if kind in cls._validators:
            logger.debug("Replacing validator for kind '%s'", kind)
        cls._validators[kind] = fn

    @classmethod
    def resolve(cls, kind: str) -> ValidatorFn:
        """Get the validator function for a rule kind.

        Raises:
            UnknownValidatorError: If no validator is registered for ``kind``
        """
        try:
            return cls._validators[kind]
        except KeyError:
            raise UnknownValidatorError(kind, cls.list_registered()) from None

    @classmethod
    def is_registered(cls, kind: str) -> bool:
        """Check if a validator is registered."""
        return kind in cls._validators

    @classmethod
    def list_registered(cls) -> list[str]:
        """List all registered kinds."""
        return sorted(cls._validators.keys())

    @classmethod
    def clear(cls) -> None:
        """Clear all registrations. Primarily for testing."""
        cls._validators.clear()


def validator(kind: str) -> Callable[[ValidatorFn], ValidatorFn]:
    """Decorator to register a validator function.

    Usage:
        @validator("postcode")
        def validate_postcode(element, options, messages) -> Validation:
            ...
    """

    def decorator(fn: ValidatorFn) -> ValidatorFn:
        ValidatorRegistry.register(kind, fn)
        return fn

    return decorator
