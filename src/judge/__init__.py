"""Judge: run server-declared validation rules against form input.

Rules arrive as a serialized rule-set on each element (``data-validate``).
Judge decodes them, dispatches each rule to a registered validator, and
reports one outcome per element. Uniqueness is checked against the server.

Usage:
    from judge import Element, Form, register_builtin_validators, validate

    # At application startup
    register_builtin_validators()

    form = Form([Element(id="user_name", value="", attributes={
        "data-validate": '[{"kind": "presence", "messages": {"blank": "can\'t be blank"}}]',
    })])
    validate(form.elements[0], on_valid, on_invalid)
"""

from judge.config import JudgeConfig
from judge.elements import Element, Form, is_blank
from judge.errors import (
    AlreadyClosedError,
    ConfigurationError,
    JudgeError,
    MalformedMessagesError,
    MalformedRuleSetError,
    MissingConfirmationTargetError,
    UnknownValidatorError,
    ValidationPendingError,
)
from judge.network import get
from judge.registry import ValidatorFn, ValidatorRegistry, validator
from judge.rules import Rule, RuleSet, decode, encode
from judge.services import ElementOutcome, ValidationService, validate
from judge.validation import Status, Validation
from judge.validators import register_builtin_validators

__all__ = [
    # Model
    "Element",
    "Form",
    "Rule",
    "RuleSet",
    "Status",
    "Validation",
    "ElementOutcome",
    "is_blank",
    # Codec
    "decode",
    "encode",
    # Registry
    "ValidatorFn",
    "ValidatorRegistry",
    "validator",
    "register_builtin_validators",
    # Orchestration
    "ValidationService",
    "validate",
    # Network
    "get",
    # Config
    "JudgeConfig",
    # Errors
    "AlreadyClosedError",
    "ConfigurationError",
    "JudgeError",
    "MalformedMessagesError",
    "MalformedRuleSetError",
    "MissingConfirmationTargetError",
    "UnknownValidatorError",
    "ValidationPendingError",
]
