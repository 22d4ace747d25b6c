"""Built-in validators for Judge.

Call register_builtin_validators() once at startup, before the first
validate() call.
"""

from judge.config import JudgeConfig
from judge.network import Getter
from judge.registry import ValidatorRegistry
from judge.validators.builtin import (
    BUILTIN_VALIDATORS,
    DEFAULT_MESSAGES,
    acceptance,
    confirmation,
    convert_pattern,
    exclusion,
    format_,
    honors_allow_blank,
    inclusion,
    length,
    message_for,
    numericality,
    presence,
)
from judge.validators.remote import make_uniqueness_validator, url_for


def register_builtin_validators(
    config: JudgeConfig | None = None,
    get: Getter | None = None,
) -> None:
    """Register all built-in kinds with the ValidatorRegistry.

    Uniqueness needs an absolute endpoint: either ``config.base_url`` (or
    JUDGE_BASE_URL) is set, or ``get`` is bound to an httpx client with a
    ``base_url``. Otherwise every uniqueness check closes with
    "Request error: 0".

    Args:
        config: Endpoint configuration for server-backed kinds
        get: Network primitive override (e.g. bound to a shared httpx client)
    """
    for kind, fn in BUILTIN_VALIDATORS.items():
        ValidatorRegistry.register(kind, fn)
    ValidatorRegistry.register("uniqueness", make_uniqueness_validator(config, get))


__all__ = [
    "BUILTIN_VALIDATORS",
    "DEFAULT_MESSAGES",
    "acceptance",
    "confirmation",
    "convert_pattern",
    "exclusion",
    "format_",
    "honors_allow_blank",
    "inclusion",
    "length",
    "make_uniqueness_validator",
    "message_for",
    "numericality",
    "presence",
    "register_builtin_validators",
    "url_for",
]
