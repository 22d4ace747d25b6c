"""Built-in synchronous validators.

Each validator re-executes one server-side rule against the element's
current value and returns an already-closed Validation.

Available kinds:
- presence: value must not be blank
- length: minimum / maximum / is bounds on the value's length
- exclusion: value must not be one of ``in``
- inclusion: value must be one of ``in``
- format: value must match ``with`` and must not match ``without``
- numericality: value must be a number and satisfy comparison options
- acceptance: checkbox checked, or value in ``accept``
- confirmation: value must equal the confirmation target's value

Every kind except presence and acceptance skips its check when the value is
blank and ``allow_blank`` is set.
"""

import functools
import math
import operator
import re
from collections.abc import Callable, Mapping
from typing import Any

from judge.elements import Element, is_blank
from judge.errors import MalformedRuleSetError, MissingConfirmationTargetError
from judge.registry import ValidatorFn
from judge.validation import Validation, closed

# Defaults used when the rule does not carry a localized message for a key.
DEFAULT_MESSAGES: dict[str, str] = {
    "blank": "can't be blank",
    "too_short": "is too short (minimum is {count} characters)",
    "too_long": "is too long (maximum is {count} characters)",
    "wrong_length": "is the wrong length (should be {count} characters)",
    "exclusion": "is reserved",
    "inclusion": "is not included in the list",
    "invalid": "is invalid",
    "not_a_number": "is not a number",
    "not_an_integer": "must be an integer",
    "greater_than": "must be greater than {count}",
    "greater_than_or_equal_to": "must be greater than or equal to {count}",
    "equal_to": "must be equal to {count}",
    "other_than": "must be other than {count}",
    "less_than": "must be less than {count}",
    "less_than_or_equal_to": "must be less than or equal to {count}",
    "odd": "must be odd",
    "even": "must be even",
    "accepted": "must be accepted",
    "confirmation": "doesn't match confirmation",
    "taken": "has already been taken",
    "request_error": "Request error: {status}",
}


def message_for(messages: Mapping[str, str], key: str, **params: Any) -> str:
    """Return the rule's message for ``key``, falling back to the default."""
    if key in messages:
        return messages[key]
    template = DEFAULT_MESSAGES.get(key, DEFAULT_MESSAGES["invalid"])
    return template.format(**params)


def skips_blank(element: Element, options: Mapping[str, Any]) -> bool:
    """True when allow_blank/allow_nil exempt the element's current value."""
    value = element.value
    if options.get("allow_blank") and is_blank(value):
        return True
    return bool(options.get("allow_nil")) and value is None


def honors_allow_blank(fn: ValidatorFn) -> ValidatorFn:
    """Short-circuit to a valid Validation for blank values when allowed."""

    @functools.wraps(fn)
    def wrapper(
        element: Element, options: Mapping[str, Any], messages: Mapping[str, str]
    ) -> Validation:
        if skips_blank(element, options):
            return closed([])
        return fn(element, options, messages)

    return wrapper


def _stringify(value: Any) -> str:
    """Render a value the way it appears in a form field."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


# =============================================================================
# Presence
# =============================================================================


def presence(element: Element, options: Mapping[str, Any], messages: Mapping[str, str]) -> Validation:
    if is_blank(element.value):
        return closed([message_for(messages, "blank")])
    return closed([])


# =============================================================================
# Length
# =============================================================================


def _length_bounds(options: Mapping[str, Any]) -> list[tuple[str, int, Callable[[int, int], bool]]]:
    """Collect (message key, bound, passes) triples from length options."""
    minimum = options.get("minimum")
    maximum = options.get("maximum")

    # within/in arrive as [min, max] once a range is serialized
    span = options.get("within", options.get("in"))
    if isinstance(span, (list, tuple)) and len(span) == 2:
        minimum, maximum = span

    bounds = []
    for option, key, bound, passes in (
        ("is", "wrong_length", options.get("is"), operator.eq),
        ("minimum", "too_short", minimum, operator.ge),
        ("maximum", "too_long", maximum, operator.le),
    ):
        if bound is None:
            continue
        try:
            bounds.append((key, int(bound), passes))
        except (TypeError, ValueError):
            raise MalformedRuleSetError(
                f"{option} must be an integer, got {bound!r}", path=f"options/{option}"
            ) from None
    return bounds


@honors_allow_blank
def length(element: Element, options: Mapping[str, Any], messages: Mapping[str, str]) -> Validation:
    value = element.value
    size = len(value) if isinstance(value, (list, tuple)) else len(_stringify(value))

    errors = []
    for key, bound, passes in _length_bounds(options):
        if not passes(size, bound):
            errors.append(message_for(messages, key, count=bound))
    return closed(errors)


# =============================================================================
# Exclusion / Inclusion
# =============================================================================


def _members(options: Mapping[str, Any]) -> set[str]:
    values = options.get("in", options.get("within"))
    if values is None:
        raise MalformedRuleSetError("inclusion/exclusion rule requires an 'in' list", path="options/in")
    if not isinstance(values, (list, tuple)):
        values = [values]
    return {_stringify(v) for v in values}


def _candidates(value: Any) -> list[str]:
    """A multi-select contributes each selected value."""
    if isinstance(value, (list, tuple)):
        return [_stringify(v) for v in value]
    return [_stringify(value)]


@honors_allow_blank
def exclusion(element: Element, options: Mapping[str, Any], messages: Mapping[str, str]) -> Validation:
    members = _members(options)
    if any(candidate in members for candidate in _candidates(element.value)):
        return closed([message_for(messages, "exclusion")])
    return closed([])


@honors_allow_blank
def inclusion(element: Element, options: Mapping[str, Any], messages: Mapping[str, str]) -> Validation:
    members = _members(options)
    if not all(candidate in members for candidate in _candidates(element.value)):
        return closed([message_for(messages, "inclusion")])
    return closed([])


# =============================================================================
# Format
# =============================================================================

# Ruby serializes a Regexp as (?flags-flags:source)
_RUBY_REGEXP = re.compile(r"^\(\?([mix]+|[mix]*-[mix]+):(.*)\)$", re.DOTALL)


def convert_pattern(pattern: str) -> re.Pattern[str]:
    """Compile a server-side pattern with Python ``re``.

    Translates the Ruby-specific parts: the ``(?mix-mix:...)`` wrapper
    (Ruby ``m`` is Python DOTALL), ``\\Z`` and ``\\z``.

    Raises:
        MalformedRuleSetError: If the pattern does not compile
    """
    flags = 0
    match = _RUBY_REGEXP.match(pattern)
    if match:
        flag_spec, pattern = match.groups()
        enabled = flag_spec.partition("-")[0]
        if "i" in enabled:
            flags |= re.IGNORECASE
        if "m" in enabled:
            flags |= re.DOTALL
        if "x" in enabled:
            flags |= re.VERBOSE

    pattern = re.sub(r"(?<!\\)\\Z", r"(?=\\n?\\Z)", pattern)
    pattern = re.sub(r"(?<!\\)\\z", r"\\Z", pattern)

    try:
        return re.compile(pattern, flags)
    except re.error as exc:
        raise MalformedRuleSetError(f"invalid pattern {pattern!r}: {exc}", path="options") from exc


@honors_allow_blank
def format_(element: Element, options: Mapping[str, Any], messages: Mapping[str, str]) -> Validation:
    value = _stringify(element.value)

    if options.get("with") is not None:
        if not convert_pattern(options["with"]).search(value):
            return closed([message_for(messages, "invalid")])

    if options.get("without") is not None:
        if convert_pattern(options["without"]).search(value):
            return closed([message_for(messages, "invalid")])

    return closed([])


# =============================================================================
# Numericality
# =============================================================================

_NUMBER = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?$")
_INTEGER = re.compile(r"^[+-]?\d+$")

COMPARISONS: dict[str, Callable[[float, float], bool]] = {
    "greater_than": operator.gt,
    "greater_than_or_equal_to": operator.ge,
    "equal_to": operator.eq,
    "other_than": operator.ne,
    "less_than": operator.lt,
    "less_than_or_equal_to": operator.le,
}


def parse_number(value: Any) -> float | None:
    """Parse a form value as a finite number, or return None."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value) if math.isfinite(value) else None
    if isinstance(value, str) and _NUMBER.match(value.strip()):
        return float(value.strip())
    return None


def _is_integer(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    return isinstance(value, str) and bool(_INTEGER.match(value.strip()))


def _parity(value: Any, number: float) -> int | None:
    """0 or 1 for whole numbers, None otherwise.

    Integer input keeps full precision; floats lose it above 2**53.
    """
    if _is_integer(value):
        return int(value.strip() if isinstance(value, str) else value) % 2
    if number.is_integer():
        return int(number) % 2
    return None


@honors_allow_blank
def numericality(element: Element, options: Mapping[str, Any], messages: Mapping[str, str]) -> Validation:
    value = element.value

    number = parse_number(value)
    if number is None:
        return closed([message_for(messages, "not_a_number")])

    if options.get("only_integer") and not _is_integer(value):
        return closed([message_for(messages, "not_an_integer")])

    errors = []
    for key, compare in COMPARISONS.items():
        if options.get(key) is None:
            continue
        bound = parse_number(options[key])
        if bound is None:
            raise MalformedRuleSetError(f"{key} must be numeric, got {options[key]!r}", path=f"options/{key}")
        if not compare(number, bound):
            errors.append(message_for(messages, key, count=options[key]))

    parity = _parity(value, number)
    if options.get("odd") and parity != 1:
        errors.append(message_for(messages, "odd"))
    if options.get("even") and parity != 0:
        errors.append(message_for(messages, "even"))

    return closed(errors)


# =============================================================================
# Acceptance
# =============================================================================


def acceptance(element: Element, options: Mapping[str, Any], messages: Mapping[str, str]) -> Validation:
    if element.type == "checkbox":
        accepted = element.checked
    else:
        accept = options.get("accept", ["1", "true"])
        if not isinstance(accept, (list, tuple)):
            accept = [accept]
        accepted = _stringify(element.value) in {_stringify(a) for a in accept}

    return closed([] if accepted else [message_for(messages, "accepted")])


# =============================================================================
# Confirmation
# =============================================================================


def confirmation_target(element: Element, options: Mapping[str, Any]) -> Element:
    """Find the element whose value must match ``element``.

    Raises:
        MissingConfirmationTargetError: If the target is not in the form
    """
    target_id = options.get("confirmation_target") or f"{element.id}_confirmation"
    target = element.form.get_element_by_id(target_id) if element.form else None
    if target is None:
        raise MissingConfirmationTargetError(element.id, target_id)
    return target


def confirmation(element: Element, options: Mapping[str, Any], messages: Mapping[str, str]) -> Validation:
    # A missing target is reported even when the value is blank
    target = confirmation_target(element, options)
    if skips_blank(element, options):
        return closed([])

    value, expected = _stringify(element.value), _stringify(target.value)
    if options.get("case_sensitive") is False:
        value, expected = value.casefold(), expected.casefold()

    return closed([] if value == expected else [message_for(messages, "confirmation")])


BUILTIN_VALIDATORS: dict[str, ValidatorFn] = {
    "presence": presence,
    "length": length,
    "exclusion": exclusion,
    "inclusion": inclusion,
    "format": format_,
    "numericality": numericality,
    "acceptance": acceptance,
    "confirmation": confirmation,
}
