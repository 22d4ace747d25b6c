"""Exception types for Judge.

Configuration errors signal a mismatch between the rules the server declared
and what the client has set up. They are raised to the integrator and never
reported through the ``on_invalid`` channel.
"""


class JudgeError(Exception):
    """Base class for all Judge errors."""
    pass


class ConfigurationError(JudgeError):
    """Rule-set, registry, or document setup does not match the declared rules."""
    pass


class MalformedRuleSetError(ConfigurationError):
    """The attached rule-set could not be decoded."""

    def __init__(self, message: str, path: str = ""):
        self.path = path
        loc = f" at {path}" if path else ""
        super().__init__(f"Malformed rule-set{loc}: {message}")


class UnknownValidatorError(ConfigurationError):
    """A rule names a kind that has no registered validator."""

    def __init__(self, kind: str, available: list[str] | None = None):
        self.kind = kind
        self.available = available or []
        message = f"Validator '{kind}' is not registered."
        if self.available:
            message += " Available kinds: " + ", ".join(self.available)
        super().__init__(message)


class MissingConfirmationTargetError(ConfigurationError):
    """A confirmation rule references an element that is not in the form."""

    def __init__(self, element_id: str | None, target_id: str):
        self.element_id = element_id
        self.target_id = target_id
        super().__init__(
            f"Confirmation target '{target_id}' for element '{element_id}' does not exist"
        )


class AlreadyClosedError(ConfigurationError):
    """A Validation was closed twice."""
    pass


class ValidationPendingError(JudgeError):
    """Messages were requested from a Validation that has not closed yet."""
    pass


class MalformedMessagesError(JudgeError, ValueError):
    """A close payload was not a list of message strings."""
    pass
