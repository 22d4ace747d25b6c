"""Server-backed validators.

Uniqueness cannot be decided on the client. The validator returns an open
Validation, asks the judge endpoint, and closes the Validation with the
messages the server returns.
"""

import logging
import re
from collections.abc import Mapping
from typing import Any
from urllib.parse import urlencode

from judge import network
from judge.config import JudgeConfig
from judge.elements import Element
from judge.errors import ConfigurationError, MalformedMessagesError
from judge.network import Getter
from judge.registry import ValidatorFn
from judge.validation import Validation
from judge.validators.builtin import honors_allow_blank, message_for

logger = logging.getLogger(__name__)

# Form builders name fields "<model>[<attribute>]"
_FIELD_NAME = re.compile(r"^(?P<model>\w+)\[(?P<attribute>\w+)\]$")


def _camelize(name: str) -> str:
    return "".join(part.capitalize() for part in name.split("_"))


def identify(element: Element) -> tuple[str, str]:
    """Resolve the (klass, attribute) pair the server checks for ``element``.

    Uses ``data-klass``/``data-attribute``, falling back to the field name.

    Raises:
        ConfigurationError: If neither source identifies the field
    """
    klass = element.data("klass")
    attribute = element.data("attribute")
    if klass and attribute:
        return klass, attribute

    match = _FIELD_NAME.match(element.name or "")
    if match:
        return klass or _camelize(match["model"]), attribute or match["attribute"]

    raise ConfigurationError(
        f"Element '{element.id}' needs data-klass and data-attribute for a server-backed rule"
    )


def url_for(element: Element, kind: str, config: JudgeConfig) -> str:
    """Build the request URL for a server-backed rule on ``element``."""
    klass, attribute = identify(element)
    params: dict[str, Any] = {
        "klass": klass,
        "attribute": attribute,
        "value": "" if element.value is None else element.value,
    }
    original_value = element.data("original-value")
    if original_value is not None:
        params["original_value"] = original_value
    return f"{config.url_for(kind)}?{urlencode(params)}"


def make_uniqueness_validator(
    config: JudgeConfig | None = None,
    get: Getter | None = None,
) -> ValidatorFn:
    """Create the ``uniqueness`` validator.

    Args:
        config: Endpoint configuration (defaults to JudgeConfig.from_env())
        get: Network primitive with the signature of :func:`judge.network.get`

    Returns:
        A validator function that returns a pending Validation
    """
    config = config or JudgeConfig.from_env()
    if get is None and not config.base_url:
        logger.warning(
            "Uniqueness URLs are relative (%s) and no client is bound; set JUDGE_BASE_URL "
            "or pass a get bound to an httpx client with a base_url",
            config.url_for("uniqueness"),
        )
    get = get or network.get

    @honors_allow_blank
    def uniqueness(
        element: Element, options: Mapping[str, Any], messages: Mapping[str, str]
    ) -> Validation:
        validation = Validation()
        url = url_for(element, "uniqueness", config)

        def on_success(status: int, headers: Mapping[str, str], body: str) -> None:
            try:
                validation.close(body)
            except MalformedMessagesError:
                logger.warning("Unreadable uniqueness response from %s: %r", url, body)
                validation.close([message_for(messages, "request_error", status=status)])

        def on_error(status: int, headers: Mapping[str, str], body: str) -> None:
            validation.close([message_for(messages, "request_error", status=status)])

        get(url, on_success, on_error)
        return validation

    return uniqueness
