"""Judge endpoint: answers server-backed rules for the client engine.

GET {prefix}/uniqueness?klass=User&attribute=email&value=...&original_value=...

Responds with a JSON array of messages; an empty array means valid. Only
(klass, attribute) pairs that were explicitly exposed are answered, so the
endpoint cannot be used to probe arbitrary columns.
"""

import logging
from collections.abc import Callable, Iterable

from fastapi import APIRouter, HTTPException
from fastapi.responses import JSONResponse

from judge.api.lookup import UniquenessLookup
from judge.config import DEFAULT_ENGINE_PATH
from judge.validators.builtin import DEFAULT_MESSAGES

logger = logging.getLogger(__name__)

SERVER_BACKED_KINDS = {"uniqueness"}


def create_judge_router(
    get_lookup: Callable[[], UniquenessLookup],
    exposed: Iterable[tuple[str, str]],
    prefix: str = DEFAULT_ENGINE_PATH,
    taken_message: str = DEFAULT_MESSAGES["taken"],
) -> APIRouter:
    """Create the judge router.

    Args:
        get_lookup: Returns the lookup used to answer uniqueness checks
        exposed: (klass, attribute) pairs the endpoint may answer for
        prefix: Mount path; must match the client's engine path
        taken_message: Message returned when the value is taken
    """
    path = prefix.strip("/")
    router = APIRouter(prefix=f"/{path}" if path else "", tags=["judge"])
    allowed = set(exposed)

    @router.get("/{kind}")
    async def judge(
        kind: str,
        klass: str,
        attribute: str,
        value: str = "",
        original_value: str | None = None,
    ) -> JSONResponse:
        """Run a server-backed rule and return its messages."""
        if kind not in SERVER_BACKED_KINDS:
            raise HTTPException(status_code=404, detail=f"Unknown kind '{kind}'")

        if (klass, attribute) not in allowed:
            logger.warning("Refused %s check for unexposed %s.%s", kind, klass, attribute)
            return JSONResponse(
                status_code=403,
                content=[f"{klass}.{attribute} is not exposed for {kind} checks"],
            )

        taken = await get_lookup().exists(klass, attribute, value, original_value)
        return JSONResponse(content=[taken_message] if taken else [])

    return router
