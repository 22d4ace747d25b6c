"""FastAPI application serving the judge endpoint."""

from collections.abc import Iterable

from fastapi import FastAPI

from judge.api.endpoints import create_judge_router
from judge.api.lookup import StaticUniquenessLookup, UniquenessLookup
from judge.config import JudgeConfig


def create_app(
    lookup: UniquenessLookup,
    exposed: Iterable[tuple[str, str]] | None = None,
    config: JudgeConfig | None = None,
) -> FastAPI:
    """Build an app with the judge router mounted at the engine path.

    Args:
        lookup: Answers uniqueness checks
        exposed: Answerable (klass, attribute) pairs. Defaults to every pair
            a StaticUniquenessLookup knows about.
        config: Supplies the engine path (defaults to JudgeConfig.from_env())
    """
    config = config or JudgeConfig.from_env()
    if exposed is None:
        exposed = lookup.exposed() if isinstance(lookup, StaticUniquenessLookup) else set()

    app = FastAPI(title="Judge")
    app.include_router(
        create_judge_router(lambda: lookup, exposed, prefix=config.engine_path)
    )
    return app
