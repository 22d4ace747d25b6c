"""HTTP side of the uniqueness protocol."""

from judge.api.app import create_app
from judge.api.endpoints import create_judge_router
from judge.api.lookup import StaticUniquenessLookup, UniquenessLookup

__all__ = [
    "StaticUniquenessLookup",
    "UniquenessLookup",
    "create_app",
    "create_judge_router",
]
