"""Engine configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass

DEFAULT_ENGINE_PATH = "/judge"


@dataclass
class JudgeConfig:
    """Where server-backed checks are sent.

    Attributes:
        base_url: Scheme and host prefixed to request paths ("" keeps them relative)
        engine_path: Mount path of the judge endpoint on the server
        host: Bind address for ``judge serve``
        port: Bind port for ``judge serve``
    """

    base_url: str = ""
    engine_path: str = DEFAULT_ENGINE_PATH
    host: str = "127.0.0.1"
    port: int = 8000

    @classmethod
    def from_env(
        cls,
        base_url: str | None = None,
        engine_path: str | None = None,
    ) -> JudgeConfig:
        """Create config from environment variables.

        Resolution order for each setting:
        1. Explicit argument
        2. JUDGE_BASE_URL / JUDGE_ENGINE_PATH / JUDGE_HOST / JUDGE_PORT
        3. Default
        """
        return cls(
            base_url=base_url if base_url is not None else os.environ.get("JUDGE_BASE_URL", ""),
            engine_path=engine_path
            or os.environ.get("JUDGE_ENGINE_PATH")
            or DEFAULT_ENGINE_PATH,
            host=os.environ.get("JUDGE_HOST", "127.0.0.1"),
            port=int(os.environ.get("JUDGE_PORT", "8000")),
        )

    def url_for(self, kind: str) -> str:
        """Endpoint URL for a server-backed rule kind, without query string."""
        base = self.base_url.rstrip("/")
        path = "/" + self.engine_path.strip("/") if self.engine_path.strip("/") else ""
        return f"{base}{path}/{kind}"
