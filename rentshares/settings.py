# rentshares/settings.py
import os
from dataclasses import dataclass, field
from typing import List

_TRUTHY = {"1", "true", "yes", "on"}


def _origins(value):
    origins = [origin.strip() for origin in value.split(",") if origin.strip()]
    return origins or ["*"]


@dataclass
class Settings:
    cors_origins: List[str] = field(default_factory=lambda: ["*"])
    log_level: str = "INFO"
    debug: bool = False
    port: int = 5000

    @classmethod
    def from_env(cls, environ=None):
        env = os.environ if environ is None else environ
        return cls(
            cors_origins=_origins(env.get("RENTSHARES_CORS_ORIGINS", "*")),
            log_level=env.get("RENTSHARES_LOG_LEVEL", "INFO").upper(),
            debug=env.get("RENTSHARES_DEBUG", "false").strip().lower() in _TRUTHY,
            port=int(env.get("PORT", "5000")),
        )
