"""Runtime configuration read from environment variables."""

import os
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field

ENV_PREFIX = "PJ_"


class Settings(BaseModel):
    """Application settings.

    Built explicitly and passed to the components that need it; nothing reads the
    environment after startup.
    """

    database_url: str = Field(default="sqlite:///pj_regime_analyzer.db")
    reference_data_dir: Optional[Path] = Field(
        default=None, description="Directory with cnae.json/faixas.json (None = packaged data)"
    )
    log_level: str = Field(default="INFO")
    cnae_cache_ttl: float = Field(default=300.0, gt=0, description="Seconds")

    model_config = {"frozen": True}

    @classmethod
    def from_env(cls, environ: Optional[dict[str, str]] = None) -> "Settings":
        """Read ``PJ_*`` variables, falling back to defaults."""
        env = os.environ if environ is None else environ
        values: dict[str, object] = {}

        if f"{ENV_PREFIX}DATABASE_URL" in env:
            values["database_url"] = env[f"{ENV_PREFIX}DATABASE_URL"]
        if env.get(f"{ENV_PREFIX}REFERENCE_DATA_DIR"):
            values["reference_data_dir"] = Path(env[f"{ENV_PREFIX}REFERENCE_DATA_DIR"])
        if f"{ENV_PREFIX}LOG_LEVEL" in env:
            values["log_level"] = env[f"{ENV_PREFIX}LOG_LEVEL"].upper()
        if f"{ENV_PREFIX}CNAE_CACHE_TTL" in env:
            values["cnae_cache_ttl"] = float(env[f"{ENV_PREFIX}CNAE_CACHE_TTL"])

        return cls(**values)
