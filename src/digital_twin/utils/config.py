"""
Configuration utilities.
"""

import json
import os
from pathlib import Path
from typing import Any, Mapping

import yaml

from pydantic import BaseModel

from digital_twin import constants

# Environment variable -> Settings field
ENV_VARS = {
    "UPSTASH_VECTOR_REST_URL": "upstash_url",
    "UPSTASH_VECTOR_REST_TOKEN": "upstash_token",
    "GROQ_API_KEY": "groq_api_key",
    "GROQ_BASE_URL": "groq_base_url",
    "DIGITAL_TWIN_LOG_LEVEL": "log_level",
}


class Settings(BaseModel):
    """Configuration for the digital twin server."""
    # Vector search
    upstash_url: str | None = None
    upstash_token: str | None = None
    vector_top_k: int = constants.VECTOR_TOP_K
    search_top_k: int = constants.SEARCH_TOP_K
    request_timeout: float = 30.0

    # LLM
    groq_api_key: str | None = None
    groq_base_url: str = constants.GROQ_BASE_URL
    llm_model: str = constants.LLM_MODEL
    llm_max_tokens: int = constants.LLM_MAX_TOKENS
    llm_temperature: float = constants.LLM_TEMPERATURE

    # Server
    server_name: str = constants.SERVER_NAME
    server_version: str = constants.SERVER_VERSION
    profile_owner: str = constants.PROFILE_OWNER
    log_level: str = "INFO"

    @classmethod
    def from_yaml(cls, path: Path) -> "Settings":
        """Load settings from a YAML file."""
        with open(path) as f:
            data = yaml.safe_load(f) or {}
        return cls(**data)

    @classmethod
    def from_file(cls, path: str | Path) -> "Settings":
        """Load settings from file (YAML or JSON)."""
        path = Path(path)

        if path.suffix in (".yaml", ".yml"):
            return cls.from_yaml(path)
        elif path.suffix == ".json":
            with open(path) as f:
                data = json.load(f)
            return cls(**data)
        else:
            raise ValueError(f"Unsupported config file format: {path.suffix}")

    def with_env(self, environ: Mapping[str, str] | None = None) -> "Settings":
        """Return a copy with values from environment variables applied."""
        environ = os.environ if environ is None else environ
        overrides: dict[str, Any] = {}

        for var, field in ENV_VARS.items():
            value = environ.get(var)
            if value:
                overrides[field] = value

        if not overrides:
            return self
        return self.model_validate({**self.model_dump(), **overrides})


def load_settings(
    path: str | Path | None = None,
    environ: Mapping[str, str] | None = None
) -> Settings:
    """
    Load settings from an optional config file, then the environment.

    Environment variables win over file values so credentials never need to
    live in the config file.

    Args:
        path: Path to a YAML or JSON config file
        environ: Environment mapping (defaults to os.environ)

    Returns:
        Settings instance
    """
    settings = Settings()

    if path is not None:
        path = Path(path)
        if path.exists():
            settings = Settings.from_file(path)

    return settings.with_env(environ)
