"""
Service configuration.

Values come from the environment (and a local ``.env`` file when present).
Collaborators receive a ``Settings`` instance at construction time; nothing
reads the environment at import time.
"""

import os
from typing import List, Optional

from dotenv import load_dotenv
from pydantic import BaseModel

from roamy.integrations.exceptions import ConfigurationError


class Settings(BaseModel):
    openai_api_key: Optional[str] = None
    openai_model: str = "gpt-4o-mini"
    openai_temperature: float = 0.7
    openai_max_tokens: int = 8000
    generation_timeout: float = 60.0

    openweather_api_key: Optional[str] = None
    exchangerate_api_key: Optional[str] = None
    facts_timeout: float = 8.0
    facts_cache_ttl: float = 600.0

    mongodb_uri: Optional[str] = None
    mongodb_db: str = "roamy"

    log_level: str = "INFO"

    @classmethod
    def from_env(cls, load_dotenv_file: bool = True) -> "Settings":
        if load_dotenv_file:
            load_dotenv()

        def env(name: str, default=None):
            value = os.getenv(name)
            if value is None or value.strip() == "":
                return default
            return value.strip()

        try:
            return cls(
                openai_api_key=env("OPENAI_API_KEY"),
                openai_model=env("OPENAI_MODEL", "gpt-4o-mini"),
                openai_temperature=env("OPENAI_TEMPERATURE", 0.7),
                openai_max_tokens=env("OPENAI_MAX_TOKENS", 8000),
                generation_timeout=env("GENERATION_TIMEOUT", 60.0),
                openweather_api_key=env("OPENWEATHER_API_KEY"),
                exchangerate_api_key=env("EXCHANGERATE_API_KEY"),
                facts_timeout=env("FACTS_TIMEOUT", 8.0),
                facts_cache_ttl=env("FACTS_CACHE_TTL", 600.0),
                mongodb_uri=env("MONGODB_URI"),
                mongodb_db=env("MONGODB_DB", "roamy"),
                log_level=env("LOG_LEVEL", "INFO").upper(),
            )
        except ValueError as e:
            raise ConfigurationError(f"Invalid configuration value: {e}") from e

    def missing_credentials(self) -> List[str]:
        missing = []
        if not self.openai_api_key:
            missing.append("OPENAI_API_KEY")
        if not self.openweather_api_key:
            missing.append("OPENWEATHER_API_KEY")
        if not self.exchangerate_api_key:
            missing.append("EXCHANGERATE_API_KEY")
        return missing

    def require_credentials(self) -> "Settings":
        """Fail loudly at startup when a generation or facts credential is absent."""
        missing = self.missing_credentials()
        if missing:
            raise ConfigurationError(
                f"Missing required configuration: {', '.join(missing)}. "
                "Add them to the environment or to your .env file."
            )
        return self
