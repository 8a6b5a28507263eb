import os
from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, Field

load_dotenv()

DEFAULT_PREFERENCES_PATH = Path.home() / ".glm_assistant" / "preferences.json"


def _env_flag(name: str) -> bool:
    return os.getenv(name, "false").lower() in {"1", "true", "yes"}


class Settings(BaseModel):
    preferences_path: Path = Field(
        default_factory=lambda: Path(os.getenv("GLM_ASSISTANT_PREFERENCES", str(DEFAULT_PREFERENCES_PATH)))
    )
    request_timeout: float = Field(default_factory=lambda: float(os.getenv("GLM_ASSISTANT_TIMEOUT", "60")))
    log_level: str = Field(default_factory=lambda: os.getenv("GLM_ASSISTANT_LOG_LEVEL", "WARNING"))
    debug: bool = Field(default_factory=lambda: _env_flag("APP_DEBUG"))

    @property
    def effective_log_level(self) -> str:
        return "DEBUG" if self.debug else self.log_level.upper()


@lru_cache
def get_settings() -> Settings:
    s = Settings()
    if s.request_timeout <= 0:
        raise RuntimeError("GLM_ASSISTANT_TIMEOUT must be positive")
    return s
