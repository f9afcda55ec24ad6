from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from postline import __version__


class PostlineSettings(BaseSettings):
    """Configuration for the postline command-line client.

    All values can be overridden via environment variables. Prefix: ``POSTLINE_``.
    """

    timeout_ms: int = Field(default=5000, gt=0, description="Total request timeout in milliseconds.")
    follow_redirects: bool = True
    verify_ssl: bool = True
    default_scheme: str = Field(default="http", description="Scheme prepended to URLs given without one.")
    user_agent: str = f"postline/{__version__}"

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "WARNING"
    log_json_output: bool = False

    model_config = SettingsConfigDict(env_prefix="POSTLINE_", env_file=".env", extra="ignore")

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_log_level(cls, value):
        return value.upper() if isinstance(value, str) else value

    @property
    def timeout_seconds(self) -> float:
        return self.timeout_ms / 1000


@lru_cache(maxsize=1)
def get_settings() -> PostlineSettings:
    return PostlineSettings()
