"""Engine Configuration - environment-driven settings via pydantic-settings.

Invariants:
    - Every setting has a default: the engine runs with no environment at all
    - get_settings() is cached (lru_cache) - single instance per process
    - Guardrail ceilings are strictly positive

Design Decisions:
    - FORMULA_ prefix so the engine can share a .env with its host application
    - Default guardrails live here; modules with their own ceilings ignore them
"""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from formula_engine.schemas.guardrails import Guardrails


class Settings(BaseSettings):
    """Engine settings from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env", env_prefix="FORMULA_", case_sensitive=False,
        extra="ignore",
    )

    # Default guardrails
    max_n: int = 10
    max_k: int = 6
    max_groups_estimate: int = 50_000

    @field_validator("max_n", "max_k", "max_groups_estimate")
    @classmethod
    def require_positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("guardrail ceilings must be positive")
        return v

    # Display modules sort their final result list lexicographically
    sort_results: bool = True

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"

    def default_guardrails(self) -> Guardrails:
        return Guardrails(
            max_n=self.max_n,
            max_k=self.max_k,
            max_groups_estimate=self.max_groups_estimate,
        )


@lru_cache
def get_settings() -> Settings:
    return Settings()
