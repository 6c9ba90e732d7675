"""
Centralised settings loader.

Every variable is read with the ``MEALPLAN_`` prefix, e.g.

    MEALPLAN_EXTRA_UNITS='["bowl", "sachet"]'
    MEALPLAN_IMAGE_BASE_URL=https://cdn.example.com/meals
"""

from __future__ import annotations
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings


# ------------------------------------------------------------------ #
#  Master settings model
# ------------------------------------------------------------------ #
class _Settings(BaseSettings):
    # ─── parser ──────────────────────────────────────────────────────
    # unit words recognised on top of the built-in vocabulary
    extra_units: list[str] = Field(default_factory=list)

    # ─── plan assembly ───────────────────────────────────────────────
    image_base_url: str = "/images"
    default_fitness_goal: str = "general"

    # allow other teammates’ env-vars without crashing
    model_config = {
        "extra": "ignore",
        "env_prefix": "MEALPLAN_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
    }


# ------------------------------------------------------------------ #
#  Cached singleton accessor
# ------------------------------------------------------------------ #
@lru_cache
def _cached() -> _Settings:  # pragma: no cover
    return _Settings()  # type: ignore[call-arg]


settings: _Settings = _cached()
