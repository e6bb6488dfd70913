from __future__ import annotations

import logging
import os

from pydantic import BaseModel, ConfigDict

BOUNDARY_MODES = ("hour", "minute")


class Settings(BaseModel):
    model_config = ConfigDict(extra="ignore")

    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", 3000))
    cors_origins: str = os.getenv("CORS_ORIGINS", "*")

    slot_horizon_days: int = int(os.getenv("SLOT_HORIZON_DAYS", 3))
    default_duration_minutes: int = int(os.getenv("DEFAULT_DURATION_MINUTES", 30))
    slot_boundary_mode: str = os.getenv("SLOT_BOUNDARY_MODE", "hour")
    booking_link_base: str = os.getenv("BOOKING_LINK_BASE", "https://cal.com/book")

    @property
    def cors_origins_list(self) -> list[str]:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    def model_post_init(self, __context: dict[str, object]) -> None:
        logger = logging.getLogger(__name__)
        mode = (self.slot_boundary_mode or "hour").lower()
        if mode not in BOUNDARY_MODES:
            logger.warning(
                "Unknown SLOT_BOUNDARY_MODE '%s'; falling back to hour boundaries.", mode
            )
            mode = "hour"
        self.slot_boundary_mode = mode
        if self.slot_horizon_days < 1:
            logger.warning("SLOT_HORIZON_DAYS must be positive; using 3.")
            self.slot_horizon_days = 3


settings = Settings()
