import logging
import sys
from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from vexation.schemas.game_engine import Player

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="VEXATION_",
        extra="ignore",
    )

    # App config
    DEBUG: bool = False

    # Seats
    HUMAN_PLAYERS: list[Player] = []
    FIRST_PLAYER: Player | None = None

    # Simulation
    RNG_SEED: int | None = None
    MAX_SIMULATION_STEPS: int = 100_000

    @field_validator("HUMAN_PLAYERS")
    @classmethod
    def validate_human_players(cls, v: list[Player]) -> list[Player]:
        if len(set(v)) != len(v):
            raise ValueError("HUMAN_PLAYERS cannot contain duplicates")
        return v

    @field_validator("MAX_SIMULATION_STEPS")
    @classmethod
    def validate_max_steps(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("MAX_SIMULATION_STEPS must be positive")
        return v


def configure_logging(debug: bool = False) -> None:
    """Configure logging for the application."""
    log_level = logging.DEBUG if debug else logging.INFO
    log_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    logging.basicConfig(
        level=log_level,
        format=log_format,
        handlers=[logging.StreamHandler(sys.stdout)],
    )


@lru_cache
def get_settings() -> Settings:
    settings = Settings()
    configure_logging(settings.DEBUG)
    logger.info("Settings loaded successfully")
    logger.debug(
        "Human players: %s, first player: %s, seed: %s",
        [p.value for p in settings.HUMAN_PLAYERS],
        settings.FIRST_PLAYER.value if settings.FIRST_PLAYER else None,
        settings.RNG_SEED,
    )
    return settings
