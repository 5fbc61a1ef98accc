"""Configuration management for the Arcane rules engine.

This module provides centralized configuration management using
pydantic-settings, supporting environment variables, .env files, and
runtime configuration overrides.

Example:
    >>> from arcane_engine.core.config import get_settings
    >>> settings = get_settings()
    >>> print(settings.game.xp_award_mode)
    'stat_block'

Environment Variables:
    ARCANE_ENGINE_LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    ARCANE_ENGINE_JSON_LOGS: Emit JSON log lines instead of console output
    ARCANE_ENGINE_DICE_SOURCE: Random source ('system' or 'seeded')
    ARCANE_ENGINE_DICE_SEED: Seed for the 'seeded' random source
    ARCANE_ENGINE_GAME_XP_AWARD_MODE: XP award rule ('stat_block' or 'flat')
    ARCANE_ENGINE_GAME_FLAT_XP_PER_ENEMY: XP per defeated enemy in 'flat' mode
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from arcane_engine.core.constants import DEFAULT_ENCOUNTER_DC, FLAT_XP_PER_ENEMY
from arcane_engine.core.exceptions import ConfigurationError


class DiceSettings(BaseSettings):
    """Configuration for the dice random source.

    Attributes:
        source: Which random source rollers are built on by default.
        seed: Seed for the reproducible source.
    """

    model_config = SettingsConfigDict(
        env_prefix="ARCANE_ENGINE_DICE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    source: Literal["system", "seeded"] = Field(
        default="system",
        description="Random source backing the default dice roller",
    )
    seed: int | None = Field(
        default=None,
        description="Seed for the seeded random source",
    )

    @model_validator(mode="after")
    def validate_seed_for_source(self) -> "DiceSettings":
        """Ensure a seed is provided when the seeded source is selected.

        Returns:
            Self if validation passes.

        Raises:
            ConfigurationError: If the seeded source has no seed.
        """
        if self.source == "seeded" and self.seed is None:
            raise ConfigurationError(
                "Seeded dice source selected but no seed is configured",
                config_key="seed",
            )
        return self


class GameSettings(BaseSettings):
    """Configuration for combat rules that vary between tables.

    Attributes:
        xp_award_mode: How XP is computed when combat ends.
        flat_xp_per_enemy: XP per defeated enemy in 'flat' mode.
        encounter_check_dc: d20 threshold for random encounter checks.
    """

    model_config = SettingsConfigDict(
        env_prefix="ARCANE_ENGINE_GAME_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    xp_award_mode: Literal["stat_block", "flat"] = Field(
        default="stat_block",
        description="Sum stat block XP, or award a flat amount per enemy",
    )
    flat_xp_per_enemy: int = Field(
        default=FLAT_XP_PER_ENEMY,
        ge=0,
        description="XP per defeated enemy in flat mode",
    )
    encounter_check_dc: int = Field(
        default=DEFAULT_ENCOUNTER_DC,
        ge=1,
        le=20,
        description="Random encounter check threshold",
    )


class Settings(BaseSettings):
    """Main engine settings aggregating all configuration domains.

    Attributes:
        app_name: Application name.
        app_version: Application version string.
        debug: Enable debug mode.
        log_level: Engine logging level.
        json_logs: Emit JSON logs.
        log_file: Optional JSON lines log file.
        dice: Dice settings.
        game: Game rule settings.
    """

    model_config = SettingsConfigDict(
        env_prefix="ARCANE_ENGINE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        env_nested_delimiter="__",
    )

    app_name: str = Field(
        default="Arcane Engine",
        description="Application name",
    )
    app_version: str = Field(
        default="0.1.0",
        description="Application version",
    )
    debug: bool = Field(
        default=False,
        description="Enable debug mode",
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )
    json_logs: bool = Field(
        default=False,
        description="Emit JSON log lines",
    )
    log_file: str | None = Field(
        default=None,
        description="Path receiving every engine event as JSON",
    )

    dice: DiceSettings = Field(default_factory=DiceSettings)
    game: GameSettings = Field(default_factory=GameSettings)

    @property
    def is_production(self) -> bool:
        """Check if running in production mode.

        Returns:
            True if not in debug mode.
        """
        return not self.debug


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get the engine settings singleton.

    Returns:
        The cached Settings instance.

    Raises:
        ConfigurationError: If configuration is missing or invalid.
    """
    try:
        return Settings()
    except ConfigurationError:
        raise
    except Exception as exc:
        raise ConfigurationError(
            f"Failed to load engine settings: {exc}",
            details={"original_error": str(exc)},
        ) from exc


def clear_settings_cache() -> None:
    """Clear the settings cache, forcing a reload on next access.

    This is primarily useful for testing or when environment variables
    have changed at runtime.
    """
    get_settings.cache_clear()


__all__ = [
    "DiceSettings",
    "GameSettings",
    "Settings",
    "get_settings",
    "clear_settings_cache",
]
