"""Core module providing configuration, logging, and base exceptions.

Exports:
    Exceptions:
        ArcaneEngineError: Base exception for all engine errors.
        DiceRollError: Malformed dice input.
        CombatantNotFoundError: Unknown combatant id.
        ConfigurationError: Configuration-related errors.

    Configuration:
        Settings: Main engine settings class.
        get_settings: Get the settings singleton.
        clear_settings_cache: Force settings reload.

    Logging:
        configure_logging: Set up engine logging.
        configure_logging_from_settings: Set up logging from Settings.
        get_logger: Get a configured logger instance.
        combat_context: Tag log events with an encounter id.
"""

from __future__ import annotations

from arcane_engine.core.config import (
    DiceSettings,
    GameSettings,
    Settings,
    clear_settings_cache,
    get_settings,
)
from arcane_engine.core.exceptions import (
    ArcaneEngineError,
    CombatantNotFoundError,
    CombatError,
    ConfigurationError,
    DiceRollError,
    GameEngineError,
    InvalidDiceCountError,
    InvalidDiceSidesError,
    InvalidNotationError,
)
from arcane_engine.core.logging import (
    combat_context,
    configure_logging,
    configure_logging_from_settings,
    get_logger,
)


__all__ = [
    # Base exception
    "ArcaneEngineError",
    # Game engine exceptions
    "GameEngineError",
    "DiceRollError",
    "InvalidNotationError",
    "InvalidDiceCountError",
    "InvalidDiceSidesError",
    "CombatError",
    "CombatantNotFoundError",
    # Configuration
    "ConfigurationError",
    "Settings",
    "DiceSettings",
    "GameSettings",
    "get_settings",
    "clear_settings_cache",
    # Logging
    "configure_logging",
    "configure_logging_from_settings",
    "get_logger",
    "combat_context",
]
