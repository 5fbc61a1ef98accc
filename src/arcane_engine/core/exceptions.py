"""Custom exception hierarchy for the Arcane rules engine.

This module defines the exception hierarchy used across the engine. All
exceptions inherit from ArcaneEngineError, enabling unified error handling
at the boundary with the surrounding application while preserving
domain-specific context.

Example:
    >>> from arcane_engine.core.exceptions import InvalidNotationError
    >>> raise InvalidNotationError("Invalid dice notation", expression="2x6")
"""

from __future__ import annotations

from typing import Any


class ArcaneEngineError(Exception):
    """Base exception for all rules engine errors.

    Attributes:
        message: Human-readable error description.
        details: Optional dictionary containing additional error context.
    """

    def __init__(self, message: str, *, details: dict[str, Any] | None = None) -> None:
        """Initialize the base exception.

        Args:
            message: Human-readable error description.
            details: Optional dictionary containing additional error context.
        """
        self.message = message
        self.details = details or {}
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the exception message with optional details.

        Returns:
            Formatted error message including any provided details.
        """
        if self.details:
            detail_str = ", ".join(f"{k}={v!r}" for k, v in self.details.items())
            return f"{self.message} [{detail_str}]"
        return self.message

    def __repr__(self) -> str:
        """Return a detailed string representation of the exception.

        Returns:
            String representation suitable for debugging.
        """
        return f"{self.__class__.__name__}(message={self.message!r}, details={self.details!r})"


# =============================================================================
# Game Engine Domain Exceptions
# =============================================================================


class GameEngineError(ArcaneEngineError):
    """Base exception for all game engine errors.

    Raised when there are issues with dice resolution, combat state
    management, or rules processing.
    """


class DiceRollError(GameEngineError):
    """Raised when dice rolling operations fail.

    This is always a caller error: the notation handed to the engine
    does not describe a roll the engine can perform.
    """

    def __init__(
        self,
        message: str,
        *,
        expression: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize dice roll error with expression context.

        Args:
            message: Human-readable error description.
            expression: The dice expression that caused the error.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if expression is not None:
            combined_details["expression"] = expression
        super().__init__(message, details=combined_details)


class InvalidNotationError(DiceRollError):
    """Raised when a dice expression does not match the notation grammar."""


class InvalidDiceCountError(DiceRollError):
    """Raised when the number of dice is outside the supported range."""

    def __init__(
        self,
        message: str,
        *,
        count: int,
        expression: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the error with the offending die count.

        Args:
            message: Human-readable error description.
            count: The rejected number of dice.
            expression: The dice expression that caused the error.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        combined_details["count"] = count
        super().__init__(message, expression=expression, details=combined_details)


class InvalidDiceSidesError(DiceRollError):
    """Raised when the die size is outside the supported range."""

    def __init__(
        self,
        message: str,
        *,
        sides: int,
        expression: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the error with the offending die size.

        Args:
            message: Human-readable error description.
            sides: The rejected number of sides.
            expression: The dice expression that caused the error.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        combined_details["sides"] = sides
        super().__init__(message, expression=expression, details=combined_details)


class CombatError(GameEngineError):
    """Raised when combat resolution encounters an error.

    This includes issues with initiative tracking, action resolution,
    or damage calculation.
    """

    def __init__(
        self,
        message: str,
        *,
        combatant_id: str | None = None,
        round_number: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize combat error with combat context.

        Args:
            message: Human-readable error description.
            combatant_id: Identifier of the combatant involved.
            round_number: Current combat round when error occurred.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if combatant_id:
            combined_details["combatant_id"] = combatant_id
        if round_number is not None:
            combined_details["round_number"] = round_number
        super().__init__(message, details=combined_details)


class CombatantNotFoundError(CombatError):
    """Raised when an operation targets an id absent from the encounter.

    The id is expected to come from the same Combat value, so this
    signals a programming error in the caller rather than a game event.
    """


# =============================================================================
# Configuration Exceptions
# =============================================================================


class ConfigurationError(ArcaneEngineError):
    """Raised when engine configuration is invalid.

    This includes missing required settings, invalid values, or
    incompatible configuration combinations.
    """

    def __init__(
        self,
        message: str,
        *,
        config_key: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize configuration error with config key context.

        Args:
            message: Human-readable error description.
            config_key: The configuration key that caused the error.
            details: Optional dictionary containing additional error context.
        """
        combined_details = details or {}
        if config_key:
            combined_details["config_key"] = config_key
        super().__init__(message, details=combined_details)


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
    # Configuration exceptions
    "ConfigurationError",
]
