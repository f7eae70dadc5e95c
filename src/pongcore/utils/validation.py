"""Validation utilities for Pong Core.

This module provides reusable validation functions with consistent error handling.
"""

from typing import Any, Iterable, Optional

from pongcore.exceptions import (
    DuplicatePlayerException,
    InvalidPlayerDataException,
    InvalidScoreException,
)


class ValidationResult:
    """Result of a validation operation.

    Attributes:
        is_valid: Whether the validation passed
        error_message: Human-readable error message if invalid
        sanitized_value: Cleaned/normalized value if valid
    """

    def __init__(
        self,
        is_valid: bool,
        error_message: Optional[str] = None,
        sanitized_value: Any = None,
    ):
        self.is_valid = is_valid
        self.error_message = error_message
        self.sanitized_value = sanitized_value

    def __bool__(self) -> bool:
        """Allow using result in boolean context: if result: ..."""
        return self.is_valid

    def __repr__(self) -> str:
        if self.is_valid:
            return f"ValidationResult(VALID, {self.sanitized_value!r})"
        return f"ValidationResult(INVALID, {self.error_message!r})"


# ========== Score Validation ==========


def validate_score(score: Any) -> ValidationResult:
    """Validate a single game score.

    Scores are whole, non-negative points. Booleans are rejected even though
    they are ints in Python.

    Example:
        >>> validate_score(11).sanitized_value
        11
        >>> bool(validate_score(-1))
        False
    """
    if isinstance(score, bool) or not isinstance(score, int):
        return ValidationResult(
            is_valid=False,
            error_message=f"Score must be a whole number, got {score!r}",
        )

    if score < 0:
        return ValidationResult(
            is_valid=False,
            error_message=f"Score cannot be negative: {score}",
        )

    return ValidationResult(is_valid=True, sanitized_value=score)


def validate_match_scores(score1: Any, score2: Any) -> ValidationResult:
    """Validate both scores of a match; ties are not allowed.

    The sanitized value is the ``(score1, score2)`` tuple.
    """
    for score in (score1, score2):
        result = validate_score(score)
        if not result:
            return result

    if score1 == score2:
        return ValidationResult(
            is_valid=False,
            error_message=f"Scores cannot be tied: {score1}-{score2}",
        )

    return ValidationResult(is_valid=True, sanitized_value=(score1, score2))


def validate_match_scores_strict(score1: Any, score2: Any) -> None:
    """Validate match scores and raise exception if invalid.

    Raises:
        InvalidScoreException: If either score is invalid or they are tied
    """
    result = validate_match_scores(score1, score2)
    if not result.is_valid:
        raise InvalidScoreException(result.error_message)


# ========== Player Name Validation ==========


def validate_player_name(
    name: Optional[str], existing_names: Iterable[str] = ()
) -> ValidationResult:
    """Validate a new player's display name.

    Names are trimmed and must be unique within the roster, ignoring case.

    Args:
        name: Proposed name
        existing_names: Names already on the roster
    """
    if name is None or not name.strip():
        return ValidationResult(
            is_valid=False,
            error_message="Player name is required",
        )

    name = name.strip()
    lowered = name.lower()
    if any(existing.lower() == lowered for existing in existing_names):
        return ValidationResult(
            is_valid=False,
            error_message=f"A player named '{name}' already exists",
        )

    return ValidationResult(is_valid=True, sanitized_value=name)


def validate_player_name_strict(
    name: Optional[str], existing_names: Iterable[str] = ()
) -> str:
    """Validate a player name and return the trimmed value.

    Raises:
        InvalidPlayerDataException: If the name is empty
        DuplicatePlayerException: If the name is already taken
    """
    existing_names = list(existing_names)
    if name is None or not name.strip():
        raise InvalidPlayerDataException("Player name is required")

    result = validate_player_name(name, existing_names)
    if not result.is_valid:
        raise DuplicatePlayerException(result.error_message)
    return result.sanitized_value
