"""Domain error types."""

from __future__ import annotations


class RuleViolation(ValueError):
    """Caller broke a game contract (bad seat, wrong phase, bad coordinate, bad placement)."""


class PlacementExhaustedError(RuntimeError):
    """Random fleet generation ran out of retries."""
