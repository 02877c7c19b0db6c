"""Armada: multi-seat naval combat rules engine."""
