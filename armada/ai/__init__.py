"""Computer opponent targeting."""

from armada.ai.targeting import build_targeting, choose_target

__all__ = ["build_targeting", "choose_target"]
