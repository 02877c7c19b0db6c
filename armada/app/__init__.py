"""Application layer over the game core."""
