"""Board, fleet, attack resolution and turn rotation."""
