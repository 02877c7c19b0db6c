"""Configuration, logging and app-data paths."""
