"""Core types, configuration and constants."""
