"""Configuration, file discovery and console output helpers."""
