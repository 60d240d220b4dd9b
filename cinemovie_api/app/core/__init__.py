"""Configuration, logging, database, errors and session helpers."""
