"""Configuration layer - TOML discovery, pydantic settings, logging setup."""
