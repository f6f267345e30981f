"""Output layer - Rich console construction."""
