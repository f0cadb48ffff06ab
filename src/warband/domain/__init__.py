"""Domain models and pure battle rules."""
