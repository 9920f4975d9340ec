"""Configuration layer — settings models, config file lookup, and logging setup."""
