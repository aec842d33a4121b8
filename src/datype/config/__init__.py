"""Configuration layer: settings models, config discovery, logging setup."""
