"""Configuration, error taxonomy and localization."""
