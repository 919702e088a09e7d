"""Configuration, logging, error types and date conversion helpers."""
