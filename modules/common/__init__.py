"""Common utilities shared across all components."""
